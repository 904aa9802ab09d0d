"""
Filesystem Store Adapter

Implements TabularStore port with one CSV file per dataset per year
(news_2024.csv, hedgefund_2023.csv) in a local directory.
"""
import json
import logging
import os
import re
import tempfile
from collections import defaultdict
from pathlib import Path
from typing import Any

import pandas as pd

from ..core.domain import Dataset
from ..core.errors import StoreReadError, StoreWriteError
from ..core.ports import TabularStore
from ..core.timestamps import parse_iso

logger = logging.getLogger(__name__)

LIST_SEPARATOR = ", "


class CsvPartitionStore(TabularStore):
    """Year-partitioned CSV storage"""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def _get_path(self, dataset: Dataset, year: int) -> Path:
        """Get path for a dataset's yearly partition"""
        return self.data_dir / f"{dataset.name}_{year}.csv"

    def list_partitions(self, dataset: Dataset) -> list[Path]:
        """Partition files of a dataset, oldest year first"""
        if not self.data_dir.exists():
            return []
        pattern = re.compile(rf"^{re.escape(dataset.name)}_\d{{4}}\.csv$")
        return sorted(p for p in self.data_dir.iterdir() if p.is_file() and pattern.match(p.name))

    def _decode(self, dataset: Dataset, row: dict[str, str]) -> dict[str, Any]:
        """CSV cells to Python values: lists split, JSON parsed, blanks to None"""
        decoded: dict[str, Any] = {}
        for column in dataset.columns:
            value = row.get(column, "")
            if column in dataset.list_columns:
                decoded[column] = [v.strip() for v in value.split(",") if v.strip()]
            elif column in dataset.json_columns:
                try:
                    decoded[column] = json.loads(value) if value else []
                except json.JSONDecodeError:
                    decoded[column] = []
            else:
                decoded[column] = value if value != "" else None
        return decoded

    def _encode(self, dataset: Dataset, row: dict[str, Any]) -> dict[str, Any]:
        """Python values to CSV cells"""
        encoded: dict[str, Any] = {}
        for column in dataset.columns:
            value = row.get(column)
            if column in dataset.list_columns:
                encoded[column] = LIST_SEPARATOR.join(value or [])
            elif column in dataset.json_columns:
                encoded[column] = json.dumps(value or [])
            else:
                encoded[column] = "" if value is None else value
        return encoded

    def _read_partition(self, dataset: Dataset, path: Path) -> list[dict[str, Any]]:
        """Rows of one partition; a malformed partition reads as empty"""
        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring malformed partition {path.name}: {e}")
            return []
        except OSError as e:
            raise StoreReadError(f"Failed to read {path}: {e}") from e

        if dataset.time_field not in df.columns:
            logger.warning(f"Ignoring partition {path.name}: no {dataset.time_field} column")
            return []

        return [self._decode(dataset, row) for row in df.to_dict(orient="records")]

    def load_all(self, dataset: Dataset) -> list[dict[str, Any]]:
        """Read every stored row of a dataset, across all partitions"""
        rows = []
        for path in self.list_partitions(dataset):
            rows.extend(self._read_partition(dataset, path))
        return rows

    def save_all(self, dataset: Dataset, rows: list[dict[str, Any]]) -> list[int]:
        """
        Rewrite each yearly partition present in rows.

        Each partition is written to a temporary file and renamed into place,
        so readers never see a half-written partition.
        """
        by_year: dict[int, list[dict[str, Any]]] = defaultdict(list)
        for row in rows:
            by_year[parse_iso(row[dataset.time_field]).year].append(row)

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreWriteError(f"Failed to create {self.data_dir}: {e}") from e

        for year, year_rows in sorted(by_year.items()):
            year_rows.sort(key=lambda r: parse_iso(r[dataset.time_field]))
            df = pd.DataFrame(
                [self._encode(dataset, r) for r in year_rows],
                columns=list(dataset.columns)
            )
            path = self._get_path(dataset, year)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=self.data_dir)
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                    df.to_csv(f, index=False)
                os.replace(tmp_name, path)
            except OSError as e:
                Path(tmp_name).unlink(missing_ok=True)
                raise StoreWriteError(f"Failed to write {path}: {e}") from e

        return sorted(by_year)
