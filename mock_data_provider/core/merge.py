"""
Merge-and-persist - fold new records into the stored set and write back
"""
import logging
from typing import Callable, Generic, Hashable, Sequence, TypeVar

from .domain import Article, Dataset, FilingRecord
from .ports import TabularStore
from .timestamps import parse_iso

logger = logging.getLogger(__name__)

R = TypeVar("R", Article, FilingRecord)


def merge(existing: Sequence[R], generated: Sequence[R]) -> list[R]:
    """Union by natural key (stored records win), oldest first"""
    by_key: dict[Hashable, R] = {}
    for record in [*existing, *generated]:
        by_key.setdefault(record.key, record)
    return sorted(by_key.values(), key=lambda r: r.timestamp)


class RecordRepository(Generic[R]):
    """Typed records on top of a TabularStore dataset"""

    def __init__(
        self,
        store: TabularStore,
        dataset: Dataset,
        from_dict: Callable[[dict], R]
    ):
        self.store = store
        self.dataset = dataset
        self.from_dict = from_dict

    def load(self) -> list[R]:
        """All stored records, oldest first; malformed rows are skipped"""
        rows = self.store.load_all(self.dataset)
        records = []
        for row in rows:
            if not row.get(self.dataset.time_field):
                logger.warning(f"{self.dataset.name}: skipping row without {self.dataset.time_field}")
                continue
            try:
                parse_iso(row[self.dataset.time_field])
                record = self.from_dict(row)
            except (ValueError, TypeError, KeyError, OverflowError) as e:
                logger.warning(f"{self.dataset.name}: skipping malformed row: {e}")
                continue
            records.append(record)
        records.sort(key=lambda r: r.timestamp)
        return records

    def merge_and_persist(self, existing: Sequence[R], generated: Sequence[R]) -> list[R]:
        """
        Merge generated records into existing ones and persist.

        Only the yearly partitions that received new records are rewritten,
        each with its complete merged contents. Nothing is written when
        nothing was generated.
        """
        merged = merge(existing, generated)
        if not generated:
            return merged

        years = {r.timestamp.year for r in generated}
        rows = [r.to_dict() for r in merged if r.timestamp.year in years]
        written = self.store.save_all(self.dataset, rows)
        logger.info(f"{self.dataset.name}: wrote {len(rows)} rows to partitions {sorted(written)}")
        return merged
