"""
Unit tests for the year-partitioned CSV store
"""
from unittest.mock import patch

import pytest

from mock_data_provider.adapters import CsvPartitionStore
from mock_data_provider.core.domain import HEDGEFUNDS, NEWS
from mock_data_provider.core.errors import StoreWriteError


def news_row(published_at, **overrides):
    row = {
        "published_at": published_at,
        "title": "Federal Reserve hints at possible rate cuts",
        "summary": "Lorem ipsum.",
        "content": "Dolor sit amet.\n\nConsectetur, adipiscing elit.",
        "url": "https://example.com/lorem",
        "image_url": None,
        "source": "mock-news-api",
        "publisher": "Reuters",
        "authors": ["Alice Morgan"],
        "tickers": ["AAPL", "BRK.B"],
        "category": "economy",
        "sentiment": "positive",
    }
    row.update(overrides)
    return row


def filing_row(quarter, filing_date):
    holding = {
        "ticker": "AAPL",
        "company_name": "Apple Inc.",
        "shares_held": 1000.5,
        "market_value": 190095.0,
        "weight": 100.0,
        "change_percent": None,
    }
    return {
        "fund_name": "Citadel Advisors LLC",
        "fund_manager": "Kenneth C. Griffin",
        "cik": "0001423053",
        "quarter": quarter,
        "filing_date": filing_date,
        "report_date": "2023-03-31T00:00:00.000Z",
        "return_1m": 1.25,
        "return_3m": -3.5,
        "return_6m": None,
        "return_1y": 12.0,
        "source": "mock-hedgefund-api",
        "top_holdings": [holding],
        "new_positions": [holding],
        "decreased_positions": [],
        "sold_out_positions": [],
    }


class TestCsvPartitionStore:
    """Test CsvPartitionStore."""

    def test_get_path(self, tmp_path):
        store = CsvPartitionStore(tmp_path)
        assert store._get_path(NEWS, 2024) == tmp_path / "news_2024.csv"
        assert store._get_path(HEDGEFUNDS, 2023) == tmp_path / "hedgefund_2023.csv"

    def test_missing_dir_loads_empty(self, tmp_path):
        store = CsvPartitionStore(tmp_path / "nope")
        assert store.load_all(NEWS) == []
        assert store.list_partitions(NEWS) == []

    def test_news_round_trip(self, tmp_path):
        """Test lists, blanks and multi-line text survive a write and read."""
        store = CsvPartitionStore(tmp_path)
        row = news_row("2024-01-01T00:00:00.000Z")

        assert store.save_all(NEWS, [row]) == [2024]

        assert store.load_all(NEWS) == [row]

    def test_filing_round_trip(self, tmp_path):
        """Test nested holdings and CIK leading zeros survive storage."""
        store = CsvPartitionStore(tmp_path)
        row = filing_row("2023Q1", "2023-05-15T00:00:00.000Z")

        store.save_all(HEDGEFUNDS, [row])
        loaded = store.load_all(HEDGEFUNDS)[0]

        assert loaded["cik"] == "0001423053"
        assert loaded["top_holdings"] == row["top_holdings"]
        assert loaded["return_6m"] is None
        assert float(loaded["return_1m"]) == 1.25

    def test_partitions_by_year(self, tmp_path):
        """Test rows land in the partition of their timestamp's year."""
        store = CsvPartitionStore(tmp_path)
        rows = [
            filing_row("2023Q3", "2023-11-15T00:00:00.000Z"),
            filing_row("2023Q4", "2024-02-15T00:00:00.000Z"),
        ]

        assert store.save_all(HEDGEFUNDS, rows) == [2023, 2024]

        assert [p.name for p in store.list_partitions(HEDGEFUNDS)] == [
            "hedgefund_2023.csv", "hedgefund_2024.csv"
        ]
        assert [r["quarter"] for r in store.load_all(HEDGEFUNDS)] == ["2023Q3", "2023Q4"]

    def test_datasets_do_not_mix(self, tmp_path):
        store = CsvPartitionStore(tmp_path)
        store.save_all(NEWS, [news_row("2023-11-15T00:00:00.000Z")])
        assert store.load_all(HEDGEFUNDS) == []

    def test_rows_sorted_within_partition(self, tmp_path):
        store = CsvPartitionStore(tmp_path)
        store.save_all(NEWS, [
            news_row("2024-01-01T00:05:00.000Z"),
            news_row("2024-01-01T00:00:00.000Z"),
        ])
        assert [r["published_at"] for r in store.load_all(NEWS)] == [
            "2024-01-01T00:00:00.000Z", "2024-01-01T00:05:00.000Z"
        ]

    def test_rewrite_replaces_partition(self, tmp_path):
        """Test a save rewrites the partition with exactly the given rows."""
        store = CsvPartitionStore(tmp_path)
        store.save_all(NEWS, [news_row("2024-01-01T00:00:00.000Z")])
        store.save_all(NEWS, [
            news_row("2024-01-01T00:00:00.000Z"),
            news_row("2024-01-01T00:01:00.000Z"),
        ])
        assert len(store.load_all(NEWS)) == 2

    def test_malformed_partition_reads_empty(self, tmp_path):
        """Test a partition without the time column is ignored."""
        (tmp_path / "news_2023.csv").write_text("foo,bar\n1,2\n")
        store = CsvPartitionStore(tmp_path)
        store.save_all(NEWS, [news_row("2024-01-01T00:00:00.000Z")])

        rows = store.load_all(NEWS)

        assert [r["published_at"] for r in rows] == ["2024-01-01T00:00:00.000Z"]

    def test_empty_partition_reads_empty(self, tmp_path):
        (tmp_path / "news_2023.csv").write_text("")
        assert CsvPartitionStore(tmp_path).load_all(NEWS) == []

    def test_unrelated_files_ignored(self, tmp_path):
        (tmp_path / "news_backup.csv").write_text("published_at\nx\n")
        (tmp_path / "notes.txt").write_text("hello")
        assert CsvPartitionStore(tmp_path).list_partitions(NEWS) == []

    def test_failed_write_keeps_old_partition(self, tmp_path):
        """Test a failed rename leaves the previous partition and no temp file."""
        store = CsvPartitionStore(tmp_path)
        store.save_all(NEWS, [news_row("2024-01-01T00:00:00.000Z")])

        with patch("mock_data_provider.adapters.filesystem.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StoreWriteError, match="disk full"):
                store.save_all(NEWS, [
                    news_row("2024-01-01T00:00:00.000Z"),
                    news_row("2024-01-01T00:01:00.000Z"),
                ])

        assert len(store.load_all(NEWS)) == 1
        assert sorted(p.name for p in tmp_path.iterdir()) == ["news_2024.csv"]
