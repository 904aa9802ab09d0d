"""
Ports - Interfaces for external dependencies

These define HOW the core interacts with the outside world,
but NOT the implementation details.
"""
from abc import ABC, abstractmethod
from typing import Any

from .domain import Company, Dataset, Fund, Topic


class ReferenceData(ABC):
    """Port for read-only reference catalogs.

    Every list must keep a stable order across process restarts:
    seeded selection indexes into these lists.
    """

    @property
    @abstractmethod
    def funds(self) -> list[Fund]:
        """Funds that file quarterly holdings"""
        pass

    @property
    @abstractmethod
    def companies(self) -> list[Company]:
        """Company universe holdings are drawn from"""
        pass

    @property
    @abstractmethod
    def topics(self) -> list[Topic]:
        """News topics with entities and headline templates"""
        pass

    @property
    @abstractmethod
    def authors(self) -> list[str]:
        """Article author pool"""
        pass

    @property
    @abstractmethod
    def tickers(self) -> list[str]:
        """Ticker pool articles are tagged with"""
        pass

    @property
    @abstractmethod
    def categories(self) -> list[str]:
        """Article categories"""
        pass

    @property
    @abstractmethod
    def publishers(self) -> list[str]:
        """Article publishers"""
        pass


class TabularStore(ABC):
    """Port for partitioned tabular storage.

    Rows are plain dicts keyed by the dataset's columns. List and nested
    columns come back as Python lists; empty cells come back as None.
    """

    @abstractmethod
    def load_all(self, dataset: Dataset) -> list[dict[str, Any]]:
        """Read every stored row of a dataset, across all partitions"""
        pass

    @abstractmethod
    def save_all(self, dataset: Dataset, rows: list[dict[str, Any]]) -> list[int]:
        """Rewrite each yearly partition present in rows, return the years written"""
        pass
