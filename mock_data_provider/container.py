"""
Dependency Injection Container

Wires together the hexagonal architecture by creating and injecting dependencies.
"""
from pathlib import Path
from typing import Optional

from .adapters import CsvPartitionStore, load_reference_data
from .config import StoreConfig
from .core import HedgeFundRangeService, NewsRangeService, ReferenceData, TabularStore


class Container:
    """Dependency injection container for the application"""

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        store: Optional[TabularStore] = None,
        reference: Optional[ReferenceData] = None,
        reference_dir: Optional[str | Path] = None
    ):
        self.config = config or StoreConfig()

        # Adapters (infrastructure)
        self.store = store or CsvPartitionStore(self.config.data_dir)
        self.reference = reference or load_reference_data(reference_dir)

        # Services (use cases)
        self.news = NewsRangeService(
            store=self.store,
            reference=self.reference,
            config=self.config
        )

        self.hedgefunds = HedgeFundRangeService(
            store=self.store,
            reference=self.reference
        )
