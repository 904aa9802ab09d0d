"""
Core - Domain logic and ports

This package contains:
- domain.py: Pure domain models
- ports.py: Port interfaces (reference catalogs, tabular storage)
- seeding.py, quarters.py, synthesis.py: Deterministic record generation
- coverage.py, merge.py: Gap detection and merge-and-persist
- services.py: Application services (range queries)
"""
from .domain import Article, Company, FilingRecord, Fund, Holding, QuarterDef, RangeResult, Topic
from .errors import InputValidationError, StoreReadError, StoreWriteError
from .ports import ReferenceData, TabularStore
from .services import HedgeFundRangeService, NewsRangeService

__all__ = [
    # Domain models
    "Article",
    "Company",
    "FilingRecord",
    "Fund",
    "Holding",
    "QuarterDef",
    "RangeResult",
    "Topic",
    # Errors
    "InputValidationError",
    "StoreReadError",
    "StoreWriteError",
    # Ports
    "ReferenceData",
    "TabularStore",
    # Services
    "HedgeFundRangeService",
    "NewsRangeService",
]
