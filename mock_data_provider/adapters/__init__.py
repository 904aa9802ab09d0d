"""
Adapters - External implementations of ports

This package contains implementations of the core ports:
- filesystem.py: Year-partitioned CSV store
- reference.py: YAML reference catalogs
"""
from .filesystem import CsvPartitionStore
from .reference import StaticReferenceData, load_reference_data

__all__ = [
    "CsvPartitionStore",
    "StaticReferenceData",
    "load_reference_data",
]
