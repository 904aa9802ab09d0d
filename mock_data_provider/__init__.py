"""
mock-data-provider

Reproducible synthetic news articles and hedge-fund filings, generated on
demand for any time range and persisted so repeated queries agree.
"""

__version__ = "0.1.0"
