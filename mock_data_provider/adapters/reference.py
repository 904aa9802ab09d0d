"""
Reference Data Adapter

Implements ReferenceData port from ordered YAML catalogs. The default
catalogs ship with the package in mock_data_provider/data/.
"""
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml

from ..core.domain import Company, Fund, Topic
from ..core.ports import ReferenceData

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_DIR = Path(__file__).parent.parent / "data"


class StaticReferenceData(ReferenceData):
    """In-memory catalogs, kept in the order given"""

    def __init__(
        self,
        funds: Sequence[Fund] = (),
        companies: Sequence[Company] = (),
        topics: Sequence[Topic] = (),
        authors: Sequence[str] = (),
        tickers: Sequence[str] = (),
        categories: Sequence[str] = (),
        publishers: Sequence[str] = ()
    ):
        self._funds = list(funds)
        self._companies = list(companies)
        self._topics = list(topics)
        self._authors = list(authors)
        self._tickers = list(tickers)
        self._categories = list(categories)
        self._publishers = list(publishers)

    @property
    def funds(self) -> list[Fund]:
        return self._funds

    @property
    def companies(self) -> list[Company]:
        return self._companies

    @property
    def topics(self) -> list[Topic]:
        return self._topics

    @property
    def authors(self) -> list[str]:
        return self._authors

    @property
    def tickers(self) -> list[str]:
        return self._tickers

    @property
    def categories(self) -> list[str]:
        return self._categories

    @property
    def publishers(self) -> list[str]:
        return self._publishers


def _load_catalog(directory: Path, name: str) -> list[Any]:
    """Entries under the top-level key `name` of <directory>/<name>.yaml"""
    path = directory / f"{name}.yaml"
    if not path.exists():
        logger.warning(f"Reference catalog {path} not found, using empty {name}")
        return []

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return data.get(name, []) or []


def load_reference_data(directory: Optional[str | Path] = None) -> StaticReferenceData:
    """Load all catalogs from a directory of YAML files (default: packaged data)"""
    directory = Path(directory) if directory else DEFAULT_REFERENCE_DIR

    funds = [
        Fund(name=fd["name"], manager=fd.get("manager", ""), cik=fd.get("cik"))
        for fd in _load_catalog(directory, "funds")
    ]
    companies = [
        Company(ticker=cd["ticker"], name=cd.get("name", ""), base_price=cd.get("base_price"))
        for cd in _load_catalog(directory, "companies")
    ]
    topics = [
        Topic(
            name=td["name"],
            entities=tuple(td.get("entities", [])),
            templates=tuple(s["template"] for s in td.get("subtopics", [])),
        )
        for td in _load_catalog(directory, "topics")
    ]

    return StaticReferenceData(
        funds=funds,
        companies=companies,
        topics=topics,
        authors=_load_catalog(directory, "authors"),
        tickers=_load_catalog(directory, "tickers"),
        categories=_load_catalog(directory, "categories"),
        publishers=_load_catalog(directory, "publishers"),
    )
