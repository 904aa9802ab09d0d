"""
Domain Models - Pure business entities

No external dependencies. These represent the core business concepts:
reference entities (funds, companies, topics), the two synthetic record
types (articles, fund filings) and the dataset descriptors storage uses.
"""
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Optional

from .timestamps import parse_iso

NEWS_SOURCE = "mock-news-api"
HEDGEFUND_SOURCE = "mock-hedgefund-api"
SENTIMENTS = ("positive", "neutral", "negative")


@dataclass(frozen=True)
class Fund:
    """A fund that files quarterly holdings"""
    name: str
    manager: str
    cik: Optional[str] = None


@dataclass(frozen=True)
class Company:
    """A company that can appear in a fund's holdings"""
    ticker: str
    name: str
    base_price: Optional[float] = None


@dataclass(frozen=True)
class Topic:
    """A news topic: entities plus headline templates containing {ENTITY}"""
    name: str
    entities: tuple[str, ...] = ()
    templates: tuple[str, ...] = ()


@dataclass(frozen=True)
class QuarterDef:
    """A fiscal quarter: period end and the date its filing lands"""
    quarter: str  # e.g. "2023Q4"
    report_date: datetime
    filing_date: datetime


@dataclass
class Holding:
    """One position inside a filing"""
    ticker: str
    company_name: str
    shares_held: float
    market_value: float
    weight: float  # percent of the portfolio, 0-100
    change_percent: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Holding":
        change = data.get("change_percent")
        return cls(
            ticker=data.get("ticker") or "",
            company_name=data.get("company_name") or "",
            shares_held=float(data.get("shares_held") or 0),
            market_value=float(data.get("market_value") or 0),
            weight=float(data.get("weight") or 0),
            change_percent=float(change) if change not in (None, "") else None,
        )


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _holdings(value: Any) -> list[Holding]:
    if not isinstance(value, list):
        return []
    return [Holding.from_dict(h) for h in value if isinstance(h, dict)]


@dataclass
class FilingRecord:
    """A fund's quarterly filing. Natural key: (fund_name, quarter)"""
    fund_name: str
    fund_manager: str
    cik: Optional[str]
    quarter: str
    filing_date: str  # ISO timestamp
    report_date: str  # ISO timestamp
    return_1m: Optional[float] = None
    return_3m: Optional[float] = None
    return_6m: Optional[float] = None
    return_1y: Optional[float] = None
    top_holdings: list[Holding] = field(default_factory=list)
    new_positions: list[Holding] = field(default_factory=list)
    decreased_positions: list[Holding] = field(default_factory=list)
    sold_out_positions: list[Holding] = field(default_factory=list)
    source: str = HEDGEFUND_SOURCE

    @property
    def key(self) -> tuple[str, str]:
        return (self.fund_name, self.quarter)

    @property
    def timestamp(self) -> datetime:
        return parse_iso(self.filing_date)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FilingRecord":
        return cls(
            fund_name=data.get("fund_name") or "",
            fund_manager=data.get("fund_manager") or "",
            cik=data.get("cik") or None,
            quarter=data.get("quarter") or "",
            filing_date=data["filing_date"],
            report_date=data.get("report_date") or "",
            return_1m=_to_float(data.get("return_1m")),
            return_3m=_to_float(data.get("return_3m")),
            return_6m=_to_float(data.get("return_6m")),
            return_1y=_to_float(data.get("return_1y")),
            top_holdings=_holdings(data.get("top_holdings")),
            new_positions=_holdings(data.get("new_positions")),
            decreased_positions=_holdings(data.get("decreased_positions")),
            sold_out_positions=_holdings(data.get("sold_out_positions")),
            source=data.get("source") or HEDGEFUND_SOURCE,
        )


@dataclass
class Article:
    """A synthetic news article. Natural key: published_at"""
    title: str
    summary: str
    content: str
    url: str
    image_url: Optional[str]
    source: str
    publisher: str
    authors: list[str]
    tickers: list[str]
    category: str
    sentiment: str
    published_at: str  # ISO timestamp

    @property
    def key(self) -> str:
        return self.published_at

    @property
    def timestamp(self) -> datetime:
        return parse_iso(self.published_at)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Article":
        return cls(
            title=data.get("title") or "",
            summary=data.get("summary") or "",
            content=data.get("content") or "",
            url=data.get("url") or "",
            image_url=data.get("image_url") or None,
            source=data.get("source") or NEWS_SOURCE,
            publisher=data.get("publisher") or "",
            authors=list(data.get("authors") or []),
            tickers=list(data.get("tickers") or []),
            category=data.get("category") or "",
            sentiment=data.get("sentiment") or "neutral",
            published_at=data["published_at"],
        )


@dataclass(frozen=True)
class Dataset:
    """How one record type is laid out in tabular storage"""
    name: str
    time_field: str
    columns: tuple[str, ...]
    list_columns: tuple[str, ...] = ()  # lists of plain strings
    json_columns: tuple[str, ...] = ()  # nested structures


NEWS = Dataset(
    name="news",
    time_field="published_at",
    columns=(
        "published_at", "title", "summary", "content", "url", "image_url",
        "source", "publisher", "authors", "tickers", "category", "sentiment",
    ),
    list_columns=("authors", "tickers"),
)

HEDGEFUNDS = Dataset(
    name="hedgefund",
    time_field="filing_date",
    columns=(
        "fund_name", "fund_manager", "cik", "quarter", "filing_date", "report_date",
        "return_1m", "return_3m", "return_6m", "return_1y", "source",
        "top_holdings", "new_positions", "decreased_positions", "sold_out_positions",
    ),
    json_columns=("top_holdings", "new_positions", "decreased_positions", "sold_out_positions"),
)


@dataclass(frozen=True)
class Gap:
    """A half-open [start, end) span with no stored records"""
    start: datetime
    end: datetime


@dataclass
class RangeResult:
    """Records answering one range query"""
    start: str
    end: str
    records: list
    generated: int = 0

    @property
    def count(self) -> int:
        return len(self.records)

    def to_dict(self, records_key: str = "records") -> dict[str, Any]:
        """Response body: {start, end, count, <records_key>: [...]}"""
        return {
            "start": self.start,
            "end": self.end,
            "count": self.count,
            records_key: [r.to_dict() for r in self.records],
        }
