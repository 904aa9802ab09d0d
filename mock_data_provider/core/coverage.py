"""
Coverage tracking - what storage already holds, and what is missing

Articles form one contiguous timeline per store, so coverage is just the
first and last stored instant. Filings are sparse, so coverage is a
(fund, quarter) index.
"""
from bisect import bisect_left, insort
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Iterator, Optional, Sequence

from .domain import Article, FilingRecord, Fund, Gap, QuarterDef
from .seeding import derive
from .timestamps import UNITS, floor_to, to_iso


@dataclass(frozen=True)
class Cadence:
    """Spacing of article instants: 1..max_step units, seeded by the cursor"""
    unit: str = "minute"
    max_step: int = 60

    def interval(self, cursor: datetime) -> timedelta:
        """Distance from cursor to the next article instant"""
        return (derive(to_iso(cursor)) % self.max_step + 1) * UNITS[self.unit]

    def instants(self, gap: Gap) -> Iterator[datetime]:
        """Article instants inside a gap, strictly increasing"""
        cursor = floor_to(gap.start, self.unit)
        end = floor_to(gap.end, self.unit)
        while cursor < end:
            yield cursor
            cursor = cursor + self.interval(cursor)


def article_gaps(
    stored: Sequence[Article],
    start: datetime,
    end: datetime,
    cadence: Cadence
) -> list[Gap]:
    """
    Sub-ranges of [start, end) with no stored articles.

    At most two: a prefix before the first stored article and a suffix
    after the instant that would follow the last one.
    """
    if not stored:
        return [Gap(start, end)]

    instants = [a.timestamp for a in stored]
    first = floor_to(min(instants), cadence.unit)
    last = floor_to(max(instants), cadence.unit)
    coverage_end = last + cadence.interval(last)

    if end <= first:
        return [Gap(start, first)]
    if start > coverage_end:
        return [Gap(coverage_end, end)]

    gaps = []
    if start < first:
        gaps.append(Gap(start, first))
    if end > coverage_end:
        gaps.append(Gap(coverage_end, end))
    return gaps


class FilingIndex:
    """Filings keyed by (fund_name, quarter), with per-fund filing-date order"""

    def __init__(self, records: Iterable[FilingRecord] = ()):
        self._by_key: dict[tuple[str, str], FilingRecord] = {}
        self._by_fund: dict[str, list[tuple[datetime, str]]] = defaultdict(list)
        for record in records:
            self.add(record)

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._by_key

    def __len__(self) -> int:
        return len(self._by_key)

    def add(self, record: FilingRecord) -> None:
        if record.key in self._by_key:
            return
        self._by_key[record.key] = record
        insort(self._by_fund[record.fund_name], (record.timestamp, record.quarter))

    def previous(self, fund_name: str, before: datetime) -> Optional[FilingRecord]:
        """The fund's latest filing dated strictly before `before`"""
        timeline = self._by_fund.get(fund_name)
        if not timeline:
            return None
        pos = bisect_left(timeline, (before,))
        if pos == 0:
            return None
        _, quarter = timeline[pos - 1]
        return self._by_key[(fund_name, quarter)]

    def missing(
        self,
        funds: Sequence[Fund],
        quarters: Sequence[QuarterDef]
    ) -> list[tuple[Fund, QuarterDef]]:
        """(fund, quarter) pairs not yet filed, in filing-date then fund order"""
        return [
            (fund, quarter)
            for quarter in quarters
            for fund in funds
            if (fund.name, quarter.quarter) not in self._by_key
        ]
