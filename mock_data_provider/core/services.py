"""
Application Services - Use cases that orchestrate domain logic

These are the entry points to the core. They coordinate between
domain models and ports, but contain no infrastructure concerns.

Each range query walks the same states: validate the window, load the
store, compute gaps, synthesize the gaps in time order, merge and persist
if anything was generated, then filter to the window.
"""
import logging
import threading
from typing import Optional

from ..config import StoreConfig
from .coverage import Cadence, FilingIndex, article_gaps
from .domain import HEDGEFUNDS, NEWS, Article, FilingRecord, RangeResult
from .merge import RecordRepository
from .ports import ReferenceData, TabularStore
from .quarters import quarters_between
from .synthesis import ArticleSynthesizer, FilingSynthesizer
from .timestamps import parse_range

logger = logging.getLogger(__name__)


class NewsRangeService:
    """Use case: Articles published in [start, end), generating any missing span"""

    def __init__(
        self,
        store: TabularStore,
        reference: ReferenceData,
        config: StoreConfig
    ):
        self.repository = RecordRepository(store, NEWS, Article.from_dict)
        self.synthesizer = ArticleSynthesizer(reference)
        self.cadence = Cadence(config.article_step_unit, config.article_max_step)
        # Serializes read-merge-write of the news partitions
        self._lock = threading.Lock()

    def execute(self, start: Optional[str], end: Optional[str]) -> RangeResult:
        """
        Return stored or newly generated articles for the window.

        Both bounds are floored to the cadence unit; end is exclusive.

        Raises:
            InputValidationError: missing, unparsable or empty window
        """
        start_time, end_time = parse_range(start, end, unit=self.cadence.unit)

        with self._lock:
            stored = self.repository.load()
            gaps = article_gaps(stored, start_time, end_time, self.cadence)

            generated = [
                self.synthesizer.synthesize(instant)
                for gap in gaps
                for instant in self.cadence.instants(gap)
            ]
            if generated:
                logger.info(f"news: generated {len(generated)} articles across {len(gaps)} gaps")

            merged = self.repository.merge_and_persist(stored, generated)

        articles = [a for a in merged if start_time <= a.timestamp < end_time]
        return RangeResult(start=start, end=end, records=articles, generated=len(generated))


class HedgeFundRangeService:
    """Use case: Fund filings dated in [start, end], generating missing fund-quarters"""

    def __init__(self, store: TabularStore, reference: ReferenceData):
        self.repository = RecordRepository(store, HEDGEFUNDS, FilingRecord.from_dict)
        self.reference = reference
        self.synthesizer = FilingSynthesizer(reference)
        # Serializes read-merge-write of the filing partitions
        self._lock = threading.Lock()

    def execute(
        self,
        start: Optional[str],
        end: Optional[str],
        fund: Optional[str] = None
    ) -> RangeResult:
        """
        Return filings whose filing date lies in the window, both ends inclusive.

        Missing (fund, quarter) pairs are generated oldest quarter first, each
        diffed against the fund's latest earlier filing. If fund is given,
        only that fund's filings are returned; generation still covers every fund.

        Raises:
            InputValidationError: missing, unparsable or empty window
        """
        start_time, end_time = parse_range(start, end)

        with self._lock:
            stored = self.repository.load()
            index = FilingIndex(stored)
            quarters = quarters_between(start_time, end_time)

            generated = []
            for fund_def, quarter in index.missing(self.reference.funds, quarters):
                previous = index.previous(fund_def.name, quarter.filing_date)
                record = self.synthesizer.synthesize(fund_def, quarter, previous)
                index.add(record)
                generated.append(record)
            if generated:
                logger.info(f"hedgefunds: generated {len(generated)} filings for {len(quarters)} quarters")

            merged = self.repository.merge_and_persist(stored, generated)

        records = [
            r for r in merged
            if start_time <= r.timestamp <= end_time
            and (fund is None or r.fund_name == fund)
        ]
        return RangeResult(start=start, end=end, records=records, generated=len(generated))
