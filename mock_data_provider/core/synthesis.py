"""
Record synthesis - one article per instant, one filing per fund-quarter

Synthesizers read only the seed and the reference catalogs, so the same
instant (or fund and quarter) always produces the same record.
"""
from dataclasses import replace
from datetime import datetime
from typing import Optional

from faker import Faker

from .domain import (
    HEDGEFUND_SOURCE,
    NEWS_SOURCE,
    SENTIMENTS,
    Article,
    FilingRecord,
    Fund,
    Holding,
    QuarterDef,
)
from .ports import ReferenceData
from .seeding import derive, select
from .timestamps import to_iso

# Independent salts per article attribute
SALT_TOPIC = 11
SALT_TEMPLATE = 111
SALT_ENTITY = 222
SALT_PUBLISHER = 333
SALT_AUTHOR = 444
SALT_TICKER = 555
SALT_CATEGORY = 666
SALT_SENTIMENT = 777

AUM_UNIT = 1_000_000_000
UNIVERSE_STRIDE = 13
PRICE_STRIDE = 17
DECREASE_THRESHOLD = -5.0

# (field, band width in basis points, band half-width in percent); horizon k reads seed byte k
RETURN_BANDS = (
    ("return_1m", 800, 4.0),
    ("return_3m", 1500, 7.5),
    ("return_6m", 2200, 11.0),
    ("return_1y", 3000, 15.0),
)


class ArticleSynthesizer:
    """Builds the article published at a given instant"""

    def __init__(self, reference: ReferenceData):
        self.reference = reference
        self.fake = Faker()

    def synthesize(self, instant: datetime) -> Article:
        published_at = to_iso(instant)
        seed = derive(published_at)
        ref = self.reference

        topic = select(ref.topics, seed, SALT_TOPIC)
        template = select(topic.templates, seed, SALT_TEMPLATE) if topic else None
        entity = select(topic.entities, seed, SALT_ENTITY) if topic else None
        title = template.replace("{ENTITY}", entity or "") if template else ""

        no_author = (seed >> 11) % 4 == 0
        author = None if no_author else select(ref.authors, seed, SALT_AUTHOR)

        ticker_count = (seed >> 15) % 3 + 1
        tickers = [select(ref.tickers, seed, SALT_TICKER + i) for i in range(ticker_count)]

        has_image = (seed >> 21) % 3 != 0

        # Free text is drawn from the instance RNG, reseeded per article
        self.fake.seed_instance(seed)
        summary = " ".join(self.fake.sentences(nb=2))
        content = "\n\n".join(self.fake.paragraphs(nb=(seed >> 7) % 3 + 1))
        image_url = self.fake.image_url() if has_image else None
        url = self.fake.url()

        return Article(
            title=title,
            summary=summary,
            content=content,
            url=url,
            image_url=image_url,
            source=NEWS_SOURCE,
            publisher=select(ref.publishers, seed, SALT_PUBLISHER) or "",
            authors=[author] if author else [],
            tickers=[t for t in tickers if t],
            category=select(ref.categories, seed, SALT_CATEGORY) or "",
            sentiment=select(SENTIMENTS, seed, SALT_SENTIMENT),
            published_at=published_at,
        )


class FilingSynthesizer:
    """Builds a fund's filing for one quarter, diffed against its previous filing"""

    def __init__(self, reference: ReferenceData):
        self.reference = reference

    def _holdings(self, seed: int) -> list[Holding]:
        """Seeded portfolio, heaviest position first; weights sum to 100"""
        universe = self.reference.companies
        aum = (seed % 46 + 5) * AUM_UNIT
        target = seed % 16 + 10

        picked = []
        used = set()
        for i in range(len(universe)):
            if len(picked) >= target:
                break
            company = universe[(seed + i * UNIVERSE_STRIDE) % len(universe)]
            if company.ticker in used:
                continue
            used.add(company.ticker)
            picked.append((company, ((seed >> (i % 16)) & 0xF) + 1))

        total_units = sum(units for _, units in picked)
        holdings = []
        for i, (company, units) in enumerate(picked):
            weight = units / total_units * 100
            market_value = aum * weight / 100
            price = company.base_price or 50 + (seed + i * PRICE_STRIDE) % 250
            holdings.append(Holding(
                ticker=company.ticker,
                company_name=company.name,
                shares_held=round(market_value / price, 2),
                market_value=round(market_value, 2),
                weight=round(weight, 3),
            ))

        # Rounding residue goes to the largest position so the total stays at 100
        if holdings:
            largest = max(holdings, key=lambda h: h.weight)
            residue = 100 - sum(h.weight for h in holdings)
            largest.weight = round(largest.weight + residue, 3)

        holdings.sort(key=lambda h: h.weight, reverse=True)
        return holdings

    def synthesize(
        self,
        fund: Fund,
        quarter: QuarterDef,
        previous: Optional[FilingRecord] = None
    ) -> FilingRecord:
        seed = derive(f"{fund.name}|{quarter.quarter}")
        holdings = self._holdings(seed)

        new_positions: list[Holding] = []
        decreased_positions: list[Holding] = []
        sold_out_positions: list[Holding] = []

        if previous is not None:
            before_by_ticker = {h.ticker: h for h in previous.top_holdings}
            for holding in holdings:
                before = before_by_ticker.pop(holding.ticker, None)
                if before is None:
                    new_positions.append(holding)
                    continue
                if before.weight > 0:
                    change = (holding.weight - before.weight) / before.weight * 100
                    holding.change_percent = round(change, 2)
                    if change < DECREASE_THRESHOLD:
                        decreased_positions.append(holding)
            sold_out_positions = [
                replace(h, change_percent=-100.0) for h in before_by_ticker.values()
            ]
        else:
            new_positions = list(holdings)

        returns = {
            name: round(((seed >> (8 * k)) & 0xFF) * span / 25600 - half, 2)
            for k, (name, span, half) in enumerate(RETURN_BANDS)
        }

        return FilingRecord(
            fund_name=fund.name,
            fund_manager=fund.manager,
            cik=fund.cik,
            quarter=quarter.quarter,
            filing_date=to_iso(quarter.filing_date),
            report_date=to_iso(quarter.report_date),
            top_holdings=holdings,
            new_positions=new_positions,
            decreased_positions=decreased_positions,
            sold_out_positions=sold_out_positions,
            source=HEDGEFUND_SOURCE,
            **returns,
        )
