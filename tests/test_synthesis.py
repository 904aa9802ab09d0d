"""
Unit tests for article and filing synthesis
"""
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from mock_data_provider.adapters import StaticReferenceData
from mock_data_provider.core.domain import SENTIMENTS, Company, Fund
from mock_data_provider.core.quarters import quarters_for_year
from mock_data_provider.core.seeding import derive
from mock_data_provider.core.synthesis import ArticleSynthesizer, FilingSynthesizer

INSTANT = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def fund(reference):
    return reference.funds[0]


@pytest.fixture
def quarters():
    return quarters_for_year(2023)


class TestArticleSynthesizer:
    """Test per-instant article synthesis."""

    def test_deterministic(self, reference):
        """Test same instant gives identical article across synthesizers."""
        first = ArticleSynthesizer(reference).synthesize(INSTANT)
        second = ArticleSynthesizer(reference).synthesize(INSTANT)
        assert first == second

    def test_fields(self, reference):
        """Test attributes come from the reference catalogs."""
        article = ArticleSynthesizer(reference).synthesize(INSTANT)

        assert article.published_at == "2024-01-01T00:00:00.000Z"
        assert article.source == "mock-news-api"
        assert article.publisher in reference.publishers
        assert article.category in reference.categories
        assert article.sentiment in SENTIMENTS
        assert article.title and "{ENTITY}" not in article.title
        assert article.url.startswith(("http://", "https://"))
        assert article.summary and article.content

    def test_seed_bit_rules(self, reference):
        """Test author, ticker and image presence follow the seed."""
        synthesizer = ArticleSynthesizer(reference)
        for minute in range(30):
            article = synthesizer.synthesize(INSTANT.replace(minute=minute))
            seed = derive(article.published_at)

            assert len(article.tickers) == (seed >> 15) % 3 + 1
            assert all(t in reference.tickers for t in article.tickers)
            assert (len(article.authors) == 0) == ((seed >> 11) % 4 == 0)
            assert (article.image_url is None) == ((seed >> 21) % 3 == 0)
            assert len(article.content.split("\n\n")) == (seed >> 7) % 3 + 1

    def test_free_text_reproducible_across_instances(self, reference):
        """Test Faker output depends only on the instant, not on earlier calls."""
        warmed = ArticleSynthesizer(reference)
        for minute in range(1, 5):
            warmed.synthesize(INSTANT.replace(minute=minute))

        article = warmed.synthesize(INSTANT)
        fresh = ArticleSynthesizer(reference).synthesize(INSTANT)

        assert (article.summary, article.content, article.url, article.image_url) == \
            (fresh.summary, fresh.content, fresh.url, fresh.image_url)

    def test_different_instants_differ(self, reference):
        synthesizer = ArticleSynthesizer(reference)
        first = synthesizer.synthesize(INSTANT)
        second = synthesizer.synthesize(INSTANT.replace(minute=1))
        assert first.published_at != second.published_at
        assert first.content != second.content

    def test_empty_reference_data(self):
        """Test empty catalogs degrade to empty fields, not errors."""
        article = ArticleSynthesizer(StaticReferenceData()).synthesize(INSTANT)

        assert article.title == ""
        assert article.publisher == ""
        assert article.category == ""
        assert article.authors == []
        assert article.tickers == []
        assert article.sentiment in SENTIMENTS


class TestFilingSynthesizer:
    """Test per-fund-quarter filing synthesis."""

    def test_deterministic(self, reference, fund, quarters):
        first = FilingSynthesizer(reference).synthesize(fund, quarters[0])
        second = FilingSynthesizer(reference).synthesize(fund, quarters[0])
        assert first == second

    def test_identity_fields(self, reference, fund, quarters):
        """Test fund, quarter and dates are carried over."""
        record = FilingSynthesizer(reference).synthesize(fund, quarters[3])

        assert record.fund_name == fund.name
        assert record.fund_manager == fund.manager
        assert record.cik == fund.cik
        assert record.quarter == "2023Q4"
        assert record.report_date == "2023-12-31T00:00:00.000Z"
        assert record.filing_date == "2024-02-15T00:00:00.000Z"
        assert record.source == "mock-hedgefund-api"

    def test_holdings_shape(self, reference, quarters):
        """Test weight total, count, uniqueness and ordering for every fund."""
        synthesizer = FilingSynthesizer(reference)
        for fund_def in reference.funds:
            for quarter in quarters:
                record = synthesizer.synthesize(fund_def, quarter)
                seed = derive(f"{fund_def.name}|{quarter.quarter}")
                holdings = record.top_holdings
                weights = [h.weight for h in holdings]

                assert len(holdings) == seed % 16 + 10
                assert abs(sum(weights) - 100) <= 0.01
                assert weights == sorted(weights, reverse=True)
                assert len({h.ticker for h in holdings}) == len(holdings)
                assert all(h.market_value > 0 and h.shares_held > 0 for h in holdings)

    def test_returns_in_bands(self, reference, fund, quarters):
        record = FilingSynthesizer(reference).synthesize(fund, quarters[1])

        assert -4 <= record.return_1m < 4
        assert -7.5 <= record.return_3m < 7.5
        assert -11 <= record.return_6m < 11
        assert -15 <= record.return_1y < 15

    def test_returns_read_separate_seed_bytes(self, reference, fund, quarters):
        """Test each horizon is a function of its own byte of the seed."""
        record = FilingSynthesizer(reference).synthesize(fund, quarters[1])
        seed = derive(f"{fund.name}|{quarters[1].quarter}")
        bands = [
            ("return_1m", 800, 4.0),
            ("return_3m", 1500, 7.5),
            ("return_6m", 2200, 11.0),
            ("return_1y", 3000, 15.0),
        ]

        for k, (name, span, half) in enumerate(bands):
            byte = (seed >> (8 * k)) & 0xFF
            assert getattr(record, name) == round(byte * span / 25600 - half, 2)

    def test_first_filing_all_new(self, reference, fund, quarters):
        """Test a filing without a predecessor lists every holding as new."""
        record = FilingSynthesizer(reference).synthesize(fund, quarters[0])

        assert record.new_positions == record.top_holdings
        assert record.decreased_positions == []
        assert record.sold_out_positions == []

    def test_diff_against_previous(self, reference, fund, quarters):
        """Test new, decreased and sold-out classification is complete."""
        synthesizer = FilingSynthesizer(reference)
        previous = synthesizer.synthesize(fund, quarters[0])
        record = synthesizer.synthesize(fund, quarters[1], previous)

        before = {h.ticker for h in previous.top_holdings}
        after = {h.ticker for h in record.top_holdings}

        assert {h.ticker for h in record.new_positions} == after - before
        assert {h.ticker for h in record.sold_out_positions} == before - after
        assert all(h.change_percent == -100.0 for h in record.sold_out_positions)
        for holding in record.decreased_positions:
            assert holding.ticker in before
            assert holding.change_percent <= -5.0
        for holding in record.top_holdings:
            if holding.ticker in before:
                assert holding.change_percent is not None

    def test_diff_does_not_mutate_previous(self, reference, fund, quarters):
        synthesizer = FilingSynthesizer(reference)
        previous = synthesizer.synthesize(fund, quarters[0])
        snapshot = [replace(h) for h in previous.top_holdings]

        synthesizer.synthesize(fund, quarters[1], previous)

        assert previous.top_holdings == snapshot

    def test_seeded_price_when_no_base_price(self, quarters):
        """Test companies without base_price still get positive share counts."""
        reference = StaticReferenceData(
            companies=[Company(ticker=f"T{i}", name=f"Company {i}") for i in range(30)]
        )
        record = FilingSynthesizer(reference).synthesize(Fund("Test Fund", "Tester"), quarters[0])

        assert record.top_holdings
        for holding in record.top_holdings:
            price = holding.market_value / holding.shares_held
            assert 50 <= price < 301

    def test_empty_universe(self, quarters):
        """Test an empty company universe yields an empty portfolio."""
        record = FilingSynthesizer(StaticReferenceData()).synthesize(Fund("Test Fund", "Tester"), quarters[0])

        assert record.top_holdings == []
        assert record.new_positions == []
