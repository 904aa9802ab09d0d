"""
BBG Lite formatters for handler results

Format handler results as Bloomberg Terminal-inspired text output.
Used by both CLI and MCP adapters for consistent presentation.
"""

from typing import Any

RULE = "─" * 100


def _window(result: dict[str, Any]) -> str:
    return f"{result['start']} → {result['end']}"


def format_news(result: dict[str, Any], limit: int = 50) -> str:
    """Format get_news result as BBG Lite text.

    Example output:
        NEWS | 2024-01-01T00:00:00Z → 2024-01-01T06:00:00Z | 11 articles (11 generated)
        ────────────────────────────────────────────────────────────────
        PUBLISHED                 SENT  PUBLISHER   TICKERS          TITLE
        2024-01-01T00:00:00.000Z  +     Reuters     AAPL, MSFT       Apple unveils breakthrough AI initiative
        ...
    """
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    articles = result["articles"]
    lines = [
        f"NEWS | {_window(result)} | {result['count']} articles ({result.get('generated', 0)} generated)",
        RULE,
    ]

    if not articles:
        lines.append("NO ARTICLES IN WINDOW")
        return "\n".join(lines)

    sentiment_marks = {"positive": "+", "negative": "-", "neutral": "="}
    lines.append(f"{'PUBLISHED':<24}  SENT  {'PUBLISHER':<10}  {'TICKERS':<15}  TITLE")
    for article in articles[:limit]:
        mark = sentiment_marks.get(article["sentiment"], "?")
        tickers = ", ".join(article["tickers"])[:15]
        lines.append(
            f"{article['published_at']:<24}  {mark:<4}  {article['publisher'][:10]:<10}  "
            f"{tickers:<15}  {article['title']}"
        )

    if len(articles) > limit:
        lines.append("")
        lines.append(f"... {len(articles) - limit} more (narrow the window to see them)")

    return "\n".join(lines)


def _format_money(value: float) -> str:
    if abs(value) >= 1e9:
        return f"${value / 1e9:.2f}B"
    if abs(value) >= 1e6:
        return f"${value / 1e6:.1f}M"
    return f"${value:,.0f}"


def _format_return(value: Any) -> str:
    return "N/A" if value is None else f"{value:+.2f}%"


def format_hedgefund_filings(result: dict[str, Any], top_n: int = 5) -> str:
    """Format get_hedgefund_filings result as BBG Lite text.

    Example output:
        HEDGE FUND FILINGS | 2023-01-01 → 2023-12-31 | 60 filings (0 generated)
        ────────────────────────────────────────────────────────────────

        Citadel Advisors LLC (Kenneth C. Griffin) | 2023Q1 | FILED 2023-05-15
          RETURNS  1M +1.20%  3M -3.05%  6M +7.44%  1Y -2.10%
          TOP      NVDA 9.412% $2.81B | AAPL 8.235% $2.46B | ...
          NEW 4  DECREASED 3  SOLD OUT 5
    """
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    records = result["records"]
    lines = [
        f"HEDGE FUND FILINGS | {_window(result)} | {result['count']} filings ({result.get('generated', 0)} generated)",
        RULE,
    ]

    if not records:
        lines.append("NO FILINGS IN WINDOW")
        return "\n".join(lines)

    for record in records:
        lines.append("")
        lines.append(
            f"{record['fund_name']} ({record['fund_manager']}) | {record['quarter']} | "
            f"FILED {record['filing_date'][:10]}"
        )
        lines.append(
            f"  RETURNS  1M {_format_return(record['return_1m'])}  3M {_format_return(record['return_3m'])}  "
            f"6M {_format_return(record['return_6m'])}  1Y {_format_return(record['return_1y'])}"
        )
        top = " | ".join(
            f"{h['ticker']} {h['weight']:.3f}% {_format_money(h['market_value'])}"
            for h in record["top_holdings"][:top_n]
        )
        lines.append(f"  TOP      {top or 'N/A'}")
        lines.append(
            f"  NEW {len(record['new_positions'])}  DECREASED {len(record['decreased_positions'])}  "
            f"SOLD OUT {len(record['sold_out_positions'])}"
        )

    return "\n".join(lines)
