"""
Command-line front end for InvestAI.

Usage examples::

    investai analyze PETR4
    investai analyze "Apple" --json
    investai market BR
    investai --search-provider tavily --debug market US

Exit codes: 0 on success, 1 when the company is not found, 2 on a
connection/processing error.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from investai.config import ResearchSettings, build_researcher
from investai.models import NotFound, SectorRecommendation, StockAnalysis
from investai.prompts import MARKETS
from investai.researcher import StockResearcher
from investai.search import SearchProvider

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Could not reach the AI service. Please try again later."
EMPTY_MARKET_MESSAGE = "No recommendations available right now."

_TREND_MARKS = {"up": "▲", "down": "▼", "neutral": "■"}


def not_found_message(query: str) -> str:
    return f'Company "{query}" was not found or has no public market data available.'


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="investai",
        description="AI-assisted stock research: single-company analysis and sector picks.",
    )
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Chat model identifier. (default: $INVESTAI_MODEL or gpt-4o-mini)",
    )
    parser.add_argument(
        "--search-provider",
        choices=[p.value for p in SearchProvider],
        default=None,
        help="How live web search is supplied. (default: $INVESTAI_SEARCH_PROVIDER or openai)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Log pipeline details to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser("analyze", help="Analyse one company or ticker.")
    analyze_parser.add_argument("query", help="Ticker or company name, e.g. PETR4.")
    analyze_parser.add_argument("--json", action="store_true", help="Print raw JSON.")

    market_parser = subparsers.add_parser("market", help="List sector picks for a region.")
    market_parser.add_argument("region", choices=sorted(MARKETS), help="Market region.")
    market_parser.add_argument("--json", action="store_true", help="Print raw JSON.")

    return parser


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_analysis(result: StockAnalysis) -> str:
    lines = [
        f"{result.symbol} - {result.company_name} ({result.sector})",
        f"Price: {result.current_price} {result.currency}",
        f"Valuation: {result.valuation.value}  |  Financial health: {result.financial_health_score}/100",
        "",
        result.description,
        "",
        "Key stats:",
        f"  Market cap:     {result.key_stats.market_cap}",
        f"  P/E:            {result.key_stats.pe_ratio}",
        f"  Dividend yield: {result.key_stats.dividend_yield}",
        f"  52w high/low:   {result.key_stats.week52_high} / {result.key_stats.week52_low}",
    ]
    if result.metrics:
        lines.append("Metrics:")
        lines.extend(f"  {m.name:<14} {m.score:>3}  {m.value}" for m in result.metrics)
    if result.pros:
        lines.append("Pros:")
        lines.extend(f"  + {item}" for item in result.pros)
    if result.cons:
        lines.append("Cons:")
        lines.extend(f"  - {item}" for item in result.cons)
    if result.news:
        lines.append("News:")
        for item in result.news:
            suffix = f" <{item.url}>" if item.url else ""
            lines.append(f"  [{item.date}] {item.title} ({item.source}){suffix}")
    lines.append(f"Updated: {result.last_updated.astimezone().strftime('%H:%M:%S')}")
    return "\n".join(lines)


def render_recommendations(sectors: list[SectorRecommendation]) -> str:
    if not sectors:
        return EMPTY_MARKET_MESSAGE
    lines: list[str] = []
    for sector in sectors:
        lines.append(sector.sector_name)
        for stock in sector.stocks:
            lines.append(
                f"  {_TREND_MARKS[stock.trend]} {stock.symbol:<8} {stock.price:<12} "
                f"{stock.name}: {stock.reason}"
            )
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def _run_analyze(researcher: StockResearcher, query: str, as_json: bool) -> int:
    try:
        result = await researcher.analyze_stock(query)
    except Exception:
        logger.debug("analyze | request for %r failed", query, exc_info=True)
        print(CONNECTION_ERROR_MESSAGE, file=sys.stderr)
        return 2

    if isinstance(result, NotFound):
        print(not_found_message(query), file=sys.stderr)
        return 1

    if as_json:
        print(result.model_dump_json(by_alias=True, indent=2))
    else:
        print(render_analysis(result))
    return 0


async def _run_market(researcher: StockResearcher, region: str, as_json: bool) -> int:
    sectors = await researcher.get_market_recommendations(region)
    if as_json:
        print(json.dumps([s.model_dump(by_alias=True) for s in sectors], indent=2))
    else:
        print(render_recommendations(sectors))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point.  Returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    load_dotenv()
    if not args.debug:
        # Log records can carry raw model output; only --debug shows them.
        package_logger = logging.getLogger("investai")
        if not package_logger.handlers:
            package_logger.addHandler(logging.NullHandler())

    try:
        settings = ResearchSettings.from_env(
            model_name=args.model,
            search_provider=SearchProvider(args.search_provider) if args.search_provider else None,
        )
    except ValueError as exc:
        parser.error(str(exc))

    researcher = build_researcher(settings, debug=args.debug)

    if args.command == "analyze":
        return asyncio.run(_run_analyze(researcher, args.query, args.json))
    return asyncio.run(_run_market(researcher, args.region, args.json))
