"""
investai.prompts — Instruction text sent to the reasoning service.

The JSON schemas below are a contract with ``investai.mapping``: field names
and value vocabularies (``exists``, the valuation labels, the trend values)
must stay in sync with ``investai.models``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

# ---------------------------------------------------------------------------
# Market scopes per region
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MarketScope:
    """What a region code means for recommendation prompts."""

    region: str
    description: str
    currency: str
    search_phrase: str


MARKETS: dict[str, MarketScope] = {
    "BR": MarketScope(
        region="BR",
        description=(
            "the Brazilian stock market (B3). Focus ONLY on stocks listed in Brazil "
            "(e.g. tickers ending in 3, 4 or 11)"
        ),
        currency="R$",
        search_phrase="melhores ações B3 hoje por setor",
    ),
    "US": MarketScope(
        region="US",
        description=(
            "the US stock market (NYSE/NASDAQ). Focus ONLY on US-listed stocks"
        ),
        currency="US$",
        search_phrase="best US stocks today by sector NYSE NASDAQ",
    ),
}

RECOMMENDATION_SECTORS: tuple[str, ...] = (
    "Tecnologia / Growth",
    "Finanças / Bancos",
    "Energia / Commodities",
    "Varejo / Consumo",
)


def market_scope(region: str) -> MarketScope:
    """Return the ``MarketScope`` for ``region``; ``ValueError`` if unsupported."""
    try:
        return MARKETS[region]
    except KeyError:
        raise ValueError(
            f"Unsupported region {region!r}; expected one of {sorted(MARKETS)}."
        ) from None


def today() -> str:
    """Current local date in ISO format (YYYY-MM-DD)."""
    return date.today().isoformat()


# ---------------------------------------------------------------------------
# Output schemas
# ---------------------------------------------------------------------------

ANALYSIS_SCHEMA = """{
  "exists": boolean,
  "symbol": "string",
  "companyName": "string",
  "currentPrice": "string",
  "currency": "string",
  "sector": "string",
  "description": "Short company summary",
  "keyStats": {
    "marketCap": "string",
    "peRatio": "string",
    "dividendYield": "string",
    "week52High": "string",
    "week52Low": "string"
  },
  "news": [
    {
      "title": "Headline",
      "source": "Publisher",
      "date": "Date",
      "url": "link"
    }
  ],
  "pros": ["Indicator: Value (Context)"],
  "cons": ["Indicator: Value (Context)"],
  "valuation": "Barato" | "Justo" | "Caro" | "Desconhecido",
  "financialHealthScore": number,
  "metrics": [
    { "name": "Crescimento", "value": "string", "score": number },
    { "name": "Rentabilidade", "value": "string", "score": number },
    { "name": "Dívida", "value": "string", "score": number },
    { "name": "Valuation", "value": "string", "score": number },
    { "name": "Momentum", "value": "string", "score": number }
  ]
}"""

RECOMMENDATIONS_SCHEMA = """{
  "sectors": [
    {
      "sectorName": "Sector name",
      "stocks": [
        {
          "symbol": "TICKER",
          "name": "Company name",
          "price": "Price",
          "reason": "Short reason (1 sentence)",
          "trend": "up" | "down" | "neutral"
        }
      ]
    }
  ]
}"""


# ---------------------------------------------------------------------------
# Prompt builders
# ---------------------------------------------------------------------------


def build_analysis_prompt(query: str, today_iso: Optional[str] = None) -> str:
    """
    Build the single-company analysis prompt.

    Args:
        query: Ticker or company name exactly as the user typed it.
        today_iso: Date to frame recency against; defaults to ``today()``.
    """
    today_iso = today_iso or today()
    return (
        f"You are a senior fundamental financial analyst (Benjamin Graham / Warren "
        f"Buffett style). Today's date is {today_iso}.\n\n"
        f'TASK: Analyse the company or ticker: "{query}".\n\n'
        f"IMPORTANT:\n"
        f"1. Use the web search tool to find the EXACT share price RIGHT NOW "
        f"(real time) and CURRENT public data.\n"
        f"2. Check that the company exists and is listed on a stock exchange. "
        f'If it is not, return {{"exists": false}}.\n'
        f"3. Look for RECENT NEWS (last 24-48 hours).\n"
        f"4. Look for public fundamental financial data (key stats).\n"
        f"5. Write every free-text field in Brazilian Portuguese.\n\n"
        f"CRITICAL RULE FOR PROS AND CONS:\n"
        f'- Do NOT use generic phrases such as "Good management".\n'
        f"- Use REAL FINANCIAL INDICATORS with their values.\n"
        f'- PROS examples: "P/L: 5.4 (Baixo)", "ROE: 25% (Alto)".\n'
        f'- CONS examples: "Dív. Líq/EBITDA: 4x (Alta)", "Margem Líq: 2% (Baixa)".\n\n'
        f"- financialHealthScore and every metric score are integers from 0 to 100.\n\n"
        f"RESPONSE FORMAT (PURE JSON ONLY, no prose, no markdown):\n"
        f"{ANALYSIS_SCHEMA}\n"
    )


def build_recommendations_prompt(region: str, today_iso: Optional[str] = None) -> str:
    """
    Build the sector-grouped recommendations prompt for ``region``.

    Raises:
        ValueError: If ``region`` is not a supported market.
    """
    scope = market_scope(region)
    today_iso = today_iso or today()
    sectors = "\n".join(f"{i}. {name}" for i, name in enumerate(RECOMMENDATION_SECTORS, 1))
    return (
        f"Act as a senior investment strategist. Date: {today_iso}.\n\n"
        f"TASK: List the best opportunities in {scope.description}, organised by SECTOR.\n\n"
        f"SECTORS:\n{sectors}\n\n"
        f"RULES:\n"
        f"- Use web search to validate TODAY's highlights.\n"
        f"- 2 to 3 stocks per sector.\n"
        f"- Up-to-date price ({scope.currency}).\n"
        f"- Write names and reasons in Brazilian Portuguese.\n\n"
        f"MANDATORY JSON FORMAT (no prose, no markdown):\n"
        f"{RECOMMENDATIONS_SCHEMA}\n"
    )


# ---------------------------------------------------------------------------
# Search phrases (Tavily grounding mode)
# ---------------------------------------------------------------------------


def search_query_for_analysis(query: str) -> str:
    """Anchor search phrase for a company; steers results toward price and news."""
    return f"{query} stock price news fundamentals"


def search_query_for_region(region: str) -> str:
    return market_scope(region).search_phrase
