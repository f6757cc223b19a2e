"""
investai.models — Validated domain objects produced by the acquisition layer.

The reasoning service answers with camelCase JSON (the schema written into
every prompt).  Each model here accepts that payload through field aliases
and exposes snake_case attributes; ``model_dump(by_alias=True)`` gives the
wire names back.

All models are frozen: a result is built once per successful call and never
mutated afterwards.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Region = Literal["BR", "US"]
Trend = Literal["up", "down", "neutral"]

_TRENDS: frozenset[str] = frozenset({"up", "down", "neutral"})


class ValuationType(str, Enum):
    """Closed valuation verdict.  Values are the labels the prompt asks for."""

    UNDERVALUED = "Barato"
    FAIR = "Justo"
    OVERVALUED = "Caro"
    UNKNOWN = "Desconhecido"


# ---------------------------------------------------------------------------
# Shared base
# ---------------------------------------------------------------------------


class _PayloadModel(BaseModel):
    """Base for models validated straight from an untrusted model payload.

    ``null`` values are dropped before validation so the field default applies,
    and bare numbers are accepted where the schema asks for strings (prices and
    ratios are kept as display strings, never parsed).
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# ---------------------------------------------------------------------------
# Single-company analysis
# ---------------------------------------------------------------------------


class Metric(_PayloadModel):
    name: str = Field(default="", description="Metric family, e.g. 'Rentabilidade'.")
    value: str = Field(default="", description="Display value as supplied upstream.")
    score: Union[int, float] = Field(
        default=0, description="0-100 score used for visualisation, kept as supplied."
    )


class NewsItem(_PayloadModel):
    title: str = Field(default="", description="Headline.")
    source: str = Field(default="", description="Publisher name.")
    date: str = Field(default="", description="Publication date as supplied upstream.")
    url: Optional[str] = Field(default=None, description="Link to the article, if any.")


class KeyStats(_PayloadModel):
    """Public key statistics.  Every value is an opaque display string."""

    market_cap: str = Field(default="", alias="marketCap")
    pe_ratio: str = Field(default="", alias="peRatio")
    dividend_yield: str = Field(default="", alias="dividendYield")
    week52_high: str = Field(default="", alias="week52High")
    week52_low: str = Field(default="", alias="week52Low")


class StockAnalysis(_PayloadModel):
    """
    Structured fundamental analysis of a single listed company.

    Everything except ``valuation`` and ``last_updated`` is passed through from
    the reasoning service unchanged.  ``valuation`` is normalised onto
    ``ValuationType`` and ``last_updated`` is stamped locally when the result
    is finalised.
    """

    symbol: str = Field(default="", description="Ticker symbol, e.g. 'PETR4'.")
    company_name: str = Field(default="", alias="companyName")
    current_price: str = Field(
        default="",
        alias="currentPrice",
        description="Currency-formatted price string, kept exactly as supplied.",
    )
    currency: str = Field(default="", description="Currency code, e.g. 'BRL'.")
    sector: str = Field(default="")
    description: str = Field(default="", description="Short company summary.")
    pros: list[str] = Field(
        default_factory=list,
        description="Indicators supporting the investment ('Indicator: Value (Context)').",
    )
    cons: list[str] = Field(
        default_factory=list,
        description="Indicators against the investment ('Indicator: Value (Context)').",
    )
    key_stats: KeyStats = Field(default_factory=KeyStats, alias="keyStats")
    news: list[NewsItem] = Field(default_factory=list)
    valuation: ValuationType = Field(default=ValuationType.UNKNOWN)
    financial_health_score: Union[int, float] = Field(
        default=0,
        alias="financialHealthScore",
        description="0-100 health score.  The range is not enforced here.",
    )
    metrics: list[Metric] = Field(default_factory=list)
    last_updated: datetime = Field(
        ...,
        alias="lastUpdated",
        description="When this layer finalised the result (never taken from upstream).",
    )


class NotFound(BaseModel):
    """The reasoning service reported that the queried company does not exist.

    This is an expected outcome, not a failure.
    """

    model_config = ConfigDict(frozen=True)

    query: str


# ---------------------------------------------------------------------------
# Regional recommendations
# ---------------------------------------------------------------------------


class MarketRecommendation(_PayloadModel):
    symbol: str = Field(default="", description="Ticker symbol.")
    name: str = Field(default="", description="Company name.")
    price: str = Field(default="", description="Price string in the region currency.")
    reason: str = Field(default="", description="One-sentence rationale.")
    trend: Trend = Field(default="neutral")

    @field_validator("trend", mode="before")
    @classmethod
    def _normalise_trend(cls, value: Any) -> str:
        # Unrecognised directions fall back to neutral rather than failing the sector.
        if isinstance(value, str) and value.strip().lower() in _TRENDS:
            return value.strip().lower()
        return "neutral"


class SectorRecommendation(_PayloadModel):
    sector_name: str = Field(default="", alias="sectorName")
    stocks: list[MarketRecommendation] = Field(default_factory=list)
