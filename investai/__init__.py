from investai.cache import RegionCache
from investai.config import ResearchSettings, build_researcher
from investai.errors import (
    EmptyResponseError,
    MalformedResponseError,
    ResearchError,
    UpstreamCallError,
)
from investai.extraction import extract_json
from investai.llm import ReasoningClient
from investai.models import (
    KeyStats,
    MarketRecommendation,
    Metric,
    NewsItem,
    NotFound,
    SectorRecommendation,
    StockAnalysis,
    ValuationType,
)
from investai.researcher import StockResearcher
from investai.retry import with_retry
from investai.search import SearchProvider, SearchResult, WebSearcher

__all__ = [
    "StockResearcher",
    "ReasoningClient",
    "RegionCache",
    "ResearchSettings",
    "build_researcher",
    "WebSearcher",
    "SearchProvider",
    "SearchResult",
    "StockAnalysis",
    "NotFound",
    "SectorRecommendation",
    "MarketRecommendation",
    "KeyStats",
    "Metric",
    "NewsItem",
    "ValuationType",
    "ResearchError",
    "EmptyResponseError",
    "MalformedResponseError",
    "UpstreamCallError",
    "extract_json",
    "with_retry",
]
