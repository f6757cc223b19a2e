"""
investai.researcher — Public entry points of the acquisition layer.

Public API
----------
- ``StockResearcher.analyze_stock(query)``                → ``StockAnalysis | NotFound``
- ``StockResearcher.get_market_recommendations(region)``  → ``list[SectorRecommendation]``

Both methods share the same pipeline, re-run as a whole on every attempt:
1. Build the prompt (``investai.prompts``) for today's date.
2. Call the reasoning service once (``ReasoningClient.generate``).
3. Extract the JSON object from the raw text (``extract_json``).
4. Map it onto domain models (``investai.mapping``).

Invariants
----------
- ``analyze_stock`` returns ``NotFound`` (never raises) when upstream says
  the company does not exist; it raises the last error once retries are
  exhausted.
- ``get_market_recommendations`` never raises: unsupported regions and
  upstream or parse failures are logged and return ``[]``.
- Only non-empty recommendation lists are cached.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from langchain_core.language_models.chat_models import BaseChatModel

from investai.cache import RegionCache
from investai.extraction import extract_json
from investai.llm import ReasoningClient
from investai.mapping import map_analysis, map_recommendations
from investai.models import NotFound, Region, SectorRecommendation, StockAnalysis
from investai.prompts import (
    build_analysis_prompt,
    build_recommendations_prompt,
    market_scope,
    search_query_for_analysis,
    search_query_for_region,
    today,
)
from investai.retry import DEFAULT_INITIAL_DELAY, DEFAULT_MAX_RETRIES, with_retry
from investai.search import SearchProvider, WebSearcher

logger = logging.getLogger(__name__)


class StockResearcher:
    """
    Turns a company query or a region code into validated research results.

    Usage::

        from langchain_openai import ChatOpenAI
        from investai import StockResearcher

        researcher = StockResearcher(model=ChatOpenAI(model="gpt-4o-mini"))
        result = await researcher.analyze_stock("PETR4")

    Args:
        model: LangChain ``BaseChatModel`` used as the reasoning service.
            Ignored when ``client`` is given.
        client: Pre-built ``ReasoningClient``.
        cache: Region cache; a fresh ``RegionCache`` when omitted.
        search_provider: How web search is supplied to ``model``.
        tavily_api_key: Tavily key for ``SearchProvider.TAVILY``.  Falls back
            to the ``TAVILY_API_KEY`` env var.
        max_search_results: Tavily results per grounding search.
        max_retries: Retries after the first attempt (default 2).
        retry_delay: Seconds before the first retry; doubled each time.
        debug: When ``True``, sets the ``investai`` logger to ``DEBUG`` and
            attaches a ``StreamHandler`` if none is already configured.
    """

    def __init__(
        self,
        model: Optional[BaseChatModel] = None,
        client: Optional[ReasoningClient] = None,
        cache: Optional[RegionCache] = None,
        search_provider: SearchProvider = SearchProvider.OPENAI,
        tavily_api_key: Optional[str] = None,
        max_search_results: int = 5,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_INITIAL_DELAY,
        debug: bool = False,
    ) -> None:
        if debug:
            package_logger = logging.getLogger("investai")
            package_logger.setLevel(logging.DEBUG)
            if not package_logger.handlers:
                package_logger.addHandler(logging.StreamHandler())

        if client is None:
            if model is None:
                raise ValueError("StockResearcher requires either model= or client=.")
            searcher = None
            if search_provider is SearchProvider.TAVILY:
                searcher = WebSearcher(
                    tavily_api_key=tavily_api_key,
                    max_results=max_search_results,
                )
            client = ReasoningClient(model, provider=search_provider, searcher=searcher)

        self._client = client
        self.cache = cache if cache is not None else RegionCache()
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        logger.debug(
            "StockResearcher initialized | provider=%s max_retries=%d retry_delay=%.1fs",
            client.provider.value,
            max_retries,
            retry_delay,
        )

    # ------------------------------------------------------------------
    # Single-company analysis
    # ------------------------------------------------------------------

    async def analyze_stock(self, query: str) -> Union[StockAnalysis, NotFound]:
        """
        Analyse one company or ticker.

        Args:
            query: Ticker or company name, passed to the reasoning service
                verbatim (the service resolves it).

        Returns:
            ``StockAnalysis`` on success, ``NotFound`` if upstream reports the
            company does not exist or is not listed.

        Raises:
            ValueError: If ``query`` is blank.
            ResearchError: Or any other exception from the final attempt, once
                the retry budget is spent.
        """
        if not query or not query.strip():
            raise ValueError("query must be a non-empty string.")

        logger.debug("analyze_stock | query=%r", query)

        async def attempt() -> Union[StockAnalysis, NotFound]:
            prompt = build_analysis_prompt(query, today())
            text = await self._client.generate(
                prompt, search_query=search_query_for_analysis(query)
            )
            return map_analysis(extract_json(text), query)

        result = await with_retry(attempt, self.max_retries, self.retry_delay)

        if isinstance(result, NotFound):
            logger.info("analyze_stock | %r not found upstream", query)
        else:
            logger.debug(
                "analyze_stock | done: symbol=%s valuation=%s",
                result.symbol,
                result.valuation.name,
            )
        return result

    # ------------------------------------------------------------------
    # Regional recommendations
    # ------------------------------------------------------------------

    async def get_market_recommendations(self, region: Region) -> list[SectorRecommendation]:
        """
        List sector-grouped picks for ``region`` ("BR" or "US").

        Cached results are returned without calling upstream.  An unsupported
        region, or any failure after retries, is logged and degrades to an
        empty list, which is not cached.
        """
        try:
            market_scope(region)
        except ValueError as exc:
            logger.error("get_market_recommendations | %s", exc)
            return []

        cached = self.cache.get(region)
        if cached is not None:
            logger.debug("get_market_recommendations | cache hit for region=%s", region)
            return cached

        async def attempt() -> list[SectorRecommendation]:
            prompt = build_recommendations_prompt(region, today())
            text = await self._client.generate(
                prompt, search_query=search_query_for_region(region)
            )
            return map_recommendations(extract_json(text))

        try:
            results = await with_retry(attempt, self.max_retries, self.retry_delay)
        except Exception as exc:
            # Secondary feature: degrade to the empty state instead of failing the caller.
            logger.error(
                "get_market_recommendations | giving up for region=%s: %s",
                region,
                exc,
                exc_info=True,
            )
            return []

        self.cache.put(region, results)
        logger.debug(
            "get_market_recommendations | %d sectors for region=%s", len(results), region
        )
        return results
