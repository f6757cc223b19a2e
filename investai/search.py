import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional

from langchain_tavily import TavilySearch

logger = logging.getLogger(__name__)


class SearchProvider(Enum):
    """How live web search reaches the reasoning service."""
    OPENAI = "openai"    # provider-native search tool bound to the chat model
    TAVILY = "tavily"    # Tavily results injected into the prompt
    NONE = "none"


@dataclass
class SearchResult:
    """Standardized search result format."""
    title: str
    content: str
    source: str


class WebSearcher:
    """
    Async Tavily search used to ground prompts when the chat model has no
    native search tool.
    """

    def __init__(
        self,
        tavily_api_key: Optional[str] = None,
        max_results: int = 5,
        tool: Optional[Any] = None,
    ):
        """
        Initialize the web searcher.

        Args:
            tavily_api_key: Tavily API key (defaults to TAVILY_API_KEY env var)
            max_results: Maximum number of results to return
            tool: Pre-built object exposing ``ainvoke``; skips TavilySearch construction
        """
        self.max_results = max_results

        if tool is not None:
            self.tavily_tool = tool
            return

        tavily_key = tavily_api_key or os.getenv("TAVILY_API_KEY")
        if not tavily_key:
            raise ValueError(
                "WebSearcher requires a Tavily API key. "
                "Pass tavily_api_key= or set the TAVILY_API_KEY environment variable."
            )

        self.tavily_tool = TavilySearch(
            max_results=max_results,
            tavily_api_key=tavily_key,
        )
        logger.debug("WebSearcher initialized | max_results=%d", max_results)

    async def search(
        self,
        query: str,
        topic: Literal["general", "news", "finance"] = "general",
    ) -> list[SearchResult]:
        """
        Search using the Tavily API.

        Args:
            query: Search query
            topic: Search topic category (general, news, or finance)

        Returns:
            List of standardized search results

        Raises:
            RuntimeError: If the Tavily call fails.
        """
        logger.debug("search | query=%r topic=%s", query, topic)

        try:
            response = await self.tavily_tool.ainvoke({"query": query, "topic": topic})
        except Exception as e:
            raise RuntimeError(f"Tavily search failed: {e}") from e

        # TavilySearch returns the raw API response; older wrappers return a bare list.
        if isinstance(response, dict):
            items = response.get("results", [])
        elif isinstance(response, list):
            items = response
        else:
            items = []

        results = [
            SearchResult(
                title=item.get("title", ""),
                content=(item.get("content") or "")[:500],
                source=item.get("url", ""),
            )
            for item in items
            if isinstance(item, dict)
        ]

        logger.debug("search | %d results for %r", len(results), query)
        return results[:self.max_results]

    def format_results(self, results: list[SearchResult]) -> str:
        """
        Format search results as numbered source blocks.
        """
        if not results:
            return "No results found."

        formatted = []
        for i, result in enumerate(results, 1):
            formatted.append(
                f"[{i}] {result.title}\n"
                f"    Source: {result.source}\n"
                f"    {result.content}"
            )
        return "\n\n".join(formatted)
