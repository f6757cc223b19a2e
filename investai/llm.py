"""
investai.llm — The boundary to the upstream reasoning service.

``ReasoningClient.generate`` sends one prompt and returns the model's text.
Live web search is enabled in one of three ways (see ``SearchProvider``):

- ``OPENAI``: the provider's native search tool is bound to the chat model
  once, at construction.
- ``TAVILY``: Tavily is queried first and its results are prepended to the
  prompt as numbered sources.
- ``NONE``: the prompt is sent as-is.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from langchain_core.language_models.chat_models import BaseChatModel

from investai.errors import UpstreamCallError
from investai.search import SearchProvider, WebSearcher

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_TOOLS: list[dict[str, Any]] = [{"type": "web_search_preview"}]


def message_text(message: Any) -> str:
    """
    Return the plain text of a chat model response.

    ``content`` is a string for most providers, but search-enabled responses
    arrive as a list of content blocks; only the text blocks are kept.
    """
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts: list[str] = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return ""


class ReasoningClient:
    """
    Async wrapper around a LangChain chat model with web search enabled.

    Args:
        model: Any LangChain ``BaseChatModel``.  For ``SearchProvider.OPENAI``
            it must support ``bind_tools`` with the given search tools.
        provider: How web search is supplied (default ``OPENAI``).
        searcher: ``WebSearcher`` used by the ``TAVILY`` provider.
        search_tools: Tool specs bound for the ``OPENAI`` provider.
    """

    def __init__(
        self,
        model: BaseChatModel,
        provider: SearchProvider = SearchProvider.OPENAI,
        searcher: Optional[WebSearcher] = None,
        search_tools: Optional[list[dict[str, Any]]] = None,
    ) -> None:
        if provider is SearchProvider.TAVILY and searcher is None:
            raise ValueError("SearchProvider.TAVILY requires a WebSearcher.")

        self.provider = provider
        self._searcher = searcher
        if provider is SearchProvider.OPENAI:
            self._runnable = model.bind_tools(list(search_tools or DEFAULT_SEARCH_TOOLS))
        else:
            self._runnable = model

        logger.debug("ReasoningClient initialized | provider=%s", provider.value)

    async def generate(self, prompt: str, search_query: Optional[str] = None) -> str:
        """
        Send ``prompt`` and return the response text (possibly empty).

        Args:
            prompt: Full instruction text.
            search_query: Search phrase for the ``TAVILY`` provider; ignored
                otherwise.

        Raises:
            UpstreamCallError: If the chat model call fails.
        """
        if self.provider is SearchProvider.TAVILY and search_query:
            prompt = await self._ground(prompt, search_query)

        try:
            response = await self._runnable.ainvoke(prompt)
        except Exception as exc:
            logger.error("generate | chat model invocation failed: %s", exc, exc_info=True)
            raise UpstreamCallError(f"Reasoning service call failed: {exc}") from exc

        text = message_text(response)
        logger.debug("generate | received %d characters", len(text))
        return text

    async def _ground(self, prompt: str, search_query: str) -> str:
        """Prepend Tavily results to ``prompt``; on search failure return it unchanged."""
        try:
            results = await self._searcher.search(search_query, topic="finance")
        except Exception as exc:
            logger.warning("_ground | search failed for %r (continuing without): %s", search_query, exc)
            return prompt

        if not results:
            logger.warning("_ground | no search results for %r", search_query)
            return prompt

        logger.debug("_ground | %d results for %r", len(results), search_query)
        return (
            f"SEARCH RESULTS (live web search):\n"
            f"{self._searcher.format_results(results)}\n\n"
            f"{prompt}"
        )
