"""Runtime settings and researcher construction.

Settings come from constructor arguments or, via ``ResearchSettings.from_env``,
from environment variables (the CLI loads a ``.env`` file first).
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from langchain_openai import ChatOpenAI

from investai.researcher import StockResearcher
from investai.search import SearchProvider

DEFAULT_MODEL = "gpt-4o-mini"


@dataclass(frozen=True)
class ResearchSettings:
    """
    Attributes
    ----------
    model_name:
        Chat model identifier (``INVESTAI_MODEL``).
    search_provider:
        ``openai``, ``tavily`` or ``none`` (``INVESTAI_SEARCH_PROVIDER``).
    max_retries:
        Retries after the first attempt (``INVESTAI_MAX_RETRIES``).
    retry_delay:
        Seconds before the first retry, doubled per retry
        (``INVESTAI_RETRY_DELAY``).
    max_search_results:
        Tavily results per grounding search (``INVESTAI_MAX_SEARCH_RESULTS``).
    openai_api_key, tavily_api_key:
        Provider keys (``OPENAI_API_KEY``, ``TAVILY_API_KEY``).
    """

    model_name: str = DEFAULT_MODEL
    search_provider: SearchProvider = SearchProvider.OPENAI
    max_retries: int = 2
    retry_delay: float = 1.0
    max_search_results: int = 5
    openai_api_key: Optional[str] = None
    tavily_api_key: Optional[str] = None

    def validate(self) -> None:
        """Raise ``ValueError`` if any field is out of range."""
        if not self.model_name:
            raise ValueError("model_name must be non-empty")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.retry_delay < 0:
            raise ValueError(f"retry_delay must be >= 0, got {self.retry_delay}")
        if self.max_search_results < 1:
            raise ValueError(
                f"max_search_results must be >= 1, got {self.max_search_results}"
            )
        if self.search_provider is SearchProvider.TAVILY and not self.tavily_api_key:
            raise ValueError("search_provider=tavily requires TAVILY_API_KEY")

    @classmethod
    def from_env(cls, **overrides: object) -> "ResearchSettings":
        """Build settings from environment variables; keyword overrides win."""
        values: dict[str, object] = {
            "model_name": os.getenv("INVESTAI_MODEL", DEFAULT_MODEL),
            "search_provider": SearchProvider(
                os.getenv("INVESTAI_SEARCH_PROVIDER", SearchProvider.OPENAI.value).lower()
            ),
            "max_retries": int(os.getenv("INVESTAI_MAX_RETRIES", "2")),
            "retry_delay": float(os.getenv("INVESTAI_RETRY_DELAY", "1.0")),
            "max_search_results": int(os.getenv("INVESTAI_MAX_SEARCH_RESULTS", "5")),
            "openai_api_key": os.getenv("OPENAI_API_KEY"),
            "tavily_api_key": os.getenv("TAVILY_API_KEY"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        settings = cls(**values)  # type: ignore[arg-type]
        settings.validate()
        return settings


def build_researcher(settings: ResearchSettings, debug: bool = False) -> StockResearcher:
    """Construct the default chat model and a ``StockResearcher`` around it."""
    settings.validate()
    model_kwargs: dict[str, object] = {"model": settings.model_name}
    if settings.openai_api_key:
        model_kwargs["api_key"] = settings.openai_api_key
    model = ChatOpenAI(**model_kwargs)

    return StockResearcher(
        model=model,
        search_provider=settings.search_provider,
        tavily_api_key=settings.tavily_api_key,
        max_search_results=settings.max_search_results,
        max_retries=settings.max_retries,
        retry_delay=settings.retry_delay,
        debug=debug,
    )
