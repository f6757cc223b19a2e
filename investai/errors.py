"""Exceptions raised while acquiring research results from the reasoning service.

Every exception inherits from ``ResearchError`` so callers can catch the
whole family with one ``except`` clause.  "Company not found" is *not* an
exception; see ``investai.models.NotFound``.
"""
from __future__ import annotations

from typing import Any, Optional


class ResearchError(Exception):
    """Base exception for the acquisition layer."""

    def __init__(self, message: str = "", details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class EmptyResponseError(ResearchError):
    """The reasoning service returned no text at all."""

    def __init__(self, message: str = "Empty response from the reasoning service") -> None:
        super().__init__(message)


class MalformedResponseError(ResearchError):
    """Text was returned but no valid JSON payload could be recovered from it.

    ``raw_text`` holds the offending text for operators.  It is deliberately
    kept out of ``str(exc)`` so it never leaks into user-facing messages.
    """

    def __init__(
        self,
        message: str = "Invalid JSON format returned by the reasoning service",
        raw_text: str = "",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.raw_text = raw_text


class UpstreamCallError(ResearchError):
    """The call to the reasoning service itself failed.

    The provider's exception is chained as ``__cause__``.
    """
