"""Turn an extracted payload into domain objects.

The payload is untrusted: anything the models cannot validate becomes a
``MalformedResponseError`` so the retry coordinator gets another attempt.
Missing fields resolve to the defaults declared on the models.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Union

from pydantic import ValidationError

from investai.errors import MalformedResponseError
from investai.models import (
    NotFound,
    SectorRecommendation,
    StockAnalysis,
    ValuationType,
)

logger = logging.getLogger(__name__)

VALUATION_LABELS: dict[str, ValuationType] = {
    "Barato": ValuationType.UNDERVALUED,
    "Justo": ValuationType.FAIR,
    "Caro": ValuationType.OVERVALUED,
}

# Keys owned by the mapper rather than passed through to the model.
_CONSUMED_KEYS = ("exists", "valuation", "lastUpdated", "last_updated")


def to_valuation(label: Any) -> ValuationType:
    """Map an upstream valuation label onto ``ValuationType`` (UNKNOWN if unrecognised)."""
    if isinstance(label, str):
        return VALUATION_LABELS.get(label, ValuationType.UNKNOWN)
    return ValuationType.UNKNOWN


def map_analysis(
    payload: dict[str, Any],
    query: str,
    now: Optional[datetime] = None,
) -> Union[StockAnalysis, NotFound]:
    """
    Build a ``StockAnalysis`` from ``payload``, or ``NotFound``.

    A falsy ``exists`` flag always yields ``NotFound`` whatever else the
    payload contains.  Otherwise the valuation label is normalised, a fresh
    ``last_updated`` is stamped and every other field passes through.

    Args:
        payload: Decoded JSON object from the reasoning service.
        query: The user's query, echoed into ``NotFound``.
        now: Timestamp to stamp; current UTC time when omitted.

    Raises:
        MalformedResponseError: If the payload does not fit ``StockAnalysis``.
    """
    if not payload.get("exists"):
        logger.debug("map_analysis | upstream reports %r does not exist", query)
        return NotFound(query=query)

    fields = {k: v for k, v in payload.items() if k not in _CONSUMED_KEYS}
    fields["valuation"] = to_valuation(payload.get("valuation"))
    fields["lastUpdated"] = now or datetime.now(timezone.utc)

    try:
        return StockAnalysis.model_validate(fields)
    except ValidationError as exc:
        logger.error("map_analysis | payload failed validation for %r: %s", query, exc)
        raise MalformedResponseError(
            f"Analysis payload failed validation ({exc.error_count()} errors)",
            raw_text=repr(payload),
        ) from exc


def map_recommendations(payload: dict[str, Any]) -> list[SectorRecommendation]:
    """
    Build the ordered sector list from ``payload["sectors"]``.

    An absent or null ``sectors`` key yields an empty list.  Order is kept
    exactly as returned.

    Raises:
        MalformedResponseError: If ``sectors`` is not a list or an entry does
            not fit ``SectorRecommendation``.
    """
    sectors = payload.get("sectors") or []
    if not isinstance(sectors, list):
        raise MalformedResponseError(
            "Recommendations payload field 'sectors' is not a list",
            raw_text=repr(payload),
        )

    try:
        return [SectorRecommendation.model_validate(entry) for entry in sectors]
    except ValidationError as exc:
        logger.error("map_recommendations | payload failed validation: %s", exc)
        raise MalformedResponseError(
            f"Recommendations payload failed validation ({exc.error_count()} errors)",
            raw_text=repr(payload),
        ) from exc
