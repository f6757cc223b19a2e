"""Recover a JSON object from free-form model output.

The reasoning service is told to answer with pure JSON but does not always
comply: answers arrive wrapped in markdown fences, preceded by a greeting or
followed by a disclaimer.  ``extract_json`` strips all of that.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from investai.errors import EmptyResponseError, MalformedResponseError

logger = logging.getLogger(__name__)

# Opening fence with an optional language tag, or a bare closing fence.
_FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*")


def strip_code_fences(text: str) -> str:
    """Remove every markdown code-fence marker from ``text``."""
    return _FENCE_RE.sub("", text)


def extract_json(text: Optional[str]) -> dict[str, Any]:
    """
    Parse the single JSON object embedded in ``text``.

    Steps:
        1. Reject empty input.
        2. Strip code-fence markers wherever they occur.
        3. Slice from the first ``{`` to the last ``}`` when both exist in
           that order, dropping surrounding prose.
        4. ``json.loads`` the result.

    Args:
        text: Raw text returned by the reasoning service.

    Returns:
        The decoded JSON object.

    Raises:
        EmptyResponseError: If ``text`` is ``None``, empty or whitespace only.
        MalformedResponseError: If no JSON object can be decoded.  The text
            that failed to parse is attached as ``raw_text``.
    """
    if not text or not text.strip():
        raise EmptyResponseError()

    cleaned = strip_code_fences(text)

    first_open = cleaned.find("{")
    last_close = cleaned.rfind("}")
    if first_open != -1 and last_close > first_open:
        cleaned = cleaned[first_open : last_close + 1]

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("extract_json | could not parse extracted JSON: %s", cleaned)
        raise MalformedResponseError(raw_text=cleaned) from exc

    if not isinstance(data, dict):
        logger.error(
            "extract_json | expected a JSON object, got %s: %s",
            type(data).__name__,
            cleaned,
        )
        raise MalformedResponseError(
            "Reasoning service returned JSON that is not an object",
            raw_text=cleaned,
        )

    return data
