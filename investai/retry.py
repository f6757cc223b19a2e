"""Bounded retry with exponential backoff for async operations."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 2
DEFAULT_INITIAL_DELAY = 1.0


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = DEFAULT_MAX_RETRIES,
    initial_delay: float = DEFAULT_INITIAL_DELAY,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Await ``operation()`` until it succeeds or the retry budget runs out.

    The first attempt runs immediately.  After each failure the coordinator
    waits ``delay`` seconds and doubles it, so the default budget of two
    retries waits 1.0s then 2.0s for at most three attempts.  Errors are not
    inspected or wrapped: once the budget is spent, the exception from the
    last attempt is re-raised as-is.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per call.
        max_retries: Retries after the first attempt.
        initial_delay: Seconds to wait before the first retry.
        sleep: Awaitable sleep; ``asyncio.sleep`` unless a test substitutes it.

    Returns:
        Whatever the first successful attempt returned.
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")
    if initial_delay < 0:
        raise ValueError(f"initial_delay must be >= 0, got {initial_delay}")

    retries_left = max_retries
    delay = initial_delay
    while True:
        try:
            return await operation()
        except Exception as exc:
            if retries_left <= 0:
                raise
            logger.warning(
                "with_retry | attempt failed, retrying in %.1fs (%d retries left): %s",
                delay,
                retries_left,
                exc,
            )
            await sleep(delay)
            retries_left -= 1
            delay *= 2
