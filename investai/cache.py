"""Process-lifetime cache of regional recommendations."""
from __future__ import annotations

import logging
from typing import Optional

from investai.models import SectorRecommendation

logger = logging.getLogger(__name__)


class RegionCache:
    """
    Maps a region code to the last successful, non-empty recommendation list.

    Entries are never expired.  Empty lists are refused so a failed fetch
    cannot pin a region to "no recommendations"; the next request fetches
    again instead.  Lists are copied in and out; the models inside are frozen.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list[SectorRecommendation]] = {}

    def get(self, region: str) -> Optional[list[SectorRecommendation]]:
        entry = self._entries.get(region)
        if entry is None:
            return None
        return list(entry)

    def put(self, region: str, results: list[SectorRecommendation]) -> bool:
        """Store ``results`` for ``region``.  Returns ``False`` (and stores nothing) if empty."""
        if not results:
            logger.debug("RegionCache.put | ignoring empty result for region=%s", region)
            return False
        self._entries[region] = list(results)
        logger.debug(
            "RegionCache.put | cached %d sectors for region=%s", len(results), region
        )
        return True

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, region: object) -> bool:
        return region in self._entries

    def __len__(self) -> int:
        return len(self._entries)
