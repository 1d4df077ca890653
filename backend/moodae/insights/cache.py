# backend/moodae/insights/cache.py
"""
Explicit invalidation cache for insight results.

The engine functions stay pure and uncached; callers that recompute often can
wrap them here. Keys carry the data version, so a changed entry list simply
misses instead of needing a time-based cooldown.
"""
import logging
from collections import OrderedDict
from threading import Lock
from typing import Any, Callable, Hashable, NamedTuple, Optional, TypeVar

from moodae.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheKey(NamedTuple):
    owner_id: Hashable
    entries_version: Hashable
    kind: str                        # 'report' | 'prediction' | ...
    window: Optional[str] = None
    mood: Optional[str] = None
    reference: Optional[str] = None  # ISO timestamp the result was computed for


class InsightCache:
    """Small LRU of computed results keyed by CacheKey."""

    def __init__(self, max_size: Optional[int] = None):
        self.max_size = max_size if max_size is not None else settings.INSIGHT_CACHE_SIZE
        self._entries: "OrderedDict[CacheKey, Any]" = OrderedDict()
        self._lock = Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(self, key: CacheKey, compute: Callable[[], T]) -> T:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                logger.debug("Insight cache hit %s", key)
                return self._entries[key]
            self.misses += 1

        value = compute()

        if self.max_size <= 0:
            return value
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Insight cache evicted %s", evicted)
        return value

    def invalidate(self, owner_id: Optional[Hashable] = None) -> None:
        """Drop everything, or only one owner's results."""
        with self._lock:
            if owner_id is None:
                self._entries.clear()
                return
            for key in [k for k in self._entries if k.owner_id == owner_id]:
                del self._entries[key]
