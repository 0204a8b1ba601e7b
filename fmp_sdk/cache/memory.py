"""In-process response cache with TTL expiry and LRU eviction.

This module provides MemoryCache, the provider used when caching is
enabled without a custom backend. Recency bookkeeping and eviction are
delegated to :class:`cachetools.LRUCache`; TTLs are tracked per entry.
"""

from typing import Any, Callable, Dict, Optional

import structlog
from cachetools import Cache, LRUCache

from fmp_sdk.cache.base import CacheEntry, now_ms

logger = structlog.get_logger(__name__)


class _EntryStore(LRUCache):
    """LRUCache of CacheEntry objects that logs evictions."""

    def popitem(self):
        key, entry = super().popitem()
        logger.debug("memory_cache_evicted", key=key)
        return key, entry

    def peek(self, key: str) -> Optional[CacheEntry]:
        """Look up key without touching its recency."""
        if key not in self:
            return None
        return Cache.__getitem__(self, key)


class MemoryCache:
    """
    Bounded in-memory cache with lazy TTL expiry and LRU eviction.

    Entries live in an LRUCache ordered from least to most recently
    used. get() promotes the entry it returns; when the cache is full the
    least recently used entry is evicted. Expired entries are removed
    when a reader encounters them, or eagerly via prune().

    All operations are synchronous and complete without yielding to the
    event loop, so they are atomic for concurrent coroutines.

    Attributes:
        max_size: Maximum number of entries held at once

    Example:
        >>> cache = MemoryCache(max_size=500)
        >>> cache.set("profile?symbol=AAPL", [{"symbol": "AAPL"}], 60_000)
        >>> cache.get("profile?symbol=AAPL")
        [{'symbol': 'AAPL'}]
    """

    def __init__(
        self,
        max_size: int = 1000,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries (default: 1000)
            clock: Callable returning the current time in milliseconds,
                defaults to the wall clock
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")

        self.max_size = max_size
        self._clock = clock or now_ms
        self._entries = _EntryStore(maxsize=max_size)

    def get(self, key: str) -> Optional[Any]:
        """
        Return the live value for key, promoting it to most recently used.

        Args:
            key: Cache key

        Returns:
            Cached value, or None if missing or expired
        """
        entry = self._entries.peek(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            del self._entries[key]
            logger.debug("memory_cache_expired", key=key)
            return None

        return self._entries[key].value

    def set(self, key: str, value: Any, ttl: int) -> None:
        """
        Store value under key for ttl milliseconds.

        An existing entry for key is replaced and moves to the most
        recently used position. The least recently used entry is evicted
        when there is no room.
        """
        self._entries[key] = CacheEntry(value=value, created_at=self._clock(), ttl=ttl)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        # Swap the store so clearing isn't logged as one eviction per entry
        self._entries = _EntryStore(maxsize=self.max_size)

    def has(self, key: str) -> bool:
        """Liveness check; reaps an expired entry but keeps recency order."""
        entry = self._entries.peek(key)
        if entry is None:
            return False

        if entry.is_expired(self._clock()):
            del self._entries[key]
            return False

        return True

    def prune(self) -> int:
        """
        Remove every expired entry.

        Expired entries are also reaped lazily by get() and has().

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key in self._entries if self._entries.peek(key).is_expired(now)]
        for key in expired:
            del self._entries[key]

        if expired:
            logger.debug("memory_cache_pruned", removed=len(expired))

        return len(expired)

    def stats(self) -> Dict[str, int]:
        """Return current size and capacity."""
        return {"size": len(self._entries), "max_size": self.max_size}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)
