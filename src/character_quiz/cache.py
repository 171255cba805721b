"""
Query cache

Process-scoped store of fetched results keyed by request-parameter
tuples, e.g. ("total_count",) or ("quiz", 3). Entries live until they are
explicitly invalidated; there is no expiry.
"""

import logging
from typing import Any, Awaitable, Callable, Hashable, Optional

logger = logging.getLogger(__name__)

CacheKey = tuple[Hashable, ...]


class QueryCache:
    """Async read-through cache with prefix invalidation."""

    def __init__(self):
        self._entries: dict[CacheKey, Any] = {}

    async def fetch(self, key: CacheKey, fetcher: Callable[[], Awaitable[Any]]) -> Any:
        """
        Return the cached value for key, calling fetcher on a miss.

        Failures are not cached; the next fetch tries again.
        """
        if key in self._entries:
            logger.debug(f"Cache hit {key!r}")
            return self._entries[key]

        logger.debug(f"Cache miss {key!r}")
        value = await fetcher()
        self._entries[key] = value
        return value

    def get(self, key: CacheKey, default: Optional[Any] = None) -> Any:
        return self._entries.get(key, default)

    def invalidate(self, prefix: CacheKey = ()) -> int:
        """
        Drop every entry whose key starts with prefix.

        An empty prefix clears the cache.

        Returns:
            Number of entries removed
        """
        stale = [k for k in self._entries if k[:len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cache entries under {prefix!r}")
        return len(stale)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
