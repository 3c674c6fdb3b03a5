"""Keyed fetch cache.

Detail pages are fetched through a cache so that repeated feed builds within
the validity window do not re-download pages already seen. The cache is
injected into the feed adapter; ``MemoryFetchCache`` is the in-process
default.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, TypeVar

from govfeed.core.config import settings
from govfeed.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class FetchCache(Protocol):
    """Idempotent keyed cache capability."""

    async def try_get(self, key: str, producer: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value for ``key`` or produce, store and return it."""
        ...

    def size(self) -> int:
        """Number of cached entries."""
        ...


class MemoryFetchCache:
    """In-memory TTL cache with oldest-first eviction.

    Concurrent ``try_get`` calls for the same key share one producer run.
    A producer that raises leaves nothing behind in the cache.
    """

    def __init__(
        self,
        max_size: Optional[int] = None,
        ttl: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            max_size: Maximum number of entries (default from settings)
            ttl: Entry lifetime in seconds (default from settings)
            clock: Monotonic time source
        """
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}
        self._max_size = max_size if max_size is not None else settings.cache_max_entries
        self._ttl = ttl if ttl is not None else settings.cache_ttl_seconds
        self._clock = clock

    async def try_get(self, key: str, producer: Callable[[], Awaitable[T]]) -> T:
        entry = self._lookup(key)
        if entry is not None:
            logger.debug(f"Cache hit: {key}")
            return entry["value"]  # type: ignore[no-any-return]

        lock = self._locks.setdefault(key, asyncio.Lock())
        self._lock_users[key] = self._lock_users.get(key, 0) + 1
        try:
            async with lock:
                # Another caller may have filled the entry while we waited
                entry = self._lookup(key)
                if entry is not None:
                    logger.debug(f"Cache hit after wait: {key}")
                    return entry["value"]  # type: ignore[no-any-return]

                logger.debug(f"Cache miss: {key}")
                value = await producer()
                self._store(key, value)
                return value
        finally:
            # Drop the lock only once no caller holds or waits on it
            self._lock_users[key] -= 1
            if self._lock_users[key] == 0:
                del self._lock_users[key]
                del self._locks[key]

    def _lookup(self, key: str) -> Optional[Dict[str, Any]]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        if self._is_expired(entry):
            del self._cache[key]
            return None
        return entry

    def _store(self, key: str, value: Any) -> None:
        if key not in self._cache and len(self._cache) >= self._max_size:
            self._evict_oldest()
        self._cache[key] = {"value": value, "timestamp": self._clock()}

    def delete(self, key: str) -> bool:
        """Drop one entry; returns whether it existed."""
        return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        self._cache.clear()

    def size(self) -> int:
        return len(self._cache)

    def _is_expired(self, entry: Dict[str, Any]) -> bool:
        return self._clock() - entry["timestamp"] >= self._ttl

    def _evict_oldest(self) -> None:
        if not self._cache:
            return
        oldest_key = min(self._cache, key=lambda k: self._cache[k]["timestamp"])
        del self._cache[oldest_key]
