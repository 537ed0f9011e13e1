"""
Reference Data - Search Cache.

============================================================
PURPOSE
============================================================
In-process cache for instrument search results.

- Backed by cachetools.TTLCache: bounded size with
  least-recently-used eviction, TTL measured from the write
- get-or-compute: concurrent misses for one key share a
  single in-flight fetch
- Failed fetches are never cached

============================================================
CONCURRENCY
============================================================
TTLCache is not thread-safe, so the store and the in-flight
map are mutated under a threading.Lock. Waiters await the
shared fetch through asyncio.shield, so cancelling one
waiter does not cancel the fetch the others are waiting on.

============================================================
"""

import asyncio
import threading
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Generic, Optional, TypeVar

from cachetools import TTLCache


T = TypeVar("T")

_MISSING = object()


@dataclass(frozen=True)
class CacheLookup(Generic[T]):
    """Result of a cache lookup."""

    value: Optional[T]
    present: bool


def make_search_key(query: str, limit: int) -> str:
    """Cache key for a trimmed search query: ``lower(query):limit``."""
    return f"{query.lower()}:{limit}"


class AsyncTTLCache(Generic[T]):
    """
    Size-bounded TTL cache with async get-or-compute.

    Usage:
        cache = AsyncTTLCache(max_size=1000, ttl_seconds=180)
        value = await cache.get_or_compute(key, lambda: repo.fetch(...))
    """

    def __init__(
        self,
        max_size: int,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self._store: TTLCache[str, T] = TTLCache(
            maxsize=max_size,
            ttl=ttl_seconds,
            timer=clock,
        )
        self._inflight: Dict[str, "asyncio.Future[T]"] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            self._store.expire()
            return len(self._store)

    # =========================================================
    # LOOKUP
    # =========================================================

    def lookup(self, key: str) -> CacheLookup[T]:
        """Return the live value for ``key``, if any."""
        with self._lock:
            value = self._store.get(key, _MISSING)
        if value is _MISSING:
            return CacheLookup(value=None, present=False)
        return CacheLookup(value=value, present=True)

    async def get_or_compute(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Return the cached value, or compute and cache it.

        Only one ``factory`` call runs per key at a time; other
        callers await the same result. Exceptions propagate to
        every waiter and nothing is cached.
        """
        with self._lock:
            value = self._store.get(key, _MISSING)
            if value is not _MISSING:
                return value

            future = self._inflight.get(key)
            if future is None:
                future = asyncio.ensure_future(self._compute(key, factory))
                future.add_done_callback(_consume_exception)
                self._inflight[key] = future

        return await asyncio.shield(future)

    # =========================================================
    # INVALIDATION
    # =========================================================

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    # =========================================================
    # INTERNALS
    # =========================================================

    async def _compute(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        try:
            value = await factory()
        except BaseException:
            with self._lock:
                self._inflight.pop(key, None)
            raise

        with self._lock:
            self._store[key] = value
            self._inflight.pop(key, None)
        return value


def _consume_exception(future: "asyncio.Future") -> None:
    # Marks the exception as retrieved when every waiter was cancelled
    if not future.cancelled():
        future.exception()
