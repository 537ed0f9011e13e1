"""
Tests for the async TTL search cache.
"""

import asyncio

import pytest

from reference_data.search_cache import AsyncTTLCache, make_search_key


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingFactory:
    """Async factory recording how many times it ran."""

    def __init__(self, value=None, error: Exception = None, gate: asyncio.Event = None):
        self.value = value
        self.error = error
        self.gate = gate
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> AsyncTTLCache:
    return AsyncTTLCache(max_size=3, ttl_seconds=180, clock=clock)


class TestSearchKey:

    def test_lower_case_and_limit(self):
        assert make_search_key("PaMp", 10) == "pamp:10"

    def test_case_variants_share_key(self):
        assert make_search_key("YPF", 5) == make_search_key("ypf", 5)

    def test_limit_is_part_of_key(self):
        assert make_search_key("ypf", 5) != make_search_key("ypf", 10)


class TestGetOrCompute:

    @pytest.mark.asyncio
    async def test_computes_once_then_caches(self, cache):
        factory = CountingFactory(value=["PAMP"])

        first = await cache.get_or_compute("pamp:10", factory)
        second = await cache.get_or_compute("pamp:10", factory)

        assert first == ["PAMP"]
        assert second == ["PAMP"]
        assert factory.calls == 1
        assert cache.lookup("pamp:10").present

    @pytest.mark.asyncio
    async def test_none_result_is_cached(self, cache):
        factory = CountingFactory(value=None)

        await cache.get_or_compute("none:10", factory)
        lookup = cache.lookup("none:10")

        assert lookup.present
        assert lookup.value is None
        assert await cache.get_or_compute("none:10", factory) is None
        assert factory.calls == 1

    @pytest.mark.asyncio
    async def test_empty_result_is_cached(self, cache):
        factory = CountingFactory(value=[])

        await cache.get_or_compute("zzz:10", factory)
        await cache.get_or_compute("zzz:10", factory)

        assert factory.calls == 1

    @pytest.mark.asyncio
    async def test_concurrent_misses_share_one_fetch(self, cache):
        gate = asyncio.Event()
        factory = CountingFactory(value=["YPFD"], gate=gate)

        waiters = [asyncio.ensure_future(cache.get_or_compute("ypf:10", factory)) for _ in range(5)]
        await asyncio.sleep(0)
        gate.set()
        results = await asyncio.gather(*waiters)

        assert factory.calls == 1
        assert results == [["YPFD"]] * 5

    @pytest.mark.asyncio
    async def test_failure_not_cached(self, cache):
        failing = CountingFactory(error=RuntimeError("db down"))

        with pytest.raises(RuntimeError, match="db down"):
            await cache.get_or_compute("pamp:10", failing)

        assert not cache.lookup("pamp:10").present

        recovered = CountingFactory(value=["PAMP"])
        assert await cache.get_or_compute("pamp:10", recovered) == ["PAMP"]
        assert recovered.calls == 1

    @pytest.mark.asyncio
    async def test_failure_reaches_every_waiter(self, cache):
        gate = asyncio.Event()
        factory = CountingFactory(error=RuntimeError("boom"), gate=gate)

        waiters = [asyncio.ensure_future(cache.get_or_compute("k", factory)) for _ in range(3)]
        await asyncio.sleep(0)
        gate.set()
        results = await asyncio.gather(*waiters, return_exceptions=True)

        assert factory.calls == 1
        assert all(isinstance(r, RuntimeError) for r in results)

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_fetch(self, cache):
        gate = asyncio.Event()
        factory = CountingFactory(value=["GGAL"], gate=gate)

        cancelled_waiter = asyncio.ensure_future(cache.get_or_compute("ggal:10", factory))
        other_waiter = asyncio.ensure_future(cache.get_or_compute("ggal:10", factory))
        await asyncio.sleep(0)

        cancelled_waiter.cancel()
        gate.set()

        assert await other_waiter == ["GGAL"]
        assert cancelled_waiter.cancelled()
        assert factory.calls == 1
        assert cache.lookup("ggal:10").present


class TestExpiryAndEviction:

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self, cache, clock):
        factory = CountingFactory(value=["PAMP"])
        await cache.get_or_compute("pamp:10", factory)

        clock.advance(179)
        assert cache.lookup("pamp:10").present

        clock.advance(1)
        assert not cache.lookup("pamp:10").present

        await cache.get_or_compute("pamp:10", factory)
        assert factory.calls == 2

    @pytest.mark.asyncio
    async def test_least_recently_used_evicted(self, cache):
        for key in ("a", "b", "c"):
            await cache.get_or_compute(key, CountingFactory(value=key))

        # Touch "a" so "b" becomes the oldest
        assert cache.lookup("a").present
        await cache.get_or_compute("d", CountingFactory(value="d"))

        assert len(cache) == 3
        assert not cache.lookup("b").present
        assert cache.lookup("a").present
        assert cache.lookup("d").present

    @pytest.mark.asyncio
    async def test_invalidate_and_clear(self, cache):
        await cache.get_or_compute("a", CountingFactory(value=1))
        await cache.get_or_compute("b", CountingFactory(value=2))

        cache.invalidate("a")
        assert not cache.lookup("a").present
        assert len(cache) == 1

        cache.clear()
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_expired_entries_not_counted(self, cache, clock):
        await cache.get_or_compute("a", CountingFactory(value=1))
        clock.advance(100)
        await cache.get_or_compute("b", CountingFactory(value=2))

        clock.advance(80)

        assert len(cache) == 1
        assert cache.lookup("b").present

    @pytest.mark.asyncio
    async def test_expired_entry_frees_slot_before_eviction(self, cache, clock):
        await cache.get_or_compute("a", CountingFactory(value=1))
        clock.advance(100)
        await cache.get_or_compute("b", CountingFactory(value=2))
        await cache.get_or_compute("c", CountingFactory(value=3))

        clock.advance(80)
        await cache.get_or_compute("d", CountingFactory(value=4))

        assert not cache.lookup("a").present
        assert all(cache.lookup(key).present for key in ("b", "c", "d"))

    @pytest.mark.parametrize("max_size,ttl", [(0, 10), (10, 0)])
    def test_rejects_invalid_bounds(self, max_size, ttl):
        with pytest.raises(ValueError):
            AsyncTTLCache(max_size=max_size, ttl_seconds=ttl)
