"""Tests for the fixed-window rate limiter"""

import pytest

from src.infrastructure.rate_limit import (FixedWindowRateLimiter,
                                           InMemoryCounterStore,
                                           RedisCounterStore)
from tests.fakes import FakeRedis


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return FixedWindowRateLimiter(InMemoryCounterStore(clock), limit=3, window_seconds=60, clock=clock)


class TestFixedWindowRateLimiter:
    async def test_exactly_limit_requests_allowed(self, limiter):
        """
        GIVEN a limit of three per window
        WHEN four requests arrive in the same window
        THEN the first three pass and the fourth is refused
        """
        # WHEN
        decisions = [await limiter.hit("client-a") for _ in range(4)]

        # THEN
        assert [d.allowed for d in decisions] == [True, True, True, False]
        assert [d.remaining for d in decisions] == [2, 1, 0, 0]
        assert decisions[-1].limit == 3

    async def test_retry_after_points_at_window_end(self, limiter, clock):
        """Test retry_after counts the seconds left in the window"""
        clock.now = 1_000.0  # window [960, 1020)

        decision = await limiter.hit("client-a")

        assert decision.retry_after == 20

    async def test_new_window_resets(self, limiter, clock):
        """Test a refused client is allowed again in the next window"""
        for _ in range(4):
            await limiter.hit("client-a")

        clock.now += 60
        decision = await limiter.hit("client-a")

        assert decision.allowed
        assert decision.remaining == 2

    async def test_keys_are_independent(self, limiter):
        """Test one client's usage does not affect another"""
        for _ in range(3):
            await limiter.hit("client-a")

        assert (await limiter.hit("client-b")).allowed
        assert not (await limiter.hit("client-a")).allowed

    @pytest.mark.parametrize("limit,window", [(0, 60), (10, 0)])
    def test_invalid_configuration(self, limit, window):
        """Test non-positive limits are rejected"""
        with pytest.raises(ValueError):
            FixedWindowRateLimiter(InMemoryCounterStore(), limit=limit, window_seconds=window)


async def test_in_memory_counters_expire(clock):
    """Test counters disappear once their TTL passes"""
    store = InMemoryCounterStore(clock)
    assert await store.increment("k", 10) == 1
    assert await store.increment("k", 10) == 2

    clock.now += 10
    assert await store.increment("k", 10) == 1


async def test_redis_counter_store():
    """Test INCR and a first-use EXPIRE are issued together"""
    client = FakeRedis()
    store = RedisCounterStore(client)

    assert await store.increment("ratelimit:a:16", 60) == 1
    client.ttls["ratelimit:a:16"] = 42
    assert await store.increment("ratelimit:a:16", 60) == 2

    assert client.strings["ratelimit:a:16"] == "2"
    assert client.ttls["ratelimit:a:16"] == 42
