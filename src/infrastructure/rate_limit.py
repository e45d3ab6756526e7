"""
Fixed-window rate limiting.

Counters live behind the CounterStore protocol (process memory or Redis)
and time comes from an injected clock, so windows are deterministic under
test. Each (key, window index) pair gets its own counter that expires with
the window.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import redis.asyncio as redis

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class CounterStore(Protocol):
    async def increment(self, key: str, ttl_seconds: int) -> int:
        """Increment key, setting its expiry on first use; returns the new count"""
        ...


class InMemoryCounterStore:
    def __init__(self, clock: Clock = time.time) -> None:
        self.clock = clock
        self._counters: dict[str, tuple[int, float]] = {}

    async def increment(self, key: str, ttl_seconds: int) -> int:
        now = self.clock()
        self._evict_expired(now)
        count, expires_at = self._counters.get(key, (0, now + ttl_seconds))
        self._counters[key] = (count + 1, expires_at)
        return count + 1

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._counters.items() if expires_at <= now]
        for key in expired:
            del self._counters[key]


class RedisCounterStore:
    """INCR + EXPIRE in one transaction"""

    def __init__(self, redis_client: redis.Redis) -> None:
        self.redis = redis_client

    async def increment(self, key: str, ttl_seconds: int) -> int:
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.incr(key)
            pipe.expire(key, ttl_seconds, nx=True)
            count, _ = await pipe.execute()
        return int(count)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after: int


class FixedWindowRateLimiter:
    def __init__(
        self,
        store: CounterStore,
        limit: int = 100,
        window_seconds: int = 60,
        clock: Clock = time.time,
    ) -> None:
        if limit <= 0 or window_seconds <= 0:
            raise ValueError("limit and window_seconds must be positive")
        self.store = store
        self.limit = limit
        self.window_seconds = window_seconds
        self.clock = clock

    async def hit(self, key: str) -> RateLimitDecision:
        """Count one request for key in the current window"""
        now = self.clock()
        window = int(now // self.window_seconds)
        window_end = (window + 1) * self.window_seconds

        count = await self.store.increment(f"ratelimit:{key}:{window}", self.window_seconds)
        retry_after = max(1, int(window_end - now))
        allowed = count <= self.limit
        if not allowed:
            logger.warning(f"Rate limit exceeded for {key}: {count}/{self.limit}")
        return RateLimitDecision(
            allowed=allowed,
            limit=self.limit,
            remaining=max(0, self.limit - count),
            retry_after=retry_after,
        )
