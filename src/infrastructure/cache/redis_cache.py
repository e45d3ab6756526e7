"""Redis connection owner and JSON cache helpers"""
from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import redis.asyncio as redis

if TYPE_CHECKING:
    from src.infrastructure.config.settings import Settings

logger = logging.getLogger(__name__)


class CacheService:
    """
    Async Redis client holder with JSON get/set/delete and TTL support.

    The connection opened here is shared by the document store, the Redis
    read-model store, the event publisher and the rate-limit counters.
    Cache operations degrade to misses when Redis is unreachable.
    """

    def __init__(self, settings: Settings, redis_client: redis.Redis | None = None):
        self.settings = settings
        self.redis = redis_client
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection (call on app startup)"""
        if not self.settings.redis_enabled or self.redis is not None:
            return
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=self.settings.redis_password or None,
            max_connections=self.settings.redis_max_connections,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning(f"Redis connection failed: {e}. Caching disabled.")
            await client.aclose()
            return
        self.redis = client
        self._connected = True
        logger.info(f"Redis connected: {self.settings.redis_host}:{self.settings.redis_port}")

    async def disconnect(self) -> None:
        """Close Redis connection (call on app shutdown)"""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis disconnected")

    def is_available(self) -> bool:
        return self._connected and self.redis is not None

    async def get(self, key: str) -> Any | None:
        """Cached value (deserialized from JSON) or None if missing/unavailable"""
        if not self.is_available() or self.redis is None:
            return None
        try:
            value = await self.redis.get(key)
        except redis.RedisError as e:
            logger.error(f"Cache get error for key {key}: {e}")
            return None
        if value is None:
            logger.debug(f"Cache MISS: {key}")
            return None
        logger.debug(f"Cache HIT: {key}")
        return json.loads(value)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        if not self.is_available() or self.redis is None:
            return False
        try:
            await self.redis.setex(key, ttl, json.dumps(value))
        except redis.RedisError as e:
            logger.error(f"Cache set error for key {key}: {e}")
            return False
        logger.debug(f"Cache SET: {key} (TTL: {ttl}s)")
        return True

    async def delete(self, *keys: str) -> bool:
        if not self.is_available() or self.redis is None or not keys:
            return False
        try:
            await self.redis.delete(*keys)
        except redis.RedisError as e:
            logger.error(f"Cache delete error for keys {keys}: {e}")
            return False
        logger.debug(f"Cache DELETE: {', '.join(keys)}")
        return True
