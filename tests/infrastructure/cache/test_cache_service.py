"""Tests for Redis cache service"""

import json
from unittest.mock import AsyncMock, patch

import pytest
import redis.asyncio as redis

from src.infrastructure.cache.redis_cache import CacheService
from src.infrastructure.config.settings import Settings


@pytest.fixture
def settings():
    return Settings(redis_enabled=True)


@pytest.fixture
async def cache_service(settings):
    """Create cache service with mock Redis client"""
    return CacheService(settings, AsyncMock())


@pytest.fixture
async def disconnected_cache(settings):
    """Create disconnected cache service"""
    return CacheService(settings)


@pytest.mark.asyncio
async def test_cache_get_hit(cache_service):
    """Test cache get when key exists"""
    cache_service.redis.get = AsyncMock(return_value='{"id": "t-1", "code": "acme"}')

    result = await cache_service.get("tenant:id:t-1")

    assert result == {"id": "t-1", "code": "acme"}
    cache_service.redis.get.assert_called_once_with("tenant:id:t-1")


@pytest.mark.asyncio
async def test_cache_get_miss(cache_service):
    """Test cache get when key doesn't exist"""
    cache_service.redis.get = AsyncMock(return_value=None)

    result = await cache_service.get("missing_key")

    assert result is None
    cache_service.redis.get.assert_called_once_with("missing_key")


@pytest.mark.asyncio
async def test_cache_set_success(cache_service):
    """Test successful cache set"""
    cache_service.redis.setex = AsyncMock()

    data = {"id": "t-1", "config": {"theme": "dark"}}
    result = await cache_service.set("tenant:id:t-1", data, ttl=900)

    assert result is True
    key, ttl, payload = cache_service.redis.setex.call_args[0]
    assert key == "tenant:id:t-1"
    assert ttl == 900
    assert json.loads(payload) == data


@pytest.mark.asyncio
async def test_cache_default_ttl(cache_service):
    """Test the default TTL is 300 seconds"""
    cache_service.redis.setex = AsyncMock()

    await cache_service.set("key1", {"data": 1})

    assert cache_service.redis.setex.call_args[0][1] == 300


@pytest.mark.asyncio
async def test_cache_delete_many(cache_service):
    """Test several keys are deleted in one call"""
    cache_service.redis.delete = AsyncMock()

    result = await cache_service.delete("tenant:id:t-1", "tenant:code:acme")

    assert result is True
    cache_service.redis.delete.assert_called_once_with("tenant:id:t-1", "tenant:code:acme")


@pytest.mark.asyncio
async def test_cache_delete_without_keys(cache_service):
    """Test delete with no keys is a no-op"""
    assert await cache_service.delete() is False
    cache_service.redis.delete.assert_not_called()


@pytest.mark.asyncio
async def test_cache_unavailable(disconnected_cache):
    """Test an unavailable cache reports misses and failed writes"""
    assert disconnected_cache.is_available() is False
    assert await disconnected_cache.get("any_key") is None
    assert await disconnected_cache.set("any_key", {"data": "value"}) is False
    assert await disconnected_cache.delete("any_key") is False


@pytest.mark.asyncio
async def test_cache_errors_degrade(cache_service):
    """Test Redis errors on get and set are swallowed into a miss or False"""
    cache_service.redis.get = AsyncMock(side_effect=redis.RedisError("boom"))
    cache_service.redis.setex = AsyncMock(side_effect=redis.RedisError("boom"))

    assert await cache_service.get("test_key") is None
    assert await cache_service.set("test_key", {"data": "value"}) is False


@pytest.mark.asyncio
async def test_cache_connect_success(settings):
    """Test successful cache connection"""
    with patch("redis.asyncio.Redis") as mock_redis_class:
        mock_client = AsyncMock()
        mock_redis_class.return_value = mock_client

        cache = CacheService(settings)
        await cache.connect()

        assert cache.is_available() is True
        mock_client.ping.assert_called_once()


@pytest.mark.asyncio
async def test_cache_connect_failure(settings):
    """Test cache connection failure"""
    with patch("redis.asyncio.Redis") as mock_redis_class:
        mock_client = AsyncMock()
        mock_client.ping = AsyncMock(side_effect=redis.ConnectionError("Connection refused"))
        mock_redis_class.return_value = mock_client

        cache = CacheService(settings)
        await cache.connect()

        assert cache.is_available() is False
        assert cache.redis is None
        mock_client.aclose.assert_called_once()


@pytest.mark.asyncio
async def test_cache_connect_disabled():
    """Test connect does nothing when Redis is disabled"""
    with patch("redis.asyncio.Redis") as mock_redis_class:
        cache = CacheService(Settings(redis_enabled=False))
        await cache.connect()

        mock_redis_class.assert_not_called()
        assert cache.is_available() is False


@pytest.mark.asyncio
async def test_cache_disconnect(cache_service):
    """Test cache disconnection"""
    client = cache_service.redis

    await cache_service.disconnect()

    client.aclose.assert_called_once()
    assert cache_service.is_available() is False
