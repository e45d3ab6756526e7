"""Tests for the Redis domain event publisher"""

import json
from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from src.domain.enums import TenantStatus
from src.domain.events import TenantSuspended
from src.infrastructure.messaging.redis_pubsub import (RedisEventPublisher,
                                                       channel_for)
from tests.fakes import FakeRedis


@pytest.fixture
def event():
    return TenantSuspended(
        previous_status=TenantStatus.ACTIVE,
        reason="billing",
        aggregate_id="tenant-1",
        aggregate_type="Tenant",
    )


def test_channel_name():
    """Test channels are namespaced by aggregate type"""
    assert channel_for("Tenant") == "domain_events:Tenant"


async def test_publish_serializes_event(event):
    """Test the event envelope is published as JSON"""
    client = FakeRedis()
    publisher = RedisEventPublisher(client)

    assert await publisher.publish_event(event) is True

    ((channel, message),) = client.published
    assert channel == "domain_events:Tenant"
    body = json.loads(message)
    assert body["event_type"] == "TenantSuspended"
    assert body["payload"] == {"previous_status": "active", "reason": "billing"}


async def test_publish_without_redis(event):
    """Test publishing is skipped when Redis is absent"""
    publisher = RedisEventPublisher(None)

    assert publisher.is_available() is False
    assert await publisher.publish_event(event) is False


async def test_publish_error_is_reported(event):
    """Test Redis errors are reported as False instead of raised"""
    client = AsyncMock()
    client.publish = AsyncMock(side_effect=redis.RedisError("down"))

    assert await RedisEventPublisher(client).publish_event(event) is False
