"""Tests for the in-process event bus"""

from unittest.mock import AsyncMock

import pytest

from src.application.events.event_bus import ALL_EVENTS, EventBus
from src.domain.enums import TenantStatus
from src.domain.events import TenantActivated, TenantDeleted


@pytest.fixture
def bus():
    return EventBus()


def activated(aggregate_id: str = "tenant-1") -> TenantActivated:
    return TenantActivated(
        previous_status=TenantStatus.PENDING,
        aggregate_id=aggregate_id,
        aggregate_type="Tenant",
    )


@pytest.mark.asyncio
async def test_publish_reaches_subscribers_in_order(bus):
    """Test handlers run in subscription order, wildcard handlers last"""
    calls = []

    async def first(event):
        calls.append("first")

    async def second(event):
        calls.append("second")

    async def everything(event):
        calls.append("all")

    bus.subscribe(ALL_EVENTS, everything)
    bus.subscribe(TenantActivated, first)
    bus.subscribe("TenantActivated", second)

    await bus.publish(activated())

    assert calls == ["first", "second", "all"]


@pytest.mark.asyncio
async def test_publish_only_matching_type(bus):
    """Test handlers for other event types are not called"""
    handler = AsyncMock()
    bus.subscribe(TenantDeleted, handler)

    await bus.publish(activated())

    handler.assert_not_called()


@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_delivery(bus):
    """Test a raising handler is logged and later handlers still run"""
    failing = AsyncMock(side_effect=RuntimeError("projection down"))
    healthy = AsyncMock()
    bus.subscribe(TenantActivated, failing)
    bus.subscribe(TenantActivated, healthy)

    event = activated()
    await bus.publish(event)

    failing.assert_awaited_once_with(event)
    healthy.assert_awaited_once_with(event)


@pytest.mark.asyncio
async def test_unsubscribe_and_clear(bus):
    """Test removed handlers receive nothing"""
    handler = AsyncMock()
    bus.subscribe(TenantActivated, handler)
    bus.unsubscribe(TenantActivated, handler)
    bus.unsubscribe(TenantActivated, handler)

    await bus.publish(activated())
    handler.assert_not_called()

    bus.subscribe(ALL_EVENTS, handler)
    bus.clear()
    assert bus.handlers_for("TenantActivated") == []


@pytest.mark.asyncio
async def test_publish_all_preserves_order(bus):
    """Test events are delivered one by one in list order"""
    seen = []

    async def record(event):
        seen.append(event.aggregate_id)

    bus.subscribe(ALL_EVENTS, record)
    await bus.publish_all([activated("a"), activated("b"), activated("c")])

    assert seen == ["a", "b", "c"]


def test_event_to_dict_envelope():
    """Test the serialized event has the envelope and an enum-free payload"""
    event = activated()

    data = event.to_dict()

    assert data["event_type"] == "TenantActivated"
    assert data["aggregate_id"] == "tenant-1"
    assert data["aggregate_type"] == "Tenant"
    assert data["event_version"] == 1
    assert data["payload"] == {"previous_status": "pending"}
    assert set(data) == {
        "event_id",
        "event_type",
        "occurred_at",
        "aggregate_id",
        "aggregate_type",
        "event_version",
        "payload",
    }
