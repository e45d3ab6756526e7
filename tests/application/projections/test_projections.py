"""Tests for read-side projections wired through the event bus"""

import pytest

from src.application.events.event_bus import EventBus
from src.application.projections import (NOTIFICATION_STATS, TENANT_SUMMARIES,
                                         USER_READ_MODELS,
                                         register_projections)
from src.domain.aggregates import (CreateEmailNotificationCommand,
                                   EmailNotificationAggregate,
                                   FailNotificationCommand,
                                   SendNotificationCommand)
from src.domain.entities import TenantEntity, UserEntity
from src.infrastructure.read_models import InMemoryReadModelStore
from tests.fakes import TEMPLATE_ID, TENANT_ID, InMemoryRepository


@pytest.fixture
def store():
    return InMemoryReadModelStore()


@pytest.fixture
def bus(store):
    bus = EventBus()
    register_projections(bus, store)
    return bus


class TestTenantProjection:
    async def test_summary_follows_lifecycle(self, bus, store):
        """
        GIVEN a created tenant
        WHEN it is activated and its config changes
        THEN the summary tracks status and config keys
        """
        # GIVEN
        tenant = TenantEntity.create("Acme Corp", "acme", "acme.com", "enterprise")
        await bus.publish_all(tenant.collect_domain_events())

        # WHEN
        tenant.activate()
        tenant.update_config({"theme": "dark", "language": "en"})
        await bus.publish_all(tenant.collect_domain_events())

        # THEN
        summary = await store.get(TENANT_SUMMARIES, tenant.id)
        assert summary["status"] == "active"
        assert summary["type"] == "enterprise"
        assert summary["config_keys"] == ["language", "theme"]
        assert summary["code"] == "acme"

    async def test_missing_summary_is_skipped(self, bus, store):
        """Test events for an unknown tenant do not create a summary"""
        tenant = TenantEntity.create("Acme Corp", "acme", "acme.com", "enterprise")
        tenant.collect_domain_events()
        tenant.activate()

        await bus.publish_all(tenant.collect_domain_events())

        assert await store.get(TENANT_SUMMARIES, tenant.id) is None


class TestUserProjection:
    async def test_user_document_lifecycle(self, bus, store):
        """Test creation, profile change, status change and hard delete"""
        user = UserEntity.create(TENANT_ID, "jane", "jane@example.com", display_name="Jane")
        await bus.publish_all(user.collect_domain_events())

        user.update_profile(email="jd@example.com")
        user.activate()
        await bus.publish_all(user.collect_domain_events())

        document = await store.get(USER_READ_MODELS, user.id)
        assert document["email"] == "jd@example.com"
        assert document["status"] == "active"
        assert document["tenant_id"] == TENANT_ID

        user.delete(hard=True)
        await bus.publish_all(user.collect_domain_events())
        assert await store.get(USER_READ_MODELS, user.id) is None

    async def test_soft_delete_keeps_document(self, bus, store):
        """Test a soft delete marks the document as deleted"""
        user = UserEntity.create(TENANT_ID, "jane", "jane@example.com")
        user.delete()
        await bus.publish_all(user.collect_domain_events())

        document = await store.get(USER_READ_MODELS, user.id)
        assert document["status"] == "deleted"


class TestNotificationProjection:
    async def test_counters_move_with_status(self, bus, store):
        """
        GIVEN three email notifications
        WHEN one is sent, one fails and is retried, one is cancelled and deleted
        THEN counters sum to the live notifications
        """
        repository = InMemoryRepository()
        command = CreateEmailNotificationCommand(
            tenant_id=TENANT_ID,
            template_id=TEMPLATE_ID,
            recipients=["jane@example.com"],
            subject="Hello",
            text_content="Hi",
        )
        ids = []
        for _ in range(3):
            aggregate = EmailNotificationAggregate(repository)
            ids.append((await aggregate.create(command)).id)
            await bus.publish_all(aggregate.collect_domain_events())

        async def run(notification_id, operation):
            aggregate = EmailNotificationAggregate(repository)
            await aggregate.load(notification_id)
            await operation(aggregate)
            await bus.publish_all(aggregate.collect_domain_events())

        await run(ids[0], lambda a: a.send(SendNotificationCommand()))
        await run(ids[1], lambda a: a.fail(FailNotificationCommand("TIMEOUT", "late")))
        await run(ids[1], lambda a: a.retry())
        await run(ids[2], lambda a: a.cancel())
        await run(ids[2], lambda a: a.delete())

        stats = await store.get(NOTIFICATION_STATS, TENANT_ID)
        assert stats == {
            "tenant_id": TENANT_ID,
            "total": 2,
            "pending": 1,
            "sent": 1,
            "failed": 0,
            "cancelled": 0,
            "retries": 1,
        }
