"""Tests for rebuilding read models from the repositories"""

import pytest

from src.application.events.event_bus import EventBus
from src.application.projections import (NOTIFICATION_STATS, TENANT_SUMMARIES,
                                         USER_READ_MODELS, ReadModelRebuilder,
                                         register_projections)
from src.domain.aggregates import (CreateEmailNotificationCommand,
                                   EmailNotificationAggregate,
                                   FailNotificationCommand,
                                   SendNotificationCommand)
from src.domain.entities import TenantEntity, UserEntity
from src.infrastructure.config.settings import get_settings
from src.infrastructure.documents import RedisDocumentStore
from src.infrastructure.persistence.repositories import (TenantRepository,
                                                         UserRepository)
from src.infrastructure.read_models import InMemoryReadModelStore
from src.presentation.api.dependencies import build_read_model_rebuilder
from tests.fakes import (TEMPLATE_ID, TENANT_ID, FakeRedis,
                         InMemoryRepository, InMemoryTenantRepository,
                         InMemoryUserRepository)


@pytest.fixture
def tenant_repo():
    return InMemoryTenantRepository()


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def notification_repo():
    return InMemoryRepository()


@pytest.fixture
def live_store():
    return InMemoryReadModelStore()


@pytest.fixture
def bus(live_store):
    bus = EventBus()
    register_projections(bus, live_store)
    return bus


async def record(bus, repository, entity):
    await repository.save(entity)
    await bus.publish_all(entity.collect_domain_events())


async def seed(bus, tenant_repo, user_repo, notification_repo):
    tenant = TenantEntity.create("Acme Corp", "acme", "acme.com", "enterprise")
    tenant.activate()
    tenant.update_config({"theme": "dark"})
    await record(bus, tenant_repo, tenant)

    jane = UserEntity.create(tenant_id=tenant.id, username="jane", email="jane@acme.com")
    jane.activate()
    await record(bus, user_repo, jane)
    john = UserEntity.create(tenant_id=tenant.id, username="john", email="john@acme.com")
    john.delete()
    await record(bus, user_repo, john)

    command = CreateEmailNotificationCommand(
        tenant_id=TENANT_ID,
        template_id=TEMPLATE_ID,
        recipients=["jane@example.com"],
        subject="Hello",
        text_content="Hi",
    )
    ids = []
    for _ in range(3):
        aggregate = EmailNotificationAggregate(notification_repo)
        ids.append((await aggregate.create(command)).id)
        await bus.publish_all(aggregate.collect_domain_events())

    async def run(notification_id, operation):
        aggregate = EmailNotificationAggregate(notification_repo)
        await aggregate.load(notification_id)
        await operation(aggregate)
        await bus.publish_all(aggregate.collect_domain_events())

    await run(ids[0], lambda a: a.send(SendNotificationCommand()))
    await run(ids[1], lambda a: a.fail(FailNotificationCommand("TIMEOUT", "late")))
    await run(ids[1], lambda a: a.retry())
    await run(ids[2], lambda a: a.cancel())
    return tenant


async def test_rebuild_matches_live_projections(bus, live_store, tenant_repo, user_repo, notification_repo):
    """
    GIVEN tenants, users and notifications recorded through the projections
    WHEN an empty store is rebuilt from the repositories
    THEN every read model equals the one the live projections produced
    """
    # GIVEN
    tenant = await seed(bus, tenant_repo, user_repo, notification_repo)
    rebuilt = InMemoryReadModelStore()

    # WHEN
    counts = await ReadModelRebuilder(rebuilt, tenant_repo, user_repo, [notification_repo]).rebuild()

    # THEN
    assert counts == {TENANT_SUMMARIES: 1, USER_READ_MODELS: 2, NOTIFICATION_STATS: 1}
    live_summary = await live_store.get(TENANT_SUMMARIES, tenant.id)
    rebuilt_summary = await rebuilt.get(TENANT_SUMMARIES, tenant.id)
    assert {k: v for k, v in rebuilt_summary.items() if k != "last_event_at"} == {
        k: v for k, v in live_summary.items() if k != "last_event_at"
    }
    for document in await live_store.find(USER_READ_MODELS):
        rebuilt_user = await rebuilt.get(USER_READ_MODELS, document["id"])
        assert rebuilt_user["status"] == document["status"]
        assert rebuilt_user["email"] == document["email"]
    assert await rebuilt.get(NOTIFICATION_STATS, TENANT_ID) == await live_store.get(
        NOTIFICATION_STATS, TENANT_ID
    )


async def test_rebuild_drops_stale_documents(tenant_repo, user_repo, notification_repo):
    """Test documents with no backing record are removed"""
    store = InMemoryReadModelStore()
    await store.put(USER_READ_MODELS, "gone", {"id": "gone", "status": "active"})
    await store.put(NOTIFICATION_STATS, "old-tenant", {"tenant_id": "old-tenant", "total": 4})

    await ReadModelRebuilder(store, tenant_repo, user_repo, [notification_repo]).rebuild()

    assert await store.get(USER_READ_MODELS, "gone") is None
    assert await store.get(NOTIFICATION_STATS, "old-tenant") is None


async def test_relational_rebuilder(test_db):
    """Test the startup rebuilder reads the relational repositories"""
    tenant = TenantEntity.create("Acme Corp", "acme", "acme.com", "enterprise")
    await TenantRepository(test_db).save(tenant)
    await UserRepository(test_db).save(
        UserEntity.create(tenant_id=tenant.id, username="jane", email="jane@acme.com")
    )
    store = InMemoryReadModelStore()

    rebuilder = build_read_model_rebuilder(
        store, get_settings(), test_db, RedisDocumentStore(FakeRedis(), "test")
    )
    await rebuilder.rebuild()

    assert (await store.get(TENANT_SUMMARIES, tenant.id))["code"] == "acme"
    (user,) = await store.find(USER_READ_MODELS, {"tenant_id": tenant.id})
    assert user["username"] == "jane"
