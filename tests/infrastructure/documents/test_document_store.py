"""Tests for the Redis document store and document repositories"""

import pytest

from src.domain.entities import DepartmentEntity, TenantEntity, UserEntity
from src.domain.entities.notification import PushNotificationEntity
from src.domain.enums import TenantStatus
from src.domain.value_objects import DeviceToken
from src.infrastructure.documents import (DepartmentDocumentRepository,
                                          PushNotificationDocumentRepository,
                                          RedisDocumentStore,
                                          TenantDocumentRepository,
                                          UserDocumentRepository)
from src.infrastructure.exceptions import DocumentStoreUnavailableException
from src.infrastructure.read_models import RedisReadModelStore
from tests.fakes import DEVICE_TOKEN, TEMPLATE_ID, TENANT_ID, FakeRedis


@pytest.fixture
def redis_client():
    return FakeRedis()


@pytest.fixture
def store(redis_client):
    return RedisDocumentStore(redis_client, prefix="test")


class TestRedisDocumentStore:
    async def test_put_get_and_all(self, store, redis_client):
        """Test documents are stored as JSON and listed by id"""
        await store.put("things", "b", {"id": "b", "n": 2})
        await store.put("things", "a", {"id": "a", "n": 1})

        assert await store.get("things", "a") == {"id": "a", "n": 1}
        assert await store.get("things", "missing") is None
        assert [d["id"] for d in await store.all("things")] == ["a", "b"]
        assert redis_client.sets["test:things:_ids"] == {"a", "b"}
        assert await store.all("empty") == []

    async def test_index_moves_with_value(self, store, redis_client):
        """
        GIVEN a document indexed by code
        WHEN it is saved again under a new code
        THEN the old index entry is removed and the new one resolves
        """
        # GIVEN
        await store.put("things", "a", {"id": "a", "code": "old"}, {"code": "old"})

        # WHEN
        await store.put("things", "a", {"id": "a", "code": "new"}, {"code": "new"})

        # THEN
        assert await store.find_by_index("things", "code", "old") is None
        assert (await store.find_by_index("things", "code", "new"))["id"] == "a"
        assert "test:things:_by:code:old" not in redis_client.strings

    async def test_delete_removes_indexes(self, store, redis_client):
        """Test deleting a document leaves no keys behind"""
        await store.put("things", "a", {"id": "a", "code": "x"}, {"code": "x"})

        await store.delete("things", "a", ("code",))

        assert redis_client.strings == {}
        assert redis_client.sets["test:things:_ids"] == set()

    async def test_unavailable_redis(self):
        """Test a missing client raises a dedicated error"""
        store = RedisDocumentStore(None)

        with pytest.raises(DocumentStoreUnavailableException):
            await store.get("things", "a")


class TestDocumentRepositories:
    async def test_tenant_repository(self, store):
        """Test tenants round-trip and unique lookups use the indexes"""
        repo = TenantDocumentRepository(store)
        tenant = TenantEntity.create("Acme Corp", "acme", "acme.example.com", "enterprise")
        other = TenantEntity.create("Globex", "globex", "globex.example.com", "personal")
        other.activate()
        await repo.save(tenant)
        await repo.save(other)

        found = await repo.find_by_id(tenant.id)
        assert found == tenant
        assert (await repo.find_by_domain("ACME.example.com")).id == tenant.id
        assert (await repo.find_by_name("Globex")).id == other.id
        active = await repo.list_tenants(status=TenantStatus.ACTIVE)
        assert [t.id for t in active] == [other.id]

    async def test_user_repository_scoping_and_delete(self, store):
        """Test scoped indexes and their removal on delete"""
        repo = UserDocumentRepository(store)
        user = UserEntity.create(TENANT_ID, "jane", "jane@example.com")
        await repo.save(user)

        assert (await repo.find_by_email(TENANT_ID, "JANE@example.com")).id == user.id
        assert await repo.find_by_username("other", "jane") is None

        await repo.delete(user.id)
        assert await repo.find_by_username(TENANT_ID, "jane") is None
        assert await repo.find_by_id(user.id) is None

    async def test_department_descendants(self, store):
        """Test descendant lookup over the collection"""
        repo = DepartmentDocumentRepository(store)

        def department(code, parent=None):
            return DepartmentEntity.create(
                TENANT_ID, "org-1", f"Dept {code}", code, "technical", "admin-1", parent=parent
            )

        root = department("ENG")
        child = department("PLAT", root)
        grandchild = department("STOR", child)
        for entity in (grandchild, child, root):
            await repo.save(entity)

        assert [d.id for d in await repo.find_descendants(root.path)] == [child.id, grandchild.id]
        assert (await repo.find_by_code("org-1", "STOR")).level == 3

    async def test_push_notification_round_trip(self, store):
        """Test a push notification is restored with its tokens"""
        repo = PushNotificationDocumentRepository(store)
        notification = PushNotificationEntity(
            id="p-1",
            tenant_id=TENANT_ID,
            template_id=TEMPLATE_ID,
            recipients=[DeviceToken(DEVICE_TOKEN)],
            title="Build finished",
            body="Deploy is live",
        )
        notification.mark_as_sent(message_id="m-1", provider="fcm")
        await repo.save(notification)

        assert await repo.find_by_id("p-1") == notification


async def test_redis_read_model_store(store, redis_client):
    """Test read models live in their own namespace and support filters"""
    read_store = RedisReadModelStore(store)
    await read_store.put("user_read_models", "u-1", {"id": "u-1", "tenant_id": "t-1"})
    await read_store.put("user_read_models", "u-2", {"id": "u-2", "tenant_id": "t-2"})

    assert "test:read:user_read_models:u-1" in redis_client.strings
    assert await read_store.find("user_read_models", {"tenant_id": "t-2"}) == [
        {"id": "u-2", "tenant_id": "t-2"}
    ]

    await read_store.delete("user_read_models", "u-1")
    assert await read_store.get("user_read_models", "u-1") is None
