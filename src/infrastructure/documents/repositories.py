"""
Document-backed implementations of the domain repository ports.

Each aggregate type is one collection; unique finders go through the
store's secondary indexes, everything else filters the full collection.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from src.domain.entities.department import DepartmentEntity
from src.domain.entities.notification import (EmailNotificationEntity,
                                              PushNotificationEntity,
                                              SmsNotificationEntity,
                                              WebhookNotificationEntity)
from src.domain.entities.organization import OrganizationEntity
from src.domain.entities.platform import PlatformEntity
from src.domain.entities.template import TemplateEntity
from src.domain.entities.tenant import TenantEntity
from src.domain.entities.user import UserEntity
from src.domain.enums import TemplateStatus, TemplateType, TenantStatus
from src.infrastructure.documents.store import Document, RedisDocumentStore
from src.infrastructure.persistence.mappers.base import Mapper
from src.infrastructure.persistence.mappers.notification import (
    EmailNotificationDocumentMapper, PushNotificationDocumentMapper,
    SmsNotificationDocumentMapper, WebhookNotificationDocumentMapper)
from src.infrastructure.persistence.mappers.organization import (
    DepartmentDocumentMapper, OrganizationDocumentMapper)
from src.infrastructure.persistence.mappers.platform import \
    PlatformDocumentMapper
from src.infrastructure.persistence.mappers.template import \
    TemplateDocumentMapper
from src.infrastructure.persistence.mappers.tenant import TenantDocumentMapper
from src.infrastructure.persistence.mappers.user import UserDocumentMapper

EntityType = TypeVar("EntityType")


def _scoped(*parts: str) -> str:
    return "|".join(parts)


class DocumentRepository(Generic[EntityType]):
    collection: str
    # Unique secondary indexes: field name -> value extractor over the document
    indexes: dict[str, Callable[[Document], str]] = {}

    def __init__(self, store: RedisDocumentStore, mapper: Mapper[Document, EntityType]):
        self.store = store
        self.mapper = mapper

    async def save(self, entity: EntityType) -> None:
        document = self.mapper.to_persistence(entity)
        indexes = {field: extract(document) for field, extract in self.indexes.items()}
        await self.store.put(self.collection, document["id"], document, indexes)

    async def find_by_id(self, entity_id: str) -> EntityType | None:
        document = await self.store.get(self.collection, entity_id)
        return self.mapper.to_domain(document) if document is not None else None

    async def delete(self, entity_id: str) -> None:
        await self.store.delete(self.collection, entity_id, tuple(self.indexes))

    async def find_all(self) -> list[EntityType]:
        return self.mapper.to_domain_many(await self.store.all(self.collection))

    async def after_commit(self, callback: Callable[[], Awaitable[None]]) -> None:
        # Each document write is durable on its own
        await callback()

    async def _find_indexed(self, field: str, value: str) -> EntityType | None:
        document = await self.store.find_by_index(self.collection, field, value)
        return self.mapper.to_domain(document) if document is not None else None

    async def _find_where(self, predicate: Callable[[Document], bool]) -> list[Document]:
        return [d for d in await self.store.all(self.collection) if predicate(d)]


class TenantDocumentRepository(DocumentRepository[TenantEntity]):
    collection = "tenants"
    indexes = {
        "code": lambda d: d["code"],
        "domain": lambda d: d["domain"],
        "name": lambda d: d["name"],
    }

    def __init__(self, store: RedisDocumentStore):
        super().__init__(store, TenantDocumentMapper())

    async def find_by_code(self, code: str) -> TenantEntity | None:
        return await self._find_indexed("code", code)

    async def find_by_domain(self, domain: str) -> TenantEntity | None:
        return await self._find_indexed("domain", domain.lower())

    async def find_by_name(self, name: str) -> TenantEntity | None:
        return await self._find_indexed("name", name)

    async def list_tenants(
        self, status: TenantStatus | None = None, limit: int = 100, offset: int = 0
    ) -> list[TenantEntity]:
        documents = await self._find_where(
            lambda d: status is None or d["status"] == status.value
        )
        documents.sort(key=lambda d: (d["created_at"], d["id"]))
        return self.mapper.to_domain_many(documents[offset : offset + limit])


class OrganizationDocumentRepository(DocumentRepository[OrganizationEntity]):
    collection = "organizations"
    indexes = {"tenant_code": lambda d: _scoped(d["tenant_id"], d["code"])}

    def __init__(self, store: RedisDocumentStore):
        super().__init__(store, OrganizationDocumentMapper())

    async def find_by_code(self, tenant_id: str, code: str) -> OrganizationEntity | None:
        return await self._find_indexed("tenant_code", _scoped(tenant_id, code))


class DepartmentDocumentRepository(DocumentRepository[DepartmentEntity]):
    collection = "departments"
    indexes = {"organization_code": lambda d: _scoped(d["organization_id"], d["code"])}

    def __init__(self, store: RedisDocumentStore):
        super().__init__(store, DepartmentDocumentMapper())

    async def find_by_code(self, organization_id: str, code: str) -> DepartmentEntity | None:
        return await self._find_indexed("organization_code", _scoped(organization_id, code))

    async def find_descendants(self, path: str) -> list[DepartmentEntity]:
        documents = await self._find_where(lambda d: d["path"].startswith(path + "/"))
        documents.sort(key=lambda d: d["level"])
        return self.mapper.to_domain_many(documents)


class UserDocumentRepository(DocumentRepository[UserEntity]):
    collection = "users"
    indexes = {
        "tenant_username": lambda d: _scoped(d["tenant_id"], d["username"]),
        "tenant_email": lambda d: _scoped(d["tenant_id"], d["email"]),
    }

    def __init__(self, store: RedisDocumentStore):
        super().__init__(store, UserDocumentMapper())

    async def find_by_username(self, tenant_id: str, username: str) -> UserEntity | None:
        return await self._find_indexed("tenant_username", _scoped(tenant_id, username))

    async def find_by_email(self, tenant_id: str, email: str) -> UserEntity | None:
        return await self._find_indexed("tenant_email", _scoped(tenant_id, email.lower()))


class PlatformDocumentRepository(DocumentRepository[PlatformEntity]):
    collection = "platforms"
    indexes = {"name": lambda d: d["name"]}

    def __init__(self, store: RedisDocumentStore):
        super().__init__(store, PlatformDocumentMapper())

    async def find_by_name(self, name: str) -> PlatformEntity | None:
        return await self._find_indexed("name", name)


class EmailNotificationDocumentRepository(DocumentRepository[EmailNotificationEntity]):
    collection = "email_notifications"

    def __init__(self, store: RedisDocumentStore):
        super().__init__(store, EmailNotificationDocumentMapper())


class PushNotificationDocumentRepository(DocumentRepository[PushNotificationEntity]):
    collection = "push_notifications"

    def __init__(self, store: RedisDocumentStore):
        super().__init__(store, PushNotificationDocumentMapper())


class SmsNotificationDocumentRepository(DocumentRepository[SmsNotificationEntity]):
    collection = "sms_notifications"

    def __init__(self, store: RedisDocumentStore):
        super().__init__(store, SmsNotificationDocumentMapper())


class WebhookNotificationDocumentRepository(DocumentRepository[WebhookNotificationEntity]):
    collection = "webhook_notifications"

    def __init__(self, store: RedisDocumentStore):
        super().__init__(store, WebhookNotificationDocumentMapper())


class TemplateDocumentRepository(DocumentRepository[TemplateEntity]):
    collection = "templates"
    indexes = {"tenant_name": lambda d: _scoped(d["tenant_id"], d["name"])}

    def __init__(self, store: RedisDocumentStore):
        super().__init__(store, TemplateDocumentMapper())

    async def find_by_name(self, tenant_id: str, name: str) -> TemplateEntity | None:
        return await self._find_indexed("tenant_name", _scoped(tenant_id, name))

    async def list_templates(
        self,
        tenant_id: str,
        status: TemplateStatus | None = None,
        template_type: TemplateType | None = None,
    ) -> list[TemplateEntity]:
        documents = await self._find_where(
            lambda d: d["tenant_id"] == tenant_id
            and (status is None or d["status"] == status.value)
            and (template_type is None or d["type"] == template_type.value)
        )
        documents.sort(key=lambda d: d["name"])
        return self.mapper.to_domain_many(documents)
