"""
Repository ports.

Each aggregate is persisted through a save/find_by_id/delete contract that
both the relational and the document adapters implement. Following
Dependency Inversion Principle (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from src.domain.entities import (DepartmentEntity, EmailNotificationEntity,
                                 OrganizationEntity, PlatformEntity,
                                 PushNotificationEntity, SmsNotificationEntity,
                                 TemplateEntity, TenantEntity, UserEntity,
                                 WebhookNotificationEntity)
from src.domain.enums import TemplateStatus, TemplateType, TenantStatus

EntityT = TypeVar("EntityT")


class Repository(Protocol[EntityT]):
    """Persistence port shared by every aggregate"""

    async def save(self, entity: EntityT) -> None:
        """Insert or update the entity's current state"""
        ...

    async def find_by_id(self, entity_id: str) -> EntityT | None:
        ...

    async def delete(self, entity_id: str) -> None:
        ...

    async def find_all(self) -> list[EntityT]:
        """Every stored aggregate, used to rebuild read models"""
        ...

    async def after_commit(self, callback: Callable[[], Awaitable[None]]) -> None:
        """Run callback once the current unit of work is durable"""
        ...


class TenantRepositoryPort(Repository[TenantEntity], Protocol):
    async def find_by_code(self, code: str) -> TenantEntity | None: ...

    async def find_by_domain(self, domain: str) -> TenantEntity | None: ...

    async def find_by_name(self, name: str) -> TenantEntity | None: ...

    async def list_tenants(
        self, status: TenantStatus | None = None, limit: int = 100, offset: int = 0
    ) -> list[TenantEntity]: ...


class OrganizationRepositoryPort(Repository[OrganizationEntity], Protocol):
    async def find_by_code(self, tenant_id: str, code: str) -> OrganizationEntity | None: ...


class DepartmentRepositoryPort(Repository[DepartmentEntity], Protocol):
    async def find_by_code(
        self, organization_id: str, code: str
    ) -> DepartmentEntity | None: ...

    async def find_descendants(self, path: str) -> list[DepartmentEntity]: ...


class UserRepositoryPort(Repository[UserEntity], Protocol):
    async def find_by_username(self, tenant_id: str, username: str) -> UserEntity | None: ...

    async def find_by_email(self, tenant_id: str, email: str) -> UserEntity | None: ...


class PlatformRepositoryPort(Repository[PlatformEntity], Protocol):
    async def find_by_name(self, name: str) -> PlatformEntity | None: ...


class EmailNotificationRepositoryPort(Repository[EmailNotificationEntity], Protocol):
    pass


class PushNotificationRepositoryPort(Repository[PushNotificationEntity], Protocol):
    pass


class SmsNotificationRepositoryPort(Repository[SmsNotificationEntity], Protocol):
    pass


class WebhookNotificationRepositoryPort(Repository[WebhookNotificationEntity], Protocol):
    pass


class TemplateRepositoryPort(Repository[TemplateEntity], Protocol):
    async def find_by_name(self, tenant_id: str, name: str) -> TemplateEntity | None: ...

    async def list_templates(
        self,
        tenant_id: str,
        status: TemplateStatus | None = None,
        template_type: TemplateType | None = None,
    ) -> list[TemplateEntity]: ...
