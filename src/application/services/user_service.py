"""User use cases; username and email are unique per tenant."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from src.application.services.base import ApplicationService
from src.application.services.results import OperationResult
from src.domain.entities.user import UserEntity
from src.domain.exceptions import (DuplicateResourceException,
                                   ResourceNotFoundException)

if TYPE_CHECKING:
    from src.application.events.event_bus import EventBus
    from src.domain.repositories import (DepartmentRepositoryPort,
                                         OrganizationRepositoryPort,
                                         TenantRepositoryPort,
                                         UserRepositoryPort)

logger = logging.getLogger(__name__)


class UserService(ApplicationService):
    def __init__(
        self,
        user_repo: UserRepositoryPort,
        tenant_repo: TenantRepositoryPort,
        organization_repo: OrganizationRepositoryPort,
        department_repo: DepartmentRepositoryPort,
        event_bus: EventBus | None = None,
    ) -> None:
        super().__init__(event_bus)
        self.user_repo = user_repo
        self.tenant_repo = tenant_repo
        self.organization_repo = organization_repo
        self.department_repo = department_repo

    async def create(
        self,
        tenant_id: str,
        username: str,
        email: str,
        display_name: str | None = None,
        organization_id: str | None = None,
        department_id: str | None = None,
        created_by: str | None = None,
    ) -> OperationResult[UserEntity]:
        user = UserEntity.create(
            tenant_id=tenant_id,
            username=username,
            email=email,
            created_by=self.actor(created_by),
            display_name=display_name,
            organization_id=organization_id,
            department_id=department_id,
        )
        if await self.tenant_repo.find_by_id(tenant_id) is None:
            raise ResourceNotFoundException("Tenant", tenant_id)
        await self._ensure_placement(tenant_id, organization_id, department_id)
        if await self.user_repo.find_by_username(tenant_id, user.username.value):
            raise DuplicateResourceException("User", "username", user.username.value)
        await self._ensure_email_free(tenant_id, user.email.value)

        await self._save_and_publish(self.user_repo, user)
        logger.info(f"Created user {user.id} ({user.username.value}) in tenant {tenant_id}")
        return OperationResult.ok(user, "User created successfully")

    async def get(self, user_id: str) -> OperationResult[UserEntity]:
        return OperationResult.ok(await self._load(user_id))

    async def update_profile(
        self,
        user_id: str,
        display_name: str | None = None,
        email: str | None = None,
        metadata: dict[str, Any] | None = None,
        updated_by: str | None = None,
    ) -> OperationResult[UserEntity]:
        user = await self._load(user_id)
        if email is not None and email.strip().lower() != user.email.value:
            await self._ensure_email_free(user.tenant_id, email.strip().lower())

        changes = user.update_profile(
            updated_by=self.actor(updated_by),
            display_name=display_name,
            email=email,
            metadata=metadata,
        )
        if changes:
            await self._save_and_publish(self.user_repo, user)
        return OperationResult.ok(user, "User updated" if changes else "No changes applied")

    async def activate(self, user_id: str, updated_by: str | None = None) -> OperationResult[UserEntity]:
        user = await self._load(user_id)
        user.activate(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.user_repo, user)
        return OperationResult.ok(user, "User activated")

    async def suspend(
        self, user_id: str, reason: str | None = None, updated_by: str | None = None
    ) -> OperationResult[UserEntity]:
        user = await self._load(user_id)
        user.suspend(reason=reason, updated_by=self.actor(updated_by))
        await self._save_and_publish(self.user_repo, user)
        return OperationResult.ok(user, "User suspended")

    async def lock(
        self, user_id: str, reason: str | None = None, updated_by: str | None = None
    ) -> OperationResult[UserEntity]:
        user = await self._load(user_id)
        user.lock(reason=reason, updated_by=self.actor(updated_by))
        await self._save_and_publish(self.user_repo, user)
        return OperationResult.ok(user, "User locked")

    async def expire(self, user_id: str, updated_by: str | None = None) -> OperationResult[UserEntity]:
        user = await self._load(user_id)
        user.expire(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.user_repo, user)
        return OperationResult.ok(user, "User expired")

    async def delete(
        self, user_id: str, hard: bool = False, deleted_by: str | None = None
    ) -> OperationResult[UserEntity]:
        """Soft delete keeps the record as DELETED; hard delete removes it"""
        user = await self._load(user_id)
        user.delete(hard=hard, deleted_by=self.actor(deleted_by))
        if hard:
            await self.user_repo.delete(user.id)
            await self._publish_after_commit(self.user_repo, user.collect_domain_events())
        else:
            await self._save_and_publish(self.user_repo, user)
        logger.info(f"User {user_id} deleted (hard={hard})")
        return OperationResult.ok(user, "User deleted")

    async def _ensure_placement(
        self, tenant_id: str, organization_id: str | None, department_id: str | None
    ) -> None:
        """Organization and department must exist inside the user's tenant"""
        if organization_id is not None:
            organization = await self.organization_repo.find_by_id(organization_id)
            if organization is None or organization.tenant_id != tenant_id:
                raise ResourceNotFoundException("Organization", organization_id)
        if department_id is not None:
            department = await self.department_repo.find_by_id(department_id)
            if (
                department is None
                or department.tenant_id != tenant_id
                or department.organization_id != organization_id
            ):
                raise ResourceNotFoundException("Department", department_id)

    async def _ensure_email_free(self, tenant_id: str, email: str) -> None:
        if await self.user_repo.find_by_email(tenant_id, email):
            raise DuplicateResourceException("User", "email", email)

    async def _load(self, user_id: str) -> UserEntity:
        user = await self.user_repo.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        return user
