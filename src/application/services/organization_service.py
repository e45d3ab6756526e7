"""Organization use cases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.application.services.base import ApplicationService
from src.application.services.results import OperationResult
from src.domain.entities.organization import OrganizationEntity
from src.domain.exceptions import (DuplicateResourceException,
                                   ResourceNotFoundException)

if TYPE_CHECKING:
    from src.application.events.event_bus import EventBus
    from src.domain.repositories import (OrganizationRepositoryPort,
                                         TenantRepositoryPort)

logger = logging.getLogger(__name__)


class OrganizationService(ApplicationService):
    def __init__(
        self,
        organization_repo: OrganizationRepositoryPort,
        tenant_repo: TenantRepositoryPort,
        event_bus: EventBus | None = None,
    ) -> None:
        super().__init__(event_bus)
        self.organization_repo = organization_repo
        self.tenant_repo = tenant_repo

    async def create(
        self,
        tenant_id: str,
        name: str,
        code: str,
        organization_type: str,
        created_by: str | None = None,
        description: str | None = None,
        parent_organization_id: str | None = None,
        manager_id: str | None = None,
    ) -> OperationResult[OrganizationEntity]:
        """
        Create an organization inside an existing tenant.

        Codes are unique per tenant. A parent organization must exist and
        belong to the same tenant.
        """
        if tenant_id and await self.tenant_repo.find_by_id(tenant_id) is None:
            raise ResourceNotFoundException("Tenant", tenant_id)

        parent = None
        if parent_organization_id:
            parent = await self._load(parent_organization_id)

        organization = OrganizationEntity.create(
            tenant_id=tenant_id,
            name=name,
            code=code,
            organization_type=organization_type,
            created_by=self.actor(created_by),
            description=description,
            parent=parent,
            manager_id=manager_id,
        )
        if await self.organization_repo.find_by_code(tenant_id, organization.code.value):
            raise DuplicateResourceException("Organization", "code", organization.code.value)

        await self._save_and_publish(self.organization_repo, organization)
        logger.info(f"Created organization {organization.id} in tenant {tenant_id}")
        return OperationResult.ok(organization, "Organization created successfully")

    async def get(self, organization_id: str) -> OperationResult[OrganizationEntity]:
        return OperationResult.ok(await self._load(organization_id))

    async def update(
        self,
        organization_id: str,
        name: str | None = None,
        description: str | None = None,
        manager_id: str | None = None,
        updated_by: str | None = None,
    ) -> OperationResult[OrganizationEntity]:
        organization = await self._load(organization_id)
        changes = organization.update_info(
            updated_by=self.actor(updated_by),
            name=name,
            description=description,
            manager_id=manager_id,
        )
        if changes:
            await self._save_and_publish(self.organization_repo, organization)
        return OperationResult.ok(
            organization, "Organization updated" if changes else "No changes applied"
        )

    async def activate(self, organization_id: str, updated_by: str | None = None) -> OperationResult[OrganizationEntity]:
        organization = await self._load(organization_id)
        organization.activate(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.organization_repo, organization)
        return OperationResult.ok(organization, "Organization activated")

    async def suspend(self, organization_id: str, updated_by: str | None = None) -> OperationResult[OrganizationEntity]:
        organization = await self._load(organization_id)
        organization.suspend(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.organization_repo, organization)
        return OperationResult.ok(organization, "Organization suspended")

    async def deactivate(self, organization_id: str, updated_by: str | None = None) -> OperationResult[OrganizationEntity]:
        organization = await self._load(organization_id)
        organization.deactivate(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.organization_repo, organization)
        return OperationResult.ok(organization, "Organization deactivated")

    async def _load(self, organization_id: str) -> OrganizationEntity:
        organization = await self.organization_repo.find_by_id(organization_id)
        if organization is None:
            raise ResourceNotFoundException("Organization", organization_id)
        return organization
