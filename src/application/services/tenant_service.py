"""
Tenant use cases.

Creation validates every field before touching the repository, then
enforces uniqueness of code, domain and name across all tenants.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from src.application.services.base import ApplicationService
from src.application.services.results import OperationResult
from src.application.services.tenant_config_validator import \
    ensure_valid_tenant_config
from src.domain.entities.tenant import TenantEntity
from src.domain.enums import TenantStatus
from src.domain.exceptions import (DuplicateResourceException,
                                   TenantNotFoundException)

if TYPE_CHECKING:
    from src.application.events.event_bus import EventBus
    from src.domain.repositories import TenantRepositoryPort

logger = logging.getLogger(__name__)


class TenantService(ApplicationService):
    """Tenant lifecycle and configuration management"""

    def __init__(self, tenant_repo: TenantRepositoryPort, event_bus: EventBus | None = None) -> None:
        super().__init__(event_bus)
        self.tenant_repo = tenant_repo

    async def create(
        self,
        name: str,
        code: str,
        domain: str,
        tenant_type: str,
        config: dict[str, Any] | None = None,
        description: str | None = None,
        created_by: str | None = None,
    ) -> OperationResult[TenantEntity]:
        """
        Create a new PENDING tenant.

        Raises:
            ValidationException: If any field is malformed
            DuplicateResourceException: If code, domain or name is taken
        """
        tenant = TenantEntity.create(
            name=name,
            code=code,
            domain=domain,
            tenant_type=tenant_type,
            created_by=self.actor(created_by),
            config=config,
            description=description,
        )
        if config:
            ensure_valid_tenant_config(config)

        if await self.tenant_repo.find_by_code(tenant.code.value):
            raise DuplicateResourceException("Tenant", "code", tenant.code.value)
        if await self.tenant_repo.find_by_domain(tenant.domain.value):
            raise DuplicateResourceException("Tenant", "domain", tenant.domain.value)
        if await self.tenant_repo.find_by_name(tenant.name.value):
            raise DuplicateResourceException("Tenant", "name", tenant.name.value)

        await self._save_and_publish(self.tenant_repo, tenant)
        logger.info(f"Created tenant {tenant.id} ({tenant.code.value})")
        return OperationResult.ok(tenant, "Tenant created successfully")

    async def get(self, tenant_id: str) -> OperationResult[TenantEntity]:
        return OperationResult.ok(await self._load(tenant_id))

    async def list_tenants(
        self, status: TenantStatus | None = None, limit: int = 100, offset: int = 0
    ) -> OperationResult[list[TenantEntity]]:
        tenants = await self.tenant_repo.list_tenants(status=status, limit=limit, offset=offset)
        return OperationResult.ok(tenants)

    async def update_config(
        self, tenant_id: str, config: dict[str, Any], updated_by: str | None = None
    ) -> OperationResult[TenantEntity]:
        tenant = await self._load(tenant_id)
        ensure_valid_tenant_config(config)
        tenant.update_config(config, updated_by=self.actor(updated_by))
        await self._save_and_publish(self.tenant_repo, tenant)
        return OperationResult.ok(tenant, "Tenant configuration updated")

    async def activate(self, tenant_id: str, updated_by: str | None = None) -> OperationResult[TenantEntity]:
        tenant = await self._load(tenant_id)
        tenant.activate(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.tenant_repo, tenant)
        logger.info(f"Tenant {tenant_id} activated")
        return OperationResult.ok(tenant, "Tenant activated")

    async def suspend(
        self, tenant_id: str, reason: str | None = None, updated_by: str | None = None
    ) -> OperationResult[TenantEntity]:
        tenant = await self._load(tenant_id)
        tenant.suspend(reason=reason, updated_by=self.actor(updated_by))
        await self._save_and_publish(self.tenant_repo, tenant)
        logger.info(f"Tenant {tenant_id} suspended: {reason or 'no reason given'}")
        return OperationResult.ok(tenant, "Tenant suspended")

    async def resume(self, tenant_id: str, updated_by: str | None = None) -> OperationResult[TenantEntity]:
        tenant = await self._load(tenant_id)
        tenant.resume(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.tenant_repo, tenant)
        logger.info(f"Tenant {tenant_id} resumed")
        return OperationResult.ok(tenant, "Tenant resumed")

    async def delete(self, tenant_id: str, updated_by: str | None = None) -> OperationResult[TenantEntity]:
        """Soft delete: the row is kept with status DELETED"""
        tenant = await self._load(tenant_id)
        tenant.delete(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.tenant_repo, tenant)
        logger.info(f"Tenant {tenant_id} deleted")
        return OperationResult.ok(tenant, "Tenant deleted")

    async def _load(self, tenant_id: str) -> TenantEntity:
        tenant = await self.tenant_repo.find_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(tenant_id)
        return tenant
