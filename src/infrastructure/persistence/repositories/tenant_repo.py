from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.tenant import TenantEntity
from src.domain.enums import TenantStatus
from src.infrastructure.cache.redis_cache import CacheService
from src.infrastructure.config.settings import get_settings
from src.infrastructure.persistence.mappers.tenant import (TenantDocumentMapper,
                                                           TenantRowMapper)
from src.infrastructure.persistence.models.tenant import Tenant
from src.infrastructure.persistence.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant, TenantEntity]):
    """
    Repository for tenants with Redis caching.

    Lookups by id and code are cached as tenant documents (15 min TTL by
    default). Both keys are dropped whenever a tenant is saved or deleted.
    """

    def __init__(self, db: AsyncSession, cache_service: CacheService | None = None):
        super().__init__(db, Tenant, TenantRowMapper())
        self.cache = cache_service
        self.cache_ttl = get_settings().cache_ttl_tenants
        self.document_mapper = TenantDocumentMapper()

    async def find_by_id(self, entity_id: str) -> TenantEntity | None:
        return await self._cached(f"tenant:id:{entity_id}", Tenant.id == entity_id)

    async def find_by_code(self, code: str) -> TenantEntity | None:
        return await self._cached(f"tenant:code:{code}", Tenant.code == code)

    async def find_by_domain(self, domain: str) -> TenantEntity | None:
        return await self._find_one(Tenant.domain == domain.lower())

    async def find_by_name(self, name: str) -> TenantEntity | None:
        return await self._find_one(Tenant.name == name)

    async def list_tenants(
        self, status: TenantStatus | None = None, limit: int = 100, offset: int = 0
    ) -> list[TenantEntity]:
        query = select(Tenant)
        if status is not None:
            query = query.where(Tenant.status == status.value)
        result = await self.db.execute(
            query.order_by(Tenant.created_at, Tenant.id).offset(offset).limit(limit)
        )
        return self.mapper.to_domain_many(result.scalars().all())

    async def _cached(self, cache_key: str, condition) -> TenantEntity | None:
        if self.cache and self.cache.is_available():
            cached = await self.cache.get(cache_key)
            if cached is not None:
                return self.document_mapper.to_domain(cached)

        tenant = await self._find_one(condition)

        if tenant and self.cache and self.cache.is_available():
            document = self.document_mapper.to_persistence(tenant)
            await self.cache.set(f"tenant:id:{tenant.id}", document, ttl=self.cache_ttl)
            await self.cache.set(f"tenant:code:{tenant.code.value}", document, ttl=self.cache_ttl)
        return tenant

    async def _on_after_save(self, entity: TenantEntity) -> None:
        await self._invalidate_tenant_cache(entity.id, entity.code.value)

    async def _on_before_delete(self, row: Tenant) -> None:
        await self._invalidate_tenant_cache(row.id, row.code)

    async def _invalidate_tenant_cache(self, tenant_id: str, tenant_code: str) -> None:
        if self.cache and self.cache.is_available():
            await self.cache.delete(f"tenant:id:{tenant_id}", f"tenant:code:{tenant_code}")
