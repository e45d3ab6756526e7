from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.department import DepartmentEntity
from src.domain.entities.organization import OrganizationEntity
from src.infrastructure.persistence.mappers.organization import (
    DepartmentRowMapper, OrganizationRowMapper)
from src.infrastructure.persistence.models.organization import (Department,
                                                                Organization)
from src.infrastructure.persistence.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization, OrganizationEntity]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Organization, OrganizationRowMapper())

    async def find_by_code(self, tenant_id: str, code: str) -> OrganizationEntity | None:
        return await self._find_one(Organization.tenant_id == tenant_id, Organization.code == code)


class DepartmentRepository(BaseRepository[Department, DepartmentEntity]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Department, DepartmentRowMapper())

    async def find_by_code(self, organization_id: str, code: str) -> DepartmentEntity | None:
        return await self._find_one(
            Department.organization_id == organization_id, Department.code == code
        )

    async def find_descendants(self, path: str) -> list[DepartmentEntity]:
        """All departments below path, shallowest first"""
        return await self._find_many(Department.path.like(f"{path}/%"), order_by=Department.level)
