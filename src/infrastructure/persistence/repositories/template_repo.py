from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.template import TemplateEntity
from src.domain.enums import TemplateStatus, TemplateType
from src.infrastructure.persistence.mappers.template import TemplateRowMapper
from src.infrastructure.persistence.models.template import Template
from src.infrastructure.persistence.repositories.base import BaseRepository


class TemplateRepository(BaseRepository[Template, TemplateEntity]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Template, TemplateRowMapper())

    async def find_by_name(self, tenant_id: str, name: str) -> TemplateEntity | None:
        return await self._find_one(Template.tenant_id == tenant_id, Template.name == name)

    async def list_templates(
        self,
        tenant_id: str,
        status: TemplateStatus | None = None,
        template_type: TemplateType | None = None,
    ) -> list[TemplateEntity]:
        conditions = [Template.tenant_id == tenant_id]
        if status is not None:
            conditions.append(Template.status == status.value)
        if template_type is not None:
            conditions.append(Template.type == template_type.value)
        return await self._find_many(*conditions, order_by=Template.name)
