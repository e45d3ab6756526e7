from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.platform import PlatformEntity
from src.infrastructure.persistence.mappers.platform import PlatformRowMapper
from src.infrastructure.persistence.models.platform import Platform
from src.infrastructure.persistence.repositories.base import BaseRepository


class PlatformRepository(BaseRepository[Platform, PlatformEntity]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Platform, PlatformRowMapper())

    async def find_by_name(self, name: str) -> PlatformEntity | None:
        return await self._find_one(Platform.name == name)
