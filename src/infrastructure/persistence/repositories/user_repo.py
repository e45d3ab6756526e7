from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.user import UserEntity
from src.infrastructure.persistence.mappers.user import UserRowMapper
from src.infrastructure.persistence.models.user import User
from src.infrastructure.persistence.repositories.base import BaseRepository


class UserRepository(BaseRepository[User, UserEntity]):
    """Users are looked up within a single tenant"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User, UserRowMapper())

    async def find_by_username(self, tenant_id: str, username: str) -> UserEntity | None:
        return await self._find_one(User.tenant_id == tenant_id, User.username == username)

    async def find_by_email(self, tenant_id: str, email: str) -> UserEntity | None:
        return await self._find_one(User.tenant_id == tenant_id, User.email == email.lower())
