from abc import ABC
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.persistence.database import (AfterCommitCallback, Base,
                                                     register_after_commit)
from src.infrastructure.persistence.mappers.base import Mapper

ModelType = TypeVar("ModelType", bound=Base)
EntityType = TypeVar("EntityType")


class BaseRepository(ABC, Generic[ModelType, EntityType]):
    """
    Relational implementation of the domain repository port.

    Entities go in and come out; rows never leave the repository. save() is
    an upsert through session.merge, so the same call persists new and
    changed aggregates. Provides cache invalidation hooks for subclasses.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType], mapper: Mapper[ModelType, EntityType]):
        self.db = db
        self.model = model
        self.mapper = mapper

    async def save(self, entity: EntityType) -> None:
        """Insert or update the entity's current state"""
        await self.db.merge(self.mapper.to_persistence(entity))
        await self.db.flush()
        await self._on_after_save(entity)

    async def find_by_id(self, entity_id: str) -> EntityType | None:
        row = await self.db.get(self.model, entity_id)
        return self.mapper.to_domain(row) if row is not None else None

    async def delete(self, entity_id: str) -> None:
        row = await self.db.get(self.model, entity_id)
        if row is None:
            return
        await self._on_before_delete(row)
        await self.db.delete(row)
        await self.db.flush()

    async def find_all(self) -> list[EntityType]:
        return await self._find_many()

    async def after_commit(self, callback: AfterCommitCallback) -> None:
        """Deferred until the owning session commits"""
        register_after_commit(self.db, callback)

    async def _find_one(self, *conditions: Any) -> EntityType | None:
        result = await self.db.execute(select(self.model).where(*conditions).limit(1))
        row = result.scalar_one_or_none()
        return self.mapper.to_domain(row) if row is not None else None

    async def _find_many(self, *conditions: Any, order_by: Any = None) -> list[EntityType]:
        query = select(self.model).where(*conditions)
        if order_by is not None:
            query = query.order_by(order_by)
        result = await self.db.execute(query)
        return self.mapper.to_domain_many(result.scalars().all())

    # Cache invalidation hooks - override in subclasses
    async def _on_after_save(self, entity: EntityType) -> None:
        """Hook called after saving an entity. Override to invalidate caches."""
        pass

    async def _on_before_delete(self, row: ModelType) -> None:
        """Hook called before deleting a row. Override to invalidate caches."""
        pass
