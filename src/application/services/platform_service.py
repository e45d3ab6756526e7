"""Platform use cases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from src.application.services.base import ApplicationService
from src.application.services.results import OperationResult
from src.domain.entities.platform import PlatformEntity
from src.domain.exceptions import (DuplicateResourceException,
                                   ResourceNotFoundException)
from src.domain.value_objects.platform import PlatformConfig

if TYPE_CHECKING:
    from src.application.events.event_bus import EventBus
    from src.domain.repositories import PlatformRepositoryPort

logger = logging.getLogger(__name__)

# Status operations exposed as POST /platforms/{id}/<action>
STATUS_ACTIONS = {
    "activate": "activate",
    "suspend": "suspend",
    "deactivate": "deactivate",
    "maintenance": "enter_maintenance",
}


class PlatformService(ApplicationService):
    def __init__(self, platform_repo: PlatformRepositoryPort, event_bus: EventBus | None = None) -> None:
        super().__init__(event_bus)
        self.platform_repo = platform_repo

    async def create(
        self,
        name: str,
        version: str,
        platform_type: str,
        description: str | None = None,
        created_by: str | None = None,
    ) -> OperationResult[PlatformEntity]:
        platform = PlatformEntity.create(
            name=name,
            version=version,
            platform_type=platform_type,
            created_by=self.actor(created_by),
            description=description,
        )
        if await self.platform_repo.find_by_name(platform.name.value):
            raise DuplicateResourceException("Platform", "name", platform.name.value)

        await self._save_and_publish(self.platform_repo, platform)
        logger.info(f"Created platform {platform.id} ({platform.name.value} {platform.version})")
        return OperationResult.ok(platform, "Platform created successfully")

    async def get(self, platform_id: str) -> OperationResult[PlatformEntity]:
        return OperationResult.ok(await self._load(platform_id))

    async def update(
        self,
        platform_id: str,
        name: str | None = None,
        description: str | None = None,
        version: str | None = None,
        platform_type: str | None = None,
        updated_by: str | None = None,
    ) -> OperationResult[PlatformEntity]:
        platform = await self._load(platform_id)
        if name is not None:
            existing = await self.platform_repo.find_by_name(name.strip())
            if existing is not None and existing.id != platform.id:
                raise DuplicateResourceException("Platform", "name", name.strip())

        changes = platform.update_info(
            updated_by=self.actor(updated_by),
            name=name,
            description=description,
            version=version,
            platform_type=platform_type,
        )
        if changes:
            await self._save_and_publish(self.platform_repo, platform)
        return OperationResult.ok(platform, "Platform updated" if changes else "No changes applied")

    async def change_status(
        self, platform_id: str, action: str, updated_by: str | None = None
    ) -> OperationResult[PlatformEntity]:
        """Apply one of STATUS_ACTIONS; repeating the current status is a no-op"""
        platform = await self._load(platform_id)
        getattr(platform, STATUS_ACTIONS[action])(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.platform_repo, platform)
        return OperationResult.ok(platform, f"Platform status is {platform.status.value}")

    async def delete(self, platform_id: str, updated_by: str | None = None) -> OperationResult[PlatformEntity]:
        platform = await self._load(platform_id)
        platform.delete(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.platform_repo, platform)
        logger.info(f"Platform {platform_id} deleted")
        return OperationResult.ok(platform, "Platform deleted")

    async def set_config(
        self, platform_id: str, key: str, item: dict[str, Any], updated_by: str | None = None
    ) -> OperationResult[PlatformEntity]:
        platform = await self._load(platform_id)
        config = PlatformConfig.from_dict({**item, "key": key})
        platform.set_config(config, updated_by=self.actor(updated_by))
        await self._save_and_publish(self.platform_repo, platform)
        return OperationResult.ok(platform, f"Configuration {key} saved")

    async def remove_config(
        self, platform_id: str, key: str, updated_by: str | None = None
    ) -> OperationResult[PlatformEntity]:
        platform = await self._load(platform_id)
        platform.remove_config(key, updated_by=self.actor(updated_by))
        await self._save_and_publish(self.platform_repo, platform)
        return OperationResult.ok(platform, f"Configuration {key} removed")

    async def set_metadata(
        self, platform_id: str, key: str, value: Any, updated_by: str | None = None
    ) -> OperationResult[PlatformEntity]:
        platform = await self._load(platform_id)
        platform.set_metadata(key, value, updated_by=self.actor(updated_by))
        await self._save_and_publish(self.platform_repo, platform)
        return OperationResult.ok(platform, f"Metadata {key} saved")

    async def _load(self, platform_id: str) -> PlatformEntity:
        platform = await self.platform_repo.find_by_id(platform_id)
        if platform is None:
            raise ResourceNotFoundException("Platform", platform_id)
        return platform
