"""Platform mappers; config items are stored as plain dicts keyed by config key."""

from typing import Any

from src.domain.entities.platform import PlatformEntity
from src.domain.enums import LifecycleStatus, PlatformType
from src.domain.value_objects.platform import (PlatformConfig, PlatformName,
                                               PlatformVersion)
from src.infrastructure.persistence.mappers.base import Document, Mapper
from src.infrastructure.persistence.models.platform import Platform
from src.shared.utils.datetime import ensure_utc, from_iso, to_iso


def _configs_to_dict(configs: dict[str, PlatformConfig]) -> dict[str, Any]:
    return {key: config.to_dict() for key, config in configs.items()}


def _configs_from_dict(data: dict[str, Any] | None) -> dict[str, PlatformConfig]:
    return {key: PlatformConfig.from_dict(item) for key, item in (data or {}).items()}


class PlatformRowMapper(Mapper[Platform, PlatformEntity]):
    def to_domain(self, source: Platform) -> PlatformEntity:
        return PlatformEntity(
            id=source.id,
            name=PlatformName(source.name),
            version=PlatformVersion.parse(source.version),
            type=PlatformType(source.type),
            status=LifecycleStatus(source.status),
            description=source.description,
            configs=_configs_from_dict(source.configs),
            metadata=dict(source.metadata_ or {}),
            created_by=source.created_by,
            updated_by=source.updated_by,
            created_at=ensure_utc(source.created_at),
            updated_at=ensure_utc(source.updated_at),
            revision=source.revision,
        )

    def to_persistence(self, entity: PlatformEntity) -> Platform:
        return Platform(
            id=entity.id,
            name=entity.name.value,
            version=str(entity.version),
            type=entity.type.value,
            status=entity.status.value,
            description=entity.description,
            configs=_configs_to_dict(entity.configs),
            metadata_=dict(entity.metadata),
            created_by=entity.created_by,
            updated_by=entity.updated_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            revision=entity.revision,
        )


class PlatformDocumentMapper(Mapper[Document, PlatformEntity]):
    def to_domain(self, source: Document) -> PlatformEntity:
        return PlatformEntity(
            id=source["id"],
            name=PlatformName(source["name"]),
            version=PlatformVersion.parse(source["version"]),
            type=PlatformType(source["type"]),
            status=LifecycleStatus(source["status"]),
            description=source.get("description"),
            configs=_configs_from_dict(source.get("configs")),
            metadata=dict(source.get("metadata") or {}),
            created_by=source.get("created_by", "system"),
            updated_by=source.get("updated_by"),
            created_at=from_iso(source["created_at"]),
            updated_at=from_iso(source["updated_at"]),
            revision=source.get("revision", 1),
        )

    def to_persistence(self, entity: PlatformEntity) -> Document:
        return {
            "id": entity.id,
            "name": entity.name.value,
            "version": str(entity.version),
            "type": entity.type.value,
            "status": entity.status.value,
            "description": entity.description,
            "configs": _configs_to_dict(entity.configs),
            "metadata": dict(entity.metadata),
            "created_by": entity.created_by,
            "updated_by": entity.updated_by,
            "created_at": to_iso(entity.created_at),
            "updated_at": to_iso(entity.updated_at),
            "revision": entity.revision,
        }


def platform_to_dto(entity: PlatformEntity) -> Document:
    document = PlatformDocumentMapper().to_persistence(entity)
    document["configs"] = list(document["configs"].values())
    document["is_prerelease"] = entity.version.is_prerelease
    return document
