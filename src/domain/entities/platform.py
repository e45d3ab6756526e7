"""
Platform domain entity.

A platform is the top-level product offering that tenants live on. Its
status follows PLATFORM_TRANSITIONS; activate/suspend/deactivate are
idempotent and record an event only when the status actually changes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.entities.base import AggregateRoot, utcnow
from src.domain.enums import LifecycleStatus, PlatformType
from src.domain.events.platform import (PlatformActivated,
                                        PlatformConfigRemoved,
                                        PlatformConfigUpdated,
                                        PlatformCreated, PlatformDeactivated,
                                        PlatformDeleted,
                                        PlatformMaintenanceStarted,
                                        PlatformMetadataUpdated,
                                        PlatformStatusChanged,
                                        PlatformSuspended, PlatformUpdated)
from src.domain.exceptions import (ResourceNotFoundException,
                                   StateConflictException, ValidationException)
from src.domain.lifecycle import PLATFORM_TRANSITIONS, apply_transition
from src.domain.value_objects.core import new_id
from src.domain.value_objects.platform import (PlatformConfig, PlatformName,
                                               PlatformVersion)


@dataclass
class PlatformEntity(AggregateRoot):
    id: str
    name: PlatformName
    version: PlatformVersion
    type: PlatformType
    status: LifecycleStatus = LifecycleStatus.INITIALIZING
    description: str | None = None
    configs: dict[str, PlatformConfig] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    created_by: str = "system"
    updated_by: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    revision: int = 1

    @classmethod
    def create(
        cls,
        name: str,
        version: str,
        platform_type: str | PlatformType,
        created_by: str = "system",
        description: str | None = None,
    ) -> "PlatformEntity":
        try:
            resolved_type = PlatformType(platform_type)
        except ValueError as e:
            raise ValidationException(
                f"Platform type must be one of {PlatformType.values()}", field="type"
            ) from e

        platform = cls(
            id=new_id(),
            name=PlatformName(name),
            version=PlatformVersion.parse(version),
            type=resolved_type,
            description=description,
            created_by=created_by,
        )
        platform.raise_event(
            PlatformCreated(
                name=platform.name.value,
                version=str(platform.version),
                platform_type=platform.type,
                created_by=created_by,
            )
        )
        return platform

    def is_deleted(self) -> bool:
        return self.status == LifecycleStatus.DELETED

    # Status operations

    def activate(self, updated_by: str = "system") -> None:
        self._change_status(LifecycleStatus.ACTIVE, PlatformActivated, updated_by)

    def suspend(self, updated_by: str = "system") -> None:
        self._change_status(LifecycleStatus.SUSPENDED, PlatformSuspended, updated_by)

    def deactivate(self, updated_by: str = "system") -> None:
        self._change_status(LifecycleStatus.INACTIVE, PlatformDeactivated, updated_by)

    def enter_maintenance(self, updated_by: str = "system") -> None:
        self._change_status(LifecycleStatus.MAINTENANCE, PlatformMaintenanceStarted, updated_by)

    def delete(self, updated_by: str = "system") -> None:
        """Soft delete; allowed from every status except DELETED."""
        self._ensure_not_deleted()
        previous = self.status
        self.status = LifecycleStatus.DELETED
        self._touch(updated_by)
        self.raise_event(
            PlatformDeleted(
                previous_status=previous, new_status=self.status, updated_by=updated_by
            )
        )

    # Descriptive data

    def update_info(
        self,
        updated_by: str = "system",
        name: str | None = None,
        description: str | None = None,
        version: str | None = None,
        platform_type: str | PlatformType | None = None,
    ) -> dict[str, dict[str, Any]]:
        """Apply changed fields; returns the {field: {old, new}} diff"""
        self._ensure_not_deleted()
        changes: dict[str, dict[str, Any]] = {}

        if name is not None:
            new_name = PlatformName(name)
            if new_name != self.name:
                changes["name"] = {"old": self.name.value, "new": new_name.value}
                self.name = new_name
        if description is not None and description != self.description:
            changes["description"] = {"old": self.description, "new": description}
            self.description = description
        if version is not None:
            new_version = PlatformVersion.parse(version)
            if str(new_version) != str(self.version):
                changes["version"] = {"old": str(self.version), "new": str(new_version)}
                self.version = new_version
        if platform_type is not None:
            try:
                new_type = PlatformType(platform_type)
            except ValueError as e:
                raise ValidationException(
                    f"Platform type must be one of {PlatformType.values()}", field="type"
                ) from e
            if new_type != self.type:
                changes["type"] = {"old": self.type.value, "new": new_type.value}
                self.type = new_type

        if changes:
            self._touch(updated_by)
            self.raise_event(PlatformUpdated(changes=changes, updated_by=updated_by))
        return changes

    def get_config(self, key: str) -> PlatformConfig | None:
        return self.configs.get(key)

    def set_config(self, config: PlatformConfig, updated_by: str = "system") -> None:
        self._ensure_not_deleted()
        existing = self.configs.get(config.key)
        if existing is not None and not existing.editable:
            raise StateConflictException(f"Configuration {config.key} is not editable")
        self.configs[config.key] = config
        self._touch(updated_by)
        self.raise_event(
            PlatformConfigUpdated(
                key=config.key,
                previous_value=existing.value if existing else None,
                new_value=config.value,
                updated_by=updated_by,
            )
        )

    def remove_config(self, key: str, updated_by: str = "system") -> None:
        self._ensure_not_deleted()
        existing = self.configs.get(key)
        if existing is None:
            raise ResourceNotFoundException("Platform configuration", key)
        if existing.required:
            raise StateConflictException(f"Configuration {key} is required and cannot be removed")
        del self.configs[key]
        self._touch(updated_by)
        self.raise_event(
            PlatformConfigRemoved(key=key, previous_value=existing.value, updated_by=updated_by)
        )

    def set_metadata(self, key: str, value: Any, updated_by: str = "system") -> None:
        self._ensure_not_deleted()
        if not key:
            raise ValidationException("Metadata key must not be empty", field="key")
        previous = self.metadata.get(key)
        self.metadata[key] = value
        self._touch(updated_by)
        self.raise_event(
            PlatformMetadataUpdated(
                key=key, previous_value=previous, new_value=value, updated_by=updated_by
            )
        )

    def _change_status(
        self,
        target: LifecycleStatus,
        event_type: type[PlatformStatusChanged],
        updated_by: str,
    ) -> None:
        previous = self.status
        if not apply_transition(PLATFORM_TRANSITIONS, previous, target, "Platform"):
            return
        self.status = target
        self._touch(updated_by)
        self.raise_event(
            event_type(previous_status=previous, new_status=target, updated_by=updated_by)
        )

    def _ensure_not_deleted(self) -> None:
        if self.is_deleted():
            raise StateConflictException(
                "Platform has been deleted and cannot be modified", self.status.value
            )

    def _touch(self, updated_by: str) -> None:
        self.updated_by = updated_by
        self.updated_at = utcnow()
