from dataclasses import dataclass, field
from typing import Any

from src.domain.enums import LifecycleStatus, PlatformType
from src.domain.events.base import DomainEvent


@dataclass(frozen=True, kw_only=True)
class PlatformCreated(DomainEvent):
    name: str
    version: str
    platform_type: PlatformType
    created_by: str


@dataclass(frozen=True, kw_only=True)
class PlatformStatusChanged(DomainEvent):
    """Base for platform lifecycle events"""

    previous_status: LifecycleStatus
    new_status: LifecycleStatus
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class PlatformActivated(PlatformStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class PlatformSuspended(PlatformStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class PlatformDeactivated(PlatformStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class PlatformMaintenanceStarted(PlatformStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class PlatformDeleted(PlatformStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class PlatformUpdated(DomainEvent):
    changes: dict[str, dict[str, Any]] = field(default_factory=dict)
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class PlatformConfigUpdated(DomainEvent):
    key: str
    previous_value: Any = None
    new_value: Any = None
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class PlatformConfigRemoved(DomainEvent):
    key: str
    previous_value: Any = None
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class PlatformMetadataUpdated(DomainEvent):
    key: str
    previous_value: Any = None
    new_value: Any = None
    updated_by: str
