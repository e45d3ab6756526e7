from dataclasses import dataclass, field
from typing import Any

from src.domain.enums import TenantStatus, TenantType
from src.domain.events.base import DomainEvent


@dataclass(frozen=True, kw_only=True)
class TenantCreated(DomainEvent):
    name: str
    code: str
    domain: str
    tenant_type: TenantType
    status: TenantStatus
    created_by: str


@dataclass(frozen=True, kw_only=True)
class TenantActivated(DomainEvent):
    previous_status: TenantStatus


@dataclass(frozen=True, kw_only=True)
class TenantSuspended(DomainEvent):
    previous_status: TenantStatus
    reason: str | None = None


@dataclass(frozen=True, kw_only=True)
class TenantResumed(DomainEvent):
    previous_status: TenantStatus


@dataclass(frozen=True, kw_only=True)
class TenantDeleted(DomainEvent):
    previous_status: TenantStatus


@dataclass(frozen=True, kw_only=True)
class TenantConfigChanged(DomainEvent):
    previous_config: dict[str, Any] = field(default_factory=dict)
    new_config: dict[str, Any] = field(default_factory=dict)
