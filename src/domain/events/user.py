from dataclasses import dataclass, field
from typing import Any

from src.domain.enums import UserStatus
from src.domain.events.base import DomainEvent


@dataclass(frozen=True, kw_only=True)
class UserCreated(DomainEvent):
    tenant_id: str
    organization_id: str | None = None
    department_id: str | None = None
    username: str
    email: str
    display_name: str | None = None
    status: UserStatus
    created_by: str


@dataclass(frozen=True, kw_only=True)
class UserUpdated(DomainEvent):
    tenant_id: str
    changes: dict[str, dict[str, Any]] = field(default_factory=dict)
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class UserStatusChanged(DomainEvent):
    tenant_id: str
    previous_status: UserStatus
    new_status: UserStatus
    reason: str | None = None
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class UserDeleted(DomainEvent):
    tenant_id: str
    hard_delete: bool = False
    deleted_by: str
