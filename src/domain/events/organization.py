from dataclasses import dataclass, field
from typing import Any

from src.domain.enums import DepartmentType, LifecycleStatus, OrganizationType
from src.domain.events.base import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrganizationCreated(DomainEvent):
    tenant_id: str
    name: str
    code: str
    organization_type: OrganizationType
    parent_organization_id: str | None = None
    created_by: str


@dataclass(frozen=True, kw_only=True)
class OrganizationUpdated(DomainEvent):
    tenant_id: str
    changes: dict[str, dict[str, Any]] = field(default_factory=dict)
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class OrganizationStatusChanged(DomainEvent):
    """Base for organization lifecycle events"""

    tenant_id: str
    previous_status: LifecycleStatus
    new_status: LifecycleStatus
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class OrganizationActivated(OrganizationStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class OrganizationSuspended(OrganizationStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class OrganizationDeactivated(OrganizationStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class DepartmentCreated(DomainEvent):
    tenant_id: str
    organization_id: str
    name: str
    code: str
    department_type: DepartmentType
    parent_id: str | None = None
    level: int
    path: str
    created_by: str


@dataclass(frozen=True, kw_only=True)
class DepartmentUpdated(DomainEvent):
    tenant_id: str
    changes: dict[str, dict[str, Any]] = field(default_factory=dict)
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class DepartmentMoved(DomainEvent):
    tenant_id: str
    previous_parent_id: str | None
    new_parent_id: str | None
    previous_path: str
    new_path: str
    level: int
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class DepartmentStatusChanged(DomainEvent):
    """Base for department lifecycle events"""

    tenant_id: str
    previous_status: LifecycleStatus
    new_status: LifecycleStatus
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class DepartmentActivated(DepartmentStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class DepartmentSuspended(DepartmentStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class DepartmentDeactivated(DepartmentStatusChanged):
    pass
