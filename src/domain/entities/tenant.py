"""
Tenant domain entity.

This represents the business concept of a tenant, independent of
how it's stored in the database or document store.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.entities.base import AggregateRoot, utcnow
from src.domain.enums import TenantStatus, TenantType
from src.domain.events.tenant import (TenantActivated, TenantConfigChanged,
                                      TenantCreated, TenantDeleted,
                                      TenantResumed, TenantSuspended)
from src.domain.exceptions import StateConflictException, ValidationException
from src.domain.lifecycle import TENANT_TRANSITIONS, can_transition, ensure_transition
from src.domain.value_objects.core import (TenantCode, TenantDomain, TenantName,
                                           new_id)


@dataclass(frozen=True)
class TenantLimits:
    max_users: int
    max_organizations: int
    max_storage_gb: int


TENANT_TYPE_LIMITS: dict[TenantType, TenantLimits] = {
    TenantType.ENTERPRISE: TenantLimits(10000, 100, 1000),
    TenantType.ORGANIZATION: TenantLimits(1000, 20, 100),
    TenantType.PARTNERSHIP: TenantLimits(500, 10, 50),
    TenantType.PERSONAL: TenantLimits(10, 1, 10),
}

TENANT_TYPE_FEATURES: dict[TenantType, frozenset[str]] = {
    TenantType.ENTERPRISE: frozenset({"advanced", "customization", "api", "sso"}),
    TenantType.ORGANIZATION: frozenset({"advanced", "customization", "api"}),
    TenantType.PARTNERSHIP: frozenset({"advanced", "api"}),
    TenantType.PERSONAL: frozenset(),
}


@dataclass
class TenantEntity(AggregateRoot):
    """
    Domain entity for Tenant (SRP - business logic separate from persistence)

    Lifecycle: PENDING -> ACTIVE <-> SUSPENDED, any live status -> DELETED.
    """

    id: str
    name: TenantName
    code: TenantCode
    domain: TenantDomain
    type: TenantType
    status: TenantStatus = TenantStatus.PENDING
    config: dict[str, Any] = field(default_factory=dict)
    description: str | None = None
    created_by: str = "system"
    updated_by: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    revision: int = 1

    @classmethod
    def create(
        cls,
        name: str,
        code: str,
        domain: str,
        tenant_type: str | TenantType,
        created_by: str = "system",
        config: dict[str, Any] | None = None,
        description: str | None = None,
    ) -> "TenantEntity":
        """Validate raw input and build a PENDING tenant"""
        try:
            resolved_type = TenantType(tenant_type)
        except ValueError as e:
            raise ValidationException(
                f"Tenant type must be one of {TenantType.values()}", field="type"
            ) from e

        tenant = cls(
            id=new_id(),
            name=TenantName(name),
            code=TenantCode(code),
            domain=TenantDomain(domain),
            type=resolved_type,
            config=dict(config or {}),
            description=description,
            created_by=created_by,
        )
        tenant.raise_event(
            TenantCreated(
                name=tenant.name.value,
                code=tenant.code.value,
                domain=tenant.domain.value,
                tenant_type=tenant.type,
                status=tenant.status,
                created_by=created_by,
            )
        )
        return tenant

    @property
    def limits(self) -> TenantLimits:
        return TENANT_TYPE_LIMITS[self.type]

    def has_feature(self, feature: str) -> bool:
        return feature in TENANT_TYPE_FEATURES[self.type]

    def is_active(self) -> bool:
        return self.status == TenantStatus.ACTIVE

    def can_transition_to(self, status: TenantStatus) -> bool:
        return can_transition(TENANT_TRANSITIONS, self.status, status)

    def activate(self, updated_by: str = "system") -> None:
        """Only pending tenants can be activated; suspended ones are resumed."""
        if self.status != TenantStatus.PENDING:
            raise StateConflictException(
                f"Only pending tenants can be activated (current status: {self.status.value})",
                self.status.value,
            )
        previous = self._move_to(TenantStatus.ACTIVE, updated_by)
        self.raise_event(TenantActivated(previous_status=previous))

    def suspend(self, reason: str | None = None, updated_by: str = "system") -> None:
        if self.status != TenantStatus.ACTIVE:
            raise StateConflictException(
                f"Only active tenants can be suspended (current status: {self.status.value})",
                self.status.value,
            )
        previous = self._move_to(TenantStatus.SUSPENDED, updated_by)
        self.raise_event(TenantSuspended(previous_status=previous, reason=reason))

    def resume(self, updated_by: str = "system") -> None:
        if self.status != TenantStatus.SUSPENDED:
            raise StateConflictException(
                f"Only suspended tenants can be resumed (current status: {self.status.value})",
                self.status.value,
            )
        previous = self._move_to(TenantStatus.ACTIVE, updated_by)
        self.raise_event(TenantResumed(previous_status=previous))

    def delete(self, updated_by: str = "system") -> None:
        previous = self._move_to(TenantStatus.DELETED, updated_by)
        self.raise_event(TenantDeleted(previous_status=previous))

    def update_config(self, config: dict[str, Any], updated_by: str = "system") -> None:
        """Merge config keys into the existing configuration"""
        if self.status == TenantStatus.DELETED:
            raise StateConflictException(
                "Cannot update the configuration of a deleted tenant", self.status.value
            )
        if not config:
            raise ValidationException("Configuration must not be empty", field="config")

        previous = dict(self.config)
        self.config = {**self.config, **config}
        self.updated_by = updated_by
        self.updated_at = utcnow()
        self.raise_event(TenantConfigChanged(previous_config=previous, new_config=dict(self.config)))

    def _move_to(self, target: TenantStatus, updated_by: str) -> TenantStatus:
        ensure_transition(TENANT_TRANSITIONS, self.status, target, "Tenant")
        previous = self.status
        self.status = target
        self.updated_by = updated_by
        self.updated_at = utcnow()
        return previous
