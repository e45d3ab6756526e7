"""Organization domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.entities.base import AggregateRoot, utcnow
from src.domain.enums import LifecycleStatus, OrganizationType
from src.domain.events.organization import (OrganizationActivated,
                                            OrganizationCreated,
                                            OrganizationDeactivated,
                                            OrganizationStatusChanged,
                                            OrganizationSuspended,
                                            OrganizationUpdated)
from src.domain.exceptions import StateConflictException, ValidationException
from src.domain.lifecycle import PLATFORM_TRANSITIONS, apply_transition
from src.domain.value_objects.core import EntityCode, EntityName, Scope, new_id


def require_actor(created_by: str | None) -> str:
    if not created_by or not created_by.strip():
        raise ValidationException("created_by is required", field="created_by")
    return created_by.strip()


@dataclass
class OrganizationEntity(AggregateRoot):
    id: str
    scope: Scope
    name: EntityName
    code: EntityCode
    type: OrganizationType
    status: LifecycleStatus = LifecycleStatus.INITIALIZING
    description: str | None = None
    parent_organization_id: str | None = None
    manager_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_by: str = "system"
    updated_by: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    revision: int = 1

    @classmethod
    def create(
        cls,
        tenant_id: str,
        name: str,
        code: str,
        organization_type: str | OrganizationType,
        created_by: str,
        description: str | None = None,
        parent: "OrganizationEntity | None" = None,
        manager_id: str | None = None,
    ) -> "OrganizationEntity":
        actor = require_actor(created_by)
        try:
            resolved_type = OrganizationType(organization_type)
        except ValueError as e:
            raise ValidationException(
                f"Organization type must be one of {OrganizationType.values()}", field="type"
            ) from e

        if parent is not None and parent.scope.tenant_id != tenant_id:
            raise ValidationException(
                "Parent organization belongs to another tenant", field="parent_organization_id"
            )

        organization = cls(
            id=new_id(),
            scope=Scope(tenant_id=tenant_id),
            name=EntityName(name),
            code=EntityCode(code),
            type=resolved_type,
            description=description,
            parent_organization_id=parent.id if parent else None,
            manager_id=manager_id,
            created_by=actor,
        )
        organization.raise_event(
            OrganizationCreated(
                tenant_id=tenant_id,
                name=organization.name.value,
                code=organization.code.value,
                organization_type=resolved_type,
                parent_organization_id=organization.parent_organization_id,
                created_by=actor,
            )
        )
        return organization

    @property
    def tenant_id(self) -> str:
        return self.scope.tenant_id

    def activate(self, updated_by: str = "system") -> None:
        self._change_status(LifecycleStatus.ACTIVE, OrganizationActivated, updated_by)

    def suspend(self, updated_by: str = "system") -> None:
        self._change_status(LifecycleStatus.SUSPENDED, OrganizationSuspended, updated_by)

    def deactivate(self, updated_by: str = "system") -> None:
        self._change_status(LifecycleStatus.INACTIVE, OrganizationDeactivated, updated_by)

    def update_info(
        self,
        updated_by: str = "system",
        name: str | None = None,
        description: str | None = None,
        manager_id: str | None = None,
    ) -> dict[str, dict[str, Any]]:
        if self.status == LifecycleStatus.DELETED:
            raise StateConflictException("Deleted organizations cannot be modified", self.status.value)

        changes: dict[str, dict[str, Any]] = {}
        if name is not None:
            new_name = EntityName(name)
            if new_name != self.name:
                changes["name"] = {"old": self.name.value, "new": new_name.value}
                self.name = new_name
        if description is not None and description != self.description:
            changes["description"] = {"old": self.description, "new": description}
            self.description = description
        if manager_id is not None and manager_id != self.manager_id:
            changes["manager_id"] = {"old": self.manager_id, "new": manager_id}
            self.manager_id = manager_id

        if changes:
            self.updated_by = updated_by
            self.updated_at = utcnow()
            self.raise_event(
                OrganizationUpdated(tenant_id=self.tenant_id, changes=changes, updated_by=updated_by)
            )
        return changes

    def _change_status(
        self,
        target: LifecycleStatus,
        event_type: type[OrganizationStatusChanged],
        updated_by: str,
    ) -> None:
        previous = self.status
        if not apply_transition(PLATFORM_TRANSITIONS, previous, target, "Organization"):
            return
        self.status = target
        self.updated_by = updated_by
        self.updated_at = utcnow()
        self.raise_event(
            event_type(
                tenant_id=self.tenant_id,
                previous_status=previous,
                new_status=target,
                updated_by=updated_by,
            )
        )
