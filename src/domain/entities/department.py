"""
Department domain entity.

Departments form a tree inside one organization. A root department has
level 1 and path "/<id>"; a child has level = parent.level + 1 and
path = parent.path + "/<id>".
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.entities.base import AggregateRoot, utcnow
from src.domain.entities.organization import require_actor
from src.domain.enums import DepartmentType, LifecycleStatus
from src.domain.events.organization import (DepartmentActivated,
                                            DepartmentCreated,
                                            DepartmentDeactivated,
                                            DepartmentMoved,
                                            DepartmentStatusChanged,
                                            DepartmentSuspended,
                                            DepartmentUpdated)
from src.domain.exceptions import StateConflictException, ValidationException
from src.domain.lifecycle import PLATFORM_TRANSITIONS, apply_transition
from src.domain.value_objects.core import EntityCode, EntityName, Scope, new_id


@dataclass
class DepartmentEntity(AggregateRoot):
    id: str
    scope: Scope
    name: EntityName
    code: EntityCode
    type: DepartmentType
    status: LifecycleStatus = LifecycleStatus.INITIALIZING
    description: str | None = None
    parent_id: str | None = None
    level: int = 1
    path: str = ""
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
        organization_id: str,
        name: str,
        code: str,
        department_type: str | DepartmentType,
        created_by: str,
        parent: "DepartmentEntity | None" = None,
        description: str | None = None,
        manager_id: str | None = None,
    ) -> "DepartmentEntity":
        actor = require_actor(created_by)
        if not organization_id:
            raise ValidationException("organization_id is required", field="organization_id")
        try:
            resolved_type = DepartmentType(department_type)
        except ValueError as e:
            raise ValidationException(
                f"Department type must be one of {DepartmentType.values()}", field="type"
            ) from e

        scope = Scope(tenant_id=tenant_id, organization_id=organization_id)
        if parent is not None:
            cls._check_parent(parent, scope)

        department_id = new_id()
        level, path = cls._position(department_id, parent)
        department = cls(
            id=department_id,
            scope=scope,
            name=EntityName(name),
            code=EntityCode(code),
            type=resolved_type,
            description=description,
            parent_id=parent.id if parent else None,
            level=level,
            path=path,
            manager_id=manager_id,
            created_by=actor,
        )
        department.raise_event(
            DepartmentCreated(
                tenant_id=tenant_id,
                organization_id=organization_id,
                name=department.name.value,
                code=department.code.value,
                department_type=resolved_type,
                parent_id=department.parent_id,
                level=level,
                path=path,
                created_by=actor,
            )
        )
        return department

    @property
    def tenant_id(self) -> str:
        return self.scope.tenant_id

    @property
    def organization_id(self) -> str:
        # organization_id is always set on department scopes
        return self.scope.organization_id or ""

    def is_ancestor_of(self, other: "DepartmentEntity") -> bool:
        return other.path.startswith(self.path + "/")

    def activate(self, updated_by: str = "system") -> None:
        self._change_status(LifecycleStatus.ACTIVE, DepartmentActivated, updated_by)

    def suspend(self, updated_by: str = "system") -> None:
        self._change_status(LifecycleStatus.SUSPENDED, DepartmentSuspended, updated_by)

    def deactivate(self, updated_by: str = "system") -> None:
        self._change_status(LifecycleStatus.INACTIVE, DepartmentDeactivated, updated_by)

    def update_info(
        self,
        updated_by: str = "system",
        name: str | None = None,
        description: str | None = None,
        manager_id: str | None = None,
    ) -> dict[str, dict[str, Any]]:
        self._ensure_not_deleted()
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
            self._touch(updated_by)
            self.raise_event(
                DepartmentUpdated(tenant_id=self.tenant_id, changes=changes, updated_by=updated_by)
            )
        return changes

    def move_to(self, parent: "DepartmentEntity | None", updated_by: str = "system") -> None:
        """Re-parent this department; descendants are rebased by the caller"""
        self._ensure_not_deleted()
        if parent is not None:
            if parent.id == self.id or self.is_ancestor_of(parent):
                raise ValidationException(
                    "A department cannot be moved under itself or one of its descendants",
                    field="parent_id",
                )
            self._check_parent(parent, self.scope)

        previous_parent, previous_path = self.parent_id, self.path
        level, path = self._position(self.id, parent)
        self.parent_id = parent.id if parent else None
        self.update_hierarchy(level, path)
        self._touch(updated_by)
        self.raise_event(
            DepartmentMoved(
                tenant_id=self.tenant_id,
                previous_parent_id=previous_parent,
                new_parent_id=self.parent_id,
                previous_path=previous_path,
                new_path=path,
                level=level,
                updated_by=updated_by,
            )
        )

    def update_hierarchy(self, level: int, path: str) -> None:
        if level < 1:
            raise ValidationException("Department level must be at least 1", field="level")
        self.level = level
        self.path = path

    def rebase(self, old_prefix: str, new_prefix: str, level_delta: int) -> None:
        """Rewrite the path of a descendant after one of its ancestors moved"""
        if not self.path.startswith(old_prefix + "/"):
            raise ValidationException(f"{self.path} is not below {old_prefix}", field="path")
        self.update_hierarchy(self.level + level_delta, new_prefix + self.path[len(old_prefix):])

    @staticmethod
    def _position(department_id: str, parent: "DepartmentEntity | None") -> tuple[int, str]:
        if parent is None:
            return 1, f"/{department_id}"
        return parent.level + 1, f"{parent.path}/{department_id}"

    @staticmethod
    def _check_parent(parent: "DepartmentEntity", scope: Scope) -> None:
        if parent.scope.organization_id != scope.organization_id:
            raise ValidationException(
                "Parent department belongs to another organization", field="parent_id"
            )
        if parent.status == LifecycleStatus.DELETED:
            raise StateConflictException(
                "Cannot attach a department to a deleted parent", parent.status.value
            )

    def _change_status(
        self,
        target: LifecycleStatus,
        event_type: type[DepartmentStatusChanged],
        updated_by: str,
    ) -> None:
        previous = self.status
        if not apply_transition(PLATFORM_TRANSITIONS, previous, target, "Department"):
            return
        self.status = target
        self._touch(updated_by)
        self.raise_event(
            event_type(
                tenant_id=self.tenant_id,
                previous_status=previous,
                new_status=target,
                updated_by=updated_by,
            )
        )

    def _ensure_not_deleted(self) -> None:
        if self.status == LifecycleStatus.DELETED:
            raise StateConflictException("Deleted departments cannot be modified", self.status.value)

    def _touch(self, updated_by: str) -> None:
        self.updated_by = updated_by
        self.updated_at = utcnow()
