"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.entities.base import AggregateRoot, utcnow
from src.domain.enums import UserStatus
from src.domain.events.user import (UserCreated, UserDeleted,
                                    UserStatusChanged, UserUpdated)
from src.domain.exceptions import StateConflictException
from src.domain.lifecycle import USER_TRANSITIONS, can_transition, ensure_transition
from src.domain.value_objects.core import EmailAddress, Scope, Username, new_id


@dataclass
class UserEntity(AggregateRoot):
    id: str
    scope: Scope
    username: Username
    email: EmailAddress
    display_name: str | None = None
    status: UserStatus = UserStatus.PENDING_VERIFICATION
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
        username: str,
        email: str,
        created_by: str = "system",
        display_name: str | None = None,
        organization_id: str | None = None,
        department_id: str | None = None,
    ) -> "UserEntity":
        user = cls(
            id=new_id(),
            scope=Scope(
                tenant_id=tenant_id,
                organization_id=organization_id,
                department_id=department_id,
            ),
            username=Username(username),
            email=EmailAddress(email),
            display_name=display_name,
            created_by=created_by,
        )
        user.raise_event(
            UserCreated(
                tenant_id=tenant_id,
                organization_id=organization_id,
                department_id=department_id,
                username=user.username.value,
                email=user.email.value,
                display_name=display_name,
                status=user.status,
                created_by=created_by,
            )
        )
        return user

    @property
    def tenant_id(self) -> str:
        return self.scope.tenant_id

    def can_transition_to(self, status: UserStatus) -> bool:
        return can_transition(USER_TRANSITIONS, self.status, status)

    def activate(self, updated_by: str = "system") -> None:
        self._change_status(UserStatus.ACTIVE, updated_by)

    def suspend(self, reason: str | None = None, updated_by: str = "system") -> None:
        self._change_status(UserStatus.SUSPENDED, updated_by, reason)

    def lock(self, reason: str | None = None, updated_by: str = "system") -> None:
        self._change_status(UserStatus.LOCKED, updated_by, reason)

    def expire(self, updated_by: str = "system") -> None:
        self._change_status(UserStatus.EXPIRED, updated_by)

    def delete(self, hard: bool = False, deleted_by: str = "system") -> None:
        # A soft-deleted user can still be purged
        if not (hard and self.status == UserStatus.DELETED):
            ensure_transition(USER_TRANSITIONS, self.status, UserStatus.DELETED, "User")
        self.status = UserStatus.DELETED
        self._touch(deleted_by)
        self.raise_event(
            UserDeleted(tenant_id=self.tenant_id, hard_delete=hard, deleted_by=deleted_by)
        )

    def update_profile(
        self,
        updated_by: str = "system",
        display_name: str | None = None,
        email: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> dict[str, dict[str, Any]]:
        if self.status == UserStatus.DELETED:
            raise StateConflictException("Deleted users cannot be modified", self.status.value)

        changes: dict[str, dict[str, Any]] = {}
        if display_name is not None and display_name != self.display_name:
            changes["display_name"] = {"old": self.display_name, "new": display_name}
            self.display_name = display_name
        if email is not None:
            new_email = EmailAddress(email)
            if new_email != self.email:
                changes["email"] = {"old": self.email.value, "new": new_email.value}
                self.email = new_email
        if metadata is not None and metadata != self.metadata:
            changes["metadata"] = {"old": dict(self.metadata), "new": dict(metadata)}
            self.metadata = dict(metadata)

        if changes:
            self._touch(updated_by)
            self.raise_event(
                UserUpdated(tenant_id=self.tenant_id, changes=changes, updated_by=updated_by)
            )
        return changes

    def _change_status(self, target: UserStatus, updated_by: str, reason: str | None = None) -> None:
        ensure_transition(USER_TRANSITIONS, self.status, target, "User")
        previous = self.status
        self.status = target
        self._touch(updated_by)
        self.raise_event(
            UserStatusChanged(
                tenant_id=self.tenant_id,
                previous_status=previous,
                new_status=target,
                reason=reason,
                updated_by=updated_by,
            )
        )

    def _touch(self, updated_by: str) -> None:
        self.updated_by = updated_by
        self.updated_at = utcnow()
