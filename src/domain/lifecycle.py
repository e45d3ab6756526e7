"""
Status transition tables.

Every aggregate keeps its status as a plain field and asks these tables
whether a move is legal. Tables map a status to the set of statuses it may
move to; a status missing from a table has no outgoing edges.
"""

from collections.abc import Mapping
from enum import Enum
from typing import TypeVar

from src.domain.enums import LifecycleStatus, TenantStatus, UserStatus
from src.domain.exceptions import InvalidStatusTransitionException

StatusT = TypeVar("StatusT", bound=Enum)

TransitionTable = Mapping[StatusT, frozenset[StatusT]]

TENANT_TRANSITIONS: TransitionTable[TenantStatus] = {
    TenantStatus.PENDING: frozenset({TenantStatus.ACTIVE, TenantStatus.DELETED}),
    TenantStatus.ACTIVE: frozenset({TenantStatus.SUSPENDED, TenantStatus.DELETED}),
    TenantStatus.SUSPENDED: frozenset({TenantStatus.ACTIVE, TenantStatus.DELETED}),
    TenantStatus.DELETED: frozenset(),
}

# Shared by platforms, organizations and departments
PLATFORM_TRANSITIONS: TransitionTable[LifecycleStatus] = {
    LifecycleStatus.INITIALIZING: frozenset({LifecycleStatus.ACTIVE, LifecycleStatus.INACTIVE}),
    LifecycleStatus.ACTIVE: frozenset(
        {LifecycleStatus.SUSPENDED, LifecycleStatus.MAINTENANCE, LifecycleStatus.INACTIVE}
    ),
    LifecycleStatus.MAINTENANCE: frozenset(
        {LifecycleStatus.ACTIVE, LifecycleStatus.SUSPENDED, LifecycleStatus.INACTIVE}
    ),
    LifecycleStatus.SUSPENDED: frozenset(
        {LifecycleStatus.ACTIVE, LifecycleStatus.MAINTENANCE, LifecycleStatus.INACTIVE}
    ),
    LifecycleStatus.INACTIVE: frozenset({LifecycleStatus.ACTIVE}),
    LifecycleStatus.DELETED: frozenset(),
}

_USER_RECOVERABLE = frozenset({UserStatus.ACTIVE, UserStatus.DELETED})

USER_TRANSITIONS: TransitionTable[UserStatus] = {
    UserStatus.PENDING_VERIFICATION: _USER_RECOVERABLE,
    UserStatus.INACTIVE: _USER_RECOVERABLE,
    UserStatus.ACTIVE: frozenset(
        {UserStatus.SUSPENDED, UserStatus.LOCKED, UserStatus.DELETED, UserStatus.EXPIRED}
    ),
    UserStatus.SUSPENDED: _USER_RECOVERABLE,
    UserStatus.LOCKED: _USER_RECOVERABLE,
    UserStatus.EXPIRED: _USER_RECOVERABLE,
    UserStatus.DELETED: frozenset(),
}


def can_transition(table: TransitionTable[StatusT], current: StatusT, target: StatusT) -> bool:
    """Check whether the table has an edge from current to target"""
    return target in table.get(current, frozenset())


def ensure_transition(
    table: TransitionTable[StatusT], current: StatusT, target: StatusT, entity: str
) -> None:
    """Raise InvalidStatusTransitionException unless the edge exists"""
    if not can_transition(table, current, target):
        raise InvalidStatusTransitionException(entity, current.value, target.value)


def apply_transition(
    table: TransitionTable[StatusT], current: StatusT, target: StatusT, entity: str
) -> bool:
    """
    Idempotent transition check.

    Returns False when the entity is already in the target status (nothing to do),
    True when the move is legal, and raises when it is not.
    """
    if current == target:
        return False
    ensure_transition(table, current, target, entity)
    return True
