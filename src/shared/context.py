"""
Request context management using contextvars.

Holds the acting principal and correlation id for the current request.
Services fall back to "system" when no actor was supplied, which is the
case for background work and tests.

Usage:
    # In middleware:
    set_current_actor(actor_id="admin-42", actor_type=ActorType.USER)

    # Anywhere below it:
    created_by = current_actor()  # "admin-42", or "system" outside a request
"""

from contextvars import ContextVar
from dataclasses import dataclass

from src.shared.enums import ActorType

SYSTEM_ACTOR = "system"

_current_actor_id: ContextVar[str | None] = ContextVar("current_actor_id", default=None)
_current_actor_type: ContextVar[ActorType] = ContextVar("current_actor_type", default=ActorType.SYSTEM)
_current_ip_address: ContextVar[str | None] = ContextVar("current_ip_address", default=None)
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


@dataclass(frozen=True)
class ActorContext:
    """Immutable snapshot of the current actor context."""

    actor_id: str | None
    actor_type: ActorType
    ip_address: str | None = None


def set_current_actor(
    actor_id: str | None,
    actor_type: ActorType = ActorType.USER,
    ip_address: str | None = None,
) -> None:
    _current_actor_id.set(actor_id)
    _current_actor_type.set(actor_type if actor_id else ActorType.SYSTEM)
    _current_ip_address.set(ip_address)


def clear_current_actor() -> None:
    _current_actor_id.set(None)
    _current_actor_type.set(ActorType.SYSTEM)
    _current_ip_address.set(None)


def get_current_actor_id() -> str | None:
    """Get the current actor id, or None outside an identified request."""
    return _current_actor_id.get()


def current_actor() -> str:
    """Actor recorded in created_by/updated_by fields"""
    return _current_actor_id.get() or SYSTEM_ACTOR


def get_current_ip_address() -> str | None:
    return _current_ip_address.get()


def set_correlation_id(correlation_id: str | None) -> None:
    _correlation_id.set(correlation_id)


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def get_actor_context() -> ActorContext:
    return ActorContext(
        actor_id=_current_actor_id.get(),
        actor_type=_current_actor_type.get(),
        ip_address=_current_ip_address.get(),
    )
