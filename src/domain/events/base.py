"""
Domain event base class.

Events are immutable records of something that happened to an aggregate.
They carry the data needed by projections; they are not replayed to rebuild
aggregates, which are persisted as current state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

_ENVELOPE_FIELDS = {"event_id", "occurred_at", "aggregate_id", "aggregate_type", "event_version"}


def _serialize(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_serialize(v) for v in value]
    return value


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Base class for all domain events.

    Attributes:
        event_id: Unique identifier for this event occurrence
        occurred_at: Timestamp when event occurred
        aggregate_id: ID of the aggregate that produced this event
        aggregate_type: Type name of the aggregate
        event_version: Schema version of this event type (always 1)
    """

    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    aggregate_id: str = ""
    aggregate_type: str = ""
    event_version: int = 1

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    @property
    def payload(self) -> dict[str, Any]:
        """Event-specific fields, without the envelope"""
        return {
            f.name: _serialize(getattr(self, f.name))
            for f in fields(self)
            if f.name not in _ENVELOPE_FIELDS
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "event_version": self.event_version,
            "payload": self.payload,
        }
