"""
Aggregate root base.

Aggregates record domain events while they change; the application layer
collects them after a successful save and hands them to the event bus.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.events.base import DomainEvent


def utcnow() -> datetime:
    return datetime.now(UTC)


class AggregateRoot:
    """
    Event-recording mixin for dataclass entities.

    The pending event list lives outside the dataclass fields so it never
    takes part in equality, repr or persistence.
    """

    id: str

    @property
    def _domain_events(self) -> list[DomainEvent]:
        return self.__dict__.setdefault("_pending_events", [])

    def raise_event(self, event: DomainEvent) -> None:
        """Record a domain event, enriching it with aggregate context."""
        if not event.aggregate_id:
            object.__setattr__(event, "aggregate_id", self.id)
        if not event.aggregate_type:
            object.__setattr__(event, "aggregate_type", self._aggregate_type())
        self._domain_events.append(event)

    def collect_domain_events(self) -> list[DomainEvent]:
        """Return pending events and clear them."""
        events = list(self._domain_events)
        self._domain_events.clear()
        return events

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    @property
    def has_domain_events(self) -> bool:
        return len(self._domain_events) > 0

    @classmethod
    def _aggregate_type(cls) -> str:
        name = cls.__name__
        return name[: -len("Entity")] if name.endswith("Entity") else name
