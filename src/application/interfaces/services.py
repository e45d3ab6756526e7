"""
Ports used by the application layer.

These protocols define the contracts for read-model storage and outbound
event publishing. Following Dependency Inversion Principle (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol

from src.domain.events.base import DomainEvent


class IReadModelStore(Protocol):
    """Key/value document store backing query-side read models"""

    async def get(self, collection: str, key: str) -> dict[str, Any] | None:
        ...

    async def put(self, collection: str, key: str, document: dict[str, Any]) -> None:
        ...

    async def delete(self, collection: str, key: str) -> None:
        ...

    async def find(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Return documents whose fields equal every filter value"""
        ...


class IEventPublisher(Protocol):
    """Outbound publisher for domain events (e.g. Redis pub/sub)"""

    async def publish_event(self, event: DomainEvent) -> bool:
        ...
