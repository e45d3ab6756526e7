"""Shared plumbing for entity application services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.shared.context import current_actor

if TYPE_CHECKING:
    from src.application.events.event_bus import EventBus
    from src.domain.entities.base import AggregateRoot
    from src.domain.events.base import DomainEvent
    from src.domain.repositories import Repository

logger = logging.getLogger(__name__)


class ApplicationService:
    """
    Base for services that persist one aggregate and publish its events.

    Events are handed to the repository's after_commit hook, so projections
    only see changes that were actually committed.
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        self.event_bus = event_bus

    @staticmethod
    def actor(explicit: str | None = None) -> str:
        return explicit or current_actor()

    async def _save_and_publish(self, repository: Repository, entity: AggregateRoot) -> None:
        await repository.save(entity)
        events = entity.collect_domain_events()
        await self._publish_after_commit(repository, events)
        logger.debug(f"Saved {type(entity).__name__} {entity.id} ({len(events)} events)")

    async def _publish_after_commit(self, repository: Repository, events: list[DomainEvent]) -> None:
        if self.event_bus is None or not events:
            return
        event_bus = self.event_bus

        async def publish() -> None:
            await event_bus.publish_all(events)

        await repository.after_commit(publish)
