"""Per-tenant notification delivery counters."""

import logging

from src.application.interfaces.services import IReadModelStore
from src.domain.events.base import DomainEvent
from src.domain.events.notification import (NotificationCancelled,
                                            NotificationCreated,
                                            NotificationDeleted,
                                            NotificationEvent,
                                            NotificationFailed,
                                            NotificationRetryScheduled,
                                            NotificationSent)

logger = logging.getLogger(__name__)

NOTIFICATION_STATS = "notification_stats"

COUNTERS = ("pending", "sent", "failed", "cancelled")


def empty_stats(tenant_id: str) -> dict:
    return {"tenant_id": tenant_id, "total": 0, "retries": 0, **{name: 0 for name in COUNTERS}}


class NotificationProjection:
    """
    Counts notifications per tenant by current delivery status.

    Each transition moves one unit between counters, so the counters always
    sum to the number of live notifications.
    """

    EVENTS = (
        NotificationCreated,
        NotificationSent,
        NotificationFailed,
        NotificationRetryScheduled,
        NotificationCancelled,
        NotificationDeleted,
    )

    def __init__(self, store: IReadModelStore):
        self.store = store

    async def handle(self, event: DomainEvent) -> None:
        if not isinstance(event, NotificationEvent):
            return
        logger.info(f"Processing {event.event_type} for notification {event.aggregate_id}")
        try:
            stats = await self.store.get(NOTIFICATION_STATS, event.tenant_id) or empty_stats(
                event.tenant_id
            )
            self._apply(stats, event)
            await self.store.put(NOTIFICATION_STATS, event.tenant_id, stats)
        except Exception as e:
            logger.error(
                f"Failed to process {event.event_type} for notification {event.aggregate_id}: {e}"
            )
            raise
        logger.info(
            f"Successfully processed {event.event_type} for notification {event.aggregate_id}"
        )

    @staticmethod
    def _apply(stats: dict, event: NotificationEvent) -> None:
        def move(source: str | None, target: str | None) -> None:
            if source is not None:
                stats[source] = max(0, stats[source] - 1)
            if target is not None:
                stats[target] += 1

        if isinstance(event, NotificationCreated):
            stats["total"] += 1
            move(None, "pending")
        elif isinstance(event, NotificationSent):
            move("pending", "sent")
        elif isinstance(event, NotificationFailed):
            move("pending", "failed")
        elif isinstance(event, NotificationRetryScheduled):
            stats["retries"] += 1
            move("failed", "pending")
        elif isinstance(event, NotificationCancelled):
            move(event.previous_status.value, "cancelled")
        elif isinstance(event, NotificationDeleted):
            stats["total"] = max(0, stats["total"] - 1)
            move(event.previous_status.value, None)
