"""
Notification use cases.

A fresh aggregate is built for every call; it loads the notification,
applies one command, persists, and its events are published once the write commits.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from src.application.services.base import ApplicationService
from src.application.services.results import OperationResult
from src.domain.aggregates import (EmailNotificationAggregate,
                                   NotificationAggregate,
                                   PushNotificationAggregate,
                                   SmsNotificationAggregate,
                                   WebhookNotificationAggregate)
from src.domain.aggregates.commands import (FailNotificationCommand,
                                            SendNotificationCommand)
from src.domain.entities.notification import NotificationEntity
from src.domain.services.notification_policy import NotificationPolicy

if TYPE_CHECKING:
    from src.application.events.event_bus import EventBus
    from src.domain.repositories import Repository

logger = logging.getLogger(__name__)

AggregateT = TypeVar("AggregateT", bound=NotificationAggregate)


class NotificationService(ApplicationService, Generic[AggregateT]):
    """Runs notification commands for one channel"""

    aggregate_class: type[AggregateT]

    def __init__(
        self,
        repository: Repository,
        event_bus: EventBus | None = None,
        policy: NotificationPolicy | None = None,
    ) -> None:
        super().__init__(event_bus)
        self.repository = repository
        self.policy = policy or NotificationPolicy()

    def _new_aggregate(self) -> AggregateT:
        return self.aggregate_class(self.repository, self.policy)

    async def create(self, command: Any) -> OperationResult[NotificationEntity]:
        aggregate = self._new_aggregate()
        notification = await aggregate.create(command)
        await self._publish(aggregate)
        return OperationResult.ok(notification, f"{aggregate.KIND} notification created")

    async def get(self, notification_id: str) -> OperationResult[NotificationEntity]:
        aggregate = self._new_aggregate()
        return OperationResult.ok(await aggregate.load(notification_id))

    async def send(
        self, notification_id: str, command: SendNotificationCommand
    ) -> OperationResult[NotificationEntity]:
        return await self._run(notification_id, lambda a: a.send(command), "marked as sent")

    async def fail(
        self, notification_id: str, command: FailNotificationCommand
    ) -> OperationResult[NotificationEntity]:
        return await self._run(notification_id, lambda a: a.fail(command), "marked as failed")

    async def retry(self, notification_id: str) -> OperationResult[NotificationEntity]:
        return await self._run(notification_id, lambda a: a.retry(), "queued for retry")

    async def cancel(self, notification_id: str) -> OperationResult[NotificationEntity]:
        return await self._run(notification_id, lambda a: a.cancel(), "cancelled")

    async def delete(self, notification_id: str) -> OperationResult[None]:
        aggregate = self._new_aggregate()
        await aggregate.load(notification_id)
        await aggregate.delete()
        await self._publish(aggregate)
        return OperationResult.ok(None, f"{aggregate.KIND} notification deleted")

    async def _run(
        self,
        notification_id: str,
        operation: Callable[[AggregateT], Awaitable[NotificationEntity]],
        outcome: str,
    ) -> OperationResult[NotificationEntity]:
        aggregate = self._new_aggregate()
        await aggregate.load(notification_id)
        notification = await operation(aggregate)
        await self._publish(aggregate)
        return OperationResult.ok(notification, f"{aggregate.KIND} notification {outcome}")

    async def _publish(self, aggregate: NotificationAggregate) -> None:
        await self._publish_after_commit(self.repository, aggregate.collect_domain_events())


class EmailNotificationService(NotificationService[EmailNotificationAggregate]):
    aggregate_class = EmailNotificationAggregate


class PushNotificationService(NotificationService[PushNotificationAggregate]):
    aggregate_class = PushNotificationAggregate


class SmsNotificationService(NotificationService[SmsNotificationAggregate]):
    aggregate_class = SmsNotificationAggregate


class WebhookNotificationService(NotificationService[WebhookNotificationAggregate]):
    aggregate_class = WebhookNotificationAggregate
