"""
Notification aggregates.

An aggregate wraps at most one loaded notification and its repository. It is
built per request, applies one command, persists, and is discarded. Every
guard violation raises synchronously; nothing is retried automatically.
"""

import logging
from typing import ClassVar, Generic, TypeVar

from src.domain.aggregates.commands import (CreateEmailNotificationCommand,
                                            CreatePushNotificationCommand,
                                            CreateSmsNotificationCommand,
                                            CreateWebhookNotificationCommand,
                                            FailNotificationCommand,
                                            SendNotificationCommand)
from src.domain.entities.notification import (EmailNotificationEntity,
                                              NotificationEntity,
                                              PushNotificationEntity,
                                              SmsNotificationEntity,
                                              WebhookNotificationEntity)
from src.domain.events.base import DomainEvent
from src.domain.events.notification import NotificationDeleted
from src.domain.exceptions import (NotificationNotFoundException,
                                   ValidationException)
from src.domain.repositories import Repository
from src.domain.services.notification_policy import NotificationPolicy
from src.domain.value_objects.core import (DeviceToken, EmailAddress,
                                           EmailSubject, EntityId, new_id)
from src.domain.value_objects.messaging import PhoneNumber, WebhookUrl

logger = logging.getLogger(__name__)

NotificationT = TypeVar("NotificationT", bound=NotificationEntity)


class NotificationAggregate(Generic[NotificationT]):
    """Lifecycle orchestration shared by every notification channel"""

    KIND: ClassVar[str] = "Notification"

    def __init__(
        self,
        repository: Repository[NotificationT],
        policy: NotificationPolicy | None = None,
    ):
        self.repository = repository
        self.policy = policy or NotificationPolicy()
        self._notification: NotificationT | None = None
        self._released_events: list[DomainEvent] = []

    @property
    def notification(self) -> NotificationT | None:
        return self._notification

    def _require_loaded(self) -> NotificationT:
        if self._notification is None:
            raise NotificationNotFoundException(self.KIND)
        return self._notification

    async def _persist_new(self, notification: NotificationT) -> NotificationT:
        report = self.policy.validate(notification)
        if not report.is_valid:
            raise ValidationException("; ".join(report.errors), field="recipients")

        notification._record_created()
        await self.repository.save(notification)
        self._notification = notification
        logger.info(
            f"Created {self.KIND.lower()} notification {notification.id} "
            f"for tenant {notification.tenant_id}"
        )
        return notification

    async def load(self, notification_id: str) -> NotificationT:
        notification = await self.repository.find_by_id(notification_id)
        if notification is None:
            raise NotificationNotFoundException(self.KIND, notification_id)
        self._notification = notification
        return notification

    async def send(self, command: SendNotificationCommand) -> NotificationT:
        notification = self._require_loaded()
        notification.mark_as_sent(
            message_id=command.message_id,
            provider=command.provider,
            provider_message_id=command.provider_message_id,
        )
        await self.repository.save(notification)
        logger.info(f"{self.KIND} notification {notification.id} marked as sent")
        return notification

    async def fail(self, command: FailNotificationCommand) -> NotificationT:
        notification = self._require_loaded()
        can_retry = (
            command.can_retry
            if command.can_retry is not None
            else self.policy.is_retryable_error(command.error_code)
        )
        notification.mark_as_failed(
            error_code=command.error_code,
            error_message=command.error_message,
            error_details=command.error_details,
            can_retry=can_retry,
            provider=command.provider,
        )
        await self.repository.save(notification)
        logger.warning(
            f"{self.KIND} notification {notification.id} failed: "
            f"{command.error_code} (can_retry={can_retry})"
        )
        return notification

    async def retry(self) -> NotificationT:
        notification = self._require_loaded()
        notification.reset_for_retry()
        await self.repository.save(notification)
        logger.info(
            f"{self.KIND} notification {notification.id} queued for retry "
            f"{notification.retry_count}/{notification.max_retries}"
        )
        return notification

    async def cancel(self) -> NotificationT:
        notification = self._require_loaded()
        notification.mark_as_cancelled()
        await self.repository.save(notification)
        return notification

    async def delete(self) -> None:
        notification = self._require_loaded()
        notification.ensure_deletable()
        await self.repository.delete(notification.id)

        self._released_events.extend(notification.collect_domain_events())
        event = NotificationDeleted(
            tenant_id=notification.tenant_id,
            channel=notification.CHANNEL,
            previous_status=notification.status,
            aggregate_id=notification.id,
            aggregate_type=type(notification)._aggregate_type(),
        )
        self._released_events.append(event)
        self._notification = None
        logger.info(f"{self.KIND} notification {notification.id} deleted")

    def collect_domain_events(self) -> list[DomainEvent]:
        events = list(self._released_events)
        self._released_events.clear()
        if self._notification is not None:
            events.extend(self._notification.collect_domain_events())
        return events

    @staticmethod
    def _parse_ids(tenant_id: str, template_id: str) -> tuple[str, str]:
        return (
            EntityId.parse(tenant_id, "tenant_id").value,
            EntityId.parse(template_id, "template_id").value,
        )


class EmailNotificationAggregate(NotificationAggregate[EmailNotificationEntity]):
    KIND = "Email"

    async def create(self, command: CreateEmailNotificationCommand) -> EmailNotificationEntity:
        tenant_id, template_id = self._parse_ids(command.tenant_id, command.template_id)
        notification = EmailNotificationEntity(
            id=new_id(),
            tenant_id=tenant_id,
            template_id=template_id,
            recipients=[EmailAddress(r) for r in command.recipients],
            subject=EmailSubject(command.subject),
            html_content=command.html_content,
            text_content=command.text_content,
            data=dict(command.data),
            priority=command.priority,
            scheduled_at=command.scheduled_at,
            max_retries=command.max_retries,
            metadata=dict(command.metadata),
        )
        return await self._persist_new(notification)


class PushNotificationAggregate(NotificationAggregate[PushNotificationEntity]):
    KIND = "Push"

    async def create(self, command: CreatePushNotificationCommand) -> PushNotificationEntity:
        tenant_id, template_id = self._parse_ids(command.tenant_id, command.template_id)
        notification = PushNotificationEntity(
            id=new_id(),
            tenant_id=tenant_id,
            template_id=template_id,
            recipients=[DeviceToken(r) for r in command.recipients],
            title=command.title,
            body=command.body,
            data=dict(command.data),
            priority=command.priority,
            scheduled_at=command.scheduled_at,
            max_retries=command.max_retries,
            metadata=dict(command.metadata),
        )
        return await self._persist_new(notification)


class SmsNotificationAggregate(NotificationAggregate[SmsNotificationEntity]):
    KIND = "SMS"

    async def create(self, command: CreateSmsNotificationCommand) -> SmsNotificationEntity:
        tenant_id, template_id = self._parse_ids(command.tenant_id, command.template_id)
        notification = SmsNotificationEntity(
            id=new_id(),
            tenant_id=tenant_id,
            template_id=template_id,
            recipients=[PhoneNumber(r) for r in command.recipients],
            content=command.content,
            data=dict(command.data),
            priority=command.priority,
            scheduled_at=command.scheduled_at,
            max_retries=command.max_retries,
            metadata=dict(command.metadata),
        )
        return await self._persist_new(notification)


class WebhookNotificationAggregate(NotificationAggregate[WebhookNotificationEntity]):
    KIND = "Webhook"

    async def create(self, command: CreateWebhookNotificationCommand) -> WebhookNotificationEntity:
        tenant_id, template_id = self._parse_ids(command.tenant_id, command.template_id)
        notification = WebhookNotificationEntity(
            id=new_id(),
            tenant_id=tenant_id,
            template_id=template_id,
            recipients=[WebhookUrl(r) for r in command.recipients],
            data=dict(command.data),
            priority=command.priority,
            scheduled_at=command.scheduled_at,
            max_retries=command.max_retries,
            metadata=dict(command.metadata),
        )
        return await self._persist_new(notification)
