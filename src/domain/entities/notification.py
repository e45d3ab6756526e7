"""
Notification domain entities.

Every notification channel (email, push, SMS, webhook) shares one delivery
lifecycle:

    PENDING -> SENT | FAILED | CANCELLED
    FAILED  -> PENDING   (reset_for_retry, while retry_count < max_retries)

SENT and CANCELLED are terminal, and so is FAILED once retries are exhausted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from src.domain.entities.base import AggregateRoot, utcnow
from src.domain.enums import NotificationPriority, NotificationStatus
from src.domain.events.notification import (NotificationCancelled,
                                            NotificationCreated,
                                            NotificationFailed,
                                            NotificationRetryScheduled,
                                            NotificationSent)
from src.domain.exceptions import StateConflictException, ValidationException
from src.domain.value_objects.core import DeviceToken, EmailAddress, EmailSubject
from src.domain.value_objects.messaging import PhoneNumber, WebhookUrl

DEFAULT_MAX_RETRIES = 3


@dataclass(kw_only=True)
class NotificationEntity(AggregateRoot):
    CHANNEL: ClassVar[str] = "notification"

    id: str
    tenant_id: str
    template_id: str
    status: NotificationStatus = NotificationStatus.PENDING
    priority: NotificationPriority = NotificationPriority.NORMAL
    data: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    scheduled_at: datetime | None = None
    sent_at: datetime | None = None
    failed_at: datetime | None = None
    retry_count: int = 0
    max_retries: int = DEFAULT_MAX_RETRIES
    can_retry: bool = True
    error_code: str | None = None
    error_message: str | None = None
    error_details: dict[str, Any] | None = None
    message_id: str | None = None
    provider: str | None = None
    provider_message_id: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    revision: int = 1

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValidationException("max_retries must not be negative", field="max_retries")
        if not 0 <= self.retry_count <= self.max_retries:
            raise ValidationException(
                "retry_count must be between 0 and max_retries", field="retry_count"
            )

    @property
    def recipient_values(self) -> list[str]:
        return [str(r) for r in getattr(self, "recipients", [])]

    def _record_created(self) -> None:
        self.raise_event(
            NotificationCreated(
                tenant_id=self.tenant_id,
                channel=self.CHANNEL,
                template_id=self.template_id,
                recipient_count=len(self.recipient_values),
                priority=self.priority.value,
            )
        )

    def should_send_now(self, now: datetime | None = None) -> bool:
        if self.status != NotificationStatus.PENDING:
            return False
        return self.scheduled_at is None or self.scheduled_at <= (now or utcnow())

    def is_scheduled(self, now: datetime | None = None) -> bool:
        return self.scheduled_at is not None and self.scheduled_at > (now or utcnow())

    def retries_exhausted(self) -> bool:
        return self.retry_count >= self.max_retries

    def mark_as_sent(
        self,
        message_id: str | None = None,
        provider: str | None = None,
        provider_message_id: str | None = None,
    ) -> None:
        if self.status != NotificationStatus.PENDING:
            raise StateConflictException(
                f"Cannot send {self.CHANNEL} notification with status {self.status.value}",
                self.status.value,
            )
        self.status = NotificationStatus.SENT
        self.sent_at = utcnow()
        self.message_id = message_id
        self.provider = provider
        self.provider_message_id = provider_message_id
        self.updated_at = self.sent_at
        self.raise_event(
            NotificationSent(
                tenant_id=self.tenant_id,
                channel=self.CHANNEL,
                message_id=message_id,
                provider=provider,
                provider_message_id=provider_message_id,
            )
        )

    def mark_as_failed(
        self,
        error_code: str,
        error_message: str,
        error_details: dict[str, Any] | None = None,
        can_retry: bool = True,
        provider: str | None = None,
    ) -> None:
        if self.status != NotificationStatus.PENDING:
            raise StateConflictException(
                f"Cannot mark {self.CHANNEL} notification with status "
                f"{self.status.value} as failed",
                self.status.value,
            )
        self.status = NotificationStatus.FAILED
        self.failed_at = utcnow()
        self.error_code = error_code
        self.error_message = error_message
        self.error_details = error_details
        self.can_retry = can_retry
        if provider is not None:
            self.provider = provider
        self.updated_at = self.failed_at
        self.raise_event(
            NotificationFailed(
                tenant_id=self.tenant_id,
                channel=self.CHANNEL,
                error_code=error_code,
                error_message=error_message,
                can_retry=can_retry,
                retry_count=self.retry_count,
            )
        )

    def reset_for_retry(self) -> None:
        if self.status != NotificationStatus.FAILED:
            raise StateConflictException(
                f"Only failed notifications can be retried (current status: {self.status.value})",
                self.status.value,
            )
        if not self.can_retry:
            raise StateConflictException("Notification is not retryable", self.status.value)
        if self.retries_exhausted():
            raise StateConflictException(
                f"Maximum retries ({self.max_retries}) reached", self.status.value
            )

        self.retry_count += 1
        self.status = NotificationStatus.PENDING
        self.error_code = None
        self.error_message = None
        self.error_details = None
        self.failed_at = None
        self.can_retry = True
        self.updated_at = utcnow()
        self.raise_event(
            NotificationRetryScheduled(
                tenant_id=self.tenant_id,
                channel=self.CHANNEL,
                retry_count=self.retry_count,
                max_retries=self.max_retries,
            )
        )

    def mark_as_cancelled(self) -> None:
        if self.status in (NotificationStatus.SENT, NotificationStatus.FAILED):
            raise StateConflictException(
                f"Cannot cancel {self.CHANNEL} notification with status {self.status.value}",
                self.status.value,
            )
        previous = self.status
        self.status = NotificationStatus.CANCELLED
        self.updated_at = utcnow()
        self.raise_event(
            NotificationCancelled(
                tenant_id=self.tenant_id, channel=self.CHANNEL, previous_status=previous
            )
        )

    def ensure_deletable(self) -> None:
        if self.status == NotificationStatus.PENDING:
            raise StateConflictException(
                f"Cannot delete {self.CHANNEL} notification with status {self.status.value}",
                self.status.value,
            )


@dataclass(kw_only=True)
class EmailNotificationEntity(NotificationEntity):
    CHANNEL: ClassVar[str] = "email"

    recipients: list[EmailAddress]
    subject: EmailSubject
    html_content: str | None = None
    text_content: str | None = None

    def __post_init__(self):
        super().__post_init__()
        if not self.recipients:
            raise ValidationException("At least one recipient is required", field="recipients")
        if not (self.html_content or self.text_content):
            raise ValidationException(
                "Email notifications need html or text content", field="content"
            )


@dataclass(kw_only=True)
class PushNotificationEntity(NotificationEntity):
    CHANNEL: ClassVar[str] = "push"

    recipients: list[DeviceToken]
    title: str
    body: str

    def __post_init__(self):
        super().__post_init__()
        if not self.recipients:
            raise ValidationException("At least one recipient is required", field="recipients")
        if not self.title or not self.title.strip():
            raise ValidationException("Push title must not be empty", field="title")
        if len(self.title) > 200:
            raise ValidationException("Push title must not exceed 200 characters", field="title")
        if not self.body or not self.body.strip():
            raise ValidationException("Push body must not be empty", field="body")


SMS_MAX_LENGTH = 160


@dataclass(kw_only=True)
class SmsNotificationEntity(NotificationEntity):
    CHANNEL: ClassVar[str] = "sms"

    recipients: list[PhoneNumber]
    # Without content the provider renders the template from data
    content: str | None = None

    def __post_init__(self):
        super().__post_init__()
        if not self.recipients:
            raise ValidationException("At least one recipient is required", field="recipients")
        if self.content is not None and len(self.content) > SMS_MAX_LENGTH:
            raise ValidationException(
                f"SMS content must not exceed {SMS_MAX_LENGTH} characters", field="content"
            )


DEFAULT_WEBHOOK_METHOD = "POST"
DEFAULT_WEBHOOK_TIMEOUT_MS = 30_000
WEBHOOK_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(kw_only=True)
class WebhookNotificationEntity(NotificationEntity):
    """Delivery options (httpMethod, headers, timeout) travel in metadata"""

    CHANNEL: ClassVar[str] = "webhook"

    recipients: list[WebhookUrl]

    def __post_init__(self):
        super().__post_init__()
        if not self.recipients:
            raise ValidationException("At least one recipient is required", field="recipients")
        if self.http_method not in WEBHOOK_METHODS:
            raise ValidationException(
                f"Webhook method must be one of {sorted(WEBHOOK_METHODS)}", field="metadata"
            )
        timeout = self.metadata.get("timeout")
        if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0):
            raise ValidationException(
                "Webhook timeout must be a positive number of milliseconds", field="metadata"
            )
        if not isinstance(self.metadata.get("headers") or {}, dict):
            raise ValidationException("Webhook headers must be an object", field="metadata")

    @property
    def http_method(self) -> str:
        return str(self.metadata.get("httpMethod") or DEFAULT_WEBHOOK_METHOD).upper()

    @property
    def headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", **(self.metadata.get("headers") or {})}

    @property
    def timeout_ms(self) -> int:
        return self.metadata.get("timeout") or DEFAULT_WEBHOOK_TIMEOUT_MS
