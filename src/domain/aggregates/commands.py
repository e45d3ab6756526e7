"""Commands accepted by the notification aggregates."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.enums import NotificationPriority


@dataclass(frozen=True)
class CreateEmailNotificationCommand:
    tenant_id: str
    template_id: str
    recipients: list[str]
    subject: str
    html_content: str | None = None
    text_content: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    priority: NotificationPriority = NotificationPriority.NORMAL
    scheduled_at: datetime | None = None
    max_retries: int = 3
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CreatePushNotificationCommand:
    tenant_id: str
    template_id: str
    recipients: list[str]
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)
    priority: NotificationPriority = NotificationPriority.NORMAL
    scheduled_at: datetime | None = None
    max_retries: int = 3
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CreateSmsNotificationCommand:
    tenant_id: str
    template_id: str
    recipients: list[str]
    content: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    priority: NotificationPriority = NotificationPriority.NORMAL
    scheduled_at: datetime | None = None
    max_retries: int = 3
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CreateWebhookNotificationCommand:
    tenant_id: str
    template_id: str
    recipients: list[str]
    data: dict[str, Any] = field(default_factory=dict)
    priority: NotificationPriority = NotificationPriority.NORMAL
    scheduled_at: datetime | None = None
    max_retries: int = 3
    # httpMethod, headers and timeout (ms) for delivery
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SendNotificationCommand:
    message_id: str | None = None
    provider: str | None = None
    provider_message_id: str | None = None


@dataclass(frozen=True)
class FailNotificationCommand:
    error_code: str
    error_message: str
    error_details: dict[str, Any] | None = None
    # None lets the retry policy decide from the error code
    can_retry: bool | None = None
    provider: str | None = None
