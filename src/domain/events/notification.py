from dataclasses import dataclass

from src.domain.enums import NotificationStatus
from src.domain.events.base import DomainEvent


@dataclass(frozen=True, kw_only=True)
class NotificationEvent(DomainEvent):
    """Base for notification events; channel is 'email' or 'push'"""

    tenant_id: str
    channel: str


@dataclass(frozen=True, kw_only=True)
class NotificationCreated(NotificationEvent):
    template_id: str
    recipient_count: int
    priority: str


@dataclass(frozen=True, kw_only=True)
class NotificationSent(NotificationEvent):
    message_id: str | None = None
    provider: str | None = None
    provider_message_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class NotificationFailed(NotificationEvent):
    error_code: str
    error_message: str
    can_retry: bool
    retry_count: int


@dataclass(frozen=True, kw_only=True)
class NotificationRetryScheduled(NotificationEvent):
    retry_count: int
    max_retries: int


@dataclass(frozen=True, kw_only=True)
class NotificationCancelled(NotificationEvent):
    previous_status: NotificationStatus


@dataclass(frozen=True, kw_only=True)
class NotificationDeleted(NotificationEvent):
    previous_status: NotificationStatus
