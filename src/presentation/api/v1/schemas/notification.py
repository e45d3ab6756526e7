"""Pydantic schemas for email, push, SMS and webhook notifications"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from src.domain.enums import NotificationPriority


class NotificationCreateBase(BaseModel):
    tenant_id: str
    template_id: str
    recipients: list[str]
    data: dict[str, Any] = Field(default_factory=dict)
    priority: NotificationPriority = NotificationPriority.NORMAL
    scheduled_at: datetime | None = None
    max_retries: int | None = None  # defaults to settings.notification_max_retries
    metadata: dict[str, Any] = Field(default_factory=dict)


class EmailNotificationCreate(NotificationCreateBase):
    subject: str
    html_content: str | None = None
    text_content: str | None = None


class PushNotificationCreate(NotificationCreateBase):
    title: str
    body: str


class SmsNotificationCreate(NotificationCreateBase):
    content: str | None = None


class WebhookNotificationCreate(NotificationCreateBase):
    """Delivery options go in metadata: httpMethod, headers, timeout (ms)"""

    pass


class NotificationSend(BaseModel):
    message_id: str | None = None
    provider: str | None = None
    provider_message_id: str | None = None


class NotificationFail(BaseModel):
    error_code: str
    error_message: str
    error_details: dict[str, Any] | None = None
    can_retry: bool | None = None  # null lets the retry policy decide
    provider: str | None = None


class NotificationResponse(BaseModel):
    id: str
    channel: str
    tenant_id: str
    template_id: str
    recipients: list[str]
    status: str
    priority: str
    data: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
    retry_count: int
    max_retries: int
    can_retry: bool
    retries_exhausted: bool
    is_scheduled: bool
    error_code: str | None = None
    error_message: str | None = None
    error_details: dict[str, Any] | None = None
    message_id: str | None = None
    provider: str | None = None
    provider_message_id: str | None = None
    scheduled_at: str | None = None
    sent_at: str | None = None
    failed_at: str | None = None
    created_at: str
    updated_at: str
    revision: int = 1

    # Channel-specific fields
    subject: str | None = None
    html_content: str | None = None
    text_content: str | None = None
    title: str | None = None
    body: str | None = None
    content: str | None = None
    http_method: str | None = None
    headers: dict[str, str] | None = None
    timeout_ms: int | None = None


class NotificationStatsResponse(BaseModel):
    tenant_id: str
    total: int = 0
    pending: int = 0
    sent: int = 0
    failed: int = 0
    cancelled: int = 0
    retries: int = 0
