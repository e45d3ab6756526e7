from datetime import datetime
from typing import Any

from sqlalchemy import (JSON, Boolean, CheckConstraint, DateTime, Integer,
                        String, Text)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from src.domain.enums import NotificationPriority, NotificationStatus
from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import (TimestampMixin,
                                                          UuidMixin)


class NotificationColumnsMixin(UuidMixin, TimestampMixin):
    """Delivery-state columns shared by the email and push tables"""

    # No foreign key; the tenant is not required to exist in this database
    tenant_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    template_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    recipients: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=NotificationStatus.PENDING.value, index=True
    )
    priority: Mapped[str] = mapped_column(
        String, nullable=False, default=NotificationPriority.NORMAL.value
    )
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    retry_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_retries: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    can_retry: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    scheduled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    failed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    message_id: Mapped[str | None] = mapped_column(String)
    provider: Mapped[str | None] = mapped_column(String)
    provider_message_id: Mapped[str | None] = mapped_column(String)
    error_code: Mapped[str | None] = mapped_column(String)
    error_message: Mapped[str | None] = mapped_column(Text)
    error_details: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )
    revision: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    @declared_attr.directive
    def __table_args__(cls):
        return (
            CheckConstraint(
                "retry_count >= 0 AND retry_count <= max_retries",
                name=f"{cls.__tablename__}_retry_bounds",
            ),
        )


class EmailNotification(NotificationColumnsMixin, Base):
    __tablename__ = "email_notification"

    subject: Mapped[str] = mapped_column(String(998), nullable=False)
    html_content: Mapped[str | None] = mapped_column(Text)
    text_content: Mapped[str | None] = mapped_column(Text)


class PushNotification(NotificationColumnsMixin, Base):
    __tablename__ = "push_notification"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)


class SmsNotification(NotificationColumnsMixin, Base):
    __tablename__ = "sms_notification"

    content: Mapped[str | None] = mapped_column(String(160))


class WebhookNotification(NotificationColumnsMixin, Base):
    """Delivery options (httpMethod, headers, timeout) live in the metadata column"""

    __tablename__ = "webhook_notification"
