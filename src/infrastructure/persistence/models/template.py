from datetime import datetime
from typing import Any

from sqlalchemy import (JSON, DateTime, Integer, String, Text,
                        UniqueConstraint)
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.enums import TemplateReviewStatus, TemplateStatus
from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import AggregateModel


class Template(AggregateModel, Base):
    """Notification template; version_history holds TemplateVersion.to_dict() entries"""

    __tablename__ = "notification_template"
    __table_args__ = (UniqueConstraint("tenant_id", "name", name="uq_template_tenant_name"),)

    # No foreign key, as for the notification tables
    tenant_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    subject: Mapped[str | None] = mapped_column(String(998))
    content: Mapped[str] = mapped_column(Text, nullable=False)
    variables: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    language: Mapped[str] = mapped_column(String(16), nullable=False, default="en")
    category: Mapped[str] = mapped_column(String, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=TemplateStatus.DRAFT.value, index=True
    )
    review_status: Mapped[str] = mapped_column(
        String, nullable=False, default=TemplateReviewStatus.PENDING.value
    )
    reviewer_id: Mapped[str | None] = mapped_column(String)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    review_comments: Mapped[str | None] = mapped_column(Text)
    template_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    version_history: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
