from typing import Any

from sqlalchemy import JSON, CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.enums import TenantStatus, TenantType
from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import AggregateModel


class Tenant(AggregateModel, Base):
    """
    Root tenant row.

    Note: Tenant has no tenant_id since it is the root of the hierarchy.
    """

    __tablename__ = "tenant"

    code: Mapped[str] = mapped_column(String(30), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    domain: Mapped[str] = mapped_column(String(253), unique=True, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=TenantStatus.PENDING.value, index=True
    )
    config: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    description: Mapped[str | None] = mapped_column(Text)

    __table_args__ = (
        CheckConstraint(f"status IN {tuple(TenantStatus.values())}", name="tenant_status_check"),
        CheckConstraint(f"type IN {tuple(TenantType.values())}", name="tenant_type_check"),
    )
