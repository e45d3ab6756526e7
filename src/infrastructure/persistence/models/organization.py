from typing import Any

from sqlalchemy import JSON, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.enums import LifecycleStatus
from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import TenantScopedModel


class Organization(TenantScopedModel, Base):
    __tablename__ = "organization"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=LifecycleStatus.INITIALIZING.value, index=True
    )
    description: Mapped[str | None] = mapped_column(Text)
    parent_organization_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("organization.id", ondelete="SET NULL"), index=True
    )
    manager_id: Mapped[str | None] = mapped_column(String(36))
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )

    __table_args__ = (UniqueConstraint("tenant_id", "code", name="uq_organization_tenant_code"),)


class Department(TenantScopedModel, Base):
    """
    Department row with a materialized path.

    path is "/{root_id}/.../{id}"; descendants of a department share its
    path as a prefix, so subtree queries are a single LIKE.
    """

    __tablename__ = "department"

    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organization.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=LifecycleStatus.INITIALIZING.value, index=True
    )
    description: Mapped[str | None] = mapped_column(Text)
    parent_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("department.id", ondelete="SET NULL"), index=True
    )
    level: Mapped[int] = mapped_column(nullable=False, default=1)
    path: Mapped[str] = mapped_column(String, nullable=False, index=True)
    manager_id: Mapped[str | None] = mapped_column(String(36))
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )

    __table_args__ = (
        UniqueConstraint("organization_id", "code", name="uq_department_organization_code"),
    )
