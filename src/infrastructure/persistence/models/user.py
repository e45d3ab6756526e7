from typing import Any

from sqlalchemy import JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.enums import UserStatus
from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import TenantScopedModel


class User(TenantScopedModel, Base):
    """
    Administrative user record.

    Inherits from TenantScopedModel:
        - id, tenant_id
        - created_at, updated_at, created_by, updated_by, revision
    """

    __tablename__ = "user"

    organization_id: Mapped[str | None] = mapped_column(String(36), index=True)
    department_id: Mapped[str | None] = mapped_column(String(36), index=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=UserStatus.PENDING_VERIFICATION.value, index=True
    )
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "username", name="uq_tenant_username"),
        UniqueConstraint("tenant_id", "email", name="uq_tenant_email"),
    )
