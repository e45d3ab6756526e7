"""
SQLAlchemy mixins for common model patterns.

Aggregates own their identifiers and timestamps, so these columns are
written from the domain entity rather than generated by the database.

Audit Levels:
    - TimestampMixin: created_at, updated_at
    - ActorAuditMixin: adds created_by, updated_by and the revision counter
"""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func


class UuidMixin:
    """String primary key holding a UUID assigned by the domain layer"""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String(36), primary_key=True)


class TenantMixin:
    """
    Mixin for tenant-scoped models.

    Provides:
        - tenant_id: Foreign key to tenant table with cascade delete
    """

    @declared_attr
    def tenant_id(cls) -> Mapped[str]:
        return mapped_column(
            String(36),
            ForeignKey("tenant.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """
    Mixin for timestamp tracking.

    Note: Uses timezone-aware DateTime; the server default only applies to
    rows inserted outside the repositories.
    """

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class ActorAuditMixin(TimestampMixin):
    """Who created and last changed the row, plus the aggregate revision"""

    @declared_attr
    def created_by(cls) -> Mapped[str]:
        return mapped_column(String, nullable=False, default="system")

    @declared_attr
    def updated_by(cls) -> Mapped[str | None]:
        return mapped_column(String, nullable=True)

    @declared_attr
    def revision(cls) -> Mapped[int]:
        return mapped_column(Integer, nullable=False, default=1)


class AggregateModel(UuidMixin, ActorAuditMixin):
    """Common columns for aggregate root tables"""

    pass


class TenantScopedModel(UuidMixin, TenantMixin, ActorAuditMixin):
    """Common columns for aggregates owned by a tenant"""

    pass
