from typing import Any

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.enums import LifecycleStatus
from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import AggregateModel


class Platform(AggregateModel, Base):
    """Platform row; configs are stored as {key: PlatformConfig.to_dict()}"""

    __tablename__ = "platform"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    version: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=LifecycleStatus.INITIALIZING.value, index=True
    )
    description: Mapped[str | None] = mapped_column(Text)
    configs: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )
