from dataclasses import dataclass, field
from typing import Any

from src.domain.enums import (TemplateReviewStatus, TemplateStatus,
                              TemplateType)
from src.domain.events.base import DomainEvent


@dataclass(frozen=True, kw_only=True)
class TemplateCreated(DomainEvent):
    tenant_id: str
    name: str
    template_type: TemplateType
    category: str
    created_by: str


@dataclass(frozen=True, kw_only=True)
class TemplateUpdated(DomainEvent):
    """Content, subject or variables changed; a new template version exists"""

    tenant_id: str
    template_version: int
    changes: dict[str, dict[str, Any]] = field(default_factory=dict)
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class TemplateReviewed(DomainEvent):
    tenant_id: str
    review_status: TemplateReviewStatus
    reviewer_id: str | None = None
    comments: str | None = None


@dataclass(frozen=True, kw_only=True)
class TemplateStatusChanged(DomainEvent):
    tenant_id: str
    previous_status: TemplateStatus
    new_status: TemplateStatus
    updated_by: str


@dataclass(frozen=True, kw_only=True)
class TemplateDeleted(DomainEvent):
    tenant_id: str
    name: str
    deleted_by: str
