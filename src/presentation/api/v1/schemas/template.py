"""Pydantic schemas for notification templates"""

from typing import Any

from pydantic import BaseModel, Field

from src.presentation.api.v1.schemas.common import AuditFields


class TemplateCreate(BaseModel):
    tenant_id: str
    name: str
    type: str  # email, sms, push, webhook
    content: str
    category: str
    subject: str | None = None
    variables: list[str] | None = None  # extracted from the content when omitted
    language: str = "en"
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class TemplateContentUpdate(BaseModel):
    content: str
    variables: list[str] | None = None
    subject: str | None = None


class TemplateDetailsUpdate(BaseModel):
    name: str | None = None
    category: str | None = None
    language: str | None = None
    tags: list[str] | None = None
    metadata: dict[str, Any] | None = None


class TemplateReview(BaseModel):
    comments: str | None = None


class TemplateRevert(BaseModel):
    version: int


class TemplateRender(BaseModel):
    data: dict[str, Any] = Field(default_factory=dict)


class TemplateVersionResponse(BaseModel):
    version: int
    content: str
    subject: str | None = None
    variables: list[str] = Field(default_factory=list)
    updated_by: str
    updated_at: str


class TemplateRenderResponse(BaseModel):
    subject: str | None = None
    content: str
    template_version: int


class TemplateResponse(AuditFields):
    id: str
    tenant_id: str
    name: str
    type: str
    content: str
    category: str
    subject: str | None = None
    variables: list[str] = Field(default_factory=list)
    language: str
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
    status: str
    review_status: str
    reviewer_id: str | None = None
    reviewed_at: str | None = None
    review_comments: str | None = None
    template_version: int
    version_history: list[TemplateVersionResponse] = Field(default_factory=list)
    usage_count: int = 0
    last_used_at: str | None = None
    is_valid: bool
