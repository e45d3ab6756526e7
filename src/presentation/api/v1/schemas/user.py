"""Pydantic schemas for user management"""

from typing import Any

from pydantic import BaseModel, Field

from src.presentation.api.v1.schemas.common import AuditFields


class UserCreate(BaseModel):
    tenant_id: str
    username: str
    email: str
    display_name: str | None = None
    organization_id: str | None = None
    department_id: str | None = None


class UserUpdate(BaseModel):
    display_name: str | None = None
    email: str | None = None
    metadata: dict[str, Any] | None = None


class UserStatusReason(BaseModel):
    reason: str | None = None


class UserResponse(AuditFields):
    id: str
    tenant_id: str
    organization_id: str | None = None
    department_id: str | None = None
    username: str
    email: str
    display_name: str | None = None
    status: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class UserListItem(BaseModel):
    """Row of the user read model"""

    id: str
    tenant_id: str
    organization_id: str | None = None
    department_id: str | None = None
    username: str
    email: str
    display_name: str | None = None
    status: str
    created_at: str
    updated_at: str


class UserPageResponse(BaseModel):
    items: list[UserListItem]
    total: int
    limit: int
    offset: int
