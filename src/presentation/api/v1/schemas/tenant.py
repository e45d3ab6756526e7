"""Pydantic schemas for tenant management"""

from typing import Any

from pydantic import BaseModel, Field

from src.presentation.api.v1.schemas.common import AuditFields


class TenantCreate(BaseModel):
    """Schema for creating a tenant; field rules are enforced by the domain"""

    name: str
    code: str
    domain: str
    type: str = "organization"  # enterprise, organization, partnership, personal
    config: dict[str, Any] | None = None
    description: str | None = None


class TenantConfigUpdate(BaseModel):
    config: dict[str, Any]


class TenantSuspend(BaseModel):
    reason: str | None = None


class TenantLimits(BaseModel):
    max_users: int
    max_organizations: int
    max_storage_gb: int


class TenantResponse(AuditFields):
    id: str
    name: str
    code: str
    domain: str
    subdomain: str | None = None
    type: str
    status: str
    config: dict[str, Any] = Field(default_factory=dict)
    description: str | None = None
    limits: TenantLimits


class TenantSummaryResponse(BaseModel):
    """Tenant read model maintained by the tenant projection"""

    id: str
    name: str
    code: str
    status: str
    type: str
    domain: str
    config_keys: list[str] = Field(default_factory=list)
    last_event_at: str | None = None
