"""Pydantic schemas for organizations and departments"""

from typing import Any

from pydantic import BaseModel, Field

from src.presentation.api.v1.schemas.common import AuditFields


class OrganizationCreate(BaseModel):
    tenant_id: str
    name: str
    code: str
    type: str = "business"
    description: str | None = None
    parent_organization_id: str | None = None
    manager_id: str | None = None


class OrganizationUpdate(BaseModel):
    """Only the fields present are changed"""

    name: str | None = None
    description: str | None = None
    manager_id: str | None = None


class OrganizationResponse(AuditFields):
    id: str
    tenant_id: str
    name: str
    code: str
    type: str
    status: str
    description: str | None = None
    parent_organization_id: str | None = None
    manager_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class DepartmentCreate(BaseModel):
    tenant_id: str
    organization_id: str
    name: str
    code: str
    type: str = "functional"
    description: str | None = None
    parent_id: str | None = None
    manager_id: str | None = None


class DepartmentUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    manager_id: str | None = None


class DepartmentMove(BaseModel):
    """parent_id null moves the department to the root"""

    parent_id: str | None = None


class DepartmentResponse(AuditFields):
    id: str
    tenant_id: str
    organization_id: str
    name: str
    code: str
    type: str
    status: str
    description: str | None = None
    parent_id: str | None = None
    level: int
    path: str
    manager_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
