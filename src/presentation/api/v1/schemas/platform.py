"""Pydantic schemas for platform management"""

from typing import Any

from pydantic import BaseModel, Field

from src.presentation.api.v1.schemas.common import AuditFields


class PlatformCreate(BaseModel):
    name: str
    version: str
    type: str = "saas"  # saas, paas, iaas, marketplace, internal, other
    description: str | None = None


class PlatformUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    version: str | None = None
    type: str | None = None


class ConfigValidationSchema(BaseModel):
    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    enum: list[Any] | None = None


class PlatformConfigUpsert(BaseModel):
    """Body of PUT /platforms/{id}/config/{key}; the key comes from the path"""

    value: Any = None
    type: str = "string"
    description: str | None = None
    required: bool = False
    default: Any = None
    group: str | None = None
    editable: bool = True
    validation: ConfigValidationSchema | None = None


class PlatformMetadataValue(BaseModel):
    value: Any = None


class PlatformConfigResponse(BaseModel):
    key: str
    value: Any = None
    type: str
    description: str | None = None
    required: bool = False
    default: Any = None
    group: str | None = None
    editable: bool = True
    validation: ConfigValidationSchema | None = None


class PlatformResponse(AuditFields):
    id: str
    name: str
    version: str
    is_prerelease: bool
    type: str
    status: str
    description: str | None = None
    configs: list[PlatformConfigResponse] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
