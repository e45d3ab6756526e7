"""Response envelopes shared by every endpoint"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: {"success": true, "data": ..., "message": ...}"""

    success: bool = True
    data: T | None = None
    message: str | None = None


class ErrorResponse(BaseModel):
    """Error envelope produced by the exception handlers"""

    success: bool = False
    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class AuditFields(BaseModel):
    created_by: str
    updated_by: str | None = None
    created_at: str
    updated_at: str
    revision: int = 1


def ok(data: Any = None, message: str | None = None) -> dict[str, Any]:
    return {"success": True, "data": data, "message": message}
