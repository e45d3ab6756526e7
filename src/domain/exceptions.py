"""
Domain exceptions for the SaaS admin backend.

This module defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns and are translated
to HTTP responses at the presentation boundary.
"""

from typing import Any


class AdminException(Exception):
    """
    Base exception for all SaaS admin errors.

    All custom exceptions should inherit from this class to allow
    for consistent error handling and logging.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for API responses
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AdminException):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class ResourceNotFoundException(AdminException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TenantNotFoundException(ResourceNotFoundException):
    """Raised when tenant is not found."""

    def __init__(self, tenant_id: str):
        super().__init__("Tenant", tenant_id)
        self.error_code = "TENANT_NOT_FOUND"


class NotificationNotFoundException(ResourceNotFoundException):
    """Raised when a notification is missing or no notification is loaded."""

    def __init__(self, kind: str, notification_id: str | None = None):
        super().__init__(f"{kind} notification", notification_id or "<not loaded>")
        self.error_code = "NOTIFICATION_NOT_FOUND"


class StateConflictException(AdminException):
    """Raised when an operation is not allowed in the entity's current status."""

    def __init__(self, message: str, current_status: str | None = None):
        details = {"current_status": current_status} if current_status else {}
        super().__init__(message, "STATE_CONFLICT", details)
        self.current_status = current_status


class InvalidStatusTransitionException(StateConflictException):
    """Raised when a lifecycle table has no edge between two statuses."""

    def __init__(self, entity: str, current_status: str, target_status: str):
        super().__init__(
            f"{entity} cannot transition from {current_status} to {target_status}",
            current_status,
        )
        self.error_code = "INVALID_STATUS_TRANSITION"
        self.details["target_status"] = target_status
        self.target_status = target_status


class DuplicateResourceException(AdminException):
    """Raised when a unique attribute is already taken."""

    def __init__(self, resource_type: str, field: str, value: str):
        super().__init__(
            f"{resource_type} with {field} '{value}' already exists",
            "DUPLICATE_RESOURCE",
            {"resource_type": resource_type, "field": field, "value": value},
        )


class RateLimitExceededException(AdminException):
    """Raised when a caller exceeds the request budget for a window."""

    def __init__(self, key: str, limit: int, retry_after: int):
        super().__init__(
            "Too many requests, please retry later",
            "RATE_LIMIT_EXCEEDED",
            {"key": key, "limit": limit, "retry_after": retry_after},
        )
        self.retry_after = retry_after
