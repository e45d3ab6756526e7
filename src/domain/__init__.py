"""
Domain layer - Enterprise Business Rules.

This is the innermost layer containing aggregates, entities, value objects,
domain events and domain exceptions. It has no dependencies on other layers.
"""

from src.domain.entities import (DepartmentEntity, EmailNotificationEntity,
                                 OrganizationEntity, PlatformEntity,
                                 PushNotificationEntity, TenantEntity,
                                 UserEntity)
from src.domain.enums import (LifecycleStatus, NotificationStatus,
                              TenantStatus, UserStatus)
from src.domain.exceptions import (AdminException, DuplicateResourceException,
                                   InvalidStatusTransitionException,
                                   ResourceNotFoundException,
                                   StateConflictException,
                                   TenantNotFoundException,
                                   ValidationException)
from src.domain.value_objects import PlatformVersion

__all__ = [
    # Entities
    "DepartmentEntity",
    "EmailNotificationEntity",
    "OrganizationEntity",
    "PlatformEntity",
    "PushNotificationEntity",
    "TenantEntity",
    "UserEntity",
    # Value Objects
    "PlatformVersion",
    # Enums
    "LifecycleStatus",
    "NotificationStatus",
    "TenantStatus",
    "UserStatus",
    # Exceptions
    "AdminException",
    "ValidationException",
    "ResourceNotFoundException",
    "TenantNotFoundException",
    "StateConflictException",
    "InvalidStatusTransitionException",
    "DuplicateResourceException",
]
