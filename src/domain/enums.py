"""Domain enumerations for the SaaS admin backend."""

from enum import Enum


class TenantStatus(str, Enum):
    """Tenant status enumeration"""

    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class TenantType(str, Enum):
    """Tenant type enumeration, drives quotas and feature flags"""

    ENTERPRISE = "enterprise"
    ORGANIZATION = "organization"
    PARTNERSHIP = "partnership"
    PERSONAL = "personal"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [tenant_type.value for tenant_type in cls]


class LifecycleStatus(str, Enum):
    """
    Shared lifecycle for platforms, organizations and departments.

    Transitions are governed by PLATFORM_TRANSITIONS in src.domain.lifecycle.
    """

    INITIALIZING = "initializing"
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"
    DELETED = "deleted"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class UserStatus(str, Enum):
    """User account status enumeration"""

    PENDING_VERIFICATION = "pending_verification"
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    LOCKED = "locked"
    EXPIRED = "expired"
    DELETED = "deleted"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class NotificationStatus(str, Enum):
    """Delivery status shared by every notification channel"""

    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class NotificationPriority(str, Enum):
    """Notification priority enumeration"""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [priority.value for priority in cls]


class PlatformType(str, Enum):
    """Platform type enumeration"""

    SAAS = "saas"
    PAAS = "paas"
    IAAS = "iaas"
    MARKETPLACE = "marketplace"
    INTERNAL = "internal"
    OTHER = "other"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [platform_type.value for platform_type in cls]


class ConfigValueType(str, Enum):
    """Value types accepted by platform configuration items"""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [value_type.value for value_type in cls]


class OrganizationType(str, Enum):
    """Organization type enumeration"""

    BUSINESS = "business"
    FUNCTIONAL = "functional"
    PROJECT = "project"
    MATRIX = "matrix"
    VIRTUAL = "virtual"
    SUBSIDIARY = "subsidiary"
    JOINT_VENTURE = "joint_venture"
    PARTNER = "partner"
    SUPPLIER = "supplier"
    CUSTOMER = "customer"
    OTHER = "other"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [org_type.value for org_type in cls]

    @property
    def is_internal(self) -> bool:
        return self in {
            OrganizationType.BUSINESS,
            OrganizationType.FUNCTIONAL,
            OrganizationType.PROJECT,
            OrganizationType.MATRIX,
            OrganizationType.VIRTUAL,
            OrganizationType.SUBSIDIARY,
        }


class DepartmentType(str, Enum):
    """Department type enumeration"""

    BUSINESS = "business"
    FUNCTIONAL = "functional"
    TECHNICAL = "technical"
    MANAGEMENT = "management"
    FINANCE = "finance"
    HUMAN_RESOURCES = "human_resources"
    MARKETING = "marketing"
    SALES = "sales"
    CUSTOMER_SERVICE = "customer_service"
    OPERATIONS = "operations"
    OTHER = "other"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [dept_type.value for dept_type in cls]


class TemplateType(str, Enum):
    """Channel a notification template renders for"""

    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"
    WEBHOOK = "webhook"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [template_type.value for template_type in cls]


class TemplateStatus(str, Enum):
    """Template publication status"""

    DRAFT = "draft"
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class TemplateReviewStatus(str, Enum):
    """Template review status"""

    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]
