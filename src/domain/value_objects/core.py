import re
import uuid
from dataclasses import dataclass
from typing import ClassVar

from src.domain.exceptions import ValidationException


def new_id() -> str:
    """Generate a new entity identifier"""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class EntityId:
    """Value object for UUID identifiers (tenant, template, entity ids)"""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value:
            raise ValidationException("Identifier must be a non-empty string")
        try:
            normalized = str(uuid.UUID(self.value))
        except ValueError as e:
            raise ValidationException(f"Invalid UUID: {self.value}") from e
        object.__setattr__(self, "value", normalized)

    @classmethod
    def parse(cls, value: str, field: str) -> "EntityId":
        """Parse a raw id, reporting the offending field on failure"""
        try:
            return cls(value)
        except ValidationException as e:
            raise ValidationException(f"{field} must be a valid UUID", field=field) from e

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Scope:
    """
    Data isolation scope carried by tenant-owned entities.

    A department scope implies an organization scope, which implies a tenant scope.
    """

    tenant_id: str
    organization_id: str | None = None
    department_id: str | None = None

    def __post_init__(self):
        if not self.tenant_id:
            raise ValidationException("tenant_id is required", field="tenant_id")
        if self.department_id and not self.organization_id:
            raise ValidationException(
                "organization_id is required when department_id is set",
                field="organization_id",
            )

    def contains(self, other: "Scope") -> bool:
        """Check whether other is the same scope or nested inside this one"""
        if self.tenant_id != other.tenant_id:
            return False
        if self.organization_id and self.organization_id != other.organization_id:
            return False
        if self.department_id and self.department_id != other.department_id:
            return False
        return True


@dataclass(frozen=True)
class TenantName:
    """
    Value object for tenant display names.

    Names must be:
    - 2-100 characters after trimming
    - letters, digits, CJK ideographs, spaces, hyphen or underscore
    - free of consecutive spaces
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"[a-zA-Z0-9一-龥 \-_]+")

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Tenant name must not be empty", field="name")
        value = self.value.strip()
        if len(value) < 2 or len(value) > 100:
            raise ValidationException("Tenant name must be 2-100 characters", field="name")
        if not self.PATTERN.fullmatch(value):
            raise ValidationException(
                "Tenant name may only contain letters, digits, spaces, '-' and '_'",
                field="name",
            )
        if "  " in value:
            raise ValidationException(
                "Tenant name must not contain consecutive spaces", field="name"
            )
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TenantCode:
    """
    Value object for Tenant Code

    Tenant codes must be:
    - 3-30 characters
    - lowercase (input is normalized)
    - alphanumeric with optional single hyphens
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Tenant code must not be empty", field="code")
        value = self.value.strip().lower()

        if len(value) < 3 or len(value) > 30:
            raise ValidationException("Tenant code must be 3-30 characters", field="code")

        if not re.match(r"^[a-z0-9]+(-[a-z0-9]+)*$", value):
            raise ValidationException(
                "Tenant code must be lowercase alphanumeric with optional hyphens "
                "(e.g., 'acme', 'acme-corp', 'abc123')",
                field="code",
            )
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TenantDomain:
    """Value object for a tenant's primary hostname"""

    value: str

    LABEL: ClassVar[re.Pattern[str]] = re.compile(r"^[a-z0-9]([a-z0-9\-]*[a-z0-9])?$")

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Tenant domain must not be empty", field="domain")
        value = self.value.strip().lower()

        if len(value) < 3 or len(value) > 253:
            raise ValidationException(
                "Tenant domain length must be between 3 and 253 characters", field="domain"
            )
        if "--" in value:
            raise ValidationException(
                "Tenant domain must not contain consecutive hyphens", field="domain"
            )

        labels = value.split(".")
        for label in labels:
            if len(label) > 63 or not self.LABEL.match(label):
                raise ValidationException(f"Invalid tenant domain: {value}", field="domain")
        if len(labels) < 2 or len(labels[-1]) < 2:
            raise ValidationException(
                "Tenant domain must end with a top-level domain of at least 2 characters",
                field="domain",
            )
        object.__setattr__(self, "value", value)

    @property
    def subdomain(self) -> str | None:
        labels = self.value.split(".")
        return labels[0] if len(labels) > 2 else None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EntityCode:
    """Value object for organization and department codes"""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Code must not be empty", field="code")
        value = self.value.strip()
        if len(value) > 50:
            raise ValidationException("Code must not exceed 50 characters", field="code")
        if not re.match(r"^[a-zA-Z0-9_-]+$", value):
            raise ValidationException(
                "Code may only contain letters, digits, '_' and '-'", field="code"
            )
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EntityName:
    """Value object for organization, department and user display names"""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Name must not be empty", field="name")
        value = self.value.strip()
        if len(value) > 100:
            raise ValidationException("Name must not exceed 100 characters", field="name")
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Username:
    """Value object for login names"""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Username must not be empty", field="username")
        value = self.value.strip()
        if not re.match(r"^[a-zA-Z0-9_.\-]{3,50}$", value):
            raise ValidationException(
                "Username must be 3-50 characters of letters, digits, '_', '.' or '-'",
                field="username",
            )
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EmailAddress:
    """Value object for email addresses (normalized to lowercase)"""

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9](?:[a-zA-Z0-9\-]*[a-zA-Z0-9])?"
        r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9\-]*[a-zA-Z0-9])?)+$"
    )

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Email address must not be empty", field="email")
        value = self.value.strip().lower()
        if len(value) > 254 or not self.PATTERN.match(value):
            raise ValidationException(f"Invalid email address: {self.value}", field="email")
        object.__setattr__(self, "value", value)

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EmailSubject:
    """
    Value object for email subject lines.

    Subjects are trimmed and internal whitespace runs collapse to one space.
    RFC 5322 caps a header line at 998 characters.
    """

    value: str

    FORBIDDEN: ClassVar[re.Pattern[str]] = re.compile(r"[<>\"'&\x00-\x1f\x7f]")

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Email subject must not be empty", field="subject")
        if self.FORBIDDEN.search(self.value):
            raise ValidationException(
                "Email subject contains forbidden characters", field="subject"
            )
        value = re.sub(r"\s+", " ", self.value).strip()
        if len(value) > 998:
            raise ValidationException(
                "Email subject must not exceed 998 characters", field="subject"
            )
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DeviceToken:
    """Value object for push notification device tokens (FCM/APNs)"""

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[a-zA-Z0-9:_\-]{64,152}$")

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.PATTERN.match(self.value):
            raise ValidationException(
                "Device token must be 64-152 characters of letters, digits, ':', '_' or '-'",
                field="recipients",
            )

    def __str__(self) -> str:
        return self.value
