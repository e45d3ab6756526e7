"""Platform value objects: semantic version, name and configuration items."""

import functools
import re
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar

from src.domain.enums import ConfigValueType
from src.domain.exceptions import ValidationException

_SEMVER = re.compile(
    r"^(\d+)\.(\d+)\.(\d+)(?:-([0-9A-Za-z\-\.]+))?(?:\+([0-9A-Za-z\-\.]+))?$"
)


@functools.total_ordering
@dataclass(frozen=True)
class PlatformVersion:
    """
    Semantic version (MAJOR.MINOR.PATCH[-prerelease][+build]).

    Ordering compares major, minor and patch numerically. A prerelease sorts
    below its release and two prereleases compare as plain strings. Build
    metadata never affects ordering.
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    def __post_init__(self):
        for part in (self.major, self.minor, self.patch):
            if not isinstance(part, int) or part < 0:
                raise ValidationException(
                    "Version numbers must be non-negative integers", field="version"
                )

    @classmethod
    def parse(cls, value: str) -> "PlatformVersion":
        if not isinstance(value, str):
            raise ValidationException("Version must be a string", field="version")
        match = _SEMVER.match(value.strip())
        if not match:
            raise ValidationException(
                f"Invalid semantic version: {value}", field="version"
            )
        major, minor, patch, prerelease, build = match.groups()
        return cls(int(major), int(minor), int(patch), prerelease, build)

    def compare_to(self, other: "PlatformVersion") -> int:
        """Return a negative, zero or positive int like a classic comparator"""
        for mine, theirs in (
            (self.major, other.major),
            (self.minor, other.minor),
            (self.patch, other.patch),
        ):
            if mine != theirs:
                return mine - theirs

        if self.prerelease == other.prerelease:
            return 0
        if self.prerelease is None:
            return 1
        if other.prerelease is None:
            return -1
        return -1 if self.prerelease < other.prerelease else 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlatformVersion):
            return NotImplemented
        return self.compare_to(other) == 0

    def __lt__(self, other: "PlatformVersion") -> bool:
        if not isinstance(other, PlatformVersion):
            return NotImplemented
        return self.compare_to(other) < 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    def bump_major(self) -> "PlatformVersion":
        return PlatformVersion(self.major + 1, 0, 0)

    def bump_minor(self) -> "PlatformVersion":
        return PlatformVersion(self.major, self.minor + 1, 0)

    def bump_patch(self) -> "PlatformVersion":
        return PlatformVersion(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


@dataclass(frozen=True)
class PlatformName:
    """Platform display name: 2-100 characters, no filesystem-reserved symbols"""

    value: str

    FORBIDDEN: ClassVar[re.Pattern[str]] = re.compile(r'[<>:"/\\|?*]')

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Platform name must not be empty", field="name")
        value = self.value.strip()
        if len(value) < 2 or len(value) > 100:
            raise ValidationException("Platform name must be 2-100 characters", field="name")
        if self.FORBIDDEN.search(value):
            raise ValidationException(
                'Platform name must not contain any of <>:"/\\|?*', field="name"
            )
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


_TYPE_CHECKS: dict[ConfigValueType, tuple[type, ...]] = {
    ConfigValueType.STRING: (str,),
    ConfigValueType.NUMBER: (int, float),
    ConfigValueType.BOOLEAN: (bool,),
    ConfigValueType.OBJECT: (dict,),
    ConfigValueType.ARRAY: (list,),
}


@dataclass(frozen=True)
class ConfigValidation:
    """Optional constraints applied to a configuration value"""

    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    enum: tuple[Any, ...] | None = None

    def __post_init__(self):
        if self.pattern is not None:
            try:
                re.compile(self.pattern)
            except re.error as e:
                raise ValidationException(
                    f"Invalid validation pattern: {e}", field="validation"
                ) from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "min": self.min,
            "max": self.max,
            "pattern": self.pattern,
            "enum": list(self.enum) if self.enum is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ConfigValidation | None":
        if not data:
            return None
        enum = data.get("enum")
        return cls(
            min=data.get("min"),
            max=data.get("max"),
            pattern=data.get("pattern"),
            enum=tuple(enum) if enum is not None else None,
        )


@dataclass(frozen=True)
class PlatformConfig:
    """A typed platform configuration entry"""

    key: str
    value: Any
    type: ConfigValueType = ConfigValueType.STRING
    description: str | None = None
    required: bool = False
    default: Any = None
    group: str | None = None
    editable: bool = True
    validation: ConfigValidation | None = field(default=None)

    def __post_init__(self):
        if not isinstance(self.key, str) or not re.match(r"^[a-zA-Z][a-zA-Z0-9_.\-]{0,99}$", self.key):
            raise ValidationException(f"Invalid configuration key: {self.key}", field="key")
        if not self.validate_value(self.value):
            raise ValidationException(
                f"Invalid value for configuration {self.key}", field="value"
            )

    def validate_value(self, value: Any) -> bool:
        """Check a candidate value against the declared type and validation rules"""
        if value is None:
            return not self.required

        expected = _TYPE_CHECKS[self.type]
        # bool is an int subclass; keep booleans out of numbers
        if self.type == ConfigValueType.NUMBER and isinstance(value, bool):
            return False
        if not isinstance(value, expected):
            return False

        rules = self.validation
        if rules is None:
            return True
        if rules.enum is not None and value not in rules.enum:
            return False
        if self.type == ConfigValueType.NUMBER:
            if rules.min is not None and value < rules.min:
                return False
            if rules.max is not None and value > rules.max:
                return False
        if self.type in (ConfigValueType.STRING, ConfigValueType.ARRAY):
            if rules.min is not None and len(value) < rules.min:
                return False
            if rules.max is not None and len(value) > rules.max:
                return False
        if rules.pattern is not None and self.type == ConfigValueType.STRING:
            if not re.fullmatch(rules.pattern, value):
                return False
        return True

    def with_value(self, value: Any) -> "PlatformConfig":
        """Return a copy holding a new value (validated)"""
        return replace(self, value=value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "value": self.value,
            "type": self.type.value,
            "description": self.description,
            "required": self.required,
            "default": self.default,
            "group": self.group,
            "editable": self.editable,
            "validation": self.validation.to_dict() if self.validation else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlatformConfig":
        try:
            value_type = ConfigValueType(data.get("type", ConfigValueType.STRING.value))
        except ValueError as e:
            raise ValidationException(
                f"Configuration type must be one of {ConfigValueType.values()}", field="type"
            ) from e
        return cls(
            key=data["key"],
            value=data.get("value"),
            type=value_type,
            description=data.get("description"),
            required=data.get("required", False),
            default=data.get("default"),
            group=data.get("group"),
            editable=data.get("editable", True),
            validation=ConfigValidation.from_dict(data.get("validation")),
        )
