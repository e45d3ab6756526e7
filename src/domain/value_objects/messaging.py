"""Value objects for SMS, webhook and template messaging."""

import ipaddress
import re
from dataclasses import dataclass
from typing import ClassVar
from urllib.parse import urlsplit

from src.domain.exceptions import ValidationException


@dataclass(frozen=True)
class PhoneNumber:
    """
    Value object for SMS recipients.

    Accepts digits with an optional leading '+' and the usual separators
    (spaces, dashes, parentheses); the stored value keeps the digits only.
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\+?[0-9 \-()]+$")
    MIN_DIGITS: ClassVar[int] = 7
    MAX_DIGITS: ClassVar[int] = 15

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.PATTERN.match(self.value.strip()):
            raise ValidationException(f"Invalid phone number: {self.value}", field="recipients")
        digits = re.sub(r"\D", "", self.value)
        if not self.MIN_DIGITS <= len(digits) <= self.MAX_DIGITS:
            raise ValidationException(
                f"Phone number must have {self.MIN_DIGITS}-{self.MAX_DIGITS} digits",
                field="recipients",
            )
        object.__setattr__(self, "value", digits)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class WebhookUrl:
    """
    Value object for webhook endpoints.

    Only http(s) URLs with a host and a non-root path are accepted, and
    loopback or private network targets are refused.
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 2048
    LOCAL_HOSTS: ClassVar[frozenset[str]] = frozenset({"localhost", "localhost.localdomain"})

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Webhook URL must not be empty", field="recipients")
        value = self.value.strip()
        if len(value) > self.MAX_LENGTH:
            raise ValidationException(
                f"Webhook URL must not exceed {self.MAX_LENGTH} characters", field="recipients"
            )

        parts = urlsplit(value)
        if parts.scheme not in ("http", "https"):
            raise ValidationException(
                f"Webhook URL must use http or https: {value}", field="recipients"
            )
        host = (parts.hostname or "").lower()
        if not host:
            raise ValidationException(f"Webhook URL has no host: {value}", field="recipients")
        if parts.path in ("", "/"):
            raise ValidationException(f"Webhook URL needs a path: {value}", field="recipients")
        if self._is_local(host):
            raise ValidationException(
                f"Webhook URL must not target a local or private address: {value}",
                field="recipients",
            )
        object.__setattr__(self, "value", value)

    @classmethod
    def _is_local(cls, host: str) -> bool:
        if host in cls.LOCAL_HOSTS or host.endswith(".localhost"):
            return True
        try:
            address = ipaddress.ip_address(host)
        except ValueError:
            return False
        return address.is_private or address.is_loopback or address.is_link_local

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TemplateName:
    """
    Value object for notification template names.

    Names are 2-100 characters, trimmed with whitespace runs collapsed,
    must not start with a digit and must not contain markup characters.
    """

    value: str

    FORBIDDEN: ClassVar[re.Pattern[str]] = re.compile(r"[<>\"'&\x00-\x1f\x7f]")

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Template name must not be empty", field="name")
        if self.FORBIDDEN.search(self.value):
            raise ValidationException("Template name contains forbidden characters", field="name")
        value = re.sub(r"\s+", " ", self.value).strip()
        if not 2 <= len(value) <= 100:
            raise ValidationException("Template name must be 2-100 characters", field="name")
        if value[0].isdigit():
            raise ValidationException("Template name must not start with a digit", field="name")
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value
