"""Domain value objects."""

from src.domain.value_objects.core import (DeviceToken, EmailAddress,
                                           EmailSubject, EntityCode, EntityId,
                                           EntityName, Scope, TenantCode,
                                           TenantDomain, TenantName, Username,
                                           new_id)
from src.domain.value_objects.messaging import (PhoneNumber, TemplateName,
                                                WebhookUrl)
from src.domain.value_objects.platform import (ConfigValidation,
                                               PlatformConfig, PlatformName,
                                               PlatformVersion)

__all__ = [
    "ConfigValidation",
    "DeviceToken",
    "EmailAddress",
    "EmailSubject",
    "EntityCode",
    "EntityId",
    "EntityName",
    "PhoneNumber",
    "PlatformConfig",
    "PlatformName",
    "PlatformVersion",
    "Scope",
    "TenantCode",
    "TenantDomain",
    "TemplateName",
    "TenantName",
    "Username",
    "WebhookUrl",
    "new_id",
]
