"""Domain entities."""

from src.domain.entities.base import AggregateRoot
from src.domain.entities.department import DepartmentEntity
from src.domain.entities.notification import (EmailNotificationEntity,
                                              NotificationEntity,
                                              PushNotificationEntity,
                                              SmsNotificationEntity,
                                              WebhookNotificationEntity)
from src.domain.entities.organization import OrganizationEntity
from src.domain.entities.platform import PlatformEntity
from src.domain.entities.template import TemplateEntity
from src.domain.entities.tenant import TenantEntity
from src.domain.entities.user import UserEntity

__all__ = [
    "AggregateRoot",
    "DepartmentEntity",
    "EmailNotificationEntity",
    "NotificationEntity",
    "OrganizationEntity",
    "PlatformEntity",
    "PushNotificationEntity",
    "SmsNotificationEntity",
    "TemplateEntity",
    "TenantEntity",
    "UserEntity",
    "WebhookNotificationEntity",
]
