""" Relational repositories implementing the domain repository ports. """

from src.infrastructure.persistence.repositories.base import BaseRepository
from src.infrastructure.persistence.repositories.notification_repo import (
    EmailNotificationRepository, PushNotificationRepository,
    SmsNotificationRepository, WebhookNotificationRepository)
from src.infrastructure.persistence.repositories.organization_repo import (
    DepartmentRepository, OrganizationRepository)
from src.infrastructure.persistence.repositories.platform_repo import PlatformRepository
from src.infrastructure.persistence.repositories.template_repo import TemplateRepository
from src.infrastructure.persistence.repositories.tenant_repo import TenantRepository
from src.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "DepartmentRepository",
    "EmailNotificationRepository",
    "OrganizationRepository",
    "PlatformRepository",
    "PushNotificationRepository",
    "SmsNotificationRepository",
    "TemplateRepository",
    "TenantRepository",
    "UserRepository",
    "WebhookNotificationRepository",
]
