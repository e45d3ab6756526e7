"""Application services."""

from src.application.services.department_service import DepartmentService
from src.application.services.notification_service import (
    EmailNotificationService,
    NotificationService,
    PushNotificationService,
    SmsNotificationService,
    WebhookNotificationService,
)
from src.application.services.organization_service import OrganizationService
from src.application.services.platform_service import PlatformService
from src.application.services.results import OperationResult
from src.application.services.template_service import TemplateService
from src.application.services.tenant_service import TenantService
from src.application.services.user_service import UserService

__all__ = [
    "DepartmentService",
    "EmailNotificationService",
    "NotificationService",
    "OperationResult",
    "OrganizationService",
    "PlatformService",
    "PushNotificationService",
    "SmsNotificationService",
    "TemplateService",
    "TenantService",
    "UserService",
    "WebhookNotificationService",
]
