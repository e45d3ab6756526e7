"""Entity <-> row/document mappers."""

from src.infrastructure.persistence.mappers.base import Document, Mapper
from src.infrastructure.persistence.mappers.notification import (
    EmailNotificationDocumentMapper, EmailNotificationRowMapper,
    PushNotificationDocumentMapper, PushNotificationRowMapper,
    SmsNotificationDocumentMapper, SmsNotificationRowMapper,
    WebhookNotificationDocumentMapper, WebhookNotificationRowMapper,
    notification_to_dto)
from src.infrastructure.persistence.mappers.organization import (
    DepartmentDocumentMapper, DepartmentRowMapper, OrganizationDocumentMapper,
    OrganizationRowMapper, department_to_dto, organization_to_dto)
from src.infrastructure.persistence.mappers.platform import (
    PlatformDocumentMapper, PlatformRowMapper, platform_to_dto)
from src.infrastructure.persistence.mappers.template import (
    TemplateDocumentMapper, TemplateRowMapper, template_to_dto)
from src.infrastructure.persistence.mappers.tenant import (
    TenantDocumentMapper, TenantRowMapper, tenant_to_dto)
from src.infrastructure.persistence.mappers.user import (UserDocumentMapper,
                                                         UserRowMapper,
                                                         user_to_dto)

__all__ = [
    "Document",
    "Mapper",
    "TenantRowMapper",
    "TenantDocumentMapper",
    "OrganizationRowMapper",
    "OrganizationDocumentMapper",
    "DepartmentRowMapper",
    "DepartmentDocumentMapper",
    "UserRowMapper",
    "UserDocumentMapper",
    "PlatformRowMapper",
    "PlatformDocumentMapper",
    "EmailNotificationRowMapper",
    "EmailNotificationDocumentMapper",
    "PushNotificationRowMapper",
    "PushNotificationDocumentMapper",
    "SmsNotificationRowMapper",
    "SmsNotificationDocumentMapper",
    "WebhookNotificationRowMapper",
    "WebhookNotificationDocumentMapper",
    "TemplateRowMapper",
    "TemplateDocumentMapper",
    "tenant_to_dto",
    "organization_to_dto",
    "department_to_dto",
    "user_to_dto",
    "platform_to_dto",
    "notification_to_dto",
    "template_to_dto",
]
