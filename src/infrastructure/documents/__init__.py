"""Redis document persistence adapter."""

from src.infrastructure.documents.repositories import (
    DepartmentDocumentRepository, DocumentRepository,
    EmailNotificationDocumentRepository, OrganizationDocumentRepository,
    PlatformDocumentRepository, PushNotificationDocumentRepository,
    SmsNotificationDocumentRepository, TemplateDocumentRepository,
    TenantDocumentRepository, UserDocumentRepository,
    WebhookNotificationDocumentRepository)
from src.infrastructure.documents.store import RedisDocumentStore

__all__ = [
    "DepartmentDocumentRepository",
    "DocumentRepository",
    "EmailNotificationDocumentRepository",
    "OrganizationDocumentRepository",
    "PlatformDocumentRepository",
    "PushNotificationDocumentRepository",
    "RedisDocumentStore",
    "SmsNotificationDocumentRepository",
    "TemplateDocumentRepository",
    "TenantDocumentRepository",
    "UserDocumentRepository",
    "WebhookNotificationDocumentRepository",
]
