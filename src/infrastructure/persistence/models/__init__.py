from src.infrastructure.persistence.models.mixins import (ActorAuditMixin,
                                                          AggregateModel,
                                                          TenantMixin,
                                                          TenantScopedModel,
                                                          TimestampMixin,
                                                          UuidMixin)
from src.infrastructure.persistence.models.notification import (
    EmailNotification, PushNotification, SmsNotification, WebhookNotification)
from src.infrastructure.persistence.models.organization import (Department,
                                                                Organization)
from src.infrastructure.persistence.models.platform import Platform
from src.infrastructure.persistence.models.template import Template
from src.infrastructure.persistence.models.tenant import Tenant
from src.infrastructure.persistence.models.user import User

__all__ = [
    # Models
    "Tenant",
    "Organization",
    "Department",
    "User",
    "Platform",
    "EmailNotification",
    "PushNotification",
    "SmsNotification",
    "WebhookNotification",
    "Template",
    # Mixins
    "UuidMixin",
    "TenantMixin",
    "TimestampMixin",
    "ActorAuditMixin",
    "AggregateModel",
    "TenantScopedModel",
]
