"""Domain events."""

from src.domain.events.base import DomainEvent
from src.domain.events.notification import (NotificationCancelled,
                                            NotificationCreated,
                                            NotificationDeleted,
                                            NotificationEvent,
                                            NotificationFailed,
                                            NotificationRetryScheduled,
                                            NotificationSent)
from src.domain.events.organization import (DepartmentActivated,
                                            DepartmentCreated,
                                            DepartmentDeactivated,
                                            DepartmentMoved,
                                            DepartmentSuspended,
                                            DepartmentUpdated,
                                            OrganizationActivated,
                                            OrganizationCreated,
                                            OrganizationDeactivated,
                                            OrganizationSuspended,
                                            OrganizationUpdated)
from src.domain.events.platform import (PlatformActivated,
                                        PlatformConfigRemoved,
                                        PlatformConfigUpdated,
                                        PlatformCreated, PlatformDeactivated,
                                        PlatformDeleted,
                                        PlatformMaintenanceStarted,
                                        PlatformMetadataUpdated,
                                        PlatformSuspended, PlatformUpdated)
from src.domain.events.template import (TemplateCreated, TemplateDeleted,
                                        TemplateReviewed,
                                        TemplateStatusChanged,
                                        TemplateUpdated)
from src.domain.events.tenant import (TenantActivated, TenantConfigChanged,
                                      TenantCreated, TenantDeleted,
                                      TenantResumed, TenantSuspended)
from src.domain.events.user import (UserCreated, UserDeleted,
                                    UserStatusChanged, UserUpdated)

__all__ = [
    "DomainEvent",
    # Tenant
    "TenantCreated",
    "TenantActivated",
    "TenantSuspended",
    "TenantResumed",
    "TenantDeleted",
    "TenantConfigChanged",
    # Organization / Department
    "OrganizationCreated",
    "OrganizationUpdated",
    "OrganizationActivated",
    "OrganizationSuspended",
    "OrganizationDeactivated",
    "DepartmentCreated",
    "DepartmentUpdated",
    "DepartmentMoved",
    "DepartmentActivated",
    "DepartmentSuspended",
    "DepartmentDeactivated",
    # User
    "UserCreated",
    "UserUpdated",
    "UserStatusChanged",
    "UserDeleted",
    # Platform
    "PlatformCreated",
    "PlatformActivated",
    "PlatformSuspended",
    "PlatformDeactivated",
    "PlatformMaintenanceStarted",
    "PlatformDeleted",
    "PlatformUpdated",
    "PlatformConfigUpdated",
    "PlatformConfigRemoved",
    "PlatformMetadataUpdated",
    # Notification
    "NotificationEvent",
    "NotificationCreated",
    "NotificationSent",
    "NotificationFailed",
    "NotificationRetryScheduled",
    "NotificationCancelled",
    "NotificationDeleted",
    # Template
    "TemplateCreated",
    "TemplateUpdated",
    "TemplateReviewed",
    "TemplateStatusChanged",
    "TemplateDeleted",
]
