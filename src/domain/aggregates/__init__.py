"""Domain aggregates."""

from src.domain.aggregates.commands import (CreateEmailNotificationCommand,
                                            CreatePushNotificationCommand,
                                            CreateSmsNotificationCommand,
                                            CreateWebhookNotificationCommand,
                                            FailNotificationCommand,
                                            SendNotificationCommand)
from src.domain.aggregates.notification import (EmailNotificationAggregate,
                                                NotificationAggregate,
                                                PushNotificationAggregate,
                                                SmsNotificationAggregate,
                                                WebhookNotificationAggregate)

__all__ = [
    "CreateEmailNotificationCommand",
    "CreatePushNotificationCommand",
    "CreateSmsNotificationCommand",
    "CreateWebhookNotificationCommand",
    "EmailNotificationAggregate",
    "FailNotificationCommand",
    "NotificationAggregate",
    "PushNotificationAggregate",
    "SendNotificationCommand",
    "SmsNotificationAggregate",
    "WebhookNotificationAggregate",
]
