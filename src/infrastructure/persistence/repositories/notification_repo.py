from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.notification import (EmailNotificationEntity,
                                              PushNotificationEntity,
                                              SmsNotificationEntity,
                                              WebhookNotificationEntity)
from src.infrastructure.persistence.mappers.notification import (
    EmailNotificationRowMapper, PushNotificationRowMapper,
    SmsNotificationRowMapper, WebhookNotificationRowMapper)
from src.infrastructure.persistence.models.notification import (
    EmailNotification, PushNotification, SmsNotification, WebhookNotification)
from src.infrastructure.persistence.repositories.base import BaseRepository


class EmailNotificationRepository(BaseRepository[EmailNotification, EmailNotificationEntity]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, EmailNotification, EmailNotificationRowMapper())


class PushNotificationRepository(BaseRepository[PushNotification, PushNotificationEntity]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, PushNotification, PushNotificationRowMapper())


class SmsNotificationRepository(BaseRepository[SmsNotification, SmsNotificationEntity]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, SmsNotification, SmsNotificationRowMapper())


class WebhookNotificationRepository(BaseRepository[WebhookNotification, WebhookNotificationEntity]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, WebhookNotification, WebhookNotificationRowMapper())
