"""Tests for the email and push notification services"""

from unittest.mock import AsyncMock

import pytest

from src.application.events.event_bus import EventBus
from src.application.services.notification_service import (
    EmailNotificationService, PushNotificationService)
from src.domain.aggregates import (CreateEmailNotificationCommand,
                                   CreatePushNotificationCommand,
                                   FailNotificationCommand,
                                   SendNotificationCommand)
from src.domain.enums import NotificationStatus
from src.domain.events import (NotificationCancelled, NotificationCreated,
                               NotificationDeleted, NotificationFailed,
                               NotificationRetryScheduled, NotificationSent)
from src.domain.exceptions import (NotificationNotFoundException,
                                   StateConflictException)
from tests.fakes import (DEVICE_TOKEN, TEMPLATE_ID, TENANT_ID,
                         InMemoryRepository)


@pytest.fixture
def event_bus():
    bus = EventBus()
    bus.publish_all = AsyncMock()
    return bus


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def email_service(repository, event_bus):
    return EmailNotificationService(repository, event_bus)


def published(event_bus) -> list:
    return [type(e) for call in event_bus.publish_all.await_args_list for e in call.args[0]]


def email_command() -> CreateEmailNotificationCommand:
    return CreateEmailNotificationCommand(
        tenant_id=TENANT_ID,
        template_id=TEMPLATE_ID,
        recipients=["jane@example.com"],
        subject="Invoice ready",
        html_content="<p>Your invoice is ready</p>",
    )


class TestEmailNotificationService:
    async def test_full_delivery_cycle(self, email_service, repository, event_bus):
        """
        GIVEN a created email notification
        WHEN it fails, is retried and then sent
        THEN each step is published in order
        """
        # GIVEN
        created = await email_service.create(email_command())
        assert created.message == "Email notification created"
        notification_id = created.data.id

        # WHEN
        await email_service.fail(notification_id, FailNotificationCommand("TIMEOUT", "late"))
        retried = await email_service.retry(notification_id)
        sent = await email_service.send(notification_id, SendNotificationCommand(message_id="m-1"))

        # THEN
        assert retried.data.retry_count == 1
        assert sent.message == "Email notification marked as sent"
        assert repository.entities[notification_id].status == NotificationStatus.SENT
        assert published(event_bus) == [
            NotificationCreated,
            NotificationFailed,
            NotificationRetryScheduled,
            NotificationSent,
        ]

    async def test_cancel_then_delete(self, email_service, repository, event_bus):
        """Test a cancelled notification can be deleted"""
        notification_id = (await email_service.create(email_command())).data.id

        await email_service.cancel(notification_id)
        result = await email_service.delete(notification_id)

        assert result.data is None
        assert notification_id not in repository.entities
        assert published(event_bus)[-2:] == [NotificationCancelled, NotificationDeleted]

    async def test_pending_cannot_be_deleted(self, email_service, repository):
        """Test deletion of a PENDING notification is a conflict"""
        notification_id = (await email_service.create(email_command())).data.id

        with pytest.raises(StateConflictException):
            await email_service.delete(notification_id)

        assert notification_id in repository.entities

    async def test_missing_notification(self, email_service):
        """Test operations on unknown ids raise not found"""
        with pytest.raises(NotificationNotFoundException):
            await email_service.get("missing")
        with pytest.raises(NotificationNotFoundException):
            await email_service.cancel("missing")

    async def test_without_event_bus(self, repository):
        """Test the service works when no bus is configured"""
        service = EmailNotificationService(repository)

        result = await service.create(email_command())

        assert result.data.id in repository.entities


async def test_push_service_uses_push_aggregate(repository, event_bus):
    """Test the push service creates push notifications"""
    service = PushNotificationService(repository, event_bus)

    result = await service.create(
        CreatePushNotificationCommand(
            tenant_id=TENANT_ID,
            template_id=TEMPLATE_ID,
            recipients=[DEVICE_TOKEN],
            title="Build finished",
            body="Deploy is live",
        )
    )

    assert result.message == "Push notification created"
    assert result.data.CHANNEL == "push"
    assert published(event_bus) == [NotificationCreated]
