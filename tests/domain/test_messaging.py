"""Tests for the SMS and webhook channels and their value objects"""

import pytest

from src.domain.aggregates import (CreateSmsNotificationCommand,
                                   CreateWebhookNotificationCommand,
                                   SendNotificationCommand,
                                   SmsNotificationAggregate,
                                   WebhookNotificationAggregate)
from src.domain.entities.notification import (DEFAULT_WEBHOOK_TIMEOUT_MS,
                                              SmsNotificationEntity,
                                              WebhookNotificationEntity)
from src.domain.enums import NotificationStatus
from src.domain.events import NotificationCreated
from src.domain.exceptions import ValidationException
from src.domain.value_objects import PhoneNumber, TemplateName, WebhookUrl
from tests.fakes import TEMPLATE_ID, TENANT_ID, InMemoryRepository

HOOK_URL = "https://hooks.example.com/notify"


@pytest.fixture
def repository():
    return InMemoryRepository()


class TestPhoneNumber:
    def test_keeps_digits_only(self):
        """Test separators and the leading plus are dropped"""
        assert PhoneNumber("+1 (415) 555-0100").value == "14155550100"

    @pytest.mark.parametrize("value", ["", "call me", "12345", "+1234567890123456", "415.555.0100"])
    def test_rejects_invalid_numbers(self, value):
        """Test letters, dots and out-of-range digit counts are rejected"""
        with pytest.raises(ValidationException) as exc_info:
            PhoneNumber(value)
        assert exc_info.value.field == "recipients"


class TestWebhookUrl:
    def test_accepts_public_https_endpoint(self):
        assert WebhookUrl(f" {HOOK_URL} ").value == HOOK_URL

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "ftp://hooks.example.com/notify",
            "https://hooks.example.com",
            "https://hooks.example.com/",
            "http://localhost/hook",
            "http://api.localhost/hook",
            "http://127.0.0.1/hook",
            "http://10.0.0.5/hook",
            "http://192.168.1.2/hook",
            "http://169.254.1.1/hook",
            "https://hooks.example.com/" + "x" * 2048,
        ],
    )
    def test_rejects_unusable_endpoints(self, value):
        """Test scheme, root path, local and private targets and length are checked"""
        with pytest.raises(ValidationException):
            WebhookUrl(value)


class TestTemplateName:
    def test_collapses_whitespace(self):
        assert TemplateName("  Welcome   email ").value == "Welcome email"

    @pytest.mark.parametrize("value", ["", "A", "1st welcome", "<b>Hi</b>", "Tom & Jerry", "x" * 101])
    def test_rejects_invalid_names(self, value):
        with pytest.raises(ValidationException) as exc_info:
            TemplateName(value)
        assert exc_info.value.field == "name"


class TestSmsNotification:
    def test_content_length(self):
        """Test SMS content is capped at one 160 character segment"""
        with pytest.raises(ValidationException) as exc_info:
            SmsNotificationEntity(
                id="s-1",
                tenant_id=TENANT_ID,
                template_id=TEMPLATE_ID,
                recipients=[PhoneNumber("+14155550100")],
                content="x" * 161,
            )
        assert exc_info.value.field == "content"

    async def test_create_and_send(self, repository):
        """Test the SMS aggregate shares the delivery lifecycle"""
        aggregate = SmsNotificationAggregate(repository)
        command = CreateSmsNotificationCommand(
            tenant_id=TENANT_ID, template_id=TEMPLATE_ID, recipients=["+1 415 555 0100"], content="Hi"
        )

        notification = await aggregate.create(command)
        sent = await aggregate.send(SendNotificationCommand(provider="twilio"))

        assert notification.recipient_values == ["14155550100"]
        assert sent.status == NotificationStatus.SENT
        created = aggregate.collect_domain_events()[0]
        assert isinstance(created, NotificationCreated)
        assert created.channel == "sms"

    async def test_invalid_recipient(self, repository):
        command = CreateSmsNotificationCommand(
            tenant_id=TENANT_ID, template_id=TEMPLATE_ID, recipients=["not a phone"]
        )
        with pytest.raises(ValidationException):
            await SmsNotificationAggregate(repository).create(command)
        assert repository.entities == {}


class TestWebhookNotification:
    def make(self, **metadata) -> WebhookNotificationEntity:
        return WebhookNotificationEntity(
            id="w-1",
            tenant_id=TENANT_ID,
            template_id=TEMPLATE_ID,
            recipients=[WebhookUrl(HOOK_URL)],
            metadata=metadata,
        )

    def test_delivery_defaults(self):
        """Test method, headers and timeout fall back to defaults"""
        webhook = self.make()

        assert webhook.http_method == "POST"
        assert webhook.headers == {"Content-Type": "application/json"}
        assert webhook.timeout_ms == DEFAULT_WEBHOOK_TIMEOUT_MS

    def test_delivery_options_from_metadata(self):
        webhook = self.make(httpMethod="put", headers={"X-Signature": "abc"}, timeout=5000)

        assert webhook.http_method == "PUT"
        assert webhook.headers["X-Signature"] == "abc"
        assert webhook.timeout_ms == 5000

    @pytest.mark.parametrize(
        "metadata",
        [{"httpMethod": "GET"}, {"timeout": 0}, {"timeout": True}, {"timeout": "5s"}, {"headers": ["x"]}],
    )
    def test_rejects_invalid_options(self, metadata):
        with pytest.raises(ValidationException) as exc_info:
            self.make(**metadata)
        assert exc_info.value.field == "metadata"

    async def test_create(self, repository):
        command = CreateWebhookNotificationCommand(
            tenant_id=TENANT_ID,
            template_id=TEMPLATE_ID,
            recipients=[HOOK_URL],
            metadata={"httpMethod": "PATCH"},
        )

        notification = await WebhookNotificationAggregate(repository).create(command)

        stored = await repository.find_by_id(notification.id)
        assert stored.http_method == "PATCH"
        assert stored.status == NotificationStatus.PENDING
