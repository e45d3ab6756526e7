"""
Notification endpoints for the email, push, SMS and webhook channels.

All channels expose the same delivery lifecycle, so their routers are
built by one factory over the channel's service and create schema.
"""

from collections.abc import Callable
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from src.application.queries import ReadModelQueries
from src.application.services import NotificationService
from src.domain.aggregates.commands import (CreateEmailNotificationCommand,
                                            CreatePushNotificationCommand,
                                            CreateSmsNotificationCommand,
                                            CreateWebhookNotificationCommand,
                                            FailNotificationCommand,
                                            SendNotificationCommand)
from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.persistence.mappers import notification_to_dto
from src.presentation.api.dependencies import (
    get_email_notification_service, get_push_notification_service,
    get_read_model_queries, get_sms_notification_service,
    get_webhook_notification_service)
from src.presentation.api.v1.schemas.common import ApiResponse, ok
from src.presentation.api.v1.schemas.notification import (
    EmailNotificationCreate, NotificationFail, NotificationResponse,
    NotificationSend, NotificationStatsResponse, PushNotificationCreate,
    SmsNotificationCreate, WebhookNotificationCreate)


def _base_fields(data: Any, settings: Settings) -> dict[str, Any]:
    return {
        "tenant_id": data.tenant_id,
        "template_id": data.template_id,
        "recipients": list(data.recipients),
        "data": dict(data.data),
        "priority": data.priority,
        "scheduled_at": data.scheduled_at,
        "max_retries": (
            data.max_retries if data.max_retries is not None else settings.notification_max_retries
        ),
        "metadata": dict(data.metadata),
    }


def _email_command(data: EmailNotificationCreate, settings: Settings) -> CreateEmailNotificationCommand:
    return CreateEmailNotificationCommand(
        **_base_fields(data, settings),
        subject=data.subject,
        html_content=data.html_content,
        text_content=data.text_content,
    )


def _push_command(data: PushNotificationCreate, settings: Settings) -> CreatePushNotificationCommand:
    return CreatePushNotificationCommand(**_base_fields(data, settings), title=data.title, body=data.body)


def _sms_command(data: SmsNotificationCreate, settings: Settings) -> CreateSmsNotificationCommand:
    return CreateSmsNotificationCommand(**_base_fields(data, settings), content=data.content)


def _webhook_command(data: WebhookNotificationCreate, settings: Settings) -> CreateWebhookNotificationCommand:
    return CreateWebhookNotificationCommand(**_base_fields(data, settings))


def notification_router(
    get_service: Callable[..., NotificationService],
    create_schema: type,
    to_command: Callable[[Any, Settings], Any],
) -> APIRouter:
    channel_router = APIRouter()
    ServiceDep = Annotated[NotificationService, Depends(get_service)]

    @channel_router.post(
        "", response_model=ApiResponse[NotificationResponse], status_code=status.HTTP_201_CREATED
    )
    async def create_notification(
        data: create_schema,  # type: ignore[valid-type]
        service: ServiceDep,
        settings: Annotated[Settings, Depends(get_settings)],
    ):
        """Create a PENDING notification"""
        result = await service.create(to_command(data, settings))
        return ok(notification_to_dto(result.data), result.message)

    @channel_router.get("/{notification_id}", response_model=ApiResponse[NotificationResponse])
    async def get_notification(notification_id: str, service: ServiceDep):
        result = await service.get(notification_id)
        return ok(notification_to_dto(result.data))

    @channel_router.post("/{notification_id}/send", response_model=ApiResponse[NotificationResponse])
    async def send_notification(notification_id: str, data: NotificationSend, service: ServiceDep):
        """Record a successful delivery; only PENDING notifications can be sent"""
        command = SendNotificationCommand(
            message_id=data.message_id,
            provider=data.provider,
            provider_message_id=data.provider_message_id,
        )
        result = await service.send(notification_id, command)
        return ok(notification_to_dto(result.data), result.message)

    @channel_router.post("/{notification_id}/fail", response_model=ApiResponse[NotificationResponse])
    async def fail_notification(notification_id: str, data: NotificationFail, service: ServiceDep):
        command = FailNotificationCommand(
            error_code=data.error_code,
            error_message=data.error_message,
            error_details=data.error_details,
            can_retry=data.can_retry,
            provider=data.provider,
        )
        result = await service.fail(notification_id, command)
        return ok(notification_to_dto(result.data), result.message)

    @channel_router.post("/{notification_id}/retry", response_model=ApiResponse[NotificationResponse])
    async def retry_notification(notification_id: str, service: ServiceDep):
        """Put a FAILED notification back to PENDING while retries remain"""
        result = await service.retry(notification_id)
        return ok(notification_to_dto(result.data), result.message)

    @channel_router.post("/{notification_id}/cancel", response_model=ApiResponse[NotificationResponse])
    async def cancel_notification(notification_id: str, service: ServiceDep):
        result = await service.cancel(notification_id)
        return ok(notification_to_dto(result.data), result.message)

    @channel_router.delete("/{notification_id}", response_model=ApiResponse[None])
    async def delete_notification(notification_id: str, service: ServiceDep):
        """Remove a notification; PENDING ones must be cancelled first"""
        result = await service.delete(notification_id)
        return ok(None, result.message)

    return channel_router


email_router = notification_router(get_email_notification_service, EmailNotificationCreate, _email_command)
push_router = notification_router(get_push_notification_service, PushNotificationCreate, _push_command)
sms_router = notification_router(get_sms_notification_service, SmsNotificationCreate, _sms_command)
webhook_router = notification_router(
    get_webhook_notification_service, WebhookNotificationCreate, _webhook_command
)

stats_router = APIRouter()


@stats_router.get("/{tenant_id}", response_model=ApiResponse[NotificationStatsResponse])
async def get_notification_stats(
    tenant_id: str, queries: Annotated[ReadModelQueries, Depends(get_read_model_queries)]
):
    """Delivery counters for a tenant from the read model"""
    return ok(await queries.get_notification_stats(tenant_id))


__all__ = [
    "email_router",
    "push_router",
    "sms_router",
    "stats_router",
    "webhook_router",
]
