"""
Notification mappers for every channel.

The delivery-state fields are identical across channels; only the
recipient type and the content fields differ.
"""

from datetime import datetime
from typing import Any

from src.domain.entities.notification import (EmailNotificationEntity,
                                              NotificationEntity,
                                              PushNotificationEntity,
                                              SmsNotificationEntity,
                                              WebhookNotificationEntity)
from src.domain.enums import NotificationPriority, NotificationStatus
from src.domain.value_objects.core import DeviceToken, EmailAddress, EmailSubject
from src.domain.value_objects.messaging import PhoneNumber, WebhookUrl
from src.infrastructure.persistence.mappers.base import Document, Mapper
from src.infrastructure.persistence.models.notification import (
    EmailNotification, PushNotification, SmsNotification, WebhookNotification)
from src.shared.utils.datetime import ensure_utc, from_iso, to_iso

DATETIME_FIELDS = ("scheduled_at", "sent_at", "failed_at", "created_at", "updated_at")

_PLAIN_FIELDS = (
    "id",
    "tenant_id",
    "template_id",
    "retry_count",
    "max_retries",
    "can_retry",
    "error_code",
    "error_message",
    "message_id",
    "provider",
    "provider_message_id",
    "revision",
)


def _common_fields(entity: NotificationEntity) -> dict[str, Any]:
    fields: dict[str, Any] = {name: getattr(entity, name) for name in _PLAIN_FIELDS}
    fields.update(
        recipients=entity.recipient_values,
        status=entity.status.value,
        priority=entity.priority.value,
        data=dict(entity.data),
        metadata=dict(entity.metadata),
        error_details=dict(entity.error_details) if entity.error_details is not None else None,
    )
    fields.update({name: getattr(entity, name) for name in DATETIME_FIELDS})
    return fields


def _common_kwargs(data: dict[str, Any]) -> dict[str, Any]:
    kwargs = {name: data[name] for name in _PLAIN_FIELDS}
    kwargs.update(
        status=NotificationStatus(data["status"]),
        priority=NotificationPriority(data["priority"]),
        data=dict(data.get("data") or {}),
        metadata=dict(data.get("metadata") or {}),
        error_details=data.get("error_details"),
    )
    kwargs.update({name: data[name] for name in DATETIME_FIELDS})
    return kwargs


def _row_to_fields(row: Any) -> dict[str, Any]:
    data = {name: getattr(row, name) for name in (*_PLAIN_FIELDS, "status", "priority", "data")}
    data["recipients"] = list(row.recipients)
    data["metadata"] = row.metadata_
    data["error_details"] = row.error_details
    data.update({name: ensure_utc(getattr(row, name)) for name in DATETIME_FIELDS})
    return data


def _fields_to_row(fields: dict[str, Any]) -> dict[str, Any]:
    row = dict(fields)
    row["metadata_"] = row.pop("metadata")
    return row


def _to_document(fields: dict[str, Any]) -> Document:
    document = dict(fields)
    document.update({name: to_iso(fields[name]) for name in DATETIME_FIELDS})
    return document


def _from_document(document: Document) -> dict[str, Any]:
    data = dict(document)
    data.update({name: from_iso(document.get(name)) for name in DATETIME_FIELDS})
    return data


def _email_entity(data: dict[str, Any]) -> EmailNotificationEntity:
    return EmailNotificationEntity(
        **_common_kwargs(data),
        recipients=[EmailAddress(r) for r in data["recipients"]],
        subject=EmailSubject(data["subject"]),
        html_content=data.get("html_content"),
        text_content=data.get("text_content"),
    )


def _email_fields(entity: EmailNotificationEntity) -> dict[str, Any]:
    return {
        **_common_fields(entity),
        "subject": entity.subject.value,
        "html_content": entity.html_content,
        "text_content": entity.text_content,
    }


def _push_entity(data: dict[str, Any]) -> PushNotificationEntity:
    return PushNotificationEntity(
        **_common_kwargs(data),
        recipients=[DeviceToken(r) for r in data["recipients"]],
        title=data["title"],
        body=data["body"],
    )


def _push_fields(entity: PushNotificationEntity) -> dict[str, Any]:
    return {**_common_fields(entity), "title": entity.title, "body": entity.body}


def _sms_entity(data: dict[str, Any]) -> SmsNotificationEntity:
    return SmsNotificationEntity(
        **_common_kwargs(data),
        recipients=[PhoneNumber(r) for r in data["recipients"]],
        content=data.get("content"),
    )


def _sms_fields(entity: SmsNotificationEntity) -> dict[str, Any]:
    return {**_common_fields(entity), "content": entity.content}


def _webhook_entity(data: dict[str, Any]) -> WebhookNotificationEntity:
    return WebhookNotificationEntity(
        **_common_kwargs(data),
        recipients=[WebhookUrl(r) for r in data["recipients"]],
    )


def _webhook_fields(entity: WebhookNotificationEntity) -> dict[str, Any]:
    return _common_fields(entity)


class EmailNotificationRowMapper(Mapper[EmailNotification, EmailNotificationEntity]):
    def to_domain(self, source: EmailNotification) -> EmailNotificationEntity:
        data = _row_to_fields(source)
        data.update(
            subject=source.subject,
            html_content=source.html_content,
            text_content=source.text_content,
        )
        return _email_entity(data)

    def to_persistence(self, entity: EmailNotificationEntity) -> EmailNotification:
        return EmailNotification(**_fields_to_row(_email_fields(entity)))


class EmailNotificationDocumentMapper(Mapper[Document, EmailNotificationEntity]):
    def to_domain(self, source: Document) -> EmailNotificationEntity:
        return _email_entity(_from_document(source))

    def to_persistence(self, entity: EmailNotificationEntity) -> Document:
        return _to_document(_email_fields(entity))


class PushNotificationRowMapper(Mapper[PushNotification, PushNotificationEntity]):
    def to_domain(self, source: PushNotification) -> PushNotificationEntity:
        data = _row_to_fields(source)
        data.update(title=source.title, body=source.body)
        return _push_entity(data)

    def to_persistence(self, entity: PushNotificationEntity) -> PushNotification:
        return PushNotification(**_fields_to_row(_push_fields(entity)))


class PushNotificationDocumentMapper(Mapper[Document, PushNotificationEntity]):
    def to_domain(self, source: Document) -> PushNotificationEntity:
        return _push_entity(_from_document(source))

    def to_persistence(self, entity: PushNotificationEntity) -> Document:
        return _to_document(_push_fields(entity))


class SmsNotificationRowMapper(Mapper[SmsNotification, SmsNotificationEntity]):
    def to_domain(self, source: SmsNotification) -> SmsNotificationEntity:
        data = _row_to_fields(source)
        data["content"] = source.content
        return _sms_entity(data)

    def to_persistence(self, entity: SmsNotificationEntity) -> SmsNotification:
        return SmsNotification(**_fields_to_row(_sms_fields(entity)))


class SmsNotificationDocumentMapper(Mapper[Document, SmsNotificationEntity]):
    def to_domain(self, source: Document) -> SmsNotificationEntity:
        return _sms_entity(_from_document(source))

    def to_persistence(self, entity: SmsNotificationEntity) -> Document:
        return _to_document(_sms_fields(entity))


class WebhookNotificationRowMapper(Mapper[WebhookNotification, WebhookNotificationEntity]):
    def to_domain(self, source: WebhookNotification) -> WebhookNotificationEntity:
        return _webhook_entity(_row_to_fields(source))

    def to_persistence(self, entity: WebhookNotificationEntity) -> WebhookNotification:
        return WebhookNotification(**_fields_to_row(_webhook_fields(entity)))


class WebhookNotificationDocumentMapper(Mapper[Document, WebhookNotificationEntity]):
    def to_domain(self, source: Document) -> WebhookNotificationEntity:
        return _webhook_entity(_from_document(source))

    def to_persistence(self, entity: WebhookNotificationEntity) -> Document:
        return _to_document(_webhook_fields(entity))


def notification_to_dto(entity: NotificationEntity, now: datetime | None = None) -> Document:
    if isinstance(entity, EmailNotificationEntity):
        document = _to_document(_email_fields(entity))
    elif isinstance(entity, PushNotificationEntity):
        document = _to_document(_push_fields(entity))
    elif isinstance(entity, SmsNotificationEntity):
        document = _to_document(_sms_fields(entity))
    elif isinstance(entity, WebhookNotificationEntity):
        document = _to_document(_webhook_fields(entity))
        document.update(
            http_method=entity.http_method, headers=entity.headers, timeout_ms=entity.timeout_ms
        )
    else:
        document = _to_document(_common_fields(entity))
    document["channel"] = entity.CHANNEL
    document["is_scheduled"] = entity.is_scheduled(now)
    document["retries_exhausted"] = entity.retries_exhausted()
    return document
