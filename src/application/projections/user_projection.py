"""User read-model projection."""

import logging

from src.application.interfaces.services import IReadModelStore
from src.domain.events.base import DomainEvent
from src.domain.events.user import (UserCreated, UserDeleted,
                                    UserStatusChanged, UserUpdated)

logger = logging.getLogger(__name__)

USER_READ_MODELS = "user_read_models"

# Fields copied from UserUpdated change sets into the read model
_PROJECTED_FIELDS = ("display_name", "email")


class UserProjection:
    """
    Maintains one flat document per user for tenant-scoped listing.

    Soft deletes keep the document with status "deleted"; hard deletes remove it.
    """

    EVENTS = (UserCreated, UserUpdated, UserStatusChanged, UserDeleted)

    def __init__(self, store: IReadModelStore):
        self.store = store

    async def handle(self, event: DomainEvent) -> None:
        logger.info(f"Processing {event.event_type} for user {event.aggregate_id}")
        try:
            if isinstance(event, UserCreated):
                await self._on_created(event)
            elif isinstance(event, UserDeleted) and event.hard_delete:
                await self.store.delete(USER_READ_MODELS, event.aggregate_id)
            else:
                await self._on_changed(event)
        except Exception as e:
            logger.error(f"Failed to process {event.event_type} for user {event.aggregate_id}: {e}")
            raise
        logger.info(f"Successfully processed {event.event_type} for user {event.aggregate_id}")

    async def _on_created(self, event: UserCreated) -> None:
        await self.store.put(
            USER_READ_MODELS,
            event.aggregate_id,
            {
                "id": event.aggregate_id,
                "tenant_id": event.tenant_id,
                "organization_id": event.organization_id,
                "department_id": event.department_id,
                "username": event.username,
                "email": event.email,
                "display_name": event.display_name,
                "status": event.status.value,
                "created_at": event.occurred_at.isoformat(),
                "updated_at": event.occurred_at.isoformat(),
            },
        )

    async def _on_changed(self, event: DomainEvent) -> None:
        document = await self.store.get(USER_READ_MODELS, event.aggregate_id)
        if document is None:
            logger.warning(f"No read model for user {event.aggregate_id}, skipping {event.event_type}")
            return

        if isinstance(event, UserUpdated):
            for field_name in _PROJECTED_FIELDS:
                if field_name in event.changes:
                    document[field_name] = event.changes[field_name]["new"]
        elif isinstance(event, UserStatusChanged):
            document["status"] = event.new_status.value
        elif isinstance(event, UserDeleted):
            document["status"] = "deleted"

        document["updated_at"] = event.occurred_at.isoformat()
        await self.store.put(USER_READ_MODELS, event.aggregate_id, document)
