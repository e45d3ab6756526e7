"""Tenant summary projection."""

import logging

from src.application.interfaces.services import IReadModelStore
from src.domain.events.base import DomainEvent
from src.domain.events.tenant import (TenantActivated, TenantConfigChanged,
                                      TenantCreated, TenantDeleted,
                                      TenantResumed, TenantSuspended)

logger = logging.getLogger(__name__)

TENANT_SUMMARIES = "tenant_summaries"

_STATUS_BY_EVENT = {
    "TenantActivated": "active",
    "TenantSuspended": "suspended",
    "TenantResumed": "active",
    "TenantDeleted": "deleted",
}


class TenantProjection:
    """Keeps a compact tenant summary (status, type, config keys) per tenant"""

    EVENTS = (
        TenantCreated,
        TenantActivated,
        TenantSuspended,
        TenantResumed,
        TenantDeleted,
        TenantConfigChanged,
    )

    def __init__(self, store: IReadModelStore):
        self.store = store

    async def handle(self, event: DomainEvent) -> None:
        logger.info(f"Processing {event.event_type} for tenant {event.aggregate_id}")
        try:
            if isinstance(event, TenantCreated):
                await self.store.put(
                    TENANT_SUMMARIES,
                    event.aggregate_id,
                    {
                        "id": event.aggregate_id,
                        "name": event.name,
                        "code": event.code,
                        "domain": event.domain,
                        "type": event.tenant_type.value,
                        "status": event.status.value,
                        "config_keys": [],
                        "last_event_at": event.occurred_at.isoformat(),
                    },
                )
            else:
                summary = await self.store.get(TENANT_SUMMARIES, event.aggregate_id)
                if summary is None:
                    logger.warning(
                        f"No tenant summary for {event.aggregate_id}, skipping {event.event_type}"
                    )
                    return
                if event.event_type in _STATUS_BY_EVENT:
                    summary["status"] = _STATUS_BY_EVENT[event.event_type]
                if isinstance(event, TenantConfigChanged):
                    summary["config_keys"] = sorted(event.new_config)
                summary["last_event_at"] = event.occurred_at.isoformat()
                await self.store.put(TENANT_SUMMARIES, event.aggregate_id, summary)
        except Exception as e:
            logger.error(f"Failed to process {event.event_type} for tenant {event.aggregate_id}: {e}")
            raise
        logger.info(f"Successfully processed {event.event_type} for tenant {event.aggregate_id}")
