"""Read-side projections fed by the event bus."""

from src.application.events.event_bus import EventBus
from src.application.interfaces.services import IReadModelStore
from src.application.projections.notification_projection import (
    NOTIFICATION_STATS, NotificationProjection)
from src.application.projections.rebuild import ReadModelRebuilder
from src.application.projections.tenant_projection import (TENANT_SUMMARIES,
                                                           TenantProjection)
from src.application.projections.user_projection import (USER_READ_MODELS,
                                                         UserProjection)


def register_projections(bus: EventBus, store: IReadModelStore) -> None:
    """Subscribe every projection to the events it consumes"""
    for projection in (
        TenantProjection(store),
        UserProjection(store),
        NotificationProjection(store),
    ):
        for event_type in projection.EVENTS:
            bus.subscribe(event_type, projection.handle)


__all__ = [
    "NOTIFICATION_STATS",
    "TENANT_SUMMARIES",
    "USER_READ_MODELS",
    "NotificationProjection",
    "ReadModelRebuilder",
    "TenantProjection",
    "UserProjection",
    "register_projections",
]
