"""
In-process domain event bus.

Handlers subscribe by event class name and are awaited in subscription
order. Delivery is fire-and-forget: a failing handler is logged and the
remaining handlers still run; the publisher never sees the error.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable

from src.domain.events.base import DomainEvent
from src.shared.telemetry.telemetry import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

EventHandler = Callable[[DomainEvent], Awaitable[None]]

# Subscribing under this key receives every event
ALL_EVENTS = "*"


class EventBus:
    """In-memory event bus for domain event publication and subscription."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: str | type[DomainEvent], handler: EventHandler) -> None:
        key = event_type if isinstance(event_type, str) else event_type.__name__
        self._handlers[key].append(handler)
        logger.debug(f"Handler {_handler_name(handler)} subscribed to {key}")

    def unsubscribe(self, event_type: str | type[DomainEvent], handler: EventHandler) -> None:
        key = event_type if isinstance(event_type, str) else event_type.__name__
        handlers = self._handlers.get(key, [])
        if handler in handlers:
            handlers.remove(handler)
            logger.debug(f"Handler {_handler_name(handler)} unsubscribed from {key}")

    def handlers_for(self, event_type: str) -> list[EventHandler]:
        return [*self._handlers.get(event_type, []), *self._handlers.get(ALL_EVENTS, [])]

    async def publish(self, event: DomainEvent) -> None:
        handlers = self.handlers_for(event.event_type)
        if not handlers:
            logger.debug(f"No handlers for event: {event.event_type}")
            return

        with tracer.start_as_current_span(f"event_bus.publish {event.event_type}") as span:
            span.set_attribute("event.id", event.event_id)
            span.set_attribute("event.aggregate_id", event.aggregate_id)
            for handler in handlers:
                try:
                    await handler(event)
                except Exception as e:
                    logger.error(
                        f"Event handler {_handler_name(handler)} failed for "
                        f"{event.event_type} ({event.event_id}): {e}"
                    )
                    span.record_exception(e)

    async def publish_all(self, events: list[DomainEvent]) -> None:
        for event in events:
            await self.publish(event)

    def clear(self) -> None:
        self._handlers.clear()


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__name__
