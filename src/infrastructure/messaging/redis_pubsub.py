"""Redis Pub/Sub fan-out of domain events to external listeners"""

from __future__ import annotations

import json
import logging

import redis.asyncio as redis

from src.domain.events.base import DomainEvent

logger = logging.getLogger(__name__)

CHANNEL_PREFIX = "domain_events"


def channel_for(aggregate_type: str) -> str:
    """Channel name for an aggregate type, e.g. domain_events:Tenant"""
    return f"{CHANNEL_PREFIX}:{aggregate_type}"


class RedisEventPublisher:
    """
    Publishes serialized domain events to domain_events:{aggregate_type}.

    Subscribed to the event bus for every event type; a failed publish is
    logged and reported as False, never raised.
    """

    def __init__(self, redis_client: redis.Redis | None) -> None:
        self.redis = redis_client

    def is_available(self) -> bool:
        return self.redis is not None

    async def publish_event(self, event: DomainEvent) -> bool:
        if self.redis is None:
            logger.debug("Redis not available, skipping publish")
            return False

        channel = channel_for(event.aggregate_type)
        try:
            await self.redis.publish(channel, json.dumps(event.to_dict()))
        except redis.RedisError as e:
            logger.error(f"Failed to publish {event.event_type} to {channel}: {e}")
            return False
        logger.debug(f"Published {event.event_type} ({event.event_id}) to {channel}")
        return True

