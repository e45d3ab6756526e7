"""Read-model store implementations."""

from src.infrastructure.read_models.memory_store import InMemoryReadModelStore
from src.infrastructure.read_models.redis_store import RedisReadModelStore

__all__ = ["InMemoryReadModelStore", "RedisReadModelStore"]
