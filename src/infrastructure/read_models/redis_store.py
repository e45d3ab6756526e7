"""Redis-backed read-model store."""

from typing import Any

from src.infrastructure.documents.store import RedisDocumentStore
from src.infrastructure.read_models.memory_store import matches

READ_MODEL_NAMESPACE = "read"


class RedisReadModelStore:
    """Read models kept as JSON documents under {prefix}:read:{collection}:{key}"""

    def __init__(self, store: RedisDocumentStore):
        self.store = store

    @staticmethod
    def _collection(collection: str) -> str:
        return f"{READ_MODEL_NAMESPACE}:{collection}"

    async def get(self, collection: str, key: str) -> dict[str, Any] | None:
        return await self.store.get(self._collection(collection), key)

    async def put(self, collection: str, key: str, document: dict[str, Any]) -> None:
        await self.store.put(self._collection(collection), key, document)

    async def delete(self, collection: str, key: str) -> None:
        await self.store.delete(self._collection(collection), key)

    async def find(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        documents = await self.store.all(self._collection(collection))
        return [document for document in documents if matches(document, filters)]
