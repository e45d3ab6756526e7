"""
Redis JSON document store.

Layout per collection:
    {prefix}:{collection}:{id}                  JSON document
    {prefix}:{collection}:_ids                  set of document ids
    {prefix}:{collection}:_by:{field}:{value}   id of the document holding that value
    {prefix}:{collection}:_idx:{id}:{field}     value the document is indexed under

Secondary indexes are unique lookups; stale entries are removed when the
indexed value changes or the document is deleted.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import redis.asyncio as redis

from src.infrastructure.exceptions import DocumentStoreUnavailableException

logger = logging.getLogger(__name__)

Document = dict[str, Any]


class RedisDocumentStore:
    def __init__(self, redis_client: redis.Redis | None, prefix: str = "saas_admin"):
        self.redis = redis_client
        self.prefix = prefix

    def _client(self) -> redis.Redis:
        if self.redis is None:
            raise DocumentStoreUnavailableException()
        return self.redis

    def document_key(self, collection: str, document_id: str) -> str:
        return f"{self.prefix}:{collection}:{document_id}"

    def ids_key(self, collection: str) -> str:
        return f"{self.prefix}:{collection}:_ids"

    def index_key(self, collection: str, field: str, value: str) -> str:
        return f"{self.prefix}:{collection}:_by:{field}:{value}"

    async def get(self, collection: str, document_id: str) -> Document | None:
        raw = await self._client().get(self.document_key(collection, document_id))
        return json.loads(raw) if raw is not None else None

    async def put(
        self,
        collection: str,
        document_id: str,
        document: Document,
        indexes: dict[str, str] | None = None,
    ) -> None:
        """Write a document and refresh its secondary index entries"""
        client = self._client()
        indexes = indexes or {}
        previous = await self._previous_indexes(collection, document_id, indexes)

        async with client.pipeline(transaction=True) as pipe:
            for field, old_value in previous.items():
                if old_value != indexes.get(field):
                    pipe.delete(self.index_key(collection, field, old_value))
            pipe.set(self.document_key(collection, document_id), json.dumps(document))
            pipe.sadd(self.ids_key(collection), document_id)
            for field, value in indexes.items():
                pipe.set(self.index_key(collection, field, value), document_id)
                pipe.set(self._reverse_key(collection, document_id, field), value)
            await pipe.execute()
        logger.debug(f"Stored {collection} document {document_id}")

    async def delete(self, collection: str, document_id: str, index_fields: tuple[str, ...] = ()) -> None:
        client = self._client()
        previous = await self._previous_indexes(
            collection, document_id, dict.fromkeys(index_fields, "")
        )
        async with client.pipeline(transaction=True) as pipe:
            for field, value in previous.items():
                pipe.delete(self.index_key(collection, field, value))
            for field in index_fields:
                pipe.delete(self._reverse_key(collection, document_id, field))
            pipe.delete(self.document_key(collection, document_id))
            pipe.srem(self.ids_key(collection), document_id)
            await pipe.execute()
        logger.debug(f"Deleted {collection} document {document_id}")

    async def find_by_index(self, collection: str, field: str, value: str) -> Document | None:
        document_id = await self._client().get(self.index_key(collection, field, value))
        if document_id is None:
            return None
        return await self.get(collection, document_id)

    async def all(self, collection: str) -> list[Document]:
        client = self._client()
        ids = sorted(await client.smembers(self.ids_key(collection)))
        if not ids:
            return []
        raw_documents = await client.mget([self.document_key(collection, i) for i in ids])
        return [json.loads(raw) for raw in raw_documents if raw is not None]

    def _reverse_key(self, collection: str, document_id: str, field: str) -> str:
        return f"{self.prefix}:{collection}:_idx:{document_id}:{field}"

    async def _previous_indexes(
        self, collection: str, document_id: str, fields: dict[str, str]
    ) -> dict[str, str]:
        if not fields:
            return {}
        names = list(fields)
        values = await self._client().mget(
            [self._reverse_key(collection, document_id, name) for name in names]
        )
        return {name: value for name, value in zip(names, values) if value is not None}
