"""Process-local read-model store."""

import copy
from typing import Any


def matches(document: dict[str, Any], filters: dict[str, Any] | None) -> bool:
    return all(document.get(field) == value for field, value in (filters or {}).items())


class InMemoryReadModelStore:
    """
    Dict-backed read models.

    Documents are deep-copied on the way in and out so callers cannot
    mutate stored state without a put().
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    async def get(self, collection: str, key: str) -> dict[str, Any] | None:
        document = self._collections.get(collection, {}).get(key)
        return copy.deepcopy(document) if document is not None else None

    async def put(self, collection: str, key: str, document: dict[str, Any]) -> None:
        self._collections.setdefault(collection, {})[key] = copy.deepcopy(document)

    async def delete(self, collection: str, key: str) -> None:
        self._collections.get(collection, {}).pop(key, None)

    async def find(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(document)
            for document in self._collections.get(collection, {}).values()
            if matches(document, filters)
        ]

    def clear(self) -> None:
        self._collections.clear()
