"""Tests for the in-memory read-model store"""

import pytest

from src.infrastructure.read_models import InMemoryReadModelStore


@pytest.fixture
def store():
    return InMemoryReadModelStore()


async def test_documents_are_copied(store):
    """Test callers cannot mutate stored documents without put()"""
    document = {"id": "a", "tags": ["x"]}
    await store.put("things", "a", document)
    document["tags"].append("y")

    fetched = await store.get("things", "a")
    fetched["tags"].append("z")

    assert (await store.get("things", "a"))["tags"] == ["x"]


async def test_find_with_filters(store):
    """Test every filter field must match"""
    await store.put("things", "a", {"id": "a", "kind": "x", "status": "on"})
    await store.put("things", "b", {"id": "b", "kind": "x", "status": "off"})

    assert len(await store.find("things")) == 2
    assert [d["id"] for d in await store.find("things", {"kind": "x", "status": "off"})] == ["b"]
    assert await store.find("missing", {"kind": "x"}) == []


async def test_delete_and_clear(store):
    """Test delete is silent for unknown keys and clear empties everything"""
    await store.put("things", "a", {"id": "a"})

    await store.delete("things", "zzz")
    await store.delete("things", "a")
    assert await store.get("things", "a") is None

    await store.put("things", "b", {"id": "b"})
    store.clear()
    assert await store.find("things") == []
