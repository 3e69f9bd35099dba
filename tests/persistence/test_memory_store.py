"""
Tests for the in-memory reference store.
"""

import pytest

from echostore.domain.exceptions import NotFoundError, StoreFailureError


@pytest.mark.asyncio
class TestMemoryDocumentStore:
    """Core IDocumentStore behaviour of the reference store."""

    async def test_set_then_get(self, store):
        await store.set_document("users", "u1", {"id": "u1", "email": "a@x"})
        assert await store.get_document("users", "u1") == {"id": "u1", "email": "a@x"}

    async def test_get_missing_raises_not_found(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            await store.get_document("users", "missing")
        assert exc_info.value.collection == "users"

    async def test_returned_documents_are_copies(self, store):
        value = {"id": "u1", "tags": ["a"]}
        await store.set_document("users", "u1", value)
        value["tags"].append("b")

        document = await store.get_document("users", "u1")
        document["tags"].append("c")

        assert (await store.get_document("users", "u1"))["tags"] == ["a"]

    async def test_set_overwrites_whole_document(self, store):
        await store.set_document("users", "u1", {"id": "u1", "email": "a@x"})
        await store.set_document("users", "u1", {"id": "u1"})
        assert await store.get_document("users", "u1") == {"id": "u1"}

    async def test_patch_merges_fields(self, store):
        await store.set_document("users", "u1", {"id": "u1", "email": "a@x", "isOnline": True})
        await store.patch_document("users", "u1", {"isOnline": False})
        assert await store.get_document("users", "u1") == {
            "id": "u1",
            "email": "a@x",
            "isOnline": False,
        }

    async def test_patch_missing_raises_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.patch_document("users", "u1", {"email": "a@x"})
        assert store.document_count("users") == 0

    async def test_delete_then_missing(self, store):
        await store.set_document("users", "u1", {"id": "u1"})
        await store.delete_document("users", "u1")

        with pytest.raises(NotFoundError):
            await store.delete_document("users", "u1")
        assert "users" not in store.collections()

    async def test_scan_keeps_first_insertion_order(self, store):
        for document_id in ("b", "a", "c"):
            await store.set_document("items", document_id, {"id": document_id})
        await store.set_document("items", "b", {"id": "b", "v": 2})

        documents = await store.scan_collection("items")
        assert [d["id"] for d in documents] == ["b", "a", "c"]

    async def test_scan_missing_collection_is_empty(self, store):
        assert await store.scan_collection("nothing") == []

    async def test_query_by_field(self, store):
        await store.set_document("users", "u1", {"email": "a@x"})
        await store.set_document("users", "u2", {"email": "b@x"})
        await store.set_document("users", "u3", {"email": "a@x"})

        documents = await store.query_by_field("users", "email", "a@x")
        assert len(documents) == 2

    async def test_query_array_contains(self, store):
        await store.set_document("groups", "g1", {"memberIds": ["u1", "u2"]})
        await store.set_document("groups", "g2", {"memberIds": ["u2"]})
        await store.set_document("groups", "g3", {"memberIds": "u1"})

        documents = await store.query_array_contains("groups", "memberIds", "u1")
        assert documents == [{"memberIds": ["u1", "u2"]}]

    async def test_subcollections_are_separate(self, store):
        await store.set_document("chats/c1/messages", "m1", {"id": "m1"})
        await store.set_document("chats/c2/messages", "m1", {"id": "m1", "x": 1})

        assert await store.delete_collection("chats/c1/messages") == 1
        assert await store.delete_collection("chats/c1/messages") == 0
        assert store.document_count("chats/c2/messages") == 1

    @pytest.mark.parametrize("document_id", ["", "a/b"])
    async def test_invalid_document_id_rejected(self, store, document_id):
        with pytest.raises(StoreFailureError):
            await store.set_document("users", document_id, {})

    async def test_invalid_collection_rejected(self, store):
        with pytest.raises(StoreFailureError):
            await store.scan_collection("/users")


def test_new_id_is_deterministic(store):
    assert store.new_id("chats/c1/messages") == "messages-000001"
    assert store.new_id("groups") == "groups-000002"


@pytest.mark.asyncio
async def test_snapshot_and_clear(store):
    await store.set_document("users", "u1", {"id": "u1"})
    snapshot = store.snapshot()
    store.clear()

    assert snapshot == {"users": {"u1": {"id": "u1"}}}
    assert store.collections() == []
