"""
Tests for the JSON file document store.
"""

import asyncio
import json

import pytest

from echostore.domain.exceptions import NotFoundError, StoreFailureError
from echostore.persistence.json import JsonDocumentStore
from echostore.persistence.json.file_manager import KeyedLocks


@pytest.fixture
def json_store(tmp_path) -> JsonDocumentStore:
    return JsonDocumentStore(str(tmp_path))


@pytest.mark.asyncio
class TestJsonDocumentStore:
    async def test_set_writes_collection_file(self, json_store, tmp_path):
        await json_store.set_document("users", "u1", {"id": "u1", "displayName": "Zoë"})

        file_data = json.loads((tmp_path / "users.json").read_text(encoding="utf-8"))
        assert file_data["documents"] == {"u1": {"id": "u1", "displayName": "Zoë"}}
        assert file_data["_metadata"]["version"] == "1.0"

    async def test_subcollection_file_path(self, json_store, tmp_path):
        await json_store.set_document("chats/c1/messages", "m1", {"id": "m1"})
        assert (tmp_path / "chats" / "c1" / "messages.json").exists()

    async def test_state_survives_new_instance(self, json_store, tmp_path):
        await json_store.set_document("users", "u1", {"id": "u1"})
        reopened = JsonDocumentStore(str(tmp_path))
        assert await reopened.get_document("users", "u1") == {"id": "u1"}

    async def test_patch_and_get(self, json_store):
        await json_store.set_document("users", "u1", {"id": "u1", "isOnline": True})
        await json_store.patch_document("users", "u1", {"isOnline": False})
        assert await json_store.get_document("users", "u1") == {"id": "u1", "isOnline": False}

    async def test_missing_document_raises_not_found(self, json_store):
        with pytest.raises(NotFoundError):
            await json_store.get_document("users", "u1")
        with pytest.raises(NotFoundError):
            await json_store.patch_document("users", "u1", {"x": 1})
        with pytest.raises(NotFoundError):
            await json_store.delete_document("users", "u1")

    async def test_delete_last_document_removes_file(self, json_store, tmp_path):
        await json_store.set_document("users", "u1", {"id": "u1"})
        await json_store.delete_document("users", "u1")
        assert not (tmp_path / "users.json").exists()

    async def test_scan_and_queries_keep_insertion_order(self, json_store):
        await json_store.set_document("groups", "g2", {"id": "g2", "memberIds": ["u1"]})
        await json_store.set_document("groups", "g1", {"id": "g1", "memberIds": ["u1", "u2"]})

        assert [d["id"] for d in await json_store.scan_collection("groups")] == ["g2", "g1"]
        matches = await json_store.query_array_contains("groups", "memberIds", "u2")
        assert [d["id"] for d in matches] == ["g1"]
        matches = await json_store.query_by_field("groups", "id", "g2")
        assert len(matches) == 1

    async def test_delete_collection(self, json_store):
        await json_store.set_document("chats/c1/messages", "m1", {"id": "m1"})
        await json_store.set_document("chats/c1/messages", "m2", {"id": "m2"})

        assert await json_store.delete_collection("chats/c1/messages") == 2
        assert await json_store.scan_collection("chats/c1/messages") == []

    async def test_corrupt_file_is_store_failure(self, json_store, tmp_path):
        (tmp_path / "users.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreFailureError):
            await json_store.scan_collection("users")

    async def test_path_traversal_rejected(self, json_store):
        with pytest.raises(StoreFailureError):
            await json_store.scan_collection("../outside")


def test_new_ids_are_unique(json_store):
    ids = {json_store.new_id("users") for _ in range(100)}
    assert len(ids) == 100


@pytest.mark.asyncio
class TestLockRegistry:
    async def test_locks_released_after_operations(self, json_store):
        for chat_id in ("c1", "c2", "c3"):
            path = f"chats/{chat_id}/messages"
            await json_store.set_document(path, "m1", {"id": "m1"})
            await json_store.scan_collection(path)
            await json_store.delete_collection(path)

        assert len(json_store._collection_locks) == 0
        assert len(json_store.files._file_locks) == 0

    async def test_locks_released_after_failed_operation(self, json_store):
        with pytest.raises(NotFoundError):
            await json_store.patch_document("users", "u1", {"x": 1})
        assert "users" not in json_store._collection_locks

    async def test_concurrent_writes_to_one_collection_all_land(self, json_store):
        await asyncio.gather(
            *(json_store.set_document("users", f"u{i}", {"id": f"u{i}"}) for i in range(10))
        )

        assert len(await json_store.scan_collection("users")) == 10
        assert len(json_store._collection_locks) == 0


@pytest.mark.asyncio
async def test_keyed_locks_serialize_holders_of_one_key():
    locks = KeyedLocks()
    order = []

    async def worker(name):
        async with locks.hold("k"):
            order.append(f"{name}-in")
            await asyncio.sleep(0)
            order.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))

    assert order == ["a-in", "a-out", "b-in", "b-out"]
    assert "k" not in locks
