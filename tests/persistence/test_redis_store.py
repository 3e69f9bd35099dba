"""
Tests for the Redis document store against an in-process Redis double.

FakeRedis implements only the commands the store issues, with Redis
semantics for hashes, sorted sets and pipelines.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from echostore.domain.exceptions import NotFoundError, StoreFailureError
from echostore.persistence.redis import KeyFactory, RedisClient, RedisDocumentStore
from echostore.persistence.redis.serde import dumps_hash, loads, loads_hash


class FakePipeline:
    def __init__(self, redis: "FakeRedis"):
        self.redis = redis
        self.commands = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.commands = []

    def __getattr__(self, name):
        method = getattr(self.redis, f"_{name}")

        def queue(*args, **kwargs):
            self.commands.append((method, args, kwargs))
            return self

        return queue

    async def execute(self):
        results = [method(*args, **kwargs) for method, args, kwargs in self.commands]
        self.commands = []
        return results


class FakeRedis:
    def __init__(self):
        self.hashes: dict[str, dict[str, str]] = {}
        self.zsets: dict[str, dict[str, float]] = {}
        self.counters: dict[str, int] = {}

    # ---- synchronous command bodies --------------------------------------

    def _delete(self, *keys):
        removed = 0
        for key in keys:
            for space in (self.hashes, self.zsets, self.counters):
                if key in space:
                    del space[key]
                    removed += 1
        return removed

    def _hset(self, key, mapping):
        current = self.hashes.setdefault(key, {})
        added = len(set(mapping) - set(current))
        current.update(mapping)
        return added

    def _hgetall(self, key):
        return dict(self.hashes.get(key, {}))

    def _zadd(self, key, mapping, nx=False):
        zset = self.zsets.setdefault(key, {})
        added = 0
        for member, score in mapping.items():
            if member in zset and nx:
                continue
            added += member not in zset
            zset[member] = score
        return added

    def _zrem(self, key, *members):
        zset = self.zsets.get(key, {})
        removed = sum(1 for m in members if zset.pop(m, None) is not None)
        if key in self.zsets and not zset:
            del self.zsets[key]
        return removed

    def _zrange(self, key, start, end):
        members = sorted(self.zsets.get(key, {}).items(), key=lambda item: item[1])
        names = [m for m, _ in members]
        return names[start:] if end == -1 else names[start : end + 1]

    # ---- async client API ------------------------------------------------

    async def hgetall(self, key):
        return self._hgetall(key)

    async def hset(self, key, mapping):
        return self._hset(key, mapping)

    async def exists(self, key):
        return int(key in self.hashes)

    async def incr(self, key):
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]

    async def zrange(self, key, start, end):
        return self._zrange(key, start, end)

    def pipeline(self, transaction=True):
        return FakePipeline(self)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def redis_store(fake_redis) -> RedisDocumentStore:
    return RedisDocumentStore(client=fake_redis, keys=KeyFactory(prefix="test"))


@pytest.mark.asyncio
class TestRedisDocumentStore:
    async def test_document_stored_as_json_hash(self, redis_store, fake_redis):
        await redis_store.set_document(
            "users", "u1", {"id": "u1", "isOnline": True, "lastSeen": 5}
        )

        raw = fake_redis.hashes["test:doc:users:u1"]
        assert raw["isOnline"] == "true"
        assert raw["lastSeen"] == "5"
        assert fake_redis.zsets["test:idx:users"] == {"u1": 1}

    async def test_get_round_trips_document(self, redis_store):
        document = {"id": "g1", "memberIds": ["u1", "u2"], "description": None}
        await redis_store.set_document("groups", "g1", document)
        assert await redis_store.get_document("groups", "g1") == document

    async def test_empty_document_still_exists(self, redis_store):
        await redis_store.set_document("users", "u1", {})
        assert await redis_store.get_document("users", "u1") == {}

    async def test_get_missing_raises_not_found(self, redis_store):
        with pytest.raises(NotFoundError):
            await redis_store.get_document("users", "nope")

    async def test_set_overwrites_and_keeps_position(self, redis_store):
        await redis_store.set_document("items", "a", {"id": "a", "old": 1})
        await redis_store.set_document("items", "b", {"id": "b"})
        await redis_store.set_document("items", "a", {"id": "a"})

        documents = await redis_store.scan_collection("items")
        assert documents == [{"id": "a"}, {"id": "b"}]

    async def test_patch_merges(self, redis_store):
        await redis_store.set_document("users", "u1", {"id": "u1", "email": "a@x"})
        await redis_store.patch_document("users", "u1", {"isOnline": False})
        assert await redis_store.get_document("users", "u1") == {
            "id": "u1",
            "email": "a@x",
            "isOnline": False,
        }

    async def test_patch_missing_raises_not_found(self, redis_store, fake_redis):
        with pytest.raises(NotFoundError):
            await redis_store.patch_document("users", "u1", {"x": 1})
        assert fake_redis.hashes == {}

    async def test_delete_removes_hash_and_index_entry(self, redis_store, fake_redis):
        await redis_store.set_document("users", "u1", {"id": "u1"})
        await redis_store.delete_document("users", "u1")

        assert "test:doc:users:u1" not in fake_redis.hashes
        assert await redis_store.scan_collection("users") == []
        with pytest.raises(NotFoundError):
            await redis_store.delete_document("users", "u1")

    async def test_queries_filter_client_side(self, redis_store):
        await redis_store.set_document("users", "u1", {"email": "a@x"})
        await redis_store.set_document("users", "u2", {"email": "b@x"})
        await redis_store.set_document("groups", "g1", {"memberIds": ["u1"]})

        assert await redis_store.query_by_field("users", "email", "b@x") == [{"email": "b@x"}]
        assert len(await redis_store.query_array_contains("groups", "memberIds", "u1")) == 1

    async def test_delete_collection(self, redis_store, fake_redis):
        for message_id in ("m1", "m2", "m3"):
            await redis_store.set_document("chats/c1/messages", message_id, {"id": message_id})

        assert await redis_store.delete_collection("chats/c1/messages") == 3
        assert await redis_store.delete_collection("chats/c1/messages") == 0
        assert "test:idx:chats/c1/messages" not in fake_redis.zsets

    async def test_redis_errors_become_store_failures(self):
        client = MagicMock()
        client.hgetall = AsyncMock(side_effect=RedisConnectionError("down"))
        store = RedisDocumentStore(client=client)

        with pytest.raises(StoreFailureError) as exc_info:
            await store.get_document("users", "u1")
        assert isinstance(exc_info.value.__cause__, RedisConnectionError)

    async def test_uses_process_pool_without_explicit_client(self, monkeypatch):
        monkeypatch.setattr(RedisClient, "_client", None)
        monkeypatch.setattr(RedisClient, "_pid", None)
        store = RedisDocumentStore()
        with pytest.raises(RuntimeError):
            await store.get_document("users", "u1")


class TestSerde:
    def test_dumps_hash_encodes_each_field(self):
        assert dumps_hash({"a": 1, "b": "x", "c": [1, 2]}) == {
            "a": "1",
            "b": '"x"',
            "c": "[1, 2]",
        }

    def test_loads_hash(self):
        assert loads_hash({"a": "1", "b": "null"}) == {"a": 1, "b": None}
        assert loads_hash(None) == {}

    def test_non_json_value_returned_raw(self):
        assert loads("plain") == "plain"


def test_key_factory_layout():
    keys = KeyFactory(prefix="app")
    assert keys.document("users", "u1") == "app:doc:users:u1"
    assert keys.index("chats/c1/messages") == "app:idx:chats/c1/messages"
    assert keys.sequence() == "app:seq"
