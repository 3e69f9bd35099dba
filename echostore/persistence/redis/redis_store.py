"""
Redis-backed document store.

Documents are hashes at {prefix}:doc:{collection}:{id}; each collection has a
sorted-set index {prefix}:idx:{collection} scored by a global insertion
sequence so scans return first-insertion order like the memory store.
"""

import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ...domain.exceptions import NotFoundError, StoreFailureError
from ...domain.interfaces.document_store import IDocumentStore
from .key_factory import KeyFactory, default_key_factory
from .redis_client import RedisClient
from .serde import dumps_hash, loads_hash

logger = logging.getLogger("RedisDocumentStore")

# Always present so that an empty document still exists as a hash
_MARKER_FIELD = "__doc"


class RedisDocumentStore(IDocumentStore):
    """
    IDocumentStore over Redis hashes.

    Field queries scan the collection index client-side; Redis keeps no
    secondary indexes here.
    """

    def __init__(self, client: Redis | None = None, keys: KeyFactory | None = None):
        """
        Args:
            client: Redis client to use; defaults to the process-wide RedisClient pool
            keys: Key factory, defaults to the "echo" prefix
        """
        self._client = client
        self.keys = keys or default_key_factory

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[Redis]:
        if self._client is not None:
            yield self._client
        else:
            async with RedisClient.connection() as redis:
                yield redis

    @staticmethod
    def _failure(action: str, target: str, error: Exception) -> StoreFailureError:
        logger.error(f"Redis {action} error for '{target}': {error}", exc_info=True)
        return StoreFailureError(f"Redis {action} failed for '{target}': {error}")

    @staticmethod
    def _strip_marker(raw: dict[str, str]) -> dict[str, str]:
        return {k: v for k, v in raw.items() if k != _MARKER_FIELD}

    async def get_document(self, collection: str, document_id: str) -> dict[str, Any]:
        key = self.keys.document(collection, document_id)
        try:
            async with self._connection() as redis:
                raw = await redis.hgetall(key)
        except RedisError as e:
            raise self._failure("HGETALL", key, e) from e
        if not raw:
            raise NotFoundError(collection, document_id)
        return loads_hash(self._strip_marker(raw))

    async def set_document(
        self, collection: str, document_id: str, value: dict[str, Any]
    ) -> None:
        key = self.keys.document(collection, document_id)
        mapping = {_MARKER_FIELD: "1", **dumps_hash(value)}
        try:
            async with self._connection() as redis:
                seq = await redis.incr(self.keys.sequence())
                async with redis.pipeline(transaction=True) as pipe:
                    pipe.delete(key)
                    pipe.hset(key, mapping=mapping)
                    # nx keeps the original position when overwriting
                    pipe.zadd(self.keys.index(collection), {document_id: seq}, nx=True)
                    await pipe.execute()
        except RedisError as e:
            raise self._failure("SET", key, e) from e

    async def patch_document(
        self, collection: str, document_id: str, partial: dict[str, Any]
    ) -> None:
        key = self.keys.document(collection, document_id)
        try:
            async with self._connection() as redis:
                if not await redis.exists(key):
                    raise NotFoundError(collection, document_id)
                if partial:
                    await redis.hset(key, mapping=dumps_hash(partial))
        except RedisError as e:
            raise self._failure("PATCH", key, e) from e

    async def delete_document(self, collection: str, document_id: str) -> None:
        key = self.keys.document(collection, document_id)
        try:
            async with self._connection() as redis:
                async with redis.pipeline(transaction=True) as pipe:
                    pipe.delete(key)
                    pipe.zrem(self.keys.index(collection), document_id)
                    deleted, _ = await pipe.execute()
        except RedisError as e:
            raise self._failure("DELETE", key, e) from e
        if not deleted:
            raise NotFoundError(collection, document_id)

    async def scan_collection(self, collection: str) -> list[dict[str, Any]]:
        index_key = self.keys.index(collection)
        try:
            async with self._connection() as redis:
                document_ids = await redis.zrange(index_key, 0, -1)
                if not document_ids:
                    return []
                async with redis.pipeline(transaction=False) as pipe:
                    for document_id in document_ids:
                        pipe.hgetall(self.keys.document(collection, document_id))
                    raw_documents = await pipe.execute()
        except RedisError as e:
            raise self._failure("SCAN", index_key, e) from e

        # Index entries whose hash vanished are skipped
        return [
            loads_hash(self._strip_marker(raw)) for raw in raw_documents if raw
        ]

    async def query_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        documents = await self.scan_collection(collection)
        return [doc for doc in documents if field in doc and doc[field] == value]

    async def query_array_contains(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        documents = await self.scan_collection(collection)
        return [
            doc
            for doc in documents
            if isinstance(doc.get(field), list) and value in doc[field]
        ]

    async def delete_collection(self, collection: str) -> int:
        index_key = self.keys.index(collection)
        try:
            async with self._connection() as redis:
                document_ids = await redis.zrange(index_key, 0, -1)
                if not document_ids:
                    return 0
                doc_keys = [self.keys.document(collection, d) for d in document_ids]
                async with redis.pipeline(transaction=True) as pipe:
                    pipe.delete(*doc_keys)
                    pipe.delete(index_key)
                    deleted, _ = await pipe.execute()
        except RedisError as e:
            raise self._failure("DELETE COLLECTION", index_key, e) from e
        logger.debug(f"Deleted {deleted} documents from {collection}")
        return deleted

    def new_id(self, collection: str) -> str:
        return uuid.uuid4().hex[:20]
