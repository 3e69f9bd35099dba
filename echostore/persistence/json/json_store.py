"""
JSON file-backed document store.

One file per collection path, documents keyed by id in insertion order.
Suitable for local development where state should survive restarts.
"""

import logging
import uuid
from typing import Any

from ...domain.exceptions import NotFoundError
from ...domain.interfaces.document_store import IDocumentStore
from .file_manager import FileManager, KeyedLocks

logger = logging.getLogger("JSONDocumentStore")


class JsonDocumentStore(IDocumentStore):
    """IDocumentStore persisted as JSON files under root."""

    def __init__(self, root: str):
        self.files = FileManager(root)
        self._collection_locks = KeyedLocks()

    async def _read(self, collection: str) -> dict[str, dict[str, Any]]:
        return await self.files.read_documents(self.files.collection_file(collection))

    async def _write(self, collection: str, documents: dict[str, dict[str, Any]]) -> None:
        file_path = self.files.collection_file(collection)
        if documents:
            await self.files.write_documents(file_path, documents)
        else:
            await self.files.delete_file(file_path)

    async def get_document(self, collection: str, document_id: str) -> dict[str, Any]:
        documents = await self._read(collection)
        if document_id not in documents:
            raise NotFoundError(collection, document_id)
        return documents[document_id]

    async def set_document(
        self, collection: str, document_id: str, value: dict[str, Any]
    ) -> None:
        async with self._collection_locks.hold(collection):
            documents = await self._read(collection)
            documents[document_id] = dict(value)
            await self._write(collection, documents)
        logger.debug(f"SET {collection}/{document_id}")

    async def patch_document(
        self, collection: str, document_id: str, partial: dict[str, Any]
    ) -> None:
        async with self._collection_locks.hold(collection):
            documents = await self._read(collection)
            if document_id not in documents:
                raise NotFoundError(collection, document_id)
            documents[document_id].update(partial)
            await self._write(collection, documents)
        logger.debug(f"PATCH {collection}/{document_id}")

    async def delete_document(self, collection: str, document_id: str) -> None:
        async with self._collection_locks.hold(collection):
            documents = await self._read(collection)
            if document_id not in documents:
                raise NotFoundError(collection, document_id)
            del documents[document_id]
            await self._write(collection, documents)
        logger.debug(f"DELETE {collection}/{document_id}")

    async def scan_collection(self, collection: str) -> list[dict[str, Any]]:
        documents = await self._read(collection)
        return list(documents.values())

    async def query_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        documents = await self._read(collection)
        return [doc for doc in documents.values() if field in doc and doc[field] == value]

    async def query_array_contains(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        documents = await self._read(collection)
        return [
            doc
            for doc in documents.values()
            if isinstance(doc.get(field), list) and value in doc[field]
        ]

    async def delete_collection(self, collection: str) -> int:
        async with self._collection_locks.hold(collection):
            documents = await self._read(collection)
            if documents:
                await self.files.delete_file(self.files.collection_file(collection))
        return len(documents)

    def new_id(self, collection: str) -> str:
        return uuid.uuid4().hex[:20]
