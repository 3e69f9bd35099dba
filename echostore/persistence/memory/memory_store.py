"""
Deterministic in-memory document store.

Reference implementation of IDocumentStore used as the test double and as
the executable definition of merge and ordering semantics.
"""

import copy
import itertools
import logging
from typing import Any

from ...domain.exceptions import NotFoundError, StoreFailureError
from ...domain.interfaces.document_store import IDocumentStore

logger = logging.getLogger("MemoryDocumentStore")


class MemoryDocumentStore(IDocumentStore):
    """
    In-memory document store.

    Storage Structure:
    {
        "users": {document_id: document},
        "chats/{chatId}/messages": {document_id: document},
        ...
    }

    Collections keep first-insertion order: overwriting a document does not
    move it, so scans and queries are deterministic for a fixed history.
    No internal locking; use from a single event loop.
    """

    def __init__(self):
        self._store: dict[str, dict[str, dict[str, Any]]] = {}
        self._id_counter = itertools.count(1)

    @staticmethod
    def _check_path(collection: str, document_id: str | None = None) -> None:
        if not collection or collection.startswith("/") or collection.endswith("/"):
            raise StoreFailureError(f"Invalid collection path: {collection!r}")
        if document_id is not None and (not document_id or "/" in document_id):
            raise StoreFailureError(f"Invalid document id: {document_id!r}")

    async def get_document(self, collection: str, document_id: str) -> dict[str, Any]:
        self._check_path(collection, document_id)
        documents = self._store.get(collection, {})
        if document_id not in documents:
            raise NotFoundError(collection, document_id)
        return copy.deepcopy(documents[document_id])

    async def set_document(
        self, collection: str, document_id: str, value: dict[str, Any]
    ) -> None:
        self._check_path(collection, document_id)
        self._store.setdefault(collection, {})[document_id] = copy.deepcopy(value)
        logger.debug(f"SET {collection}/{document_id}")

    async def patch_document(
        self, collection: str, document_id: str, partial: dict[str, Any]
    ) -> None:
        self._check_path(collection, document_id)
        documents = self._store.get(collection, {})
        if document_id not in documents:
            raise NotFoundError(collection, document_id)
        documents[document_id].update(copy.deepcopy(partial))
        logger.debug(f"PATCH {collection}/{document_id} fields={sorted(partial)}")

    async def delete_document(self, collection: str, document_id: str) -> None:
        self._check_path(collection, document_id)
        documents = self._store.get(collection, {})
        if document_id not in documents:
            raise NotFoundError(collection, document_id)
        del documents[document_id]
        # Clean up empty collection
        if not documents:
            del self._store[collection]
        logger.debug(f"DELETE {collection}/{document_id}")

    async def scan_collection(self, collection: str) -> list[dict[str, Any]]:
        self._check_path(collection)
        return [copy.deepcopy(doc) for doc in self._store.get(collection, {}).values()]

    async def query_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        self._check_path(collection)
        return [
            copy.deepcopy(doc)
            for doc in self._store.get(collection, {}).values()
            if field in doc and doc[field] == value
        ]

    async def query_array_contains(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        self._check_path(collection)
        return [
            copy.deepcopy(doc)
            for doc in self._store.get(collection, {}).values()
            if isinstance(doc.get(field), list) and value in doc[field]
        ]

    async def delete_collection(self, collection: str) -> int:
        self._check_path(collection)
        documents = self._store.pop(collection, {})
        if documents:
            logger.debug(f"DELETE COLLECTION {collection} ({len(documents)} docs)")
        return len(documents)

    def new_id(self, collection: str) -> str:
        leaf = collection.rsplit("/", 1)[-1]
        return f"{leaf}-{next(self._id_counter):06d}"

    # ---- Inspection helpers for tests ------------------------------------

    def document_count(self, collection: str) -> int:
        return len(self._store.get(collection, {}))

    def collections(self) -> list[str]:
        return list(self._store)

    def snapshot(self) -> dict[str, dict[str, dict[str, Any]]]:
        """Deep copy of the whole store, for before/after comparisons."""
        return copy.deepcopy(self._store)

    def clear(self) -> None:
        self._store.clear()
