"""
echostore persistence layer

Document store backends behind the IDocumentStore contract: in-memory
(reference), JSON files and Redis.

Usage:
    from echostore.persistence import create_document_store

    store = create_document_store("memory")
"""

from ..domain.interfaces.document_store import IDocumentStore
from .memory import MemoryDocumentStore
from .store_factory import create_document_store, get_document_store

__all__ = [
    "IDocumentStore",
    "MemoryDocumentStore",
    "create_document_store",
    "get_document_store",
]
