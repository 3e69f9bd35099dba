"""
Memory-based document store for echostore.

Deterministic and lock-free. Suitable for tests and single-process
development.

Usage:
    store = MemoryDocumentStore()
    repos = create_repositories(store)
"""

from .memory_store import MemoryDocumentStore

__all__ = ["MemoryDocumentStore"]
