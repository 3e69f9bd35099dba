"""
Redis-backed document store for echostore.

Usage:
    RedisClient.setup("redis://localhost:6379/0")
    store = RedisDocumentStore()
"""

from .key_factory import KeyFactory
from .redis_client import RedisClient
from .redis_store import RedisDocumentStore

__all__ = ["KeyFactory", "RedisClient", "RedisDocumentStore"]
