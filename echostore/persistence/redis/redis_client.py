# echostore/persistence/redis/redis_client.py

"""
Redis helper that is **fork-safe** and asyncio-native for the document store.

Why so elaborate?
-----------------
• Gunicorn / Uvicorn workers often `fork()` after import time.
  Re-using a parent-process connection in the child silently breaks
  and can leak file descriptors.

• Each worker therefore needs its *own* connection-pool.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import ClassVar

from redis.asyncio import ConnectionPool, Redis

log = logging.getLogger("RedisClient")


class RedisClient:
    """
    Fork-safe, asyncio-native Redis manager for the document store.

    Every worker process keeps its own pool to avoid post-fork descriptor reuse.
    """

    _pool: ClassVar[ConnectionPool | None] = None
    _client: ClassVar[Redis | None] = None
    _pid: ClassVar[int | None] = None

    # ---------- life-cycle --------------------------------------------------

    @classmethod
    def setup(cls, url: str, *, max_connections: int = 64) -> None:
        """
        Set up the connection pool for this process.

        Args:
            url: Redis URL (e.g., "redis://localhost:6379/0")
            max_connections: Max connections in the pool
        """
        pid = os.getpid()
        if cls._pid is not None and cls._pid != pid:
            # process forked – discard inherited pool
            cls._pool = None
            cls._client = None
        cls._pid = pid

        if cls._pool is not None:
            log.debug(f"Redis pool already exists in PID {pid}")
            return

        log.info(f"Initialising Redis pool in PID {pid} ({url})")
        cls._pool = ConnectionPool.from_url(
            url,
            decode_responses=True,
            encoding="utf-8",
            max_connections=max_connections,
        )
        cls._client = Redis(connection_pool=cls._pool)

    @classmethod
    async def close(cls) -> None:
        """Close the pool for this process."""
        pid = os.getpid()
        if cls._pid != pid or cls._pool is None:
            log.debug("No Redis pool to close for PID %s", pid)
            return

        log.info("Closing Redis pool in PID %s", pid)
        await cls._pool.disconnect()
        cls._pool = None
        cls._client = None
        cls._pid = None

    @classmethod
    def is_ready(cls) -> bool:
        return cls._client is not None and cls._pid == os.getpid()

    # ---------- access helpers ---------------------------------------------

    @classmethod
    async def get(cls) -> Redis:
        """Return the Redis client for this process."""
        if not cls.is_ready():
            log.error("RedisClient.get() called before setup() in this process.")
            raise RuntimeError("RedisClient must be set up first.")
        return cls._client

    @classmethod
    @asynccontextmanager
    async def connection(cls) -> AsyncIterator[Redis]:
        """
        Async context manager for a Redis connection.

        Usage::

            async with RedisClient.connection() as r:
                await r.hgetall("echo:doc:users:u1")
        """
        # Pool handles connection lifecycle - no explicit cleanup needed
        client = await cls.get()
        yield client

    @classmethod
    async def ping(cls) -> bool:
        client = await cls.get()
        try:
            await client.ping()
            log.debug("Redis PING successful.")
            return True
        except Exception as exc:
            log.error("Redis ping failed: %s", exc, exc_info=True)
            raise
