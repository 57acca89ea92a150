# groupbot/persistence/redis/redis_client.py

"""
Redis helper that is **fork-safe** and asyncio-native.

Uvicorn workers may `fork()` after import time. Re-using a parent-process
connection in the child leaks file descriptors, so each worker keeps its own
connection pool.
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
    Fork-safe, asyncio-native single-pool Redis manager.
    """

    _pool: ClassVar[ConnectionPool | None] = None
    _client: ClassVar[Redis | None] = None
    _pid: ClassVar[int | None] = None

    # ---------- life-cycle --------------------------------------------------

    @classmethod
    def setup(cls, url: str, *, max_connections: int = 16) -> None:
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
        """Close the Redis pool for this process."""
        if cls._pid != os.getpid() or cls._pool is None:
            log.debug("No Redis pool to close for PID %s", os.getpid())
            return

        log.info("Closing Redis pool in PID %s", cls._pid)
        await cls._pool.disconnect()
        cls._pool = None
        cls._client = None
        cls._pid = None

    # ---------- access helpers ---------------------------------------------

    @classmethod
    def get(cls) -> Redis:
        """Return the Redis client for this process."""
        if cls._client is None or cls._pid != os.getpid():
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
                await r.get("groupbot:points")
        """
        # Pool handles connection lifecycle - no explicit cleanup needed
        yield cls.get()
