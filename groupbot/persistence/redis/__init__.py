"""Redis persistent store."""

from .redis_client import RedisClient
from .redis_store import RedisStore

__all__ = ["RedisClient", "RedisStore"]
