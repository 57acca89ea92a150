"""
Persistent store selector.

Builds the store adapter matching the configured store type.
"""

from ..core.config.settings import Settings, settings
from ..core.types import StoreType, validate_store_type
from ..domain.interfaces.store_interface import IPersistentStore


def create_store(
    store_type: StoreType | str, config: Settings | None = None
) -> IPersistentStore:
    """
    Create the persistent store for the given type.

    Args:
        store_type: Store type enum or its string value ("memory", "json", "redis")
        config: Settings to read paths and URLs from (defaults to global settings)

    Returns:
        Store adapter instance

    Raises:
        ValueError: If store_type is not supported or misconfigured
        ImportError: If required dependencies are not available
    """
    config = config or settings
    if isinstance(store_type, str):
        store_type = validate_store_type(store_type)

    if store_type is StoreType.REDIS:
        if not config.redis_url:
            raise ValueError("REDIS_URL is required for store_type='redis'")
        try:
            from .redis import RedisClient, RedisStore
        except ImportError as e:
            raise ImportError(
                f"Redis dependencies not available for store_type='redis': {e}"
            ) from e

        RedisClient.setup(
            config.redis_url, max_connections=config.redis_max_connections
        )
        return RedisStore(key_prefix=config.redis_key_prefix)

    elif store_type is StoreType.JSON:
        from .json import JSONStore

        return JSONStore(config.json_store_dir)

    else:  # StoreType.MEMORY
        from .memory import MemoryStore

        return MemoryStore()
