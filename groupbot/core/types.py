"""
Core type definitions for groupbot.
"""

from enum import Enum
from typing import Literal


class StoreType(Enum):
    """
    Supported persistent store backends for the points and pictures collections.
    """

    MEMORY = "memory"
    """In-process store - fast but lost on restart. Used for development and tests."""

    JSON = "json"
    """JSON file store - persistent but single-process only."""

    REDIS = "redis"
    """Redis-backed store - persistent and shared, requires a Redis server."""


# Type alias for user-friendly type hints
StoreTypeOptions = Literal["memory", "json", "redis"]


def validate_store_type(store_type: str) -> StoreType:
    """
    Validate and convert a store type string to StoreType enum.

    Args:
        store_type: String representation of store type

    Returns:
        Validated StoreType enum value

    Raises:
        ValueError: If store_type is not supported

    Example:
        >>> validate_store_type("redis")
        <StoreType.REDIS: 'redis'>
    """
    try:
        return StoreType(store_type.lower())
    except ValueError as e:
        supported_types = [st.value for st in StoreType]
        raise ValueError(
            f"Unsupported store type: {store_type}. "
            f"Supported types: {', '.join(supported_types)}"
        ) from e
