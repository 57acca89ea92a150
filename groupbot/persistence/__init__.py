"""
Persistence layer for groupbot.

Store adapters implementing ``IPersistentStore``: memory, json and redis.
"""

from .store_factory import create_store

__all__ = ["create_store"]
