"""GroupMe messaging implementation."""

from .client import GroupMeClient
from .messenger import GroupMeMessenger, chunk_items

__all__ = ["GroupMeClient", "GroupMeMessenger", "chunk_items"]
