"""In-process persistent store."""

from .memory_store import MemoryStore

__all__ = ["MemoryStore"]
