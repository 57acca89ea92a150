"""JSON file persistent store."""

from .file_manager import FileManager
from .json_store import JSONStore

__all__ = ["FileManager", "JSONStore"]
