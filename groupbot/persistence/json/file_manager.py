"""
File system operations for the JSON store.

Handles store directory creation and locked, atomic JSON file I/O.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger("JSONFileManager")


class FileManager:
    """Manages file operations for the JSON store."""

    def __init__(self, root: str | Path):
        self._root = Path(root)
        self._file_locks: dict[str, asyncio.Lock] = {}

    @property
    def root(self) -> Path:
        return self._root

    def _get_file_lock(self, file_path: str) -> asyncio.Lock:
        """Get or create a lock for a specific file path."""
        if file_path not in self._file_locks:
            self._file_locks[file_path] = asyncio.Lock()
        return self._file_locks[file_path]

    def ensure_directory(self) -> None:
        """Create the store directory if it doesn't exist."""
        self._root.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Store directory ensured at: {self._root}")

    def path_for(self, collection: str) -> Path:
        """Get the file path holding a collection."""
        if collection not in ("points", "pictures"):
            raise ValueError(f"Invalid collection: {collection}")
        return self._root / f"{collection}.json"

    async def read_file(self, file_path: Path) -> dict[str, Any]:
        """Read and parse JSON file with file locking.

        A missing file reads as an empty document. A corrupt file raises so the
        caller never mistakes it for an empty collection.
        """
        async with self._get_file_lock(str(file_path)):
            if not file_path.exists():
                return {}

            content = await asyncio.to_thread(file_path.read_text, encoding="utf-8")
            if not content.strip():
                return {}
            return json.loads(content)

    async def write_file(self, file_path: Path, data: dict[str, Any]) -> bool:
        """Write data to JSON file with file locking."""
        async with self._get_file_lock(str(file_path)):
            try:
                file_path.parent.mkdir(parents=True, exist_ok=True)

                # Write to temporary file first, then rename (atomic operation)
                temp_file = file_path.with_suffix(file_path.suffix + ".tmp")
                content = json.dumps(data, ensure_ascii=False, indent=2)

                await asyncio.to_thread(temp_file.write_text, content, encoding="utf-8")
                await asyncio.to_thread(temp_file.replace, file_path)

                return True
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"Failed to write file {file_path}: {e}")
                return False
