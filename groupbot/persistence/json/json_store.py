"""
JSON file store.

Persists the points collection as a list and the pictures collection as an
id-keyed object, one file each, rewritten atomically on every write.
"""

import asyncio
import logging
import uuid
from pathlib import Path
from typing import Any

from ...domain.errors import StoreWriteFailed
from ...domain.interfaces.store_interface import IPersistentStore
from .file_manager import FileManager

logger = logging.getLogger("JSONStore")


class JSONStore(IPersistentStore):
    """
    File-backed implementation of the persistent store contract.

    Layout:
        <root>/points.json    {"points": [{"user_id": ..., "points": ...}]}
        <root>/pictures.json  {"pictures": {"<id>": {...}}}
    """

    def __init__(self, root: str | Path):
        self.files = FileManager(root)
        self.files.ensure_directory()
        # Serializes read-modify-write of pictures.json across append/update
        self._pictures_lock = asyncio.Lock()

    async def load_points(self) -> list[dict[str, Any]]:
        document = await self.files.read_file(self.files.path_for("points"))
        return list(document.get("points", []))

    async def replace_points(self, records: list[dict[str, Any]]) -> None:
        ok = await self.files.write_file(
            self.files.path_for("points"), {"points": records}
        )
        if not ok:
            raise StoreWriteFailed(
                "replace_points", f"could not write {self.files.path_for('points')}"
            )

    async def load_pictures(self) -> list[dict[str, Any]]:
        document = await self.files.read_file(self.files.path_for("pictures"))
        return [
            {**entry, "id": picture_id}
            for picture_id, entry in document.get("pictures", {}).items()
        ]

    async def _rewrite_pictures(
        self,
        operation: str,
        picture_id: str,
        entry: dict[str, Any],
        must_exist: bool,
    ) -> None:
        path = self.files.path_for("pictures")
        async with self._pictures_lock:
            try:
                document = await self.files.read_file(path)
            except (OSError, ValueError) as e:
                raise StoreWriteFailed(operation, e) from e

            pictures = document.setdefault("pictures", {})
            if must_exist and picture_id not in pictures:
                raise StoreWriteFailed(operation, f"unknown id {picture_id}")
            pictures[picture_id] = {**entry, "id": picture_id}

            if not await self.files.write_file(path, document):
                raise StoreWriteFailed(operation, f"could not write {path}")

    async def append_picture(self, entry: dict[str, Any]) -> str:
        picture_id = uuid.uuid4().hex
        await self._rewrite_pictures(
            "append_picture", picture_id, entry, must_exist=False
        )
        logger.debug(f"Appended picture {picture_id}")
        return picture_id

    async def update_picture(self, picture_id: str, entry: dict[str, Any]) -> None:
        await self._rewrite_pictures(
            "update_picture", picture_id, entry, must_exist=True
        )
