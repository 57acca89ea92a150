"""
In-process persistent store.

Keeps both collections in dictionaries guarded by one asyncio lock per
collection. Nothing survives a restart; used for development and tests.
"""

import asyncio
import copy
import logging
import uuid
from typing import Any

from ...domain.errors import StoreWriteFailed
from ...domain.interfaces.store_interface import IPersistentStore

logger = logging.getLogger("MemoryStore")


class MemoryStore(IPersistentStore):
    """
    In-memory implementation of the persistent store contract.

    Storage Structure:
    {
        "points": [{"user_id": ..., "points": ...}, ...],
        "pictures": {picture_id: {"id": ..., "media_url": ..., ...}}
    }
    """

    def __init__(
        self,
        points: list[dict[str, Any]] | None = None,
        pictures: list[dict[str, Any]] | None = None,
    ):
        self._points: list[dict[str, Any]] = copy.deepcopy(points or [])
        self._pictures: dict[str, dict[str, Any]] = {}
        for entry in pictures or []:
            picture_id = entry.get("id") or self._new_id()
            self._pictures[picture_id] = {**copy.deepcopy(entry), "id": picture_id}

        self._locks = {
            "points": asyncio.Lock(),
            "pictures": asyncio.Lock(),
        }

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    async def load_points(self) -> list[dict[str, Any]]:
        async with self._locks["points"]:
            return copy.deepcopy(self._points)

    async def replace_points(self, records: list[dict[str, Any]]) -> None:
        async with self._locks["points"]:
            self._points = copy.deepcopy(records)
            logger.debug(f"Replaced points collection ({len(records)} records)")

    async def load_pictures(self) -> list[dict[str, Any]]:
        async with self._locks["pictures"]:
            return copy.deepcopy(list(self._pictures.values()))

    async def append_picture(self, entry: dict[str, Any]) -> str:
        async with self._locks["pictures"]:
            picture_id = self._new_id()
            self._pictures[picture_id] = {**copy.deepcopy(entry), "id": picture_id}
            logger.debug(f"Appended picture {picture_id}")
            return picture_id

    async def update_picture(self, picture_id: str, entry: dict[str, Any]) -> None:
        async with self._locks["pictures"]:
            if picture_id not in self._pictures:
                raise StoreWriteFailed("update_picture", f"unknown id {picture_id}")
            self._pictures[picture_id] = {**copy.deepcopy(entry), "id": picture_id}
