"""
Redis-backed persistent store.

Keys:
    {prefix}:points    string, JSON list of points records (replace-all)
    {prefix}:pictures  hash, picture id -> JSON picture entry
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from redis.exceptions import RedisError

from ...domain.errors import StoreWriteFailed
from ...domain.interfaces.store_interface import IPersistentStore
from .redis_client import RedisClient

logger = logging.getLogger("RedisStore")


class RedisStore(IPersistentStore):
    """Redis implementation of the persistent store contract."""

    def __init__(self, key_prefix: str = "groupbot"):
        self.key_prefix = key_prefix

    @property
    def points_key(self) -> str:
        return f"{self.key_prefix}:points"

    @property
    def pictures_key(self) -> str:
        return f"{self.key_prefix}:pictures"

    async def load_points(self) -> list[dict[str, Any]]:
        try:
            async with RedisClient.connection() as r:
                raw = await r.get(self.points_key)
        except RedisError as e:
            raise StoreWriteFailed("load_points", e) from e
        return json.loads(raw) if raw else []

    async def replace_points(self, records: list[dict[str, Any]]) -> None:
        try:
            async with RedisClient.connection() as r:
                await r.set(self.points_key, json.dumps(records))
        except RedisError as e:
            raise StoreWriteFailed("replace_points", e) from e

    async def load_pictures(self) -> list[dict[str, Any]]:
        try:
            async with RedisClient.connection() as r:
                raw = await r.hgetall(self.pictures_key)
        except RedisError as e:
            raise StoreWriteFailed("load_pictures", e) from e
        return [
            {**json.loads(value), "id": picture_id} for picture_id, value in raw.items()
        ]

    async def append_picture(self, entry: dict[str, Any]) -> str:
        picture_id = uuid.uuid4().hex
        document = json.dumps({**entry, "id": picture_id})
        try:
            async with RedisClient.connection() as r:
                created = await r.hsetnx(self.pictures_key, picture_id, document)
        except RedisError as e:
            raise StoreWriteFailed("append_picture", e) from e
        if not created:
            raise StoreWriteFailed("append_picture", f"id collision {picture_id}")
        logger.debug(f"Appended picture {picture_id}")
        return picture_id

    async def update_picture(self, picture_id: str, entry: dict[str, Any]) -> None:
        try:
            async with RedisClient.connection() as r:
                if not await r.hexists(self.pictures_key, picture_id):
                    raise StoreWriteFailed("update_picture", f"unknown id {picture_id}")
                await r.hset(
                    self.pictures_key,
                    picture_id,
                    json.dumps({**entry, "id": picture_id}),
                )
        except RedisError as e:
            raise StoreWriteFailed("update_picture", e) from e

    async def close(self) -> None:
        await RedisClient.close()
