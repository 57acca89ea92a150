"""Tests for the memory and JSON stores and the store factory."""

import json

import pytest

from groupbot.core.types import StoreType
from groupbot.domain.errors import StoreWriteFailed
from groupbot.persistence import create_store
from groupbot.persistence.json import JSONStore
from groupbot.persistence.memory import MemoryStore

PICTURE = {"media_url": "https://i.groupme.com/x.jpeg", "caption": "x", "appearances": 0}


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return JSONStore(tmp_path / "store")


class TestStoreContract:
    @pytest.mark.asyncio
    async def test_empty(self, store):
        assert await store.load_points() == []
        assert await store.load_pictures() == []

    @pytest.mark.asyncio
    async def test_replace_points(self, store):
        await store.replace_points([{"user_id": "u1", "points": 3}])
        await store.replace_points([{"user_id": "u2", "points": 1}])

        assert await store.load_points() == [{"user_id": "u2", "points": 1}]

    @pytest.mark.asyncio
    async def test_append_assigns_distinct_ids(self, store):
        first = await store.append_picture(PICTURE)
        second = await store.append_picture(PICTURE)

        assert first != second
        assert {p["id"] for p in await store.load_pictures()} == {first, second}

    @pytest.mark.asyncio
    async def test_update_by_id(self, store):
        picture_id = await store.append_picture(PICTURE)
        await store.update_picture(picture_id, {**PICTURE, "appearances": 4})

        (loaded,) = await store.load_pictures()
        assert loaded == {**PICTURE, "appearances": 4, "id": picture_id}

    @pytest.mark.asyncio
    async def test_update_unknown_id_fails(self, store):
        with pytest.raises(StoreWriteFailed):
            await store.update_picture("missing", PICTURE)

    @pytest.mark.asyncio
    async def test_loaded_documents_are_copies(self, store):
        await store.replace_points([{"user_id": "u1", "points": 3}])
        (record,) = await store.load_points()
        record["points"] = 100

        assert await store.load_points() == [{"user_id": "u1", "points": 3}]


class TestJSONStore:
    @pytest.mark.asyncio
    async def test_survives_reopen(self, tmp_path):
        root = tmp_path / "store"
        first = JSONStore(root)
        await first.replace_points([{"user_id": "u1", "points": 7}])
        picture_id = await first.append_picture(PICTURE)

        reopened = JSONStore(root)
        assert await reopened.load_points() == [{"user_id": "u1", "points": 7}]
        assert [p["id"] for p in await reopened.load_pictures()] == [picture_id]

    @pytest.mark.asyncio
    async def test_corrupt_file_is_not_read_as_empty(self, tmp_path):
        store = JSONStore(tmp_path)
        (tmp_path / "points.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(json.JSONDecodeError):
            await store.load_points()

    @pytest.mark.asyncio
    async def test_append_to_corrupt_file_fails(self, tmp_path):
        store = JSONStore(tmp_path)
        (tmp_path / "pictures.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(StoreWriteFailed):
            await store.append_picture(PICTURE)


class TestCreateStore:
    def test_memory(self):
        assert isinstance(create_store("memory"), MemoryStore)

    def test_json(self, test_settings):
        store = create_store(StoreType.JSON, test_settings)
        assert isinstance(store, JSONStore)
        assert str(store.files.root) == test_settings.json_store_dir

    def test_redis_requires_url(self, test_settings):
        test_settings.redis_url = None
        with pytest.raises(ValueError):
            create_store(StoreType.REDIS, test_settings)
