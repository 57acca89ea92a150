"""Tests for the GroupMe messenger and outbound models."""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
from pydantic import ValidationError

from groupbot.messaging.groupme import GroupMeMessenger, chunk_items
from groupbot.messaging.models import MediaAttachment, MentionAttachment


@pytest.fixture
def client():
    mock = MagicMock()
    mock.post_message = AsyncMock(return_value=202)
    mock.get_members = AsyncMock(
        return_value=[
            {"user_id": 111, "nickname": "Alice", "id": "m1"},
            {"user_id": "222", "nickname": "Bob", "id": "m2"},
        ]
    )
    return mock


class TestChunkItems:
    def test_everything_fits(self):
        assert chunk_items(["a", "b", "c"], 1000) == ["a, b, c"]

    def test_each_chunk_stays_under_limit(self):
        items = [f"caption-{i}" for i in range(200)]
        chunks = chunk_items(items, 100)

        assert all(len(chunk) < 100 for chunk in chunks)
        assert ", ".join(chunks).split(", ") == items

    def test_oversized_item_gets_its_own_chunk(self):
        assert chunk_items(["x" * 20, "y"], 10) == ["x" * 20, "y"]

    def test_empty(self):
        assert chunk_items([], 10) == []


class TestOutboundModels:
    def test_image_wire_format(self):
        assert MediaAttachment(url="https://i.groupme.com/a.jpeg").to_groupme() == {
            "type": "image",
            "url": "https://i.groupme.com/a.jpeg",
        }

    def test_mention_needs_one_range_per_user(self):
        with pytest.raises(ValidationError):
            MentionAttachment(user_ids=["1", "2"], ranges=[(0, 3)])

    def test_mention_rejects_inverted_range(self):
        with pytest.raises(ValidationError):
            MentionAttachment(user_ids=["1"], ranges=[(5, 2)])


class TestGroupMeMessenger:
    @pytest.mark.asyncio
    async def test_post_encodes_attachments(self, client):
        messenger = GroupMeMessenger(client)
        result = await messenger.post(
            "@Al", [MentionAttachment(user_ids=["1"], ranges=[(0, 3)])]
        )

        assert result.success
        client.post_message.assert_awaited_once_with(
            "@Al", [{"type": "mentions", "user_ids": ["1"], "loci": [[0, 3]]}]
        )

    @pytest.mark.asyncio
    async def test_post_without_attachments(self, client):
        await GroupMeMessenger(client).post("hi")
        client.post_message.assert_awaited_once_with("hi", None)

    @pytest.mark.asyncio
    async def test_transport_error_becomes_failed_result(self, client):
        client.post_message.side_effect = aiohttp.ClientConnectionError("down")
        result = await GroupMeMessenger(client).post("hi")

        assert not result.success
        assert "down" in result.error

    @pytest.mark.asyncio
    async def test_post_chunks_in_order(self, client):
        messenger = GroupMeMessenger(client, max_message_length=12)
        results = await messenger.post_chunks(["Bird", "Cat", "dog"])

        assert len(results) == 2
        assert [c.args[0] for c in client.post_message.await_args_list] == [
            "Bird, Cat",
            "dog",
        ]

    @pytest.mark.asyncio
    async def test_members(self, client):
        members = await GroupMeMessenger(client).get_members()
        assert [(m.user_id, m.nickname) for m in members] == [
            ("111", "Alice"),
            ("222", "Bob"),
        ]

    @pytest.mark.asyncio
    async def test_members_on_error(self, client):
        client.get_members.side_effect = aiohttp.ClientError("boom")
        assert await GroupMeMessenger(client).get_members() == []
