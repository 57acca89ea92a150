"""
Pytest configuration and common fixtures for groupbot tests.

Provides an isolated settings object, an in-memory store, a recording
messenger standing in for GroupMe and a fully wired ``BotServices``.
"""

import random

import pytest
import pytest_asyncio

from groupbot.commands import BotServices, CommandDispatcher
from groupbot.core.config.settings import Settings
from groupbot.core.state import StateOwner
from groupbot.domain.interfaces.messaging_interface import IGroupRoster, IMessenger
from groupbot.domain.services import PictureCatalog, PointsLedger, RotationCache
from groupbot.messaging.groupme import chunk_items
from groupbot.messaging.models import GroupMember, MessageResult
from groupbot.persistence.memory import MemoryStore


class RecordingMessenger(IMessenger, IGroupRoster):
    """Messenger that keeps every post in memory instead of calling GroupMe."""

    def __init__(self, members=None, max_message_length: int = 1000):
        self.posts: list[tuple[str, list]] = []
        self.members = list(members or [])
        self.max_message_length = max_message_length

    async def post(self, text, attachments=None):
        self.posts.append((text, list(attachments or [])))
        return MessageResult(success=True, text=text)

    async def post_chunks(self, items, separator=", "):
        return [
            await self.post(chunk)
            for chunk in chunk_items(items, self.max_message_length, separator)
        ]

    async def get_members(self):
        return list(self.members)

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.posts]


@pytest.fixture
def test_settings(monkeypatch, tmp_path) -> Settings:
    """Settings built from a controlled environment."""
    monkeypatch.setenv("ENVIRONMENT", "PROD")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("GROUPME_BOT_ID", "test-bot")
    monkeypatch.setenv("GROUPME_ACCESS_TOKEN", "test-token")
    monkeypatch.setenv("GROUPME_GROUP_ID", "test-group")
    monkeypatch.setenv("STORE_TYPE", "memory")
    monkeypatch.setenv("JSON_STORE_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.delenv("COMMAND_PREFIX", raising=False)
    monkeypatch.delenv("MAX_MESSAGE_LENGTH", raising=False)
    return Settings()


@pytest.fixture
def members() -> list[GroupMember]:
    return [
        GroupMember(user_id="u1", nickname="Alice"),
        GroupMember(user_id="u2", nickname="[RED] Bob"),
        GroupMember(user_id="u3", nickname="Carol [red]"),
        GroupMember(user_id="u4", nickname="Dave"),
    ]


@pytest.fixture
def messenger(members) -> RecordingMessenger:
    return RecordingMessenger(members)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore(
        points=[{"user_id": "u1", "points": 5}],
        pictures=[
            {"id": "a", "media_url": "https://i.groupme.com/a.jpeg", "caption": "Cat", "appearances": 0},
            {"id": "b", "media_url": "https://v.groupme.com/b.mp4", "caption": "dog", "appearances": 2},
            {"id": "c", "media_url": "https://i.groupme.com/c.jpeg", "caption": "Bird", "appearances": 0},
        ],
    )


@pytest_asyncio.fixture
async def services(store, messenger, test_settings):
    """BotServices over the seeded memory store, with a running state owner."""
    rng = random.Random(1234)
    ledger = PointsLedger(store)
    catalog = PictureCatalog(store, rng=rng)
    await ledger.load()
    await catalog.load()

    state = StateOwner()
    state.start()
    bot_services = BotServices(
        state=state,
        ledger=ledger,
        catalog=catalog,
        rotation=RotationCache(catalog, rng=rng),
        messenger=messenger,
        roster=messenger,
        settings=test_settings,
        rng=rng,
    )
    yield bot_services
    await state.stop()


@pytest.fixture
def dispatcher(services) -> CommandDispatcher:
    return CommandDispatcher(services)
