"""
GroupMe implementation of the messaging interfaces.

Wraps ``GroupMeClient`` so transport failures come back as ``MessageResult``
instead of exceptions, and splits long listings into several posts.
"""

import aiohttp

from groupbot.core.logging.logger import get_logger
from groupbot.domain.interfaces.messaging_interface import IGroupRoster, IMessenger
from groupbot.messaging.models import GroupMember, MessageResult, OutboundAttachment

from .client import GroupMeClient


def chunk_items(items: list[str], max_length: int, separator: str = ", ") -> list[str]:
    """
    Join ``items`` into as few messages as possible, each shorter than
    ``max_length``.

    Items are never split; an item that alone reaches the limit gets a
    message of its own.
    """
    chunks: list[str] = []
    current = ""
    for item in items:
        candidate = f"{current}{separator}{item}" if current else item
        if current and len(candidate) >= max_length:
            chunks.append(current)
            current = item
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


class GroupMeMessenger(IMessenger, IGroupRoster):
    """Posts into one GroupMe group as the configured bot."""

    def __init__(self, client: GroupMeClient, max_message_length: int = 1000):
        self.client = client
        self.max_message_length = max_message_length
        self.logger = get_logger(__name__)

    async def post(
        self, text: str, attachments: list[OutboundAttachment] | None = None
    ) -> MessageResult:
        wire_attachments = [a.to_groupme() for a in attachments or []]
        try:
            await self.client.post_message(text, wire_attachments or None)
        except (aiohttp.ClientError, TimeoutError) as e:
            self.logger.error(f"Failed to post message: {e}")
            return MessageResult(success=False, text=text, error=str(e))
        return MessageResult(success=True, text=text)

    async def post_chunks(
        self, items: list[str], separator: str = ", "
    ) -> list[MessageResult]:
        results = []
        # Sequential so the group sees the chunks in order
        for chunk in chunk_items(items, self.max_message_length, separator):
            results.append(await self.post(chunk))
        return results

    async def get_members(self) -> list[GroupMember]:
        try:
            members = await self.client.get_members()
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            self.logger.error(f"Failed to fetch group members: {e}")
            return []
        return [
            GroupMember(user_id=str(m.get("user_id", "")), nickname=m.get("nickname", ""))
            for m in members
        ]
