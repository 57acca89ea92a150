"""
Messaging interfaces for outbound group communication.

The domain only needs two narrow seams to the chat platform:
- ``IMessenger``: post a message (with optional attachments) to the group
- ``IGroupRoster``: list the members of the group
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from groupbot.messaging.models import (
        GroupMember,
        MessageResult,
        OutboundAttachment,
    )


class IMessenger(ABC):
    """
    Outbound message client for a single group.

    Key Design Decisions:
    - All methods return MessageResult for consistent response handling
    - Transport failures are reported through MessageResult, never raised
    - Splitting long listings into transport-sized posts is the messenger's job
    """

    @abstractmethod
    async def post(
        self,
        text: str,
        attachments: "list[OutboundAttachment] | None" = None,
    ) -> "MessageResult":
        """Post a message to the group.

        Args:
            text: Message text (may be empty when only media is sent)
            attachments: Media references and/or user mentions

        Returns:
            MessageResult with operation status
        """
        pass

    @abstractmethod
    async def post_chunks(
        self, items: list[str], separator: str = ", "
    ) -> "list[MessageResult]":
        """Post a listing split into as many messages as needed.

        Items are joined with ``separator``; each posted message stays under the
        platform's maximum message length. An item is never split across posts.

        Returns:
            One MessageResult per post
        """
        pass


class IGroupRoster(ABC):
    """Read access to the group's member list."""

    @abstractmethod
    async def get_members(self) -> "list[GroupMember]":
        """Return the current members of the group.

        An empty list is returned when the roster cannot be fetched.
        """
        pass
