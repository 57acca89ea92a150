"""
Shared data types and enums for inbound and outbound GroupMe messages.
"""

from enum import Enum


class AttachmentKind(str, Enum):
    """Attachment kinds understood by the bot."""

    MEDIA = "media"
    MENTION = "mention"
    OTHER = "other"


class SenderType(str, Enum):
    """Who produced a callback event."""

    USER = "user"
    BOT = "bot"
    SYSTEM = "system"


# GroupMe attachment "type" values mapped onto the kinds the bot cares about
GROUPME_ATTACHMENT_KINDS: dict[str, AttachmentKind] = {
    "image": AttachmentKind.MEDIA,
    "video": AttachmentKind.MEDIA,
    "mentions": AttachmentKind.MENTION,
}
