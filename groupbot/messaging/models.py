"""
Outbound message models.

Platform-agnostic attachment and result schemas handed to ``IMessenger``.
The GroupMe wire encoding lives in ``to_groupme()``.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from groupbot.schemas.types import AttachmentKind


class MediaAttachment(BaseModel):
    """Reference to an image or video to show with the message."""

    kind: Literal[AttachmentKind.MEDIA] = AttachmentKind.MEDIA
    url: str = Field(..., min_length=1)
    is_video: bool = False

    def to_groupme(self) -> dict[str, Any]:
        if self.is_video:
            return {"type": "video", "url": self.url, "preview_url": self.url}
        return {"type": "image", "url": self.url}


class MentionAttachment(BaseModel):
    """Tags users in the message text.

    ``ranges`` holds half-open ``(start, end)`` character offsets into the
    message text, one per entry of ``user_ids`` and in the same order.
    """

    kind: Literal[AttachmentKind.MENTION] = AttachmentKind.MENTION
    user_ids: list[str]
    ranges: list[tuple[int, int]]

    @model_validator(mode="after")
    def validate_ranges(self) -> "MentionAttachment":
        if len(self.user_ids) != len(self.ranges):
            raise ValueError("Each mentioned user needs exactly one range")
        for start, end in self.ranges:
            if start < 0 or end < start:
                raise ValueError(f"Invalid mention range: ({start}, {end})")
        return self

    def to_groupme(self) -> dict[str, Any]:
        # GroupMe loci are [offset, length]
        return {
            "type": "mentions",
            "user_ids": list(self.user_ids),
            "loci": [[start, end - start] for start, end in self.ranges],
        }


OutboundAttachment = MediaAttachment | MentionAttachment


class MessageResult(BaseModel):
    """Result of a post to the group."""

    success: bool
    text: str = ""
    error: str | None = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class GroupMember(BaseModel):
    """A member of the group as reported by the roster endpoint."""

    user_id: str
    nickname: str
