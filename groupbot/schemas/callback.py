"""
GroupMe bot callback payload.

GroupMe POSTs one JSON document per group message to the bot's callback URL.
Only the fields the bot consumes are modelled; everything else is ignored.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .types import GROUPME_ATTACHMENT_KINDS, AttachmentKind, SenderType


class InboundAttachment(BaseModel):
    """A single attachment on an inbound message."""

    model_config = ConfigDict(extra="allow")

    type: str = "unknown"
    url: str | None = None
    user_ids: list[str] = Field(default_factory=list)
    loci: list[list[int]] = Field(default_factory=list)

    @field_validator("user_ids", mode="before")
    @classmethod
    def stringify_user_ids(cls, v: Any) -> list[str]:
        return [str(uid) for uid in v or []]

    @property
    def kind(self) -> AttachmentKind:
        return GROUPME_ATTACHMENT_KINDS.get(self.type, AttachmentKind.OTHER)

    @property
    def is_media(self) -> bool:
        return self.kind is AttachmentKind.MEDIA and bool(self.url)

    @property
    def is_mention(self) -> bool:
        return self.kind is AttachmentKind.MENTION


class GroupMeCallback(BaseModel):
    """Inbound chat event delivered by GroupMe."""

    model_config = ConfigDict(extra="ignore")

    text: str = ""
    sender_id: str = ""
    sender_type: SenderType = SenderType.USER
    user_id: str = ""
    name: str = ""
    group_id: str | None = None
    id: str | None = None
    attachments: list[InboundAttachment] = Field(default_factory=list)

    @field_validator("sender_id", "user_id", mode="before")
    @classmethod
    def stringify_ids(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("text", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return v or ""

    @field_validator("attachments", mode="before")
    @classmethod
    def default_attachments(cls, v: Any) -> list[Any]:
        return v or []

    @field_validator("sender_type", mode="before")
    @classmethod
    def coerce_sender_type(cls, v: Any) -> SenderType:
        try:
            return SenderType(v)
        except ValueError:
            return SenderType.SYSTEM

    @property
    def is_from_bot(self) -> bool:
        return self.sender_type is SenderType.BOT
