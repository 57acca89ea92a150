"""Inbound GroupMe schemas and shared message types."""

from .callback import GroupMeCallback, InboundAttachment
from .types import AttachmentKind, SenderType

__all__ = ["AttachmentKind", "GroupMeCallback", "InboundAttachment", "SenderType"]
