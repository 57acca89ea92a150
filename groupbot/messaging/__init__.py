"""
Outbound messaging for groupbot.

Platform-agnostic message models plus the GroupMe implementation.
"""

from .models import (
    GroupMember,
    MediaAttachment,
    MentionAttachment,
    MessageResult,
    OutboundAttachment,
)

__all__ = [
    "GroupMember",
    "MediaAttachment",
    "MentionAttachment",
    "MessageResult",
    "OutboundAttachment",
]
