"""
Per-invocation context and the collaborators handlers orchestrate.
"""

import random
from dataclasses import dataclass, field

from groupbot.core.config.settings import Settings
from groupbot.core.state import StateOwner
from groupbot.domain.interfaces.messaging_interface import IGroupRoster, IMessenger
from groupbot.domain.services import PictureCatalog, PointsLedger, RotationCache
from groupbot.messaging.lookups import LookupClient
from groupbot.schemas.callback import InboundAttachment

from .parser import Command


@dataclass
class MessageHistory:
    """Text of the last plain (non-command, non-bot) message seen by the intake."""

    last_text: str = ""

    def record(self, text: str) -> None:
        if text:
            self.last_text = text


@dataclass
class BotServices:
    """Everything a handler may talk to.

    The ledger, catalog and rotation cache are only ever reached through
    ``state.call``.
    """

    state: StateOwner
    ledger: PointsLedger
    catalog: PictureCatalog
    rotation: RotationCache
    messenger: IMessenger
    roster: IGroupRoster
    settings: Settings
    lookups: LookupClient | None = None
    history: MessageHistory = field(default_factory=MessageHistory)
    rng: random.Random = field(default_factory=random.Random)

    async def nicknames(self) -> dict[str, str]:
        return {m.user_id: m.nickname for m in await self.roster.get_members()}


@dataclass(frozen=True)
class CommandContext:
    command: Command
    attachments: list[InboundAttachment]
    sender_id: str

    @property
    def args(self) -> tuple[str, ...]:
        return self.command.args

    @property
    def text(self) -> str:
        return self.command.text

    @property
    def mentioned_user_id(self) -> str | None:
        """First user tagged in the message, if any."""
        for attachment in self.attachments:
            if attachment.is_mention and attachment.user_ids:
                return attachment.user_ids[0]
        return None

    @property
    def media_url(self) -> str | None:
        for attachment in self.attachments:
            if attachment.is_media:
                return attachment.url
        return None
