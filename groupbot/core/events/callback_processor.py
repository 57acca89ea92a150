"""
Callback processor: the bot's per-message pipeline.

For every inbound group message:
1. bot-originated messages are dropped with no side effects
2. plain messages are remembered for the ``*prev`` commands
3. the sender earns points for the message
4. a prefixed message is parsed and dispatched as a command
"""

from datetime import datetime
from typing import Any

from groupbot.commands import BotServices, CommandDispatcher, parse_command
from groupbot.core.logging.logger import get_logger
from groupbot.domain.services import EarnSignal
from groupbot.schemas.callback import GroupMeCallback


class CallbackProcessor:
    """Routes GroupMe callbacks through scoring and command dispatch."""

    def __init__(self, services: BotServices, dispatcher: CommandDispatcher):
        self.services = services
        self.dispatcher = dispatcher

    async def process(self, callback: GroupMeCallback) -> dict[str, Any]:
        """
        Process one callback.

        Returns:
            Dictionary describing what was done
        """
        logger = get_logger(__name__)
        started = datetime.utcnow()

        if callback.is_from_bot:
            logger.debug(f"Ignoring bot message from {callback.name or callback.sender_id}")
            return {"success": True, "ignored": True}

        prefix = self.services.settings.command_prefix
        command = parse_command(callback.text, prefix)
        # Anything prefixed, even a bare or malformed command, is not chat
        if not callback.text.startswith(prefix):
            self.services.history.record(callback.text)

        signal = None
        if callback.user_id:
            signal = EarnSignal.classify(callback.text, callback.attachments, prefix)
            write = await self.services.state.call(
                self.services.ledger.earn, callback.user_id, signal
            )
            if not write.ok:
                logger.warning(f"Points for {callback.user_id} not persisted: {write.error}")

        if command is not None:
            await self.dispatcher.dispatch(
                command, callback.attachments, callback.user_id or callback.sender_id
            )

        elapsed = (datetime.utcnow() - started).total_seconds()
        logger.info(
            f"💬 {callback.name or callback.user_id}: "
            f"{signal.name if signal else 'no points'}"
            f"{f', /{command.name}' if command else ''} ({elapsed:.3f}s)"
        )
        return {
            "success": True,
            "ignored": False,
            "signal": signal.name if signal else None,
            "command": command.name if command else None,
        }
