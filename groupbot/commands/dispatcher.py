"""
Command dispatcher.

Routes a parsed command to its handler through a fixed table keyed by
``CommandName``. The table is built once per dispatcher and never changes;
unrecognised names resolve to ``CommandName.NOOP`` and do nothing.
"""

from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType

from groupbot.core.logging.logger import get_logger
from groupbot.schemas.callback import InboundAttachment

from .context import BotServices, CommandContext
from .handlers import economy, fun, group, pictures
from .names import CommandName
from .parser import Command

Handler = Callable[[CommandContext, BotServices], Awaitable[None]]


async def _noop(ctx: CommandContext, services: BotServices) -> None:
    return None


class CommandDispatcher:
    """Read-only routing table from command name to handler."""

    def __init__(self, services: BotServices):
        self.services = services
        self.routes: Mapping[CommandName, Handler] = MappingProxyType(
            {
                CommandName.BAL: economy.balance,
                CommandName.PAY: economy.pay,
                CommandName.LEADERBOARD: economy.leaderboard,
                CommandName.PIC: pictures.pic,
                CommandName.SUBMIT: pictures.submit,
                CommandName.LISTPICS: pictures.list_pictures,
                CommandName.PICSLIST: pictures.list_pictures,
                CommandName.TOPPICS: pictures.top_pictures,
                CommandName.SHUFFLE: pictures.shuffle,
                CommandName.MENTION: group.mention,
                CommandName.SELECT: group.select,
                CommandName.COMMANDS: fun.list_commands,
                CommandName.PING: fun.ping,
                CommandName.SAY: fun.say,
                CommandName.SHRUG: fun.shrug,
                CommandName.POG: fun.pog,
                CommandName.SHOUT: fun.shout,
                CommandName.SHOUTPREV: fun.shout_previous,
                CommandName.MOCK: fun.mock,
                CommandName.MOCKPREV: fun.mock_previous,
                CommandName.UWU: fun.uwu,
                CommandName.UWUPREV: fun.uwu_previous,
                CommandName.JOKE: fun.joke,
                CommandName.WIKI: fun.wiki,
                CommandName.NOOP: _noop,
            }
        )

    async def dispatch(
        self,
        command: Command,
        attachments: list[InboundAttachment],
        sender_id: str,
    ) -> None:
        """
        Run the handler for ``command``.

        Handler failures are logged and swallowed so one bad command never
        takes the bot down.
        """
        logger = get_logger(__name__)
        name = CommandName.resolve(command.name)
        if name is CommandName.NOOP:
            logger.debug(f"Ignoring unknown command '{command.name}'")
            return

        ctx = CommandContext(
            command=command, attachments=list(attachments), sender_id=sender_id
        )
        logger.info(f"Dispatching /{name.value} for {sender_id}")
        try:
            await self.routes[name](ctx, self.services)
        except Exception as e:
            logger.exception(f"Command /{name.value} failed: {e}")
