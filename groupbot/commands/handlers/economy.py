"""Points economy commands: /bal, /pay, /leaderboard."""

from groupbot.core.logging.logger import get_logger
from groupbot.domain.errors import InsufficientFunds, InvalidAmount, UserNotFound

from ..context import BotServices, CommandContext

NEGATIVE_AMOUNT_REPLY = "You cannot send negative points."
INSUFFICIENT_FUNDS_REPLY = "You do not have sufficient points for this transaction."
TRANSFER_COMPLETE_REPLY = "Transaction complete."


async def balance(ctx: CommandContext, services: BotServices) -> None:
    """Balance of the tagged member, or of the sender when nobody is tagged."""
    user_id = ctx.mentioned_user_id or ctx.sender_id
    try:
        points = await services.state.call(services.ledger.balance, user_id)
    except UserNotFound:
        get_logger(__name__).debug(f"No balance for {user_id}")
        return

    nicknames = await services.nicknames()
    nickname = nicknames.get(user_id, user_id)
    await services.messenger.post(f"{nickname}'s current balance is {points} points.")


async def pay(ctx: CommandContext, services: BotServices) -> None:
    """``/pay @member <amount>``: the amount is the last argument."""
    recipient = ctx.mentioned_user_id
    if not ctx.args or recipient is None:
        return
    try:
        amount = int(ctx.args[-1])
    except ValueError:
        return

    try:
        receipt = await services.state.call(
            services.ledger.transfer, ctx.sender_id, recipient, amount
        )
    except InvalidAmount:
        await services.messenger.post(NEGATIVE_AMOUNT_REPLY)
        return
    except (InsufficientFunds, UserNotFound):
        await services.messenger.post(INSUFFICIENT_FUNDS_REPLY)
        return

    # Confirm only once the ledger reached the store
    if receipt.write.ok:
        await services.messenger.post(TRANSFER_COMPLETE_REPLY)


async def leaderboard(ctx: CommandContext, services: BotServices) -> None:
    standings = await services.state.call(services.ledger.standings)
    if not standings:
        return
    nicknames = await services.nicknames()
    lines = [
        f"{rank}. {nicknames.get(record.user_id, record.user_id)}: {record.points}"
        for rank, record in enumerate(standings, start=1)
    ]
    await services.messenger.post("\n".join(lines))
