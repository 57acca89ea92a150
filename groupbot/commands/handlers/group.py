"""Member tagging commands: /mention and /select."""

from ..context import BotServices, CommandContext
from ..mentions import build_mentions, members_with_tag


async def mention(ctx: CommandContext, services: BotServices) -> None:
    """``/mention all`` or ``/mention <tag>`` for members named ``[tag] ...``."""
    if not ctx.args:
        return
    members = members_with_tag(await services.roster.get_members(), ctx.args[0])
    if not members:
        return
    text, attachment = build_mentions(members)
    await services.messenger.post(text, [attachment])


async def select(ctx: CommandContext, services: BotServices) -> None:
    """Tag one member picked at random, optionally saying what for."""
    members = await services.roster.get_members()
    if not members:
        return
    member = services.rng.choice(members)
    text, attachment = build_mentions([member])
    if ctx.args:
        text = f"{text}, you have been randomly selected for {ctx.text}."
    await services.messenger.post(text, [attachment])
