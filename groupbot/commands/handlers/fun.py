"""Text and lookup commands that touch no bot state."""

from groupbot.messaging.models import MediaAttachment

from .. import transforms
from ..context import BotServices, CommandContext
from ..names import CommandName

SHRUG = "¯\\_(ツ)_/¯"


async def list_commands(ctx: CommandContext, services: BotServices) -> None:
    prefix = services.settings.command_prefix
    await services.messenger.post_chunks(
        [f"{prefix}{name.value}" for name in CommandName.public()], ", "
    )


async def ping(ctx: CommandContext, services: BotServices) -> None:
    await services.messenger.post("Pong!")


async def say(ctx: CommandContext, services: BotServices) -> None:
    if ctx.text:
        await services.messenger.post(ctx.text)


async def shrug(ctx: CommandContext, services: BotServices) -> None:
    await services.messenger.post(SHRUG)


async def pog(ctx: CommandContext, services: BotServices) -> None:
    await services.messenger.post("", [MediaAttachment(url=services.settings.pog_image_url)])


async def _post_nonempty(services: BotServices, text: str) -> None:
    if text:
        await services.messenger.post(text)


async def shout(ctx: CommandContext, services: BotServices) -> None:
    await _post_nonempty(services, transforms.shout(ctx.text))


async def shout_previous(ctx: CommandContext, services: BotServices) -> None:
    await _post_nonempty(services, transforms.shout(services.history.last_text))


async def mock(ctx: CommandContext, services: BotServices) -> None:
    await _post_nonempty(services, transforms.mock(ctx.text, services.rng))


async def mock_previous(ctx: CommandContext, services: BotServices) -> None:
    await _post_nonempty(
        services, transforms.mock(services.history.last_text, services.rng)
    )


async def uwu(ctx: CommandContext, services: BotServices) -> None:
    if ctx.text:
        await services.messenger.post(transforms.uwu(ctx.text, services.rng))


async def uwu_previous(ctx: CommandContext, services: BotServices) -> None:
    if services.history.last_text:
        await services.messenger.post(
            transforms.uwu(services.history.last_text, services.rng)
        )


async def joke(ctx: CommandContext, services: BotServices) -> None:
    if services.lookups is None:
        return
    text = await services.lookups.random_joke()
    if text:
        await services.messenger.post(text)


async def wiki(ctx: CommandContext, services: BotServices) -> None:
    if services.lookups is None:
        return
    url = await services.lookups.random_article_url()
    if url:
        await services.messenger.post(f"Your random Wikipedia article is: {url}")
