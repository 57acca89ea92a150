"""
Picture catalog commands.

/pic [caption]   captioned lookup, or least-shown selection without a caption
/shuffle         next entry of the no-repeat rotation cycle
/submit caption  add the attached media to the catalog
/listpics        every caption, alphabetically
/toppics         the ten most shown pictures
"""

from groupbot.core.logging.logger import get_logger
from groupbot.domain.errors import PictureNotFound
from groupbot.domain.models import PictureEntry
from groupbot.messaging.models import MediaAttachment

from ..context import BotServices, CommandContext

SUBMISSION_REPLY = "Submission received!"
TOP_PICTURES_LIMIT = 10


async def send_picture(services: BotServices, entry: PictureEntry) -> None:
    media = MediaAttachment(url=entry.media_url, is_video=entry.is_video)
    await services.messenger.post(entry.caption, [media])


async def pic(ctx: CommandContext, services: BotServices) -> None:
    if ctx.args:
        try:
            entry = await services.state.call(
                services.catalog.find_by_caption, ctx.text
            )
        except PictureNotFound as e:
            get_logger(__name__).debug(str(e))
            return
    else:
        entry = await services.state.call(services.catalog.select_least_shown)
        if entry is None:
            return
    await send_picture(services, entry)


async def shuffle(ctx: CommandContext, services: BotServices) -> None:
    entry = await services.state.call(services.rotation.next)
    if entry is not None:
        await send_picture(services, entry)


async def submit(ctx: CommandContext, services: BotServices) -> None:
    media_url = ctx.media_url
    if not media_url:
        return
    entry = await services.state.call(services.catalog.submit, media_url, ctx.text)
    if entry is not None:
        await services.messenger.post(SUBMISSION_REPLY)


async def list_pictures(ctx: CommandContext, services: BotServices) -> None:
    captions = await services.state.call(services.catalog.list_captions_sorted)
    if captions:
        await services.messenger.post_chunks(captions, ", ")


async def top_pictures(ctx: CommandContext, services: BotServices) -> None:
    top = await services.state.call(
        services.catalog.top_by_appearances, TOP_PICTURES_LIMIT
    )
    if not top:
        return
    lines = [
        f"{rank}. {entry.caption} - {entry.appearances}"
        for rank, entry in enumerate(top, start=1)
    ]
    await services.messenger.post("\n".join(lines))
