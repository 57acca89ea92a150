"""
GroupMe HTTP client.

Thin aiohttp wrapper over the two GroupMe endpoints the bot uses:
- POST {api}/bots/post       post a message as the bot
- GET  {api}/groups/{id}     read the group, including its member list
"""

from typing import Any

import aiohttp

from groupbot.core.config.settings import settings
from groupbot.core.logging.logger import get_logger


class GroupMeClient:
    """GroupMe API client bound to one bot and one group."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        bot_id: str,
        access_token: str | None = None,
        group_id: str | None = None,
        base_url: str = settings.groupme_api_url,
        logger: Any | None = None,
    ):
        """Initialize GroupMe client with dependency injection.

        Args:
            session: Persistent aiohttp session (managed by FastAPI lifespan)
            bot_id: Bot id used to post into the group
            access_token: User access token, required for roster reads
            group_id: Group the bot lives in
            base_url: GroupMe API base URL
            logger: Pre-configured logger instance
        """
        self.session = session
        self.bot_id = bot_id
        self.access_token = access_token
        self.group_id = group_id
        self.base_url = base_url.rstrip("/")
        self.logger = logger or get_logger(__name__)

    async def post_message(
        self, text: str, attachments: list[dict[str, Any]] | None = None
    ) -> int:
        """Post a bot message.

        Returns:
            HTTP status (GroupMe answers 202 with an empty body)

        Raises:
            aiohttp.ClientResponseError: For HTTP errors
        """
        url = f"{self.base_url}/bots/post"
        payload: dict[str, Any] = {"bot_id": self.bot_id, "text": text}
        if attachments:
            payload["attachments"] = attachments

        self.logger.debug(f"Posting to {url}: {payload}")
        try:
            async with self.session.post(url, json=payload) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    self.logger.error(
                        f"GroupMe post failed: {response.status} - {error_text}"
                    )
                response.raise_for_status()
                return response.status
        except aiohttp.ClientResponseError as http_err:
            if http_err.status == 400:
                self.logger.error(f"GroupMe rejected the post, bot_id={self.bot_id}")
            raise

    async def get_group(self) -> dict[str, Any]:
        """Fetch the group document.

        Raises:
            ValueError: If access token or group id are not configured
            aiohttp.ClientResponseError: For HTTP errors
        """
        if not self.access_token or not self.group_id:
            raise ValueError("access_token and group_id are required to read the group")

        url = f"{self.base_url}/groups/{self.group_id}"
        async with self.session.get(url, params={"token": self.access_token}) as response:
            if response.status >= 400:
                error_text = await response.text()
                self.logger.error(
                    f"GroupMe group read failed: {response.status} - {error_text}"
                )
            response.raise_for_status()
            data = await response.json()
        return data.get("response") or {}

    async def get_members(self) -> list[dict[str, Any]]:
        group = await self.get_group()
        return group.get("members") or []
