"""
Third-party lookups used by the fun commands.

- random joke from the Official Joke API
- random Wikipedia article summary
"""

from typing import Any

import aiohttp

from groupbot.core.logging.logger import get_logger

JOKE_API_URL = "https://official-joke-api.appspot.com/random_joke"
WIKI_RANDOM_URL = "https://en.wikipedia.org/api/rest_v1/page/random/summary"


class LookupClient:
    """Fetches jokes and random articles; failures yield None."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        joke_url: str = JOKE_API_URL,
        wiki_url: str = WIKI_RANDOM_URL,
    ):
        self.session = session
        self.joke_url = joke_url
        self.wiki_url = wiki_url
        self.logger = get_logger(__name__)

    async def _get_json(self, url: str) -> dict[str, Any] | None:
        try:
            async with self.session.get(url) as response:
                response.raise_for_status()
                return await response.json()
        except (aiohttp.ClientError, TimeoutError) as e:
            self.logger.error(f"Lookup failed for {url}: {e}")
            return None

    async def random_joke(self) -> str | None:
        """Setup and punchline on two lines."""
        data = await self._get_json(self.joke_url)
        if not data or "setup" not in data:
            return None
        return f"{data['setup']}\n{data.get('punchline', '')}"

    async def random_article_url(self) -> str | None:
        data = await self._get_json(self.wiki_url)
        if not data:
            return None
        urls = data.get("content_urls") or {}
        return (urls.get("mobile") or {}).get("page") or (urls.get("desktop") or {}).get(
            "page"
        )
