"""Plain page fetching for scraped sources."""

import aiohttp

from alarmbot.errors import FetchError
from .base import BaseHTTPClient


class PageClient(BaseHTTPClient):
    """Downloads raw documents."""

    def __init__(self, timeout: float = 30, user_agent: str = "alarmbot/0.1"):
        super().__init__(timeout=timeout, headers={"User-Agent": user_agent})

    async def fetch(self, url: str) -> bytes:
        try:
            session = await self._get_session()
            async with session.get(url) as response:
                if response.status != 200:
                    raise FetchError(f"can't fetch {url}: HTTP {response.status}")
                return await response.read()
        except (aiohttp.ClientError, TimeoutError) as e:
            raise FetchError(f"can't fetch {url}", e) from e
