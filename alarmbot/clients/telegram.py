"""Telegram Bot API client."""

from typing import Any, Optional, Union

import aiohttp
from loguru import logger
from pydantic import ValidationError

from alarmbot.errors import FetchError, TelegramAPIError
from alarmbot.schemas import Update, UpdatesResponse
from .base import BaseHTTPClient


class TelegramClient(BaseHTTPClient):
    """Minimal Bot API client: getUpdates, sendMessage and getMe."""

    API_BASE = "https://{host}/bot{token}/"

    def __init__(self, token: str, host: str = "api.telegram.org", timeout: float = 30):
        super().__init__(timeout=timeout)
        self._base_url = self.API_BASE.format(host=host, token=token)

    async def updates(self, offset: int, limit: int) -> list[Update]:
        """Fetch updates with ``update_id >= offset``, at most ``limit`` of them."""
        try:
            data = await self._request("getUpdates", {"offset": offset, "limit": limit})
            response = UpdatesResponse.model_validate(data)
        except TelegramAPIError as e:
            raise TelegramAPIError("can't get updates", e.status, e.description) from e
        except (aiohttp.ClientError, TimeoutError, ValueError, ValidationError) as e:
            raise FetchError("can't get updates", e) from e

        if not response.ok:
            raise TelegramAPIError("can't get updates", description=response.description)

        return response.result

    async def send_message(self, chat_id: Union[int, str], text: str) -> None:
        """Send a plain text message to a chat or channel."""
        try:
            await self._request("sendMessage", {"chat_id": chat_id, "text": text})
        except TelegramAPIError as e:
            raise TelegramAPIError("can't send message", e.status, e.description) from e
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            raise FetchError("can't send message", e) from e

    async def get_me(self) -> Optional[str]:
        """Return the bot username, or None when the API is unreachable."""
        try:
            data = await self._request("getMe", {})
        except (TelegramAPIError, aiohttp.ClientError, TimeoutError, ValueError) as e:
            logger.warning(f"Telegram connection test failed: {e}")
            return None

        username = (data.get("result") or {}).get("username")
        logger.info(f"Connected to Telegram bot: @{username}")
        return username

    async def _request(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        session = await self._get_session()
        async with session.post(self._base_url + method, json=params) as response:
            if response.status != 200:
                description = None
                try:
                    description = (await response.json()).get("description")
                except (aiohttp.ContentTypeError, ValueError):
                    pass
                raise TelegramAPIError(
                    f"can't do request {method}", response.status, description
                )
            return await response.json()
