"""Shared aiohttp session handling."""

from typing import Optional

import aiohttp


class BaseHTTPClient:
    """Owns one lazily created aiohttp session."""

    def __init__(self, timeout: float = 30, headers: Optional[dict[str, str]] = None):
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._headers = headers or {}
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout, headers=self._headers)
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
