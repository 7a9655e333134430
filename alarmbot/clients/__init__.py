"""HTTP clients for the Telegram Bot API and public web pages."""

from .base import BaseHTTPClient
from .telegram import TelegramClient
from .web import PageClient

__all__ = ["BaseHTTPClient", "TelegramClient", "PageClient"]
