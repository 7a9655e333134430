"""Document parsers for scraped sources."""

from .telegram_page import parse_channel_page, parse_timestamp

__all__ = ["parse_channel_page", "parse_timestamp"]
