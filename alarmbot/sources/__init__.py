"""Scraped sources."""

from .base import SourceFetcher, SourceProcessor
from .telegram import ChannelSource

__all__ = ["SourceFetcher", "SourceProcessor", "ChannelSource"]
