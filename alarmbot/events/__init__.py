"""Bot update events."""

from .base import EventFetcher, EventProcessor
from .telegram import TelegramEventProcessor, update_to_event

__all__ = ["EventFetcher", "EventProcessor", "TelegramEventProcessor", "update_to_event"]
