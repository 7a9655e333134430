"""Poll consumers."""

from .base import PollConsumer
from .event_consumer import EventConsumer
from .source_consumer import SourceConsumer

__all__ = ["PollConsumer", "EventConsumer", "SourceConsumer"]
