"""Capabilities behind the cursor (bot updates) consumer."""

from abc import ABC, abstractmethod

from alarmbot.schemas import Event


class EventFetcher(ABC):
    """Fetches the next batch of events."""

    @abstractmethod
    async def fetch(self, limit: int) -> list[Event]:
        """Return at most ``limit`` new events; empty when there is nothing new."""
        pass


class EventProcessor(ABC):
    """Handles one event."""

    @abstractmethod
    async def process(self, event: Event) -> None:
        """Raise ProcessError when the event can't be handled."""
        pass
