"""Capabilities behind the scraped (window) consumer."""

from abc import ABC, abstractmethod

from alarmbot.schemas import Message


class SourceFetcher(ABC):
    @abstractmethod
    async def fetch(self) -> list[Message]:
        """Return posts not forwarded yet."""
        pass


class SourceProcessor(ABC):
    @abstractmethod
    async def process(self, message: Message) -> None:
        """Forward one post downstream."""
        pass
