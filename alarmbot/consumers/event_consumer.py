"""Consumer for cursor-based event streams."""

from loguru import logger

from alarmbot.events.base import EventFetcher, EventProcessor
from alarmbot.schemas import Event
from .base import PollConsumer


class EventConsumer(PollConsumer):
    """Polls an event fetcher in batches of ``batch_size``."""

    kind = "events"

    def __init__(
        self,
        fetcher: EventFetcher,
        processor: EventProcessor,
        batch_size: int = 100,
        idle_interval: float = 1.0,
        retry_delay: float = 0,
        name: str = "bot-updates",
    ):
        super().__init__(name, idle_interval, retry_delay)
        self.fetcher = fetcher
        self.processor = processor
        self.batch_size = batch_size

    async def _fetch(self) -> list[Event]:
        return await self.fetcher.fetch(self.batch_size)

    async def _process(self, event: Event) -> None:
        logger.info(f"got new event: {event.text!r}, {event.type.value}")
        await self.processor.process(event)
