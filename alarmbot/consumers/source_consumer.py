"""Consumer for re-scraped sources."""

from alarmbot.schemas import Message
from alarmbot.sources.base import SourceFetcher, SourceProcessor
from .base import PollConsumer


class SourceConsumer(PollConsumer):
    """Polls a whole-page source; the fetcher owns deduplication."""

    kind = "source"

    def __init__(
        self,
        fetcher: SourceFetcher,
        processor: SourceProcessor,
        idle_interval: float = 10.0,
        retry_delay: float = 0,
        name: str = "source",
    ):
        super().__init__(name, idle_interval, retry_delay)
        self.fetcher = fetcher
        self.processor = processor

    async def _fetch(self) -> list[Message]:
        return await self.fetcher.fetch()

    async def _process(self, message: Message) -> None:
        await self.processor.process(message)
