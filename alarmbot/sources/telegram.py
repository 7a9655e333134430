"""Public Telegram channel watched through its web preview."""

from datetime import timedelta
from typing import Optional

from loguru import logger

from alarmbot.clients.telegram import TelegramClient
from alarmbot.clients.web import PageClient
from alarmbot.config import SourceConfig
from alarmbot.errors import FetchError, ProcessError
from alarmbot.parsers.telegram_page import parse_channel_page
from alarmbot.processors import (
    CleanProcessor,
    DedupProcessor,
    FilterProcessor,
    FilterSpec,
    ProcessorPipeline,
    StartTimeProcessor,
)
from alarmbot.schemas import Message
from alarmbot.utils.cache import Clock, ExpiringCache, utcnow
from .base import SourceFetcher, SourceProcessor


class ChannelSource(SourceFetcher, SourceProcessor):
    """
    Re-scrapes a channel page on every fetch and forwards matching posts.

    The page has no cursor, so repeated posts are suppressed by a seen cache
    that forgets ids after ``expiry``. Posts published before this source was
    created are ignored to avoid replaying history on start-up.
    """

    def __init__(
        self,
        config: SourceConfig,
        client: TelegramClient,
        pages: PageClient,
        expiry: timedelta = timedelta(hours=24),
        max_length: int = 150,
        clock: Optional[Clock] = None,
    ):
        self.config = config
        self.tg = client
        self.pages = pages
        self._clock = clock or utcnow
        self.start_time = self._clock()

        self.spec = FilterSpec.build(
            config.search_regexp,
            config.max_length or max_length,
            config.phrases_to_remove,
        )
        self.seen: ExpiringCache[str] = ExpiringCache(expiry, clock=self._clock)
        self._dedup = DedupProcessor(self.seen)
        self.pipeline = ProcessorPipeline([
            StartTimeProcessor(self.start_time),
            FilterProcessor(self.spec),
            self._dedup,
            CleanProcessor(self.spec),
        ])

    @property
    def name(self) -> str:
        return self.config.name

    async def fetch(self) -> list[Message]:
        try:
            html = await self.pages.fetch(self.config.url)
            candidates = parse_channel_page(html)
        except Exception as e:
            raise FetchError("can't fetch data from telegram source", e) from e

        messages = []
        for candidate in candidates:
            accepted = await self.pipeline.run(candidate)
            if accepted is not None:
                messages.append(Message(id=accepted.id, text=accepted.text))

        purged = self._dedup.sweep()
        if purged:
            logger.debug(f"[{self.name}] purged {purged} expired ids")
        if messages:
            logger.info(f"[{self.name}] {len(messages)} new posts")

        return messages

    async def process(self, message: Message) -> None:
        try:
            await self.tg.send_message(self.config.to_channel, message.text)
        except Exception as e:
            raise ProcessError(f"can't send message to {self.config.to_channel}", e) from e
        logger.info(f"[{self.name}] forwarded {message.id}")
