"""Main Orchestration Engine."""

import asyncio
from typing import List, Optional

from loguru import logger

from alarmbot.clients import PageClient, TelegramClient
from alarmbot.config import Settings, SourceConfig
from alarmbot.consumers import EventConsumer, PollConsumer, SourceConsumer
from alarmbot.events import TelegramEventProcessor
from alarmbot.schemas import ConsumerStatus
from alarmbot.sources import ChannelSource


class AlarmEngine:
    """Runs one poll consumer per source plus the bot updates consumer.

    Every consumer lives in its own task. A crash in one task is logged and
    recorded in that consumer's status; the others keep polling.
    """

    def __init__(
        self,
        settings: Settings,
        sources: List[SourceConfig],
        telegram: Optional[TelegramClient] = None,
        pages: Optional[PageClient] = None,
    ):
        self.settings = settings
        self.sources = sources
        self.running = False

        self.telegram = telegram or TelegramClient(
            settings.telegram.bot_token,
            host=settings.telegram.api_host,
            timeout=settings.telegram.request_timeout,
        )
        self.pages = pages or PageClient(
            timeout=settings.telegram.request_timeout,
            user_agent=settings.filters.user_agent,
        )

        poll = settings.poll

        # 1. Bot updates
        events = TelegramEventProcessor(self.telegram, settings.telegram.auto_reply)
        self.consumers: List[PollConsumer] = [
            EventConsumer(
                events,
                events,
                batch_size=poll.batch_size,
                idle_interval=poll.updates_idle_interval,
                retry_delay=poll.retry_delay,
            )
        ]

        # 2. Scraped channels
        for source in sources:
            channel = ChannelSource(
                source,
                self.telegram,
                self.pages,
                expiry=settings.filters.seen_expiry,
                max_length=settings.filters.max_length,
            )
            self.consumers.append(
                SourceConsumer(
                    channel,
                    channel,
                    idle_interval=poll.scrape_idle_interval,
                    retry_delay=poll.retry_delay,
                    name=source.name,
                )
            )

    async def run(self) -> None:
        """Run all consumers until stopped and report how each one ended."""
        self.running = True
        logger.info(f"Engine starting {len(self.consumers)} consumers")

        tasks = [
            asyncio.create_task(self._supervise(c), name=f"consumer:{c.name}")
            for c in self.consumers
        ]
        try:
            results = await asyncio.gather(*tasks, return_exceptions=True)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        finally:
            await self.stop()

        for consumer, result in zip(self.consumers, results):
            if isinstance(result, BaseException):
                logger.error(f"Consumer {consumer.name} ended with error: {result!r}")
            else:
                logger.info(f"Consumer {consumer.name} finished")

    async def _supervise(self, consumer: PollConsumer) -> None:
        restart_delay = self.settings.poll.restart_delay
        while self.running:
            try:
                await consumer.start()
                return
            except asyncio.CancelledError:
                raise
            except Exception as e:
                consumer.record_crash(e)
                logger.exception(f"Consumer {consumer.name} crashed")
                if restart_delay < 0:
                    raise
                logger.warning(f"Restarting {consumer.name} in {restart_delay}s")
                await asyncio.sleep(restart_delay)

    async def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        for consumer in self.consumers:
            consumer.stop()
        await self.telegram.close()
        await self.pages.close()
        logger.info("Engine stopped")

    def status(self) -> List[ConsumerStatus]:
        return [c.status() for c in self.consumers]
