"""Generic poll loop shared by all consumers."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Sequence

from loguru import logger

from alarmbot.schemas import ConsumerStatus
from alarmbot.utils.cache import utcnow


class PollConsumer(ABC):
    """
    Fetch a batch, idle when it is empty, otherwise hand each item to
    ``_process`` in order.

    Fetch errors are logged and retried after ``retry_delay`` (0 by default,
    i.e. immediately). A failing item is logged and skipped; it never aborts
    the batch. Ordering, offsets and dedup belong to the fetch side.
    """

    kind = "poll"

    def __init__(self, name: str, idle_interval: float, retry_delay: float = 0):
        self.name = name
        self.idle_interval = idle_interval
        self.retry_delay = retry_delay
        self._running = False
        self._sleep = asyncio.sleep
        self._status = ConsumerStatus(name=name, kind=self.kind)

    @abstractmethod
    async def _fetch(self) -> Sequence[Any]:
        pass

    @abstractmethod
    async def _process(self, item: Any) -> None:
        pass

    async def start(self) -> None:
        """Run until ``stop()`` is called."""
        self._running = True
        self._status.running = True
        logger.info(f"Consumer {self.name} started (idle interval: {self.idle_interval}s)")
        try:
            while self._running:
                try:
                    items = await self._fetch()
                except Exception as e:
                    self._status.fetch_errors += 1
                    self._status.last_error = str(e)
                    logger.error(f"[{self.name}] consumer: {e}")
                    # Yields to the event loop even when the delay is 0
                    await self._sleep(self.retry_delay)
                    continue

                self._status.fetches += 1
                self._status.last_fetch_at = utcnow()

                if not items:
                    await self._sleep(self.idle_interval)
                    continue

                await self._handle(items)
        finally:
            self._status.running = False
            logger.info(f"Consumer {self.name} stopped")

    def stop(self) -> None:
        self._running = False

    def status(self) -> ConsumerStatus:
        return self._status.model_copy()

    def record_crash(self, error: BaseException) -> None:
        self._status.crashes += 1
        self._status.last_error = str(error)

    async def _handle(self, items: Sequence[Any]) -> None:
        for item in items:
            try:
                await self._process(item)
            except Exception as e:
                self._status.process_errors += 1
                self._status.last_error = str(e)
                logger.error(f"[{self.name}] can't handle item: {e}")
                continue
            self._status.processed += 1
