"""Turns Bot API updates into events and answers them."""

from typing import Optional

from loguru import logger

from alarmbot.clients.telegram import TelegramClient
from alarmbot.config import settings
from alarmbot.errors import (
    FetchError,
    MissingMetaError,
    UnknownEventTypeError,
)
from alarmbot.schemas import Event, MessageEvent, MessageMeta, UnknownEvent, Update
from .base import EventFetcher, EventProcessor


class TelegramEventProcessor(EventFetcher, EventProcessor):
    """Pages through getUpdates and replies to direct messages."""

    def __init__(self, client: TelegramClient, auto_reply: Optional[str] = None):
        self.tg = client
        self.auto_reply = auto_reply or settings.telegram.auto_reply
        self.offset = 0

    async def fetch(self, limit: int) -> list[Event]:
        try:
            updates = await self.tg.updates(self.offset, limit)
        except Exception as e:
            raise FetchError("can't get events", e) from e

        if not updates:
            return []

        events = [update_to_event(u) for u in updates]
        # Updates are expected in order, but the cursor must never fall behind
        self.offset = max(u.update_id for u in updates) + 1
        logger.debug(f"Fetched {len(events)} updates, next offset {self.offset}")

        return events

    async def process(self, event: Event) -> None:
        if isinstance(event, MessageEvent):
            await self._process_message(event)
            return
        raise UnknownEventTypeError()

    async def _process_message(self, event: MessageEvent) -> None:
        if event.meta is None:
            raise MissingMetaError()

        await self.tg.send_message(event.meta.chat_id, self.auto_reply)


def update_to_event(update: Update) -> Event:
    """Map an update onto the event variant for its kind."""
    message = update.message
    if message is None:
        return UnknownEvent()

    meta = None
    if message.chat is not None:
        meta = MessageMeta(
            chat_id=message.chat.id,
            username=message.from_.username if message.from_ else "",
        )

    return MessageEvent(text=message.text, meta=meta)
