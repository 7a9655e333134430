"""Error types shared by the consumers and clients."""

from typing import Optional


class AlarmBotError(Exception):
    """Base error. Wrapping errors keep the cause in their message."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(f"{message}: {cause}" if cause is not None else message)


class ConfigError(AlarmBotError):
    """Missing token or invalid source configuration."""


class FetchError(AlarmBotError):
    """A fetch failed in transport or while decoding. Safe to retry."""


class ProcessError(AlarmBotError):
    """A single item could not be processed."""


class UnknownEventTypeError(ProcessError):
    def __init__(self, context: str = "can't process event"):
        super().__init__(f"{context}: unknown event type")


class MissingMetaError(ProcessError):
    def __init__(self, context: str = "can't process message"):
        super().__init__(f"{context}: unknown meta type")


class TelegramAPIError(AlarmBotError):
    """Bot API answered with an HTTP error or ``ok: false``."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        description: Optional[str] = None,
    ):
        self.status = status
        self.description = description
        detail = description or (f"HTTP {status}" if status else None)
        super().__init__(f"{message}: {detail}" if detail else message)
