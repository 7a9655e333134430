"""alarmbot - polls Telegram channels and the Bot API, forwards alerts."""

__version__ = "0.1.0"
