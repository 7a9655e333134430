"""Utilities for alarmbot."""

from .cache import ExpiringCache, utcnow

__all__ = ["ExpiringCache", "utcnow"]
