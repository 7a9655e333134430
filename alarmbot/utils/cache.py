"""Time-windowed seen cache."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Generic, Hashable, Optional, TypeVar

T = TypeVar("T", bound=Hashable)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExpiringCache(Generic[T]):
    """
    Remembers when each key was accepted.
    Entries expire after ``expiry``; there is no capacity bound, so ``purge``
    must be called regularly to keep the cache small.
    """

    def __init__(self, expiry: timedelta = timedelta(hours=24), clock: Optional[Clock] = None):
        self.expiry = expiry
        self._clock = clock or utcnow
        self._seen: dict[T, datetime] = {}

    def is_fresh(self, key: T) -> bool:
        """True if ``key`` was marked no longer than ``expiry`` ago."""
        marked_at = self._seen.get(key)
        if marked_at is None:
            return False
        return self._clock() - marked_at <= self.expiry

    def mark(self, key: T) -> None:
        """Record (or refresh) ``key`` as seen now."""
        self._seen[key] = self._clock()

    def purge(self) -> int:
        """Drop every entry strictly older than ``expiry``. Returns how many."""
        now = self._clock()
        expired = [key for key, marked_at in self._seen.items() if now - marked_at > self.expiry]
        for key in expired:
            del self._seen[key]
        return len(expired)

    def __contains__(self, key: T) -> bool:
        return key in self._seen

    def __len__(self) -> int:
        return len(self._seen)
