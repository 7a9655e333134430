"""Deduplication processor."""

from alarmbot.schemas import Candidate
from alarmbot.utils.cache import ExpiringCache
from .base import BaseProcessor

class DedupProcessor(BaseProcessor):
    """Drops candidates accepted within the cache's retention window."""

    def __init__(self, cache: ExpiringCache[str]):
        self.seen = cache

    async def process(self, candidate: Candidate) -> Candidate | None:
        if self.seen.is_fresh(candidate.id):
            return None

        self.seen.mark(candidate.id)
        return candidate

    def sweep(self) -> int:
        return self.seen.purge()
