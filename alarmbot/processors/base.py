"""Base processor interface."""

from abc import ABC, abstractmethod
from typing import List, Optional
from alarmbot.schemas import Candidate

class BaseProcessor(ABC):
    """Interface for processing scraped candidates (filtering, dedup, cleanup)."""

    @abstractmethod
    async def process(self, candidate: Candidate) -> Optional[Candidate]:
        """
        Process a candidate.
        Return modified candidate, or None to drop it.
        """
        pass

class ProcessorPipeline:
    """Chains multiple processors together."""

    def __init__(self, processors: List[BaseProcessor]):
        self.processors = processors

    async def run(self, candidate: Candidate) -> Optional[Candidate]:
        current = candidate
        for p in self.processors:
            current = await p.process(current)
            if current is None:
                return None
        return current
