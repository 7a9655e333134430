"""Content filtering and text cleanup."""

import re
from datetime import datetime
from typing import Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict

from alarmbot.schemas import Candidate
from .base import BaseProcessor


class FilterSpec(BaseModel):
    """Per-source matching and cleanup rules."""

    model_config = ConfigDict(frozen=True)

    pattern: re.Pattern
    max_length: int = 150
    phrases_to_remove: tuple[str, ...] = ()

    @classmethod
    def build(cls, pattern: str, max_length: int = 150, phrases: Sequence[str] = ()) -> "FilterSpec":
        # Compiled once per source
        return cls(
            pattern=re.compile(pattern),
            max_length=max_length,
            phrases_to_remove=tuple(phrases),
        )

    def matches(self, text: str) -> bool:
        # len() counts code points, not encoded bytes
        return bool(self.pattern.search(text)) and len(text) < self.max_length

    def clean(self, text: str) -> str:
        for phrase in self.phrases_to_remove:
            text = text.replace(phrase, "")
        return text.strip()


class StartTimeProcessor(BaseProcessor):
    """Drops posts without a timestamp or published before ``start_time``."""

    def __init__(self, start_time: datetime):
        self.start_time = start_time

    async def process(self, candidate: Candidate) -> Candidate | None:
        if candidate.timestamp is None or candidate.timestamp < self.start_time:
            return None
        return candidate


class FilterProcessor(BaseProcessor):
    """Keeps posts whose raw text matches the pattern and is short enough."""

    def __init__(self, spec: FilterSpec):
        self.spec = spec

    async def process(self, candidate: Candidate) -> Candidate | None:
        if not self.spec.matches(candidate.text):
            return None
        logger.debug(f"Post {candidate.id} matched {self.spec.pattern.pattern!r}")
        return candidate


class CleanProcessor(BaseProcessor):
    """Strips configured phrases and surrounding whitespace."""

    def __init__(self, spec: FilterSpec):
        self.spec = spec

    async def process(self, candidate: Candidate) -> Candidate | None:
        return candidate.model_copy(update={"text": self.spec.clean(candidate.text)})
