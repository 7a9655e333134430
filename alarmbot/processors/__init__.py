"""Candidate processors: start time, content filter, dedup, cleanup."""

from .base import BaseProcessor, ProcessorPipeline
from .dedup import DedupProcessor
from .filter import CleanProcessor, FilterProcessor, FilterSpec, StartTimeProcessor

__all__ = [
    "BaseProcessor",
    "ProcessorPipeline",
    "DedupProcessor",
    "CleanProcessor",
    "FilterProcessor",
    "FilterSpec",
    "StartTimeProcessor",
]
