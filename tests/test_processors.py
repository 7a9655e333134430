"""Test processors."""

import re
from datetime import timedelta

import pytest
from pydantic import ValidationError

from alarmbot.processors import (
    CleanProcessor,
    DedupProcessor,
    FilterProcessor,
    FilterSpec,
    ProcessorPipeline,
    StartTimeProcessor,
)
from alarmbot.schemas import Candidate
from alarmbot.utils.cache import ExpiringCache
from conftest import START, FakeClock


@pytest.fixture
def sample_candidate():
    return Candidate(id="alerts/1", text="[AD] ALERT: fire", timestamp=START + timedelta(minutes=1))


def test_filter_spec_strips_and_matches():
    spec = FilterSpec.build("ALERT", 150, ["[AD] "])

    assert spec.matches("[AD] ALERT: fire")
    assert not spec.matches("all quiet")
    assert spec.clean("[AD] ALERT: fire") == "ALERT: fire"


def test_clean_removes_every_occurrence_in_order():
    spec = FilterSpec.build(".", 150, ["#alert", "!"])
    assert spec.clean(" #alert fire! #alert ") == "fire"


def test_length_counts_characters_not_bytes():
    spec = FilterSpec.build("т", 150)

    text_149 = "т" * 149  # 298 bytes in UTF-8
    text_150 = "т" * 150

    assert len(text_149.encode()) > 150
    assert spec.matches(text_149)
    assert not spec.matches(text_150)


@pytest.mark.asyncio
async def test_start_time_processor(sample_candidate):
    processor = StartTimeProcessor(START)

    assert await processor.process(sample_candidate) is sample_candidate

    older = sample_candidate.model_copy(update={"timestamp": START - timedelta(seconds=1)})
    assert await processor.process(older) is None

    undated = sample_candidate.model_copy(update={"timestamp": None})
    assert await processor.process(undated) is None


@pytest.mark.asyncio
async def test_dedup_processor(sample_candidate):
    clock = FakeClock(START)
    processor = DedupProcessor(ExpiringCache(timedelta(hours=24), clock=clock))

    # First pass should pass
    result1 = await processor.process(sample_candidate)
    assert result1 is not None
    assert result1.id == "alerts/1"

    # Second pass should be dropped
    clock.advance(hours=23)
    assert await processor.process(sample_candidate) is None

    # Accepted again once the window has passed
    clock.advance(hours=1, seconds=1)
    assert await processor.process(sample_candidate) is not None


@pytest.mark.asyncio
async def test_pipeline_matches_before_cleaning(sample_candidate):
    # The pattern sees the raw text, so phrases removed later still count
    spec = FilterSpec.build(r"^\[AD\]", 150, ["[AD] "])
    pipeline = ProcessorPipeline([
        StartTimeProcessor(START),
        FilterProcessor(spec),
        CleanProcessor(spec),
    ])

    result = await pipeline.run(sample_candidate)

    assert result is not None
    assert result.text == "ALERT: fire"
    assert sample_candidate.text == "[AD] ALERT: fire"


@pytest.mark.asyncio
async def test_pipeline_stops_at_first_drop(sample_candidate):
    clock = FakeClock(START)
    cache = ExpiringCache(timedelta(hours=24), clock=clock)
    spec = FilterSpec.build("nothing matches this", 150)
    pipeline = ProcessorPipeline([FilterProcessor(spec), DedupProcessor(cache)])

    assert await pipeline.run(sample_candidate) is None
    assert len(cache) == 0


def test_filter_spec_is_frozen_and_compiled_once():
    spec = FilterSpec.build("(?i)alert", 150, ["[AD] "])

    assert spec.pattern.flags & re.IGNORECASE
    assert spec.phrases_to_remove == ("[AD] ",)
    with pytest.raises(ValidationError):
        spec.max_length = 10
