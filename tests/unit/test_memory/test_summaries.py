"""Unit tests for sessionfold.memory.summaries module."""

import asyncio

import pytest
from conftest import FixedSummarizer, make_event

from sessionfold.compaction.summarizer import summarizer
from sessionfold.core.errors import SummarizationError
from sessionfold.core.event_log import EventLog
from sessionfold.memory.summaries import get_session_summaries
from sessionfold.types.types import Content, Event, EventActions, EventCompaction


def _compaction(start, end, start_ts, end_ts, text="summary"):
    content = Content.from_text(text)
    return Event(
        author="user",
        content=content,
        timestamp=end_ts + 0.5,
        actions=EventActions(
            compaction=EventCompaction(
                start_index=start,
                end_index=end,
                start_timestamp=start_ts,
                end_timestamp=end_ts,
                compacted_content=content,
            )
        ),
    )


class TestGetSessionSummaries:
    """Tests for get_session_summaries function."""

    @pytest.mark.asyncio
    async def test_reuses_compaction_summaries(self):
        log = EventLog([make_event(f"m{i}", timestamp=10.0 + i) for i in range(3)])
        log.append(_compaction(0, 2, 10.0, 12.0, "first part"))

        summaries = await get_session_summaries(log.events())

        assert len(summaries) == 1
        assert summaries[0].summary == "first part"
        assert summaries[0].start_timestamp == 10.0
        assert summaries[0].end_timestamp == 12.0

    @pytest.mark.asyncio
    async def test_fallback_only_sees_newer_events(self):
        fallback = FixedSummarizer("recent")
        log = EventLog([make_event(f"m{i}", timestamp=10.0 + i) for i in range(3)])
        log.append(_compaction(0, 2, 10.0, 12.0, "first part"))
        log.append(make_event("m3", timestamp=20.0))
        log.append(make_event("m4", timestamp=21.0))

        summaries = await get_session_summaries(log.events(), fallback=fallback)

        assert [s.summary for s in summaries] == ["first part", "recent"]
        assert [e.text for e in fallback.windows[0]] == ["m3", "m4"]
        assert summaries[1].start_timestamp == 20.0
        assert summaries[1].end_timestamp == 21.0

    @pytest.mark.asyncio
    async def test_without_compaction_summarizes_everything(self):
        fallback = FixedSummarizer("all")
        log = EventLog([make_event(f"m{i}", timestamp=10.0 + i) for i in range(2)])

        summaries = await get_session_summaries(log.events(), fallback=fallback)

        assert [s.summary for s in summaries] == ["all"]
        assert len(fallback.windows[0]) == 2

    @pytest.mark.asyncio
    async def test_no_fallback_skips_remaining(self):
        log = EventLog([make_event("m0", timestamp=10.0)])
        assert await get_session_summaries(log.events()) == []

    @pytest.mark.asyncio
    async def test_fallback_not_called_when_fully_compacted(self):
        fallback = FixedSummarizer()
        log = EventLog([make_event(f"m{i}", timestamp=10.0 + i) for i in range(3)])
        log.append(_compaction(0, 2, 10.0, 12.0))

        await get_session_summaries(log.events(), fallback=fallback)

        assert fallback.windows == []

    @pytest.mark.asyncio
    async def test_empty_session(self):
        assert await get_session_summaries([], fallback=FixedSummarizer()) == []

    @pytest.mark.asyncio
    async def test_fallback_exception_is_wrapped(self):
        @summarizer
        def broken(events):
            raise RuntimeError("no model")

        log = EventLog([make_event("m0", timestamp=10.0)])
        with pytest.raises(SummarizationError, match="no model") as exc_info:
            await get_session_summaries(log.events(), fallback=broken)
        assert isinstance(exc_info.value.cause, RuntimeError)

    @pytest.mark.asyncio
    async def test_fallback_timeout(self):
        @summarizer
        async def slow(events):
            await asyncio.sleep(5)
            return "too late"

        log = EventLog([make_event("m0", timestamp=10.0)])
        with pytest.raises(SummarizationError, match="timed out"):
            await get_session_summaries(log.events(), fallback=slow, timeout=0.01)
