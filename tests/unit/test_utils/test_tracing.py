"""Unit tests for sessionfold.utils.tracing module."""

import os
from unittest.mock import patch

import pytest
from conftest import FailingSummarizer, FixedSummarizer, make_turns
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from sessionfold.compaction.compactor import compact_if_needed
from sessionfold.compaction.types import EventsCompactionConfig
from sessionfold.core.errors import SummarizationError
from sessionfold.core.event_log import EventLog
from sessionfold.utils.tracing import get_tracer, traced_span


@pytest.fixture
def exporter():
    """Route sessionfold spans to an in-memory exporter."""
    span_exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    with patch(
        "sessionfold.utils.tracing.get_tracer", return_value=provider.get_tracer("test")
    ):
        yield span_exporter


class TestGetTracer:
    """Tests for get_tracer function."""

    def test_disabled_returns_noop(self):
        with patch.dict(os.environ, {"SESSIONFOLD_OTEL_ENABLED": "false"}):
            assert isinstance(get_tracer(), trace.NoOpTracer)

    def test_enabled_returns_tracer(self):
        with patch.dict(os.environ, {"SESSIONFOLD_OTEL_ENABLED": "true"}):
            assert get_tracer() is not None


class TestTracedSpan:
    """Tests for traced_span context manager."""

    def test_success_sets_ok(self, exporter):
        with traced_span("work", attributes={"k": 1}):
            pass

        (span,) = exporter.get_finished_spans()
        assert span.name == "work"
        assert span.attributes["k"] == 1
        assert span.status.status_code == StatusCode.OK

    def test_error_sets_error_and_reraises(self, exporter):
        with pytest.raises(KeyError):
            with traced_span("work"):
                raise KeyError("missing")

        (span,) = exporter.get_finished_spans()
        assert span.status.status_code == StatusCode.ERROR
        assert span.events[0].name == "exception"


class TestCompactionSpans:
    """Compaction passes are traced."""

    @pytest.mark.asyncio
    async def test_pass_records_window(self, exporter):
        log = EventLog(make_turns(3))
        config = EventsCompactionConfig(compaction_interval=3, summarizer=FixedSummarizer())
        await compact_if_needed(log, config)

        (span,) = exporter.get_finished_spans()
        assert span.name == "compaction.run"
        assert span.attributes["compaction.start_index"] == 0
        assert span.attributes["compaction.end_index"] == 2
        assert span.attributes["compaction.window_size"] == 3

    @pytest.mark.asyncio
    async def test_failed_pass_marks_error(self, exporter):
        log = EventLog(make_turns(3))
        config = EventsCompactionConfig(compaction_interval=3, summarizer=FailingSummarizer())
        with pytest.raises(SummarizationError):
            await compact_if_needed(log, config)

        (span,) = exporter.get_finished_spans()
        assert span.status.status_code == StatusCode.ERROR

    @pytest.mark.asyncio
    async def test_no_span_when_not_due(self, exporter):
        log = EventLog(make_turns(1))
        config = EventsCompactionConfig(compaction_interval=3, summarizer=FixedSummarizer())
        await compact_if_needed(log, config)
        assert exporter.get_finished_spans() == ()
