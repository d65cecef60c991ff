"""Shared pytest configuration and fixtures."""

from collections.abc import Sequence
from unittest.mock import AsyncMock

import pytest

from sessionfold.compaction.summarizer import EventSummarizer
from sessionfold.core.errors import SummarizationError
from sessionfold.llm.providers import LLMProvider, LLMResponse
from sessionfold.types.types import Content, Event


def make_event(text: str = "hello", author: str = "user", **kwargs) -> Event:
    """Build a plain text event."""
    role = "user" if author == "user" else "model"
    return Event(author=author, content=Content.from_text(text, role=role), **kwargs)


def make_turns(count: int) -> list[Event]:
    """Build alternating user/agent events: q0, a1, q2, a3, ..."""
    events = []
    for i in range(count):
        if i % 2 == 0:
            events.append(make_event(f"question {i}", author="user"))
        else:
            events.append(make_event(f"answer {i}", author="assistant"))
    return events


class FixedSummarizer(EventSummarizer):
    """Returns a fixed summary and records every window it sees."""

    def __init__(self, text: str = "SUMMARY"):
        self.text = text
        self.windows: list[list[Event]] = []

    async def summarize(self, events: Sequence[Event]) -> Content:
        self.windows.append(list(events))
        return Content.from_text(self.text)


class FailingSummarizer(EventSummarizer):
    """Always fails."""

    def __init__(self):
        self.calls = 0

    async def summarize(self, events: Sequence[Event]) -> Content:
        self.calls += 1
        raise SummarizationError("provider unavailable")


class FakeProvider(LLMProvider):
    """LLM provider returning canned content."""

    def __init__(self, content: str | None = "A short summary."):
        self.content = content
        self.generate_mock = AsyncMock(side_effect=self._respond)

    async def _respond(self, messages, model, **kwargs):
        return LLMResponse(content=self.content, model=model)

    async def generate(self, messages, model, temperature=None, max_tokens=None, **kwargs):
        return await self.generate_mock(
            messages, model, temperature=temperature, max_tokens=max_tokens, **kwargs
        )


@pytest.fixture
def fixed_summarizer():
    """Summarizer that always returns "SUMMARY"."""
    return FixedSummarizer()


@pytest.fixture
def failing_summarizer():
    """Summarizer that always raises SummarizationError."""
    return FailingSummarizer()


@pytest.fixture
def fake_provider():
    """Fake LLM provider."""
    return FakeProvider()
