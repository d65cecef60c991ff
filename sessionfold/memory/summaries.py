"""Session summaries that reuse compaction records.

Compaction events already hold summaries of their ranges, so only events
after the last compacted range need a fresh summarizer call.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import BaseModel

from ..compaction.summarizer import EventSummarizer, run_summarizer
from ..compaction.types import DEFAULT_SUMMARIZER_TIMEOUT
from ..types.types import Event

logger = logging.getLogger(__name__)


class SessionSummary(BaseModel):
    """Summary of a span of a session."""

    summary: str
    start_timestamp: float
    end_timestamp: float


async def get_session_summaries(
    events: Sequence[Event],
    fallback: EventSummarizer | None = None,
    timeout: float | None = DEFAULT_SUMMARIZER_TIMEOUT,
) -> list[SessionSummary]:
    """Summarize a session, reusing compaction records where they exist.

    1. One summary per compaction event with text content, in log order
    2. Non-compaction events with content newer than the latest compaction end
       timestamp are summarized with ``fallback`` (skipped when it is None)

    Args:
        events: Session events, oldest first
        fallback: Summarizer for events not covered by any compaction
        timeout: Seconds allowed for the fallback call (None for no limit)

    Returns:
        List of SessionSummary

    Raises:
        SummarizationError: If the fallback summarizer fails or times out
    """
    summaries: list[SessionSummary] = []
    last_end_timestamp = 0.0

    for event in events:
        if not event.is_compaction:
            continue
        record = event.actions.compaction
        text = record.compacted_content.text
        if not text:
            continue
        summaries.append(
            SessionSummary(
                summary=text,
                start_timestamp=record.start_timestamp,
                end_timestamp=record.end_timestamp,
            )
        )
        last_end_timestamp = max(last_end_timestamp, record.end_timestamp)

    remaining = [
        e
        for e in events
        if not e.is_compaction
        and e.timestamp > last_end_timestamp
        and e.content is not None
        and e.content.parts
    ]
    if remaining and fallback is not None:
        content = await run_summarizer(fallback, remaining, timeout)
        text = content.text
        if text:
            summaries.append(
                SessionSummary(
                    summary=text,
                    start_timestamp=remaining[0].timestamp,
                    end_timestamp=remaining[-1].timestamp,
                )
            )
    elif remaining:
        logger.debug("%d uncompacted events left unsummarized (no fallback)", len(remaining))

    return summaries
