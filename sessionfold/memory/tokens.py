"""Token estimation utilities for compaction reporting.

Uses a simple heuristic: ~4 characters per token.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable

from ..types.types import Content, Event


def estimate_tokens(text: str) -> int:
    """Estimate token count for a string using the ~4 chars/token heuristic."""
    return math.ceil(len(text) / 4)


def estimate_content_tokens(content: Content | None) -> int:
    """Estimate token count for message content, including function call payloads."""
    if content is None:
        return 0
    total = 0
    for part in content.parts:
        if part.text:
            total += estimate_tokens(part.text)
        elif part.function_call is not None:
            total += estimate_tokens(json.dumps(part.function_call.model_dump(mode="json")))
        elif part.function_response is not None:
            total += estimate_tokens(json.dumps(part.function_response.model_dump(mode="json")))
    return total


def estimate_event_tokens(event: Event) -> int:
    """Estimate token count for a single event."""
    return estimate_content_tokens(event.content)


def estimate_events_tokens(events: Iterable[Event]) -> int:
    """Estimate total token count for a sequence of events."""
    total = 0
    for event in events:
        total += estimate_event_tokens(event)
    return total
