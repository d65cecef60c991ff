"""Memory module - session summaries and token estimation."""

from .summaries import SessionSummary, get_session_summaries
from .tokens import (
    estimate_content_tokens,
    estimate_event_tokens,
    estimate_events_tokens,
    estimate_tokens,
)

__all__ = [
    "SessionSummary",
    "estimate_content_tokens",
    "estimate_event_tokens",
    "estimate_events_tokens",
    "estimate_tokens",
    "get_session_summaries",
]
