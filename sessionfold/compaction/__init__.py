"""Event compaction - bounded context for long-running agent conversations."""

from .compactor import (
    COMPACTION_AUTHOR,
    build_compaction_event,
    compact_if_needed,
    normalize_compaction_config,
    select_window,
)
from .context import (
    SUMMARY_ASSISTANT_ACK,
    SUMMARY_USER_PREFIX,
    build_context_events,
    build_context_messages,
    build_summary_messages,
    is_summary_pair,
)
from .summarizer import (
    DEFAULT_COMPACTION_PROMPT,
    CallableSummarizer,
    EventSummarizer,
    LlmEventSummarizer,
    format_events_for_prompt,
    run_summarizer,
    summarizer,
)
from .trigger import events_since_last_compaction, is_compaction_due, last_compaction_end
from .types import CompactionResult, EventsCompactionConfig, NormalizedCompactionConfig

__all__ = [
    "COMPACTION_AUTHOR",
    "DEFAULT_COMPACTION_PROMPT",
    "SUMMARY_ASSISTANT_ACK",
    "SUMMARY_USER_PREFIX",
    "CallableSummarizer",
    "CompactionResult",
    "EventSummarizer",
    "EventsCompactionConfig",
    "LlmEventSummarizer",
    "NormalizedCompactionConfig",
    "build_compaction_event",
    "build_context_events",
    "build_context_messages",
    "build_summary_messages",
    "compact_if_needed",
    "events_since_last_compaction",
    "format_events_for_prompt",
    "is_compaction_due",
    "is_summary_pair",
    "last_compaction_end",
    "normalize_compaction_config",
    "run_summarizer",
    "select_window",
    "summarizer",
]
