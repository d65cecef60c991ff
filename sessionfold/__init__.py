__version__ = "0.1.0"

from .compaction import (
    CallableSummarizer,
    CompactionResult,
    EventsCompactionConfig,
    EventSummarizer,
    LlmEventSummarizer,
    build_context_events,
    build_context_messages,
    compact_if_needed,
    is_compaction_due,
    summarizer,
)
from .core import EventLog, SummarizationError, ValidationError
from .llm import LLMProvider, LLMRegistry, LLMResponse
from .memory import SessionSummary, get_session_summaries
from .middleware import CompactionHookContext, HookAction, HookResult, hook
from .runtime import SessionStoreClient
from .sessions import InMemorySessionService, Session, TurnResult
from .types import (
    Content,
    Event,
    EventActions,
    EventCompaction,
    FunctionCall,
    FunctionResponse,
    Part,
)

__all__ = [
    # Events
    "Content",
    "Event",
    "EventActions",
    "EventCompaction",
    "EventLog",
    "FunctionCall",
    "FunctionResponse",
    "Part",
    # Sessions
    "InMemorySessionService",
    "Session",
    "SessionStoreClient",
    "TurnResult",
    # Compaction
    "CallableSummarizer",
    "CompactionResult",
    "EventSummarizer",
    "EventsCompactionConfig",
    "LlmEventSummarizer",
    "build_context_events",
    "build_context_messages",
    "compact_if_needed",
    "is_compaction_due",
    "summarizer",
    # Hooks
    "CompactionHookContext",
    "HookAction",
    "HookResult",
    "hook",
    # LLM
    "LLMProvider",
    "LLMRegistry",
    "LLMResponse",
    # Memory
    "SessionSummary",
    "get_session_summaries",
    # Errors
    "SummarizationError",
    "ValidationError",
]
