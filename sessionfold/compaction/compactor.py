"""Core event compaction logic.

Replaces a window of session events with a synthetic compaction event holding
a summary, while the original events stay in the log.

Window boundaries: once ``compaction_interval`` non-compaction events have
accumulated past the end of the previous compaction range, the window is the
last ``overlap_size`` events of that previous range followed by every new
event, up to and including the event that triggered the check. With
``compaction_interval=3`` and ``overlap_size=1``, ten appended events give
three compaction passes over turns [0-2], [2-5] and [5-8]; turn 9 waits for
the next pass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from ..core.errors import SummarizationError
from ..core.event_log import EventLog
from ..llm.providers import LLMRegistry
from ..memory.tokens import estimate_content_tokens, estimate_events_tokens
from ..middleware.hook import CompactionHookContext, HookAction
from ..middleware.hook_executor import execute_hooks
from ..types.types import Content, Event, EventActions, EventCompaction
from ..utils.tracing import traced_span
from .summarizer import LlmEventSummarizer, run_summarizer
from .trigger import events_since_last_compaction, is_compaction_due, last_compaction_end
from .types import CompactionResult, EventsCompactionConfig, NormalizedCompactionConfig

logger = logging.getLogger(__name__)

# Compaction events are injected into model context as user-side summaries
COMPACTION_AUTHOR = "user"


# -- Config -------------------------------------------------------------------


def normalize_compaction_config(
    config: EventsCompactionConfig | None,
    registry: LLMRegistry | None = None,
) -> NormalizedCompactionConfig:
    """Resolve a user-facing config into concrete values.

    When compaction is enabled without a summarizer, the default
    LlmEventSummarizer is built from ``config.model`` via the registry.

    Raises:
        ValueError: If compaction is enabled but no summarizer can be built
    """
    if config is None or not config.enabled:
        return NormalizedCompactionConfig(
            enabled=False,
            compaction_interval=0,
            overlap_size=0,
            summarizer=None,
            summarizer_timeout=config.summarizer_timeout if config else None,
        )

    summarizer = config.summarizer
    if summarizer is None:
        if not config.model:
            raise ValueError(
                "Event compaction is enabled but neither a summarizer nor a model was given"
            )
        if registry is None:
            raise ValueError(
                f"Cannot build the default summarizer for model '{config.model}' "
                "without an LLMRegistry"
            )
        summarizer = LlmEventSummarizer(
            registry.resolve(config.model),
            config.model,
            prompt=config.prompt,
            max_retries=config.max_retries,
        )
    elif config.prompt is not None:
        logger.warning("Compaction prompt is ignored when a custom summarizer is supplied")

    return NormalizedCompactionConfig(
        enabled=True,
        compaction_interval=config.compaction_interval,
        overlap_size=config.overlap_size,
        summarizer=summarizer,
        summarizer_timeout=config.summarizer_timeout,
    )


# -- Window selection ---------------------------------------------------------


def select_window(events: Sequence[Event], overlap_size: int) -> list[Event]:
    """Select the events for the next compaction pass.

    Returns the last ``overlap_size`` non-compaction events covered by the
    previous compaction, followed by all non-compaction events after it.
    """
    boundary = last_compaction_end(events)
    covered = [e for e in events if not e.is_compaction and e.index <= boundary]
    pending = [e for e in events if not e.is_compaction and e.index > boundary]
    overlap = covered[-overlap_size:] if overlap_size > 0 else []
    return overlap + pending


# -- Helpers ------------------------------------------------------------------


def build_compaction_event(window: Sequence[Event], content: Content) -> Event:
    """Build the synthetic event that stands in for a window."""
    content = content.model_copy(update={"role": COMPACTION_AUTHOR})
    first, last = window[0], window[-1]
    record = EventCompaction(
        start_index=first.index,
        end_index=last.index,
        start_timestamp=first.timestamp,
        end_timestamp=last.timestamp,
        compacted_content=content,
    )
    return Event(
        author=COMPACTION_AUTHOR,
        invocation_id=last.invocation_id,
        content=content,
        actions=EventActions(compaction=record),
    )


# -- Main function ------------------------------------------------------------


async def compact_if_needed(
    log: EventLog,
    config: NormalizedCompactionConfig | EventsCompactionConfig,
    *,
    hooks: list[Callable] | None = None,
    session: Any = None,
) -> CompactionResult:
    """Run one compaction pass over the log if one is due.

    1. Count non-compaction events since the last compaction boundary
    2. If fewer than compaction_interval -> return as-is (no-op)
    3. Otherwise:
       - Select the window (overlap + new events)
       - Run before_compaction hooks (OVERRIDE supplies content, FAIL aborts)
       - Summarize the window, bounded by summarizer_timeout
       - Append a compaction event carrying the record
    4. On failure -> raise SummarizationError; the log is untouched

    Args:
        log: Session event log
        config: Compaction configuration
        hooks: Optional before_compaction hooks
        session: Session passed to hooks (its id, app_name and user_id feed the hook context)

    Returns:
        CompactionResult describing the pass

    Raises:
        SummarizationError: If the summarizer or a hook fails
    """
    if isinstance(config, EventsCompactionConfig):
        config = normalize_compaction_config(config)

    if not config.enabled:
        return CompactionResult(compacted=False)

    events = log.events()
    pending = events_since_last_compaction(events)
    if not is_compaction_due(len(pending), config.compaction_interval):
        return CompactionResult(compacted=False)

    window = select_window(events, config.overlap_size)
    start_index, end_index = window[0].index, window[-1].index

    with traced_span(
        "compaction.run",
        attributes={
            "compaction.start_index": start_index,
            "compaction.end_index": end_index,
            "compaction.window_size": len(window),
            "compaction.overlap_size": config.overlap_size,
        },
    ):
        hook_context = CompactionHookContext(
            session_id=getattr(session, "id", None),
            app_name=getattr(session, "app_name", None),
            user_id=getattr(session, "user_id", None),
            window=tuple(window),
            start_index=start_index,
            end_index=end_index,
        )
        hook_result = await execute_hooks("before_compaction", hooks or [], hook_context, session)

        if hook_result.action == HookAction.FAIL:
            raise SummarizationError(
                f"Compaction aborted by hook: {hook_result.error_message}"
            )
        if hook_result.action == HookAction.OVERRIDE:
            content = hook_result.override_content
            if content is None or not content.parts:
                raise SummarizationError("Hook override supplied no content")
        else:
            if config.summarizer is None:
                raise SummarizationError("Compaction is enabled but no summarizer is configured")
            content = await run_summarizer(
                config.summarizer, tuple(window), config.summarizer_timeout
            )

        stored = log.append(build_compaction_event(window, content))

    window_tokens = estimate_events_tokens(window)
    summary_tokens = estimate_content_tokens(content)
    logger.info(
        "Compacted events %d-%d (%d events, ~%d tokens -> ~%d tokens)",
        start_index,
        end_index,
        len(window),
        window_tokens,
        summary_tokens,
    )
    return CompactionResult(
        compacted=True,
        event=stored,
        window_size=len(window),
        window_tokens=window_tokens,
        summary_tokens=summary_tokens,
    )
