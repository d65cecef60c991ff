"""A conversation session: its event log, state, and compaction settings."""

from __future__ import annotations

import copy
import time
import uuid
from collections.abc import Callable
from typing import Any

from ..compaction.compactor import compact_if_needed, normalize_compaction_config
from ..compaction.types import CompactionResult, EventsCompactionConfig, NormalizedCompactionConfig
from ..core.event_log import EventLog
from ..llm.providers import LLMRegistry
from ..types.types import Event


class Session:
    """One conversation.

    The session owns its event log for its whole lifetime. Appends and
    compaction passes run sequentially; one turn finishes its compaction check
    before the next append.

    Usage:
        session = Session(
            app_name="assistant",
            user_id="u-1",
            compaction=EventsCompactionConfig(compaction_interval=3, overlap_size=1,
                                              summarizer=my_summarizer),
        )
        await session.append_event(Event(author="user", content=Content.from_text("hi", "user")))
    """

    def __init__(
        self,
        app_name: str,
        user_id: str,
        session_id: str | None = None,
        state: dict[str, Any] | None = None,
        events: list[Event] | None = None,
        compaction: EventsCompactionConfig | NormalizedCompactionConfig | None = None,
        registry: LLMRegistry | None = None,
        before_compaction: list[Callable] | None = None,
    ):
        """
        Args:
            app_name: Application the session belongs to
            user_id: Owner of the session
            session_id: Session identifier (generated when omitted)
            state: Initial session state
            events: Previously persisted events to restore
            compaction: Compaction settings; None disables compaction
            registry: Model registry used to build the default summarizer
            before_compaction: Hooks run before each compaction pass

        Raises:
            ValueError: If compaction is enabled but no summarizer can be resolved
        """
        self.id = session_id or str(uuid.uuid4())
        self.app_name = app_name
        self.user_id = user_id
        self.state: dict[str, Any] = dict(state or {})
        self.event_log = EventLog(events)
        if isinstance(compaction, NormalizedCompactionConfig):
            self.compaction = compaction
        else:
            self.compaction = normalize_compaction_config(compaction, registry)
        self.before_compaction = list(before_compaction or [])
        self.last_update_time = time.time()

    @property
    def events(self) -> tuple[Event, ...]:
        return self.event_log.events()

    async def append_event(
        self, event: Event | dict[str, Any], *, compact: bool = True
    ) -> Event:
        """Append an event, apply its state delta, then run a compaction check.

        Args:
            event: Event (or its dict form) to append
            compact: Run the compaction check after appending (default: True)

        Returns:
            The stored event

        Raises:
            ValidationError: If the event is malformed (nothing is appended)
            SummarizationError: If a due compaction pass fails. The appended
                event stays in the log; no compaction event is added.
        """
        stored = self.event_log.append(event)
        self.state.update(copy.deepcopy(dict(stored.actions.state_delta)))
        self.last_update_time = stored.timestamp
        if compact and not stored.is_compaction:
            await self.compact()
        return stored

    async def compact(self) -> CompactionResult:
        """Run a compaction pass if one is due."""
        result = await compact_if_needed(
            self.event_log,
            self.compaction,
            hooks=self.before_compaction,
            session=self,
        )
        if result.compacted:
            self.last_update_time = result.event.timestamp
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert session to a JSON-serializable dict."""
        return {
            "id": self.id,
            "app_name": self.app_name,
            "user_id": self.user_id,
            "state": self.state,
            "events": [event.to_dict() for event in self.event_log],
            "last_update_time": self.last_update_time,
        }

    def __repr__(self) -> str:
        return (
            f"Session(id={self.id!r}, app_name={self.app_name!r}, "
            f"user_id={self.user_id!r}, events={len(self.event_log)})"
        )
