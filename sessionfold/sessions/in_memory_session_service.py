"""In-memory session service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..compaction.types import CompactionResult, EventsCompactionConfig
from ..core.errors import SummarizationError
from ..llm.providers import LLMRegistry
from ..types.types import Event
from .session import Session

logger = logging.getLogger(__name__)


class TurnResult(BaseModel):
    """Outcome of appending one event through the session service.

    A failed compaction pass does not fail the turn: the event is stored and
    ``compaction_error`` says what went wrong.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    event: Event
    compaction: CompactionResult | None = None
    compaction_error: SummarizationError | None = None

    @property
    def compacted(self) -> bool:
        return self.compaction is not None and self.compaction.compacted


class InMemorySessionService:
    """Keeps sessions in process memory, keyed by app name, user id and session id.

    Sessions share no mutable state; each has its own event log.
    """

    def __init__(
        self,
        registry: LLMRegistry | None = None,
        default_compaction: EventsCompactionConfig | None = None,
        before_compaction: list[Callable] | None = None,
    ):
        """
        Args:
            registry: Model registry used to build default summarizers
            default_compaction: Compaction settings for sessions created without their own
            before_compaction: Hooks run before each compaction pass of every session
        """
        self.registry = registry
        self.default_compaction = default_compaction
        self.before_compaction = list(before_compaction or [])
        self._sessions: dict[str, dict[str, dict[str, Session]]] = {}

    def create_session(
        self,
        app_name: str,
        user_id: str,
        session_id: str | None = None,
        state: dict[str, Any] | None = None,
        compaction: EventsCompactionConfig | None = None,
    ) -> Session:
        """
        Create and register a new session.

        Raises:
            ValueError: If a session with the same id already exists, or compaction
                is enabled without a usable summarizer
        """
        user_sessions = self._sessions.setdefault(app_name, {}).setdefault(user_id, {})
        if session_id is not None and session_id in user_sessions:
            raise ValueError(f"Session {session_id} already exists")

        session = Session(
            app_name=app_name,
            user_id=user_id,
            session_id=session_id,
            state=state,
            compaction=compaction if compaction is not None else self.default_compaction,
            registry=self.registry,
            before_compaction=self.before_compaction,
        )
        user_sessions[session.id] = session
        logger.debug("Created session %s for %s/%s", session.id, app_name, user_id)
        return session

    def get_session(self, app_name: str, user_id: str, session_id: str) -> Session | None:
        """Get a session, or None if it does not exist."""
        return self._sessions.get(app_name, {}).get(user_id, {}).get(session_id)

    def list_sessions(self, app_name: str, user_id: str) -> list[Session]:
        """List a user's sessions for an app."""
        return list(self._sessions.get(app_name, {}).get(user_id, {}).values())

    def delete_session(self, app_name: str, user_id: str, session_id: str) -> bool:
        """Delete a session. Returns True if it existed."""
        user_sessions = self._sessions.get(app_name, {}).get(user_id, {})
        return user_sessions.pop(session_id, None) is not None

    async def append_event(self, session: Session, event: Event | dict[str, Any]) -> TurnResult:
        """
        Append an event to a session and run its compaction check.

        Compaction failures are logged and reported on the result; the
        conversation can continue with the next turn.

        Raises:
            ValidationError: If the event is malformed
        """
        stored = await session.append_event(event, compact=False)
        if stored.is_compaction:
            return TurnResult(event=stored)
        try:
            compaction = await session.compact()
        except SummarizationError as e:
            logger.warning("Compaction failed for session %s: %s", session.id, e)
            return TurnResult(event=stored, compaction_error=e)
        return TurnResult(event=stored, compaction=compaction)
