"""Sessions and session services."""

from .in_memory_session_service import InMemorySessionService, TurnResult
from .session import Session

__all__ = [
    "InMemorySessionService",
    "Session",
    "TurnResult",
]
