"""Session event log and core exceptions."""

from .errors import SummarizationError, ValidationError
from .event_log import EventLog, validate_event

__all__ = [
    "EventLog",
    "SummarizationError",
    "ValidationError",
    "validate_event",
]
