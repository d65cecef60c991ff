"""Append-only, ordered event log for one conversation session."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

import pydantic

from ..types.types import Event, EventCompaction
from .errors import ValidationError


def _coerce_event(event: Event | dict[str, Any]) -> Event:
    if isinstance(event, Event):
        return event
    if isinstance(event, dict):
        try:
            return Event.model_validate(event)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Malformed event: {e}", event=event) from e
    raise ValidationError(f"Cannot append {type(event).__name__} to an event log", event=event)


def validate_event(event: Event) -> None:
    """Check that an event has an author and non-empty content.

    Raises:
        ValidationError: If the author is blank or the content has no parts
    """
    if not isinstance(event.author, str) or not event.author.strip():
        raise ValidationError("Event author is required", event=event)
    if event.content is None or not event.content.parts:
        raise ValidationError(
            f"Event from '{event.author}' has no content parts", event=event
        )


class EventLog:
    """Authoritative, append-only history of a conversation.

    Every appended event is stamped with the next sequence index. Indices are
    monotonic and never reused; events are never removed. Compaction events are
    ordinary entries identified by ``event.actions.compaction``.
    """

    def __init__(self, events: Iterable[Event | dict[str, Any]] | None = None):
        self._events: list[Event] = []
        for event in events or ():
            self.append(event)

    def append(self, event: Event | dict[str, Any]) -> Event:
        """Append an event at the end of the log.

        Args:
            event: Event (or its dict form) to append

        Returns:
            The stored event, carrying its assigned sequence index

        Raises:
            ValidationError: If the event is malformed. The log is unaffected.
        """
        event = _coerce_event(event)
        validate_event(event)
        # Rebuilt from a dump so the stored event shares no objects with the caller's
        data = event.model_dump()
        data["index"] = len(self._events)
        stamped = Event.model_validate(data)
        self._events.append(stamped)
        return stamped

    def events(self) -> tuple[Event, ...]:
        """Return the full ordered sequence as a read-only view."""
        return tuple(self._events)

    def find_compaction_events(self) -> Iterator[Event]:
        """Lazily yield the events that carry compaction records, in order."""
        return (event for event in self._events if event.is_compaction)

    def last_compaction(self) -> EventCompaction | None:
        """Return the compaction record with the furthest end index, if any."""
        last = None
        for event in self.find_compaction_events():
            record = event.actions.compaction
            if last is None or record.end_index >= last.end_index:
                last = record
        return last

    def window(self, start: int, end: int) -> tuple[Event, ...]:
        """Return events with indices in ``[start, end]`` (inclusive)."""
        start = max(0, start)
        return tuple(self._events[start : end + 1])

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(tuple(self._events))

    def __getitem__(self, index: int) -> Event:
        return self._events[index]

    def __repr__(self) -> str:
        return f"EventLog(events={len(self._events)})"
