"""Decides when a compaction pass is due."""

from __future__ import annotations

from collections.abc import Sequence

from ..types.types import Event


def is_compaction_due(events_since_boundary: int, compaction_interval: int | None) -> bool:
    """Return True once at least ``compaction_interval`` events have accumulated.

    An unset or non-positive interval means compaction is disabled; this never raises.
    """
    if not compaction_interval or compaction_interval <= 0:
        return False
    return events_since_boundary >= compaction_interval


def last_compaction_end(events: Sequence[Event]) -> int:
    """Sequence index where the latest compaction range ends, or -1 if there is none."""
    end = -1
    for event in events:
        if event.is_compaction:
            end = max(end, event.actions.compaction.end_index)
    return end


def events_since_last_compaction(events: Sequence[Event]) -> list[Event]:
    """Non-compaction events past the end of the latest compaction range."""
    boundary = last_compaction_end(events)
    return [e for e in events if not e.is_compaction and e.index is not None and e.index > boundary]
