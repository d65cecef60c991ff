"""Builds the effective model context from a compacted event log.

Compaction never deletes events. Readers that assemble model input use
``build_context_events`` to skip ranges covered by a compaction record and see
the compaction event in their place.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from ..types.types import Content, Event

SUMMARY_USER_PREFIX = "[Prior conversation summary]\n"
SUMMARY_ASSISTANT_ACK = "Understood, I have context from our earlier conversation."


def build_context_events(events: Sequence[Event]) -> list[Event]:
    """Return the events a model should see, oldest first.

    Events covered by any compaction range are dropped; each compaction event
    is placed where its range starts. Uncovered events keep their order.
    """
    ranges = [
        (e.actions.compaction.start_index, e.actions.compaction.end_index)
        for e in events
        if e.is_compaction
    ]

    def covered(event: Event) -> bool:
        return any(start <= event.index <= end for start, end in ranges)

    keyed: list[tuple[int, Event]] = []
    for event in events:
        if event.is_compaction:
            keyed.append((event.actions.compaction.start_index, event))
        elif not covered(event):
            keyed.append((event.index, event))
    # Stable sort keeps log order for ties
    keyed.sort(key=lambda item: item[0])
    return [event for _, event in keyed]


def build_summary_messages(summary: str) -> list[dict]:
    """Build the user/assistant summary pair that stands in for a compacted range."""
    return [
        {"role": "user", "content": SUMMARY_USER_PREFIX + summary},
        {"role": "assistant", "content": SUMMARY_ASSISTANT_ACK},
    ]


def is_summary_pair(messages: list[dict], index: int) -> bool:
    """Detect whether messages[index] and messages[index+1] form a summary pair."""
    if index + 1 >= len(messages):
        return False
    user_msg = messages[index]
    assistant_msg = messages[index + 1]
    if not user_msg or not assistant_msg:
        return False
    if user_msg.get("role") != "user" or assistant_msg.get("role") != "assistant":
        return False
    user_content = user_msg.get("content", "")
    assistant_content = assistant_msg.get("content", "")
    if not isinstance(user_content, str) or not isinstance(assistant_content, str):
        return False
    return (
        user_content.startswith(SUMMARY_USER_PREFIX) and assistant_content == SUMMARY_ASSISTANT_ACK
    )


def _content_to_message_content(content: Content | None) -> Any:
    if content is None:
        return ""
    if all(part.text is not None for part in content.parts):
        return content.text
    # Function calls/responses keep their structure
    return [json.loads(part.model_dump_json(exclude_none=True)) for part in content.parts]


def build_context_messages(events: Sequence[Event], user_author: str = "user") -> list[dict]:
    """Convert the effective context into role/content message dicts.

    Events authored by ``user_author`` become user messages, everything else
    assistant messages. Compaction events become summary pairs.
    """
    messages: list[dict] = []
    for event in build_context_events(events):
        if event.is_compaction:
            messages.extend(build_summary_messages(event.actions.compaction.compacted_content.text))
            continue
        role = "user" if event.author == user_author else "assistant"
        messages.append({"role": role, "content": _content_to_message_content(event.content)})
    return messages
