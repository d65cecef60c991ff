"""Type definitions for session events, message content, and compaction records."""

import copy
import time
import uuid
from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer


def _freeze_mapping(value: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(copy.deepcopy(dict(value)))


def _thaw_mapping(value: Mapping[str, Any]) -> dict[str, Any]:
    return copy.deepcopy(dict(value))


# Read-only dict field: stored as a private copy behind a mappingproxy, dumped as a dict
FrozenDict = Annotated[
    dict[str, Any],
    AfterValidator(_freeze_mapping),
    PlainSerializer(_thaw_mapping, return_type=dict[str, Any]),
]


class FunctionCall(BaseModel):
    """A function (tool) call requested by the model."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    args: FrozenDict = Field(default_factory=dict, validate_default=True)


class FunctionResponse(BaseModel):
    """The result of a function (tool) call."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    response: FrozenDict = Field(default_factory=dict, validate_default=True)


class Part(BaseModel):
    """One part of a message: text, a function call, or a function response."""

    model_config = ConfigDict(frozen=True)

    text: str | None = None
    function_call: FunctionCall | None = None
    function_response: FunctionResponse | None = None


class Content(BaseModel):
    """Structured message content made of ordered parts."""

    model_config = ConfigDict(frozen=True)

    role: str | None = None
    parts: tuple[Part, ...] = ()

    @property
    def text(self) -> str:
        """Text parts joined by a space ("" when there are none)."""
        return " ".join(part.text for part in self.parts if part.text)

    @classmethod
    def from_text(cls, text: str, role: str | None = "model") -> "Content":
        return cls(role=role, parts=[Part(text=text)])


class EventCompaction(BaseModel):
    """Compaction record attached to a synthetic compaction event.

    The record logically replaces the events with sequence indices in
    ``[start_index, end_index]`` (inclusive). Originals stay in the log.
    """

    model_config = ConfigDict(frozen=True)

    start_index: int
    end_index: int
    start_timestamp: float
    end_timestamp: float
    compacted_content: Content
    created_at: float = Field(default_factory=time.time)


class EventActions(BaseModel):
    """Side effects carried by an event."""

    model_config = ConfigDict(frozen=True)

    compaction: EventCompaction | None = None
    state_delta: FrozenDict = Field(default_factory=dict, validate_default=True)


class Event(BaseModel):
    """One immutable step in a conversation history."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    invocation_id: str | None = None
    author: str
    content: Content | None = None
    actions: EventActions = Field(default_factory=EventActions)
    timestamp: float = Field(default_factory=time.time)
    index: int | None = None  # Assigned by EventLog.append

    @property
    def is_compaction(self) -> bool:
        return self.actions.compaction is not None

    @property
    def text(self) -> str:
        return self.content.text if self.content else ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Any) -> "Event":
        """Create an Event from a dictionary."""
        if isinstance(data, Event):
            return data
        if isinstance(data, dict):
            return cls.model_validate(data)
        raise TypeError(f"Cannot create Event from {type(data)}")
