"""Types for event compaction.

Compaction keeps two views of a session:
- The stored log, which only grows
- The effective context, where compaction events stand in for the ranges they cover
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..types.types import Event
from ..utils.config import get_env_float, get_env_int, get_env_str
from .summarizer import EventSummarizer

DEFAULT_SUMMARIZER_TIMEOUT = 60.0


class EventsCompactionConfig(BaseModel):
    """User-facing compaction configuration.

    Leaving ``compaction_interval`` unset (or <= 0) disables compaction.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    compaction_interval: int | None = None
    overlap_size: int = 0
    summarizer: EventSummarizer | None = None
    prompt: str | None = None
    model: str | None = None
    summarizer_timeout: float | None = DEFAULT_SUMMARIZER_TIMEOUT
    max_retries: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_window_progress(self) -> EventsCompactionConfig:
        if self.overlap_size < 0:
            raise ValueError(f"overlap_size must be >= 0, got {self.overlap_size}")
        if self.enabled and self.overlap_size >= self.compaction_interval:
            raise ValueError(
                f"overlap_size ({self.overlap_size}) must be less than "
                f"compaction_interval ({self.compaction_interval})"
            )
        if self.summarizer_timeout is not None and self.summarizer_timeout <= 0:
            raise ValueError(f"summarizer_timeout must be > 0, got {self.summarizer_timeout}")
        return self

    @property
    def enabled(self) -> bool:
        return bool(self.compaction_interval) and self.compaction_interval > 0

    @classmethod
    def from_env(cls, **overrides) -> EventsCompactionConfig:
        """Build a config from SESSIONFOLD_* environment variables.

        Explicit keyword arguments take precedence over the environment.
        """
        values = {
            "compaction_interval": get_env_int("SESSIONFOLD_COMPACTION_INTERVAL"),
            "overlap_size": get_env_int("SESSIONFOLD_COMPACTION_OVERLAP", 0),
            "model": get_env_str("SESSIONFOLD_SUMMARIZER_MODEL"),
            "summarizer_timeout": get_env_float(
                "SESSIONFOLD_SUMMARIZER_TIMEOUT", DEFAULT_SUMMARIZER_TIMEOUT
            ),
        }
        values.update(overrides)
        return cls(**values)


class NormalizedCompactionConfig(BaseModel):
    """Internal - all fields resolved to concrete values."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    enabled: bool
    compaction_interval: int
    overlap_size: int
    summarizer: EventSummarizer | None
    summarizer_timeout: float | None


class CompactionResult(BaseModel):
    """Result from compact_if_needed."""

    compacted: bool
    event: Event | None = None
    window_size: int = 0
    window_tokens: int = 0
    summary_tokens: int = 0
