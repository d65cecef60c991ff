"""Summarizer strategies that reduce a window of events to compacted content.

Every strategy implements one capability, ``summarize(events) -> Content``:

- ``LlmEventSummarizer`` renders the window into a prompt template and asks a
  language model for the summary.
- Custom strategies subclass ``EventSummarizer``, or wrap a plain function with
  the ``@summarizer`` decorator.

Summarizers never touch the event log. A summarizer shared across sessions must
be safe to call concurrently.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from ..core.errors import SummarizationError
from ..llm.generate import llm_generate
from ..llm.providers import LLMProvider
from ..types.types import Content, Event

logger = logging.getLogger(__name__)

EVENTS_PLACEHOLDER = "{events}"

DEFAULT_COMPACTION_PROMPT = (
    "You are compacting the history of a conversation between a user and an AI agent.\n"
    "\n"
    "Someone reading only your summary should be able to continue the conversation "
    "without the user repeating themselves. Capture the user's goals, the facts and "
    "constraints they shared, decisions made, results of tool calls, and anything "
    "still unresolved or in progress.\n"
    "\n"
    "Conversation:\n"
    "{events}\n"
    "\n"
    "Write a concise, factual summary. No pleasantries and no meta-commentary."
)


def format_events_for_prompt(events: Sequence[Event]) -> str:
    """Render events as ``"{author}: {text}"`` lines joined by newlines.

    Each text part becomes its own line; parts without text are skipped.
    """
    lines = []
    for event in events:
        if event.content is None:
            continue
        for part in event.content.parts:
            if part.text:
                lines.append(f"{event.author}: {part.text}")
    return "\n".join(lines)


class EventSummarizer(ABC):
    """Strategy that reduces an ordered window of events to compacted content.

    Contract:
        - ``events`` is an ordered, read-only window; implementations must not
          mutate it or the log it came from.
        - The result is a ``Content`` with at least one part. Output may vary
          between runs.
        - Failures should raise ``SummarizationError``. Any other exception is
          wrapped into one by the compactor.
    """

    @abstractmethod
    async def summarize(self, events: Sequence[Event]) -> Content:
        """Summarize a window of events."""
        pass


class LlmEventSummarizer(EventSummarizer):
    """Summarizer that asks a language model for a summary of the window."""

    def __init__(
        self,
        provider: LLMProvider,
        model: str,
        prompt: str | None = None,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        max_retries: int = 0,
        base_delay: float = 1.0,
    ):
        """
        Initialize the summarizer.

        Args:
            provider: LLM provider used for the summary call
            model: Model identifier passed to the provider
            prompt: Template with a single ``{events}`` placeholder. Defaults to
                DEFAULT_COMPACTION_PROMPT.
            temperature: Optional temperature parameter
            max_tokens: Optional cap on summary length
            max_retries: Retries on provider errors, with exponential backoff
            base_delay: Base delay in seconds between retries

        Raises:
            ValueError: If the prompt template lacks the ``{events}`` placeholder
        """
        prompt = prompt if prompt is not None else DEFAULT_COMPACTION_PROMPT
        if EVENTS_PLACEHOLDER not in prompt:
            raise ValueError(
                f"Compaction prompt must contain the {EVENTS_PLACEHOLDER} placeholder"
            )
        self.provider = provider
        self.model = model
        self.prompt = prompt
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self.base_delay = base_delay

    def build_prompt(self, events: Sequence[Event]) -> str:
        """Substitute the rendered window into the prompt template."""
        return self.prompt.replace(EVENTS_PLACEHOLDER, format_events_for_prompt(events))

    async def summarize(self, events: Sequence[Event]) -> Content:
        prompt = self.build_prompt(events)
        try:
            response = await llm_generate(
                self.provider,
                self.model,
                prompt,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                max_retries=self.max_retries,
                base_delay=self.base_delay,
            )
        except SummarizationError:
            raise
        except Exception as e:
            raise SummarizationError(
                f"Summarization with model '{self.model}' failed: {e}", cause=e
            ) from e

        text = (response.content or "").strip()
        if not text:
            raise SummarizationError(f"Model '{self.model}' returned an empty summary")
        return Content.from_text(text)

    def __repr__(self) -> str:
        return f"LlmEventSummarizer(model={self.model!r})"


class CallableSummarizer(EventSummarizer):
    """Adapts a plain function ``(events) -> str | Content`` to EventSummarizer."""

    def __init__(self, func: Callable):
        _validate_summarizer_signature(func)
        self.func = func
        self.__name__ = getattr(func, "__name__", type(self).__name__)
        self.__doc__ = func.__doc__

    async def summarize(self, events: Sequence[Event]) -> Content:
        result = self.func(events)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, Content):
            return result
        if isinstance(result, str):
            return Content.from_text(result)
        raise SummarizationError(
            f"Summarizer '{self.__name__}' returned {type(result)}, expected str or Content"
        )

    def __repr__(self) -> str:
        return f"CallableSummarizer({self.__name__})"


async def run_summarizer(
    summarizer: EventSummarizer, events: Sequence[Event], timeout: float | None = None
) -> Content:
    """Await a summarizer, bounded by ``timeout`` seconds when given.

    Raises:
        SummarizationError: On timeout, on any summarizer exception (wrapped with
            ``cause``), or when the summarizer returns no content
    """
    try:
        if timeout is None:
            content = await summarizer.summarize(events)
        else:
            content = await asyncio.wait_for(summarizer.summarize(events), timeout)
    except asyncio.TimeoutError as e:
        raise SummarizationError(
            f"Summarizer timed out after {timeout} seconds", cause=e, timeout_seconds=timeout
        ) from e
    except SummarizationError:
        raise
    except Exception as e:
        raise SummarizationError(f"Summarizer failed: {e}", cause=e) from e

    if not isinstance(content, Content) or not content.parts:
        raise SummarizationError(f"Summarizer returned no content ({content!r})")
    return content


def _validate_summarizer_signature(func: Callable) -> None:
    """Validate that a summarizer function takes exactly one parameter (the events).

    Raises:
        TypeError: If func is not callable or the signature is invalid
    """
    if not callable(func):
        raise TypeError(f"Summarizer must be callable, got {type(func)}")
    params = list(inspect.signature(func).parameters.values())
    if len(params) != 1:
        raise TypeError(
            f"Summarizer function '{getattr(func, '__name__', func)}' must have exactly "
            f"1 parameter: (events: Sequence[Event]). Got {len(params)} parameters."
        )


def summarizer(func: Callable | None = None):
    """
    Decorator to turn a function into an EventSummarizer.

    Usage:
        @summarizer
        async def bullet_summary(events):
            return "\\n".join(f"- {e.text}" for e in events)

    Args:
        func: The function to decorate (when used as @summarizer)

    Returns:
        A CallableSummarizer wrapping the function

    Raises:
        TypeError: If function signature is invalid
    """

    def decorator(f: Callable) -> CallableSummarizer:
        return CallableSummarizer(f)

    if func is not None:
        return decorator(func)

    return decorator
