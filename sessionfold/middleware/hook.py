"""Hook decorator for compaction lifecycle hooks.

Hooks are callables that can intercept a compaction pass before the summarizer
runs. They either let the pass continue, override the compacted content, or
fail the pass.

Hooks have a specific signature: (session: Session, hook_context: CompactionHookContext) -> HookResult
"""

import inspect
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..types.types import Content, Event


class HookAction(str, Enum):
    """Action a hook can take after execution."""

    CONTINUE = "continue"
    OVERRIDE = "override"
    FAIL = "fail"


class CompactionHookContext(BaseModel):
    """Context available to compaction hooks.

    Describes the window about to be compacted.
    """

    session_id: str | None = None
    app_name: str | None = None
    user_id: str | None = None

    window: tuple[Event, ...] = ()
    start_index: int = 0
    end_index: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert hook context to dictionary for serialization."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Any) -> "CompactionHookContext":
        """Create CompactionHookContext from dictionary."""
        if isinstance(data, CompactionHookContext):
            return data
        if isinstance(data, dict):
            return cls.model_validate(data)
        raise TypeError(f"Cannot create CompactionHookContext from {type(data)}")


class HookResult(BaseModel):
    """Result from a hook execution.

    ``CONTINUE`` proceeds with the next hook (then the summarizer),
    ``OVERRIDE`` supplies the compacted content directly, and ``FAIL`` aborts
    the compaction pass.
    """

    model_config = ConfigDict(use_enum_values=True)

    action: HookAction = HookAction.CONTINUE

    # For OVERRIDE action
    override_content: Content | None = None

    # For FAIL action
    error_message: str | None = None

    @classmethod
    def continue_with(cls) -> "HookResult":
        """Continue with the compaction pass unchanged."""
        return cls(action=HookAction.CONTINUE)

    @classmethod
    def override(cls, content: Content | str) -> "HookResult":
        """Use the given content as the compacted content, skipping the summarizer.

        Args:
            content: Compacted content, or plain text wrapped into one text part
        """
        if isinstance(content, str):
            content = Content.from_text(content)
        return cls(action=HookAction.OVERRIDE, override_content=content)

    @classmethod
    def fail(cls, message: str) -> "HookResult":
        """Fail the compaction pass with an error message.

        Args:
            message: Error message to surface
        """
        return cls(action=HookAction.FAIL, error_message=message)

    def to_dict(self) -> dict[str, Any]:
        """Convert hook result to dictionary for serialization."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HookResult":
        """Create HookResult from dictionary."""
        return cls.model_validate(data)


def _validate_hook_signature(func: Callable) -> None:
    """Validate that hook function has correct signature.

    Expected: (session: Session, hook_context: CompactionHookContext) -> HookResult

    Raises:
        TypeError: If signature is invalid
    """
    sig = inspect.signature(func)
    params = list(sig.parameters.values())

    if len(params) != 2:
        raise TypeError(
            f"Hook function '{func.__name__}' must have exactly 2 parameters: "
            f"(session: Session, hook_context: CompactionHookContext). "
            f"Got {len(params)} parameters."
        )


def hook(func: Callable | None = None):
    """
    Decorator to mark a function as a compaction hook.

    Hook functions must have the signature:
        (session: Session, hook_context: CompactionHookContext) -> HookResult

    Usage:
        @hook
        def skip_short_windows(session, hook_context):
            if len(hook_context.window) < 2:
                return HookResult.fail("window too short")
            return HookResult.continue_with()

    Args:
        func: The function to decorate (when used as @hook)

    Returns:
        The function itself (validated)

    Raises:
        TypeError: If function signature is invalid
    """

    def decorator(f: Callable) -> Callable:
        _validate_hook_signature(f)
        return f

    # Handle @hook (without parentheses)
    if func is not None:
        return decorator(func)

    # Handle @hook()
    return decorator
