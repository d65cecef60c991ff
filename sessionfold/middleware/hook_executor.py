"""Hook execution for compaction lifecycle hooks."""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from .hook import CompactionHookContext, HookAction, HookResult

logger = logging.getLogger(__name__)


def _get_function_identifier(func: Callable, index: int) -> str:
    """Get an identifier for a hook, falling back to its index for lambdas."""
    if hasattr(func, "__name__") and func.__name__ != "<lambda>":
        return func.__name__
    return f"hook_{index}"


async def execute_hooks(
    hook_name: str,
    hooks: list[Callable],
    hook_context: CompactionHookContext,
    session: Any,
) -> HookResult:
    """
    Execute a list of hooks sequentially and return the deciding result.

    Each hook can:
    - Return CONTINUE to proceed to the next hook
    - Return OVERRIDE to stop and supply the compacted content
    - Return FAIL (or raise) to stop and abort the compaction pass

    Hooks may be plain functions or coroutine functions.

    Args:
        hook_name: Name of the lifecycle point, used in logs
        hooks: List of hook callables (functions decorated with @hook)
        hook_context: Context to pass to hooks
        session: Session the compaction pass belongs to

    Returns:
        The first OVERRIDE or FAIL result, otherwise CONTINUE
    """
    if not hooks:
        return HookResult.continue_with()

    for index, hook_func in enumerate(hooks):
        func_id = _get_function_identifier(hook_func, index)
        try:
            hook_result = hook_func(session, hook_context)
            if inspect.isawaitable(hook_result):
                hook_result = await hook_result
        except Exception as e:
            logger.exception("%s hook '%s' raised", hook_name, func_id)
            hook_result = HookResult.fail(f"Hook '{func_id}' raised {type(e).__name__}: {e}")

        if not isinstance(hook_result, HookResult):
            hook_result = HookResult.fail(
                f"Hook '{func_id}' returned invalid result type: "
                f"{type(hook_result)}. Expected HookResult."
            )

        if hook_result.action == HookAction.FAIL:
            logger.info("%s hook '%s' failed: %s", hook_name, func_id, hook_result.error_message)
            return hook_result

        if hook_result.action == HookAction.OVERRIDE:
            logger.debug("%s hook '%s' overrode compacted content", hook_name, func_id)
            return hook_result

    return HookResult.continue_with()
