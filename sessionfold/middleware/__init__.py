from .hook import CompactionHookContext, HookAction, HookResult, hook
from .hook_executor import execute_hooks

__all__ = [
    "CompactionHookContext",
    "HookAction",
    "HookResult",
    "execute_hooks",
    "hook",
]
