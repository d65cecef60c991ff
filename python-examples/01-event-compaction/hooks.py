"""Compaction hooks for the event compaction example."""

from sessionfold import CompactionHookContext, HookResult, hook


@hook
def log_compaction(session, hook_context: CompactionHookContext) -> HookResult:
    """Print each window before it is summarized."""
    print(
        f"  [compaction] session={hook_context.session_id} "
        f"events {hook_context.start_index}-{hook_context.end_index} "
        f"({len(hook_context.window)} events)"
    )
    return HookResult.continue_with()


@hook
def skip_tiny_windows(session, hook_context: CompactionHookContext) -> HookResult:
    """Use a canned summary when the window holds only a few words."""
    words = sum(len(event.text.split()) for event in hook_context.window)
    if words < 5:
        return HookResult.override("Small talk, nothing to remember.")
    return HookResult.continue_with()
