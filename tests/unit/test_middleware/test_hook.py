"""Unit tests for sessionfold.middleware hooks."""

import pytest
from conftest import make_turns

from sessionfold.middleware.hook import CompactionHookContext, HookAction, HookResult, hook
from sessionfold.middleware.hook_executor import execute_hooks
from sessionfold.types.types import Content


@pytest.fixture
def hook_context():
    return CompactionHookContext(
        session_id="s-1", app_name="app", user_id="u-1", window=make_turns(2), end_index=1
    )


class TestHookResult:
    """Tests for HookResult constructors."""

    def test_continue_with(self):
        assert HookResult.continue_with().action == HookAction.CONTINUE

    def test_override_wraps_text(self):
        result = HookResult.override("short")
        assert result.action == HookAction.OVERRIDE
        assert result.override_content.text == "short"

    def test_override_keeps_content(self):
        content = Content.from_text("as is")
        assert HookResult.override(content).override_content == content

    def test_fail(self):
        result = HookResult.fail("nope")
        assert result.action == HookAction.FAIL
        assert result.error_message == "nope"

    def test_round_trip_through_dict(self):
        result = HookResult.from_dict(HookResult.fail("nope").to_dict())
        assert result.action == HookAction.FAIL
        assert result.error_message == "nope"


class TestCompactionHookContext:
    """Tests for CompactionHookContext."""

    def test_from_dict_accepts_instance(self, hook_context):
        assert CompactionHookContext.from_dict(hook_context) is hook_context

    def test_from_dict_rejects_other_types(self):
        with pytest.raises(TypeError):
            CompactionHookContext.from_dict("context")

    def test_to_dict_serializes_window(self, hook_context):
        data = hook_context.to_dict()
        assert data["session_id"] == "s-1"
        assert data["window"][0]["content"]["parts"][0]["text"] == "question 0"


class TestHookDecorator:
    """Tests for the @hook decorator."""

    def test_returns_function(self):
        def ok(session, hook_context):
            return HookResult.continue_with()

        assert hook(ok) is ok
        assert hook()(ok) is ok

    def test_wrong_signature_raises(self):
        with pytest.raises(TypeError, match="exactly 2 parameters"):

            @hook
            def one_arg(session):
                return HookResult.continue_with()


class TestExecuteHooks:
    """Tests for execute_hooks function."""

    @pytest.mark.asyncio
    async def test_no_hooks_continue(self, hook_context):
        result = await execute_hooks("before_compaction", [], hook_context, None)
        assert result.action == HookAction.CONTINUE

    @pytest.mark.asyncio
    async def test_runs_hooks_in_order(self, hook_context):
        calls = []

        def first(session, ctx):
            calls.append("first")
            return HookResult.continue_with()

        async def second(session, ctx):
            calls.append("second")
            return HookResult.continue_with()

        result = await execute_hooks("before_compaction", [first, second], hook_context, None)
        assert calls == ["first", "second"]
        assert result.action == HookAction.CONTINUE

    @pytest.mark.asyncio
    async def test_fail_stops_chain(self, hook_context):
        calls = []

        def veto(session, ctx):
            calls.append("veto")
            return HookResult.fail("stop")

        def later(session, ctx):
            calls.append("later")
            return HookResult.continue_with()

        result = await execute_hooks("before_compaction", [veto, later], hook_context, None)
        assert result.action == HookAction.FAIL
        assert calls == ["veto"]

    @pytest.mark.asyncio
    async def test_override_stops_chain(self, hook_context):
        def canned(session, ctx):
            return HookResult.override("canned")

        def later(session, ctx):
            raise AssertionError("should not run")

        result = await execute_hooks("before_compaction", [canned, later], hook_context, None)
        assert result.action == HookAction.OVERRIDE
        assert result.override_content.text == "canned"

    @pytest.mark.asyncio
    async def test_invalid_return_becomes_fail(self, hook_context):
        result = await execute_hooks(
            "before_compaction", [lambda session, ctx: "yes"], hook_context, None
        )
        assert result.action == HookAction.FAIL
        assert "hook_0" in result.error_message

    @pytest.mark.asyncio
    async def test_raising_hook_becomes_fail(self, hook_context):
        def crash(session, ctx):
            raise RuntimeError("hook crashed")

        async def later(session, ctx):
            raise AssertionError("should not run")

        result = await execute_hooks("before_compaction", [crash, later], hook_context, None)
        assert result.action == HookAction.FAIL
        assert "crash" in result.error_message
        assert "RuntimeError: hook crashed" in result.error_message

    @pytest.mark.asyncio
    async def test_raising_async_hook_becomes_fail(self, hook_context):
        async def crash(session, ctx):
            raise ValueError("bad window")

        result = await execute_hooks("before_compaction", [crash], hook_context, None)
        assert result.action == HookAction.FAIL
        assert "bad window" in result.error_message

    @pytest.mark.asyncio
    async def test_hook_receives_session_and_context(self, hook_context):
        received = []

        def capture(session, ctx):
            received.append((session, ctx))
            return HookResult.continue_with()

        marker = object()
        await execute_hooks("before_compaction", [capture], hook_context, marker)
        assert received == [(marker, hook_context)]
