"""Tests for the command router and built-in interaction executors."""

import pytest

from voicecommands.commands.categories import capabilities_summary
from voicecommands.commands.router import CommandRouter, DispatchResult
from voicecommands.commands.session_context import CommandExecutionContext, InteractionMode
from voicecommands.commands.taxonomy import Command, UnknownCommandTypeError, build_command
from voicecommands.commands.verbosity import Verbosity
from voicecommands.metrics import get_metrics_collector


class TaskStore:
    """Toy executor pair recording created and removed task titles."""

    def __init__(self) -> None:
        self.titles: list[str] = []

    async def create(self, command: Command, context: CommandExecutionContext) -> DispatchResult:
        self.titles.append(command.title)
        return DispatchResult(ok=True, command_type=command.type, data={"title": command.title})

    async def remove(self, command: Command, context: CommandExecutionContext) -> DispatchResult:
        self.titles.remove(command.title)
        return DispatchResult(ok=True, command_type=command.type)


@pytest.fixture
def router() -> CommandRouter:
    return CommandRouter()


@pytest.fixture
def tasks() -> TaskStore:
    return TaskStore()


async def _run(router: CommandRouter, context: CommandExecutionContext, command: Command) -> DispatchResult:
    """Record and dispatch a command the way the API does."""
    context.history.append(command)
    return await router.dispatch(command, context)


class TestRegistration:
    def test_builtins_are_registered(self, router) -> None:
        for tag in ("undo_last", "redo_last", "set_interaction_mode", "set_verbosity", "list_commands"):
            assert router.has_handler(tag)
        assert not router.has_handler("create_task")

    def test_builtins_can_be_skipped(self) -> None:
        assert not CommandRouter(register_builtins=False).has_handler("undo_last")

    def test_unknown_type_is_rejected(self, router, tasks) -> None:
        with pytest.raises(UnknownCommandTypeError):
            router.register("make_coffee", tasks.create)


class TestDispatch:
    """Test dispatching to registered executors."""

    @pytest.mark.asyncio
    async def test_dispatch_runs_executor(self, router, tasks, context) -> None:
        router.register("create_task", tasks.create)
        result = await _run(router, context, build_command("create_task", title="call mom"))

        assert result.ok is True
        assert result.data == {"title": "call mom"}
        assert tasks.titles == ["call mom"]
        assert context.history.entries[-1].executed is True

    @pytest.mark.asyncio
    async def test_missing_handler(self, router, context) -> None:
        result = await _run(router, context, build_command("check_balance"))

        assert result.ok is False
        assert result.message == "No handler registered for check_balance"
        assert context.history.entries[-1].executed is False

    @pytest.mark.asyncio
    async def test_failing_handler_is_reported(self, router, context) -> None:
        async def broken(command, context):
            raise RuntimeError("boom")

        router.register("create_task", broken)
        result = await _run(router, context, build_command("create_task", title="x"))

        assert result.to_dict() == {
            "ok": False,
            "command_type": "create_task",
            "message": "Handler for create_task failed",
            "data": {},
        }
        assert context.history.undo_target() is None

    @pytest.mark.asyncio
    async def test_submit_schedules_dispatch(self, router, tasks, context) -> None:
        router.register("create_task", tasks.create)
        command = build_command("create_task", title="later")
        context.history.append(command)

        task = router.submit(command, context)
        result = await task

        assert result.ok is True
        assert tasks.titles == ["later"]

    @pytest.mark.asyncio
    async def test_dispatch_metrics(self, router, tasks, context) -> None:
        router.register("create_task", tasks.create)
        await _run(router, context, build_command("create_task", title="a"))
        await _run(router, context, build_command("check_balance"))

        outcomes = get_metrics_collector().get_snapshot()["dispatch_outcomes"]
        assert outcomes["create_task"] == {"ok": 1}
        assert outcomes["check_balance"] == {"error": 1}


class TestUndoRedo:
    """Test undo and redo over executed history."""

    @pytest.mark.asyncio
    async def test_undo_then_redo(self, router, tasks, context) -> None:
        router.register("create_task", tasks.create, undo=tasks.remove)
        await _run(router, context, build_command("create_task", title="call mom"))

        undone = await _run(router, context, build_command("undo_last"))
        assert undone.ok is True
        assert undone.message == "Undid create task"
        assert undone.data == {"undone": {"type": "create_task", "title": "call mom"}}
        assert tasks.titles == []

        redone = await _run(router, context, build_command("redo_last"))
        assert redone.ok is True
        assert redone.message == "Redid create task"
        assert redone.data == {"redone": {"type": "create_task", "title": "call mom"}}
        assert tasks.titles == ["call mom"]

    @pytest.mark.asyncio
    async def test_undo_walks_back_through_history(self, router, tasks, context) -> None:
        router.register("create_task", tasks.create, undo=tasks.remove)
        await _run(router, context, build_command("create_task", title="a"))
        await _run(router, context, build_command("create_task", title="b"))

        await _run(router, context, build_command("undo_last"))
        await _run(router, context, build_command("undo_last"))

        assert tasks.titles == []
        result = await _run(router, context, build_command("undo_last"))
        assert result.message == "Nothing to undo"

    @pytest.mark.asyncio
    async def test_nothing_to_undo(self, router, context) -> None:
        result = await _run(router, context, build_command("undo_last"))

        assert result.ok is False
        assert result.message == "Nothing to undo"

    @pytest.mark.asyncio
    async def test_undo_without_inverse(self, router, tasks, context) -> None:
        router.register("create_task", tasks.create)
        await _run(router, context, build_command("create_task", title="a"))

        result = await _run(router, context, build_command("undo_last"))
        assert result.ok is False
        assert result.message == "create_task cannot be undone"

    @pytest.mark.asyncio
    async def test_redo_after_new_command(self, router, tasks, context) -> None:
        router.register("create_task", tasks.create, undo=tasks.remove)
        await _run(router, context, build_command("create_task", title="a"))
        await _run(router, context, build_command("undo_last"))
        await _run(router, context, build_command("create_task", title="b"))

        result = await _run(router, context, build_command("redo_last"))
        assert result.ok is False
        assert result.message == "Nothing to redo"
        assert tasks.titles == ["b"]

    @pytest.mark.asyncio
    async def test_nothing_to_redo(self, router, context) -> None:
        result = await _run(router, context, build_command("redo_last"))
        assert result.message == "Nothing to redo"

    @pytest.mark.asyncio
    async def test_parsed_but_unconfirmed_command_is_not_undone(self, router, tasks, context) -> None:
        router.register("create_task", tasks.create, undo=tasks.remove)
        await _run(router, context, build_command("create_task", title="done"))
        context.history.append(build_command("create_task", title="still pending"))

        result = await _run(router, context, build_command("undo_last"))
        assert result.data == {"undone": {"type": "create_task", "title": "done"}}


class TestInteractionControl:
    """Test the built-in session control executors."""

    @pytest.mark.asyncio
    async def test_set_mode(self, router, context) -> None:
        result = await _run(router, context, build_command("set_interaction_mode", mode="preview"))

        assert result.message == "Switched to preview mode"
        assert context.mode == InteractionMode.PREVIEW

    @pytest.mark.asyncio
    async def test_confirmation_toggle(self, router, context) -> None:
        result = await _run(router, context, build_command("enable_confirmations"))
        assert result.message == "Confirmations are on"
        assert context.requires_confirmation is True

        result = await _run(router, context, build_command("disable_confirmations"))
        assert result.message == "Confirmations are off"
        assert context.requires_confirmation is False

    @pytest.mark.asyncio
    async def test_set_verbosity(self, router, context) -> None:
        result = await _run(router, context, build_command("set_verbosity", level="minimal"))

        assert result.message == "Verbosity set to minimal"
        assert context.verbosity == Verbosity.MINIMAL

    @pytest.mark.asyncio
    async def test_list_commands(self, router, context) -> None:
        result = await _run(router, context, build_command("list_commands"))

        assert result.ok is True
        assert result.message == capabilities_summary()
        assert {entry["category"] for entry in result.data["categories"]} >= {"tasks", "finance", "interaction"}

    @pytest.mark.asyncio
    async def test_list_commands_minimal(self, router, context) -> None:
        context.verbosity = Verbosity.MINIMAL
        result = await _run(router, context, build_command("what_can_you_do"))

        assert result.message == capabilities_summary(4)

    @pytest.mark.asyncio
    async def test_interaction_commands_are_not_undone(self, router, tasks, context) -> None:
        router.register("create_task", tasks.create, undo=tasks.remove)
        await _run(router, context, build_command("create_task", title="a"))
        await _run(router, context, build_command("set_verbosity", level="detailed"))

        result = await _run(router, context, build_command("undo_last"))
        assert result.data == {"undone": {"type": "create_task", "title": "a"}}
