"""Tests for session context, command history and the in-memory context store."""

import asyncio

import pytest

from voicecommands.commands.session_context import (
    CommandExecutionContext,
    CommandHistory,
    ContextStore,
    InteractionMode,
    RedisContextStore,
    SessionLocks,
)
from voicecommands.commands.taxonomy import build_command
from voicecommands.commands.verbosity import Verbosity
from voicecommands.config import EngineConfig


def _task(title: str):
    return build_command("create_task", title=title)


class TestCommandHistory:
    """Test the bounded command log."""

    def test_append_keeps_parse_order(self) -> None:
        history = CommandHistory()
        history.append(_task("a"))
        history.append(build_command("check_balance"))

        assert [c.type for c in history.recent_commands] == ["create_task", "check_balance"]
        assert len(history) == 2

    def test_oldest_entries_are_evicted(self) -> None:
        """Test that the log never grows past its limit."""
        history = CommandHistory(limit=3)
        for title in ("a", "b", "c", "d", "e"):
            history.append(_task(title))

        assert len(history) == 3
        assert [c.title for c in history.recent_commands] == ["c", "d", "e"]

    def test_mark_executed_picks_newest_match(self) -> None:
        history = CommandHistory()
        first = history.append(_task("same"))
        second = history.append(_task("same"))

        assert history.mark_executed(_task("same")) is second
        assert history.mark_executed(_task("same")) is first
        assert history.mark_executed(_task("same")) is None

    def test_mark_executed_unknown_command(self) -> None:
        history = CommandHistory()
        history.append(_task("a"))
        assert history.mark_executed(_task("b")) is None


class TestUndoRedoTargets:
    """Test which history entries undo and redo act on."""

    def test_parsed_but_not_executed_is_not_undone(self) -> None:
        history = CommandHistory()
        history.append(_task("pending"))
        assert history.undo_target() is None

    def test_undo_skips_read_only_commands(self) -> None:
        """Test that undo targets the last executed state-changing command."""
        history = CommandHistory()
        task = history.append(_task("a"))
        history.mark_executed(task.command)
        listing = history.append(build_command("list_tasks"))
        history.mark_executed(listing.command)

        assert history.undo_target() is task

    def test_undo_skips_undone_entries(self) -> None:
        history = CommandHistory()
        first = history.append(_task("a"))
        second = history.append(_task("b"))
        history.mark_executed(first.command)
        history.mark_executed(second.command)

        second.undone = True
        assert history.undo_target() is first

    def test_irreversible_commands_are_not_undo_targets(self) -> None:
        history = CommandHistory()
        sent = history.append(build_command("send_email", to="bob@example.com"))
        history.mark_executed(sent.command)

        assert history.undo_target() is None

    def test_redo_targets_newest_undone(self) -> None:
        history = CommandHistory()
        first = history.append(_task("a"))
        second = history.append(_task("b"))
        assert history.redo_target() is None

        first.undone = True
        second.undone = True
        assert history.redo_target() is second

    def test_new_command_discards_redo(self) -> None:
        """Test that executing a state-changing command after an undo empties redo."""
        history = CommandHistory()
        first = history.append(_task("a"))
        history.mark_executed(first.command)
        first.undone = True
        assert history.redo_target() is first

        history.append(_task("b"))
        history.mark_executed(_task("b"))

        assert history.redo_target() is None
        assert first.superseded is True

    def test_read_only_command_keeps_redo(self) -> None:
        history = CommandHistory()
        first = history.append(_task("a"))
        history.mark_executed(first.command)
        first.undone = True

        history.append(build_command("list_tasks"))
        history.mark_executed(build_command("list_tasks"))

        assert history.redo_target() is first


class TestCommandExecutionContext:
    """Test context creation and serialization."""

    def test_defaults(self, context: CommandExecutionContext) -> None:
        assert context.mode == InteractionMode.AUTONOMOUS
        assert context.requires_confirmation is False
        assert context.verbosity == Verbosity.NORMAL
        assert context.current_selection is None
        assert context.session_id == "test-session"
        assert context.user_id == "test-user"
        assert context.recent_commands == []

    def test_create_uses_config(self) -> None:
        config = EngineConfig(default_mode="preview", history_limit=5)
        context = CommandExecutionContext.create(session_id="s1", config=config)

        assert context.mode == InteractionMode.PREVIEW
        assert context.history.limit == 5

    def test_json_round_trip_keeps_command_variants(self, context: CommandExecutionContext) -> None:
        """Test that history survives the JSON form used by the Redis store."""
        context.mode = InteractionMode.CONVERSATIONAL
        context.verbosity = Verbosity.DETAILED
        entry = context.history.append(build_command("create_task", title="call mom", priority="high"))
        context.history.mark_executed(entry.command)
        context.history.append(
            build_command("chain_commands", commands=[build_command("check_balance"), build_command("list_tasks")])
        )

        restored = CommandExecutionContext.model_validate_json(context.model_dump_json())

        assert restored.mode == InteractionMode.CONVERSATIONAL
        assert restored.verbosity == Verbosity.DETAILED
        assert [c.to_dict() for c in restored.recent_commands] == [c.to_dict() for c in context.recent_commands]
        assert restored.history.entries[0].executed is True
        assert restored.history.undo_target().command.title == "call mom"


class TestContextStore:
    """Test the in-memory context store."""

    def test_get_or_create_returns_same_context(self) -> None:
        store = ContextStore()
        context = store.get_or_create("s1", user_id="u1")

        assert store.get_or_create("s1") is context
        assert context.user_id == "u1"

    def test_sessions_are_isolated(self) -> None:
        store = ContextStore()
        store.get_or_create("s1").mode = InteractionMode.PREVIEW

        assert store.get_or_create("s2").mode == InteractionMode.AUTONOMOUS

    def test_clear_session(self) -> None:
        store = ContextStore()
        context = store.get_or_create("s1")
        store.clear_session("s1")

        assert store.get_or_create("s1") is not context

    def test_save_without_session_id_is_ignored(self) -> None:
        store = ContextStore()
        store.save(CommandExecutionContext())
        assert store._contexts == {}

    def test_uses_configured_defaults(self) -> None:
        store = ContextStore(EngineConfig(default_mode="conversational"))
        assert store.get_or_create("s1").mode == InteractionMode.CONVERSATIONAL


class TestRedisContextStoreFallback:
    """Test the Redis store without a Redis client."""

    def test_fallback_behaves_like_memory_store(self) -> None:
        store = RedisContextStore(redis_client=None)
        context = store.get_or_create("s1")
        context.requires_confirmation = True
        store.save(context)

        assert store.get_or_create("s1").requires_confirmation is True
        store.clear_session("s1")
        assert store.get_or_create("s1").requires_confirmation is False

    def test_ttl_defaults_to_config(self) -> None:
        store = RedisContextStore(redis_client=None, config=EngineConfig(session_ttl_seconds=90))
        assert store.default_ttl_seconds == 90


class SnapshotStore(ContextStore):
    """Stores serialized copies so every load returns a new object."""

    def __init__(self) -> None:
        super().__init__()
        self.snapshots: dict[str, str] = {}

    def get_or_create(self, session_id: str, user_id: str | None = None) -> CommandExecutionContext:
        data = self.snapshots.get(session_id)
        if data is None:
            return CommandExecutionContext.create(session_id=session_id, user_id=user_id)
        return CommandExecutionContext.model_validate_json(data)

    def save(self, context: CommandExecutionContext) -> None:
        self.snapshots[context.session_id] = context.model_dump_json()


class TestSessionLock:
    """Test load-modify-save under the per-session lock."""

    @pytest.mark.asyncio
    async def test_overlapping_requests_keep_both_entries(self) -> None:
        store = SnapshotStore()

        async def handle(title: str) -> None:
            async with store.session("s1") as context:
                entry = context.history.append(_task(title))
                await asyncio.sleep(0)
                context.history.mark_executed(entry.command)

        await asyncio.gather(handle("a"), handle("b"))

        assert [c.title for c in store.get_or_create("s1").recent_commands] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_blocks_for_one_session_do_not_interleave(self) -> None:
        store = ContextStore()
        events: list[str] = []

        async def handle(name: str, session_id: str) -> None:
            async with store.session(session_id):
                events.append(f"enter {name}")
                await asyncio.sleep(0)
                events.append(f"exit {name}")

        await asyncio.gather(handle("a", "s1"), handle("b", "s1"))
        assert events == ["enter a", "exit a", "enter b", "exit b"]

        events.clear()
        await asyncio.gather(handle("c", "s1"), handle("d", "s2"))
        assert events == ["enter c", "enter d", "exit c", "exit d"]

    def test_locks_are_per_session(self) -> None:
        locks = SessionLocks()
        first = locks.get("s1")

        assert locks.get("s1") is first
        assert locks.get("s2") is not first
