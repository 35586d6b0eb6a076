"""Tests for the interaction-mode engine."""

import pytest

from voicecommands.commands.engine import (
    Disposition,
    ExecutionEngine,
    build_preview,
    clarification,
    describe,
    disposition_of,
    missing_target,
)
from voicecommands.commands.parsers.types import ParsedIntent
from voicecommands.commands.pending_actions import PendingCommand, PendingCommandManager
from voicecommands.commands.session_context import CommandExecutionContext, InteractionMode
from voicecommands.commands.taxonomy import build_command
from voicecommands.commands.verbosity import VerbosityConfig
from voicecommands.config import clear_engine_config_cache


def _intent(tag: str, confidence: float = 0.95, **fields) -> ParsedIntent:
    return ParsedIntent(command=build_command(tag, **fields), confidence=confidence, original=tag)


@pytest.fixture
def engine() -> ExecutionEngine:
    """Create an engine with its own pending command store."""
    return ExecutionEngine(PendingCommandManager())


class TestDescribe:
    """Test command descriptions used in previews and clarifications."""

    def test_headline_and_details(self) -> None:
        command = build_command("create_task", title="review the budget tomorrow", priority="medium", due_date="tomorrow")
        assert describe(command) == "Create task: review the budget tomorrow (priority medium; due date tomorrow)"

    def test_minimal_drops_details(self) -> None:
        command = build_command("create_task", title="review the budget", priority="high")
        assert describe(command, VerbosityConfig.for_level("minimal")) == "Create task: review the budget"

    def test_no_slots(self) -> None:
        assert describe(build_command("check_balance")) == "Check balance"

    def test_nested_commands(self) -> None:
        command = build_command("chain_commands", commands=[build_command("check_balance"), build_command("list_tasks")])
        assert describe(command) == "Chain commands (commands check balance, list tasks)"

    def test_whole_numbers_drop_decimal(self) -> None:
        command = build_command("add_expense", amount=50.0, category="groceries")
        assert "amount 50" in describe(command)
        assert "50.0" not in describe(command)


class TestPreview:
    def test_create_is_medium_and_reversible(self) -> None:
        preview = build_preview(build_command("create_task", title="call mom"))
        assert preview.impact == "medium"
        assert preview.reversible is True

    def test_delete_is_high_and_irreversible(self) -> None:
        preview = build_preview(build_command("delete_task", task_title="groceries"))
        assert preview.impact == "high"
        assert preview.reversible is False


class TestClarification:
    def test_missing_target(self) -> None:
        assert missing_target(build_command("delete_task")) == ("task_id", "task_title")
        assert missing_target(build_command("delete_task", task_id="4")) is None
        assert missing_target(build_command("check_balance")) is None

    def test_asks_for_missing_target(self) -> None:
        question = clarification(_intent("delete_task"))
        assert question.to_dict() == {"type": "request_clarification", "question": "Which task should I delete?"}

    def test_asks_for_confirmation_of_guess(self) -> None:
        question = clarification(_intent("create_task", confidence=0.6, title="call mom"))
        assert question.to_dict() == {
            "type": "request_clarification",
            "question": "Did you mean: Create task: call mom?",
            "options": ["yes", "no"],
        }


class TestAutonomousMode:
    """Confident commands run immediately."""

    def test_confident_command_executes(self, engine, context, parser) -> None:
        intent = parser.parse("create a task to review the budget tomorrow")
        result = engine.process(intent, context)

        assert result is intent.command
        assert disposition_of(result) == Disposition.EXECUTE

    def test_low_confidence_needs_confirmation(self, engine, context) -> None:
        result = engine.process(_intent("ask_atlas", confidence=0.6, question="what is this"), context)

        assert isinstance(result, PendingCommand)
        assert result.confidence == 0.6
        assert disposition_of(result) == Disposition.NEEDS_CONFIRMATION

    def test_every_command_is_recorded(self, engine, context) -> None:
        engine.process(_intent("check_balance"), context)
        engine.process(_intent("ask_atlas", confidence=0.6, question="why"), context)

        assert [c.type for c in context.recent_commands] == ["check_balance", "ask_atlas"]

    def test_threshold_from_environment(self, monkeypatch, context) -> None:
        monkeypatch.setenv("VOICECOMMANDS_CONFIDENCE_THRESHOLD", "0.5")
        clear_engine_config_cache()
        engine = ExecutionEngine()

        assert engine.confidence_threshold == 0.5
        assert engine.process(_intent("ask_atlas", confidence=0.6, question="why"), context).type == "ask_atlas"


class TestConfirmations:
    """Confirmation toggle in autonomous mode."""

    def test_destructive_command_waits(self, engine, context) -> None:
        context.requires_confirmation = True
        result = engine.process(_intent("delete_task", task_id="4"), context)

        assert isinstance(result, PendingCommand)
        assert result.preview.impact == "high"
        assert engine.pending_commands.get(result.token) is result

    def test_read_only_command_runs(self, engine, context) -> None:
        context.requires_confirmation = True
        result = engine.process(_intent("list_tasks"), context)

        assert result.type == "list_tasks"

    def test_interaction_commands_never_wait(self, engine, context) -> None:
        context.requires_confirmation = True
        result = engine.process(_intent("disable_confirmations"), context)

        assert result.type == "disable_confirmations"


class TestPreviewMode:
    """Every command waits for confirmation in preview mode."""

    def test_preview_wraps_command(self, engine, context, parser) -> None:
        context.mode = InteractionMode.PREVIEW
        result = engine.process(parser.parse("create a task to review the budget tomorrow"), context)

        assert isinstance(result, PendingCommand)
        assert result.preview.description == (
            "Create task: review the budget tomorrow (priority medium; due date tomorrow)"
        )
        assert result.preview.impact == "medium"
        assert result.preview.reversible is True
        assert result.session_id == "test-session"
        assert result.user_id == "test-user"

    def test_preview_follows_verbosity(self, engine, context) -> None:
        context.mode = InteractionMode.PREVIEW
        context.verbosity = "minimal"
        result = engine.process(_intent("create_task", title="call mom", priority="high"), context)

        assert result.preview.description == "Create task: call mom"

    def test_confirmed_command_is_the_parsed_one(self, engine, context) -> None:
        context.mode = InteractionMode.PREVIEW
        intent = _intent("check_balance")
        pending = engine.process(intent, context)

        assert engine.pending_commands.confirm(pending.token).command == intent.command


class TestConversationalMode:
    """Ambiguous commands become clarification questions."""

    def test_missing_target_is_asked_for(self, engine, context) -> None:
        context.mode = InteractionMode.CONVERSATIONAL
        result = engine.process(_intent("delete_task"), context)

        assert result.type == "request_clarification"
        assert result.question == "Which task should I delete?"
        assert disposition_of(result) == Disposition.NEEDS_CLARIFICATION

    def test_low_confidence_is_confirmed_by_question(self, engine, context) -> None:
        context.mode = InteractionMode.CONVERSATIONAL
        result = engine.process(_intent("create_task", confidence=0.6, title="call mom"), context)

        assert result.type == "request_clarification"
        assert result.options == ["yes", "no"]

    def test_clear_command_executes(self, engine, context) -> None:
        context.mode = InteractionMode.CONVERSATIONAL
        result = engine.process(_intent("complete_task", task_id="7"), context)

        assert result.type == "complete_task"

    def test_confirmation_toggle_still_applies(self, engine, context) -> None:
        context.mode = InteractionMode.CONVERSATIONAL
        context.requires_confirmation = True
        result = engine.process(_intent("delete_task", task_id="7"), context)

        assert isinstance(result, PendingCommand)


def test_fresh_context_uses_configured_mode(monkeypatch, engine) -> None:
    monkeypatch.setenv("VOICECOMMANDS_DEFAULT_MODE", "preview")
    clear_engine_config_cache()
    context = CommandExecutionContext.create(session_id="s1")

    assert isinstance(engine.process(_intent("check_balance"), context), PendingCommand)
