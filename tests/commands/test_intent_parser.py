"""Tests for the intent parser cascade."""

import logging

import pytest

from voicecommands.commands.intent_parser import DEFAULT_PARSERS, IntentParser, get_intent_parser
from voicecommands.commands.parsers import tasks
from voicecommands.metrics import get_metrics_collector


class TestScenarios:
    """End-to-end utterances through the full cascade."""

    def test_create_task_with_relative_due_date(self, parser: IntentParser) -> None:
        result = parser.parse("create a task to review the budget tomorrow")
        assert result is not None
        assert result.command.to_dict() == {
            "type": "create_task",
            "title": "review the budget tomorrow",
            "priority": "medium",
            "dueDate": "tomorrow",
        }
        assert result.confidence == 0.9

    def test_check_balance(self, parser: IntentParser) -> None:
        result = parser.parse("check my balance")
        assert result.command.to_dict() == {"type": "check_balance"}
        assert result.confidence == 0.95

    def test_capabilities(self, parser: IntentParser) -> None:
        result = parser.parse("what can you do")
        assert result.command.to_dict() == {"type": "list_commands"}
        assert result.confidence == 0.95

    def test_theme(self, parser: IntentParser) -> None:
        result = parser.parse("switch to dark mode")
        assert result.command.to_dict() == {"type": "set_theme", "theme": "dark"}
        assert result.confidence == 0.95

    def test_gibberish_matches_nothing(self, parser: IntentParser) -> None:
        assert parser.parse("asdkjhasdkjh") is None

    def test_sector_filter_beats_navigation(self, parser: IntentParser) -> None:
        result = parser.parse("show me financial agents")
        assert result.command.to_dict() == {"type": "filter_agents", "sector": "FINANCE"}
        assert result.confidence == 0.9


class TestOrdering:
    """Earlier parsers win over later ones."""

    def test_parser_order(self, parser: IntentParser) -> None:
        assert parser.parser_names == (
            "help",
            "interaction",
            "sequences",
            "tasks",
            "calendar",
            "finance",
            "goals",
            "notes",
            "agents",
            "widgets",
            "documents",
            "knowledge",
            "email",
            "data_hub",
            "theme",
            "agent_filters",
            "reports",
            "crm",
            "projects",
            "analytics",
            "iot",
            "scheduling",
            "context",
            "automation",
            "workflows",
            "dashboard",
            "navigation",
            "filters",
            "search",
            "dialogs",
            "refresh",
            "system",
            "question",
        )

    def test_task_listing_is_not_navigation(self, parser: IntentParser) -> None:
        result = parser.parse("show me my tasks")
        assert result.name == "list_tasks"

    def test_longest_route_wins(self, parser: IntentParser) -> None:
        result = parser.parse("open my personal hub")
        assert result.command.to_dict() == {"type": "navigate", "path": "/atlas?panel=personal"}

    def test_domain_search_beats_generic_search(self, parser: IntentParser) -> None:
        result = parser.parse("search for budget in documents")
        assert result.command.to_dict() == {"type": "search_documents", "query": "budget"}

    def test_calendar_question_is_not_a_general_question(self, parser: IntentParser) -> None:
        result = parser.parse("what's on my calendar today")
        assert result.command.to_dict() == {"type": "list_events", "timeframe": "today"}

    def test_dialog_request_is_not_navigation(self, parser: IntentParser) -> None:
        result = parser.parse("open the settings dialog")
        assert result.command.to_dict() == {"type": "open_dialog", "dialog": "settings"}

    def test_bare_create_opens_dialog(self, parser: IntentParser) -> None:
        result = parser.parse("create a task")
        assert result.command.to_dict() == {"type": "open_dialog", "dialog": "create_task"}

    def test_question_fallback(self, parser: IntentParser) -> None:
        result = parser.parse("What is the capital of France?")
        assert result.command.to_dict() == {"type": "ask_atlas", "question": "What is the capital of France?"}
        assert result.confidence == 0.6

    def test_bulk_update_is_not_task_completion(self, parser: IntentParser) -> None:
        result = parser.parse("mark all overdue tasks as done")
        assert result.command.to_dict() == {
            "type": "bulk_update",
            "entityType": "task",
            "filter": {"due": "overdue"},
            "updates": {"status": "completed"},
        }

    def test_chain_of_commands(self, parser: IntentParser) -> None:
        result = parser.parse("first check my balance then show my tasks")
        assert result.command.to_dict() == {
            "type": "chain_commands",
            "commands": [{"type": "check_balance"}, {"type": "list_tasks"}],
        }

    def test_cancel_meeting_is_not_cancel_current(self, parser: IntentParser) -> None:
        result = parser.parse("cancel my meeting with Bob")
        assert result.command.to_dict() == {"type": "cancel_event", "eventTitle": "meeting with Bob"}

        result = parser.parse("cancel")
        assert result.name == "cancel_current"


class TestRobustness:
    """Parsing never raises and always gives the same answer."""

    @pytest.mark.parametrize(
        "text",
        [
            None,
            "",
            "   ",
            "?",
            "!!!",
            "a" * 5000,
            "🎉🎉🎉",
            "first then",
            "if then",
            "create a task to",
            "\x00\x01\x02",
        ],
    )
    def test_never_raises(self, parser: IntentParser, text) -> None:
        parser.parse(text)

    def test_deterministic(self, parser: IntentParser) -> None:
        for text in ("create a high priority task to call mom", "turn off the kitchen lights", "refresh"):
            assert parser.parse(text) == parser.parse(text)

    def test_original_casing_is_kept(self, parser: IntentParser) -> None:
        result = parser.parse("  Create a task to call Alice  ")
        assert result.original == "Create a task to call Alice"
        assert result.command.title == "call Alice"

    def test_long_utterances_are_truncated(self) -> None:
        text = "x" * 20 + " check my balance"
        assert IntentParser(max_utterance_length=20).parse(text) is None
        assert IntentParser(max_utterance_length=2000).parse(text).name == "check_balance"

    def test_failing_parser_is_skipped(self, caplog) -> None:
        def broken(normalized: str, original: str):
            raise RuntimeError("boom")

        parser = IntentParser(parsers=(("broken", broken), ("tasks", tasks.parse)), max_utterance_length=100)

        with caplog.at_level(logging.ERROR):
            result = parser.parse("show me my tasks")

        assert result.name == "list_tasks"
        assert "Domain parser broken failed" in caplog.text

    def test_default_order_is_shared(self) -> None:
        assert get_intent_parser().parsers == DEFAULT_PARSERS


class TestParseMetrics:
    """Parse outcomes are counted."""

    def test_records_matches_and_misses(self, parser: IntentParser) -> None:
        parser.parse("refresh")
        parser.parse("refresh")
        parser.parse("asdkjhasdkjh")

        snapshot = get_metrics_collector().get_snapshot()
        assert snapshot["parse_counts"]["refresh_data"] == 2
        assert snapshot["parse_counts"]["no_match"] == 1
