"""Tests for the capability category registry."""

import sys

import pytest

from voicecommands.commands.categories import (
    CATEGORY_HELP,
    COMMAND_CATEGORIES,
    capabilities_summary,
    category_for,
    describe_capabilities,
    find_category_problems,
)
from voicecommands.commands.intent_parser import DEFAULT_PARSERS, IntentParser
from voicecommands.commands.taxonomy import COMMAND_TYPES


def test_registry_has_no_problems():
    assert find_category_problems() == []


@pytest.mark.parametrize("name,parse", DEFAULT_PARSERS)
def test_every_rule_targets_a_categorized_type(name, parse):
    rules = sys.modules[parse.__module__].RULES
    for candidate in rules:
        assert candidate.command_type in COMMAND_TYPES
        assert category_for(candidate.command_type) is not None


def test_category_for():
    assert category_for("create_task") == "tasks"
    assert category_for("undo_last") == "interaction"
    assert category_for("make_coffee") is None


def test_describe_capabilities():
    listing = describe_capabilities()
    assert [entry["category"] for entry in listing] == list(COMMAND_CATEGORIES)
    tasks = next(entry for entry in listing if entry["category"] == "tasks")
    assert tasks["description"] == "Manage your to-do list"
    assert "create_task" in tasks["commands"]
    assert tasks["examples"]


def test_capabilities_summary():
    assert capabilities_summary(4) == (
        "I can help with move around the app, search and filter lists, read and write email, "
        "manage your to-do list and more."
    )
    assert capabilities_summary().endswith(" and automations and webhooks.")


@pytest.mark.parametrize(
    "category,example",
    [(category, example) for category, (_, examples) in CATEGORY_HELP.items() for example in examples],
)
def test_help_examples_parse_into_their_category(category, example):
    intent = IntentParser().parse(example)

    assert intent is not None
    assert category_for(intent.name) == category
