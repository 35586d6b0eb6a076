"""Chained and conditional commands whose steps are themselves utterances.

Each step is parsed with the full orchestrator, so "first check my balance then
show my tasks" becomes a ``chain_commands`` holding ``check_balance`` and
``list_tasks``. A chain or conditional whose steps do not all parse is refused.
"""

import re

from voicecommands.commands.parsers.base import (
    RuleMatch,
    clean_phrase,
    match_rules,
    original,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent
from voicecommands.commands.taxonomy import Command

_STEP_SPLIT = re.compile(r"\s*,?\s*(?:and\s+)?then\s+", re.IGNORECASE)
_WAIT = r"(?P<wait>\s*,?\s*(?:and\s+)?(?:wait\s+for|ask\s+(?:me\s+)?for|with)\s+confirmation(?:\s+between(?:\s+steps)?)?|\s+step\s+by\s+step)?"


def _parse_step(text: str | None) -> Command | None:
    text = clean_phrase(text)
    if not text:
        return None
    # Imported here: the orchestrator imports this module
    from voicecommands.commands.intent_parser import get_intent_parser

    intent = get_intent_parser().parse(text)
    return intent.command if intent is not None else None


def _steps(m: RuleMatch) -> list[Command] | None:
    value = m.original("steps")
    if not value:
        return None
    commands = []
    for part in _STEP_SPLIT.split(value):
        command = _parse_step(part)
        if command is None:
            return None
        commands.append(command)
    return commands if len(commands) >= 2 else None


def _step(key: str):
    return lambda m: _parse_step(m.original(key))


RULES = (
    rule(
        r"^(?:first|start\s+by|begin\s+by)\s*,?\s+(?P<steps>.+?\bthen\b.+?)" + _WAIT + r"$",
        "chain_commands",
        0.85,
        commands=_steps,
        wait_for_confirmation=lambda m: True if m.group("wait") else None,
    ),
    rule(
        r"^if\s+(?P<condition>.+?)\s*,?\s+then\s+(?P<then>.+?)(?:\s*[,;]?\s+(?:otherwise|else|if\s+not)\s*,?\s+(?P<else>.+))?$",
        "conditional_command",
        0.85,
        condition=original("condition"),
        if_true=_step("then"),
        if_false=_step("else"),
    ),
    rule(
        r"^if\s+(?P<condition>[^,]+),\s*(?P<then>.+?)(?:\s*[,;]?\s+(?:otherwise|else|if\s+not)\s*,?\s+(?P<else>.+))?$",
        "conditional_command",
        0.8,
        condition=original("condition"),
        if_true=_step("then"),
        if_false=_step("else"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
