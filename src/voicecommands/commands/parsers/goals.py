"""Goal and habit tracking commands."""

import re

from voicecommands.commands.parsers.base import (
    RuleMatch,
    match_rules,
    number,
    original,
    parse_number,
    relative_time,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_FREQUENCIES = {
    "daily": "daily",
    "every day": "daily",
    "each day": "daily",
    "weekly": "weekly",
    "every week": "weekly",
    "monthly": "monthly",
    "every month": "monthly",
}
_FREQUENCY = r"(?:daily|weekly|monthly|every\s+day|each\s+day|every\s+week|every\s+month)"


def _target_value(m: RuleMatch) -> float | None:
    title = m.group("title") or ""
    if not re.search(r"\d", title):
        return None
    return parse_number(title)


def _frequency(m: RuleMatch) -> str:
    for key in ("freq", "freq2"):
        value = m.group(key)
        if value:
            return _FREQUENCIES[re.sub(r"\s+", " ", value)]
    return "daily"


RULES = (
    rule(
        r"^(?:update|log|record|set)\s+(?:my\s+)?(?:goal\s+)?progress\s+(?:on|for|of)\s+(?:my\s+|the\s+)?"
        r"(?P<title>.+?)(?:\s+goal)?\s+(?:to|at)\s+(?P<value>\d[\d,.]*)\s*%?$",
        "update_goal_progress",
        0.9,
        goal_title=original("title"),
        value=number("value"),
    ),
    rule(
        r"^(?:update|log|add|record)\s+(?P<value>\d[\d,.]*)\s*(?:%|percent|points?|units?)?\s+"
        r"(?:progress\s+)?(?:to|on|for)\s+(?:my\s+|the\s+)?(?P<title>.+?)\s+goal$",
        "update_goal_progress",
        0.9,
        goal_title=original("title"),
        value=number("value"),
    ),
    rule(
        r"^(?:set|create|add|make|start)\s+(?:a\s+|an\s+|new\s+)*goal\s+(?:to\s+|of\s+|for\s+|called\s+|:\s*)?"
        r"(?P<title>.+?)(?:\s+by\s+(?P<date>.+))?$",
        "create_goal",
        0.9,
        title=original("title"),
        target_value=_target_value,
        target_date=relative_time("date"),
    ),
    rule(
        r"\b(?:show|list|what\s+are|view|see|review)\s+(?:me\s+)?(?:all\s+)?(?:my\s+|the\s+)?goals\b",
        "list_goals",
        0.9,
    ),
    rule(
        r"^(?:create|add|start|track|new|build)\s+(?:a\s+|new\s+)*(?:(?P<freq>daily|weekly|monthly)\s+)?habit\s+"
        r"(?:of\s+|to\s+|called\s+|:\s*)?(?P<name>.+?)(?:\s+(?P<freq2>" + _FREQUENCY + r"))?$",
        "create_habit",
        0.9,
        name=original("name"),
        frequency=_frequency,
    ),
    rule(
        r"^(?:mark|complete|check\s+off|log|done\s+with|i\s+did)\s+(?:my\s+|the\s+|today'?s\s+)?(?P<name>.+?)\s+habit"
        r"(?:\s+(?:as\s+)?(?:done|complete|completed))?(?:\s+(?:for\s+)?today)?$",
        "complete_habit",
        0.9,
        habit_name=original("name"),
    ),
    rule(
        r"^(?:what(?:'s|\s+is)|show|get|check|how\s+long\s+is)\s+(?:me\s+)?(?:my\s+|the\s+)?"
        r"(?:(?P<name>.+?)\s+)?(?:habit\s+)?streak\??$",
        "get_habit_streak",
        0.9,
        habit_name=original("name"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
