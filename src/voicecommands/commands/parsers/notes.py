"""Notes and reminders."""

import re

from voicecommands.commands.parsers.base import (
    RuleMatch,
    match_rules,
    original,
    relative_time,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_HASHTAG = re.compile(r"#(\w+)")
_WHEN_START = (
    r"(?:(?:at|on|by)\s+(?!(?:the|a|an|my|our|his|her|their)\b)"
    r"|in\s+(?=\w+\s+(?:minutes?|hours?|days?|weeks?)\b)"
    r"|(?:tomorrow|today|tonight|next|this|every)\b)"
)


def _note_title(m: RuleMatch) -> str | None:
    value = original("title")(m)
    if value is None:
        return None
    title = _HASHTAG.sub("", value).strip()
    return title or value


def _tags(m: RuleMatch) -> list[str] | None:
    tags = _HASHTAG.findall(m.original("title") or "")
    return [tag.lower() for tag in tags] or None


RULES = (
    rule(
        r"^(?:remind\s+me|set\s+(?:a\s+)?reminder|create\s+(?:a\s+)?reminder|add\s+(?:a\s+)?reminder)\s+"
        r"(?!(?:about\s+|of\s+)?(?:this|that|it)\b)(?:to\s+|about\s+|for\s+|that\s+)?"
        r"(?P<title>.+?)\s+(?P<when>" + _WHEN_START + r".*)$",
        "create_reminder",
        0.9,
        title=original("title"),
        reminder_at=relative_time("when"),
    ),
    rule(
        r"^(?:search|find|look\s+(?:up|for)|look\s+through)\s+(?:in\s+)?(?:my\s+)?notes\s+"
        r"(?:for|about|on|with|mentioning)?\s*(?P<query>.+)$",
        "search_notes",
        0.9,
        query=original("query"),
    ),
    rule(
        r"^(?:search|find)\s+(?:for\s+)?(?P<query>.+?)\s+in\s+(?:my\s+)?notes$",
        "search_notes",
        0.9,
        query=original("query"),
    ),
    rule(
        r"\b(?:show|list|view|see|open|get|read)\s+(?:me\s+)?(?:all\s+)?(?:my\s+|the\s+)?notes\b",
        "list_notes",
        0.9,
    ),
    rule(
        r"^(?:create|add|make|take|write|new|jot\s+down)\s+(?:a\s+|an\s+|new\s+|quick\s+)*note\b\s*"
        r"(?:(?:called|titled|about|that\s+says|saying|to|:)\s*)?(?P<title>.+)$",
        "create_note",
        0.9,
        title=_note_title,
        tags=_tags,
    ),
    rule(
        r"^note(?:\s+that|\s*:)\s*(?P<title>.+)$",
        "create_note",
        0.85,
        title=_note_title,
        tags=_tags,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
