"""Calendar commands: events, availability and time blocking."""

import re

from voicecommands.commands.parsers.base import (
    RuleMatch,
    clean_phrase,
    match_rules,
    original,
    relative_time,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_EVENT_NOUN = r"(?:meeting|event|call|appointment|standup|sync)\b"
_WHEN_START = (
    r"(?:(?:on|at|for)\s+(?!(?:the|a|an|my|our)\b)|(?:this|next|tomorrow|today|tonight"
    r"|monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b)"
)
_TIMEFRAMES = (
    (re.compile(r"\bnext\s+week\b"), "next_week"),
    (re.compile(r"\bthis\s+week\b"), "this_week"),
    (re.compile(r"\btomorrow\b"), "tomorrow"),
    (re.compile(r"\btoday\b|\btonight\b"), "today"),
)


def _event_title(m: RuleMatch) -> str | None:
    kind = (m.group("kind") or "event").capitalize()
    title = clean_phrase(m.original("title"))
    if title is None:
        return kind
    if m.group("conn") == "with":
        return f"{kind} with {title}"
    return title


def _attendees(m: RuleMatch) -> list[str] | None:
    if m.group("conn") != "with":
        return None
    title = clean_phrase(m.original("title"))
    if not title:
        return None
    names = [part.strip() for part in re.split(r",|\band\b", title) if part.strip()]
    return names or None


def _timeframe(m: RuleMatch) -> str | None:
    for pattern, value in _TIMEFRAMES:
        if pattern.search(m.text):
            return value
    return None


RULES = (
    rule(
        r"^(?:open|show|display|view)\s+(?:me\s+)?(?:my\s+|the\s+)?calendar$",
        "show_calendar",
        0.95,
    ),
    rule(
        r"^(?:schedule|create|add|book|set\s+up|put)\s+(?:a\s+|an\s+|new\s+)*(?:calendar\s+)?(?P<kind>"
        + _EVENT_NOUN
        + r")\s*(?:(?P<conn>called|titled|named|about|with|for|:)\s+)?(?P<title>.*?)\s*\b(?P<when>"
        + _WHEN_START
        + r".*)$",
        "create_event",
        0.9,
        title=_event_title,
        start_at=relative_time("when"),
        attendees=_attendees,
    ),
    rule(
        r"\b(?:what(?:'s|\s+is)\s+on\s+|show\s+(?:me\s+)?|list\s+|check\s+)(?:my\s+|the\s+)?(?:calendar|schedule|agenda)\b",
        "list_events",
        0.9,
        timeframe=_timeframe,
    ),
    rule(
        r"\b(?:show|list|get|what\s+are)\s+(?:me\s+)?(?:all\s+)?(?:my\s+|the\s+)?(?:upcoming\s+)?"
        r"(?:events|meetings|appointments)\b"
        r"|\bwhat\s+(?:meetings|events|appointments)\s+do\s+i\s+have\b"
        r"|\bdo\s+i\s+have\s+(?:any\s+)?(?:meetings|events|appointments)\b",
        "list_events",
        0.9,
        timeframe=_timeframe,
    ),
    rule(
        r"^(?:reschedule|move|push|shift)\s+(?:my\s+|the\s+)?(?P<title>(?:.+\s+)?"
        + _EVENT_NOUN
        + r"(?:\s+(?:with|about)\s+.+?)?)\s+to\s+(?P<when>.+)$",
        "reschedule_event",
        0.9,
        event_title=original("title"),
        new_time=relative_time("when"),
    ),
    rule(
        r"^(?:cancel|call\s+off|delete|remove)\s+(?:my\s+|the\s+|this\s+|that\s+)?"
        r"(?P<title>(?:.+\s+)?" + _EVENT_NOUN + r"(?:\s+.+)?)$",
        "cancel_event",
        0.9,
        event_title=original("title"),
    ),
    rule(
        r"^(?:am\s+i|when\s+am\s+i)\s+(?:free|available|busy)(?:\s+(?P<date>.+?))?\??$",
        "get_availability",
        0.9,
        date=relative_time("date"),
    ),
    rule(
        r"\b(?:check|show|what'?s|what\s+is|get)\s+(?:me\s+)?(?:my\s+)?availability"
        r"(?:\s+(?:for|on)\s+(?P<date>.+?))?\??$",
        "get_availability",
        0.9,
        date=relative_time("date"),
    ),
    rule(
        r"^(?:block|block\s+off|reserve|hold)\s+(?:off\s+)?(?:some\s+)?(?:time\s+)?(?:on\s+my\s+calendar\s+)?"
        r"(?:for\s+(?P<reason>.+?)\s+)?from\s+(?P<start>.+?)\s+(?:to|until|till)\s+(?P<end>.+)$",
        "block_time",
        0.9,
        start_at=relative_time("start"),
        end_at=relative_time("end"),
        reason=original("reason"),
    ),
    rule(
        r"^(?:block|block\s+off|reserve|hold)\s+(?:off\s+)?(?:some\s+)?time\s+(?:on\s+my\s+calendar\s+)?"
        r"(?:for\s+(?P<reason>.+?)\s+)?(?P<start>(?:on|at|this|next|tomorrow|today|tonight)\b.+)$",
        "block_time",
        0.85,
        start_at=relative_time("start"),
        reason=original("reason"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
