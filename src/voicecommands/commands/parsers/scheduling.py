"""Scheduled and recurring commands, routines and snoozing."""

import re

from voicecommands.commands.parsers.base import (
    RuleMatch,
    clean_phrase,
    match_rules,
    normalize_time_phrase,
    original,
    parse_number,
    phrase,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent
from voicecommands.commands.taxonomy import Command, build_command

_WEEKDAYS = r"(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday|week|weekend)"
_DEFAULT_SNOOZE_MINUTES = 10
# Recurrence units that "every" already carries in the frequency slot
_RECURRENCE_UNIT = re.compile(r"^(?:days?|weekdays?|weeks?|months?)\b\s*")


def _frequency(m: RuleMatch) -> str | None:
    if m.group("lead") != "every":
        return None
    when = m.group("when") or ""
    if re.search(r"\bmonth\b", when):
        return "monthly"
    if re.search(r"\b" + _WEEKDAYS + r"s?\b", when):
        return "weekly"
    return "daily"


def _when(m: RuleMatch) -> str | None:
    when = m.group("when")
    if when and m.group("lead") == "every":
        when = _RECURRENCE_UNIT.sub("", when) or when
    return normalize_time_phrase(when)


def _scheduled_command(m: RuleMatch) -> Command:
    """Build the deferred command from the action phrase."""
    action = clean_phrase(m.original("what")) or ""
    when = _when(m) or ""
    if m.group("verb") == "remind me to":
        return build_command("create_reminder", title=action, reminder_at=when)
    routine = re.fullmatch(r"(?:the\s+)?(.+?)\s+routine", action, re.IGNORECASE)
    if routine:
        return build_command("run_routine", routine_name=routine.group(1))
    return build_command("ask_atlas", question=action)


def _snooze_minutes(m: RuleMatch) -> int:
    spoken = m.group("amount")
    amount = 1.0 if spoken in ("a", "an") else parse_number(spoken)
    if amount is None:
        return _DEFAULT_SNOOZE_MINUTES
    unit = m.group("unit") or "minutes"
    if unit.startswith(("hour", "hr")):
        amount *= 60
    return int(amount)


RULES = (
    rule(
        r"^(?P<lead>at|on|every)\s+(?P<when>.+?)\s*,?\s+(?P<verb>remind\s+me\s+to|run|execute|do)\s+(?P<what>.+)$",
        "schedule_command",
        0.8,
        execute_at=_when,
        command=_scheduled_command,
        recurring=lambda m: m.group("lead") == "every",
        frequency=_frequency,
    ),
    rule(
        r"\b(?:show|list|what\s+are)\s+(?:me\s+)?(?:all\s+)?(?:my\s+|the\s+)?scheduled\s+(?:commands|tasks|reminders|jobs|actions)\b",
        "list_scheduled_commands",
        0.9,
    ),
    rule(
        r"^(?:cancel|delete|remove|stop)\s+(?:the\s+)?scheduled\s+(?:command|task|job|reminder|action)\s+#?(?P<id>[\w-]+)$",
        "cancel_scheduled_command",
        0.9,
        schedule_id=phrase("id"),
    ),
    rule(
        r"^(?:set|create)\s+(?:up\s+)?(?:a\s+)?(?:daily\s+)?routine\s+(?:called\s+|named\s+)?(?P<name>.+?)\s+(?:at|for)\s+(?P<time>.+)$",
        "set_daily_routine",
        0.85,
        name=original("name"),
        time=lambda m: normalize_time_phrase(m.group("time")),
    ),
    rule(
        r"^(?:set|create)\s+(?:up\s+)?(?:a\s+|my\s+)?(?P<name>[\w\s]+?)\s+routine\s+(?:at|for)\s+(?P<time>.+)$",
        "set_daily_routine",
        0.85,
        name=original("name"),
        time=lambda m: normalize_time_phrase(m.group("time")),
    ),
    rule(
        r"^(?:run|start|activate|begin|do)\s+(?:the\s+|my\s+)?(?P<name>.+?)\s+routine$",
        "run_routine",
        0.9,
        routine_name=original("name"),
    ),
    rule(
        r"^snooze(?:\s+(?:it|this|that|the\s+reminder))?(?:\s+for)?(?:\s+(?P<amount>\d+|\w+)\s*(?P<unit>minutes?|mins?|hours?|hrs?))?$",
        "snooze_reminder",
        0.9,
        duration=_snooze_minutes,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
