"""Workflows, batch operations, templates and emailed summaries."""

import re

from voicecommands.commands import lexicon
from voicecommands.commands.parsers.base import (
    RuleMatch,
    clean_phrase,
    email,
    group,
    match_rules,
    normalize_time_phrase,
    original,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_ENTITY_NOUNS = {
    "tasks": "task",
    "to-dos": "task",
    "todos": "task",
    "events": "event",
    "meetings": "event",
    "contacts": "contact",
    "notes": "note",
}
_BULK_ENTITIES = r"(?P<entity>tasks|contacts|leads|deals|projects|events|notes|reminders|transactions)"
_STATUS_WORDS = {
    "done": "completed",
    "complete": "completed",
    "completed": "completed",
    "finished": "completed",
    "archived": "archived",
    "active": "active",
    "inactive": "inactive",
    "open": "open",
}
_DUE_QUALIFIERS = {"overdue": "overdue", "today's": "today", "todays": "today", "upcoming": "upcoming"}
_ITEM_SPLIT = re.compile(r"\s*(?:,|;|\band\s+|&)\s*")


def _items(m: RuleMatch) -> list[str] | None:
    value = clean_phrase(m.original("items"))
    if not value:
        return None
    items = [clean_phrase(item) for item in _ITEM_SPLIT.split(value)]
    return [item for item in items if item] or None


def _entity_type(m: RuleMatch) -> str | None:
    return _ENTITY_NOUNS.get(m.group("entity") or "")


def _bulk_filter(m: RuleMatch) -> dict[str, str]:
    qualifier = m.group("qual")
    if not qualifier:
        return {}
    if qualifier in _DUE_QUALIFIERS:
        return {"due": _DUE_QUALIFIERS[qualifier]}
    priority = lexicon.resolve_priority(qualifier)
    if priority:
        return {"priority": priority}
    return {"status": _STATUS_WORDS.get(qualifier, qualifier)}


def _bulk_entity(m: RuleMatch) -> str | None:
    value = m.group("entity")
    return value[:-1] if value else None


def _status_update(m: RuleMatch) -> dict[str, str] | None:
    status = _STATUS_WORDS.get(m.group("status") or "")
    return {"status": status} if status else None


def _field_update(m: RuleMatch) -> dict[str, str] | None:
    field = m.group("field")
    value = clean_phrase(m.original("value"))
    if not field or not value:
        return None
    if field == "priority":
        value = lexicon.resolve_priority(value.lower())
        if value is None:
            return None
    elif field in ("due date", "deadline"):
        return {"due_date": normalize_time_phrase(value)}
    return {field: value}


def _event_details(m: RuleMatch) -> dict[str, str] | None:
    when = normalize_time_phrase(m.group("when"))
    return {"start_at": when} if when else None


def _template_parameters(m: RuleMatch) -> dict[str, str] | None:
    name = clean_phrase(m.original("for"))
    return {"name": name} if name else None


def _recipient(m: RuleMatch) -> str:
    return email("to")(m) or "me"


RULES = (
    rule(
        r"^(?:run|start|trigger|execute|kick\s+off|launch)\s+(?:the\s+)?(?:(?P<name>.+?)\s+workflow|workflow\s+(?P<name2>.+))$",
        "trigger_workflow",
        0.9,
        workflow_id=lambda m: clean_phrase(m.original("name") or m.original("name2")),
    ),
    rule(
        r"^(?:stop|halt|abort|kill|cancel)\s+(?:the\s+)?(?:(?:(?P<name>.+?)\s+)?workflow(?:\s+(?P<name2>.+))?)$",
        "stop_workflow",
        0.9,
        workflow_id=lambda m: clean_phrase(m.original("name") or m.original("name2")),
    ),
    rule(
        r"\b(?:show|list|display|what\s+are)\s+(?:me\s+)?(?:all\s+)?(?:my\s+|the\s+)?(?:active\s+|running\s+)?workflows\b",
        "list_workflows",
        0.9,
    ),
    rule(
        r"^(?:create|build|make|set\s+up|design)\s+(?:a\s+|an\s+|new\s+)*workflow\s+(?:called\s+|named\s+|for\s+)?(?P<name>.+?)"
        r"(?:\s+(?:that|which|to)\s+(?P<description>.+))?$",
        "create_workflow",
        0.85,
        name=original("name"),
        description=original("description"),
    ),
    rule(
        r"^(?:create|add|make|log|set\s+up)\s+(?:these\s+|the\s+following\s+|multiple\s+|several\s+)?"
        r"(?:\d+\s+)?(?P<entity>tasks|to-dos|todos|events|meetings|contacts|notes)\s*[:\-]?\s+(?P<items>.+)$",
        "batch_create",
        0.85,
        entity_type=_entity_type,
        items=_items,
    ),
    rule(
        r"^(?:copy|add|put|move|send)\s+(?:this|that|the)?\s*task(?:\s+#?(?P<id>\d+))?\s+(?:to|onto|on)\s+(?:my\s+|the\s+)?calendar"
        r"(?:\s+(?:for|at|on)\s+(?P<when>.+))?$",
        "copy_to_calendar",
        0.9,
        task_id=group("id"),
        event_details=_event_details,
    ),
    rule(
        r"^(?:e-?mail|send)\s+(?:me\s+)?(?:a\s+|the\s+|my\s+)?(?P<kind>daily|weekly|project|financial|finance)\s+summary"
        r"(?:\s+to\s+(?P<to>\S+@\S+))?$",
        "email_summary",
        0.85,
        summary_type=lambda m: "financial" if m.group("kind") == "finance" else m.group("kind"),
        recipient_email=_recipient,
    ),
    rule(
        r"^(?:create|make|start|new|build)\s+(?:a\s+|an\s+|new\s+)*(?:(?P<what>.+?)\s+)?(?:from|using|with)\s+(?:the\s+|my\s+)?"
        r"(?P<template>.+?)\s+template(?:\s+(?:for|called|named)\s+(?P<for>.+))?$",
        "create_from_template",
        0.85,
        template_name=original("template"),
        parameters=_template_parameters,
    ),
    rule(
        r"^(?:use|apply|load)\s+(?:the\s+|my\s+)?(?P<template>.+?)\s+template(?:\s+(?:for|called|named|on)\s+(?P<for>.+))?$",
        "create_from_template",
        0.85,
        template_name=original("template"),
        parameters=_template_parameters,
    ),
    rule(
        r"^(?:mark|set|move)\s+(?:all\s+(?:of\s+)?(?:the\s+|my\s+)?|every\s+)(?:(?P<qual>[\w'-]+)\s+)?" + _BULK_ENTITIES
        + r"\s+(?:as\s+|to\s+)?(?P<status>done|complete|completed|finished|archived|active|inactive|open)$",
        "bulk_update",
        0.85,
        entity_type=_bulk_entity,
        filter=_bulk_filter,
        updates=_status_update,
    ),
    rule(
        r"^(?:set|change|update)\s+(?:the\s+)?(?P<field>priority|status|due\s+date|deadline|owner|stage|category)\s+"
        r"(?:of|for|on)\s+(?:all\s+(?:of\s+)?(?:the\s+|my\s+)?|every\s+)(?:(?P<qual>[\w'-]+)\s+)?" + _BULK_ENTITIES
        + r"\s+to\s+(?P<value>.+)$",
        "bulk_update",
        0.85,
        entity_type=_bulk_entity,
        filter=_bulk_filter,
        updates=_field_update,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
