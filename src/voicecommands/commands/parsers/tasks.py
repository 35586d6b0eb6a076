"""Task commands: create, complete, update, list, delete and assign."""

import re

from voicecommands.commands import lexicon
from voicecommands.commands.parsers.base import (
    RuleMatch,
    clean_phrase,
    match_rules,
    normalize_time_phrase,
    original,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_CREATE_VERB = r"^(?:please\s+)?(?:create|add|make|new|set\s+up)\s+(?:a\s+|an\s+|new\s+|another\s+)*"
_TASK_NOUN = r"(?:task|to-?do)\b"
_PRIORITY_PHRASE = r"(?:urgent|important|critical|asap|(?:critical|high|medium|normal|low)[\s-]priority)"
# Utterances that belong to sprints, epics, calendars or templates
_ROUTED_ELSEWHERE = (
    r"(?!.*\b(?:to\s+(?:the\s+|my\s+|this\s+)?(?:current\s+|next\s+)?(?:sprint|epic|project|calendar)"
    r"|template)\b)"
)

_DUE_CLAUSE = re.compile(r"[\s,]+(?:due|by|before)\s+(?P<due>.+)$", re.IGNORECASE)
_TRAILING_PRIORITY = re.compile(
    r"[\s,]+(?:with\s+|as\s+)?(?:(?:a|an)\s+)?" + _PRIORITY_PHRASE + r"(?:\s+priority)?$",
    re.IGNORECASE,
)
_ID_PATTERN = re.compile(r"^#?(\d+)$")
_LIST_FILTERS = (
    (re.compile(r"\b(?:overdue|late|past\s+due)\b"), "overdue"),
    (re.compile(r"\btoday(?:'?s)?\b"), "today"),
    (re.compile(r"\b(?:upcoming|this\s+week|coming\s+up)\b"), "upcoming"),
    (re.compile(r"\ball\b"), "all"),
)


def _priority(m: RuleMatch) -> str:
    explicit = m.group("prio")
    priority = lexicon.resolve_priority(explicit) if explicit else None
    if priority is None:
        found = re.search(_PRIORITY_PHRASE, m.text)
        priority = lexicon.resolve_priority(found.group(0)) if found else None
    return priority or "medium"


def _title(m: RuleMatch) -> str | None:
    title = clean_phrase(m.original("title"))
    if title is None:
        return None
    title = _TRAILING_PRIORITY.sub("", title)
    title = _DUE_CLAUSE.sub("", title)
    return clean_phrase(title)


def _due_date(m: RuleMatch) -> str | None:
    title = m.group("title") or ""
    explicit = _DUE_CLAUSE.search(_TRAILING_PRIORITY.sub("", title))
    if explicit:
        return normalize_time_phrase(explicit.group("due"))
    return lexicon.resolve_relative_time(title)


def _task_ref(kind: str, key: str = "task"):
    """Split a task reference into an id ("#42") or a title."""

    def _extract(m: RuleMatch) -> str | None:
        value = clean_phrase(m.original(key))
        if value is None:
            return None
        found = _ID_PATTERN.match(value)
        if kind == "id":
            return found.group(1) if found else None
        return None if found else value

    return _extract


def _list_filter(m: RuleMatch) -> str | None:
    for pattern, value in _LIST_FILTERS:
        if pattern.search(m.text):
            return value
    return None


_UPDATE_FIELDS = {
    "priority": "priority",
    "due date": "due_date",
    "deadline": "due_date",
    "title": "title",
    "name": "title",
    "description": "description",
    "status": "status",
}


def _updates(m: RuleMatch) -> dict[str, str] | None:
    field = _UPDATE_FIELDS.get(m.group("field") or "")
    value = clean_phrase(m.original("value"))
    if field is None or value is None:
        return None
    if field == "priority":
        value = lexicon.resolve_priority(value.lower())
        if value is None:
            return None
    elif field == "due_date":
        value = normalize_time_phrase(value)
    return {field: value}


def _rename(m: RuleMatch) -> dict[str, str] | None:
    value = clean_phrase(m.original("value"))
    return {"title": value} if value else None


RULES = (
    rule(
        r"^(?:change|update|set)\s+(?:the\s+)?(?P<field>priority|due\s+date|deadline|title|name|description|status)"
        r"\s+(?:of|for|on)\s+(?:the\s+)?task\s+(?P<task>.+?)\s+to\s+(?P<value>.+)$",
        "update_task",
        0.9,
        task_id=_task_ref("id"),
        task_title=_task_ref("title"),
        updates=_updates,
    ),
    rule(
        r"^rename\s+(?:the\s+)?task\s+(?P<task>.+?)\s+to\s+(?P<value>.+)$",
        "update_task",
        0.9,
        task_id=_task_ref("id"),
        task_title=_task_ref("title"),
        updates=_rename,
    ),
    rule(
        r"^(?:assign|give|delegate|hand)\s+(?:the\s+)?task\s+(?P<task>.+?)\s+to\s+(?:agent\s+)?(?P<agent>.+)$",
        "assign_task",
        0.85,
        task_id=_task_ref("id"),
        task_title=_task_ref("title"),
        agent_id=original("agent"),
    ),
    rule(
        r"^(?:mark|set)\s+(?!all\b)(?!.*\b(?:habit|milestone|goal|lead|transaction)\b)(?:the\s+)?(?:task\s+)?"
        r"(?P<task>.+?)\s+as\s+(?:done|complete|completed|finished)$",
        "complete_task",
        0.9,
        task_id=_task_ref("id"),
        task_title=_task_ref("title"),
    ),
    rule(
        r"^(?:complete|finish|close|check\s+off|tick\s+off)\s+(?:the\s+)?task\s+(?P<task>.+)$",
        "complete_task",
        0.9,
        task_id=_task_ref("id"),
        task_title=_task_ref("title"),
    ),
    rule(
        r"^(?:i\s+)?(?:finished|completed|am\s+done\s+with)\s+(?:the\s+)?task\s+(?P<task>.+)$",
        "complete_task",
        0.85,
        task_id=_task_ref("id"),
        task_title=_task_ref("title"),
    ),
    rule(
        r"^(?:delete|remove|drop|trash|get\s+rid\s+of)\s+(?:the\s+)?task\s+(?P<task>.+)$",
        "delete_task",
        0.9,
        task_id=_task_ref("id"),
        task_title=_task_ref("title"),
    ),
    rule(
        _CREATE_VERB + r"(?:(?P<prio>" + _PRIORITY_PHRASE + r")\s+)" + _TASK_NOUN + _ROUTED_ELSEWHERE
        + r"(?:\s*:|\s+(?:to|for|called|named|titled))?\s+(?P<title>.+)$",
        "create_task",
        0.95,
        title=_title,
        priority=_priority,
        due_date=_due_date,
    ),
    rule(
        _CREATE_VERB + _TASK_NOUN + _ROUTED_ELSEWHERE
        + r"(?:\s*:|\s+(?:to|for|called|named|titled))?\s+(?P<title>.+?)[\s,]+(?:with\s+|as\s+)?(?:(?:a|an)\s+)?"
        + r"(?P<prio>" + _PRIORITY_PHRASE + r")(?:\s+priority)?$",
        "create_task",
        0.95,
        title=_title,
        priority=_priority,
        due_date=_due_date,
    ),
    rule(
        _CREATE_VERB + _TASK_NOUN + _ROUTED_ELSEWHERE
        + r"(?:\s*:|\s+(?:to|for|called|named|titled))?\s+(?P<title>.+)$",
        "create_task",
        0.9,
        title=_title,
        priority=_priority,
        due_date=_due_date,
    ),
    rule(
        r"\b(?:show|list|display|get|see|view|read|what\s+are|what'?s\s+on)\s+(?:me\s+)?(?:all\s+)?(?:of\s+)?"
        r"(?:my\s+|the\s+)?(?:(?:today'?s|overdue|upcoming|pending|open|all)\s+)?(?:tasks|to-?dos|to-?do\s+list)\b",
        "list_tasks",
        0.9,
        filter=_list_filter,
    ),
    rule(
        r"^what\s+(?:do\s+i\s+(?:have|need)\s+to\s+do|tasks\s+do\s+i\s+have)(?:\s+(?P<when>today|this\s+week))?\??$",
        "list_tasks",
        0.85,
        filter=_list_filter,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
