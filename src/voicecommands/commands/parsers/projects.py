"""Project management: projects, milestones, team members, sprints and epics."""

import re

from voicecommands.commands.parsers.base import (
    RuleMatch,
    clean_phrase,
    match_rules,
    normalize_time_phrase,
    original,
    phrase,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_ID_PATTERN = re.compile(r"^#?(\d+)$")
_PROJECT_FIELDS = {
    "deadline": "deadline",
    "due date": "deadline",
    "priority": "priority",
    "status": "status",
    "name": "name",
    "description": "description",
}
# Pronouns refer to the current selection, handled by context commands
_NOT_SELECTION = r"(?!(?:this|that|it)\b)"


def _project_filter(m: RuleMatch) -> str:
    text = m.text
    if re.search(r"\bactive\b", text):
        return "active"
    if re.search(r"\b(?:completed|done|finished)\b", text):
        return "completed"
    if re.search(r"\bon\s+hold\b|\bpaused\b", text):
        return "on_hold"
    return "all"


def _project_updates(m: RuleMatch) -> dict[str, str] | None:
    field = _PROJECT_FIELDS.get(m.group("field") or "")
    value = clean_phrase(m.original("value"))
    if field is None or value is None:
        return None
    if field == "deadline":
        value = normalize_time_phrase(value)
    elif field in ("priority", "status"):
        value = value.lower()
    return {field: value}


def _task_ref(kind: str):
    def _extract(m: RuleMatch) -> str | None:
        value = clean_phrase(m.original("task"))
        if value is None:
            return None
        found = _ID_PATTERN.match(value)
        if kind == "id":
            return found.group(1) if found else None
        return None if found else value

    return _extract


def _task_ids(m: RuleMatch) -> list[str] | None:
    value = m.group("tasks") or ""
    ids = [part.strip().lstrip("#") for part in re.split(r",|\band\b|&", value)]
    return [task_id for task_id in ids if task_id] or None


RULES = (
    rule(
        r"^(?:create|start|new|set\s+up)\s+(?:a\s+)?(?:new\s+)?project\s+(?:called\s+|named\s+)?(?P<name>.+?)"
        r"(?:\s+due\s+(?P<deadline>.+?))?(?:\s+with\s+(?P<prio>high|medium|low)\s+priority)?$",
        "create_project",
        0.9,
        name=original("name"),
        deadline=lambda m: normalize_time_phrase(m.group("deadline")),
        priority=phrase("prio"),
    ),
    rule(
        r"\b(?:show|list|get|view)\s+(?:me\s+)?(?:my\s+)?(?:all\s+)?(?:(?:active|completed|finished|paused)\s+)?projects\b",
        "list_projects",
        0.9,
        filter=_project_filter,
    ),
    rule(
        r"\b(?:show|get|what(?:'s|\s+is))\s+(?:me\s+)?(?:the\s+)?(?:project\s+)?timeline\s+(?:for|of)\s+"
        r"(?:the\s+)?(?:project\s+)?(?P<name>.+?)\??$",
        "get_project_timeline",
        0.85,
        project_name=original("name"),
    ),
    rule(
        r"^(?:update|change|set)\s+(?:the\s+)?(?P<field>deadline|due\s+date|priority|status|name|description)\s+"
        r"(?:of|for|on)\s+(?:the\s+)?project\s+(?P<name>.+?)\s+to\s+(?P<value>.+)$",
        "update_project",
        0.85,
        project_name=original("name"),
        updates=_project_updates,
    ),
    rule(
        r"^rename\s+(?:the\s+)?project\s+(?P<name>.+?)\s+to\s+(?P<value>.+)$",
        "update_project",
        0.85,
        project_name=original("name"),
        updates=lambda m: {"name": clean_phrase(m.original("value"))},
    ),
    rule(
        r"^(?:delete|remove|archive)\s+(?:the\s+)?project\s+(?P<name>.+)$",
        "delete_project",
        0.9,
        project_name=original("name"),
    ),
    rule(
        r"^(?:what(?:'s|\s+is)\s+(?:the\s+)?|get\s+(?:the\s+)?|show\s+(?:me\s+)?(?:the\s+)?|check\s+(?:the\s+)?)"
        r"(?:status\s+(?:of|for|on)\s+)?(?:the\s+)?project\s+(?P<name>.+?)(?:\s+status)?\??$"
        r"|^how\s+is\s+(?:the\s+)?project\s+(?P<name2>.+?)\s+(?:going|doing|progressing)\??$",
        "get_project_status",
        0.85,
        project_name=lambda m: clean_phrase(m.original("name") or m.original("name2")),
    ),
    rule(
        r"^(?:create|add|set)\s+(?:a\s+)?milestone\s+(?P<title>.+?)\s+(?:for\s+(?:the\s+)?project\s+(?P<project>.+?)\s+)?"
        r"due\s+(?P<due>.+)$",
        "create_milestone",
        0.85,
        title=original("title"),
        project_name=original("project"),
        due_date=lambda m: normalize_time_phrase(m.group("due")),
    ),
    rule(
        r"^(?:complete|finish|close)\s+(?:the\s+)?milestone\s+(?P<title>.+)$"
        r"|^mark\s+(?:the\s+)?milestone\s+(?P<title2>.+?)\s+as\s+(?:done|complete|completed|finished)$",
        "complete_milestone",
        0.9,
        title=lambda m: clean_phrase(m.original("title") or m.original("title2")),
    ),
    rule(
        r"^(?:assign|add)\s+" + _NOT_SELECTION + r"(?P<member>.+?)\s+to\s+(?:the\s+)?project\s+(?P<project>.+?)"
        r"(?:\s+as\s+(?:an?\s+|the\s+)?(?P<role>.+))?$",
        "assign_team_member",
        0.85,
        member_name=original("member"),
        project_name=original("project"),
        role=original("role"),
    ),
    rule(
        r"^(?:assign|add)\s+" + _NOT_SELECTION + r"(?P<member>.+?)\s+to\s+(?:the\s+)?(?P<project>.+?)\s+project(?:\s+team)?"
        r"(?:\s+as\s+(?:an?\s+|the\s+)?(?P<role>.+))?$",
        "assign_team_member",
        0.8,
        member_name=original("member"),
        project_name=original("project"),
        role=original("role"),
    ),
    rule(
        r"^(?:remove|take)\s+" + _NOT_SELECTION + r"(?P<member>.+?)\s+(?:from|off)\s+(?:the\s+)?project\s+(?P<project>.+)$",
        "remove_team_member",
        0.85,
        member_name=original("member"),
        project_name=original("project"),
    ),
    rule(
        r"^(?:create|start|plan)\s+(?:a\s+)?(?:new\s+)?sprint\s+(?:called\s+|named\s+)?(?P<name>.+?)\s+from\s+"
        r"(?P<start>.+?)\s+(?:to|until|through)\s+(?P<end>.+)$",
        "create_sprint",
        0.85,
        name=original("name"),
        start_date=lambda m: normalize_time_phrase(m.group("start")),
        end_date=lambda m: normalize_time_phrase(m.group("end")),
    ),
    rule(
        r"^(?:add|move|put)\s+(?:task\s+)?" + _NOT_SELECTION + r"(?P<task>.+?)\s+(?:to|into)\s+(?:the\s+)?"
        r"(?:current\s+|next\s+)?sprint(?:\s+(?P<sprint>[\w-]+))?$",
        "add_to_sprint",
        0.85,
        task_id=_task_ref("id"),
        task_title=_task_ref("title"),
        sprint_id=phrase("sprint"),
    ),
    rule(
        r"\b(?:show|get|view)\s+(?:me\s+)?(?:the\s+)?(?:sprint\s+)?burn\s*down(?:\s+(?:chart\s+)?(?:for\s+)?(?:sprint\s+)?(?P<sprint>[\w-]+))?",
        "get_sprint_burndown",
        0.9,
        sprint_id=lambda m: None if m.group("sprint") == "chart" else m.group("sprint"),
    ),
    rule(
        r"^(?:create|add|new)\s+(?:an?\s+)?(?:new\s+)?epic\s+(?:called\s+|named\s+)?(?P<title>.+?)"
        r"(?:\s+for\s+(?:the\s+)?project\s+(?P<project>.+))?$",
        "create_epic",
        0.85,
        title=original("title"),
        project_id=original("project"),
    ),
    rule(
        r"^link\s+tasks?\s+(?P<tasks>.+?)\s+to\s+(?:the\s+)?epic\s+(?P<epic>.+)$",
        "link_tasks_to_epic",
        0.85,
        task_ids=_task_ids,
        epic_id=original("epic"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
