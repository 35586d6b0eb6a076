"""Automations and webhooks: Zapier, Make and n8n integrations."""

import re

from voicecommands.commands.parsers.base import (
    RuleMatch,
    clean_phrase,
    group,
    match_rules,
    original,
    rule,
    url,
)
from voicecommands.commands.parsers.types import ParsedIntent

_URL = r"(?P<url>https?://\S+)"
_TRIGGER_PHRASES = (
    (re.compile(r"\b(?:email|mail)\s+(?:is\s+)?(?:received|arrives|comes\s+in)\b|\b(?:new|receive\s+an?|get\s+an?)\s+emails?\b"), "email_received"),
    (re.compile(r"\b(?:email|mail)\s+(?:is\s+)?sent\b|\bsend\s+an?\s+email\b"), "email_sent"),
    (re.compile(r"\b(?:contact\s+(?:is\s+)?added|new\s+contact)\b"), "contact_added"),
    (re.compile(r"\b(?:task\s+(?:is\s+)?(?:completed|done|finished)|complete\s+a\s+task)\b"), "task_completed"),
    (re.compile(r"\b(?:event\s+(?:is\s+)?created|new\s+event)\b"), "event_created"),
    (re.compile(r"\b(?:expense\s+(?:is\s+)?added|new\s+expense)\b"), "expense_added"),
    (re.compile(r"\bgoal\s+(?:is\s+)?(?:completed|reached|achieved)\b"), "goal_completed"),
    (re.compile(r"\bhabit\s+(?:is\s+)?(?:completed|done)\b"), "habit_completed"),
    (re.compile(r"\b(?:document|file)\s+(?:is\s+)?uploaded\b|\bnew\s+(?:document|file)\b"), "document_uploaded"),
)
_STEP_SPLIT = re.compile(r"\s*(?:,\s*)?(?:\band\s+then\b|\bthen\b|,)\s*")
_GENERIC_NAMES = frozenset({"the", "my", "an", "a"})


def _trigger(phrase: str | None) -> str:
    if phrase:
        for pattern, trigger in _TRIGGER_PHRASES:
            if pattern.search(phrase):
                return trigger
    return "custom"


def _trigger_from(key: str):
    return lambda m: _trigger(m.group(key))


def _optional_trigger(key: str):
    def _extract(m: RuleMatch) -> str | None:
        if not m.group(key):
            return None
        return _trigger(m.group(key))

    return _extract


def _automation_name(*keys: str):
    def _extract(m: RuleMatch) -> str | None:
        for key in keys:
            value = clean_phrase(m.original(key))
            if value and value.lower() not in _GENERIC_NAMES:
                return value
        return None

    return _extract


def _steps(m: RuleMatch) -> list[dict[str, str]]:
    value = clean_phrase(m.original("steps"))
    if not value:
        return []
    return [{"action": step} for step in _STEP_SPLIT.split(value) if step]


def _webhook_name(m: RuleMatch) -> str:
    return f"When {clean_phrase(m.original('trigger'))}"


def _timezone(m: RuleMatch) -> str | None:
    value = m.original("tz")
    return value.upper() if value and "/" not in value else value


RULES = (
    rule(
        r"^(?:trigger|call|fire|send\s+to|ping|hit)\s+(?:the\s+)?webhook\s+(?:at\s+)?" + _URL + r"$",
        "trigger_webhook",
        0.95,
        webhook_url=url("url"),
    ),
    rule(
        r"^(?:connect|link|hook\s+up)\s+(?:to\s+)?zapier(?:\s+(?:webhook|with|at|using))?\s+" + _URL
        + r"(?:\s+(?:for|on|when)\s+(?P<trigger>.+))?$",
        "connect_zapier",
        0.95,
        webhook_url=url("url"),
        trigger_type=_optional_trigger("trigger"),
    ),
    rule(
        r"^(?:connect|link|hook\s+up)\s+(?:to\s+)?make(?:\.com)?(?:\s+(?:webhook|scenario|with|at|using))?\s+" + _URL
        + r"(?:\s+(?:for|on|when)\s+(?P<trigger>.+))?$",
        "connect_make",
        0.95,
        webhook_url=url("url"),
        trigger_type=_optional_trigger("trigger"),
    ),
    rule(
        r"^(?:connect|link|hook\s+up)\s+(?:to\s+)?n8n(?:\s+(?:webhook|workflow|with|at|using))?\s+" + _URL
        + r"(?:\s+(?:for|on|when)\s+(?P<trigger>.+))?$",
        "connect_n8n",
        0.95,
        webhook_url=url("url"),
        trigger_type=_optional_trigger("trigger"),
    ),
    rule(
        r"^when\s+(?P<trigger>.+?)\s*,?\s+(?:send|post|call|trigger)\s+(?:a\s+|the\s+)?webhook\s+(?:to\s+|at\s+)?" + _URL + r"$",
        "create_automation",
        0.85,
        name=_webhook_name,
        trigger=_trigger_from("trigger"),
        webhook_url=url("url"),
        provider="custom",
    ),
    rule(
        r"^(?:create|build|make|set\s+up)\s+(?:a\s+|new\s+)*workflow\s+automation\s+(?:called\s+|named\s+)?(?P<name>.+?)"
        r"(?:\s+(?:that|to|which)\s+(?P<steps>.+))?$",
        "create_workflow_automation",
        0.85,
        name=original("name"),
        steps=_steps,
    ),
    rule(
        r"^(?:create|add|set\s+up|make)\s+(?:an?\s+|new\s+)*automation\s+(?:called\s+|named\s+)?(?P<name>.+?)"
        r"(?:\s+(?:when|whenever)\s+(?P<trigger>.+?))?(?:\s+(?:using|via|with|on)\s+(?P<provider>zapier|make|n8n))?$",
        "create_automation",
        0.85,
        name=original("name"),
        trigger=_trigger_from("trigger"),
        provider=group("provider"),
    ),
    rule(
        r"\b(?:show|list|what\s+are)\s+(?:me\s+)?(?:all\s+)?(?:my\s+|the\s+)?(?:(?P<filter>active|inactive|paused|enabled|disabled)\s+)?"
        r"(?:automations|zaps|webhooks)\b",
        "list_automations",
        0.9,
        filter=lambda m: {"paused": "inactive", "disabled": "inactive", "enabled": "active"}.get(
            m.group("filter") or "", m.group("filter") or "all"
        ),
    ),
    rule(
        r"\b(?:show|get|view)\s+(?:me\s+)?(?:the\s+)?(?:(?P<name>.+?)\s+)?automation\s+(?:history|runs|logs?)\b"
        r"|\b(?:show|get|view)\s+(?:me\s+)?(?:the\s+)?(?:history|runs|logs?)\s+(?:of|for)\s+(?:the\s+)?(?P<name2>.+?)\s+automation\b",
        "get_automation_history",
        0.9,
        automation_name=_automation_name("name", "name2"),
    ),
    rule(
        r"^(?:test|try|dry[\s-]run)\s+(?:the\s+)?(?:(?P<name>.+?)\s+automation|automation\s+(?P<name2>.+))$",
        "test_automation",
        0.9,
        automation_name=_automation_name("name", "name2"),
    ),
    rule(
        r"^(?:delete|remove)\s+(?:the\s+)?(?:(?P<name>.+?)\s+automation|automation\s+(?P<name2>.+))$",
        "delete_automation",
        0.9,
        automation_name=_automation_name("name", "name2"),
    ),
    rule(
        r"^(?:toggle|enable|disable|pause|activate|deactivate|turn\s+(?:on|off))\s+(?:the\s+)?"
        r"(?:(?P<name>.+?)\s+automation|automation\s+(?P<name2>.+))$",
        "toggle_automation",
        0.85,
        automation_name=_automation_name("name", "name2"),
    ),
    rule(
        r"^(?:schedule|run)\s+(?:the\s+)?(?P<name>.+?)\s+automation\s+(?P<schedule>(?:every|daily|weekly|hourly|monthly|at)\b.*?)"
        r"(?:\s+(?P<tz>utc|gmt|est|edt|cst|cdt|mst|mdt|pst|pdt|[a-z]+/[a-z_]+))?$",
        "set_automation_schedule",
        0.85,
        automation_name=original("name"),
        schedule=lambda m: clean_phrase(m.group("schedule")),
        timezone=_timezone,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
