"""Dashboard widget commands."""

import re

from voicecommands.commands.parsers.base import RuleMatch, clean_phrase, match_rules, original, rule
from voicecommands.commands.parsers.types import ParsedIntent

_ID_PATTERN = re.compile(r"^#?(\d+)$")


def _widget_ref(kind: str):
    def _extract(m: RuleMatch) -> str | None:
        value = clean_phrase(m.original("name"))
        if value is None:
            return None
        found = _ID_PATTERN.match(value)
        if kind == "id":
            return found.group(1) if found else None
        return None if found else value

    return _extract


def _rename(m: RuleMatch) -> dict[str, str] | None:
    value = clean_phrase(m.original("value"))
    return {"name": value} if value else None


def _repurpose(m: RuleMatch) -> dict[str, str] | None:
    value = clean_phrase(m.original("value"))
    return {"purpose": value} if value else None


RULES = (
    rule(
        r"^(?!.*\bdashboard$)(?:create|add|make|build|generate)\s+(?:a\s+|an\s+|new\s+)*widget\s+"
        r"(?:that\s+shows\s+|that\s+|to\s+show\s+|to\s+|for\s+|showing\s+|which\s+)?(?P<purpose>.+?)"
        r"(?:\s+(?:from|using)\s+(?P<source>.+))?$",
        "create_widget",
        0.9,
        purpose=original("purpose"),
        data_source=original("source"),
    ),
    rule(
        r"^(?:create|make|build|generate)\s+(?:a\s+|an\s+|new\s+)*(?P<purpose>.+?)\s+widget$",
        "create_widget",
        0.9,
        purpose=original("purpose"),
    ),
    rule(
        r"\b(?:show|list|what\s+are)\s+(?:me\s+)?(?:all\s+)?(?:my\s+|the\s+)?widgets\b",
        "list_widgets",
        0.9,
    ),
    rule(
        r"^(?:delete|remove|get\s+rid\s+of)\s+(?:the\s+|my\s+|this\s+)?(?:(?P<name>.+?)\s+)?widget$",
        "delete_widget",
        0.9,
        widget_id=_widget_ref("id"),
        widget_name=_widget_ref("name"),
    ),
    rule(
        r"^(?:delete|remove)\s+widget\s+(?P<name>.+)$",
        "delete_widget",
        0.9,
        widget_id=_widget_ref("id"),
        widget_name=_widget_ref("name"),
    ),
    rule(
        r"^rename\s+(?:the\s+)?(?P<name>.+?)\s+widget\s+to\s+(?P<value>.+)$",
        "update_widget",
        0.9,
        widget_id=_widget_ref("id"),
        widget_name=_widget_ref("name"),
        updates=_rename,
    ),
    rule(
        r"^(?:update|change)\s+(?:the\s+)?(?P<name>.+?)\s+widget\s+to\s+(?:show\s+)?(?P<value>.+)$",
        "update_widget",
        0.85,
        widget_id=_widget_ref("id"),
        widget_name=_widget_ref("name"),
        updates=_repurpose,
    ),
    rule(
        r"^(?:refresh|reload|update)\s+(?:the\s+|my\s+)?(?:(?P<name>.+?)\s+)?widget$",
        "refresh_widget",
        0.9,
        widget_id=_widget_ref("id"),
        widget_name=_widget_ref("name"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
