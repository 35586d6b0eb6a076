"""Generic list filtering."""

from voicecommands.commands.parsers.base import RuleMatch, clean_phrase, group, match_rules, rule
from voicecommands.commands.parsers.types import ParsedIntent

_ENTITIES = (
    r"(?P<entity>agents|tasks|events|documents|files|contacts|transactions|emails|messages|notes|projects|leads|deals"
    r"|widgets|devices|workflows|automations)"
)


def _criteria(m: RuleMatch) -> dict[str, str] | None:
    value = clean_phrase(m.original("query"))
    return {"query": value} if value else None


RULES = (
    rule(
        r"\b(?:clear|reset|remove|drop)\s+(?:all\s+)?(?:the\s+|my\s+)?(?:active\s+)?filters?\b|^(?:show\s+everything|unfilter)$",
        "clear_filters",
        0.9,
    ),
    rule(
        r"^filter\s+(?:the\s+|my\s+)?(?P<entity>[\w-]+)\s+(?:by|for|on|to|where|with)\s+(?P<query>.+)$",
        "filter",
        0.8,
        entity=group("entity"),
        criteria=_criteria,
    ),
    rule(
        r"^(?:(?:show|display|list)\s+(?:me\s+)?only|only\s+show(?:\s+me)?)\s+(?:the\s+)?(?P<query>.+?)\s+" + _ENTITIES + r"$",
        "filter",
        0.8,
        entity=group("entity"),
        criteria=_criteria,
    ),
    rule(
        r"^(?:show|display|list)\s+(?:me\s+)?(?:all\s+)?" + _ENTITIES
        + r"\s+(?:with|where|that\s+(?:are|have)|from|tagged)\s+(?P<query>.+)$",
        "filter",
        0.75,
        entity=group("entity"),
        criteria=_criteria,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
