"""Executive reports, ad-hoc queries and data exports."""

from voicecommands.commands import lexicon
from voicecommands.commands.parsers.base import RuleMatch, group, match_rules, original, rule
from voicecommands.commands.parsers.types import ParsedIntent

_GENERIC_ENTITIES = frozenset({"data", "everything", "all", "it", "this"})
# Analytics exports support excel and a metric list
_NOT_ANALYTICS = r"(?!.*\b(?:analytics|metrics)\b)"


def _persona(m: RuleMatch) -> str | None:
    return lexicon.resolve_persona(m.group("persona"))


def _entity(m: RuleMatch) -> str | None:
    value = m.group("entity")
    if value is None:
        return None
    value = value.removesuffix(" data").strip()
    return None if value in _GENERIC_ENTITIES else value


RULES = (
    rule(
        r"^(?:generate|create|build|make|run|prepare|give\s+me)\s+(?:a\s+|an\s+|the\s+|my\s+)?"
        r"(?:(?P<persona>[\w\s-]+?)\s+)?(?:summary\s+|executive\s+)?report$",
        "generate_report",
        0.9,
        persona=_persona,
    ),
    rule(
        r"^(?:generate|create|build|prepare)\s+(?:a\s+|the\s+)?report\s+for\s+(?:the\s+)?(?P<persona>.+)$",
        "generate_report",
        0.9,
        persona=_persona,
    ),
    rule(
        r"^(?:run|execute)\s+(?:a\s+|the\s+|this\s+)?query\s*[:,-]?\s*(?P<query>.+)$",
        "run_query",
        0.9,
        query=original("query"),
    ),
    rule(
        r"^query\s+(?P<query>.+)$",
        "run_query",
        0.85,
        query=original("query"),
    ),
    rule(
        r"^" + _NOT_ANALYTICS + r"(?:export|download)\s+(?:the\s+|my\s+|all\s+)?(?:(?P<entity>[\w\s]+?)\s+)?"
        r"(?:data\s+|records\s+|list\s+)?(?:as|to|in(?:to)?)\s+(?:an?\s+)?(?P<format>csv|pdf|json)(?:\s+file)?$",
        "export_data",
        0.9,
        format=group("format"),
        entity=_entity,
    ),
    rule(
        r"^" + _NOT_ANALYTICS + r"(?:export|download)\s+(?:the\s+|my\s+|all\s+)?(?P<entity>\w+(?:\s+\w+)?)(?:\s+data)?$",
        "export_data",
        0.85,
        entity=_entity,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
