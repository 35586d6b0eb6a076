"""Dashboard layout and sharing."""

from voicecommands.commands.parsers.base import RuleMatch, clean_phrase, email, match_rules, rule
from voicecommands.commands.parsers.types import ParsedIntent

_GENERIC = frozenset({"widget", "chart", "card", "graph", "something", "it", "this"})


def _widget_type(m: RuleMatch) -> str | None:
    value = clean_phrase(m.group("widget"))
    if value is None:
        return None
    for suffix in (" widget", " card", " panel", " tile"):
        value = value.removesuffix(suffix)
    return None if value in _GENERIC else value.replace(" ", "_")


RULES = (
    rule(
        r"^(?:add|put|pin|place)\s+(?:a\s+|an\s+|the\s+|my\s+)?(?P<widget>.+?)\s+(?:to|on|onto)\s+(?:the\s+|my\s+)?"
        r"(?:main\s+)?dashboard$",
        "add_to_dashboard",
        0.85,
        widget_type=_widget_type,
    ),
    rule(
        r"\b(?:rearrange|reorganize|reorganise|reorder|tidy\s+up|clean\s+up|auto[\s-]?arrange)\s+(?:the\s+|my\s+)?"
        r"(?:dashboard|widgets|layout)\b",
        "rearrange_dashboard",
        0.9,
    ),
    rule(
        r"\b(?:reset|restore)\s+(?:the\s+|my\s+)?(?:dashboard|layout)(?:\s+(?:layout|to\s+default))?\b",
        "reset_dashboard",
        0.9,
    ),
    rule(
        r"^share\s+(?:the\s+|my\s+|this\s+)?dashboard(?:\s+with\s+(?P<email>.+))?$",
        "share_dashboard",
        0.9,
        email=email("email"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
