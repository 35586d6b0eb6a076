"""Help and discoverability commands."""

from voicecommands.commands.parsers.base import match_rules, original, rule
from voicecommands.commands.parsers.types import ParsedIntent

RULES = (
    rule(
        r"^(?:what\s+can\s+you\s+do|what\s+commands?\s+(?:can|do)\s+i\s+(?:say|use)"
        r"|(?:list|show)\s+(?:me\s+)?(?:all\s+)?(?:the\s+)?(?:available\s+)?commands)\b",
        "list_commands",
        0.95,
    ),
    rule(
        r"\b(?:what\s+are\s+your\s+capabilities|what\s+are\s+you\s+capable\s+of"
        r"|what\s+else\s+can\s+you\s+do)\b",
        "what_can_you_do",
        0.95,
    ),
    rule(
        r"^(?:show|start|give|run)\s+(?:me\s+)?(?:a\s+|the\s+)?(?:tutorial|walkthrough|tour)"
        r"(?:\s+(?:for|on|about|of)\s+(?:the\s+)?(?P<feature>.+))?$",
        "show_tutorial",
        0.9,
        feature=original("feature"),
    ),
    rule(
        r"^(?:help|help\s+me|i\s+need\s+help|get\s+help)(?:\s+(?:with|on|about)\s+(?P<topic>.+))?$",
        "get_help",
        0.9,
        topic=original("topic"),
    ),
    rule(
        r"^how\s+do\s+i\s+use\s+(?:the\s+)?(?P<topic>.+?)\??$",
        "get_help",
        0.85,
        topic=original("topic"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
