"""Data refresh and synchronization."""

from voicecommands.commands.parsers.base import match_rules, rule
from voicecommands.commands.parsers.types import ParsedIntent

RULES = (
    rule(
        r"\b(?:sync|synchronize|synchronise|resync)\s+(?:up\s+)?(?:all|everything|all\s+(?:of\s+)?(?:my\s+)?(?:accounts|data|integrations|sources))\b"
        r"|^(?:sync|sync\s+now|sync\s+up)$",
        "sync_all",
        0.9,
    ),
    rule(
        r"^(?:please\s+)?(?:refresh|reload|update)(?:\s+(?:the\s+|my\s+|all\s+)?(?:data|page|view|everything|screen|numbers|dashboard))?(?:\s+please)?$",
        "refresh_data",
        0.9,
    ),
    rule(
        r"^(?:get|fetch|pull)\s+(?:the\s+)?(?:latest|fresh|new)\s+data$",
        "refresh_data",
        0.85,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
