"""System maintenance and status."""

from voicecommands.commands.parsers.base import match_rules, rule
from voicecommands.commands.parsers.types import ParsedIntent

RULES = (
    rule(
        r"\b(?:clear|flush|purge|empty|wipe)\s+(?:the\s+|my\s+)?(?:local\s+)?cache\b",
        "clear_cache",
        0.9,
    ),
    rule(
        r"\b(?:system|service|server)\s+status\b|\bcheck\s+(?:the\s+)?(?:system\s+)?status\b|\bhealth\s+check\b"
        r"|^(?:is\s+)?everything\s+(?:ok|okay|working|running|up)\??$|^(?:are\s+)?(?:all\s+)?systems\s+(?:ok|okay|up|go)\??$",
        "check_status",
        0.85,
    ),
    rule(
        r"^(?:give\s+me\s+|get\s+|show\s+(?:me\s+)?)?(?:a\s+|an\s+|the\s+|my\s+)?(?:daily\s+|quick\s+)?"
        r"(?:summary|overview|briefing|rundown|recap)(?:\s+(?:of|for)\s+(?:the\s+|my\s+)?(?:day|today))?$"
        r"|^(?:brief\s+me|catch\s+me\s+up|what\s+did\s+i\s+miss)\??$",
        "get_summary",
        0.85,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
