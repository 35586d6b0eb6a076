"""Agent filtering by sector, status or capability.

Runs after the narrow domain parsers and before generic navigation, so
"show me financial agents" filters the agent grid instead of navigating.
"""

from voicecommands.commands import lexicon
from voicecommands.commands.parsers.base import from_table, match_rules, original, rule
from voicecommands.commands.parsers.types import ParsedIntent

_AGENT_FIELDS = ("sector", "status")

RULES = (
    rule(
        r"^(?:show|list|display|find|filter|get|give)\s+(?:me\s+)?(?:only\s+)?(?:all\s+)?(?:the\s+|my\s+)?"
        r"(?P<qual>[\w\s-]+?)\s+agents$",
        "filter_agents",
        0.9,
        require_any=_AGENT_FIELDS,
        sector=from_table(lexicon.SECTOR_KEYWORDS, "qual"),
        status=from_table(lexicon.AGENT_STATUS_KEYWORDS, "qual"),
    ),
    rule(
        r"\b(?:show|list|display|find|filter|get)\s+(?:me\s+)?(?:the\s+|all\s+)?agents\s+"
        r"(?:in|from|for|by)\s+(?:the\s+)?(?:sector\s+)?(?P<qual>[\w\s-]+?)(?:\s+(?:sector|department|team))?$",
        "filter_agents",
        0.9,
        require_any=_AGENT_FIELDS,
        sector=from_table(lexicon.SECTOR_KEYWORDS, "qual"),
        status=from_table(lexicon.AGENT_STATUS_KEYWORDS, "qual"),
    ),
    rule(
        r"\b(?:which|what|show\s+(?:me\s+)?|list)\s+agents\s+(?:are\s+)?(?P<qual>[\w\s-]+?)\??$",
        "filter_agents",
        0.85,
        require_any=_AGENT_FIELDS,
        sector=from_table(lexicon.SECTOR_KEYWORDS, "qual"),
        status=from_table(lexicon.AGENT_STATUS_KEYWORDS, "qual"),
    ),
    rule(
        r"\bagents?\s+(?:that\s+can|who\s+can|capable\s+of|with\s+(?:the\s+)?(?:capability|skill)\s+(?:of\s+|for\s+)?)\s*"
        r"(?P<cap>.+?)\??$",
        "filter_agents",
        0.85,
        capability=original("cap"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
