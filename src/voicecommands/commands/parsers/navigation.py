"""Generic navigation to application routes.

Runs after the narrow domains: "show me my tasks" is a task listing, not a
page change. The destination is resolved against the route map by longest key,
so "open my personal hub" reaches the personal panel rather than the profile.
"""

from voicecommands.commands import lexicon
from voicecommands.commands.parsers.base import RuleMatch, match_rules, rule
from voicecommands.commands.parsers.types import ParsedIntent

# Dialog requests go to the dialog parser
_NOT_DIALOG = r"(?!.*\b(?:dialog|modal|form|popup|window)\b)"


def _path(m: RuleMatch) -> str | None:
    return lexicon.resolve_route(m.group("dest"))


RULES = (
    rule(
        r"^" + _NOT_DIALOG + r"(?:please\s+)?(?:go|navigate|head|jump|take\s+me|bring\s+me|switch)\s+(?:back\s+)?(?:to|into)\s+"
        r"(?P<dest>.+?)(?:\s+(?:page|screen|view|section))?(?:\s+please)?$",
        "navigate",
        0.9,
        path=_path,
    ),
    rule(
        r"^" + _NOT_DIALOG + r"(?:please\s+)?(?:open|show|display|bring\s+up|pull\s+up|load|view|visit)\s+(?:me\s+)?"
        r"(?P<dest>.+?)(?:\s+(?:page|screen|view|section))?(?:\s+please)?$",
        "navigate",
        0.8,
        path=_path,
    ),
    rule(
        r"^(?:back\s+to\s+|return\s+to\s+)?(?:the\s+)?(?P<dest>home|dashboard|settings|profile|marketplace|integrations)(?:\s+page)?$",
        "navigate",
        0.75,
        path=_path,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
