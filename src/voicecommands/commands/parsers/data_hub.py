"""Data hub navigation: tabs, domain cards and executive personas."""

from voicecommands.commands import lexicon
from voicecommands.commands.parsers.base import from_table, match_rules, rule
from voicecommands.commands.parsers.types import ParsedIntent

_PERSONA_WORDS = "|".join(sorted(lexicon.PERSONA_KEYWORDS, key=len, reverse=True))
_DOMAIN_WORDS = "|".join(sorted(lexicon.DOMAIN_KEYWORDS, key=len, reverse=True))

RULES = (
    rule(
        r"\b(?:switch|go|change)\s+to\s+(?:the\s+)?(?P<tab>command|insights|admin)\s+(?:tab|view|panel)\b"
        r"|^(?:open|show)\s+(?:the\s+)?(?P<tab2>command|insights|admin)\s+tab$",
        "switch_tab",
        0.9,
        tab=lambda m: m.group("tab") or m.group("tab2"),
    ),
    rule(
        r"^(?:expand|open\s+up|drill\s+into|zoom\s+into|maximi[sz]e)\s+(?:the\s+)?(?P<domain>" + _DOMAIN_WORDS
        + r")(?:\s+(?:domain|section|card|panel))?$",
        "expand_domain",
        0.9,
        domain=from_table(lexicon.DOMAIN_KEYWORDS, "domain"),
    ),
    rule(
        r"^(?:collapse|close|minimi[sz]e)\s+(?:the\s+|this\s+)?(?:(?:" + _DOMAIN_WORDS
        + r")\s+)?(?:domain|section|card|panel)$|^collapse\s+(?:it|all)$",
        "collapse_domain",
        0.9,
    ),
    rule(
        r"\b(?:switch|change)\s+(?:to\s+)?(?:the\s+)?(?P<persona>" + _PERSONA_WORDS
        + r")\s+(?:persona|view|role|perspective|lens)\b"
        r"|\b(?:switch|change|set)\s+(?:the\s+)?persona\s+to\s+(?:the\s+)?(?P<persona2>" + _PERSONA_WORDS + r")\b"
        r"|\b(?:view|see\s+this|look\s+at\s+this)\s+as\s+(?:the\s+|a\s+)?(?P<persona3>" + _PERSONA_WORDS + r")\b",
        "switch_persona",
        0.9,
        persona=lambda m: lexicon.resolve_persona(m.group("persona") or m.group("persona2") or m.group("persona3")),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
