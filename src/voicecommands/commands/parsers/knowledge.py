"""Knowledge base commands and direct questions to Atlas."""

from voicecommands.commands.parsers.base import RuleMatch, clean_phrase, match_rules, original, rule
from voicecommands.commands.parsers.types import ParsedIntent

_TITLE_WORDS = 6


def _title_from_content(m: RuleMatch) -> str | None:
    content = clean_phrase(m.original("content"))
    if content is None:
        return None
    words = content.split()
    title = " ".join(words[:_TITLE_WORDS])
    return title if len(words) <= _TITLE_WORDS else f"{title}..."


RULES = (
    rule(
        r"^(?:save|add|store)\s+(?:to\s+(?:the\s+)?knowledge(?:\s+base)?|knowledge|an?\s+fact|an?\s+insight|fact)\s+"
        r"(?:about|on)\s+(?P<title>[^:,]+?)\s*[:,-]\s*(?P<content>.+)$",
        "save_knowledge",
        0.9,
        title=original("title"),
        content=original("content"),
    ),
    rule(
        r"^(?:save|add|store)\s+(?:this\s+)?(?:to|in)\s+(?:the\s+|my\s+)?(?:knowledge(?:\s+base)?|kb)\s*[:,-]?\s*(?P<content>.+)$",
        "save_knowledge",
        0.85,
        title=_title_from_content,
        content=original("content"),
    ),
    rule(
        r"^remember\s+that\s+(?P<content>.+)$",
        "save_knowledge",
        0.8,
        title=_title_from_content,
        content=original("content"),
    ),
    rule(
        r"^(?:search|query|look\s+up|check)\s+(?:in\s+)?(?:the\s+|my\s+)?knowledge(?:\s+base)?\s+"
        r"(?:for|about|on)?\s*(?P<query>.+)$",
        "search_knowledge",
        0.9,
        query=original("query"),
    ),
    rule(
        r"^what\s+do\s+(?:we|i|you)\s+know\s+about\s+(?P<query>.+?)\??$",
        "search_knowledge",
        0.85,
        query=original("query"),
    ),
    rule(
        r"^(?:get|show|give|share)\s+(?:me\s+)?(?:some\s+|any\s+)?insights?(?:\s+(?:on|about|for|into)\s+(?P<topic>.+))?$"
        r"|^any\s+insights\s+(?:on|about)\s+(?P<topic2>.+?)\??$",
        "get_insights",
        0.9,
        topic=lambda m: clean_phrase(m.original("topic") or m.original("topic2")),
    ),
    rule(
        r"^(?:ask\s+atlas|hey\s+atlas|atlas)\s*[,:]?\s+(?P<question>.+)$",
        "ask_atlas",
        0.9,
        question=original("question"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
