"""Generic search across the workspace."""

from voicecommands.commands.parsers.base import RuleMatch, match_rules, original, rule
from voicecommands.commands.parsers.types import ParsedIntent

_SCOPES = {
    "agents": "agents",
    "agent": "agents",
    "documents": "documents",
    "docs": "documents",
    "files": "documents",
    "tasks": "tasks",
    "to-dos": "tasks",
    "emails": "emails",
    "email": "emails",
    "inbox": "emails",
    "mail": "emails",
    "messages": "emails",
    "events": "events",
    "calendar": "events",
    "meetings": "events",
    "everything": "all",
    "everywhere": "all",
}
_SCOPE_WORDS = "|".join(sorted(_SCOPES, key=len, reverse=True))


def _scope(m: RuleMatch) -> str | None:
    return _SCOPES.get(m.group("scope") or "")


RULES = (
    rule(
        r"^(?:search|look|find|look\s+up)\s+(?:for\s+)?(?P<query>.+?)\s+(?:in|across|among|within)\s+(?:the\s+|my\s+|all\s+)?"
        r"(?P<scope>" + _SCOPE_WORDS + r")$",
        "search",
        0.85,
        query=original("query"),
        scope=_scope,
    ),
    rule(
        r"^search\s+(?:the\s+|my\s+|all\s+)?(?P<scope>" + _SCOPE_WORDS + r")\s+(?:for\s+)?(?P<query>.+)$",
        "search",
        0.85,
        query=original("query"),
        scope=_scope,
    ),
    rule(
        r"^(?:search|look\s+up|look\s+for|find|lookup)\s+(?:for\s+)?(?P<query>.+)$",
        "search",
        0.75,
        query=original("query"),
        scope="all",
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
