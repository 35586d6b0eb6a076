"""Commands that act on whatever the user currently has selected."""

from voicecommands.commands.parsers.base import (
    RuleMatch,
    email,
    match_rules,
    original,
    parse_number,
    relative_time,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_DEFAULT_DEFER_MINUTES = 30
_SELECTION = r"(?:this|that|it|the\s+selection|selected|the\s+selected\s+item)"


def _defer_minutes(m: RuleMatch) -> int:
    spoken = m.group("amount")
    amount = 1.0 if spoken in ("a", "an") else parse_number(spoken)
    if amount is None:
        return _DEFAULT_DEFER_MINUTES
    if (m.group("unit") or "").startswith("hour"):
        amount *= 60
    return int(amount)


RULES = (
    rule(
        r"^(?:do\s+this|remind\s+me(?:\s+to\s+do\s+this)?|come\s+back\s+to\s+this|deal\s+with\s+this)\s+"
        r"(?:later|in\s+(?P<amount>\d+|an?|one|two|three|five|ten|fifteen|twenty|thirty)\s+(?P<unit>minutes?|hours?))$"
        r"|^(?:do|handle)\s+(?:this|that|it)\s+later$",
        "do_this_later",
        0.85,
        defer_minutes=_defer_minutes,
    ),
    rule(
        r"^remind\s+me\s+(?:about|of)\s+(?:this|that|it)\s+(?P<when>.+)$",
        "remind_about_this",
        0.9,
        reminder_time=relative_time("when"),
    ),
    rule(
        r"^(?:share|send)\s+(?:this|that|it)\s+(?:with|to)\s+(?P<to>[\w.+-]+@[\w-]+(?:\.[\w-]+)+)"
        r"(?:\s+(?:saying|with\s+(?:the\s+)?(?:message|note))\s+(?P<msg>.+))?$",
        "share_this",
        0.95,
        recipient_email=email("to"),
        message=original("msg"),
    ),
    rule(
        r"^(?:add|move|attach|link)\s+(?:this|that|it)\s+to\s+(?:the\s+)?(?:project\s+(?P<p1>.+)|(?P<p2>.+?)\s+project)$",
        "add_this_to_project",
        0.9,
        project_name=lambda m: original("p1")(m) or original("p2")(m),
    ),
    rule(
        r"^(?:convert|make|turn)\s+(?:this|that|it)\s+(?:into\s+|to\s+)?(?:an?\s+)?(?:(?P<prio>high|medium|low)[\s-]priority\s+)?task"
        r"(?:\s+with\s+(?P<prio2>high|medium|low)\s+priority)?$",
        "convert_to_task",
        0.9,
        priority=lambda m: m.group("prio") or m.group("prio2"),
    ),
    rule(r"^analy[sz]e\s+" + _SELECTION + r"$", "analyze_selected", 0.9),
    rule(r"^(?:summari[sz]e|sum\s+up)\s+" + _SELECTION + r"$", "summarize_selected", 0.9),
    rule(
        r"^(?:explain|what\s+does)\s+(?:this|that|it)(?:\s+(?:to\s+me|mean))?\??$|^what\s+is\s+this\??$",
        "explain_this",
        0.9,
    ),
    rule(
        r"\b(?:find|show\s+me|get)\s+(?:something\s+|more\s+|items\s+|things\s+)?similar(?:\s+(?:to\s+)?(?:this|that|ones|items))?\b"
        r"|\bmore\s+like\s+this\b",
        "find_similar",
        0.85,
    ),
    rule(
        r"^(?:what(?:'s|\s+is)\s+(?:the\s+|my\s+)?(?:current\s+)?context|what\s+am\s+i\s+looking\s+at|where\s+am\s+i)\??$",
        "get_context",
        0.9,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
