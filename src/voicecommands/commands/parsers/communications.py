"""Email and communications commands."""

import re

from voicecommands.commands.parsers.base import (
    RuleMatch,
    email,
    match_rules,
    original,
    phrase,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_ADDRESS = r"(?P<to>[\w.+-]+@[\w-]+(?:\.[\w-]+)+)"
_URGENT = re.compile(r"\b(?:urgent|urgently|asap|immediately|right\s+away)\b")
_LOW = re.compile(r"\b(?:no\s+rush|whenever|low\s+priority)\b")


def _urgency(m: RuleMatch) -> str:
    if _URGENT.search(m.text):
        return "high"
    if _LOW.search(m.text):
        return "low"
    return "normal"


def _recipient(m: RuleMatch) -> str | None:
    return email("to")(m) or original("to")(m)


RULES = (
    rule(
        r"^(?:email|e-mail|message|write\s+to)\s+" + _ADDRESS
        + r"\s+(?:about|regarding|re|to\s+say|saying)\s+(?P<intent>.+)$",
        "compose_email",
        0.95,
        to=email("to"),
        intent=original("intent"),
        urgency=_urgency,
    ),
    rule(
        r"^(?:send|shoot)\s+(?:an?\s+)?(?:email|e-mail|message|note)\s+to\s+" + _ADDRESS
        + r"(?:\s+(?:about|regarding|re|with\s+subject)\s+(?P<subject>.+?))?"
        r"(?:\s+(?:saying|that\s+says|with\s+(?:the\s+)?(?:message|text))\s+(?P<content>.+))?$",
        "send_email",
        0.95,
        to=email("to"),
        subject=original("subject"),
        content=original("content"),
    ),
    rule(
        r"^(?:send|shoot)\s+(?:an?\s+)?(?:email|e-mail|message|note)\s+to\s+(?P<to>[a-z][\w .'-]*?)"
        r"(?:\s+(?:about|regarding|re|with\s+subject)\s+(?P<subject>.+?))?"
        r"(?:\s+(?:saying|that\s+says|with\s+(?:the\s+)?(?:message|text))\s+(?P<content>.+))?$",
        "send_email",
        0.9,
        to=original("to"),
        subject=original("subject"),
        content=original("content"),
    ),
    rule(
        r"^(?:draft|write|compose|prepare)\s+(?:an?\s+)?(?:new\s+)?(?:email|e-mail|message|reply)\s*"
        r"(?:to\s+(?P<to>.+?))?\s*(?:(?:about|regarding|re|on|saying)\s+(?P<intent>.+))?$",
        "draft_email",
        0.9,
        to=_recipient,
        intent=original("intent"),
    ),
    rule(
        r"^(?:email|message)\s+(?P<to>[a-z][\w .'-]*?)\s+(?:about|regarding|re)\s+(?P<intent>.+)$",
        "draft_email",
        0.85,
        to=original("to"),
        intent=original("intent"),
    ),
    rule(
        r"\b(?:check|show|open|read)\s+(?:me\s+)?(?:my\s+)?(?:new\s+|unread\s+)?(?:email|emails|inbox|mail|messages)\b"
        r"|\bany\s+new\s+(?:emails|mail|messages)\b"
        r"|\bdo\s+i\s+have\s+(?:any\s+)?(?:new\s+|unread\s+)?(?:emails|mail|messages)\b",
        "check_inbox",
        0.9,
    ),
    rule(
        r"^(?:open|go\s+to|show)\s+(?:the\s+|my\s+)?(?:communications?|comms)(?:\s+(?:hub|center|centre|panel))?$",
        "open_communications",
        0.9,
    ),
    rule(
        r"^(?:reply|respond)(?:\s+to)?(?:\s+(?:this|that|the|the\s+last|last))?(?:\s+(?:email|message|mail))?"
        r"(?:\s+#?(?P<id>\d+))?(?:\s+(?:saying|with|and\s+say|that)\s+(?P<intent>.+))?$",
        "reply_to_email",
        0.85,
        email_id=phrase("id"),
        intent=original("intent"),
    ),
    rule(
        r"^forward(?:\s+(?:this|that|the|the\s+last|last))?(?:\s+(?:email|message|mail))?"
        r"(?:\s+#?(?P<id>\d+))?(?:\s+to\s+(?P<to>.+))?$",
        "forward_email",
        0.85,
        email_id=phrase("id"),
        to=_recipient,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
