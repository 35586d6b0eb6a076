"""CRM commands: contacts, interactions, leads, deals and follow-ups."""

from voicecommands.commands.parsers.base import (
    RuleMatch,
    clean_phrase,
    email,
    group,
    match_rules,
    number,
    original,
    parse_number,
    relative_time,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_CONTACT_FIELDS = {
    "email": "email",
    "email address": "email",
    "phone": "phone",
    "phone number": "phone",
    "number": "phone",
    "company": "company",
    "role": "role",
    "title": "role",
    "job title": "role",
}
_FIELD = r"(?P<field>email(?:\s+address)?|phone(?:\s+number)?|number|company|role|job\s+title|title)"
_VALUE = r"\$?(?P<value>\d[\d,]*(?:\.\d+)?k?)"


def _contact_updates(m: RuleMatch) -> dict[str, str] | None:
    field = _CONTACT_FIELDS.get(m.group("field") or "")
    value = clean_phrase(m.original("value"))
    if field is None or value is None:
        return None
    return {field: value.lower() if field == "email" else value}


def _contact_filter(m: RuleMatch) -> str:
    value = m.group("filter")
    if value in ("favorite", "favourite"):
        return "favorites"
    return value or "all"


def _interaction_summary(m: RuleMatch) -> str | None:
    summary = clean_phrase(m.original("summary"))
    if summary:
        return summary
    return f"{m.group('kind')} with {clean_phrase(m.original('name'))}"


def _deal_updates(m: RuleMatch) -> dict[str, object] | None:
    if m.group("stage"):
        return {"stage": clean_phrase(m.group("stage"))}
    value = parse_number(m.group("value"))
    return {"value": value} if value is not None else None


RULES = (
    rule(
        r"^(?:create|add|new)\s+(?:a\s+)?(?:new\s+)?contact\s+(?:named\s+|called\s+)?(?P<name>.+?)"
        r"\s+(?:with\s+)?email\s+(?P<email>\S+@\S+)(?:\s+(?:with\s+)?phone\s+(?P<phone>[\d\s()+-]+?))?"
        r"(?:\s+(?:at|from|company)\s+(?P<company>.+?))?$",
        "create_contact",
        0.95,
        name=original("name"),
        email=email("email"),
        phone=lambda m: clean_phrase(m.group("phone")),
        company=original("company"),
    ),
    rule(
        r"^(?:create|add|new)\s+(?:a\s+)?(?:new\s+)?contact\s+(?:named\s+|called\s+)?(?P<name>.+?)"
        r"(?:\s+(?:with\s+)?phone\s+(?P<phone>[\d\s()+-]+?))?(?:\s+(?:at|from|company)\s+(?P<company>.+?))?"
        r"(?:\s+as\s+(?:an?\s+|the\s+)?(?P<role>.+?))?$",
        "create_contact",
        0.9,
        name=original("name"),
        phone=lambda m: clean_phrase(m.group("phone")),
        company=original("company"),
        role=original("role"),
    ),
    rule(
        r"^(?:update|change|edit)\s+(?:the\s+)?contact\s+(?P<name>.+?)(?:'s)?\s+" + _FIELD + r"\s+to\s+(?P<value>.+)$",
        "update_contact",
        0.9,
        name=original("name"),
        updates=_contact_updates,
    ),
    rule(
        r"^(?:update|change)\s+(?P<name>[\w\s.-]+?)'s\s+" + _FIELD + r"\s+to\s+(?P<value>.+)$",
        "update_contact",
        0.85,
        name=original("name"),
        updates=_contact_updates,
    ),
    rule(
        r"^(?:delete|remove)\s+(?:the\s+)?contact\s+(?P<name>.+)$",
        "delete_contact",
        0.9,
        name=original("name"),
    ),
    rule(
        r"\b(?:search|find|look\s+up)\s+(?:for\s+)?(?:contact|contacts|person|people)\s+(?:named\s+|for\s+|called\s+)?(?P<query>.+)$",
        "search_contacts",
        0.9,
        query=original("query"),
    ),
    rule(
        r"\b(?:show|list|get|view)\s+(?:me\s+)?(?:my\s+)?(?:all\s+)?(?:(?P<filter>recent|favorite|favourite)\s+)?contacts\b",
        "list_contacts",
        0.9,
        filter=_contact_filter,
    ),
    rule(
        r"^(?:log|record)\s+(?:a\s+|an\s+)?(?P<kind>call|email|meeting|note)\s+with\s+(?P<name>.+?)"
        r"(?:\s+(?:about|regarding|re)\s+(?P<summary>.+))?$",
        "log_interaction",
        0.9,
        interaction_type=group("kind"),
        contact_name=original("name"),
        summary=_interaction_summary,
    ),
    rule(
        r"\b(?:show|get|what(?:'s|\s+is))\s+(?:me\s+)?(?:the\s+|my\s+)?(?:contact\s+|interaction\s+)?history\s+"
        r"(?:with|for|of)\s+(?P<name>.+)$"
        r"|^when\s+did\s+i\s+last\s+(?:talk|speak)\s+(?:to|with)\s+(?P<name2>.+?)\??$",
        "get_contact_history",
        0.9,
        contact_name=lambda m: clean_phrase(m.original("name") or m.original("name2")),
    ),
    rule(
        r"^(?:create|add|new)\s+(?:a\s+)?(?:new\s+)?lead\s+(?:named\s+|called\s+|for\s+)?(?P<name>.+?)"
        r"(?:\s+from\s+(?P<source>.+?))?(?:\s+worth\s+" + _VALUE + r")?$",
        "create_lead",
        0.85,
        name=original("name"),
        source=original("source"),
        value=number("value"),
    ),
    rule(
        r"^(?:mark|move|set|update)\s+(?:the\s+)?lead\s+(?P<name>.+?)\s+(?:as|to)\s+"
        r"(?P<status>new|contacted|qualified|proposal|won|lost)$",
        "update_lead_status",
        0.85,
        lead_name=original("name"),
        status=group("status"),
    ),
    rule(
        r"\b(?:show|list|get|view)\s+(?:me\s+)?(?:my\s+|all\s+|the\s+)*(?:(?P<filter>hot|warm|cold)\s+)?leads\b",
        "list_leads",
        0.9,
        filter=lambda m: m.group("filter") or "all",
    ),
    rule(
        r"\b(?:show|get|check)\s+(?:me\s+)?(?:my\s+|the\s+)?(?:sales\s+)?pipeline(?:\s+summary)?\b"
        r"|\bhow(?:'s|\s+is)\s+(?:my\s+|the\s+)?(?:sales\s+)?pipeline\b",
        "get_pipeline_summary",
        0.9,
    ),
    rule(
        r"^(?:create|add|new)\s+(?:a\s+)?(?:new\s+)?deal\s+(?P<title>.+?)\s+(?:worth|for|valued\s+at)\s+" + _VALUE
        + r"(?:\s+(?:dollars|usd))?(?:\s+(?:in|at)\s+(?:the\s+)?(?P<stage>\w+)\s+stage)?$",
        "create_deal",
        0.85,
        title=original("title"),
        value=number("value"),
        stage=group("stage"),
    ),
    rule(
        r"^(?:update|move|change)\s+(?:the\s+)?deal\s+(?P<title>.+?)\s+"
        r"(?:to\s+(?:the\s+)?(?:stage\s+)?(?P<stage>.+?)(?:\s+stage)?|value\s+to\s+" + _VALUE + r")$",
        "update_deal",
        0.85,
        deal_title=original("title"),
        updates=_deal_updates,
    ),
    rule(
        r"^(?:schedule|set)\s+(?:up\s+)?(?:a\s+)?follow[\s-]*up\s+with\s+(?P<name>.+?)\s+(?:for\s+|on\s+)?"
        r"(?P<when>(?:today|tomorrow|tonight|next|this|in|monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b.*?)"
        r"(?:\s+(?:about|regarding|re)\s+(?P<note>.+))?$",
        "schedule_followup",
        0.85,
        contact_name=original("name"),
        followup_date=relative_time("when"),
        note=original("note"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
