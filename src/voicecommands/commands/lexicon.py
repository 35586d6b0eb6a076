"""Static phrase tables mapping spoken words to canonical values.

Lookups prefer the longest matching key, so "personal hub" wins over
"personal" regardless of declaration order.
"""

import re
from collections.abc import Iterable, Mapping
from functools import lru_cache

# Spoken destination -> application route
ROUTE_MAP: Mapping[str, str] = {
    "dashboard": "/",
    "home": "/",
    "agents": "/",
    "sonic nodes": "/",
    "atlas": "/atlas",
    "atlas hub": "/atlas",
    "personal": "/profile",
    "personal hub": "/atlas?panel=personal",
    "import": "/import",
    "import agents": "/import",
    "settings": "/settings",
    "profile": "/profile",
    "integrations": "/integrations",
    "marketplace": "/marketplace",
    "tool governance": "/governance",
    "governance": "/governance",
    "permissions": "/workspace/tools",
    "user permissions": "/workspace/tools",
    "tool permissions": "/workspace/tools",
    "communications": "/atlas?panel=communications",
    "banking": "/atlas?panel=banking",
    "data hub": "/atlas?panel=data",
    "c-suite": "/atlas?panel=data",
    "help": "/help",
}

# Spoken sector -> agent sector code
SECTOR_KEYWORDS: Mapping[str, str] = {
    "finance": "FINANCE",
    "financial": "FINANCE",
    "banking": "FINANCE",
    "money": "FINANCE",
    "operations": "OPERATIONS",
    "operational": "OPERATIONS",
    "ops": "OPERATIONS",
    "analytics": "ANALYTICS",
    "analytical": "ANALYTICS",
    "analysis": "ANALYTICS",
    "security": "SECURITY",
    "cybersecurity": "SECURITY",
    "cyber security": "SECURITY",
    "creative": "CREATIVE",
    "design": "CREATIVE",
    "research": "RESEARCH",
    "infrastructure": "INFRASTRUCTURE",
    "infra": "INFRASTRUCTURE",
    "communications": "COMMUNICATIONS",
    "communication": "COMMUNICATIONS",
    "comms": "COMMUNICATIONS",
    "strategy": "STRATEGY",
    "strategic": "STRATEGY",
}

# Spoken agent state -> agent status code
AGENT_STATUS_KEYWORDS: Mapping[str, str] = {
    "idle": "IDLE",
    "available": "IDLE",
    "active": "ACTIVE",
    "running": "ACTIVE",
    "busy": "PROCESSING",
    "processing": "PROCESSING",
    "working": "PROCESSING",
    "error": "ERROR",
    "failed": "ERROR",
    "failing": "ERROR",
    "broken": "ERROR",
    "dormant": "DORMANT",
    "sleeping": "DORMANT",
    "inactive": "DORMANT",
}

# Spoken executive role -> data hub persona id
PERSONA_KEYWORDS: Mapping[str, str] = {
    "ceo": "ceo",
    "chief executive": "ceo",
    "founder": "ceo",
    "cfo": "cfo",
    "chief financial officer": "cfo",
    "coo": "coo",
    "chief operating officer": "coo",
    "chief of staff": "chief_of_staff",
    "cto": "cto",
    "chief technology officer": "cto",
    "ciso": "ciso",
    "chief security officer": "ciso",
    "chro": "chro",
    "chief people officer": "chief_people",
    "cmo": "cmo",
    "chief marketing officer": "cmo",
    "cro": "cro",
    "chief revenue officer": "cro",
    "clo": "clo",
    "general counsel": "clo",
    "cco": "cco",
    "executive": "executive",
    "tech": "tech",
    "people": "people",
    "growth": "growth",
    "legal": "legal",
}

# Spoken data hub section -> domain key
DOMAIN_KEYWORDS: Mapping[str, str] = {
    "communications": "communications",
    "comms": "communications",
    "emails": "communications",
    "documents": "documents",
    "docs": "documents",
    "files": "documents",
    "events": "events",
    "calendar": "events",
    "meetings": "events",
    "financials": "financials",
    "financial": "financials",
    "finance": "financials",
    "finances": "financials",
    "tasks": "tasks",
    "to-dos": "tasks",
    "knowledge": "knowledge",
    "knowledge base": "knowledge",
}

# Priority wording -> task priority level
PRIORITY_WORDS: Mapping[str, str] = {
    "critical": "critical",
    "critical priority": "critical",
    "urgent": "critical",
    "asap": "critical",
    "high": "high",
    "high priority": "high",
    "important": "high",
    "medium": "medium",
    "medium priority": "medium",
    "normal priority": "medium",
    "low": "low",
    "low priority": "low",
    "whenever": "low",
}

# Relative time phrase -> canonical token (materialized into dates by handlers)
RELATIVE_TIME_TOKENS: Mapping[str, str] = {
    "today": "today",
    "tonight": "tonight",
    "this evening": "tonight",
    "this morning": "this_morning",
    "this afternoon": "this_afternoon",
    "tomorrow": "tomorrow",
    "tomorrow morning": "tomorrow_morning",
    "tomorrow afternoon": "tomorrow_afternoon",
    "tomorrow evening": "tomorrow_evening",
    "day after tomorrow": "day_after_tomorrow",
    "the day after tomorrow": "day_after_tomorrow",
    "yesterday": "yesterday",
    "this week": "this_week",
    "next week": "next_week",
    "this weekend": "this_weekend",
    "next weekend": "next_weekend",
    "this month": "this_month",
    "next month": "next_month",
    "end of day": "end_of_day",
    "eod": "end_of_day",
    "end of week": "end_of_week",
    "end of the week": "end_of_week",
    "end of month": "end_of_month",
    "end of the month": "end_of_month",
    "monday": "monday",
    "tuesday": "tuesday",
    "wednesday": "wednesday",
    "thursday": "thursday",
    "friday": "friday",
    "saturday": "saturday",
    "sunday": "sunday",
    "next monday": "next_monday",
    "next tuesday": "next_tuesday",
    "next wednesday": "next_wednesday",
    "next thursday": "next_thursday",
    "next friday": "next_friday",
    "next saturday": "next_saturday",
    "next sunday": "next_sunday",
}


def _compile_keys(keys: Iterable[str]) -> tuple[tuple[re.Pattern[str], str], ...]:
    ordered = sorted(keys, key=len, reverse=True)
    return tuple((re.compile(rf"(?<!\w){re.escape(key)}(?!\w)"), key) for key in ordered)


@lru_cache(maxsize=64)
def _compile_key_tuple(keys: tuple[str, ...]) -> tuple[tuple[re.Pattern[str], str], ...]:
    return _compile_keys(keys)


# Each entry holds its table so a recycled id never matches a different mapping
_COMPILED: dict[int, tuple[Mapping[str, str], tuple[tuple[re.Pattern[str], str], ...]]] = {
    id(table): (table, _compile_keys(table))
    for table in (
        ROUTE_MAP,
        SECTOR_KEYWORDS,
        AGENT_STATUS_KEYWORDS,
        PERSONA_KEYWORDS,
        DOMAIN_KEYWORDS,
        PRIORITY_WORDS,
        RELATIVE_TIME_TOKENS,
    )
}


def _patterns_for(table: Mapping[str, str]) -> tuple[tuple[re.Pattern[str], str], ...]:
    entry = _COMPILED.get(id(table))
    if entry is not None and entry[0] is table:
        return entry[1]
    return _compile_key_tuple(tuple(table))


def find_longest_key(table: Mapping[str, str], text: str | None) -> str | None:
    """Return the longest key of ``table`` that occurs in ``text`` as whole words.

    Args:
        table: Phrase table
        text: Lower-cased text to search

    Returns:
        The matching key, or None when no key occurs
    """
    if not text:
        return None
    for pattern, key in _patterns_for(table):
        if pattern.search(text):
            return key
    return None


def lookup_longest(table: Mapping[str, str], text: str | None) -> str | None:
    """Return the value for the longest key of ``table`` found in ``text``."""
    key = find_longest_key(table, text)
    if key is None:
        return None
    return table[key]


def resolve_route(text: str | None) -> str | None:
    return lookup_longest(ROUTE_MAP, text)


def resolve_sector(text: str | None) -> str | None:
    return lookup_longest(SECTOR_KEYWORDS, text)


def resolve_agent_status(text: str | None) -> str | None:
    return lookup_longest(AGENT_STATUS_KEYWORDS, text)


def resolve_persona(text: str | None) -> str | None:
    return lookup_longest(PERSONA_KEYWORDS, text)


def resolve_domain(text: str | None) -> str | None:
    return lookup_longest(DOMAIN_KEYWORDS, text)


def resolve_priority(text: str | None) -> str | None:
    return lookup_longest(PRIORITY_WORDS, text)


def resolve_relative_time(text: str | None) -> str | None:
    """Map a time phrase to its canonical token, e.g. "tomorrow" -> "tomorrow"."""
    return lookup_longest(RELATIVE_TIME_TOKENS, text)


__all__ = [
    "AGENT_STATUS_KEYWORDS",
    "DOMAIN_KEYWORDS",
    "PERSONA_KEYWORDS",
    "PRIORITY_WORDS",
    "RELATIVE_TIME_TOKENS",
    "ROUTE_MAP",
    "SECTOR_KEYWORDS",
    "find_longest_key",
    "lookup_longest",
    "resolve_agent_status",
    "resolve_domain",
    "resolve_persona",
    "resolve_priority",
    "resolve_relative_time",
    "resolve_route",
    "resolve_sector",
]
