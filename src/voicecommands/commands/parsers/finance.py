"""Banking and finance commands.

Finance rules require finance nouns (balance, transactions, budget, expense)
so that sector words like "financial" stay free for agent filtering.
"""

import re

from voicecommands.commands.parsers.base import (
    RuleMatch,
    match_rules,
    number,
    original,
    phrase,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_AMOUNT = r"\$?(?P<amount>\d[\d,]*(?:\.\d+)?k?)\s*(?:dollars|usd|bucks)?"
_GENERIC_ACCOUNT_WORDS = frozenset({"bank", "account", "current", "total", "overall", "my", "the"})
_PERIODS = (
    (re.compile(r"\btoday\b"), "today"),
    (re.compile(r"\b(?:this|last|past)\s+week\b|\bweekly\b"), "week"),
    (re.compile(r"\b(?:this|last|past)\s+month\b|\bmonthly\b"), "month"),
    (re.compile(r"\b(?:this|last|past)\s+year\b|\byearly\b|\bannual\b"), "year"),
)


def _account(m: RuleMatch) -> str | None:
    value = m.group("account")
    if value is None or value in _GENERIC_ACCOUNT_WORDS:
        return None
    return value


def _period(m: RuleMatch) -> str | None:
    for pattern, value in _PERIODS:
        if pattern.search(m.text):
            return value
    return None


def _transaction_filter(m: RuleMatch) -> str | None:
    value = m.group("filter")
    if value in ("latest", "last", "recent"):
        return "recent"
    return value


def _budget_period(m: RuleMatch) -> str | None:
    value = m.group("period") or m.group("per")
    if value in ("monthly", "month"):
        return "monthly"
    if value in ("weekly", "week"):
        return "weekly"
    return None


RULES = (
    rule(
        r"\b(?:check|show|what(?:'s|\s+is)|get|tell\s+me|read)\s+(?:me\s+)?(?:my\s+|the\s+)?"
        r"(?:(?P<account>[a-z]+)\s+)?(?:account\s+)?balances?\b",
        "check_balance",
        0.95,
        account_id=_account,
    ),
    rule(
        r"\bhow\s+much\s+(?:money\s+)?(?:do\s+i\s+have|is\s+in\s+my\s+(?:(?P<account>[a-z]+)\s+)?account)\b",
        "check_balance",
        0.9,
        account_id=_account,
    ),
    rule(
        r"\b(?:show|list|get|see|view|display)\s+(?:me\s+)?(?:my\s+|the\s+)?"
        r"(?:(?P<filter>recent|pending|all|latest|last)\s+)?(?:bank\s+|card\s+)?transactions\b",
        "list_transactions",
        0.9,
        filter=_transaction_filter,
    ),
    rule(
        r"^(?:categori[sz]e|tag|label|mark|file)\s+(?:the\s+|this\s+|that\s+|my\s+last\s+|last\s+)?"
        r"transaction(?:\s+#?(?P<id>[\w-]+))?\s+(?:as|under|in)\s+(?P<category>.+)$",
        "categorize_transaction",
        0.9,
        transaction_id=phrase("id"),
        category=phrase("category"),
    ),
    rule(
        r"\b(?:financial|finance|money|spending)\s+(?:summary|overview|report|snapshot)\b"
        r"|\bhow\s+(?:am\s+i|are\s+we)\s+doing\s+financially\b"
        r"|\bhow\s+much\s+(?:did|have)\s+i\s+spen[dt]\b",
        "get_financial_summary",
        0.9,
        period=_period,
    ),
    rule(r"\bcash[\s-]*flow\b", "get_cash_flow", 0.9),
    rule(
        r"\breconcile\s+(?:all\s+)?(?:my\s+|the\s+)?(?:accounts?|books|transactions)\b|^reconcile$",
        "reconcile_accounts",
        0.9,
    ),
    rule(
        r"^(?:add|log|record|track)\s+(?:an?\s+)?(?:expense|spending|purchase)\s+(?:of\s+)?" + _AMOUNT
        + r"\s+(?:for|on|in|under)\s+(?P<category>.+?)(?:\s*(?:-|:)\s*(?P<desc>.+))?$",
        "add_expense",
        0.95,
        amount=number("amount"),
        category=phrase("category"),
        description=original("desc"),
    ),
    rule(
        r"^(?:i\s+)?(?:spent|paid)\s+" + _AMOUNT + r"\s+(?:on|for)\s+(?P<category>.+)$",
        "add_expense",
        0.9,
        amount=number("amount"),
        category=phrase("category"),
    ),
    rule(
        r"^(?:add|log|record)\s+(?:an?\s+)?" + _AMOUNT + r"\s+(?P<category>\w+(?:\s\w+)?)\s+expense$",
        "add_expense",
        0.95,
        amount=number("amount"),
        category=phrase("category"),
    ),
    rule(
        r"^(?:set|create|make)\s+(?:a\s+|my\s+|the\s+)?(?:(?P<period>monthly|weekly)\s+)?budget\s+(?:for|of)\s+"
        r"(?P<category>.+?)\s+(?:to|at|of)\s+" + _AMOUNT + r"(?:\s+(?:per|a|every)\s+(?P<per>month|week))?$",
        "set_budget",
        0.95,
        category=phrase("category"),
        amount=number("amount"),
        period=_budget_period,
    ),
    rule(
        r"^(?:set|create)\s+(?:a\s+)?" + _AMOUNT + r"\s+(?:(?P<period>monthly|weekly)\s+)?budget\s+for\s+(?P<category>.+)$",
        "set_budget",
        0.95,
        category=phrase("category"),
        amount=number("amount"),
        period=_budget_period,
    ),
    rule(
        r"^(?:set|create|make)\s+(?:a\s+|my\s+|the\s+)?(?:(?P<period>monthly|weekly)\s+)?"
        r"(?P<category>(?!(?:monthly|weekly|a|my|the)\b)[a-z][\w ]*?)\s+budget\s+(?:to|at|of)\s+" + _AMOUNT
        + r"(?:\s+(?:per|a|every)\s+(?P<per>month|week))?$",
        "set_budget",
        0.9,
        category=phrase("category"),
        amount=number("amount"),
        period=_budget_period,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
