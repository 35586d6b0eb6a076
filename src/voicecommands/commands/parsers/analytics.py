"""Analytics commands: metrics, comparisons, trends, alerts and forecasts."""

import re

from voicecommands.commands.parsers.base import (
    RuleMatch,
    clean_phrase,
    group,
    integer,
    match_rules,
    name_list,
    number,
    original,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_DETERMINERS = re.compile(r"^(?:my|the|our|all|me)\s+")
_GENERIC_CATEGORIES = frozenset({"my", "the", "all", "our"})
# Period phrases a comparison can name without "between ... and"
_PERIOD = r"(?:this|last|previous|next)\s+(?:week|month|quarter|year)|today|yesterday|q[1-4](?:\s+\d{4})?|\d{4}"


def _metric(m: RuleMatch) -> str | None:
    value = clean_phrase(m.group("metric"))
    if value is None:
        return None
    value = _DETERMINERS.sub("", value)
    return value or None


def _condition(m: RuleMatch) -> str | None:
    value = re.sub(r"\s+", " ", m.group("cond") or "")
    if value in ("above", "over", "exceeds", "greater than", "more than"):
        return "above"
    if value in ("below", "under", "less than", "drops below"):
        return "below"
    if value.startswith("equal"):
        return "equals"
    return None


def _kpi_category(m: RuleMatch) -> str | None:
    value = m.group("cat")
    if value is None or value in _GENERIC_CATEGORIES:
        return None
    return value


def _metrics(m: RuleMatch) -> list[str] | None:
    values = name_list("metrics")(m)
    if not values:
        return None
    return [_DETERMINERS.sub("", value.lower()) for value in values]


RULES = (
    rule(
        r"\bcompare\s+(?P<metric>.+?)\s+(?:between|from|for)\s+(?P<p1>.+?)\s+(?:to|and|vs\.?|versus|with)\s+(?P<p2>.+)$",
        "compare_periods",
        0.85,
        metric=_metric,
        period1=original("p1"),
        period2=original("p2"),
    ),
    rule(
        r"\bcompare\s+(?P<metric>.+?)\s+(?P<p1>" + _PERIOD + r")\s+(?:to|and|vs\.?|versus|with)\s+(?P<p2>" + _PERIOD + r")$",
        "compare_periods",
        0.85,
        metric=_metric,
        period1=original("p1"),
        period2=original("p2"),
    ),
    rule(
        r"\b(?:show|get|display)\s+(?:me\s+)?(?P<metric>.+?)\s+trends?(?:\s+(?:for|over)\s+(?:the\s+)?(?:last\s+|past\s+)?"
        r"(?P<range>week|month|quarter|year))?\b",
        "get_trends",
        0.85,
        metric=_metric,
        time_range=group("range"),
    ),
    rule(
        r"^(?:add|create|make)\s+(?:a\s+|an\s+)?(?:(?P<chart>line|bar|pie|area)\s+)?(?:chart|graph)\s+(?:of|for|showing)\s+"
        r"(?P<metric>.+?)(?:\s+(?:to|on)\s+(?:the\s+|my\s+)?dashboard)?$",
        "create_dashboard_widget",
        0.85,
        metric=_metric,
        chart_type=group("chart"),
    ),
    rule(
        r"^schedule\s+(?:a\s+|an\s+|the\s+)?(?:(?P<freq>daily|weekly|monthly)\s+)?(?P<report>.+?)\s+report"
        r"(?:\s+(?P<freq2>daily|weekly|monthly))?(?:\s+(?:to|for)\s+(?P<recipients>.+))?$",
        "schedule_report",
        0.85,
        report_type=original("report"),
        frequency=lambda m: m.group("freq") or m.group("freq2"),
        recipients=name_list("recipients"),
    ),
    rule(
        r"\b(?:show|get|give\s+me)\s+(?:me\s+)?(?:my\s+|the\s+|our\s+)?(?:(?P<cat>\w+)\s+)?kpis?(?:\s+summary)?\b",
        "get_kpi_summary",
        0.9,
        category=_kpi_category,
    ),
    rule(
        r"^(?:set|create|add)\s+(?:up\s+)?(?:an?\s+)?alert\s+(?:when|if|for\s+when)\s+(?P<metric>.+?)\s+(?:is\s+|goes\s+|gets\s+)?"
        r"(?P<cond>above|over|exceeds|greater\s+than|more\s+than|below|under|less\s+than|drops\s+below|equals?(?:\s+to)?)\s+"
        r"\$?(?P<threshold>\d[\d,]*(?:\.\d+)?k?)",
        "set_alert",
        0.85,
        metric=_metric,
        condition=_condition,
        threshold=number("threshold"),
    ),
    rule(
        r"^(?:forecast|predict|project)\s+(?P<metric>.+?)\s+(?:for\s+)?(?:the\s+)?(?:next\s+)?(?P<periods>\d+)\s+"
        r"(?:periods?|months?|weeks?|quarters?|years?)$",
        "get_forecast",
        0.85,
        metric=_metric,
        periods=integer("periods"),
    ),
    rule(
        r"\brun\s+(?:an?\s+)?(?P<kind>cohort|funnel|retention|segmentation)\s+analysis\b"
        r"|\banaly[sz]e\s+(?:the\s+|our\s+)?(?P<kind2>cohort|funnel|retention|segmentation)s?\b",
        "run_analysis",
        0.9,
        analysis_type=lambda m: m.group("kind") or m.group("kind2"),
    ),
    rule(
        r"^export\s+(?:the\s+|my\s+|all\s+)?(?:(?P<metrics>.+?)\s+)?(?:analytics|metrics)\s+(?:as|to|in(?:to)?)\s+"
        r"(?:an?\s+)?(?P<format>csv|pdf|excel|xlsx)(?:\s+file)?$",
        "export_analytics",
        0.9,
        format=lambda m: "excel" if m.group("format") == "xlsx" else m.group("format"),
        metrics=_metrics,
    ),
    rule(
        r"\b(?:show|get|display)\s+(?:me\s+)?(?P<metric>.+?)\s+(?:analytics|metrics|stats|statistics)"
        r"(?:\s+(?:for|over)\s+(?P<period>.+))?$",
        "get_analytics",
        0.85,
        metric=_metric,
        period=original("period"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
