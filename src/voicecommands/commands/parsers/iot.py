"""Smart home commands: devices, scenes, thermostat, locks and security."""

import re

from voicecommands.commands.parsers.base import (
    RuleMatch,
    clean_phrase,
    group,
    match_rules,
    number,
    original,
    rule,
)
from voicecommands.commands.parsers.types import ParsedIntent

_DEVICE_WORDS = (
    r"(?:lights?|lamps?|fans?|switch(?:es)?|outlets?|plugs?|tv|television|speakers?|heater|"
    r"ac|air\s+conditioner|coffee\s+maker|sprinklers?|blinds|garage(?:\s+door)?|camera|sensor|devices?)"
)
_DEVICE = r"(?P<device>(?:[\w'-]+\s+)*?" + _DEVICE_WORDS + r"(?:\s+(?:in|on)\s+(?:the\s+)?[\w\s]+)?)"
_STATUS_WORDS = r"(?=.*\b(?:device|light|lamp|thermostat|door|sensor|camera|lock|garage|fan|plug)s?\b)"
_ENERGY_PERIODS = {"today": "day", "day": "day", "daily": "day", "week": "week", "weekly": "week", "month": "month", "monthly": "month"}


def _thermostat_mode(m: RuleMatch) -> str | None:
    mode = m.group("mode")
    if mode:
        return mode
    target = m.group("target") or ""
    if target.startswith("heat"):
        return "heat"
    if target in ("ac", "air conditioning", "cooling"):
        return "cool"
    return None


def _energy_period(m: RuleMatch) -> str | None:
    found = re.search(r"\b(today|day|daily|week|weekly|month|monthly)\b", m.text)
    return _ENERGY_PERIODS[found.group(1)] if found else None


def _device_value(m: RuleMatch) -> float | str | None:
    value = clean_phrase(m.group("value"))
    if value is None:
        return None
    if re.fullmatch(r"\d+(?:\.\d+)?", value):
        return float(value)
    return value


def _schedule(m: RuleMatch) -> dict[str, str] | None:
    time = clean_phrase(m.group("time"))
    if time is None:
        return None
    return {"action": m.group("action"), "time": time}


RULES = (
    rule(
        r"\b(?:set|change|put)\s+(?:the\s+)?(?P<target>thermostat|temperature|temp|heat(?:ing)?|ac|air\s+conditioning|cooling)\s+"
        r"to\s+(?P<temp>\d+(?:\.\d+)?)\s*(?:°|degrees?)?\s*(?:f|c|fahrenheit|celsius)?(?:\s+(?:on\s+)?(?P<mode>heat|cool|auto))?\b",
        "set_thermostat",
        0.95,
        temperature=number("temp"),
        mode=_thermostat_mode,
    ),
    rule(
        r"^(?:turn|switch)\s+(?P<action>on|off)\s+(?:the\s+|my\s+|all\s+(?:the\s+)?)?" + _DEVICE + r"$",
        "control_device",
        0.9,
        device_name=original("device"),
        action=group("action"),
    ),
    rule(
        r"^(?:turn|switch)\s+(?:the\s+|my\s+|all\s+(?:the\s+)?)?" + _DEVICE + r"\s+(?P<action>on|off)$",
        "control_device",
        0.9,
        device_name=original("device"),
        action=group("action"),
    ),
    rule(
        r"^toggle\s+(?:the\s+|my\s+)?" + _DEVICE + r"$",
        "control_device",
        0.9,
        device_name=original("device"),
        action="toggle",
    ),
    rule(
        r"^(?:dim|brighten|set)\s+(?:the\s+|my\s+)?" + _DEVICE + r"\s+to\s+(?P<value>\d+)\s*(?:%|percent)?$",
        "set_device_value",
        0.9,
        device_name=original("device"),
        value=_device_value,
    ),
    rule(
        r"^(?:set|turn)\s+(?:the\s+)?(?P<device>volume|brightness)(?:\s+(?:on|of)\s+(?:the\s+)?[\w\s]+?)?\s+"
        r"(?:to|up\s+to|down\s+to)\s+(?P<value>\d+)\s*(?:%|percent)?$",
        "set_device_value",
        0.85,
        device_name=original("device"),
        value=_device_value,
    ),
    rule(
        r"^(?:schedule|set)\s+(?:the\s+|my\s+)?" + _DEVICE + r"\s+to\s+(?:turn\s+)?(?P<action>on|off)\s+"
        r"(?P<time>(?:at|every|daily|each)\b.+)$",
        "set_schedule",
        0.85,
        device_name=original("device"),
        schedule=_schedule,
    ),
    rule(
        r"^(?:create|make|save)\s+(?:a\s+|new\s+)*scene\s+(?:called\s+|named\s+)?(?P<name>.+)$",
        "create_scene",
        0.85,
        name=original("name"),
        devices=lambda m: [],
    ),
    rule(
        r"^(?:activate|set|turn\s+on|start|enable)\s+(?:the\s+|my\s+)?(?P<scene>.+?)\s+(?:scene|mode)$",
        "activate_scene",
        0.9,
        scene_name=original("scene"),
    ),
    rule(
        r"\bunlock\s+(?:the\s+)?(?P<door>(?:[\w-]+\s+)?door)\b",
        "unlock_door",
        0.95,
        door_name=original("door"),
    ),
    rule(
        r"\block\s+(?:the\s+)?(?P<door>(?:[\w-]+\s+)?door|doors|house|up)\b",
        "lock_door",
        0.95,
        door_name=lambda m: None if m.group("door") in ("up", "house", "doors") else original("door")(m),
    ),
    rule(
        r"\bdisarm\s+(?:the\s+)?(?:security\s+system|security|alarm)\b",
        "disarm_security",
        0.95,
    ),
    rule(
        r"\barm\s+(?:the\s+)?(?:security\s+system|security|alarm)(?:\s+(?:in\s+|for\s+|to\s+)?(?P<mode>home|away|night)(?:\s+mode)?)?\b",
        "arm_security",
        0.95,
        mode=group("mode"),
    ),
    rule(
        r"^" + _STATUS_WORDS + r"(?:what(?:'s|\s+is)\s+)?(?:the\s+)?status\s+of\s+(?:the\s+|my\s+)?(?P<device>.+?)\??$",
        "get_device_status",
        0.85,
        device_name=original("device"),
    ),
    rule(
        r"^" + _STATUS_WORDS + r"is\s+(?:the\s+|my\s+)?(?P<device>.+?)\s+(?:on|off|locked|unlocked|open|closed)\??$",
        "get_device_status",
        0.85,
        device_name=original("device"),
    ),
    rule(
        r"\b(?:show|list|what)\s+(?:me\s+)?(?:all\s+)?(?:my\s+|the\s+)?(?:smart\s+(?:home\s+)?)?devices"
        r"(?:\s+(?:are\s+)?(?:in|on)\s+(?:the\s+)?(?P<room>[\w\s]+?))?(?:\s+(?:are\s+)?(?:on|online|connected))?\??$",
        "list_devices",
        0.9,
        room=original("room"),
    ),
    rule(
        r"\b(?:show|get|check|what(?:'s|\s+is))\s+(?:me\s+)?(?:my\s+|the\s+)?(?:energy|power|electricity)\s+"
        r"(?:usage|consumption|use)\b",
        "get_energy_usage",
        0.9,
        period=_energy_period,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
