"""Theme and layout toggles."""

from voicecommands.commands.parsers.base import group, match_rules, rule
from voicecommands.commands.parsers.types import ParsedIntent

RULES = (
    rule(
        r"^(?P<theme>dark|light)\s+(?:mode|theme)(?:\s+please)?$",
        "set_theme",
        0.95,
        theme=group("theme"),
    ),
    rule(
        r"\b(?:switch|change|set|go|turn\s+on|enable|use|activate)\s+(?:to\s+|on\s+|into\s+)?(?:the\s+)?"
        r"(?P<theme>dark|light)\s+(?:mode|theme)\b",
        "set_theme",
        0.95,
        theme=group("theme"),
    ),
    rule(
        r"\btheme\s+to\s+(?P<theme>dark|light)\b",
        "set_theme",
        0.95,
        theme=group("theme"),
    ),
    rule(
        r"^(?:switch|change)\s+to\s+(?P<theme>dark|light)$|^make\s+it\s+(?P<theme2>dark|light)(?:er)?$",
        "set_theme",
        0.9,
        theme=lambda m: m.group("theme") or m.group("theme2"),
    ),
    rule(
        r"\b(?:toggle|switch|flip|change)\s+(?:the\s+)?(?:theme|colou?r\s+scheme|dark\s+mode)\b",
        "toggle_theme",
        0.9,
    ),
    rule(
        r"\b(?:toggle|enter|exit|leave|go)\s+(?:into\s+|to\s+)?full\s*screen\b|\bfull\s*screen\s+mode\b|^full\s*screen$",
        "toggle_fullscreen",
        0.9,
    ),
    rule(
        r"\b(?:toggle|hide|show|open|close|collapse|expand)\s+(?:the\s+)?side\s*bar\b",
        "toggle_sidebar",
        0.9,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
