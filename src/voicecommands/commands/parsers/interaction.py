"""Interaction-mode controls: modes, confirmations, verbosity, undo and redo.

Bare control words ("undo", "cancel", "stop") are anchored to the whole
utterance so they never shadow domain phrases such as "cancel the meeting".
"""

from voicecommands.commands.parsers.base import group, match_rules, rule
from voicecommands.commands.parsers.types import ParsedIntent

_VERBOSITY_ALIASES = {
    "brief": "minimal",
    "concise": "minimal",
    "short": "minimal",
    "minimal": "minimal",
    "normal": "normal",
    "detailed": "detailed",
    "verbose": "detailed",
}


def _verbosity(m):
    return _VERBOSITY_ALIASES.get(m.group("level") or "")


RULES = (
    rule(
        r"\b(?:interaction\s+)?mode\s+to\s+(?P<mode>autonomous|preview|conversational)\b",
        "set_interaction_mode",
        0.95,
        mode=group("mode"),
    ),
    rule(
        r"\b(?P<mode>autonomous|preview|conversational)\s+mode\b",
        "set_interaction_mode",
        0.95,
        mode=group("mode"),
    ),
    rule(
        r"\b(?:enable|turn\s+on|require|switch\s+on)\s+(?:the\s+)?confirmations?\b"
        r"|^(?:always\s+)?ask\s+me\s+before\s+(?:doing|executing|running)\s+(?:anything|things)$",
        "enable_confirmations",
        0.95,
    ),
    rule(
        r"\b(?:disable|turn\s+off|switch\s+off|skip|stop\s+asking\s+for)\s+(?:the\s+)?confirmations?\b"
        r"|^(?:just\s+do\s+it|stop\s+asking\s+me)$",
        "disable_confirmations",
        0.95,
    ),
    rule(
        r"\b(?:set\s+)?verbosity\s+(?:level\s+)?(?:to\s+)?(?P<level>minimal|normal|detailed)\b",
        "set_verbosity",
        0.95,
        level=_verbosity,
    ),
    rule(
        r"^(?:please\s+)?be\s+(?:more\s+)?(?P<level>brief|concise|short|detailed|verbose)$",
        "set_verbosity",
        0.9,
        level=_verbosity,
    ),
    rule(
        r"^(?:undo|undo\s+(?:that|it|this|last|the\s+last\s+(?:action|command|change))|take\s+that\s+back)$",
        "undo_last",
        0.95,
    ),
    rule(
        r"^(?:redo|redo\s+(?:that|it|last|the\s+last\s+(?:action|command|change)))$",
        "redo_last",
        0.95,
    ),
    rule(
        r"^(?:pause|mute)\s+(?:atlas|listening)$|^stop\s+listening$",
        "pause_atlas",
        0.95,
    ),
    rule(
        r"^(?:resume|unpause|unmute|start)\s+(?:atlas|listening)$|^(?:resume|continue\s+listening)$",
        "resume_atlas",
        0.95,
    ),
    rule(
        r"^(?:cancel|stop|abort|never\s*mind|forget\s+it)(?:\s+(?:that|it|this))?$",
        "cancel_current",
        0.95,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
