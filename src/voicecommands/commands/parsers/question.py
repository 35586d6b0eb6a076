"""Fallback that flags question-shaped utterances for the assistant.

Only the shape is detected here; answering is left to the text-generation
service behind ``ask_atlas``.
"""

from voicecommands.commands.parsers.base import match_rules, rule
from voicecommands.commands.parsers.types import ParsedIntent

_INTERROGATIVES = (
    r"what|who|whom|whose|when|where|why|how|which|is|are|am|was|were|do|does|did|can|could|should|would|will"
    r"|shall|may|might|has|have|had|tell\s+me|explain"
)

RULES = (
    rule(
        r"^(?:" + _INTERROGATIVES + r")(?:'s|'re|'m|'ll)?\s+\S.*$",
        "ask_atlas",
        0.6,
        question=lambda m: m.original(0),
    ),
    rule(
        r"^\S+(?:\s+\S+)+\?$",
        "ask_atlas",
        0.6,
        question=lambda m: m.original(0),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
