"""Rule matching shared by every domain parser.

A domain parser is an ordered tuple of ``Rule`` entries. The first rule whose
pattern matches and whose slots validate against the command model wins.
"""

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from voicecommands.commands import lexicon
from voicecommands.commands.parsers.types import ParsedIntent
from voicecommands.commands.taxonomy import build_command

logger = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r"-?\d[\d,]*(?:\.\d+)?")
_WORD_NUMBERS = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "fifteen": 15,
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
    "sixty": 60,
    "hundred": 100,
}
_MAGNITUDES = {"k": 1_000, "m": 1_000_000}
_MAGNITUDE_PATTERN = re.compile(r"\s*([km])\b")
_EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
_URL_PATTERN = re.compile(r"https?://\S+")
_LEADING_PREPOSITION = re.compile(r"^(?:on|at|for|by|until)\s+", re.IGNORECASE)


class RuleMatch:
    """A regex match exposing lower-cased groups and case-preserved spans."""

    def __init__(self, match: re.Match[str], original: str) -> None:
        self._match = match
        stripped = original.strip()
        # Offsets only line up when lower-casing kept the length unchanged
        self._source = stripped if len(stripped) == len(match.string) else match.string

    def group(self, key: int | str = 0) -> str | None:
        """Return the lower-cased group, stripped, or None when empty or absent."""
        try:
            value = self._match.group(key)
        except IndexError:
            return None
        if value is None:
            return None
        value = value.strip()
        return value or None

    def original(self, key: int | str = 0) -> str | None:
        """Return the group as the user phrased it (original casing)."""
        try:
            start, end = self._match.span(key)
        except IndexError:
            return None
        if start < 0:
            return None
        value = self._source[start:end].strip()
        return value or None

    @property
    def text(self) -> str:
        """The full normalized utterance the pattern ran against."""
        return self._match.string


Extractor = Callable[[RuleMatch], Any]


@dataclass(frozen=True)
class Rule:
    """One pattern rule: regex, target command type, slot extractors, confidence."""

    pattern: re.Pattern[str]
    command_type: str
    confidence: float
    slots: Mapping[str, Any] = field(default_factory=dict)
    require_any: tuple[str, ...] = ()

    def apply(self, normalized: str, original: str) -> ParsedIntent | None:
        match = self.pattern.search(normalized)
        if match is None:
            return None

        rule_match = RuleMatch(match, original)
        values: dict[str, Any] = {}
        for slot_name, extractor in self.slots.items():
            value = extractor(rule_match) if callable(extractor) else extractor
            if value is not None:
                values[slot_name] = value

        if self.require_any and not any(name in values for name in self.require_any):
            return None

        try:
            command = build_command(self.command_type, **values)
        except ValidationError:
            # Required slot missing or malformed: refuse this rule, try the next one
            logger.debug("Rule for %s matched but slots did not validate", self.command_type)
            return None

        return ParsedIntent(command=command, confidence=self.confidence, original=original)


def rule(
    pattern: str,
    command_type: str,
    confidence: float,
    *,
    require_any: tuple[str, ...] = (),
    **slots: Any,
) -> Rule:
    """Compile a rule; patterns run against lower-cased text.

    ``require_any`` names slots of which at least one must be extracted for
    the rule to fire, for commands whose fields are all optional.
    """
    return Rule(
        pattern=re.compile(pattern, re.IGNORECASE),
        command_type=command_type,
        confidence=confidence,
        slots=slots,
        require_any=require_any,
    )


def match_rules(rules: Sequence[Rule], normalized: str, original: str) -> ParsedIntent | None:
    """Return the first rule result for the utterance, or None."""
    for candidate in rules:
        result = candidate.apply(normalized, original)
        if result is not None:
            return result
    return None


# Slot extractors -----------------------------------------------------------


def group(key: int | str) -> Extractor:
    """Extract a lower-cased group."""
    return lambda m: m.group(key)


def original(key: int | str) -> Extractor:
    """Extract a group with the user's casing."""
    return lambda m: clean_phrase(m.original(key))


def phrase(key: int | str) -> Extractor:
    """Extract a lower-cased group with punctuation trimmed."""
    return lambda m: clean_phrase(m.group(key))


def number(key: int | str) -> Extractor:
    return lambda m: parse_number(m.group(key))


def integer(key: int | str) -> Extractor:
    def _extract(m: RuleMatch) -> int | None:
        value = parse_number(m.group(key))
        return int(value) if value is not None else None

    return _extract


def relative_time(key: int | str) -> Extractor:
    """Extract a time phrase, canonicalized when it is a known relative phrase."""
    return lambda m: normalize_time_phrase(m.group(key))


def from_table(table: Mapping[str, str], key: int | str = 0) -> Extractor:
    """Look up a group (or the whole utterance) in a lexicon table."""
    return lambda m: lexicon.lookup_longest(table, m.group(key))


def email(key: int | str = 0) -> Extractor:
    def _extract(m: RuleMatch) -> str | None:
        value = m.group(key)
        if not value:
            return None
        found = _EMAIL_PATTERN.search(value)
        return found.group(0) if found else None

    return _extract


def url(key: int | str = 0) -> Extractor:
    def _extract(m: RuleMatch) -> str | None:
        value = m.original(key)
        if not value:
            return None
        found = _URL_PATTERN.search(value)
        return found.group(0).rstrip(".,") if found else None

    return _extract


def name_list(key: int | str) -> Extractor:
    """Split "alice, bob and carol" into a list of names."""

    def _extract(m: RuleMatch) -> list[str] | None:
        value = m.original(key)
        if not value:
            return None
        parts = re.split(r",|\band\b|&", value)
        names = [part.strip() for part in parts if part.strip()]
        return names or None

    return _extract


# Normalization helpers ------------------------------------------------------


def clean_phrase(value: str | None) -> str | None:
    """Trim quotes and trailing punctuation from a captured phrase."""
    if value is None:
        return None
    value = value.strip().strip("\"'").rstrip(".!?,;:").strip()
    return value or None


def parse_number(value: str | None) -> float | None:
    """Parse "1,200", "$45.50", "50k" or "twenty" into a float; None when malformed."""
    if not value:
        return None
    value = value.strip().lower()
    found = _NUMBER_PATTERN.search(value.replace("$", ""))
    if found:
        try:
            amount = float(found.group(0).replace(",", ""))
        except ValueError:
            return None
        magnitude = _MAGNITUDE_PATTERN.match(value.replace("$", ""), found.end())
        if magnitude:
            amount *= _MAGNITUDES[magnitude.group(1)]
        return amount
    words = value.split()
    if words and words[0] in _WORD_NUMBERS:
        return float(_WORD_NUMBERS[words[0]])
    return None


def normalize_time_phrase(value: str | None) -> str | None:
    """Canonicalize a time phrase when it is exactly a known relative phrase."""
    value = clean_phrase(value)
    if value is None:
        return None
    value = _LEADING_PREPOSITION.sub("", value) or value
    lowered = value.lower()
    if lowered in lexicon.RELATIVE_TIME_TOKENS:
        return lexicon.RELATIVE_TIME_TOKENS[lowered]
    return value


__all__ = [
    "Rule",
    "RuleMatch",
    "clean_phrase",
    "email",
    "from_table",
    "group",
    "integer",
    "match_rules",
    "name_list",
    "normalize_time_phrase",
    "number",
    "original",
    "parse_number",
    "phrase",
    "relative_time",
    "rule",
    "url",
]
