"""Verbosity levels for preview descriptions and spoken responses."""

from dataclasses import dataclass
from enum import Enum


class Verbosity(str, Enum):
    """How much the assistant says when describing a command."""

    MINIMAL = "minimal"
    NORMAL = "normal"
    DETAILED = "detailed"


@dataclass(frozen=True)
class VerbosityConfig:
    """Limits applied at each verbosity level."""

    level: Verbosity
    max_spoken_words: int
    max_detail_slots: int | None  # None means every populated slot

    @classmethod
    def for_level(cls, level: Verbosity | str) -> "VerbosityConfig":
        """Get configuration for the given level."""
        level = Verbosity(level)
        configs = {
            Verbosity.MINIMAL: cls(level=Verbosity.MINIMAL, max_spoken_words=12, max_detail_slots=0),
            Verbosity.NORMAL: cls(level=Verbosity.NORMAL, max_spoken_words=25, max_detail_slots=3),
            Verbosity.DETAILED: cls(level=Verbosity.DETAILED, max_spoken_words=60, max_detail_slots=None),
        }
        return configs[level]

    def truncate_spoken_text(self, text: str) -> str:
        """Truncate text to max_spoken_words, ending with "..." if truncated.

        Uses word-based truncation for deterministic, stable behavior.
        """
        if not text:
            return text

        words = text.split()
        if len(words) <= self.max_spoken_words:
            return text

        return " ".join(words[: self.max_spoken_words]) + "..."
