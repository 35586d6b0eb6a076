"""Shared dataclasses for parser outputs."""

from dataclasses import dataclass
from typing import Any

from voicecommands.commands.taxonomy import Command


@dataclass(frozen=True)
class ParsedIntent:
    """Structured representation of a parsed utterance."""

    command: Command
    confidence: float
    original: str

    @property
    def name(self) -> str:
        """Command type tag of the parsed command."""
        return self.command.type

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "command": self.command.to_dict(),
            "confidence": self.confidence,
            "original": self.original,
        }


__all__ = ["ParsedIntent"]
