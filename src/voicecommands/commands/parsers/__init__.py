"""Domain parsers, one module per functional area.

Every module exposes ``parse(normalized, original_text)`` returning a
``ParsedIntent`` or None. The orchestrator decides the order they run in.
"""

from .types import ParsedIntent

__all__ = ["ParsedIntent"]
