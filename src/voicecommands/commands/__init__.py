"""Command system for voice-driven applications.

This module implements:
- Intent parsing from utterances into typed commands
- Interaction modes and confirmation of pending commands
- Verbosity-based response tuning
- Command routing with undo and redo
"""

from .engine import Disposition, ExecutionEngine
from .intent_parser import IntentParser, ParsedIntent, get_intent_parser
from .pending_actions import CommandPreview, PendingCommand, PendingCommandManager, RedisPendingCommandManager
from .router import CommandRouter, DispatchResult
from .session_context import (
    CommandExecutionContext,
    CommandHistory,
    ContextStore,
    InteractionMode,
    RedisContextStore,
)
from .taxonomy import COMMAND_TYPES, Command, UnknownCommandTypeError, build_command, parse_command
from .verbosity import Verbosity, VerbosityConfig

__all__ = [
    "COMMAND_TYPES",
    "Command",
    "CommandExecutionContext",
    "CommandHistory",
    "CommandPreview",
    "CommandRouter",
    "ContextStore",
    "DispatchResult",
    "Disposition",
    "ExecutionEngine",
    "IntentParser",
    "InteractionMode",
    "ParsedIntent",
    "PendingCommand",
    "PendingCommandManager",
    "RedisContextStore",
    "RedisPendingCommandManager",
    "UnknownCommandTypeError",
    "Verbosity",
    "VerbosityConfig",
    "build_command",
    "get_intent_parser",
    "parse_command",
]
