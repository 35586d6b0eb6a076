"""Per-session execution context and command history.

The context records every parsed command in parse order. Undo and redo work
over that log: undo reverses the most recently *executed* state-changing
command, never one that was only parsed or is still awaiting confirmation.
"""

import asyncio
import logging
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from enum import Enum
from typing import Any

import redis
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from voicecommands.commands.impact import classify_impact, is_undoable
from voicecommands.commands.taxonomy import Command, CommandField
from voicecommands.commands.verbosity import Verbosity
from voicecommands.config import EngineConfig, get_engine_config

logger = logging.getLogger(__name__)


class InteractionMode(str, Enum):
    """How a matched command is handled before dispatch."""

    AUTONOMOUS = "autonomous"
    PREVIEW = "preview"
    CONVERSATIONAL = "conversational"


class HistoryEntry(BaseModel):
    """One parsed command and what happened to it."""

    model_config = ConfigDict(validate_assignment=True)

    command: CommandField
    executed: bool = False
    undone: bool = False
    # Set once a later state-changing command runs after this entry was undone
    superseded: bool = False
    parsed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class CommandHistory(BaseModel):
    """Bounded log of parsed commands; oldest entries are evicted first."""

    limit: int = 50
    entries: list[HistoryEntry] = Field(default_factory=list)

    def append(self, command: Command) -> HistoryEntry:
        """Record a parsed command, evicting the oldest entries past the limit."""
        entry = HistoryEntry(command=command)
        self.entries.append(entry)
        overflow = len(self.entries) - self.limit
        if overflow > 0:
            del self.entries[:overflow]
        return entry

    def mark_executed(self, command: Command) -> HistoryEntry | None:
        """Mark the newest not-yet-executed entry holding ``command`` as executed.

        Executing a state-changing command discards pending redos.

        Returns:
            The updated entry, or None when the command is not in the log
        """
        for entry in reversed(self.entries):
            if not entry.executed and entry.command == command:
                entry.executed = True
                if classify_impact(command.type) != "low":
                    for earlier in self.entries:
                        if earlier.undone:
                            earlier.superseded = True
                return entry
        return None

    def undo_target(self) -> HistoryEntry | None:
        """Most recent executed, not undone, state-changing entry."""
        for entry in reversed(self.entries):
            if entry.executed and not entry.undone and is_undoable(entry.command.type):
                return entry
        return None

    def redo_target(self) -> HistoryEntry | None:
        """Most recently undone entry that has not been redone or superseded."""
        for entry in reversed(self.entries):
            if entry.undone and not entry.superseded:
                return entry
        return None

    @property
    def recent_commands(self) -> list[Command]:
        return [entry.command for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)


class CommandExecutionContext(BaseModel):
    """Mutable state for one user session."""

    model_config = ConfigDict(validate_assignment=True)

    mode: InteractionMode = InteractionMode.AUTONOMOUS
    requires_confirmation: bool = False
    current_selection: Any = None
    history: CommandHistory = Field(default_factory=CommandHistory)
    verbosity: Verbosity = Verbosity.NORMAL
    user_id: str | None = None
    session_id: str | None = None

    @classmethod
    def create(
        cls,
        session_id: str | None = None,
        user_id: str | None = None,
        config: EngineConfig | None = None,
    ) -> "CommandExecutionContext":
        """Build a fresh context using configured defaults."""
        config = config or get_engine_config()
        return cls(
            mode=InteractionMode(config.default_mode),
            history=CommandHistory(limit=config.history_limit),
            session_id=session_id,
            user_id=user_id,
        )

    @property
    def recent_commands(self) -> list[Command]:
        """Parsed commands, oldest first."""
        return self.history.recent_commands


class SessionLocks:
    """One asyncio lock per session id, dropped once nobody holds or awaits it."""

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def get(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock


class _LockedSessionMixin:
    """Load-modify-save of a context under the session's lock."""

    _locks: SessionLocks

    @asynccontextmanager
    async def session(
        self, session_id: str, user_id: str | None = None
    ) -> AsyncIterator[CommandExecutionContext]:
        """Hold the session lock while the caller works on its context.

        The context is saved when the block exits normally. Requests for the
        same session in this process run one after another.
        """
        lock = self._locks.get(session_id)
        async with lock:
            context = self.get_or_create(session_id, user_id)
            yield context
            self.save(context)


class ContextStore(_LockedSessionMixin):
    """In-memory store of one execution context per session."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config
        # Maps session_id -> CommandExecutionContext
        self._contexts: dict[str, CommandExecutionContext] = {}
        self._locks = SessionLocks()

    def get_or_create(self, session_id: str, user_id: str | None = None) -> CommandExecutionContext:
        context = self._contexts.get(session_id)
        if context is None:
            context = CommandExecutionContext.create(session_id=session_id, user_id=user_id, config=self.config)
            self._contexts[session_id] = context
        return context

    def save(self, context: CommandExecutionContext) -> None:
        """Store a context under its session id (contexts without one are not kept)."""
        if not context.session_id:
            return
        self._contexts[context.session_id] = context

    def clear_session(self, session_id: str) -> None:
        self._contexts.pop(session_id, None)


class RedisContextStore(_LockedSessionMixin):
    """Redis-backed context store with persistence.

    This implementation provides:
    - Session contexts that survive process restarts
    - Automatic expiration of idle sessions via Redis TTL
    - Fallback to in-memory if Redis unavailable
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        default_ttl_seconds: int | None = None,
        key_prefix: str = "command_context:",
        config: EngineConfig | None = None,
    ) -> None:
        """Initialize the Redis-backed store.

        Args:
            redis_client: Redis client instance (None to use in-memory fallback)
            default_ttl_seconds: TTL for stored contexts (default: from engine config)
            key_prefix: Prefix for Redis keys (default: "command_context:")
            config: Engine configuration for new contexts
        """
        self.redis = redis_client
        self.config = config
        self.default_ttl_seconds = default_ttl_seconds or (config or get_engine_config()).session_ttl_seconds
        self.key_prefix = key_prefix
        self._locks = SessionLocks()

        if self.redis is None:
            logger.warning("Redis not available, using in-memory fallback for session contexts")
            self._fallback: ContextStore | None = ContextStore(config)
        else:
            logger.info("Using Redis-backed session context storage")
            self._fallback = None

    def _make_redis_key(self, session_id: str) -> str:
        return f"{self.key_prefix}{session_id}"

    def get_or_create(self, session_id: str, user_id: str | None = None) -> CommandExecutionContext:
        if self._fallback is not None:
            return self._fallback.get_or_create(session_id, user_id)

        try:
            data = self.redis.get(self._make_redis_key(session_id))
            if data is not None:
                if isinstance(data, bytes):
                    data = data.decode()
                return CommandExecutionContext.model_validate_json(data)
        except redis.RedisError as e:
            logger.error("Redis error getting session context: %s", e)
        except ValidationError as e:
            logger.error("Error deserializing session context: %s", e)

        return CommandExecutionContext.create(session_id=session_id, user_id=user_id, config=self.config)

    def save(self, context: CommandExecutionContext) -> None:
        """Persist a context and refresh its TTL."""
        if self._fallback is not None:
            self._fallback.save(context)
            return
        if not context.session_id:
            return

        try:
            self.redis.setex(
                self._make_redis_key(context.session_id),
                self.default_ttl_seconds,
                context.model_dump_json(),
            )
            logger.debug("Saved session context for %s", context.session_id[:8])
        except redis.RedisError as e:
            logger.error("Redis error saving session context: %s", e)

    def clear_session(self, session_id: str) -> None:
        if self._fallback is not None:
            self._fallback.clear_session(session_id)
            return

        try:
            self.redis.delete(self._make_redis_key(session_id))
            logger.debug("Cleared session context for %s", session_id[:8])
        except redis.RedisError as e:
            logger.error("Redis error clearing session context: %s", e)
