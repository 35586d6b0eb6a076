"""Pending command management for the preview-and-confirm flow."""

import json
import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import redis
from pydantic import ValidationError

from voicecommands.commands.impact import Impact
from voicecommands.commands.taxonomy import Command, UnknownCommandTypeError, parse_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandPreview:
    """What the user is asked to confirm."""

    description: str
    impact: Impact
    reversible: bool

    def to_dict(self) -> dict[str, Any]:
        return {"description": self.description, "impact": self.impact, "reversible": self.reversible}


@dataclass
class PendingCommand:
    """A parsed command awaiting explicit confirmation."""

    token: str
    command: Command
    preview: CommandPreview
    expires_at: datetime
    confidence: float = 1.0
    session_id: str | None = None
    user_id: str | None = None

    def is_expired(self) -> bool:
        """Check if this command has expired."""
        return datetime.now(UTC) >= self.expires_at

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "token": self.token,
            "command": self.command.to_dict(),
            "preview": self.preview.to_dict(),
            "expires_at": self.expires_at.isoformat(),
        }


def _serialize_pending(pending: PendingCommand) -> str:
    return json.dumps(
        {
            "token": pending.token,
            "command": pending.command.to_dict(),
            "preview": pending.preview.to_dict(),
            "expires_at": pending.expires_at.isoformat(),
            "confidence": pending.confidence,
            "session_id": pending.session_id,
            "user_id": pending.user_id,
        }
    )


def _deserialize_pending(data: str) -> PendingCommand:
    obj = json.loads(data)
    preview = obj["preview"]
    return PendingCommand(
        token=obj["token"],
        command=parse_command(obj["command"]),
        preview=CommandPreview(
            description=preview["description"],
            impact=preview["impact"],
            reversible=preview["reversible"],
        ),
        expires_at=datetime.fromisoformat(obj["expires_at"]),
        confidence=obj.get("confidence", 1.0),
        session_id=obj.get("session_id"),
        user_id=obj.get("user_id"),
    )


_DESERIALIZE_ERRORS = (json.JSONDecodeError, KeyError, ValidationError, UnknownCommandTypeError)


class PendingCommandManager:
    """Manage pending commands requiring confirmation."""

    def __init__(self, default_expiry_seconds: int = 120) -> None:
        """Initialize the manager.

        Args:
            default_expiry_seconds: Default time until commands expire (default: 120s)
        """
        self.default_expiry_seconds = default_expiry_seconds
        # token -> PendingCommand
        self._pending: dict[str, PendingCommand] = {}

    def _build(
        self,
        command: Command,
        preview: CommandPreview,
        confidence: float,
        session_id: str | None,
        user_id: str | None,
        expiry_seconds: int | None,
    ) -> tuple[PendingCommand, int]:
        expiry = expiry_seconds or self.default_expiry_seconds
        pending = PendingCommand(
            token=secrets.token_urlsafe(32),
            command=command,
            preview=preview,
            expires_at=datetime.now(UTC) + timedelta(seconds=expiry),
            confidence=confidence,
            session_id=session_id,
            user_id=user_id,
        )
        return pending, expiry

    def create(
        self,
        command: Command,
        preview: CommandPreview,
        confidence: float = 1.0,
        session_id: str | None = None,
        user_id: str | None = None,
        expiry_seconds: int | None = None,
    ) -> PendingCommand:
        """Create a new pending command.

        Args:
            command: The command to dispatch on confirmation
            preview: Description, impact and reversibility shown to the user
            confidence: Parse confidence of the command
            session_id: Session the command belongs to
            user_id: Optional user identifier
            expiry_seconds: Custom expiry time, or use default

        Returns:
            PendingCommand with a unique token
        """
        pending, _ = self._build(command, preview, confidence, session_id, user_id, expiry_seconds)
        self._pending[pending.token] = pending
        return pending

    def get(self, token: str) -> PendingCommand | None:
        """Retrieve a pending command by token; None if unknown or expired."""
        pending = self._pending.get(token)
        if pending is None:
            return None

        if pending.is_expired():
            del self._pending[token]
            return None

        return pending

    def confirm(self, token: str) -> PendingCommand | None:
        """Confirm and consume a pending command.

        Returns:
            PendingCommand if found and confirmed, None if not found or expired
        """
        pending = self.get(token)
        if pending is None:
            return None

        del self._pending[token]
        return pending

    def cancel(self, token: str) -> bool:
        """Cancel a pending command.

        Returns:
            True if cancelled, False if not found or expired
        """
        if self.get(token) is None:
            return False

        del self._pending[token]
        return True

    def cleanup_expired(self) -> int:
        """Remove all expired commands.

        Returns:
            Number of expired commands removed
        """
        now = datetime.now(UTC)
        expired_tokens = [token for token, pending in self._pending.items() if pending.expires_at <= now]

        for token in expired_tokens:
            del self._pending[token]

        return len(expired_tokens)


class RedisPendingCommandManager(PendingCommandManager):
    """Redis-backed pending command manager with atomic consumption.

    This implementation provides:
    - Persistent storage across process restarts
    - Exactly-once token consumption
    - Automatic expiration via Redis TTL
    - Fallback to in-memory if Redis unavailable
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        default_expiry_seconds: int = 120,
        key_prefix: str = "pending_command:",
    ) -> None:
        """Initialize the Redis-backed manager.

        Args:
            redis_client: Redis client instance (None to use in-memory fallback)
            default_expiry_seconds: Default time until commands expire (default: 120s)
            key_prefix: Prefix for Redis keys (default: "pending_command:")
        """
        super().__init__(default_expiry_seconds)
        self.redis = redis_client
        self.key_prefix = key_prefix

        if self.redis is None:
            logger.warning("Redis not available, using in-memory fallback for pending commands")
        else:
            logger.info("Using Redis-backed pending command storage")

    def _make_redis_key(self, token: str) -> str:
        return f"{self.key_prefix}{token}"

    def create(
        self,
        command: Command,
        preview: CommandPreview,
        confidence: float = 1.0,
        session_id: str | None = None,
        user_id: str | None = None,
        expiry_seconds: int | None = None,
    ) -> PendingCommand:
        if self.redis is None:
            return super().create(command, preview, confidence, session_id, user_id, expiry_seconds)

        pending, expiry = self._build(command, preview, confidence, session_id, user_id, expiry_seconds)
        try:
            self.redis.setex(self._make_redis_key(pending.token), expiry, _serialize_pending(pending))
            logger.debug("Created pending command %s with TTL %ds", pending.token[:8], expiry)
        except redis.RedisError as e:
            # The command is still returned; confirming it will report not found
            logger.error("Redis error creating pending command: %s", e)

        return pending

    def get(self, token: str) -> PendingCommand | None:
        if self.redis is None:
            return super().get(token)

        redis_key = self._make_redis_key(token)
        try:
            data = self.redis.get(redis_key)
            if data is None:
                return None
            if isinstance(data, bytes):
                data = data.decode()

            pending = _deserialize_pending(data)
            if pending.is_expired():
                self.redis.delete(redis_key)
                return None
            return pending

        except redis.RedisError as e:
            logger.error("Redis error retrieving pending command: %s", e)
            return None
        except _DESERIALIZE_ERRORS as e:
            logger.error("Error deserializing pending command: %s", e)
            return None

    def confirm(self, token: str) -> PendingCommand | None:
        """Confirm and consume a pending command atomically.

        Uses WATCH/MULTI so that concurrent confirmations consume the token once.
        """
        if self.redis is None:
            return super().confirm(token)

        redis_key = self._make_redis_key(token)
        try:
            with self.redis.pipeline() as pipe:
                pipe.watch(redis_key)
                data = pipe.get(redis_key)
                if data is None:
                    pipe.unwatch()
                    return None
                if isinstance(data, bytes):
                    data = data.decode()

                pending = _deserialize_pending(data)

                pipe.multi()
                pipe.delete(redis_key)
                pipe.execute()

            if pending.is_expired():
                return None

            logger.debug("Confirmed and consumed pending command %s", token[:8])
            return pending

        except redis.WatchError:
            # Another process consumed the token
            logger.debug("Concurrent consumption detected for token %s", token[:8])
            return None
        except redis.RedisError as e:
            logger.error("Redis error confirming pending command: %s", e)
            return None
        except _DESERIALIZE_ERRORS as e:
            logger.error("Error deserializing pending command: %s", e)
            return None

    def cancel(self, token: str) -> bool:
        if self.redis is None:
            return super().cancel(token)

        try:
            if self.get(token) is None:
                return False
            return self.redis.delete(self._make_redis_key(token)) > 0
        except redis.RedisError as e:
            logger.error("Redis error cancelling pending command: %s", e)
            return False

    def cleanup_expired(self) -> int:
        """Redis expires keys by TTL; only the in-memory fallback needs cleaning."""
        if self.redis is None:
            return super().cleanup_expired()
        return 0
