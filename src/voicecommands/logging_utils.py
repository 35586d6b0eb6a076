"""Logging utilities with redaction and session context.

Provides:
- Redaction of email addresses, webhook URLs and account numbers in utterances
- Structured logging helpers
- Session ID context management
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Any

# Context variable for session ID (thread-safe and async-safe)
_session_id_var: ContextVar[str | None] = ContextVar("session_id", default=None)

# Patterns for redaction, applied in order
REDACTION_PATTERNS = [
    (re.compile(r"https?://\S+", re.IGNORECASE), "***URL***"),
    (re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+"), "***EMAIL***"),
    # Card and account numbers: 8+ digits, optionally grouped
    (re.compile(r"\b\d(?:[ -]?\d){7,}\b"), "***NUMBER***"),
]

# Pattern for Authorization header values
AUTH_HEADER_PATTERN = re.compile(
    r"(Authorization[:\s]+)((?:Bearer|Basic|Token)\s+)?([^\s,;]+)",
    re.IGNORECASE,
)


def redact_utterance(text: str | None) -> str:
    """Redact personal data and secrets from an utterance before logging.

    Args:
        text: Utterance that may contain addresses, URLs or account numbers

    Returns:
        Text with sensitive spans replaced
    """
    if text is None:
        return ""

    if not isinstance(text, str):
        text = str(text)

    for pattern, replacement in REDACTION_PATTERNS:
        text = pattern.sub(replacement, text)

    # Redact Authorization header values
    text = AUTH_HEADER_PATTERN.sub(r"\1\2***REDACTED***", text)

    return text


def set_session_id(session_id: str | None = None) -> str:
    """Set the session ID for the current context.

    Args:
        session_id: Optional session ID (generates one if not provided)

    Returns:
        The session ID that was set
    """
    if session_id is None:
        session_id = str(uuid.uuid4())

    _session_id_var.set(session_id)
    return session_id


def get_session_id() -> str | None:
    """Get the session ID for the current context."""
    return _session_id_var.get()


def clear_session_id() -> None:
    """Clear the session ID from the current context."""
    _session_id_var.set(None)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **kwargs: Any,
) -> None:
    """Log a message with structured context (session_id, command, etc.).

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, logging.ERROR, etc.)
        message: Log message
        **kwargs: Additional structured fields to include
    """
    if not logger.isEnabledFor(level):
        return

    parts = [message]

    session_id = get_session_id()
    if session_id:
        parts.append(f"session_id={session_id}")

    for key, value in kwargs.items():
        safe_value = redact_utterance(str(value))
        parts.append(f"{key}={safe_value}")

    logger.log(level, " | ".join(parts))


def log_info(logger: logging.Logger, message: str, **kwargs: Any) -> None:
    """Log an info message with structured context."""
    log_with_context(logger, logging.INFO, message, **kwargs)


def log_warning(logger: logging.Logger, message: str, **kwargs: Any) -> None:
    """Log a warning message with structured context."""
    log_with_context(logger, logging.WARNING, message, **kwargs)


def log_error(logger: logging.Logger, message: str, **kwargs: Any) -> None:
    """Log an error message with structured context."""
    log_with_context(logger, logging.ERROR, message, **kwargs)


def log_debug(logger: logging.Logger, message: str, **kwargs: Any) -> None:
    """Log a debug message with structured context."""
    log_with_context(logger, logging.DEBUG, message, **kwargs)
