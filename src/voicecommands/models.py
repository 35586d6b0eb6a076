"""Pydantic request and response models for the HTTP API."""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class TextRequest(BaseModel):
    """Utterance to parse."""

    text: str = Field(..., max_length=10000, examples=["create a task to review the budget tomorrow"])


class IntentPayload(BaseModel):
    """Parsed intent (command in wire form)."""

    command: dict[str, Any]
    confidence: float = Field(..., ge=0.0, le=1.0)
    original: str


class ParseResponse(BaseModel):
    """Parse-only response."""

    matched: bool
    intent: IntentPayload | None = None


class CommandStatus(str, Enum):
    """What happened to a submitted utterance."""

    EXECUTE = "execute"
    NEEDS_CONFIRMATION = "needs_confirmation"
    NEEDS_CLARIFICATION = "needs_clarification"
    NO_MATCH = "no_match"


class PreviewPayload(BaseModel):
    description: str
    impact: Literal["low", "medium", "high"]
    reversible: bool


class PendingCommandPayload(BaseModel):
    """Pending command awaiting confirmation."""

    token: str
    expires_at: datetime
    preview: PreviewPayload


class DispatchPayload(BaseModel):
    """Handler outcome."""

    ok: bool
    command_type: str
    message: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class CommandResponse(BaseModel):
    """Command response."""

    status: CommandStatus
    session_id: str
    intent: IntentPayload | None = None
    command: dict[str, Any] | None = None
    pending: PendingCommandPayload | None = None
    result: DispatchPayload | None = None
    looks_like_question: bool = False


class ConfirmRequest(BaseModel):
    """Confirm or cancel request."""

    token: str


class CancelResponse(BaseModel):
    cancelled: bool


class CategoryPayload(BaseModel):
    category: str
    description: str
    commands: list[str]
    examples: list[str]


class CapabilitiesResponse(BaseModel):
    categories: list[CategoryPayload]
