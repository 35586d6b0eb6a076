"""FastAPI surface for parsing and executing voice commands."""

import logging
import time
import uuid
from typing import Any

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse

from voicecommands.commands.categories import describe_capabilities
from voicecommands.commands.engine import ExecutionEngine, disposition_of
from voicecommands.commands.intent_parser import ParsedIntent, get_intent_parser
from voicecommands.commands.parsers import question
from voicecommands.commands.pending_actions import PendingCommand, RedisPendingCommandManager
from voicecommands.commands.router import CommandRouter, DispatchResult
from voicecommands.commands.session_context import RedisContextStore
from voicecommands.config import get_engine_config
from voicecommands.logging_utils import clear_session_id, log_info, set_session_id
from voicecommands.metrics import get_metrics_collector, is_metrics_enabled
from voicecommands.models import (
    CancelResponse,
    CapabilitiesResponse,
    CommandResponse,
    CommandStatus,
    ConfirmRequest,
    DispatchPayload,
    IntentPayload,
    ParseResponse,
    PendingCommandPayload,
    PreviewPayload,
    TextRequest,
)
from voicecommands.redis_client import get_redis_client

logger = logging.getLogger(__name__)
app = FastAPI(
    title="Voice Commands API",
    version="1.0.0",
    description="Natural-language command parsing and interaction-mode engine",
)

# Command infrastructure (initialized lazily)
_context_store: RedisContextStore | None = None
_engine: ExecutionEngine | None = None
_command_router: CommandRouter | None = None


def get_context_store() -> RedisContextStore:
    global _context_store
    if _context_store is None:
        _context_store = RedisContextStore(get_redis_client())
    return _context_store


def get_engine() -> ExecutionEngine:
    """Get or initialize the engine with Redis-backed pending commands when available."""
    global _engine
    if _engine is None:
        config = get_engine_config()
        _engine = ExecutionEngine(
            RedisPendingCommandManager(get_redis_client(), config.pending_expiry_seconds),
        )
    return _engine


def get_command_router() -> CommandRouter:
    global _command_router
    if _command_router is None:
        _command_router = CommandRouter()
    return _command_router


def reset_state() -> None:
    """Drop lazily created components (used by tests)."""
    global _context_store, _engine, _command_router
    _context_store = None
    _engine = None
    _command_router = None


def _intent_payload(intent: ParsedIntent) -> IntentPayload:
    return IntentPayload(**intent.to_dict())


def _pending_payload(pending: PendingCommand) -> PendingCommandPayload:
    return PendingCommandPayload(
        token=pending.token,
        expires_at=pending.expires_at,
        preview=PreviewPayload(**pending.preview.to_dict()),
    )


def _dispatch_payload(result: DispatchResult) -> DispatchPayload:
    return DispatchPayload(**result.to_dict())


def _looks_like_question(text: str) -> bool:
    stripped = text.strip()
    return question.parse(stripped.lower(), stripped) is not None


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/v1/parse", response_model=ParseResponse)
def parse_text(request: TextRequest) -> ParseResponse:
    """Parse an utterance without executing it."""
    intent = get_intent_parser().parse(request.text)
    if intent is None:
        return ParseResponse(matched=False)
    return ParseResponse(matched=True, intent=_intent_payload(intent))


@app.post("/v1/command", response_model=CommandResponse)
async def submit_command(
    request: TextRequest,
    x_session_id: str | None = Header(default=None, alias="X-Session-Id"),
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> CommandResponse:
    """Parse an utterance and apply the session's interaction mode.

    Args:
        request: Utterance to handle
        x_session_id: Session identifier (a new one is issued when absent)
        x_user_id: Optional user identifier

    Returns:
        CommandResponse with the disposition and, for executed commands,
        the handler result
    """
    started = time.perf_counter()
    session_id = set_session_id(x_session_id or str(uuid.uuid4()))
    try:
        metrics = get_metrics_collector()
        async with get_context_store().session(session_id, user_id=x_user_id) as context:
            intent = get_intent_parser().parse(request.text)
            if intent is None:
                metrics.record_disposition(CommandStatus.NO_MATCH.value, (time.perf_counter() - started) * 1000)
                return CommandResponse(
                    status=CommandStatus.NO_MATCH,
                    session_id=session_id,
                    looks_like_question=_looks_like_question(request.text),
                )

            outcome = get_engine().process(intent, context)
            status = CommandStatus(disposition_of(outcome).value)
            response = CommandResponse(
                status=status,
                session_id=session_id,
                intent=_intent_payload(intent),
                looks_like_question=intent.name == "ask_atlas",
            )

            if isinstance(outcome, PendingCommand):
                response.pending = _pending_payload(outcome)
            else:
                response.command = outcome.to_dict()
                if status == CommandStatus.EXECUTE:
                    result = await get_command_router().dispatch(outcome, context)
                    response.result = _dispatch_payload(result)

        metrics.record_disposition(status.value, (time.perf_counter() - started) * 1000)
        log_info(logger, "Command handled", command=intent.name, status=status.value)
        return response
    finally:
        clear_session_id()


@app.post("/v1/commands/confirm", response_model=CommandResponse)
async def confirm_command(request: ConfirmRequest) -> CommandResponse:
    """Confirm a pending command and dispatch it."""
    metrics = get_metrics_collector()
    pending = get_engine().pending_commands.confirm(request.token)
    if pending is None:
        metrics.record_confirmation("not_found")
        raise HTTPException(
            status_code=404,
            detail={"error": "not_found", "message": "Pending command not found or expired"},
        )

    session_id = set_session_id(pending.session_id or str(uuid.uuid4()))
    try:
        async with get_context_store().session(session_id, user_id=pending.user_id) as context:
            result = await get_command_router().dispatch(pending.command, context)
        metrics.record_confirmation("ok")
        return CommandResponse(
            status=CommandStatus.EXECUTE,
            session_id=session_id,
            command=pending.command.to_dict(),
            result=_dispatch_payload(result),
        )
    finally:
        clear_session_id()


@app.post("/v1/commands/cancel", response_model=CancelResponse)
def cancel_command(request: ConfirmRequest) -> CancelResponse:
    """Discard a pending command."""
    if not get_engine().pending_commands.cancel(request.token):
        get_metrics_collector().record_confirmation("not_found")
        raise HTTPException(
            status_code=404,
            detail={"error": "not_found", "message": "Pending command not found or expired"},
        )
    get_metrics_collector().record_confirmation("cancelled")
    return CancelResponse(cancelled=True)


@app.get("/v1/capabilities", response_model=CapabilitiesResponse)
def get_capabilities() -> dict[str, Any]:
    """List command categories with examples."""
    return {"categories": describe_capabilities()}


@app.get("/v1/metrics")
def get_metrics() -> dict[str, Any]:
    """Metrics snapshot; enabled with VOICECOMMANDS_ENABLE_METRICS=true."""
    if not is_metrics_enabled():
        raise HTTPException(
            status_code=404,
            detail={"error": "not_found", "message": "Metrics are disabled"},
        )
    return get_metrics_collector().get_snapshot()


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTPExceptions and return Error schema."""
    if isinstance(exc.detail, dict):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "http_error",
            "message": str(exc.detail),
        },
    )
