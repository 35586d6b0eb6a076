"""Command router: maps command types to async executors."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from voicecommands.commands.categories import capabilities_summary, describe_capabilities
from voicecommands.commands.session_context import CommandExecutionContext, InteractionMode
from voicecommands.commands.taxonomy import COMMAND_TYPES, Command, UnknownCommandTypeError
from voicecommands.commands.verbosity import Verbosity
from voicecommands.logging_utils import log_info, log_warning
from voicecommands.metrics import get_metrics_collector

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Outcome of running one command."""

    ok: bool
    command_type: str
    message: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "ok": self.ok,
            "command_type": self.command_type,
            "message": self.message,
            "data": self.data,
        }


Executor = Callable[[Command, CommandExecutionContext], Awaitable[DispatchResult]]


class CommandRouter:
    """Route commands to registered executors.

    Dispatch never raises: unknown command types and executor failures come
    back as failed ``DispatchResult`` objects.
    """

    def __init__(self, register_builtins: bool = True) -> None:
        """Initialize the router.

        Args:
            register_builtins: Register executors for interaction and help commands
        """
        self._executors: dict[str, Executor] = {}
        self._undo_executors: dict[str, Executor] = {}
        if register_builtins:
            self._register_builtins()

    def register(self, command_type: str, executor: Executor, undo: Executor | None = None) -> None:
        """Register an executor (and optionally its inverse) for a command type.

        Raises:
            UnknownCommandTypeError: If the command type is not in the taxonomy
        """
        if command_type not in COMMAND_TYPES:
            raise UnknownCommandTypeError(f"Unknown command type: {command_type}")
        self._executors[command_type] = executor
        if undo is not None:
            self._undo_executors[command_type] = undo

    def has_handler(self, command_type: str) -> bool:
        return command_type in self._executors

    async def _run(
        self,
        executor: Executor,
        command: Command,
        context: CommandExecutionContext,
    ) -> DispatchResult:
        try:
            return await executor(command, context)
        except Exception:
            logger.exception("Handler for %s failed", command.type)
            return DispatchResult(ok=False, command_type=command.type, message=f"Handler for {command.type} failed")

    async def dispatch(self, command: Command, context: CommandExecutionContext) -> DispatchResult:
        """Run the executor for ``command``.

        On success the command's history entry is marked executed, which makes
        it eligible for undo.
        """
        executor = self._executors.get(command.type)
        if executor is None:
            log_warning(logger, "No handler registered", command=command.type)
            result = DispatchResult(
                ok=False,
                command_type=command.type,
                message=f"No handler registered for {command.type}",
            )
        else:
            result = await self._run(executor, command, context)
            if result.ok:
                context.history.mark_executed(command)

        get_metrics_collector().record_dispatch(command.type, result.ok)
        log_info(logger, "Command dispatched", command=command.type, ok=result.ok)
        return result

    def submit(self, command: Command, context: CommandExecutionContext) -> asyncio.Task[DispatchResult]:
        """Schedule dispatch on the running loop without waiting for it."""
        return asyncio.get_running_loop().create_task(self.dispatch(command, context))

    # Built-in executors ----------------------------------------------------

    def _register_builtins(self) -> None:
        self.register("undo_last", self._undo_last)
        self.register("redo_last", self._redo_last)
        self.register("set_interaction_mode", self._set_interaction_mode)
        self.register("enable_confirmations", self._set_confirmations)
        self.register("disable_confirmations", self._set_confirmations)
        self.register("set_verbosity", self._set_verbosity)
        self.register("list_commands", self._list_commands)
        self.register("what_can_you_do", self._list_commands)

    async def _undo_last(self, command: Command, context: CommandExecutionContext) -> DispatchResult:
        target = context.history.undo_target()
        if target is None:
            return DispatchResult(ok=False, command_type=command.type, message="Nothing to undo")

        undo = self._undo_executors.get(target.command.type)
        if undo is None:
            return DispatchResult(
                ok=False,
                command_type=command.type,
                message=f"{target.command.type} cannot be undone",
            )

        result = await self._run(undo, target.command, context)
        if not result.ok:
            return DispatchResult(ok=False, command_type=command.type, message=result.message)

        target.undone = True
        return DispatchResult(
            ok=True,
            command_type=command.type,
            message=f"Undid {target.command.type.replace('_', ' ')}",
            data={"undone": target.command.to_dict()},
        )

    async def _redo_last(self, command: Command, context: CommandExecutionContext) -> DispatchResult:
        target = context.history.redo_target()
        if target is None:
            return DispatchResult(ok=False, command_type=command.type, message="Nothing to redo")

        executor = self._executors.get(target.command.type)
        if executor is None:
            return DispatchResult(
                ok=False,
                command_type=command.type,
                message=f"No handler registered for {target.command.type}",
            )

        result = await self._run(executor, target.command, context)
        if not result.ok:
            return DispatchResult(ok=False, command_type=command.type, message=result.message)

        target.undone = False
        return DispatchResult(
            ok=True,
            command_type=command.type,
            message=f"Redid {target.command.type.replace('_', ' ')}",
            data={"redone": target.command.to_dict()},
        )

    async def _set_interaction_mode(self, command: Command, context: CommandExecutionContext) -> DispatchResult:
        context.mode = InteractionMode(command.mode)
        return DispatchResult(
            ok=True,
            command_type=command.type,
            message=f"Switched to {context.mode.value} mode",
        )

    async def _set_confirmations(self, command: Command, context: CommandExecutionContext) -> DispatchResult:
        context.requires_confirmation = command.type == "enable_confirmations"
        state = "on" if context.requires_confirmation else "off"
        return DispatchResult(ok=True, command_type=command.type, message=f"Confirmations are {state}")

    async def _set_verbosity(self, command: Command, context: CommandExecutionContext) -> DispatchResult:
        context.verbosity = Verbosity(command.level)
        return DispatchResult(
            ok=True,
            command_type=command.type,
            message=f"Verbosity set to {context.verbosity.value}",
        )

    async def _list_commands(self, command: Command, context: CommandExecutionContext) -> DispatchResult:
        max_categories = 4 if context.verbosity == Verbosity.MINIMAL else None
        return DispatchResult(
            ok=True,
            command_type=command.type,
            message=capabilities_summary(max_categories),
            data={"categories": describe_capabilities()},
        )
