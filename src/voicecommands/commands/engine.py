"""Interaction-mode engine deciding what happens to a parsed command.

Depending on the session's interaction mode, a parsed command is either
returned for immediate dispatch, wrapped in a ``PendingCommand`` awaiting
confirmation, or replaced by a ``request_clarification`` question.
"""

import logging
from enum import Enum
from typing import Any

from voicecommands.commands.impact import INTERACTION_COMMANDS, classify_impact, is_reversible
from voicecommands.commands.parsers.types import ParsedIntent
from voicecommands.commands.pending_actions import CommandPreview, PendingCommand, PendingCommandManager
from voicecommands.commands.session_context import CommandExecutionContext, InteractionMode
from voicecommands.commands.taxonomy import Command, build_command
from voicecommands.commands.verbosity import VerbosityConfig
from voicecommands.config import get_engine_config
from voicecommands.logging_utils import log_info

logger = logging.getLogger(__name__)


class Disposition(str, Enum):
    """Outcome of running a command through the engine."""

    EXECUTE = "execute"
    NEEDS_CONFIRMATION = "needs_confirmation"
    NEEDS_CLARIFICATION = "needs_clarification"


# Command type -> fields of which at least one must name the target
REQUIRED_TARGETS: dict[str, tuple[str, ...]] = {
    "complete_task": ("task_id", "task_title"),
    "update_task": ("task_id", "task_title"),
    "delete_task": ("task_id", "task_title"),
    "assign_task": ("task_id", "task_title"),
    "cancel_event": ("event_id", "event_title"),
    "reschedule_event": ("event_id", "event_title"),
    "update_goal_progress": ("goal_id", "goal_title"),
    "complete_habit": ("habit_id", "habit_name"),
    "update_widget": ("widget_id", "widget_name"),
    "delete_widget": ("widget_id", "widget_name"),
    "train_agent": ("agent_id",),
    "update_contact": ("contact_id", "name"),
    "delete_contact": ("contact_id", "name"),
    "log_interaction": ("contact_id", "contact_name"),
    "schedule_followup": ("contact_id", "contact_name"),
    "update_lead_status": ("lead_id", "lead_name"),
    "update_deal": ("deal_id", "deal_title"),
    "update_project": ("project_id", "project_name"),
    "delete_project": ("project_id", "project_name"),
    "complete_milestone": ("milestone_id", "title"),
    "assign_team_member": ("member_id", "member_name"),
    "remove_team_member": ("member_id", "member_name"),
    "control_device": ("device_id", "device_name"),
    "set_device_value": ("device_id", "device_name"),
    "set_schedule": ("device_id", "device_name"),
    "add_this_to_project": ("project_id", "project_name"),
    "toggle_automation": ("automation_id", "automation_name"),
    "delete_automation": ("automation_id", "automation_name"),
    "test_automation": ("automation_id", "automation_name"),
    "set_automation_schedule": ("automation_id", "automation_name"),
}

# Slots that best name what a command is about, in order of preference
_HEADLINE_SLOTS = (
    "title",
    "name",
    "task_title",
    "event_title",
    "contact_name",
    "project_name",
    "device_name",
    "automation_name",
    "widget_name",
    "query",
    "question",
    "purpose",
    "metric",
    "path",
    "to",
    "recipient_email",
    "scene_name",
    "routine_name",
    "template_name",
    "dialog",
    "mode",
    "theme",
)


def _verb_phrase(command_type: str) -> str:
    return command_type.replace("_", " ")


def _format_value(value: Any) -> str:
    if isinstance(value, Command):
        return _verb_phrase(value.type)
    if isinstance(value, list):
        return ", ".join(_format_value(item) for item in value)
    if isinstance(value, dict):
        return ", ".join(f"{key} {_format_value(item)}" for key, item in value.items())
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def describe(command: Command, config: VerbosityConfig | None = None) -> str:
    """Human-readable one-line description of a command.

    Args:
        command: Command to describe
        config: Verbosity limits (default: normal)

    Returns:
        e.g. "Create task: review the budget tomorrow (priority medium, due date tomorrow)"
    """
    config = config or VerbosityConfig.for_level("normal")
    slots = {name: getattr(command, name) for name in command.slots()}

    headline_key = next((key for key in _HEADLINE_SLOTS if isinstance(slots.get(key), str)), None)
    text = _verb_phrase(command.type).capitalize()
    if headline_key is not None:
        text += f": {slots.pop(headline_key)}"

    details = [f"{key.replace('_', ' ')} {_format_value(value)}" for key, value in slots.items()]
    if config.max_detail_slots is not None:
        details = details[: config.max_detail_slots]
    if details:
        text += f" ({'; '.join(details)})"

    return config.truncate_spoken_text(text)


def build_preview(command: Command, config: VerbosityConfig | None = None) -> CommandPreview:
    """Preview shown before a command runs: description, impact and reversibility."""
    return CommandPreview(
        description=describe(command, config),
        impact=classify_impact(command.type),
        reversible=is_reversible(command.type),
    )


def missing_target(command: Command) -> tuple[str, ...] | None:
    """Return the target fields when none of them is populated, else None."""
    targets = REQUIRED_TARGETS.get(command.type)
    if targets is None:
        return None
    slots = command.slots()
    if any(field in slots for field in targets):
        return None
    return targets


def clarification(intent: ParsedIntent, config: VerbosityConfig | None = None) -> Command:
    """Build the ``request_clarification`` asked instead of running ``intent``."""
    command = intent.command
    targets = missing_target(command)
    if targets is not None:
        noun = targets[0].rsplit("_", 1)[0].replace("_", " ")
        verb = command.type.split("_", 1)[0]
        return build_command("request_clarification", question=f"Which {noun} should I {verb}?")

    return build_command(
        "request_clarification",
        question=f"Did you mean: {describe(command, config)}?",
        options=["yes", "no"],
    )


def disposition_of(result: Command | PendingCommand) -> Disposition:
    if isinstance(result, PendingCommand):
        return Disposition.NEEDS_CONFIRMATION
    if result.type == "request_clarification":
        return Disposition.NEEDS_CLARIFICATION
    return Disposition.EXECUTE


class ExecutionEngine:
    """Apply the session's interaction mode to parsed commands."""

    def __init__(
        self,
        pending_commands: PendingCommandManager | None = None,
        confidence_threshold: float | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            pending_commands: Store for commands awaiting confirmation
            confidence_threshold: Minimum confidence to act without asking
                (default: from engine config)
        """
        config = get_engine_config()
        self.pending_commands = pending_commands or PendingCommandManager(config.pending_expiry_seconds)
        if confidence_threshold is None:
            confidence_threshold = config.confidence_threshold
        self.confidence_threshold = confidence_threshold

    def _pending(self, intent: ParsedIntent, context: CommandExecutionContext) -> PendingCommand:
        verbosity = VerbosityConfig.for_level(context.verbosity)
        return self.pending_commands.create(
            intent.command,
            build_preview(intent.command, verbosity),
            confidence=intent.confidence,
            session_id=context.session_id,
            user_id=context.user_id,
        )

    def _needs_confirmation(self, command: Command, context: CommandExecutionContext) -> bool:
        if not context.requires_confirmation or command.type in INTERACTION_COMMANDS:
            return False
        return classify_impact(command.type) in ("medium", "high")

    def process(self, intent: ParsedIntent, context: CommandExecutionContext) -> Command | PendingCommand:
        """Decide how to handle a parsed command and record it in history.

        Args:
            intent: Result of the intent parser
            context: Session context; its history is appended to

        Returns:
            The command to dispatch now, a PendingCommand awaiting
            confirmation, or a request_clarification command
        """
        command = intent.command
        context.history.append(command)
        confident = intent.confidence >= self.confidence_threshold

        if context.mode == InteractionMode.PREVIEW:
            result: Command | PendingCommand = self._pending(intent, context)
        elif context.mode == InteractionMode.CONVERSATIONAL and (
            not confident or missing_target(command) is not None
        ):
            result = clarification(intent, VerbosityConfig.for_level(context.verbosity))
        elif not confident or self._needs_confirmation(command, context):
            result = self._pending(intent, context)
        else:
            result = command

        log_info(
            logger,
            "Command processed",
            command=command.type,
            mode=context.mode.value,
            confidence=intent.confidence,
            disposition=disposition_of(result).value,
        )
        return result
