"""Closed set of typed commands produced by the intent parser.

Every command is a frozen pydantic model with a ``type`` discriminator. The
registry is append-only: tags are never renamed or removed so that saved and
scheduled commands stay valid.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, SerializeAsAny, create_model
from pydantic.alias_generators import to_camel


class UnknownCommandTypeError(ValueError):
    """Raised when a command tag is not part of the taxonomy."""


class Command(BaseModel):
    """Base class for every command variant."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    type: str

    def slots(self) -> dict[str, Any]:
        """Return the populated fields (snake_case), without the tag."""
        return self.model_dump(exclude={"type"}, exclude_none=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire form (camelCase keys, absent fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)


def _coerce_command(value: Any) -> Any:
    if isinstance(value, dict):
        return parse_command(value)
    return value


# Nested commands are rebuilt from their tag so JSON round trips keep the variant.
CommandField = Annotated[SerializeAsAny[Command], BeforeValidator(_coerce_command)]

Priority = Literal["low", "medium", "high", "critical"]
Frequency = Literal["daily", "weekly", "monthly"]
AutomationTrigger = Literal[
    "email_received",
    "email_sent",
    "contact_added",
    "task_completed",
    "event_created",
    "expense_added",
    "goal_completed",
    "habit_completed",
    "document_uploaded",
    "custom",
]
AutomationProvider = Literal["zapier", "make", "n8n", "custom"]
DialogName = Literal[
    "create_agent",
    "import_agents",
    "connect_platform",
    "create_channel",
    "compose_email",
    "create_task",
    "create_event",
    "create_widget",
    "settings",
    "add_bank_account",
]


def _req(annotation: Any) -> tuple[Any, Any]:
    return (annotation, ...)


def _opt(annotation: Any) -> tuple[Any, Any]:
    return (annotation | None, None)


# tag -> field definitions (pydantic ``create_model`` format)
_COMMAND_FIELDS: dict[str, dict[str, tuple[Any, Any]]] = {
    # Navigation
    "navigate": {"path": _req(str)},
    "switch_tab": {"tab": _req(Literal["command", "insights", "admin"])},
    "expand_domain": {"domain": _req(str)},
    "collapse_domain": {},
    "switch_persona": {"persona": _req(str)},
    "open_dialog": {"dialog": _req(DialogName)},
    # Filtering & search
    "filter": {"entity": _req(str), "criteria": _req(dict[str, Any])},
    "search": {
        "query": _req(str),
        "scope": _opt(Literal["agents", "documents", "all", "tasks", "emails", "events"]),
    },
    "clear_filters": {},
    # Reports
    "generate_report": {"persona": _opt(str)},
    "run_query": {"query": _req(str)},
    "export_data": {"format": _opt(Literal["csv", "pdf", "json"]), "entity": _opt(str)},
    # System & UI
    "refresh_data": {},
    "toggle_theme": {},
    "set_theme": {"theme": _req(Literal["light", "dark"])},
    "toggle_fullscreen": {},
    "toggle_sidebar": {},
    "show_notification": {
        "message": _req(str),
        "variant": _opt(Literal["success", "error", "info"]),
    },
    "voice_response": {"text": _req(str)},
    "sync_all": {},
    "clear_cache": {},
    "check_status": {},
    "get_summary": {},
    # Agents
    "select_agent": {"agent_id": _req(str)},
    "filter_agents": {"sector": _opt(str), "status": _opt(str), "capability": _opt(str)},
    "train_agent": {"agent_id": _opt(str), "task_type": _opt(str)},
    "allocate_agents": {"task_id": _opt(str), "count": _opt(int)},
    "create_swarm": {"agent_ids": _opt(list[str]), "purpose": _opt(str)},
    "get_agent_status": {"agent_id": _opt(str)},
    "transfer_knowledge": {"from_agent_id": _opt(str), "to_agent_id": _opt(str)},
    # Workflows
    "trigger_workflow": {"workflow_id": _req(str)},
    "create_workflow": {"name": _req(str), "description": _opt(str)},
    "list_workflows": {},
    "stop_workflow": {"workflow_id": _opt(str)},
    # Communications
    "draft_email": {"to": _opt(str), "subject": _opt(str), "intent": _req(str)},
    "send_email": {"to": _req(str), "subject": _opt(str), "content": _opt(str)},
    "compose_email": {
        "to": _req(str),
        "subject": _opt(str),
        "intent": _req(str),
        "urgency": _opt(Literal["low", "normal", "high"]),
    },
    "open_communications": {},
    "check_inbox": {},
    "reply_to_email": {"email_id": _opt(str), "intent": _opt(str)},
    "forward_email": {"email_id": _opt(str), "to": _opt(str)},
    # Tasks
    "create_task": {
        "title": _req(str),
        "description": _opt(str),
        "priority": _opt(Priority),
        "due_date": _opt(str),
    },
    "complete_task": {"task_id": _opt(str), "task_title": _opt(str)},
    "update_task": {
        "task_id": _opt(str),
        "task_title": _opt(str),
        "updates": _req(dict[str, Any]),
    },
    "list_tasks": {"filter": _opt(Literal["all", "today", "overdue", "upcoming"])},
    "delete_task": {"task_id": _opt(str), "task_title": _opt(str)},
    "assign_task": {"task_id": _opt(str), "task_title": _opt(str), "agent_id": _opt(str)},
    # Notes & reminders
    "create_note": {"title": _req(str), "content": _opt(str), "tags": _opt(list[str])},
    "create_reminder": {
        "title": _req(str),
        "reminder_at": _req(str),
        "description": _opt(str),
    },
    "list_notes": {},
    "search_notes": {"query": _req(str)},
    # Goals & habits
    "create_goal": {
        "title": _req(str),
        "target_value": _opt(float),
        "target_date": _opt(str),
        "category": _opt(str),
    },
    "update_goal_progress": {"goal_id": _opt(str), "goal_title": _opt(str), "value": _req(float)},
    "list_goals": {},
    "create_habit": {"name": _req(str), "frequency": _req(Frequency)},
    "complete_habit": {"habit_id": _opt(str), "habit_name": _opt(str)},
    "get_habit_streak": {"habit_name": _opt(str)},
    # Calendar
    "create_event": {
        "title": _req(str),
        "start_at": _req(str),
        "end_at": _opt(str),
        "location": _opt(str),
        "attendees": _opt(list[str]),
    },
    "list_events": {"timeframe": _opt(Literal["today", "tomorrow", "this_week", "next_week"])},
    "cancel_event": {"event_id": _opt(str), "event_title": _opt(str)},
    "reschedule_event": {"event_id": _opt(str), "event_title": _opt(str), "new_time": _req(str)},
    "get_availability": {"date": _opt(str)},
    "block_time": {"start_at": _req(str), "end_at": _opt(str), "reason": _opt(str)},
    "show_calendar": {},
    # Banking & finance
    "check_balance": {"account_id": _opt(str)},
    "list_transactions": {
        "filter": _opt(Literal["recent", "pending", "all"]),
        "account_id": _opt(str),
    },
    "categorize_transaction": {"transaction_id": _opt(str), "category": _req(str)},
    "get_financial_summary": {"period": _opt(Literal["today", "week", "month", "year"])},
    "reconcile_accounts": {},
    "add_expense": {"amount": _req(float), "category": _req(str), "description": _opt(str)},
    "set_budget": {
        "category": _req(str),
        "amount": _req(float),
        "period": _opt(Literal["monthly", "weekly"]),
    },
    "get_cash_flow": {},
    # Widgets
    "create_widget": {"purpose": _req(str), "data_source": _opt(str)},
    "update_widget": {"widget_id": _opt(str), "widget_name": _opt(str), "updates": _req(dict[str, Any])},
    "delete_widget": {"widget_id": _opt(str), "widget_name": _opt(str)},
    "list_widgets": {},
    "refresh_widget": {"widget_id": _opt(str), "widget_name": _opt(str)},
    # Documents
    "upload_file": {"category": _opt(str)},
    "search_documents": {"query": _req(str)},
    "list_documents": {"category": _opt(str)},
    "analyze_document": {"document_id": _opt(str)},
    "summarize_document": {"document_id": _opt(str)},
    "create_document": {"title": _req(str), "content": _opt(str), "doc_type": _opt(str)},
    # Knowledge
    "save_knowledge": {"title": _req(str), "content": _req(str), "category": _opt(str)},
    "search_knowledge": {"query": _req(str)},
    "get_insights": {"topic": _opt(str)},
    "ask_atlas": {"question": _req(str)},
    # Dashboard
    "add_to_dashboard": {"widget_type": _req(str)},
    "rearrange_dashboard": {},
    "reset_dashboard": {},
    "share_dashboard": {"email": _opt(str)},
    # Help
    "get_help": {"topic": _opt(str)},
    "show_tutorial": {"feature": _opt(str)},
    "list_commands": {},
    "what_can_you_do": {},
    # CRM
    "create_contact": {
        "name": _req(str),
        "email": _opt(str),
        "phone": _opt(str),
        "company": _opt(str),
        "role": _opt(str),
    },
    "update_contact": {"contact_id": _opt(str), "name": _opt(str), "updates": _req(dict[str, Any])},
    "delete_contact": {"contact_id": _opt(str), "name": _opt(str)},
    "search_contacts": {"query": _req(str)},
    "list_contacts": {"filter": _opt(Literal["all", "recent", "favorites"])},
    "log_interaction": {
        "contact_id": _opt(str),
        "contact_name": _opt(str),
        "interaction_type": _req(Literal["call", "email", "meeting", "note"]),
        "summary": _req(str),
    },
    "get_contact_history": {"contact_id": _opt(str), "contact_name": _opt(str)},
    "create_lead": {
        "name": _req(str),
        "email": _opt(str),
        "source": _opt(str),
        "value": _opt(float),
    },
    "update_lead_status": {
        "lead_id": _opt(str),
        "lead_name": _opt(str),
        "status": _req(Literal["new", "contacted", "qualified", "proposal", "won", "lost"]),
    },
    "list_leads": {"filter": _opt(Literal["all", "hot", "warm", "cold"])},
    "create_deal": {
        "title": _req(str),
        "value": _req(float),
        "contact_id": _opt(str),
        "stage": _opt(str),
    },
    "update_deal": {"deal_id": _opt(str), "deal_title": _opt(str), "updates": _req(dict[str, Any])},
    "get_pipeline_summary": {},
    "schedule_followup": {
        "contact_id": _opt(str),
        "contact_name": _opt(str),
        "followup_date": _req(str),
        "note": _opt(str),
    },
    # Projects
    "create_project": {
        "name": _req(str),
        "description": _opt(str),
        "deadline": _opt(str),
        "priority": _opt(Literal["low", "medium", "high"]),
    },
    "update_project": {
        "project_id": _opt(str),
        "project_name": _opt(str),
        "updates": _req(dict[str, Any]),
    },
    "delete_project": {"project_id": _opt(str), "project_name": _opt(str)},
    "list_projects": {"filter": _opt(Literal["all", "active", "completed", "on_hold"])},
    "get_project_status": {"project_id": _opt(str), "project_name": _opt(str)},
    "create_milestone": {
        "project_id": _opt(str),
        "project_name": _opt(str),
        "title": _req(str),
        "due_date": _req(str),
    },
    "complete_milestone": {"milestone_id": _opt(str), "title": _opt(str)},
    "assign_team_member": {
        "project_id": _opt(str),
        "project_name": _opt(str),
        "member_id": _opt(str),
        "member_name": _opt(str),
        "role": _opt(str),
    },
    "remove_team_member": {
        "project_id": _opt(str),
        "project_name": _opt(str),
        "member_id": _opt(str),
        "member_name": _opt(str),
    },
    "get_project_timeline": {"project_id": _opt(str), "project_name": _opt(str)},
    "create_sprint": {
        "project_id": _opt(str),
        "name": _req(str),
        "start_date": _req(str),
        "end_date": _req(str),
    },
    "add_to_sprint": {"sprint_id": _opt(str), "task_id": _opt(str), "task_title": _opt(str)},
    "get_sprint_burndown": {"sprint_id": _opt(str)},
    "create_epic": {"title": _req(str), "description": _opt(str), "project_id": _opt(str)},
    "link_tasks_to_epic": {"epic_id": _opt(str), "task_ids": _req(list[str])},
    # Analytics
    "get_analytics": {"metric": _req(str), "period": _opt(str)},
    "compare_periods": {"metric": _req(str), "period1": _req(str), "period2": _req(str)},
    "get_trends": {
        "metric": _req(str),
        "time_range": _opt(Literal["week", "month", "quarter", "year"]),
    },
    "create_dashboard_widget": {
        "metric": _req(str),
        "chart_type": _opt(Literal["line", "bar", "pie", "area"]),
    },
    "schedule_report": {
        "report_type": _req(str),
        "frequency": _req(Frequency),
        "recipients": _opt(list[str]),
    },
    "get_kpi_summary": {"category": _opt(str)},
    "set_alert": {
        "metric": _req(str),
        "threshold": _req(float),
        "condition": _req(Literal["above", "below", "equals"]),
    },
    "get_forecast": {"metric": _req(str), "periods": _req(int)},
    "run_analysis": {
        "analysis_type": _req(Literal["cohort", "funnel", "retention", "segmentation"]),
        "parameters": _opt(dict[str, Any]),
    },
    "export_analytics": {
        "format": _req(Literal["csv", "pdf", "excel"]),
        "metrics": _opt(list[str]),
    },
    # Smart home / IoT
    "control_device": {
        "device_id": _opt(str),
        "device_name": _opt(str),
        "action": _req(Literal["on", "off", "toggle", "dim", "set"]),
    },
    "set_device_value": {
        "device_id": _opt(str),
        "device_name": _opt(str),
        "value": _req(float | str),
    },
    "get_device_status": {"device_id": _opt(str), "device_name": _opt(str)},
    "list_devices": {"room": _opt(str), "device_type": _opt(str)},
    "create_scene": {"name": _req(str), "devices": _req(list[dict[str, Any]])},
    "activate_scene": {"scene_name": _req(str)},
    "set_schedule": {
        "device_id": _opt(str),
        "device_name": _opt(str),
        "schedule": _req(dict[str, Any]),
    },
    "get_energy_usage": {"period": _opt(Literal["day", "week", "month"])},
    "set_thermostat": {
        "temperature": _req(float),
        "mode": _opt(Literal["heat", "cool", "auto"]),
    },
    "lock_door": {"door_id": _opt(str), "door_name": _opt(str)},
    "unlock_door": {"door_id": _opt(str), "door_name": _opt(str)},
    "arm_security": {"mode": _opt(Literal["home", "away", "night"])},
    "disarm_security": {},
    # Scheduled & recurring
    "schedule_command": {
        "command": _req(CommandField),
        "execute_at": _req(str),
        "recurring": _opt(bool),
        "frequency": _opt(Frequency),
    },
    "list_scheduled_commands": {},
    "cancel_scheduled_command": {"schedule_id": _req(str)},
    "set_daily_routine": {
        "name": _req(str),
        "time": _req(str),
        "commands": (list[CommandField], []),
    },
    "run_routine": {"routine_name": _req(str)},
    "snooze_reminder": {"reminder_id": _opt(str), "duration": _opt(int)},
    # Multi-step workflows
    "chain_commands": {
        "commands": _req(list[CommandField]),
        "wait_for_confirmation": _opt(bool),
    },
    "conditional_command": {
        "condition": _req(str),
        "if_true": _req(CommandField),
        "if_false": _opt(CommandField),
    },
    "batch_create": {
        "entity_type": _req(Literal["task", "event", "contact", "note"]),
        "items": _req(list[Any]),
    },
    "copy_to_calendar": {"task_id": _opt(str), "event_details": _opt(dict[str, str])},
    "email_summary": {
        "recipient_email": _req(str),
        "summary_type": _req(Literal["daily", "weekly", "project", "financial"]),
    },
    "create_from_template": {"template_name": _req(str), "parameters": _opt(dict[str, Any])},
    "bulk_update": {
        "entity_type": _req(str),
        "filter": _req(dict[str, Any]),
        "updates": _req(dict[str, Any]),
    },
    # Context-aware
    "do_this_later": {"defer_minutes": _opt(int)},
    "remind_about_this": {"reminder_time": _req(str)},
    "share_this": {"recipient_email": _req(str), "message": _opt(str)},
    "add_this_to_project": {"project_id": _opt(str), "project_name": _opt(str)},
    "convert_to_task": {"priority": _opt(Literal["low", "medium", "high"])},
    "analyze_selected": {},
    "summarize_selected": {},
    "explain_this": {},
    "find_similar": {},
    "get_context": {},
    # Interaction modes
    "set_interaction_mode": {"mode": _req(Literal["autonomous", "preview", "conversational"])},
    "enable_confirmations": {},
    "disable_confirmations": {},
    "set_verbosity": {"level": _req(Literal["minimal", "normal", "detailed"])},
    "undo_last": {},
    "redo_last": {},
    "cancel_current": {},
    "pause_atlas": {},
    "resume_atlas": {},
    "request_clarification": {"question": _req(str), "options": _opt(list[str])},
    # Automation & webhooks
    "create_automation": {
        "name": _req(str),
        "trigger": _req(AutomationTrigger),
        "webhook_url": _opt(str),
        "provider": _opt(AutomationProvider),
        "description": _opt(str),
    },
    "list_automations": {"filter": _opt(Literal["all", "active", "inactive"])},
    "toggle_automation": {"automation_id": _opt(str), "automation_name": _opt(str)},
    "delete_automation": {"automation_id": _opt(str), "automation_name": _opt(str)},
    "test_automation": {"automation_id": _opt(str), "automation_name": _opt(str)},
    "trigger_webhook": {"webhook_url": _req(str), "payload": _opt(dict[str, Any])},
    "connect_zapier": {"webhook_url": _req(str), "trigger_type": _opt(AutomationTrigger)},
    "connect_make": {"webhook_url": _req(str), "trigger_type": _opt(AutomationTrigger)},
    "connect_n8n": {"webhook_url": _req(str), "trigger_type": _opt(AutomationTrigger)},
    "create_workflow_automation": {"name": _req(str), "steps": _req(list[dict[str, Any]])},
    "get_automation_history": {"automation_id": _opt(str), "automation_name": _opt(str)},
    "set_automation_schedule": {
        "automation_id": _opt(str),
        "automation_name": _opt(str),
        "schedule": _req(str),
        "timezone": _opt(str),
    },
}


def _model_name(tag: str) -> str:
    return "".join(part.capitalize() for part in tag.split("_")) + "Command"


COMMAND_MODELS: dict[str, type[Command]] = {
    tag: create_model(  # type: ignore[call-overload]
        _model_name(tag),
        __base__=Command,
        __module__=__name__,
        type=(Literal[tag], tag),
        **fields,
    )
    for tag, fields in _COMMAND_FIELDS.items()
}

COMMAND_TYPES: frozenset[str] = frozenset(COMMAND_MODELS)


def command_model(tag: str) -> type[Command]:
    """Return the model class for a command tag.

    Raises:
        UnknownCommandTypeError: If the tag is not part of the taxonomy
    """
    try:
        return COMMAND_MODELS[tag]
    except KeyError:
        raise UnknownCommandTypeError(f"Unknown command type: {tag}") from None


def build_command(tag: str, **fields: Any) -> Command:
    """Validate ``fields`` against the variant for ``tag`` and build it.

    Args:
        tag: Command type tag, e.g. "create_task"
        **fields: Payload fields by attribute name (snake_case) or alias

    Returns:
        The validated command instance

    Raises:
        UnknownCommandTypeError: If the tag is unknown
        pydantic.ValidationError: If the payload does not fit the variant
    """
    return command_model(tag).model_validate({**fields, "type": tag})


def parse_command(data: dict[str, Any]) -> Command:
    """Rebuild a command from its dictionary form (wire or attribute names)."""
    tag = data.get("type")
    if not isinstance(tag, str):
        raise UnknownCommandTypeError("Command data is missing a 'type' tag")
    return command_model(tag).model_validate(data)


__all__ = [
    "COMMAND_MODELS",
    "COMMAND_TYPES",
    "Command",
    "CommandField",
    "UnknownCommandTypeError",
    "build_command",
    "command_model",
    "parse_command",
]
