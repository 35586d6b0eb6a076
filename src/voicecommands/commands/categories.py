"""Category registry used for capability discovery ("what can you do").

Categories group command tags for help output only; membership has no effect
on parsing. Every tag in the taxonomy belongs to exactly one category, which
``find_category_problems`` checks.
"""

from collections import Counter
from collections.abc import Mapping
from typing import Any

from voicecommands.commands.taxonomy import COMMAND_TYPES

COMMAND_CATEGORIES: Mapping[str, tuple[str, ...]] = {
    "navigation": ("navigate", "switch_tab", "expand_domain", "collapse_domain", "switch_persona", "open_dialog"),
    "search": ("search", "filter", "clear_filters"),
    "communication": (
        "draft_email",
        "send_email",
        "compose_email",
        "open_communications",
        "check_inbox",
        "reply_to_email",
        "forward_email",
    ),
    "tasks": ("create_task", "complete_task", "update_task", "list_tasks", "delete_task", "assign_task"),
    "notes": ("create_note", "create_reminder", "list_notes", "search_notes"),
    "goals": (
        "create_goal",
        "update_goal_progress",
        "list_goals",
        "create_habit",
        "complete_habit",
        "get_habit_streak",
    ),
    "calendar": (
        "create_event",
        "list_events",
        "cancel_event",
        "reschedule_event",
        "get_availability",
        "block_time",
        "show_calendar",
    ),
    "finance": (
        "check_balance",
        "list_transactions",
        "categorize_transaction",
        "get_financial_summary",
        "reconcile_accounts",
        "add_expense",
        "set_budget",
        "get_cash_flow",
    ),
    "agents": (
        "select_agent",
        "filter_agents",
        "train_agent",
        "allocate_agents",
        "create_swarm",
        "get_agent_status",
        "transfer_knowledge",
    ),
    "widgets": ("create_widget", "update_widget", "delete_widget", "list_widgets", "refresh_widget"),
    "documents": (
        "upload_file",
        "search_documents",
        "list_documents",
        "analyze_document",
        "summarize_document",
        "create_document",
    ),
    "knowledge": ("save_knowledge", "search_knowledge", "get_insights", "ask_atlas"),
    "dashboard": ("add_to_dashboard", "rearrange_dashboard", "reset_dashboard", "share_dashboard"),
    "reports": ("generate_report", "run_query", "export_data"),
    "help": ("get_help", "show_tutorial", "list_commands", "what_can_you_do"),
    "system": (
        "refresh_data",
        "toggle_theme",
        "set_theme",
        "toggle_fullscreen",
        "toggle_sidebar",
        "show_notification",
        "voice_response",
        "sync_all",
        "clear_cache",
        "check_status",
        "get_summary",
    ),
    "crm": (
        "create_contact",
        "update_contact",
        "delete_contact",
        "search_contacts",
        "list_contacts",
        "log_interaction",
        "get_contact_history",
        "create_lead",
        "update_lead_status",
        "list_leads",
        "create_deal",
        "update_deal",
        "get_pipeline_summary",
        "schedule_followup",
    ),
    "projects": (
        "create_project",
        "update_project",
        "delete_project",
        "list_projects",
        "get_project_status",
        "create_milestone",
        "complete_milestone",
        "assign_team_member",
        "remove_team_member",
        "get_project_timeline",
        "create_sprint",
        "add_to_sprint",
        "get_sprint_burndown",
        "create_epic",
        "link_tasks_to_epic",
    ),
    "analytics": (
        "get_analytics",
        "compare_periods",
        "get_trends",
        "create_dashboard_widget",
        "schedule_report",
        "get_kpi_summary",
        "set_alert",
        "get_forecast",
        "run_analysis",
        "export_analytics",
    ),
    "iot": (
        "control_device",
        "set_device_value",
        "get_device_status",
        "list_devices",
        "create_scene",
        "activate_scene",
        "set_schedule",
        "get_energy_usage",
        "set_thermostat",
        "lock_door",
        "unlock_door",
        "arm_security",
        "disarm_security",
    ),
    "scheduling": (
        "schedule_command",
        "list_scheduled_commands",
        "cancel_scheduled_command",
        "set_daily_routine",
        "run_routine",
        "snooze_reminder",
    ),
    "workflows": (
        "trigger_workflow",
        "create_workflow",
        "list_workflows",
        "stop_workflow",
        "chain_commands",
        "conditional_command",
        "batch_create",
        "copy_to_calendar",
        "email_summary",
        "create_from_template",
        "bulk_update",
    ),
    "context": (
        "do_this_later",
        "remind_about_this",
        "share_this",
        "add_this_to_project",
        "convert_to_task",
        "analyze_selected",
        "summarize_selected",
        "explain_this",
        "find_similar",
        "get_context",
    ),
    "interaction": (
        "set_interaction_mode",
        "enable_confirmations",
        "disable_confirmations",
        "set_verbosity",
        "undo_last",
        "redo_last",
        "cancel_current",
        "pause_atlas",
        "resume_atlas",
        "request_clarification",
    ),
    "automation": (
        "create_automation",
        "list_automations",
        "toggle_automation",
        "delete_automation",
        "test_automation",
        "trigger_webhook",
        "connect_zapier",
        "connect_make",
        "connect_n8n",
        "create_workflow_automation",
        "get_automation_history",
        "set_automation_schedule",
    ),
}

# Category -> (one-line description, example utterances)
CATEGORY_HELP: Mapping[str, tuple[str, tuple[str, ...]]] = {
    "navigation": ("Move around the app", ("open my personal hub", "go to settings")),
    "search": ("Search and filter lists", ("search for quarterly plan in tasks", "clear filters")),
    "communication": ("Read and write email", ("check my inbox", "email sam@example.com about the launch")),
    "tasks": ("Manage your to-do list", ("create a task to review the budget tomorrow", "show me my tasks")),
    "notes": ("Notes and reminders", ("remind me to call mom at 5pm", "take a note: ship on friday")),
    "goals": ("Goals and habits", ("create a goal to read 20 books", "mark meditation habit as done")),
    "calendar": ("Your calendar", ("schedule a meeting with Alex tomorrow at 3pm", "what's on my calendar today")),
    "finance": ("Banking and budgets", ("check my balance", "set a grocery budget of 400 dollars")),
    "agents": ("Work with agents", ("train agent atlas-7", "create a swarm for market research")),
    "widgets": ("Dashboard widgets", ("create a widget showing revenue", "list my widgets")),
    "documents": ("Files and documents", ("upload a file", "summarize this document")),
    "knowledge": ("Knowledge base", ("remember that our fiscal year starts in april", "ask atlas about churn")),
    "dashboard": ("Dashboard layout", ("add weather to my dashboard", "reset dashboard")),
    "reports": ("Reports and exports", ("generate a cfo report", "export tasks as csv")),
    "help": ("Help and tutorials", ("what can you do", "help with automations")),
    "system": ("Appearance and maintenance", ("switch to dark mode", "refresh")),
    "crm": ("Contacts, leads and deals", ("add contact Jane Doe", "show my pipeline")),
    "projects": ("Projects, sprints and epics", ("create a project called Apollo", "show sprint burndown")),
    "analytics": ("Metrics, trends and forecasts", ("compare revenue this month vs last month", "show my kpis")),
    "iot": ("Smart home devices", ("turn off the kitchen lights", "set the thermostat to 70")),
    "scheduling": ("Scheduled commands and routines", ("every day at 9am remind me to stretch", "run my morning routine")),
    "workflows": ("Multi-step and bulk actions", ("first check my balance then show my tasks", "mark all overdue tasks as done")),
    "context": ("Act on the current selection", ("do this later", "convert this to a task")),
    "interaction": ("How I respond", ("switch to preview mode", "undo that")),
    "automation": ("Automations and webhooks", ("connect zapier https://hooks.zapier.com/abc", "list my automations")),
}


def category_for(command_type: str) -> str | None:
    """Return the category of a command tag, or None when uncategorized."""
    for category, tags in COMMAND_CATEGORIES.items():
        if command_type in tags:
            return category
    return None


def find_category_problems() -> list[str]:
    """List registry defects: uncategorized, duplicated or unknown tags.

    Returns:
        Human-readable problems; empty when the registry matches the taxonomy
    """
    counts = Counter(tag for tags in COMMAND_CATEGORIES.values() for tag in tags)
    problems = [f"{tag} is in {count} categories" for tag, count in sorted(counts.items()) if count > 1]
    problems.extend(f"{tag} has no category" for tag in sorted(COMMAND_TYPES - counts.keys()))
    problems.extend(f"{tag} is not a command type" for tag in sorted(counts.keys() - COMMAND_TYPES))
    problems.extend(f"{name} has no help entry" for name in COMMAND_CATEGORIES if name not in CATEGORY_HELP)
    return problems


def describe_capabilities() -> list[dict[str, Any]]:
    """Build the capability listing returned for "what can you do"."""
    listing = []
    for category, tags in COMMAND_CATEGORIES.items():
        description, examples = CATEGORY_HELP[category]
        listing.append(
            {
                "category": category,
                "description": description,
                "commands": list(tags),
                "examples": list(examples),
            }
        )
    return listing


def capabilities_summary(max_categories: int | None = None) -> str:
    """One spoken sentence naming what the assistant can help with."""
    descriptions = [CATEGORY_HELP[name][0].lower() for name in COMMAND_CATEGORIES]
    if max_categories is not None and len(descriptions) > max_categories:
        descriptions = descriptions[:max_categories] + ["more"]
    return "I can help with " + ", ".join(descriptions[:-1]) + f" and {descriptions[-1]}."
