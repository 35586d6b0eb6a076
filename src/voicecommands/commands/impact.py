"""Impact and reversibility classification of command types.

Read-only commands are low impact, create/update operations medium, and
destructive or financial mutations high. Classification is by tag only, so it
can be computed before any handler runs.
"""

from typing import Literal

from voicecommands.commands.categories import COMMAND_CATEGORIES

Impact = Literal["low", "medium", "high"]

_READ_ONLY_PREFIXES = (
    "list_",
    "get_",
    "check_",
    "show_",
    "search_",
    "find_",
    "analyze_",
    "summarize_",
    "compare_",
    "explain_",
    "ask_",
    "what_",
)
# Commands that only change what is on screen
_VIEW_ONLY = frozenset(
    {
        "navigate",
        "switch_tab",
        "expand_domain",
        "collapse_domain",
        "switch_persona",
        "open_dialog",
        "filter",
        "search",
        "clear_filters",
        "filter_agents",
        "select_agent",
        "refresh_data",
        "refresh_widget",
        "toggle_theme",
        "set_theme",
        "toggle_fullscreen",
        "toggle_sidebar",
        "show_notification",
        "voice_response",
        "open_communications",
        "run_query",
        "export_data",
        "export_analytics",
        "generate_report",
        "test_automation",
    }
)
# Interaction control never needs confirmation and is never undone
INTERACTION_COMMANDS = frozenset(COMMAND_CATEGORIES["interaction"]) | frozenset(COMMAND_CATEGORIES["help"])

_HIGH_PREFIXES = ("delete_", "cancel_", "remove_", "disconnect_", "disarm_", "unlock_")
_FINANCIAL_MUTATIONS = frozenset({"add_expense", "set_budget", "categorize_transaction", "reconcile_accounts"})
_HIGH_IMPACT = _FINANCIAL_MUTATIONS | {"bulk_update", "stop_workflow"}

_IRREVERSIBLE_PREFIXES = ("delete_", "send_", "forward_", "disarm_", "unlock_", "trigger_", "share_")
_IRREVERSIBLE = frozenset({"reply_to_email", "email_summary", "bulk_update", "clear_cache", "reconcile_accounts"})


def is_read_only(command_type: str) -> bool:
    """Whether a command only reads data or changes the view."""
    return command_type in _VIEW_ONLY or command_type.startswith(_READ_ONLY_PREFIXES)


def classify_impact(command_type: str) -> Impact:
    """Classify a command tag as low, medium or high impact."""
    if command_type in INTERACTION_COMMANDS or is_read_only(command_type):
        return "low"
    if command_type in _HIGH_IMPACT or command_type.startswith(_HIGH_PREFIXES):
        return "high"
    return "medium"


def is_reversible(command_type: str) -> bool:
    """Whether the effect of a command can be undone."""
    if command_type in _IRREVERSIBLE or command_type.startswith(_IRREVERSIBLE_PREFIXES):
        return False
    return True


def is_undoable(command_type: str) -> bool:
    """Whether a command is a candidate for undo_last."""
    return classify_impact(command_type) != "low" and is_reversible(command_type)
