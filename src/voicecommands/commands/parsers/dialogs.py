"""Opening creation and settings dialogs."""

from collections.abc import Mapping

from voicecommands.commands import lexicon
from voicecommands.commands.parsers.base import RuleMatch, match_rules, rule
from voicecommands.commands.parsers.types import ParsedIntent

# Spoken dialog subject -> dialog id
DIALOG_PHRASES: Mapping[str, str] = {
    "agent": "create_agent",
    "new agent": "create_agent",
    "create agent": "create_agent",
    "agent creation": "create_agent",
    "import": "import_agents",
    "import agents": "import_agents",
    "agent import": "import_agents",
    "platform": "connect_platform",
    "connect platform": "connect_platform",
    "platform connection": "connect_platform",
    "integration": "connect_platform",
    "channel": "create_channel",
    "new channel": "create_channel",
    "email": "compose_email",
    "mail": "compose_email",
    "compose": "compose_email",
    "email composer": "compose_email",
    "task": "create_task",
    "new task": "create_task",
    "event": "create_event",
    "meeting": "create_event",
    "new event": "create_event",
    "widget": "create_widget",
    "new widget": "create_widget",
    "settings": "settings",
    "preferences": "settings",
    "bank": "add_bank_account",
    "bank account": "add_bank_account",
    "add bank account": "add_bank_account",
}


def _dialog(m: RuleMatch) -> str | None:
    return lexicon.lookup_longest(DIALOG_PHRASES, m.group("what"))


RULES = (
    rule(
        r"^(?:open|show|bring\s+up|pull\s+up|launch|display)\s+(?:me\s+)?(?:the\s+|a\s+|an\s+)?(?P<what>.+?)\s+"
        r"(?:dialog|modal|form|popup|window|composer)$",
        "open_dialog",
        0.9,
        dialog=_dialog,
    ),
    rule(
        r"^(?:import|bring\s+in)\s+(?:some\s+|new\s+|my\s+)?(?P<what>agents?)$",
        "open_dialog",
        0.85,
        dialog="import_agents",
    ),
    rule(
        r"^(?:connect|link|add)\s+(?:a\s+|an\s+|new\s+|my\s+)*(?P<what>platform|integration|bank(?:\s+account)?)$",
        "open_dialog",
        0.85,
        dialog=_dialog,
    ),
    rule(
        r"^(?:create|add|new|make|start|draft|write|compose)\s+(?:a\s+|an\s+|new\s+)*"
        r"(?P<what>agent|channel|task|event|meeting|widget|email|mail)$",
        "open_dialog",
        0.8,
        dialog=_dialog,
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
