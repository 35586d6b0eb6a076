"""Agent control commands: training, allocation, swarms and status."""

from voicecommands.commands.parsers.base import group, integer, match_rules, original, rule
from voicecommands.commands.parsers.types import ParsedIntent

_COUNT = r"(?P<count>\d+|one|two|three|four|five|six|seven|eight|nine|ten)"

RULES = (
    rule(
        r"^(?:select|pick|choose|focus\s+on|open)\s+agent\s+(?P<agent>[\w-]+)$",
        "select_agent",
        0.9,
        agent_id=group("agent"),
    ),
    rule(
        r"^(?:train|retrain|teach)\s+(?:the\s+)?agent\s+(?P<agent>[\w-]+)(?:\s+(?:on|for|in|to\s+handle)\s+(?P<task>.+))?$",
        "train_agent",
        0.9,
        agent_id=group("agent"),
        task_type=original("task"),
    ),
    rule(
        r"^(?:train|retrain)\s+(?:the\s+|my\s+|an?\s+)?(?:agents?|models?)(?:\s+(?:on|for|in|to\s+handle)\s+(?P<task>.+))?$",
        "train_agent",
        0.85,
        task_type=original("task"),
    ),
    rule(
        r"^(?:allocate|assign|deploy|dedicate)\s+(?:" + _COUNT + r"\s+)?(?:more\s+)?agents?\s+(?:to|for|on)\s+"
        r"(?:task\s+)?(?P<task>.+)$",
        "allocate_agents",
        0.9,
        task_id=original("task"),
        count=integer("count"),
    ),
    rule(
        r"^(?:create|spin\s+up|launch|form|build|start|assemble)\s+(?:an?\s+)?(?:agent\s+)?swarm"
        r"(?:\s+(?:for|to|that\s+will)\s+(?P<purpose>.+))?$",
        "create_swarm",
        0.9,
        purpose=original("purpose"),
    ),
    rule(
        r"^(?:what(?:'s|\s+is)\s+)?(?:the\s+)?status\s+of\s+agent\s+(?P<agent>[\w-]+)\??$"
        r"|^(?:check|show|get)\s+agent\s+(?P<agent2>[\w-]+)\s+status$",
        "get_agent_status",
        0.9,
        agent_id=lambda m: m.group("agent") or m.group("agent2"),
    ),
    rule(
        r"^(?:check|show|get|what(?:'s|\s+is))\s+(?:me\s+)?(?:the\s+)?agents?\s+status\??$"
        r"|\bhow\s+are\s+(?:my|the)\s+agents\s+doing\b"
        r"|\bwhat\s+are\s+(?:my|the)\s+agents\s+(?:doing|working\s+on)\b",
        "get_agent_status",
        0.9,
    ),
    rule(
        r"^(?:transfer|share|copy)\s+(?:the\s+)?knowledge\s+from\s+(?:agent\s+)?(?P<source>[\w-]+)\s+"
        r"to\s+(?:agent\s+)?(?P<target>[\w-]+)$",
        "transfer_knowledge",
        0.9,
        from_agent_id=group("source"),
        to_agent_id=group("target"),
    ),
    rule(r"^transfer\s+knowledge(?:\s+between\s+agents)?$", "transfer_knowledge", 0.85),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
