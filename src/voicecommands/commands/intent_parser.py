"""Intent parser for converting utterances to typed commands."""

import logging
import threading
from collections.abc import Callable

from voicecommands.commands.parsers import (
    agent_filters,
    agents,
    analytics,
    assistance,
    automation,
    calendar,
    communications,
    context,
    crm,
    dashboard,
    data_hub,
    dialogs,
    documents,
    filters,
    finance,
    goals,
    interaction,
    iot,
    knowledge,
    navigation,
    notes,
    projects,
    question,
    refresh,
    reports,
    scheduling,
    search,
    sequences,
    system,
    tasks,
    theme,
    widgets,
    workflows,
)
from voicecommands.commands.parsers.types import ParsedIntent
from voicecommands.config import get_engine_config
from voicecommands.logging_utils import log_debug, redact_utterance
from voicecommands.metrics import get_metrics_collector

logger = logging.getLogger(__name__)

DomainParser = Callable[[str, str], ParsedIntent | None]

# Narrow domains first, broad catch-alls last, question shape as the final fallback.
# "show me my tasks" must reach tasks before navigation sees "show me the X".
DEFAULT_PARSERS: tuple[tuple[str, DomainParser], ...] = (
    ("help", assistance.parse),
    ("interaction", interaction.parse),
    ("sequences", sequences.parse),
    ("tasks", tasks.parse),
    ("calendar", calendar.parse),
    ("finance", finance.parse),
    ("goals", goals.parse),
    ("notes", notes.parse),
    ("agents", agents.parse),
    ("widgets", widgets.parse),
    ("documents", documents.parse),
    ("knowledge", knowledge.parse),
    ("email", communications.parse),
    ("data_hub", data_hub.parse),
    ("theme", theme.parse),
    ("agent_filters", agent_filters.parse),
    ("reports", reports.parse),
    ("crm", crm.parse),
    ("projects", projects.parse),
    ("analytics", analytics.parse),
    ("iot", iot.parse),
    ("scheduling", scheduling.parse),
    ("context", context.parse),
    ("automation", automation.parse),
    ("workflows", workflows.parse),
    ("dashboard", dashboard.parse),
    ("navigation", navigation.parse),
    ("filters", filters.parse),
    ("search", search.parse),
    ("dialogs", dialogs.parse),
    ("refresh", refresh.parse),
    ("system", system.parse),
    ("question", question.parse),
)


class IntentParser:
    """Run domain parsers in a fixed order and return the first match."""

    def __init__(
        self,
        parsers: tuple[tuple[str, DomainParser], ...] = DEFAULT_PARSERS,
        max_utterance_length: int | None = None,
    ) -> None:
        """Initialize the parser cascade.

        Args:
            parsers: Ordered (name, parse function) pairs; earlier entries win
            max_utterance_length: Longer utterances are truncated before matching
                (default: from engine config)
        """
        self.parsers = parsers
        if max_utterance_length is None:
            max_utterance_length = get_engine_config().max_utterance_length
        self.max_utterance_length = max_utterance_length

    @property
    def parser_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.parsers)

    def parse(self, text: str | None) -> ParsedIntent | None:
        """Parse an utterance into a typed command.

        Args:
            text: User input text (transcript or typed command)

        Returns:
            ParsedIntent from the first domain parser that matched, or None
            when nothing matched
        """
        if not text:
            return None
        original = text.strip()[: self.max_utterance_length]
        normalized = original.lower()
        if not normalized:
            return None

        metrics = get_metrics_collector()
        for name, parse_fn in self.parsers:
            try:
                intent = parse_fn(normalized, original)
            except Exception:
                # A broken parser must not take the cascade down
                logger.exception("Domain parser %s failed on utterance", name)
                continue
            if intent is not None:
                log_debug(
                    logger,
                    "Utterance matched",
                    parser=name,
                    command=intent.name,
                    confidence=intent.confidence,
                    utterance=redact_utterance(original),
                )
                metrics.record_parse(intent.name)
                return intent

        metrics.record_parse(None)
        log_debug(logger, "No parser matched", utterance=redact_utterance(original))
        return None


_default_parser: IntentParser | None = None
_default_parser_lock = threading.Lock()


def get_intent_parser() -> IntentParser:
    """Get or create the shared parser instance."""
    global _default_parser
    with _default_parser_lock:
        if _default_parser is None:
            _default_parser = IntentParser()
        return _default_parser


__all__ = ["DEFAULT_PARSERS", "IntentParser", "ParsedIntent", "get_intent_parser"]
