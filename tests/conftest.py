"""pytest configuration for voice command tests."""

import os
import sys
from pathlib import Path

import pytest

# Add src directory to path so tests can import voicecommands
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Tests use in-memory stores unless a test provides its own Redis client
os.environ["REDIS_ENABLED"] = "false"

from voicecommands.commands.intent_parser import IntentParser  # noqa: E402
from voicecommands.commands.session_context import CommandExecutionContext  # noqa: E402
from voicecommands.config import clear_engine_config_cache  # noqa: E402
from voicecommands.metrics import get_metrics_collector  # noqa: E402


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Reset cached config and metrics between tests."""
    for name in list(os.environ):
        if name.startswith("VOICECOMMANDS_"):
            monkeypatch.delenv(name)
    clear_engine_config_cache()
    get_metrics_collector().reset()
    yield
    clear_engine_config_cache()
    get_metrics_collector().reset()


@pytest.fixture
def parser() -> IntentParser:
    """Create an intent parser."""
    return IntentParser()


@pytest.fixture
def context() -> CommandExecutionContext:
    """Create a fresh autonomous session context."""
    return CommandExecutionContext.create(session_id="test-session", user_id="test-user")
