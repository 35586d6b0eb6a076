"""Engine configuration loader.

Loads engine settings from a YAML file with safe defaults, then applies
``VOICECOMMANDS_*`` environment overrides.
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "VOICECOMMANDS_"
INTERACTION_MODES = ("autonomous", "preview", "conversational")


@dataclass(frozen=True)
class EngineConfig:
    """Interaction engine settings."""

    confidence_threshold: float = 0.8
    default_mode: str = "autonomous"
    history_limit: int = 50
    pending_expiry_seconds: int = 120
    max_utterance_length: int = 2000
    session_ttl_seconds: int = 3600


def _coerce(name: str, value: Any) -> Any:
    """Validate and convert one setting.

    Raises:
        ValueError: If the value has the wrong type or is out of range.
    """
    if name == "confidence_threshold":
        if isinstance(value, bool):
            raise ValueError("Field 'confidence_threshold' must be a number")
        value = float(value)
        if not 0.0 <= value <= 1.0:
            raise ValueError("Field 'confidence_threshold' must be between 0 and 1")
        return value

    if name == "default_mode":
        value = str(value).strip().lower()
        if value not in INTERACTION_MODES:
            raise ValueError(f"Field 'default_mode' must be one of {', '.join(INTERACTION_MODES)}")
        return value

    # Remaining fields are positive integers
    if isinstance(value, bool):
        raise ValueError(f"Field '{name}' must be an integer")
    value = int(value)
    if value <= 0:
        raise ValueError(f"Field '{name}' must be positive")
    return value


def _parse_engine_config(data: dict[str, Any]) -> EngineConfig:
    known = {f.name for f in fields(EngineConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")
    return EngineConfig(**{name: _coerce(name, value) for name, value in data.items()})


def _apply_env_overrides(config: EngineConfig) -> EngineConfig:
    overrides: dict[str, Any] = {}
    for f in fields(EngineConfig):
        raw = os.environ.get(ENV_PREFIX + f.name.upper())
        if raw is None or raw == "":
            continue
        try:
            overrides[f.name] = _coerce(f.name, raw)
        except ValueError as e:
            logger.warning("Ignoring %s%s: %s", ENV_PREFIX, f.name.upper(), e)
    return replace(config, **overrides) if overrides else config


def load_engine_config(config_path: str | None = None) -> EngineConfig:
    """Load engine configuration from YAML file.

    Args:
        config_path: Path to the configuration YAML file.
                    If None, uses VOICECOMMANDS_CONFIG or config/commands.yaml

    Returns:
        EngineConfig with file values and environment overrides applied.
        If the file is missing or invalid, defaults are used instead.
    """
    if config_path is None:
        config_path = os.environ.get(ENV_PREFIX + "CONFIG")
    if config_path is None:
        # Default path relative to project root
        project_root = Path(__file__).parent.parent.parent
        config_path = os.path.join(project_root, "config", "commands.yaml")

    config = EngineConfig()
    if os.path.exists(config_path):
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)

            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise ValueError("Config file must contain a YAML dictionary")

            # The engine section is optional; a flat file is accepted too
            section = data.get("engine", data)
            if not isinstance(section, dict):
                raise ValueError("'engine' section must be a dictionary")
            config = _parse_engine_config(section)
        except (yaml.YAMLError, ValueError, TypeError, OSError) as e:
            logger.warning("Failed to load engine config from %s: %s", config_path, e)
            logger.warning("Using default engine configuration")
            config = EngineConfig()

    return _apply_env_overrides(config)


# Cache the loaded configuration
_cached_config: EngineConfig | None = None


def get_engine_config(config_path: str | None = None) -> EngineConfig:
    """Get the engine configuration (cached)."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_engine_config(config_path)
    return _cached_config


def reload_engine_config(config_path: str | None = None) -> EngineConfig:
    """Reload engine configuration from file and environment.

    Args:
        config_path: Optional path to config file. Uses default if None.

    Returns:
        Newly loaded EngineConfig.
    """
    global _cached_config
    _cached_config = load_engine_config(config_path)
    return _cached_config


def clear_engine_config_cache() -> None:
    """Clear the cached configuration.

    Used primarily for testing to ensure clean state between tests.
    """
    global _cached_config
    _cached_config = None
