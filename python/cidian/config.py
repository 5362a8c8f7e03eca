"""Configuration loader for cidian.

Loads defaults from config.json at project root, with hardcoded fallbacks.
The dictionary location may also come from the CIDIAN_DICTIONARY
environment variable, which takes precedence over config.json.

Example config.json:
    {
        "defaults": {
            "dictionary_path": "/data/cedict_ts.u8",
            "mode": "map"
        }
    }
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_DICTIONARY = "CIDIAN_DICTIONARY"

# Hardcoded fallback defaults
FALLBACK_DEFAULTS = {
    "dictionary_path": None,
    "mode": "map",
    "transcriber": "pinyin",
    "quiet": False,
    "verbose": False,
}

_config: dict[str, Any] | None = None


def _find_config() -> Path | None:
    """Find config.json by walking up from current file."""
    paths = [
        Path(__file__).parent.parent.parent / "config.json",  # python/cidian -> root
        Path(__file__).parent.parent / "config.json",
        Path.cwd() / "config.json",
        Path.cwd().parent / "config.json",
    ]
    for path in paths:
        if path.exists():
            return path
    return None


def load() -> dict[str, Any]:
    """Load configuration from config.json or use fallbacks."""
    global _config
    if _config is not None:
        return _config

    config_path = _find_config()
    if config_path:
        try:
            with open(config_path, encoding="utf-8") as f:
                _config = json.load(f)
                logger.debug("Loaded config from %s", config_path)
                return _config
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable config %s: %s", config_path, e)

    # Fallback
    _config = {"defaults": dict(FALLBACK_DEFAULTS)}
    return _config


def reset() -> None:
    """Forget the cached configuration so the next load() re-reads it."""
    global _config
    _config = None


def get_default(key: str, fallback: Any = None) -> Any:
    """Get a default value from config."""
    cfg = load()
    return cfg.get("defaults", {}).get(key, fallback)


# Convenience accessors
def default_mode() -> str:
    return get_default("mode", FALLBACK_DEFAULTS["mode"])


def default_transcriber() -> str:
    return get_default("transcriber", FALLBACK_DEFAULTS["transcriber"])


def dictionary_path() -> Path:
    """Get the configured CC-CEDICT data file path.

    Raises:
        ConfigError: If neither the environment nor config.json set one.
    """
    value = os.environ.get(ENV_DICTIONARY) or get_default("dictionary_path")
    if not value:
        raise ConfigError(
            f"No dictionary configured: set {ENV_DICTIONARY}, "
            f"'dictionary_path' in config.json, or pass --dict"
        )
    return Path(value)
