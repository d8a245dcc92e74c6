"""Launcher configuration (log level, default script and actor).

Values come from the environment, after loading ``.env`` from the repo
root. get_config() returns the defaults merged with any CHATBOX_* variables
that are set; command-line flags in main.py override the result.
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent

_CONFIG_DEFAULTS: dict[str, Any] = {
    "log_level": "WARNING",
    "script": None,
    "actor": "narrator",
}

_ENV_KEYS = {
    "log_level": "CHATBOX_LOG_LEVEL",
    "script": "CHATBOX_SCRIPT",
    "actor": "CHATBOX_ACTOR",
}


def get_config(env_file: Path | None = None) -> dict[str, Any]:
    """Read config, returning defaults merged with environment values."""
    load_dotenv(env_file or ROOT / ".env")
    config = dict(_CONFIG_DEFAULTS)
    for key, env_key in _ENV_KEYS.items():
        value = os.getenv(env_key)
        if value:
            config[key] = value
    if config["script"] is not None:
        config["script"] = Path(config["script"])
    config["log_level"] = str(config["log_level"]).upper()
    return config


def configure_logging(level: str) -> None:
    """Set up root logging for the launcher. Library modules never call this."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level {level!r}")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
