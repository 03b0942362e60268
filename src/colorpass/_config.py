# Area: Shared
"""
colorpass._config — Configuration
=================================

Configuration loading and validation for the CLI and the polling
client.

Precedence, lowest first:
    1. Built-in defaults
    2. JSON config file (--config)
    3. .env file (loaded with python-dotenv, never overriding the
       real environment)
    4. Environment variables
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from dotenv import dotenv_values, find_dotenv, load_dotenv

logger = logging.getLogger("colorpass.config")

DEFAULT_CONFIG: Dict[str, Any] = {
    "db_path": "colorpass.db",
    "log_file": "colorpass.log",
    "log_level": "INFO",
    "poll_interval_seconds": 0.8,
    "play_debounce_ms": 500,
    "db_timeout_seconds": 5.0,
    "room_id_attempts": 20,
}

# Environment variable -> (config key, type)
ENV_MAPPINGS: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "COLORPASS_DB_PATH": ("db_path", str),
    "COLORPASS_LOG_FILE": ("log_file", str),
    "COLORPASS_LOG_LEVEL": ("log_level", str),
    "POLL_INTERVAL_SECONDS": ("poll_interval_seconds", float),
    "PLAY_DEBOUNCE_MS": ("play_debounce_ms", int),
    "DB_TIMEOUT_SECONDS": ("db_timeout_seconds", float),
    "ROOM_ID_ATTEMPTS": ("room_id_attempts", int),
}

POSITIVE_KEYS = ["poll_interval_seconds", "db_timeout_seconds", "room_id_attempts"]
NON_NEGATIVE_KEYS = ["play_debounce_ms"]
REQUIRED_CONFIG_KEYS = ["db_path"]


def load_config(
    config_path: Optional[str] = None,
    env_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Build the effective configuration.

    Args:
        config_path: Optional JSON file with config keys
        env_file: Optional .env file; searched for from the cwd if omitted
        environ: Environment to read instead of os.environ (tests)

    Returns:
        Validated config dict

    Raises:
        ValueError: If a value cannot be parsed or is out of range
    """
    config = dict(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config.update(json.load(f))
        else:
            logger.warning(f"Config file not found: {config_path}")

    if environ is None:
        load_dotenv(env_file or find_dotenv(usecwd=True), override=False)
        environ = os.environ
    elif env_file:
        file_values = {k: v for k, v in dotenv_values(env_file).items() if v is not None}
        environ = {**file_values, **environ}

    for env_key, (config_key, cast) in ENV_MAPPINGS.items():
        if env_key in environ:
            try:
                config[config_key] = cast(environ[env_key])
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_key}: {environ[env_key]!r}") from e

    validate_config(config)
    return config


def validate_config(config: dict) -> None:
    """
    Validate required configuration keys and ranges.

    Args:
        config: Configuration dict

    Raises:
        ValueError: If required keys are missing or values out of range
    """
    missing = [k for k in REQUIRED_CONFIG_KEYS if not config.get(k)]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")
    for key in POSITIVE_KEYS:
        if key in config and not config[key] > 0:
            raise ValueError(f"{key} must be positive, got {config[key]!r}")
    for key in NON_NEGATIVE_KEYS:
        if key in config and config[key] < 0:
            raise ValueError(f"{key} must not be negative, got {config[key]!r}")
