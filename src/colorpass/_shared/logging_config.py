# Area: Shared
"""
colorpass._shared.logging_config — Structured logging setup
===========================================================

Configures dual logging: terminal (colored) + file (JSON lines).
Provides the structured error output used by the CLI.
"""

from __future__ import annotations
import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from ..errors import ColorPassError

# Package logger
logger = logging.getLogger("colorpass")


class TerminalFormatter(logging.Formatter):
    """Colored formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """JSON formatter for file output."""

    EXTRA_FIELDS = ("room_id", "error_code", "error_category")

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in self.EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False)


def parse_level(level: Union[int, str]) -> int:
    """Accept 10/"DEBUG"/"debug" alike."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(
    log_file_path: Optional[str] = "colorpass.log",
    level: Union[int, str] = logging.INFO,
    stream=None,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str or None
        Path to the JSON log file. None disables file logging.
    level : int or str
        Logging level. Defaults to INFO.
    stream :
        Terminal stream. Defaults to stderr so JSON on stdout stays clean.
    """
    level = parse_level(level)
    pkg_logger = logging.getLogger("colorpass")
    pkg_logger.setLevel(level)

    # Remove existing handlers
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    # Terminal handler with colors
    terminal_handler = logging.StreamHandler(stream or sys.stderr)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    pkg_logger.addHandler(terminal_handler)

    # File handler with JSON
    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False


def log_action_error(error: "ColorPassError", stream=None) -> None:
    """
    Log a rejected action in the structured format.

    Parameters
    ----------
    error : ColorPassError
        The error to report.
    stream :
        Where to print the error block. Defaults to stderr.
    """
    # Print to terminal (bypassing logger for exact formatting)
    print(error.format_error_log(), file=stream or sys.stderr)

    # Also log to file via logger
    log = logger.error if error.category == "persistence" else logger.warning
    log(
        f"Action error: {error.__class__.__name__}",
        extra={
            "room_id": error.details.get("room_id"),
            "error_code": error.code,
            "error_category": error.category,
        },
    )
