# Area: Shared
"""
Shared utilities used by the room engine, the client and the CLI.

This package contains:
- Logging configuration
"""

from .logging_config import (
    setup_logging,
    log_action_error,
    parse_level,
    TerminalFormatter,
    JSONFormatter,
)

__all__ = [
    "setup_logging",
    "log_action_error",
    "parse_level",
    "TerminalFormatter",
    "JSONFormatter",
]
