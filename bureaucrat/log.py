"""Logging setup for the bureaucrat command line.

All output goes to stderr so git shows it while committing.

Configuration:
  --log-level flag, else BUREAUCRAT_LOG env var: DEBUG, INFO, WARNING, ERROR
  (default: INFO)
"""

from __future__ import annotations

import logging
import os
import sys

# Colors for terminal output
RED = "\033[0;31m"
YELLOW = "\033[1;33m"
GREEN = "\033[0;32m"
BLUE = "\033[0;34m"
NC = "\033[0m"  # No Color

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_ENV_VAR = "BUREAUCRAT_LOG"
DEFAULT_LOG_LEVEL = "INFO"

_LEVEL_COLORS = {
    logging.DEBUG: BLUE,
    logging.INFO: GREEN,
    logging.WARNING: YELLOW,
    logging.ERROR: RED,
    logging.CRITICAL: RED,
}


class _LevelFormatter(logging.Formatter):
    """``LEVEL message``, with the level coloured on terminals."""

    def __init__(self, color: bool) -> None:
        super().__init__("%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        level = record.levelname
        if self.color:
            level = f"{_LEVEL_COLORS.get(record.levelno, '')}{level}{NC}"
        return f"{level} {message}"


_handler: logging.Handler | None = None


def default_level() -> str:
    """Level from BUREAUCRAT_LOG, falling back to INFO."""
    level = os.environ.get(LOG_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL


def configure_logging(level: str | None = None) -> logging.Logger:
    """Configure the bureaucrat root logger (idempotent)."""
    root = logging.getLogger("bureaucrat")
    root.setLevel(getattr(logging, (level or default_level()).upper(), logging.INFO))

    global _handler  # noqa: PLW0603
    if _handler is None or _handler not in root.handlers:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(_LevelFormatter(color=sys.stderr.isatty()))
        root.addHandler(_handler)
        root.propagate = False
    return root
