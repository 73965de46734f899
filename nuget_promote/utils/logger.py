"""
Logging configuration for nuget-promote.

Promotion progress is reported through the standard logging module. The
verbosity count from the command line selects the level; HTTP client logs
stay hidden unless the maximum verbosity is requested.
"""

import logging
from typing import Optional

# ============================================================================
# Logging Configuration Constants
# ============================================================================

# Default width for log message wrapping
DEFAULT_LOG_WIDTH = 120

# Format used for every handler configured here
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Loggers of the HTTP stack that are noisy at INFO level
HTTP_LOGGERS = ("httpx", "httpcore")

# ============================================================================
# Custom Formatters
# ============================================================================


class WrappingFormatter(logging.Formatter):
    """
    Formatter that wraps long log lines.

    Multi-line messages (such as rendered dependency trees) are wrapped per
    line so their layout survives.
    """

    def __init__(
        self, fmt: Optional[str] = None, datefmt: Optional[str] = None, width: int = DEFAULT_LOG_WIDTH
    ) -> None:
        super().__init__(fmt, datefmt)
        self.width = width

    def _wrap_line(self, line: str) -> list:
        if len(line) <= self.width:
            return [line]

        wrapped = []
        current = ""
        for word in line.split():
            if len(current + " " + word) <= self.width:
                current += (" " + word) if current else word
            else:
                if current:
                    wrapped.append(current)
                current = word
        if current:
            wrapped.append(current)
        return wrapped

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        lines = []
        for line in formatted.splitlines():
            lines.extend(self._wrap_line(line))
        return "\n".join(lines)


# ============================================================================
# Logging Setup Functions
# ============================================================================


def verbosity_to_level(verbosity: int) -> int:
    """Map a verbosity count to a logging level (0=WARNING, 1=INFO, 2+=DEBUG)."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity: int = 0, use_wrapping: bool = False) -> None:
    """
    Configure logging with multi-level verbosity.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)
        use_wrapping: If True, use wrapping formatter for long messages

    Verbosity Levels:
        0 (default): WARNING - Resolution summaries, promotion progress and errors
        1 (-v):      INFO - Per-package resolution steps
        2 (-vv):     DEBUG - Feed requests, cache hits and license details
        3+ (-vvv):   DEBUG - Maximum verbosity including HTTP request logs
    """
    level = verbosity_to_level(verbosity)

    if use_wrapping:
        handler = logging.StreamHandler()
        handler.setFormatter(WrappingFormatter(fmt=LOG_FORMAT, width=DEFAULT_LOG_WIDTH))

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(level)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)

    http_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


__all__ = [
    "WrappingFormatter",
    "verbosity_to_level",
    "setup_logging",
]
