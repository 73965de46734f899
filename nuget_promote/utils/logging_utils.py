"""
Logging utilities for consistent promotion output.

Summaries that the operator always needs to see (package lists, trees,
promotion counts) are emitted as one multi-line record so they stay together
in the log.
"""

import logging
from typing import Iterable, Optional


def format_count_with_unit(count: int, unit: str, *, plural: Optional[str] = None) -> str:
    """
    Format a count with proper pluralization.

    Args:
        count: Number to format
        unit: Singular unit name
        plural: Optional explicit plural form (defaults to unit + "s")

    Returns:
        Formatted string like "5 packages" or "1 package"

    Examples:
        >>> format_count_with_unit(1, "package")
        '1 package'
        >>> format_count_with_unit(13, "package")
        '13 packages'
    """
    if count == 1:
        return f"{count} {unit}"
    return f"{count} {plural or unit + 's'}"


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Examples:
        >>> format_file_size(0)
        '0 B'
        >>> format_file_size(1536)
        '1.5 KB'
    """
    if size_bytes == 0:
        return "0 B"

    size_names = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    size_float = float(size_bytes)

    while size_float >= 1024 and i < len(size_names) - 1:
        size_float /= 1024.0
        i += 1

    return f"{size_float:.1f} {size_names[i]}"


def log_block(title: str, lines: Iterable[str], *, prefix: str = "  ", level: int = logging.WARNING) -> None:
    """
    Log a title followed by indented lines as a single record.

    Args:
        title: First line of the block
        lines: Lines to log under the title
        prefix: Indentation for each line
        level: Logging level to use
    """
    body = "\n".join(f"{prefix}{line}" for line in lines)
    if body:
        logging.log(level, "%s\n%s", title, body)
    else:
        logging.log(level, "%s", title)


__all__ = [
    "format_count_with_unit",
    "format_file_size",
    "log_block",
]
