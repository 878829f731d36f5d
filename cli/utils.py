"""Shared CLI utility functions for Journal Prompts commands.

Updates:
  v0.1.0 - 2026-09-25 - Stdout logging and path description helpers.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from logging import Logger


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def describe_path(path_value: object, *, allow_missing: bool = False) -> str:
    """Return a human-friendly description of a file path."""
    try:
        path = Path(path_value) if path_value is not None else None
    except TypeError:
        path = None
    if path is None:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"
    if allow_missing:
        return f"{resolved} (missing - created on demand)"
    return f"{resolved} (missing)"


def describe_location(location: str | None) -> str:
    """Return a display string for a configured prompt source."""
    if not location:
        return "not configured"
    if "://" in location or location.startswith("package:"):
        return location
    return describe_path(location)
