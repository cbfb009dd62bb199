"""Small display helpers."""

from __future__ import annotations

from typing import Any


def is_defined(value: Any) -> bool:
    """True unless ``value`` is None; falsy values such as 0 count as defined."""
    return value is not None


def format_duration(milliseconds: float) -> str:
    """Format a duration as ``MM:SS``, truncating to whole seconds.

    >>> format_duration(125000)
    '02:05'
    """
    total_seconds = int(milliseconds // 1000)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"
