"""Filesystem helpers for produced frame files."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

BYTES_PER_MB = 1024 * 1024


def calculate_actual_storage_size(paths: Iterable[str | Path]) -> float:
    """Sum the on-disk size in MB of the files that exist; missing ones count as 0."""
    total = 0
    for p in paths:
        path = Path(p)
        if path.is_file():
            total += path.stat().st_size
    return total / BYTES_PER_MB
