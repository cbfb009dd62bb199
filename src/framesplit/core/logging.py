"""Logging setup for the framesplit CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
CLI is the single place that configures handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: str | int) -> int:
    """Turn "debug"/"INFO"/20 into a logging level number."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logging(level: str | int = "INFO", stream: TextIO | None = None) -> None:
    """Configure root logging once. Log lines go to stderr so stdout stays for results."""
    logging.basicConfig(
        level=resolve_level(level),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=stream or sys.stderr,
    )
