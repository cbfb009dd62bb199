"""Bounds and error codes used to validate extraction requests."""

from __future__ import annotations

from enum import Enum

# Uniform sampling
MIN_FRAME_COUNT = 1
MAX_FRAME_COUNT = 10000

# Interval-based
MIN_INTERVAL_SECONDS = 0.001
MAX_INTERVAL_SECONDS = 3600

# Frame-based
MIN_FRAME_INTERVAL = 1
MAX_FRAME_INTERVAL = 1000

# Custom fps
MIN_FPS = 0.001
MAX_FPS = 120

# JPEG quality, lower is better
MIN_QUALITY = 1
MAX_QUALITY = 31
DEFAULT_QUALITY = 2

MAX_ESTIMATED_STORAGE_MB = 5000


class ErrorCode(str, Enum):
    """Validation error codes for programmatic handling."""

    INVALID_VALUE = "INVALID_VALUE"

    INVALID_FRAME_COUNT = "INVALID_FRAME_COUNT"
    FRAME_COUNT_TOO_LOW = "FRAME_COUNT_TOO_LOW"
    FRAME_COUNT_TOO_HIGH = "FRAME_COUNT_TOO_HIGH"

    INVALID_INTERVAL = "INVALID_INTERVAL"
    INTERVAL_TOO_LOW = "INTERVAL_TOO_LOW"
    INTERVAL_TOO_HIGH = "INTERVAL_TOO_HIGH"

    INVALID_FRAME_INTERVAL = "INVALID_FRAME_INTERVAL"
    FRAME_INTERVAL_TOO_LOW = "FRAME_INTERVAL_TOO_LOW"
    FRAME_INTERVAL_TOO_HIGH = "FRAME_INTERVAL_TOO_HIGH"

    INVALID_FPS = "INVALID_FPS"
    FPS_TOO_LOW = "FPS_TOO_LOW"
    FPS_TOO_HIGH = "FPS_TOO_HIGH"

    INVALID_QUALITY = "INVALID_QUALITY"
    QUALITY_OUT_OF_RANGE = "QUALITY_OUT_OF_RANGE"

    EMPTY_PATH = "EMPTY_PATH"

    STORAGE_LIMIT_EXCEEDED = "STORAGE_LIMIT_EXCEEDED"

    UNKNOWN_STRATEGY = "UNKNOWN_STRATEGY"
