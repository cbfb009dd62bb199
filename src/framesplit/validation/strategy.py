"""Per-strategy parameter validators.

Each validator returns a list of errors (empty when valid). A value that is
not a finite number, or not an integer where one is required, yields the
field's INVALID_* code and range checks are skipped for it.
"""

from __future__ import annotations

from typing import Any

from framesplit.core.contracts import (
    AllFrames,
    CustomFrameRate,
    FrameBased,
    IntervalBased,
    UniformSampling,
    ValidationError,
)
from . import rules
from ._numbers import is_finite_integer, is_finite_number
from .rules import ErrorCode


def _range_errors(
    value: float,
    field: str,
    minimum: float,
    maximum: float,
    too_low: tuple[str, str],
    too_high: tuple[str, str],
) -> list[ValidationError]:
    errors = []
    if value < minimum:
        errors.append(ValidationError(field=field, message=too_low[1], code=too_low[0]))
    if value > maximum:
        errors.append(ValidationError(field=field, message=too_high[1], code=too_high[0]))
    return errors


def validate_uniform_sampling(frame_count: Any) -> list[ValidationError]:
    """Frame count must be an integer within 1..10000."""
    if not is_finite_integer(frame_count):
        return [
            ValidationError(
                field="frame_count",
                message="Frame count must be a valid integer",
                code=ErrorCode.INVALID_FRAME_COUNT,
            )
        ]
    return _range_errors(
        frame_count,
        "frame_count",
        rules.MIN_FRAME_COUNT,
        rules.MAX_FRAME_COUNT,
        (ErrorCode.FRAME_COUNT_TOO_LOW, f"Frame count must be at least {rules.MIN_FRAME_COUNT}"),
        (ErrorCode.FRAME_COUNT_TOO_HIGH, f"Frame count cannot exceed {rules.MAX_FRAME_COUNT}"),
    )


def validate_interval_based(interval_seconds: Any) -> list[ValidationError]:
    """Interval must be a finite number of seconds within 0.001..3600."""
    if not is_finite_number(interval_seconds):
        return [
            ValidationError(
                field="interval_seconds",
                message="Interval must be a valid number",
                code=ErrorCode.INVALID_INTERVAL,
            )
        ]
    return _range_errors(
        interval_seconds,
        "interval_seconds",
        rules.MIN_INTERVAL_SECONDS,
        rules.MAX_INTERVAL_SECONDS,
        (ErrorCode.INTERVAL_TOO_LOW, f"Interval must be at least {rules.MIN_INTERVAL_SECONDS} seconds"),
        (ErrorCode.INTERVAL_TOO_HIGH, f"Interval cannot exceed {rules.MAX_INTERVAL_SECONDS} seconds"),
    )


def validate_frame_based(frame_interval: Any) -> list[ValidationError]:
    """Frame interval must be an integer within 1..1000."""
    if not is_finite_integer(frame_interval):
        return [
            ValidationError(
                field="frame_interval",
                message="Frame interval must be a valid integer",
                code=ErrorCode.INVALID_FRAME_INTERVAL,
            )
        ]
    return _range_errors(
        frame_interval,
        "frame_interval",
        rules.MIN_FRAME_INTERVAL,
        rules.MAX_FRAME_INTERVAL,
        (ErrorCode.FRAME_INTERVAL_TOO_LOW, f"Frame interval must be at least {rules.MIN_FRAME_INTERVAL}"),
        (ErrorCode.FRAME_INTERVAL_TOO_HIGH, f"Frame interval cannot exceed {rules.MAX_FRAME_INTERVAL}"),
    )


def validate_all_frames() -> list[ValidationError]:
    """All-frames takes no parameters, so it always passes."""
    return []


def validate_custom_fps(fps: Any) -> list[ValidationError]:
    """FPS must be a finite number within 0.001..120."""
    if not is_finite_number(fps):
        return [ValidationError(field="fps", message="FPS must be a valid number", code=ErrorCode.INVALID_FPS)]
    return _range_errors(
        fps,
        "fps",
        rules.MIN_FPS,
        rules.MAX_FPS,
        (ErrorCode.FPS_TOO_LOW, f"FPS must be at least {rules.MIN_FPS}"),
        (ErrorCode.FPS_TOO_HIGH, f"FPS cannot exceed {rules.MAX_FPS}"),
    )


def validate_strategy(strategy: Any) -> list[ValidationError]:
    """Route a strategy to the validator for its type."""
    if isinstance(strategy, UniformSampling):
        return validate_uniform_sampling(strategy.frame_count)
    if isinstance(strategy, IntervalBased):
        return validate_interval_based(strategy.interval_seconds)
    if isinstance(strategy, FrameBased):
        return validate_frame_based(strategy.frame_interval)
    if isinstance(strategy, AllFrames):
        return validate_all_frames()
    if isinstance(strategy, CustomFrameRate):
        return validate_custom_fps(strategy.fps)
    return [
        ValidationError(
            field="strategy",
            message=f"Unknown strategy type: {strategy!r}",
            code=ErrorCode.UNKNOWN_STRATEGY,
        )
    ]
