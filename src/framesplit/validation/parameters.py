"""Validators for quality and path parameters of a request."""

from __future__ import annotations

from typing import Any

from framesplit.core.contracts import ValidationError
from . import rules
from ._numbers import is_finite_number
from .rules import ErrorCode


def validate_quality(quality: Any) -> list[ValidationError]:
    """Quality must be a finite number within 1..31."""
    if not is_finite_number(quality):
        return [
            ValidationError(field="quality", message="Quality must be a valid number", code=ErrorCode.INVALID_QUALITY)
        ]
    if quality < rules.MIN_QUALITY or quality > rules.MAX_QUALITY:
        return [
            ValidationError(
                field="quality",
                message=f"Quality must be between {rules.MIN_QUALITY} and {rules.MAX_QUALITY}",
                code=ErrorCode.QUALITY_OUT_OF_RANGE,
            )
        ]
    return []


def validate_non_empty_string(value: Any, field_name: str) -> list[ValidationError]:
    """Reject non-strings and strings that are blank after stripping."""
    if not isinstance(value, str):
        return [
            ValidationError(field=field_name, message=f"{field_name} must be a string", code=ErrorCode.INVALID_VALUE)
        ]
    if not value.strip():
        return [ValidationError(field=field_name, message=f"{field_name} cannot be empty", code=ErrorCode.EMPTY_PATH)]
    return []


def validate_video_path(video_path: Any) -> list[ValidationError]:
    """Video path must be a non-blank string."""
    return validate_non_empty_string(video_path, "video_path")


def validate_output_directory(output_directory: Any) -> list[ValidationError]:
    """Output directory must be a non-blank string."""
    return validate_non_empty_string(output_directory, "output_directory")
