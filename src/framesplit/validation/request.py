"""Whole-request and plan-level validation."""

from __future__ import annotations

import math

from framesplit.core.contracts import FrameExtractionRequest, ValidationError, ValidationResult
from . import rules
from .parameters import validate_output_directory, validate_quality, validate_video_path
from .rules import ErrorCode
from .strategy import validate_strategy


def validate_request(request: FrameExtractionRequest) -> ValidationResult:
    """Check every field of a request and collect all errors.

    Does not stop at the first failure: path, output directory, strategy and
    quality (when given) are all checked.
    """
    errors: list[ValidationError] = []
    errors.extend(validate_video_path(request.video_path))
    errors.extend(validate_output_directory(request.output_directory))
    errors.extend(validate_strategy(request.strategy))
    if request.quality is not None:
        errors.extend(validate_quality(request.quality))

    if not errors:
        return ValidationResult.ok()
    return ValidationResult.failed(errors)


def validate_storage_estimate(estimated_storage_mb: float) -> list[ValidationError]:
    """Reject plans whose estimated size exceeds the quota.

    A non-finite estimate cannot be checked and is let through.
    """
    if not math.isfinite(estimated_storage_mb):
        return []
    if estimated_storage_mb > rules.MAX_ESTIMATED_STORAGE_MB:
        return [
            ValidationError(
                field="estimated_storage_mb",
                message=(
                    f"Estimated storage ({estimated_storage_mb:.0f}MB) exceeds limit of "
                    f"{rules.MAX_ESTIMATED_STORAGE_MB}MB"
                ),
                code=ErrorCode.STORAGE_LIMIT_EXCEEDED,
            )
        ]
    return []
