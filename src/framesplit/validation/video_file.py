"""Validation of imported video files: extension, MIME type and size."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from framesplit.adapters.base import VideoFile
from framesplit.core.contracts import ValidationError, ValidationResult

SUPPORTED_VIDEO_EXTENSIONS: tuple[str, ...] = (
    ".mp4",
    ".mov",
    ".avi",
    ".mkv",
    ".m4v",
    ".3gp",
    ".webm",
    ".flv",
    ".wmv",
    ".mpeg",
    ".mpg",
)

SUPPORTED_MIME_TYPES: tuple[str, ...] = (
    "video/mp4",
    "video/quicktime",
    "video/x-msvideo",
    "video/x-matroska",
    "video/3gpp",
    "video/webm",
    "video/x-flv",
    "video/x-ms-wmv",
    "video/mpeg",
)

LARGE_FILE_THRESHOLD_BYTES = 500 * 1024 * 1024


class VideoErrorCode(str, Enum):
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    INVALID_MIME_TYPE = "INVALID_MIME_TYPE"
    LARGE_FILE_WARNING = "LARGE_FILE_WARNING"
    MISSING_URI = "MISSING_URI"
    MISSING_FILENAME = "MISSING_FILENAME"


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def validate_video_file(file: VideoFile) -> ValidationResult:
    """Check a picked video file.

    Missing URI or file name short-circuits the remaining checks. Files
    strictly larger than 500 MiB get a non-blocking LARGE_FILE_WARNING;
    filter with ``blocking_errors`` before deciding whether the file is usable.
    """
    errors: list[ValidationError] = []

    if _is_blank(file.uri):
        errors.append(ValidationError(field="uri", message="Video URI is missing", code=VideoErrorCode.MISSING_URI))
    if _is_blank(file.file_name):
        errors.append(
            ValidationError(field="file_name", message="Video file name is missing", code=VideoErrorCode.MISSING_FILENAME)
        )
    if errors:
        return ValidationResult.failed(errors)

    if not file.file_name.lower().endswith(SUPPORTED_VIDEO_EXTENSIONS):
        errors.append(
            ValidationError(
                field="file_name",
                message=f"Unsupported video format. Please select one of: {', '.join(SUPPORTED_VIDEO_EXTENSIONS)}",
                code=VideoErrorCode.UNSUPPORTED_FORMAT,
            )
        )

    if file.type and file.type not in SUPPORTED_MIME_TYPES:
        errors.append(
            ValidationError(
                field="type",
                message=f"Invalid video MIME type: {file.type}. Expected one of: {', '.join(SUPPORTED_MIME_TYPES)}",
                code=VideoErrorCode.INVALID_MIME_TYPE,
            )
        )

    if file.file_size > LARGE_FILE_THRESHOLD_BYTES:
        size_mb = round(file.file_size / (1024 * 1024))
        errors.append(
            ValidationError(
                field="file_size",
                message=f"Large video file ({size_mb} MB) may take longer to process and use significant storage.",
                code=VideoErrorCode.LARGE_FILE_WARNING,
                blocking=False,
            )
        )

    return ValidationResult.failed(errors) if errors else ValidationResult.ok()


def is_warning(error: ValidationError) -> bool:
    """True for advisory errors that do not prevent processing."""
    return not error.blocking


def blocking_errors(errors: Iterable[ValidationError]) -> list[ValidationError]:
    """Drop warnings, keeping the errors that prevent import."""
    return [e for e in errors if not is_warning(e)]
