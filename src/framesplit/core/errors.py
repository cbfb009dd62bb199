"""Error taxonomy surfaced to callers of the extraction and import services."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from .contracts import ValidationError, ValidationResult


class VideoProcessingErrorCode(str, Enum):
    INVALID_PARAMS = "INVALID_PARAMS"
    INVALID_VIDEO_PATH = "INVALID_VIDEO_PATH"
    INVALID_OUTPUT_DIR = "INVALID_OUTPUT_DIR"
    FFMPEG_FAILED = "FFMPEG_FAILED"
    VIDEO_NOT_FOUND = "VIDEO_NOT_FOUND"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    INSUFFICIENT_STORAGE = "INSUFFICIENT_STORAGE"
    CANCELLED = "CANCELLED"
    UNKNOWN = "UNKNOWN"


class VideoProcessingError(Exception):
    """Raised for any failure of a planning or extraction call."""

    def __init__(
        self,
        message: str,
        code: VideoProcessingErrorCode,
        errors: Sequence[ValidationError] = (),
        original: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.errors = tuple(errors)
        self.original = original

    @property
    def is_cancelled(self) -> bool:
        """True when the user or caller aborted the operation."""
        return self.code is VideoProcessingErrorCode.CANCELLED

    @property
    def is_recoverable(self) -> bool:
        """True when retrying with other input or after freeing space can succeed."""
        return self.code in (
            VideoProcessingErrorCode.CANCELLED,
            VideoProcessingErrorCode.INSUFFICIENT_STORAGE,
        )

    def __repr__(self) -> str:
        return f"VideoProcessingError(code={self.code.value!r}, message={self.message!r})"


# Codes a video backend may report, keyed by their wire name.
_NATIVE_CODES: dict[str, VideoProcessingErrorCode] = {
    code.value: code
    for code in (
        VideoProcessingErrorCode.INVALID_VIDEO_PATH,
        VideoProcessingErrorCode.INVALID_OUTPUT_DIR,
        VideoProcessingErrorCode.FFMPEG_FAILED,
        VideoProcessingErrorCode.VIDEO_NOT_FOUND,
        VideoProcessingErrorCode.UNSUPPORTED_FORMAT,
        VideoProcessingErrorCode.INSUFFICIENT_STORAGE,
        VideoProcessingErrorCode.CANCELLED,
    )
}


def _native_code_and_message(error: Any) -> tuple[str, str] | None:
    if isinstance(error, Mapping):
        if "code" in error and "message" in error:
            return str(error["code"]), str(error["message"])
        return None
    code = getattr(error, "code", None)
    message = getattr(error, "message", None)
    if code is not None and message is not None:
        return str(getattr(code, "value", code)), str(message)
    return None


def map_native_error(error: Any) -> VideoProcessingError:
    """Translate an arbitrary backend failure into a VideoProcessingError.

    Errors already in the taxonomy pass through untouched. Anything exposing
    ``code`` and ``message`` (attributes or mapping keys) is mapped by code,
    falling back to UNKNOWN. Everything else becomes UNKNOWN with the
    original message kept for diagnostics.
    """
    if isinstance(error, VideoProcessingError):
        return error

    native = _native_code_and_message(error)
    if native is not None:
        code, message = native
        return VideoProcessingError(
            message, _NATIVE_CODES.get(code, VideoProcessingErrorCode.UNKNOWN), original=error
        )

    message = str(error) if isinstance(error, BaseException) and str(error) else "Unknown error occurred"
    return VideoProcessingError(message, VideoProcessingErrorCode.UNKNOWN, original=error)


class VideoImportErrorCode(str, Enum):
    PERMISSION_DENIED = "PERMISSION_DENIED"
    PERMISSION_BLOCKED = "PERMISSION_BLOCKED"
    PERMISSION_UNAVAILABLE = "PERMISSION_UNAVAILABLE"
    USER_CANCELLED = "USER_CANCELLED"
    INVALID_VIDEO = "INVALID_VIDEO"
    PICKER_ERROR = "PICKER_ERROR"


class VideoImportError(Exception):
    """Raised when importing a video from the gallery or camera fails."""

    def __init__(
        self,
        message: str,
        code: VideoImportErrorCode,
        validation_result: ValidationResult | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.validation_result = validation_result
