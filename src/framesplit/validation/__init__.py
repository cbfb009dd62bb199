"""Validation engine: every validator returns a list of errors, never raises."""

from . import rules
from .rules import ErrorCode
from .strategy import (
    validate_all_frames,
    validate_custom_fps,
    validate_frame_based,
    validate_interval_based,
    validate_strategy,
    validate_uniform_sampling,
)
from .parameters import (
    validate_non_empty_string,
    validate_output_directory,
    validate_quality,
    validate_video_path,
)
from .request import validate_request, validate_storage_estimate
from .video_file import VideoErrorCode, blocking_errors, is_warning, validate_video_file

__all__ = [
    "rules",
    "ErrorCode",
    "validate_all_frames",
    "validate_custom_fps",
    "validate_frame_based",
    "validate_interval_based",
    "validate_strategy",
    "validate_uniform_sampling",
    "validate_non_empty_string",
    "validate_output_directory",
    "validate_quality",
    "validate_video_path",
    "validate_request",
    "validate_storage_estimate",
    "VideoErrorCode",
    "blocking_errors",
    "is_warning",
    "validate_video_file",
]
