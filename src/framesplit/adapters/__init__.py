"""Capability contracts and the ffmpeg-backed video backend."""

from .base import (
    FrameExtractionConfig,
    FrameExtractionOutput,
    PermissionProvider,
    PermissionStatus,
    PermissionType,
    VideoFile,
    VideoPicker,
    VideoProcessor,
)
from .ffmpeg import FfmpegVideoProcessor

__all__ = [
    "FrameExtractionConfig",
    "FrameExtractionOutput",
    "PermissionProvider",
    "PermissionStatus",
    "PermissionType",
    "VideoFile",
    "VideoPicker",
    "VideoProcessor",
    "FfmpegVideoProcessor",
]
