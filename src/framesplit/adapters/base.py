"""Capability contracts (Protocols) for the video, permission and picker backends."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from framesplit.core.contracts import VideoMetadata


class FrameExtractionConfig(BaseModel):
    """Resolved parameters handed to a video backend for one extraction."""

    model_config = ConfigDict(frozen=True)

    video_path: str
    output_directory: str
    frame_rate: float | None = Field(None, description="Extraction rate; None keeps the native rate")
    quality: float | None = Field(None, description="JPEG quality 1-31")


class FrameExtractionOutput(BaseModel):
    """What a video backend reports after writing frames."""

    model_config = ConfigDict(frozen=True)

    output_paths: list[str] = Field(default_factory=list, description="Produced files, in extraction order")
    frame_count: int
    processing_time_ms: float


class VideoFile(BaseModel):
    """A video picked from the gallery or recorded with the camera."""

    model_config = ConfigDict(frozen=True)

    uri: str | None = None
    file_name: str | None = None
    file_size: int = 0
    type: str | None = Field(None, description="MIME type, when the picker knows it")
    duration: float | None = None


class PermissionStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    BLOCKED = "blocked"
    UNAVAILABLE = "unavailable"


class PermissionType(str, Enum):
    PHOTO_LIBRARY = "photo_library"
    CAMERA = "camera"


class VideoProcessor(Protocol):
    """Backend that reads video containers and writes frame images."""

    async def get_video_metadata(self, video_path: str) -> VideoMetadata:
        """Probe duration, resolution and native frame rate."""
        ...

    async def extract_frames(self, config: FrameExtractionConfig) -> FrameExtractionOutput:
        """Write frames to ``config.output_directory`` and report them in order."""
        ...

    async def cancel_operation(self) -> None:
        """Abort the in-flight extraction, if any."""
        ...


class PermissionProvider(Protocol):
    async def check(self, permission: PermissionType) -> PermissionStatus:
        """Current status of ``permission`` without prompting."""
        ...

    async def request(self, permission: PermissionType) -> PermissionStatus:
        """Prompt for ``permission`` and return the resulting status."""
        ...

    async def open_settings(self) -> None:
        """Open the OS settings page for this app."""
        ...


class VideoPicker(Protocol):
    """Gallery/camera picker. ``None`` means the user cancelled."""

    async def pick_video(self) -> VideoFile | None:
        """Let the user choose a video from the gallery."""
        ...

    async def pick_video_from_camera(self) -> VideoFile | None:
        """Let the user record a video with the camera."""
        ...
