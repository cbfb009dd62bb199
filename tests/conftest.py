"""Shared pytest fixtures: in-memory stand-ins for the external capabilities."""

from __future__ import annotations

import asyncio
import math

import pytest

from framesplit.adapters.base import (
    FrameExtractionConfig,
    FrameExtractionOutput,
    PermissionStatus,
    PermissionType,
    VideoFile,
)
from framesplit.core.contracts import FrameExtractionRequest, UniformSampling, VideoMetadata
from framesplit.core.errors import VideoProcessingError, VideoProcessingErrorCode

SAMPLE_METADATA = VideoMetadata(
    duration=10.5, width=1920, height=1080, frame_rate=30.0, codec="h264", bitrate=5_000_000
)


class FakeVideoProcessor:
    """Records calls; produces one path per frame the requested rate would yield."""

    def __init__(self, metadata: VideoMetadata = SAMPLE_METADATA):
        self.metadata = metadata
        self.metadata_error: Exception | None = None
        self.extract_error: Exception | None = None
        self.block_extraction = False
        self.reported_frame_count: int | None = None
        self.metadata_calls: list[str] = []
        self.extract_calls: list[FrameExtractionConfig] = []
        self.cancel_calls = 0
        self._release: asyncio.Event | None = None
        self._in_flight = False
        self._cancelled = False

    async def get_video_metadata(self, video_path: str) -> VideoMetadata:
        self.metadata_calls.append(video_path)
        if self.metadata_error is not None:
            raise self.metadata_error
        return self.metadata

    async def extract_frames(self, config: FrameExtractionConfig) -> FrameExtractionOutput:
        self.extract_calls.append(config)
        if self.extract_error is not None:
            raise self.extract_error

        self._in_flight = True
        self._cancelled = False
        try:
            if self.block_extraction:
                self._release = asyncio.Event()
                await self._release.wait()
            if self._cancelled:
                raise VideoProcessingError("Operation cancelled", VideoProcessingErrorCode.CANCELLED)
        finally:
            self._in_flight = False

        count = math.floor(config.frame_rate * self.metadata.duration + 0.5)
        paths = [f"/mock/output/frame_{i + 1:05d}.jpg" for i in range(count)]
        return FrameExtractionOutput(
            output_paths=paths,
            frame_count=len(paths) if self.reported_frame_count is None else self.reported_frame_count,
            processing_time_ms=150,
        )

    async def cancel_operation(self) -> None:
        self.cancel_calls += 1
        if not self._in_flight:
            return
        self._cancelled = True
        if self._release is not None:
            self._release.set()


class FakePermissions:
    def __init__(self, check_status=PermissionStatus.GRANTED, request_status=PermissionStatus.GRANTED):
        self.check_status = check_status
        self.request_status = request_status
        self.checked: list[PermissionType] = []
        self.requested: list[PermissionType] = []
        self.settings_opened = 0

    async def check(self, permission: PermissionType) -> PermissionStatus:
        self.checked.append(permission)
        return self.check_status

    async def request(self, permission: PermissionType) -> PermissionStatus:
        self.requested.append(permission)
        return self.request_status

    async def open_settings(self) -> None:
        self.settings_opened += 1


class FakePicker:
    def __init__(self, video: VideoFile | None = None, error: Exception | None = None):
        self.video = video
        self.error = error
        self.gallery_calls = 0
        self.camera_calls = 0

    async def pick_video(self) -> VideoFile | None:
        self.gallery_calls += 1
        if self.error is not None:
            raise self.error
        return self.video

    async def pick_video_from_camera(self) -> VideoFile | None:
        self.camera_calls += 1
        if self.error is not None:
            raise self.error
        return self.video


@pytest.fixture
def processor() -> FakeVideoProcessor:
    return FakeVideoProcessor()


@pytest.fixture
def valid_request() -> FrameExtractionRequest:
    return FrameExtractionRequest(
        video_path="/path/to/video.mp4",
        output_directory="/path/to/output",
        strategy=UniformSampling(frame_count=100),
        quality=2,
    )


@pytest.fixture
def sample_video_file() -> VideoFile:
    return VideoFile(
        uri="file:///storage/DCIM/clip.mp4",
        file_name="clip.mp4",
        file_size=10 * 1024 * 1024,
        type="video/mp4",
        duration=12.0,
    )


@pytest.fixture
def make_permissions():
    return FakePermissions


@pytest.fixture
def make_picker():
    return FakePicker
