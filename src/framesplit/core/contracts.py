"""Common Pydantic models shared across planning, validation and services."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Strategy parameters accept any number so that the validators, not model
# construction, report non-finite and non-integer values.
Number = Union[int, float]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── Extraction strategies ────────────────────────────────────────────

class UniformSampling(_Frozen):
    """Exactly ``frame_count`` frames spread evenly over the whole video."""

    type: Literal["uniform"] = "uniform"
    frame_count: Number = Field(..., description="Total number of frames to extract")


class IntervalBased(_Frozen):
    """One frame every ``interval_seconds`` seconds."""

    type: Literal["interval"] = "interval"
    interval_seconds: Number = Field(..., description="Seconds between frames")


class FrameBased(_Frozen):
    """Every Nth source frame; needs the native frame rate."""

    type: Literal["frame-based"] = "frame-based"
    frame_interval: Number = Field(..., description="Extract every Nth frame")


class AllFrames(_Frozen):
    """Every source frame at the native frame rate."""

    type: Literal["all-frames"] = "all-frames"


class CustomFrameRate(_Frozen):
    """User-specified extraction rate, independent of the source rate."""

    type: Literal["custom-fps"] = "custom-fps"
    fps: Number = Field(..., description="Frames per second to extract")


ExtractionStrategy = Annotated[
    Union[UniformSampling, IntervalBased, FrameBased, AllFrames, CustomFrameRate],
    Field(discriminator="type"),
]

STRATEGY_TYPES: tuple[str, ...] = ("uniform", "interval", "frame-based", "all-frames", "custom-fps")


# ── Video metadata and requests ──────────────────────────────────────

class VideoMetadata(_Frozen):
    """Source video properties reported by the video capability."""

    duration: float = Field(..., description="Duration in seconds")
    width: int = Field(..., description="Frame width in pixels")
    height: int = Field(..., description="Frame height in pixels")
    frame_rate: float = Field(..., description="Native frames per second")
    codec: str = ""
    bitrate: int = 0


class FrameExtractionRequest(_Frozen):
    """A caller's request to extract frames. The unit of validation."""

    video_path: str = Field(..., description="Path to the source video")
    output_directory: str = Field(..., description="Directory for extracted frames")
    strategy: ExtractionStrategy
    quality: Number | None = Field(None, description="JPEG quality 1-31, lower is better")


# ── Validation ───────────────────────────────────────────────────────

class ValidationError(_Frozen):
    """A single field-scoped validation failure."""

    field: str
    message: str
    code: str
    blocking: bool = True

    @field_validator("code", mode="before")
    @classmethod
    def _plain_code(cls, value: Any) -> Any:
        return value.value if isinstance(value, Enum) else value


class ValidationResult(_Frozen):
    """Pass/fail outcome; ``valid`` holds exactly when ``errors`` is empty."""

    valid: bool
    errors: tuple[ValidationError, ...] = ()

    @model_validator(mode="after")
    def _check_consistency(self) -> ValidationResult:
        if self.valid == bool(self.errors):
            raise ValueError("valid must be True exactly when there are no errors")
        return self

    @classmethod
    def ok(cls) -> ValidationResult:
        """A passing result with no errors."""
        return cls(valid=True)

    @classmethod
    def failed(cls, errors: list[ValidationError] | tuple[ValidationError, ...]) -> ValidationResult:
        """A failing result; ``errors`` must not be empty."""
        return cls(valid=False, errors=tuple(errors))


# ── Plans and results ────────────────────────────────────────────────

class VideoResolution(_Frozen):
    width: int
    height: int


class FrameExtractionPlan(_Frozen):
    """Fully resolved extraction parameters plus estimates, computed before extraction."""

    video_path: str
    output_directory: str
    strategy: ExtractionStrategy
    quality: Number

    extraction_fps: float = Field(..., description="Rate used to sample the video")
    estimated_frame_count: int
    estimated_storage_mb: float
    estimated_duration_ms: int

    video_duration: float
    video_fps: float
    video_resolution: VideoResolution


class FrameInfo(_Frozen):
    """One produced frame: position in the sequence, time in the video, file path."""

    frame_number: int = Field(..., description="0-indexed position in the extraction sequence")
    timestamp: float = Field(..., description="Seconds into the source video")
    path: str


class ExtractionResult(_Frozen):
    frames: tuple[FrameInfo, ...]
    total_frames: int
    actual_storage_mb: float
    processing_time_ms: float
    strategy: ExtractionStrategy

    @model_validator(mode="after")
    def _check_frame_total(self) -> ExtractionResult:
        if self.total_frames != len(self.frames):
            raise ValueError(
                f"total_frames ({self.total_frames}) does not match frames ({len(self.frames)})"
            )
        return self
