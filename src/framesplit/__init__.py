"""framesplit - plan, validate and run still-frame extraction from videos."""

__version__ = "0.1.0"

from .core.contracts import (
    AllFrames,
    CustomFrameRate,
    ExtractionResult,
    FrameBased,
    FrameExtractionPlan,
    FrameExtractionRequest,
    FrameInfo,
    IntervalBased,
    UniformSampling,
    ValidationResult,
    VideoMetadata,
)
from .core.errors import VideoImportError, VideoProcessingError, VideoProcessingErrorCode
from .services import FrameExtractionService, VideoImportService
from .validation import validate_request

__all__ = [
    "AllFrames",
    "CustomFrameRate",
    "ExtractionResult",
    "FrameBased",
    "FrameExtractionPlan",
    "FrameExtractionRequest",
    "FrameInfo",
    "IntervalBased",
    "UniformSampling",
    "ValidationResult",
    "VideoMetadata",
    "VideoImportError",
    "VideoProcessingError",
    "VideoProcessingErrorCode",
    "FrameExtractionService",
    "VideoImportService",
    "validate_request",
]
