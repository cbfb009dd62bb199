"""framesplit core: shared contracts, errors, configuration and logging."""

from .contracts import (
    AllFrames,
    CustomFrameRate,
    ExtractionResult,
    ExtractionStrategy,
    FrameBased,
    FrameExtractionPlan,
    FrameExtractionRequest,
    FrameInfo,
    IntervalBased,
    UniformSampling,
    ValidationError,
    ValidationResult,
    VideoMetadata,
    VideoResolution,
)
from .errors import (
    VideoImportError,
    VideoImportErrorCode,
    VideoProcessingError,
    VideoProcessingErrorCode,
    map_native_error,
)
from .config import FramesplitConfig, load_config
from .logging import setup_logging

__all__ = [
    "AllFrames",
    "CustomFrameRate",
    "ExtractionResult",
    "ExtractionStrategy",
    "FrameBased",
    "FrameExtractionPlan",
    "FrameExtractionRequest",
    "FrameInfo",
    "IntervalBased",
    "UniformSampling",
    "ValidationError",
    "ValidationResult",
    "VideoMetadata",
    "VideoResolution",
    "VideoImportError",
    "VideoImportErrorCode",
    "VideoProcessingError",
    "VideoProcessingErrorCode",
    "map_native_error",
    "FramesplitConfig",
    "load_config",
    "setup_logging",
]
