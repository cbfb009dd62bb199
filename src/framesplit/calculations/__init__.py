"""Pure planning calculations: extraction rate, estimates, frame timestamps."""

from .fps import (
    calculate_extraction_fps,
    calculate_frame_based_fps,
    calculate_interval_based_fps,
    calculate_uniform_sampling_fps,
    estimate_frame_count,
)
from .storage import (
    estimate_frame_storage_size,
    estimate_processing_duration,
    estimate_total_storage_size,
    get_compression_ratio,
)
from .timestamps import calculate_frame_timestamp, generate_frame_infos

__all__ = [
    "calculate_extraction_fps",
    "calculate_frame_based_fps",
    "calculate_interval_based_fps",
    "calculate_uniform_sampling_fps",
    "estimate_frame_count",
    "estimate_frame_storage_size",
    "estimate_processing_duration",
    "estimate_total_storage_size",
    "get_compression_ratio",
    "calculate_frame_timestamp",
    "generate_frame_infos",
]
