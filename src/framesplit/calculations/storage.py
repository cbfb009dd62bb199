"""Storage and processing-time estimates for a planned extraction.

Sizes are in megabytes (1024 * 1024 bytes). Estimates are deliberately
biased upward by ``SAFETY_MARGIN`` so real usage rarely exceeds them.
"""

from __future__ import annotations

import math

from framesplit.validation.rules import MAX_QUALITY, MIN_QUALITY

# Fraction of the uncompressed RGB size kept by JPEG at each quality level.
# Lower quality number means higher fidelity and a larger file.
JPEG_COMPRESSION_RATIOS: dict[int, float] = {
    1: 0.15,
    2: 0.12,
    3: 0.10,
    4: 0.08,
    5: 0.07,
    6: 0.06,
    7: 0.05,
    8: 0.045,
    9: 0.04,
    10: 0.035,
    11: 0.03,
    12: 0.028,
    13: 0.026,
    14: 0.024,
    15: 0.022,
    16: 0.02,
    17: 0.019,
    18: 0.018,
    19: 0.017,
    20: 0.016,
    21: 0.015,
    22: 0.014,
    23: 0.013,
    24: 0.012,
    25: 0.011,
    26: 0.01,
    27: 0.009,
    28: 0.008,
    29: 0.007,
    30: 0.006,
    31: 0.005,
}

SAFETY_MARGIN = 1.5
BYTES_PER_PIXEL = 3
BYTES_PER_MB = 1024 * 1024
MS_PER_FRAME = 100


def get_compression_ratio(quality: float) -> float:
    """Table lookup with quality rounded and clamped into 1..31."""
    clamped = max(MIN_QUALITY, min(MAX_QUALITY, math.floor(quality + 0.5)))
    return JPEG_COMPRESSION_RATIOS[clamped]


def estimate_frame_storage_size(width: int, height: int, quality: float) -> float:
    """Estimated size in MB of one extracted frame.

    Out-of-range quality is rejected rather than clamped; callers are
    expected to have run ``validate_quality`` first.
    """
    if width <= 0 or height <= 0:
        raise ValueError("Width and height must be greater than 0")
    if quality < MIN_QUALITY or quality > MAX_QUALITY:
        raise ValueError(f"Quality must be between {MIN_QUALITY} and {MAX_QUALITY}")

    uncompressed_bytes = width * height * BYTES_PER_PIXEL
    estimated_bytes = uncompressed_bytes * get_compression_ratio(quality) * SAFETY_MARGIN
    return estimated_bytes / BYTES_PER_MB


def estimate_total_storage_size(frame_count: int, width: int, height: int, quality: float) -> float:
    """Estimated size in MB of ``frame_count`` frames; 0 for no frames."""
    if frame_count < 0:
        raise ValueError("Frame count cannot be negative")
    if frame_count == 0:
        return 0.0
    return frame_count * estimate_frame_storage_size(width, height, quality)


def estimate_processing_duration(frame_count: int) -> int:
    """Rough wall-clock estimate in milliseconds, linear in frame count."""
    if frame_count < 0:
        raise ValueError("Frame count cannot be negative")
    return frame_count * MS_PER_FRAME
