"""Strategy to extraction frame-rate conversion.

Every function here assumes validated input and raises ``ValueError`` when a
precondition does not hold. A positive, finite rate is returned otherwise.
"""

from __future__ import annotations

import math
from typing import assert_never

from framesplit.core.contracts import (
    AllFrames,
    CustomFrameRate,
    ExtractionStrategy,
    FrameBased,
    IntervalBased,
    UniformSampling,
    VideoMetadata,
)


def calculate_uniform_sampling_fps(frame_count: float, duration: float) -> float:
    """Rate that yields ``frame_count`` frames over ``duration`` seconds.

    >>> calculate_uniform_sampling_fps(100, 10)
    10.0
    """
    if duration <= 0:
        raise ValueError("Duration must be greater than 0")
    if frame_count <= 0:
        raise ValueError("Frame count must be greater than 0")
    return frame_count / duration


def calculate_interval_based_fps(interval_seconds: float) -> float:
    """One frame every ``interval_seconds`` seconds."""
    if interval_seconds <= 0:
        raise ValueError("Interval must be greater than 0")
    return 1 / interval_seconds


def calculate_frame_based_fps(frame_interval: float, video_fps: float) -> float:
    """Every ``frame_interval``-th frame of a ``video_fps`` source."""
    if frame_interval <= 0:
        raise ValueError("Frame interval must be greater than 0")
    if video_fps <= 0:
        raise ValueError("Video FPS must be greater than 0")
    return video_fps / frame_interval


def calculate_extraction_fps(strategy: ExtractionStrategy, metadata: VideoMetadata) -> float:
    """Resolve the extraction rate for any strategy against the source video."""
    if isinstance(strategy, UniformSampling):
        return calculate_uniform_sampling_fps(strategy.frame_count, metadata.duration)
    if isinstance(strategy, IntervalBased):
        return calculate_interval_based_fps(strategy.interval_seconds)
    if isinstance(strategy, FrameBased):
        return calculate_frame_based_fps(strategy.frame_interval, metadata.frame_rate)
    if isinstance(strategy, AllFrames):
        if metadata.frame_rate <= 0:
            raise ValueError("Video FPS must be greater than 0")
        return float(metadata.frame_rate)
    if isinstance(strategy, CustomFrameRate):
        if strategy.fps <= 0:
            raise ValueError("FPS must be greater than 0")
        return float(strategy.fps)
    assert_never(strategy)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, unlike ``round``."""
    return math.floor(value + 0.5)


def estimate_frame_count(fps: float, duration: float) -> int:
    """Number of frames sampled at ``fps`` over ``duration`` seconds, rounded half up."""
    if fps <= 0:
        raise ValueError("FPS must be greater than 0")
    if duration < 0:
        raise ValueError("Duration cannot be negative")
    return round_half_up(fps * duration)
