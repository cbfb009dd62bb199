"""Map produced frame files back to their position in the source video."""

from __future__ import annotations

from collections.abc import Sequence

from framesplit.core.contracts import FrameInfo


def calculate_frame_timestamp(frame_number: int, fps: float) -> float:
    """Seconds into the video of the ``frame_number``-th extracted frame."""
    if frame_number < 0:
        raise ValueError("Frame number cannot be negative")
    if fps <= 0:
        raise ValueError("FPS must be greater than 0")
    return frame_number / fps


def generate_frame_infos(output_paths: Sequence[str], fps: float) -> list[FrameInfo]:
    """Build one FrameInfo per path, keeping the order the paths were given in."""
    if fps <= 0:
        raise ValueError("FPS must be greater than 0")
    return [
        FrameInfo(frame_number=i, timestamp=calculate_frame_timestamp(i, fps), path=path)
        for i, path in enumerate(output_paths)
    ]
