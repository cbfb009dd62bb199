"""Video backend built on the ffprobe and ffmpeg command-line tools."""

from __future__ import annotations

import asyncio
import json
import logging
import subprocess
import time
from pathlib import Path
from typing import Any

from framesplit.calculations.fps import round_half_up
from framesplit.core.config import FramesplitConfig
from framesplit.core.contracts import VideoMetadata
from framesplit.core.errors import VideoProcessingError, VideoProcessingErrorCode
from framesplit.utils.subprocess_utils import run_command
from .base import FrameExtractionConfig, FrameExtractionOutput

logger = logging.getLogger(__name__)


def parse_frame_rate(rate: str | None) -> float:
    """Parse ffprobe's rational rate ("30000/1001") or a plain number. Returns 0 when unknown."""
    if not rate:
        return 0.0
    if "/" in rate:
        num, den = (float(x) for x in rate.split("/", 1))
        return num / den if den else 0.0
    return float(rate)


def parse_probe_output(data: dict[str, Any]) -> VideoMetadata:
    """Build VideoMetadata from ``ffprobe -print_format json`` output.

    Raises VideoProcessingError(UNSUPPORTED_FORMAT) when there is no video stream.
    """
    video_stream = next(
        (s for s in data.get("streams", []) if s.get("codec_type") == "video"),
        None,
    )
    if video_stream is None:
        raise VideoProcessingError("No video stream found", VideoProcessingErrorCode.UNSUPPORTED_FORMAT)

    fmt = data.get("format", {})
    frame_rate = parse_frame_rate(video_stream.get("avg_frame_rate"))
    if frame_rate <= 0:
        frame_rate = parse_frame_rate(video_stream.get("r_frame_rate"))

    duration = fmt.get("duration") or video_stream.get("duration") or 0
    bitrate = fmt.get("bit_rate") or video_stream.get("bit_rate") or 0

    return VideoMetadata(
        duration=float(duration),
        width=int(video_stream.get("width", 0)),
        height=int(video_stream.get("height", 0)),
        frame_rate=frame_rate,
        codec=video_stream.get("codec_name", "unknown"),
        bitrate=int(bitrate),
    )


class FfmpegVideoProcessor:
    """VideoProcessor backed by ffprobe/ffmpeg subprocesses.

    One extraction at a time; ``cancel_operation`` terminates the running
    ffmpeg process and the pending ``extract_frames`` call raises CANCELLED.
    """

    def __init__(self, config: FramesplitConfig | None = None):
        self.config = config or FramesplitConfig()
        self._process: asyncio.subprocess.Process | None = None
        self._cancel_requested = False

    async def get_video_metadata(self, video_path: str) -> VideoMetadata:
        """Probe ``video_path`` with ffprobe."""
        if not Path(video_path).is_file():
            raise VideoProcessingError(f"Video not found: {video_path}", VideoProcessingErrorCode.VIDEO_NOT_FOUND)

        cmd = [
            self.config.ffprobe_binary,
            "-v", "error",
            "-print_format", "json",
            "-show_format",
            "-show_streams",
            str(video_path),
        ]
        try:
            result = await run_command(cmd, timeout=self.config.command_timeout)
        except FileNotFoundError as e:
            raise VideoProcessingError(
                f"{self.config.ffprobe_binary} not found on PATH", VideoProcessingErrorCode.FFMPEG_FAILED, original=e
            ) from e
        except subprocess.CalledProcessError as e:
            raise VideoProcessingError(
                f"ffprobe could not read {video_path}: {e.stderr[-300:].strip()}",
                VideoProcessingErrorCode.UNSUPPORTED_FORMAT,
                original=e,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise VideoProcessingError(
                f"ffprobe timed out after {e.timeout}s", VideoProcessingErrorCode.FFMPEG_FAILED, original=e
            ) from e

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise VideoProcessingError(
                "ffprobe returned malformed JSON", VideoProcessingErrorCode.UNSUPPORTED_FORMAT, original=e
            ) from e

        metadata = parse_probe_output(data)
        logger.info(
            f"Probed {video_path}: {metadata.width}x{metadata.height} "
            f"@ {metadata.frame_rate:.3f} fps, {metadata.duration:.2f}s ({metadata.codec})"
        )
        return metadata

    def build_extract_command(self, config: FrameExtractionConfig) -> list[str]:
        """ffmpeg argv writing numbered images into the output directory."""
        output_pattern = Path(config.output_directory) / f"{self.config.filename_prefix}%05d.{self.config.image_format}"
        cmd = [self.config.ffmpeg_binary, "-hide_banner", "-y", "-i", str(config.video_path)]
        if config.frame_rate is not None:
            cmd += ["-vf", f"fps={config.frame_rate}"]
        if config.quality is not None:
            cmd += ["-q:v", str(round_half_up(config.quality))]
        cmd.append(str(output_pattern))
        return cmd

    def list_output_files(self, output_directory: str) -> list[str]:
        """Produced frame files in ``output_directory``, sorted by name."""
        pattern = f"{self.config.filename_prefix}*.{self.config.image_format}"
        return [str(p) for p in sorted(Path(output_directory).glob(pattern))]

    async def extract_frames(self, config: FrameExtractionConfig) -> FrameExtractionOutput:
        """Run ffmpeg for ``config`` and report the files it wrote."""
        if not Path(config.video_path).is_file():
            raise VideoProcessingError(
                f"Video not found: {config.video_path}", VideoProcessingErrorCode.VIDEO_NOT_FOUND
            )
        try:
            Path(config.output_directory).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise VideoProcessingError(
                f"Cannot create output directory {config.output_directory}: {e}",
                VideoProcessingErrorCode.INVALID_OUTPUT_DIR,
                original=e,
            ) from e

        self._cancel_requested = False
        cmd = self.build_extract_command(config)
        t0 = time.perf_counter()
        try:
            await run_command(cmd, timeout=self.config.command_timeout, on_spawn=self._track)
        except FileNotFoundError as e:
            raise VideoProcessingError(
                f"{self.config.ffmpeg_binary} not found on PATH", VideoProcessingErrorCode.FFMPEG_FAILED, original=e
            ) from e
        except subprocess.CalledProcessError as e:
            if self._cancel_requested:
                raise VideoProcessingError("Operation cancelled", VideoProcessingErrorCode.CANCELLED) from e
            logger.error(f"ffmpeg failed for {config.video_path}: {e.stderr[-500:]}")
            raise VideoProcessingError(
                f"ffmpeg exited with status {e.returncode}", VideoProcessingErrorCode.FFMPEG_FAILED, original=e
            ) from e
        except subprocess.TimeoutExpired as e:
            raise VideoProcessingError(
                f"ffmpeg timed out after {e.timeout}s", VideoProcessingErrorCode.FFMPEG_FAILED, original=e
            ) from e
        finally:
            self._process = None

        if self._cancel_requested:
            raise VideoProcessingError("Operation cancelled", VideoProcessingErrorCode.CANCELLED)

        elapsed_ms = (time.perf_counter() - t0) * 1000
        output_paths = self.list_output_files(config.output_directory)
        logger.info(f"ffmpeg wrote {len(output_paths)} frames in {elapsed_ms:.0f} ms")
        return FrameExtractionOutput(
            output_paths=output_paths,
            frame_count=len(output_paths),
            processing_time_ms=elapsed_ms,
        )

    async def cancel_operation(self) -> None:
        """Terminate the running ffmpeg process; no-op when idle."""
        process = self._process
        if process is None or process.returncode is not None:
            return
        logger.info("Cancelling ffmpeg extraction")
        self._cancel_requested = True
        try:
            process.terminate()
        except ProcessLookupError:
            pass

    def _track(self, process: asyncio.subprocess.Process) -> None:
        self._process = process
