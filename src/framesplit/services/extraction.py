"""Frame extraction service: validate, plan, check quota, delegate, assemble.

The service drives one request through a fixed sequence of states::

    VALIDATING -> FETCHING_METADATA -> PLANNING -> QUOTA_CHECKING
        -> EXTRACTING -> ASSEMBLING_RESULT -> DONE

with FAILED reachable from any of them. ``plan_extraction`` stops after
PLANNING. Every failure reaching a caller is a VideoProcessingError.
"""

from __future__ import annotations

import logging
import time
from enum import Enum

from framesplit.adapters.base import FrameExtractionConfig, FrameExtractionOutput, VideoProcessor
from framesplit.calculations.fps import calculate_extraction_fps, estimate_frame_count
from framesplit.calculations.storage import estimate_processing_duration, estimate_total_storage_size
from framesplit.calculations.timestamps import generate_frame_infos
from framesplit.core.contracts import (
    ExtractionResult,
    FrameExtractionPlan,
    FrameExtractionRequest,
    ValidationResult,
    VideoMetadata,
    VideoResolution,
)
from framesplit.core.errors import VideoProcessingError, VideoProcessingErrorCode, map_native_error
from framesplit.utils.io import calculate_actual_storage_size
from framesplit.validation.request import validate_request, validate_storage_estimate
from framesplit.validation.rules import DEFAULT_QUALITY

logger = logging.getLogger(__name__)


class ExtractionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    FETCHING_METADATA = "fetching_metadata"
    PLANNING = "planning"
    QUOTA_CHECKING = "quota_checking"
    EXTRACTING = "extracting"
    ASSEMBLING_RESULT = "assembling_result"
    DONE = "done"
    FAILED = "failed"


def create_plan(request: FrameExtractionRequest, metadata: VideoMetadata) -> FrameExtractionPlan:
    """Compose the extraction plan for a validated request.

    Pure: identical inputs give identical plans. Raises ``ValueError`` if
    the request/metadata pair violates a calculator precondition (for
    example a uniform strategy against a zero-length video).
    """
    quality = request.quality if request.quality is not None else DEFAULT_QUALITY
    extraction_fps = calculate_extraction_fps(request.strategy, metadata)
    estimated_frame_count = estimate_frame_count(extraction_fps, metadata.duration)
    estimated_storage_mb = estimate_total_storage_size(
        estimated_frame_count, metadata.width, metadata.height, quality
    )
    estimated_duration_ms = estimate_processing_duration(estimated_frame_count)

    return FrameExtractionPlan(
        video_path=request.video_path,
        output_directory=request.output_directory,
        strategy=request.strategy,
        quality=quality,
        extraction_fps=extraction_fps,
        estimated_frame_count=estimated_frame_count,
        estimated_storage_mb=estimated_storage_mb,
        estimated_duration_ms=estimated_duration_ms,
        video_duration=metadata.duration,
        video_fps=metadata.frame_rate,
        video_resolution=VideoResolution(width=metadata.width, height=metadata.height),
    )


def plan_to_extraction_config(plan: FrameExtractionPlan) -> FrameExtractionConfig:
    """Translate a plan into the parameters the video backend consumes."""
    return FrameExtractionConfig(
        video_path=plan.video_path,
        output_directory=plan.output_directory,
        frame_rate=plan.extraction_fps,
        quality=plan.quality,
    )


class FrameExtractionService:
    """Entry point for planning and running frame extractions.

    Holds at most one extraction in flight; callers needing parallel
    extractions create one service per extraction.
    """

    def __init__(self, processor: VideoProcessor):
        self.processor = processor
        self.state = ExtractionState.IDLE
        self._extracting = False

    def validate_request(self, request: FrameExtractionRequest) -> ValidationResult:
        """Validate a request without fetching metadata or changing state."""
        return validate_request(request)

    async def plan_extraction(self, request: FrameExtractionRequest) -> FrameExtractionPlan:
        """Validate, fetch metadata and build a plan without extracting anything.

        Always available. While an extraction is in flight the plan is built
        without touching ``state``, which keeps tracking the extraction.
        """
        try:
            self._check_request(request, preview=True)
            metadata = await self._fetch_metadata(request.video_path, preview=True)
            plan = self._build_plan(request, metadata, preview=True)
        except VideoProcessingError as e:
            self._fail(e, preview=True)
            raise
        self._transition(ExtractionState.DONE, preview=True)
        return plan

    async def extract_frames(self, request: FrameExtractionRequest) -> ExtractionResult:
        """Run the full pipeline and return the assembled result."""
        if self._extracting:
            raise RuntimeError("An extraction is already in progress on this service")
        self._extracting = True
        t0 = time.perf_counter()
        try:
            self._check_request(request)
            metadata = await self._fetch_metadata(request.video_path)
            plan = self._build_plan(request, metadata)
            self._check_quota(plan)
            output = await self._run_extraction(plan)
            result = self._assemble_result(output, plan)
        except VideoProcessingError as e:
            self._fail(e)
            raise
        finally:
            self._extracting = False

        self._transition(ExtractionState.DONE)
        logger.info(
            f"Extracted {result.total_frames} frames from {request.video_path} "
            f"in {time.perf_counter() - t0:.1f}s"
        )
        return result

    async def cancel_extraction(self) -> None:
        """Forward a cancel to the backend. The in-flight call fails with CANCELLED."""
        logger.info("Cancellation requested")
        try:
            await self.processor.cancel_operation()
        except VideoProcessingError:
            raise
        except Exception as e:
            raise map_native_error(e) from e

    # --- Private helper methods ---

    def _transition(self, state: ExtractionState, preview: bool = False) -> None:
        # A preview plan never overrides the state of a running extraction.
        if preview and self._extracting:
            return
        logger.debug(f"state {self.state.value} -> {state.value}")
        self.state = state

    def _fail(self, error: VideoProcessingError, preview: bool = False) -> None:
        if preview:
            logger.warning(f"Plan failed: [{error.code.value}] {error.message}")
        elif error.is_cancelled:
            logger.info(f"Extraction cancelled during {self.state.value}")
        else:
            logger.error(f"Failed during {self.state.value}: [{error.code.value}] {error.message}")
        self._transition(ExtractionState.FAILED, preview)

    def _check_request(self, request: FrameExtractionRequest, preview: bool = False) -> None:
        self._transition(ExtractionState.VALIDATING, preview)
        validation = self.validate_request(request)
        if not validation.valid:
            messages = ", ".join(e.message for e in validation.errors)
            raise VideoProcessingError(
                f"Invalid extraction request: {messages}",
                VideoProcessingErrorCode.INVALID_PARAMS,
                errors=validation.errors,
            )

    async def _fetch_metadata(self, video_path: str, preview: bool = False) -> VideoMetadata:
        self._transition(ExtractionState.FETCHING_METADATA, preview)
        try:
            return await self.processor.get_video_metadata(video_path)
        except VideoProcessingError:
            raise
        except Exception as e:
            raise map_native_error(e) from e

    def _build_plan(
        self, request: FrameExtractionRequest, metadata: VideoMetadata, preview: bool = False
    ) -> FrameExtractionPlan:
        self._transition(ExtractionState.PLANNING, preview)
        try:
            plan = create_plan(request, metadata)
        except ValueError as e:
            raise VideoProcessingError(
                f"Cannot plan extraction for {request.video_path}: {e}",
                VideoProcessingErrorCode.INVALID_PARAMS,
                original=e,
            ) from e
        logger.info(
            f"Plan: {plan.extraction_fps:.4f} fps, ~{plan.estimated_frame_count} frames, "
            f"~{plan.estimated_storage_mb:.1f} MB, ~{plan.estimated_duration_ms} ms"
        )
        return plan

    def _check_quota(self, plan: FrameExtractionPlan) -> None:
        self._transition(ExtractionState.QUOTA_CHECKING)
        storage_errors = validate_storage_estimate(plan.estimated_storage_mb)
        if storage_errors:
            raise VideoProcessingError(
                storage_errors[0].message,
                VideoProcessingErrorCode.INSUFFICIENT_STORAGE,
                errors=storage_errors,
            )

    async def _run_extraction(self, plan: FrameExtractionPlan) -> FrameExtractionOutput:
        self._transition(ExtractionState.EXTRACTING)
        try:
            return await self.processor.extract_frames(plan_to_extraction_config(plan))
        except VideoProcessingError:
            raise
        except Exception as e:
            raise map_native_error(e) from e

    def _assemble_result(self, output: FrameExtractionOutput, plan: FrameExtractionPlan) -> ExtractionResult:
        self._transition(ExtractionState.ASSEMBLING_RESULT)
        if output.frame_count != len(output.output_paths):
            raise VideoProcessingError(
                f"Backend reported {output.frame_count} frames but returned {len(output.output_paths)} paths",
                VideoProcessingErrorCode.UNKNOWN,
            )
        frames = generate_frame_infos(output.output_paths, plan.extraction_fps)

        actual_storage_mb = calculate_actual_storage_size(output.output_paths)
        if actual_storage_mb == 0:
            actual_storage_mb = plan.estimated_storage_mb

        return ExtractionResult(
            frames=tuple(frames),
            total_frames=output.frame_count,
            actual_storage_mb=actual_storage_mb,
            processing_time_ms=output.processing_time_ms,
            strategy=plan.strategy,
        )
