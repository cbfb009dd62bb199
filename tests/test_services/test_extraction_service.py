"""Tests for FrameExtractionService: planning, quota, delegation, cancellation."""

import asyncio

import pytest

from framesplit.core.contracts import (
    AllFrames,
    CustomFrameRate,
    FrameBased,
    FrameExtractionRequest,
    IntervalBased,
    UniformSampling,
    VideoMetadata,
)
from framesplit.core.errors import VideoProcessingError, VideoProcessingErrorCode
from framesplit.services.extraction import ExtractionState, FrameExtractionService, create_plan
from framesplit.validation.rules import DEFAULT_QUALITY, ErrorCode


def make_request(strategy, quality=2, video_path="/path/to/video.mp4"):
    return FrameExtractionRequest(
        video_path=video_path, output_directory="/path/to/output", strategy=strategy, quality=quality
    )


class NativeFailure(Exception):
    """Backend error carrying a wire code, like a platform bridge would."""

    def __init__(self, code, message):
        super().__init__(message)
        self.code = code
        self.message = message


class TestCreatePlan:
    def test_uniform(self, valid_request, processor):
        plan = create_plan(valid_request, processor.metadata)
        assert plan.extraction_fps == pytest.approx(100 / 10.5)
        assert plan.estimated_frame_count == 100
        assert plan.estimated_duration_ms == 100 * 100
        assert plan.video_resolution.width == 1920
        assert plan.video_resolution.height == 1080
        assert plan.video_fps == 30.0
        assert plan.video_duration == 10.5
        assert plan.quality == 2

    def test_default_quality(self, processor):
        plan = create_plan(make_request(AllFrames(), quality=None), processor.metadata)
        assert plan.quality == DEFAULT_QUALITY
        assert plan.estimated_frame_count == 315

    def test_deterministic(self, valid_request, processor):
        assert create_plan(valid_request, processor.metadata) == create_plan(valid_request, processor.metadata)

    def test_zero_duration_is_a_value_error(self):
        metadata = VideoMetadata(duration=0, width=640, height=480, frame_rate=30)
        with pytest.raises(ValueError):
            create_plan(make_request(UniformSampling(frame_count=10)), metadata)


class TestPlanExtraction:
    def test_returns_plan_without_extracting(self, processor, valid_request):
        service = FrameExtractionService(processor)
        plan = asyncio.run(service.plan_extraction(valid_request))
        assert plan.estimated_frame_count == 100
        assert processor.metadata_calls == ["/path/to/video.mp4"]
        assert processor.extract_calls == []
        assert service.state is ExtractionState.DONE

    def test_idempotent(self, processor, valid_request):
        service = FrameExtractionService(processor)
        first = asyncio.run(service.plan_extraction(valid_request))
        second = asyncio.run(service.plan_extraction(valid_request))
        assert first == second

    def test_invalid_request_never_reaches_backend(self, processor):
        service = FrameExtractionService(processor)
        request = make_request(UniformSampling(frame_count=0))
        with pytest.raises(VideoProcessingError) as exc_info:
            asyncio.run(service.plan_extraction(request))
        assert exc_info.value.code is VideoProcessingErrorCode.INVALID_PARAMS
        assert [e.code for e in exc_info.value.errors] == [ErrorCode.FRAME_COUNT_TOO_LOW]
        assert processor.metadata_calls == []
        assert service.state is ExtractionState.FAILED

    def test_unplannable_metadata(self, processor):
        processor.metadata = VideoMetadata(duration=10, width=640, height=480, frame_rate=0)
        service = FrameExtractionService(processor)
        with pytest.raises(VideoProcessingError) as exc_info:
            asyncio.run(service.plan_extraction(make_request(FrameBased(frame_interval=5))))
        assert exc_info.value.code is VideoProcessingErrorCode.INVALID_PARAMS
        assert isinstance(exc_info.value.original, ValueError)


class TestExtractFrames:
    @pytest.mark.parametrize(
        "strategy, expected_fps, expected_frames",
        [
            (UniformSampling(frame_count=100), 100 / 10.5, 100),
            (IntervalBased(interval_seconds=0.5), 2.0, 21),
            (FrameBased(frame_interval=10), 3.0, 32),
            (AllFrames(), 30.0, 315),
            (CustomFrameRate(fps=5), 5.0, 53),
        ],
    )
    def test_every_strategy(self, processor, strategy, expected_fps, expected_frames):
        service = FrameExtractionService(processor)
        result = asyncio.run(service.extract_frames(make_request(strategy)))

        (config,) = processor.extract_calls
        assert config.frame_rate == pytest.approx(expected_fps)
        assert config.quality == 2
        assert result.total_frames == expected_frames
        assert len(result.frames) == expected_frames
        assert result.strategy == strategy
        assert service.state is ExtractionState.DONE

    def test_frame_infos(self, processor):
        service = FrameExtractionService(processor)
        result = asyncio.run(service.extract_frames(make_request(CustomFrameRate(fps=2))))
        first, second = result.frames[:2]
        assert (first.frame_number, first.timestamp, first.path) == (0, 0.0, "/mock/output/frame_00001.jpg")
        assert (second.frame_number, second.timestamp) == (1, 0.5)
        assert [f.frame_number for f in result.frames] == list(range(result.total_frames))

    def test_storage_falls_back_to_estimate(self, processor, valid_request):
        service = FrameExtractionService(processor)
        plan = asyncio.run(service.plan_extraction(valid_request))
        result = asyncio.run(service.extract_frames(valid_request))
        assert result.actual_storage_mb == pytest.approx(plan.estimated_storage_mb)
        assert result.processing_time_ms == 150

    def test_storage_measured_from_disk(self, tmp_path):
        paths = []
        for i in range(3):
            p = tmp_path / f"frame_{i + 1:05d}.jpg"
            p.write_bytes(b"\0" * 1024 * 1024)
            paths.append(str(p))

        class DiskProcessor:
            async def get_video_metadata(self, video_path):
                return VideoMetadata(duration=3, width=640, height=480, frame_rate=30)

            async def extract_frames(self, config):
                from framesplit.adapters.base import FrameExtractionOutput

                return FrameExtractionOutput(output_paths=paths, frame_count=3, processing_time_ms=10)

            async def cancel_operation(self):
                pass

        service = FrameExtractionService(DiskProcessor())
        result = asyncio.run(service.extract_frames(make_request(CustomFrameRate(fps=1))))
        assert result.actual_storage_mb == pytest.approx(3.0)

    def test_quota_exceeded_before_backend_runs(self, processor):
        service = FrameExtractionService(processor)
        request = make_request(UniformSampling(frame_count=10000), quality=1)
        with pytest.raises(VideoProcessingError) as exc_info:
            asyncio.run(service.extract_frames(request))
        error = exc_info.value
        assert error.code is VideoProcessingErrorCode.INSUFFICIENT_STORAGE
        assert error.is_recoverable
        assert "exceeds limit of 5000MB" in error.message
        assert processor.extract_calls == []

    def test_invalid_request(self, processor):
        service = FrameExtractionService(processor)
        request = make_request(IntervalBased(interval_seconds=0), video_path="")
        with pytest.raises(VideoProcessingError) as exc_info:
            asyncio.run(service.extract_frames(request))
        assert exc_info.value.code is VideoProcessingErrorCode.INVALID_PARAMS
        assert len(exc_info.value.errors) == 2
        assert processor.metadata_calls == []
        assert processor.extract_calls == []

    def test_taxonomy_error_passes_through(self, processor, valid_request):
        processor.metadata_error = VideoProcessingError("gone", VideoProcessingErrorCode.VIDEO_NOT_FOUND)
        service = FrameExtractionService(processor)
        with pytest.raises(VideoProcessingError) as exc_info:
            asyncio.run(service.extract_frames(valid_request))
        assert exc_info.value is processor.metadata_error

    def test_native_error_is_mapped(self, processor, valid_request):
        processor.extract_error = NativeFailure("FFMPEG_FAILED", "encoder crashed")
        service = FrameExtractionService(processor)
        with pytest.raises(VideoProcessingError) as exc_info:
            asyncio.run(service.extract_frames(valid_request))
        assert exc_info.value.code is VideoProcessingErrorCode.FFMPEG_FAILED
        assert exc_info.value.message == "encoder crashed"
        assert service.state is ExtractionState.FAILED

    def test_plain_exception_becomes_unknown(self, processor, valid_request):
        processor.metadata_error = RuntimeError("bridge exploded")
        service = FrameExtractionService(processor)
        with pytest.raises(VideoProcessingError) as exc_info:
            asyncio.run(service.extract_frames(valid_request))
        assert exc_info.value.code is VideoProcessingErrorCode.UNKNOWN
        assert exc_info.value.message == "bridge exploded"

    def test_frame_count_mismatch(self, processor, valid_request):
        processor.reported_frame_count = 3
        service = FrameExtractionService(processor)
        with pytest.raises(VideoProcessingError) as exc_info:
            asyncio.run(service.extract_frames(valid_request))
        assert exc_info.value.code is VideoProcessingErrorCode.UNKNOWN

    def test_service_reusable_after_failure(self, processor, valid_request):
        service = FrameExtractionService(processor)
        processor.metadata_error = RuntimeError("flaky")
        with pytest.raises(VideoProcessingError):
            asyncio.run(service.extract_frames(valid_request))
        processor.metadata_error = None
        result = asyncio.run(service.extract_frames(valid_request))
        assert result.total_frames == 100


class TestCancellation:
    def test_cancel_in_flight(self, processor, valid_request):
        processor.block_extraction = True
        service = FrameExtractionService(processor)

        async def scenario():
            task = asyncio.create_task(service.extract_frames(valid_request))
            while not processor.extract_calls:
                await asyncio.sleep(0)
            assert service.state is ExtractionState.EXTRACTING
            await service.cancel_extraction()
            with pytest.raises(VideoProcessingError) as exc_info:
                await task
            return exc_info.value

        error = asyncio.run(scenario())
        assert error.code is VideoProcessingErrorCode.CANCELLED
        assert error.is_cancelled
        assert processor.cancel_calls == 1
        assert service.state is ExtractionState.FAILED

    def test_second_extraction_rejected(self, processor, valid_request):
        processor.block_extraction = True
        service = FrameExtractionService(processor)

        async def scenario():
            task = asyncio.create_task(service.extract_frames(valid_request))
            while not processor.extract_calls:
                await asyncio.sleep(0)
            with pytest.raises(RuntimeError):
                await service.extract_frames(valid_request)
            await service.cancel_extraction()
            with pytest.raises(VideoProcessingError):
                await task

        asyncio.run(scenario())
        assert len(processor.extract_calls) == 1

    def test_plan_during_extraction_keeps_state(self, processor, valid_request):
        processor.block_extraction = True
        service = FrameExtractionService(processor)

        async def scenario():
            task = asyncio.create_task(service.extract_frames(valid_request))
            while not processor.extract_calls:
                await asyncio.sleep(0)
            plan = await service.plan_extraction(valid_request)
            state_after_plan = service.state
            with pytest.raises(VideoProcessingError):
                await service.plan_extraction(make_request(UniformSampling(frame_count=0)))
            state_after_failed_plan = service.state
            await service.cancel_extraction()
            with pytest.raises(VideoProcessingError):
                await task
            return plan, state_after_plan, state_after_failed_plan

        plan, state_after_plan, state_after_failed_plan = asyncio.run(scenario())
        assert plan.estimated_frame_count == 100
        assert state_after_plan is ExtractionState.EXTRACTING
        assert state_after_failed_plan is ExtractionState.EXTRACTING
        assert service.state is ExtractionState.FAILED

    def test_cancel_when_idle_is_noop(self, processor):
        service = FrameExtractionService(processor)
        asyncio.run(service.cancel_extraction())
        assert processor.cancel_calls == 1
        assert service.state is ExtractionState.IDLE

    def test_cancel_failure_is_mapped(self, processor):
        async def broken_cancel():
            raise NativeFailure("SOMETHING_ELSE", "no handle")

        processor.cancel_operation = broken_cancel
        service = FrameExtractionService(processor)
        with pytest.raises(VideoProcessingError) as exc_info:
            asyncio.run(service.cancel_extraction())
        assert exc_info.value.code is VideoProcessingErrorCode.UNKNOWN
