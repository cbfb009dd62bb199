"""Orchestration services for frame extraction and video import."""

from .extraction import ExtractionState, FrameExtractionService, create_plan
from .importing import VideoImportService

__all__ = ["ExtractionState", "FrameExtractionService", "create_plan", "VideoImportService"]
