"""Runtime configuration: external tool locations and output naming."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path("configs/framesplit.yaml")


class FramesplitConfig(BaseModel):
    ffmpeg_binary: str = Field("ffmpeg", description="ffmpeg executable name or path")
    ffprobe_binary: str = Field("ffprobe", description="ffprobe executable name or path")
    image_format: Literal["jpg", "png"] = Field("jpg", description="Extracted frame image format")
    filename_prefix: str = Field("frame_", description="Prefix for extracted frame filenames")
    command_timeout: float = Field(3600.0, description="Seconds before an external command is killed")
    log_level: str = Field("INFO", description="Root logging level")


def load_config(config_path: Path | None = None) -> FramesplitConfig:
    """Load framesplit.yaml into its Pydantic model.

    A missing or empty file yields the defaults.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG
    if not path.exists():
        logger.debug(f"Config {path} not found, using defaults")
        return FramesplitConfig()
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return FramesplitConfig(**raw)
