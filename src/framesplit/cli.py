"""CLI entry point for framesplit.

Usage:
    framesplit strategies                                   # Show strategies and bounds
    framesplit validate in.mp4 out/ -s uniform -v 100       # Check a request
    framesplit probe in.mp4                                 # Show video metadata
    framesplit plan in.mp4 out/ -s interval -v 2            # Estimate without extracting
    framesplit extract in.mp4 out/ -s custom-fps -v 5 -q 4  # Extract frames
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from framesplit.core.config import DEFAULT_CONFIG, FramesplitConfig, load_config
from framesplit.core.contracts import (
    AllFrames,
    CustomFrameRate,
    FrameBased,
    FrameExtractionRequest,
    IntervalBased,
    UniformSampling,
    ValidationError,
)
from framesplit.core.errors import VideoProcessingError
from framesplit.core.logging import setup_logging
from framesplit.utils.formatting import format_duration
from framesplit.validation import rules

app = typer.Typer(name="framesplit", help="Plan and extract still frames from videos")
console = Console()

STRATEGY_HELP = "uniform | interval | frame-based | all-frames | custom-fps"


def build_strategy(kind: str, value: float | None):
    """Turn a CLI strategy name and its numeric parameter into a strategy model."""
    if kind == "all-frames":
        return AllFrames()
    if value is None:
        raise typer.BadParameter(f"Strategy '{kind}' needs --value")
    if kind == "uniform":
        return UniformSampling(frame_count=int(value) if float(value).is_integer() else value)
    if kind == "interval":
        return IntervalBased(interval_seconds=value)
    if kind == "frame-based":
        return FrameBased(frame_interval=int(value) if float(value).is_integer() else value)
    if kind == "custom-fps":
        return CustomFrameRate(fps=value)
    raise typer.BadParameter(f"Unknown strategy '{kind}'. Expected one of: {STRATEGY_HELP}")


def _load(config: Path) -> FramesplitConfig:
    cfg = load_config(config)
    setup_logging(cfg.log_level)
    return cfg


def _request(video: str, output: str, strategy: str, value: float | None, quality: float | None):
    return FrameExtractionRequest(
        video_path=video,
        output_directory=output,
        strategy=build_strategy(strategy, value),
        quality=quality,
    )


def _print_errors(errors: tuple[ValidationError, ...] | list[ValidationError]) -> None:
    table = Table(title="Validation errors")
    table.add_column("Field", style="cyan")
    table.add_column("Code", style="red")
    table.add_column("Message")
    for e in errors:
        table.add_row(e.field, e.code, e.message)
    console.print(table)


def _fail(error: VideoProcessingError) -> None:
    console.print(f"[red]{error.code.value}: {error.message}[/red]")
    if error.errors:
        _print_errors(error.errors)
    raise typer.Exit(1)


def _processor(cfg: FramesplitConfig):
    from framesplit.adapters.ffmpeg import FfmpegVideoProcessor

    return FfmpegVideoProcessor(cfg)


@app.command()
def strategies() -> None:
    """Show the sampling strategies and their parameter bounds."""
    table = Table(title="Extraction strategies")
    table.add_column("Strategy", style="cyan")
    table.add_column("--value meaning", style="green")
    table.add_column("Bounds", style="yellow")
    table.add_row("uniform", "total frames", f"{rules.MIN_FRAME_COUNT}..{rules.MAX_FRAME_COUNT} (integer)")
    table.add_row("interval", "seconds between frames", f"{rules.MIN_INTERVAL_SECONDS}..{rules.MAX_INTERVAL_SECONDS}")
    table.add_row("frame-based", "every Nth source frame", f"{rules.MIN_FRAME_INTERVAL}..{rules.MAX_FRAME_INTERVAL} (integer)")
    table.add_row("all-frames", "-", "-")
    table.add_row("custom-fps", "frames per second", f"{rules.MIN_FPS}..{rules.MAX_FPS}")
    console.print(table)
    console.print(
        f"Quality {rules.MIN_QUALITY}..{rules.MAX_QUALITY} (default {rules.DEFAULT_QUALITY}, lower is better); "
        f"storage quota {rules.MAX_ESTIMATED_STORAGE_MB} MB"
    )


@app.command()
def validate(
    video: str = typer.Argument(..., help="Path to the source video"),
    output: str = typer.Argument(..., help="Output directory for frames"),
    strategy: str = typer.Option("uniform", "--strategy", "-s", help=STRATEGY_HELP),
    value: float = typer.Option(None, "--value", "-v", help="Strategy parameter"),
    quality: float = typer.Option(None, "--quality", "-q", help="JPEG quality 1-31"),
) -> None:
    """Validate a request without touching the video."""
    from framesplit.validation import validate_request

    result = validate_request(_request(video, output, strategy, value, quality))
    if result.valid:
        console.print("[green]Request is valid[/green]")
        return
    _print_errors(result.errors)
    raise typer.Exit(1)


@app.command()
def probe(
    video: str = typer.Argument(..., help="Path to the source video"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Config file path"),
) -> None:
    """Show video metadata reported by ffprobe."""
    cfg = _load(config)
    try:
        metadata = asyncio.run(_processor(cfg).get_video_metadata(video))
    except VideoProcessingError as e:
        _fail(e)
    console.print(metadata.model_dump_json(indent=2))


@app.command()
def plan(
    video: str = typer.Argument(..., help="Path to the source video"),
    output: str = typer.Argument(..., help="Output directory for frames"),
    strategy: str = typer.Option("uniform", "--strategy", "-s", help=STRATEGY_HELP),
    value: float = typer.Option(None, "--value", "-v", help="Strategy parameter"),
    quality: float = typer.Option(None, "--quality", "-q", help="JPEG quality 1-31"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Config file path"),
) -> None:
    """Estimate frame count, storage and duration without extracting."""
    from framesplit.services.extraction import FrameExtractionService

    cfg = _load(config)
    service = FrameExtractionService(_processor(cfg))
    try:
        result = asyncio.run(service.plan_extraction(_request(video, output, strategy, value, quality)))
    except VideoProcessingError as e:
        _fail(e)

    table = Table(title=f"Plan: {video}")
    table.add_column("Item", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Strategy", result.strategy.type)
    table.add_row("Video", f"{result.video_resolution.width}x{result.video_resolution.height}, "
                           f"{result.video_fps:.3f} fps, {result.video_duration:.2f}s")
    table.add_row("Extraction fps", f"{result.extraction_fps:.4f}")
    table.add_row("Frames", str(result.estimated_frame_count))
    table.add_row("Quality", str(result.quality))
    table.add_row("Storage", f"{result.estimated_storage_mb:.1f} MB")
    table.add_row("Duration", format_duration(result.estimated_duration_ms))
    console.print(table)


@app.command()
def extract(
    video: str = typer.Argument(..., help="Path to the source video"),
    output: str = typer.Argument(..., help="Output directory for frames"),
    strategy: str = typer.Option("uniform", "--strategy", "-s", help=STRATEGY_HELP),
    value: float = typer.Option(None, "--value", "-v", help="Strategy parameter"),
    quality: float = typer.Option(None, "--quality", "-q", help="JPEG quality 1-31"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Config file path"),
) -> None:
    """Extract frames and list them with their timestamps."""
    from framesplit.services.extraction import FrameExtractionService

    cfg = _load(config)
    service = FrameExtractionService(_processor(cfg))
    try:
        result = asyncio.run(service.extract_frames(_request(video, output, strategy, value, quality)))
    except VideoProcessingError as e:
        if e.is_cancelled:
            console.print("[yellow]Extraction cancelled[/yellow]")
            raise typer.Exit(0)
        _fail(e)

    console.print(
        f"[green]Done.[/green] {result.total_frames} frames, "
        f"{result.actual_storage_mb:.1f} MB, {format_duration(result.processing_time_ms)}"
    )
    for frame in result.frames[:10]:
        console.print(f"  #{frame.frame_number:<5d} {frame.timestamp:9.3f}s  {frame.path}")
    if result.total_frames > 10:
        console.print(f"  ... {result.total_frames - 10} more")


if __name__ == "__main__":
    app()
