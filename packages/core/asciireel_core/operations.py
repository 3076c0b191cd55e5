"""Public encode/play operations."""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TextIO

from asciireel_container import ContainerWriter, read_frames
from asciireel_renderer.models import AsciiFrame, DecodeFailure
from asciireel_stream import FfmpegSource, SourceError, build_ffmpeg_command, resolve_executable

from .config import Settings
from .pacer import Pacer
from .pipeline import FramePipeline, PipelineResult
from .sinks import FileSink, FrameSink, TerminalSink

logger = logging.getLogger("asciireel.operations")


@dataclass(frozen=True)
class PlaybackResult:
    frames: int
    elapsed_s: float
    late_frames: int


def _decoder_command(source: Path | str, settings: Settings) -> list[str]:
    path = Path(source)
    if not path.is_file():
        raise SourceError(f"Input source not found: {path}")
    return build_ffmpeg_command(
        resolve_executable(settings.ffmpeg_path),
        path,
        framerate=settings.framerate,
        resolution=settings.resolution,
        hwaccel=settings.hwaccel,
    )


def _run(command: list[str], sink: FrameSink, settings: Settings) -> PipelineResult:
    try:
        with FfmpegSource(command) as source:
            return FramePipeline(settings).run(source, sink)
    except DecodeFailure as exc:
        logger.error("aborting on undecodable frame: %s", exc, extra={"event": "decode_failure"})
        raise
    finally:
        sink.close()


def encode_and_play(
    source: Path | str,
    settings: Settings | None = None,
    stream: TextIO | None = None,
) -> PipelineResult:
    settings = settings or Settings()
    command = _decoder_command(source, settings)
    sink = TerminalSink(stream or sys.stdout, Pacer(settings.framerate))

    logger.info("encode_and_play start source=%s", source, extra={"event": "encode_and_play_start"})
    result = _run(command, sink, settings)
    logger.info("encode_and_play complete frames=%d", result.frames, extra={"event": "encode_and_play_done"})
    return result


def encode(
    source: Path | str,
    destination: Path | str,
    settings: Settings | None = None,
    progress: Callable[[int], None] | None = None,
) -> PipelineResult:
    settings = settings or Settings()
    command = _decoder_command(source, settings)
    sink = FileSink(ContainerWriter(destination), progress=progress)

    logger.info("encode start source=%s destination=%s", source, destination, extra={"event": "encode_start"})
    result = _run(command, sink, settings)
    logger.info("encode complete frames=%d", result.frames, extra={"event": "encode_done"})
    return result


def play(
    path: Path | str,
    fps: int = 24,
    stream: TextIO | None = None,
    countdown_s: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> PlaybackResult:
    if fps < 1:
        raise ValueError(f"fps must be >= 1, got {fps}")
    stream = stream or sys.stdout
    frames = read_frames(path)

    stream.write(f"Playing {path} at {fps} FPS...\n")
    stream.flush()
    if countdown_s > 0:
        sleep(countdown_s)

    pacer = Pacer(fps, clock=clock, sleep=sleep)
    sink = TerminalSink(stream, pacer)
    start = clock()
    for text in frames:
        sink.accept(AsciiFrame.from_text(text))
    sink.close()

    stream.write("\nPlayback complete.\n")
    stream.flush()
    logger.info("playback complete frames=%d", pacer.frames, extra={"event": "playback_done"})
    return PlaybackResult(frames=pacer.frames, elapsed_s=clock() - start, late_frames=pacer.late_frames)
