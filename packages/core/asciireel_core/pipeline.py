"""Drives decoder output through scanning, decoding, rasterizing and a sink."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from asciireel_renderer import GradientPalette, Raster, decode_frame, rasterize
from asciireel_renderer.models import AsciiFrame
from asciireel_stream import BoundaryScanner, ByteSource

from .config import Settings
from .sinks import FrameSink

logger = logging.getLogger("asciireel.pipeline")


@dataclass(frozen=True)
class PipelineResult:
    frames: int
    bytes_read: int
    bytes_discarded: int
    elapsed_s: float
    decoder_returncode: int | None = None


class FramePipeline:
    """Single-threaded poll loop over a non-blocking byte source.

    One frame is fully scanned, decoded, rasterized and delivered before the
    next one is looked at.
    """

    def __init__(
        self,
        settings: Settings,
        decoder: Callable[[bytes], Raster] = decode_frame,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.settings = settings
        self.palette = GradientPalette.from_string(settings.palette)
        self._decoder = decoder
        self._sleep = sleep
        self._clock = clock
        self.frames = 0

    def convert(self, raw: bytes) -> AsciiFrame:
        raster = self._decoder(raw)
        return rasterize(raster, self.settings.block_width, self.settings.block_height, self.palette)

    def run(self, source: ByteSource, sink: FrameSink) -> PipelineResult:
        self.frames = 0
        scanner = BoundaryScanner()
        backoff_s = self.settings.idle_backoff_ms / 1000
        chunk_bytes = self.settings.read_chunk_bytes
        buffer = bytearray()
        bytes_read = 0
        start = self._clock()

        def on_frame(raw: bytes) -> None:
            frame = self.convert(raw)
            sink.accept(frame)
            self.frames += 1

        while True:
            chunk = source.read(chunk_bytes)
            if chunk:
                bytes_read += len(chunk)
                buffer += chunk
                buffer = scanner.scan(buffer, on_frame)
                continue

            if source.at_eof and not source.running:
                break
            if backoff_s > 0:
                self._sleep(backoff_s)

        if buffer:
            logger.warning(
                "stream ended with %d bytes of incomplete frame data",
                len(buffer),
                extra={"event": "trailing_partial_frame"},
            )

        result = PipelineResult(
            frames=self.frames,
            bytes_read=bytes_read,
            bytes_discarded=scanner.bytes_discarded,
            elapsed_s=self._clock() - start,
            decoder_returncode=getattr(source, "returncode", None),
        )
        logger.info(
            "pipeline finished frames=%d bytes_read=%d",
            result.frames,
            result.bytes_read,
            extra={"event": "pipeline_finished"},
        )
        return result
