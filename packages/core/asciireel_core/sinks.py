"""Destinations for finished ASCII frames."""

from __future__ import annotations

import logging
from typing import Callable, Protocol, TextIO

from asciireel_container import ContainerWriter
from asciireel_renderer.models import AsciiFrame

from .pacer import Pacer

CURSOR_HOME = "\x1b[H"

logger = logging.getLogger("asciireel.sinks")


class FrameSink(Protocol):
    def accept(self, frame: AsciiFrame) -> None: ...

    def close(self) -> None: ...


class TerminalSink:
    """Draws each frame over the previous one at the pacer's cadence."""

    def __init__(self, stream: TextIO, pacer: Pacer) -> None:
        self.stream = stream
        self.pacer = pacer

    def _draw(self, text: str) -> None:
        self.stream.write(CURSOR_HOME + text)
        self.stream.flush()

    def accept(self, frame: AsciiFrame) -> None:
        text = frame.text
        self.pacer.pace(lambda: self._draw(text))

    def close(self) -> None:
        self.stream.flush()


class FileSink:
    def __init__(self, writer: ContainerWriter, progress: Callable[[int], None] | None = None) -> None:
        self.writer = writer
        self.progress = progress

    def accept(self, frame: AsciiFrame) -> None:
        self.writer.append(frame.text)
        logger.debug("saved frame %d", self.writer.records, extra={"event": "frame_saved"})
        if self.progress is not None:
            self.progress(self.writer.records)

    def close(self) -> None:
        self.writer.close()


class CollectingSink:
    def __init__(self) -> None:
        self.frames: list[AsciiFrame] = []
        self.closed = False

    def accept(self, frame: AsciiFrame) -> None:
        self.frames.append(frame)

    def close(self) -> None:
        self.closed = True
