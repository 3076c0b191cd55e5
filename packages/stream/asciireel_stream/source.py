"""FFmpeg subprocess adapter that exposes a polled, non-blocking byte source."""

from __future__ import annotations

import logging
import os
import platform
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from .errors import SourceError

logger = logging.getLogger("asciireel.stream")

_STDERR_TAIL_BYTES = 4096


class ByteSource(Protocol):
    @property
    def running(self) -> bool: ...

    @property
    def at_eof(self) -> bool: ...

    def read(self, max_bytes: int) -> bytes: ...


def hwaccel_args(mode: str, system: str | None = None) -> list[str]:
    mode = (mode or "none").strip().lower()
    if mode == "none":
        return []
    if mode != "auto":
        return ["-hwaccel", mode]

    system = (system or platform.system()).lower()
    if system == "linux":
        return ["-hwaccel", "vaapi", "-vaapi_device", "/dev/dri/renderD128"]
    if system == "darwin":
        return ["-hwaccel", "videotoolbox"]
    if system == "windows":
        return ["-hwaccel", "dxva2"]
    return []


def build_ffmpeg_command(
    ffmpeg_path: str,
    source: str | Path,
    framerate: int,
    resolution: str,
    hwaccel: str = "none",
    system: str | None = None,
) -> list[str]:
    return [
        ffmpeg_path,
        *hwaccel_args(hwaccel, system),
        "-i",
        str(source),
        "-vf",
        f"fps={framerate},scale={resolution},format=gray",
        "-fflags",
        "nobuffer",
        "-loglevel",
        "error",
        "-flush_packets",
        "1",
        "-update",
        "1",
        "-f",
        "image2pipe",
        "-pix_fmt",
        "gray",
        "-vcodec",
        "png",
        "-",
    ]


def resolve_executable(ffmpeg_path: str) -> str:
    found = shutil.which(ffmpeg_path)
    if found:
        return found
    candidate = Path(ffmpeg_path)
    if candidate.is_file() and os.access(candidate, os.X_OK):
        return str(candidate)
    raise SourceError(f"FFmpeg not found or not executable: {ffmpeg_path}")


class FfmpegSource:
    """Runs the decoder and reads its stdout without blocking."""

    def __init__(self, command: list[str]) -> None:
        self.command = list(command)
        self._process: subprocess.Popen[bytes] | None = None
        self._eof = False
        self._stderr = bytearray()
        self._closed = False

    def __enter__(self) -> "FfmpegSource":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def start(self) -> None:
        if self._process is not None:
            return
        try:
            self._process = subprocess.Popen(
                self.command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            raise SourceError(f"Failed to start FFmpeg: {exc}") from exc

        os.set_blocking(self._process.stdout.fileno(), False)
        os.set_blocking(self._process.stderr.fileno(), False)
        logger.info("decoder started pid=%s", self._process.pid, extra={"event": "decoder_started"})

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    @property
    def at_eof(self) -> bool:
        return self._eof

    @property
    def returncode(self) -> int | None:
        if self._process is None:
            return None
        return self._process.poll()

    @property
    def stderr_tail(self) -> str:
        return bytes(self._stderr).decode("utf-8", errors="replace")

    def _drain_stderr(self) -> None:
        while True:
            try:
                data = os.read(self._process.stderr.fileno(), _STDERR_TAIL_BYTES)
            except (BlockingIOError, ValueError):
                return
            if not data:
                return
            self._stderr.extend(data)
            del self._stderr[:-_STDERR_TAIL_BYTES]

    def read(self, max_bytes: int) -> bytes:
        if self._process is None:
            raise SourceError("Decoder process is not running")
        self._drain_stderr()
        if self._eof:
            return b""

        try:
            chunk = os.read(self._process.stdout.fileno(), max_bytes)
        except BlockingIOError:
            return b""
        if not chunk:
            self._eof = True
        return chunk

    def close(self) -> None:
        process = self._process
        if process is None or self._closed:
            return
        if process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()
        self._drain_stderr()
        self._closed = True
        for pipe in (process.stdout, process.stderr):
            if pipe is not None:
                pipe.close()

        if process.returncode:
            logger.warning(
                "decoder exited with code %s: %s",
                process.returncode,
                self.stderr_tail.strip()[-500:],
                extra={"event": "decoder_exit"},
            )
        else:
            logger.info("decoder exited", extra={"event": "decoder_exit"})
