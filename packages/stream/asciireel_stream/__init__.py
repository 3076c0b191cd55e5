"""Byte stream handling: decoder subprocess and frame boundary scanning."""

from .errors import SourceError
from .scanner import IEND_MARKER, PNG_SIGNATURE, BoundaryScanner, scan
from .source import ByteSource, FfmpegSource, build_ffmpeg_command, hwaccel_args, resolve_executable

__all__ = [
    "BoundaryScanner",
    "ByteSource",
    "FfmpegSource",
    "IEND_MARKER",
    "PNG_SIGNATURE",
    "SourceError",
    "build_ffmpeg_command",
    "hwaccel_args",
    "resolve_executable",
    "scan",
]
