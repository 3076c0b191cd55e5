"""Line-oriented container: one base64(zlib(frame text)) record per line.

The file carries no header, frame count or checksum; record order is playback
order and the playback rate is supplied by the reader.
"""

from __future__ import annotations

import base64
import binascii
import zlib
from pathlib import Path
from typing import IO, Iterator

from asciireel_renderer.models import DecodeFailure

RECORD_SEPARATOR = "\n"


def encode_record(text: str) -> str:
    payload = zlib.compress(text.encode("utf-8"))
    return base64.b64encode(payload).decode("ascii") + RECORD_SEPARATOR


def decode_record(line: str) -> str:
    stripped = line.strip()
    if not stripped:
        raise DecodeFailure("Empty container record")
    try:
        payload = base64.b64decode(stripped, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeFailure(f"Malformed base64 record: {exc}") from exc
    try:
        return zlib.decompress(payload).decode("utf-8")
    except zlib.error as exc:
        raise DecodeFailure(f"Corrupt compressed record: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise DecodeFailure(f"Record is not valid text: {exc}") from exc


class ContainerWriter:
    """Append-only record writer."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.records = 0
        self._fh: IO[str] | None = self.path.open("w", encoding="ascii", newline="\n")

    def __enter__(self) -> "ContainerWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def append(self, text: str) -> None:
        if self._fh is None:
            raise RuntimeError("Container writer is closed")
        self._fh.write(encode_record(text))
        self.records += 1

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None


def iter_records(path: Path | str) -> Iterator[str]:
    with Path(path).open("r", encoding="ascii", errors="strict", newline="\n") as fh:
        for line in fh:
            yield decode_record(line)


def read_frames(path: Path | str) -> list[str]:
    """Decode every record of ``path``; any bad record fails the whole read."""
    try:
        return list(iter_records(path))
    except UnicodeDecodeError as exc:
        raise DecodeFailure(f"Container file is not ASCII text: {exc}") from exc
