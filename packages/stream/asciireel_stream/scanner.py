"""Frame boundary scanning over a partially-read image stream."""

from __future__ import annotations

import logging
from typing import Callable

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
IEND_MARKER = b"IEND\xae\x42\x60\x82"

logger = logging.getLogger("asciireel.stream")


class BoundaryScanner:
    """Extracts complete frames delimited by a start and an end marker.

    The caller owns the buffer and passes back whatever ``scan`` returns,
    extended with newly read bytes, on the next call. A ``bytearray`` is
    trimmed in place, and the end-marker search for a pending frame resumes
    where the previous call stopped rather than rescanning the whole frame.
    """

    def __init__(self, start_marker: bytes = PNG_SIGNATURE, end_marker: bytes = IEND_MARKER) -> None:
        if not start_marker or not end_marker:
            raise ValueError("Frame markers must be non-empty")
        self.start_marker = bytes(start_marker)
        self.end_marker = bytes(end_marker)
        self.frames_found = 0
        self.bytes_discarded = 0
        # Offset, relative to a pending frame's start marker, from which the
        # end-marker search resumes; and the pending length it was computed at.
        self._resume_at = 0
        self._pending_len = 0

    def _discard(self, count: int) -> None:
        if count > 0:
            self.bytes_discarded += count
            logger.debug("discarded %d stray bytes", count, extra={"event": "scanner_discard"})

    def scan(self, buffer: bytes | bytearray, on_frame: Callable[[bytes], None]) -> bytearray:
        if not isinstance(buffer, bytearray):
            buffer = bytearray(buffer)
        pos = 0
        first = True

        while True:
            start = buffer.find(self.start_marker, pos)
            if start < 0:
                # Keep a possible partial start marker at the tail.
                keep_from = max(pos, len(buffer) - (len(self.start_marker) - 1))
                self._discard(keep_from - pos)
                del buffer[:keep_from]
                self._resume_at = self._pending_len = 0
                return buffer

            self._discard(start - pos)
            search_from = start + len(self.start_marker)
            if first and start == 0 and len(buffer) >= self._pending_len > 0:
                search_from = max(search_from, self._resume_at)
            first = False

            end = buffer.find(self.end_marker, search_from)
            if end < 0:
                del buffer[:start]
                self._pending_len = len(buffer)
                self._resume_at = max(len(self.start_marker), len(buffer) - len(self.end_marker) + 1)
                return buffer

            stop = end + len(self.end_marker)
            self._resume_at = self._pending_len = 0
            self.frames_found += 1
            on_frame(bytes(buffer[start:stop]))
            pos = stop


def scan(buffer: bytes, on_frame: Callable[[bytes], None]) -> bytearray:
    """Scan ``buffer`` for PNG frames using a throwaway scanner."""
    return BoundaryScanner().scan(buffer, on_frame)
