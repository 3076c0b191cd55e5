"""Frame-rate pacing that absorbs variable per-frame processing time."""

from __future__ import annotations

import time
from typing import Callable


class Pacer:
    """Sleeps just long enough after the previous frame to hold ``fps``.

    Frames that arrive late are delivered immediately; later frames are never
    sped up to make up the difference.
    """

    def __init__(
        self,
        fps: int,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if fps < 1:
            raise ValueError(f"fps must be >= 1, got {fps}")
        self.fps = fps
        self.frame_delay_us = 1_000_000 // fps
        self._clock = clock
        self._sleep = sleep
        self._last_mark = clock()
        self.frames = 0
        self.late_frames = 0

    def reset(self) -> None:
        self._last_mark = self._clock()

    def remaining_us(self, elapsed_us: int) -> int:
        return max(0, self.frame_delay_us - int(elapsed_us))

    def pace(self, deliver: Callable[[], None]) -> int:
        elapsed_us = int((self._clock() - self._last_mark) * 1_000_000)
        remaining = self.remaining_us(elapsed_us)
        if remaining > 0:
            self._sleep(remaining / 1_000_000)
        else:
            self.late_frames += 1

        deliver()
        self.frames += 1
        self._last_mark = self._clock()
        return remaining
