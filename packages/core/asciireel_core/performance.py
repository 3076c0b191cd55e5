"""Achieved-cadence reporting against the requested frame rate."""

from __future__ import annotations

from dataclasses import dataclass

import psutil


@dataclass(frozen=True)
class BudgetStatus:
    cpu_percent: float
    rss_mb: float
    fps: float
    target_fps: float
    below_target: bool
    warning: str | None


class CadenceMonitor:
    def __init__(self, target_fps: float, tolerance: float = 0.9) -> None:
        self.target_fps = float(target_fps)
        self.tolerance = tolerance
        self._process = psutil.Process()
        # Prime non-blocking CPU measurement.
        self._process.cpu_percent(interval=None)

    def sample(self, frames: int, elapsed_s: float) -> BudgetStatus:
        cpu = float(self._process.cpu_percent(interval=None))
        rss_mb = float(self._process.memory_info().rss) / (1024 * 1024)
        fps = frames / elapsed_s if elapsed_s > 0 else 0.0
        below = frames > 1 and fps < self.target_fps * self.tolerance

        return BudgetStatus(
            cpu_percent=cpu,
            rss_mb=rss_mb,
            fps=fps,
            target_fps=self.target_fps,
            below_target=below,
            warning="below_fps_target" if below else None,
        )
