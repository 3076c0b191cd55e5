"""Environment report for the ``doctor`` command."""

from __future__ import annotations

import platform
import shutil
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from asciireel_stream import hwaccel_args

from .config import AppConfig, config_path


def build_doctor_payload(cfg: AppConfig) -> dict[str, Any]:
    settings = cfg.settings()
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "config_path": str(config_path()),
        "config": asdict(cfg),
        "ffmpeg": shutil.which(settings.ffmpeg_path),
        "hwaccel": {
            "configured": settings.hwaccel,
            "flags": hwaccel_args(settings.hwaccel),
            "auto_flags": hwaccel_args("auto"),
        },
    }
