"""Encode settings plus persistent app config load/save helpers."""

from __future__ import annotations

import json
import os
import platform
import re
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

from asciireel_renderer.models import DEFAULT_GRADIENT

CONFIG_VERSION = 1

_RESOLUTION_RE = re.compile(r"^\d+x\d+$")
HWACCEL_MODES = ("none", "auto", "vaapi", "videotoolbox", "dxva2", "cuda", "qsv")


@dataclass(frozen=True)
class Settings:
    framerate: int = 24
    resolution: str = "1600x900"
    block_width: int = 16
    block_height: int = 9
    palette: str = DEFAULT_GRADIENT
    hwaccel: str = "none"
    ffmpeg_path: str = "ffmpeg"
    read_chunk_bytes: int = 4096
    idle_backoff_ms: int = 5

    def __post_init__(self) -> None:
        if int(self.framerate) < 1:
            raise ValueError(f"framerate must be >= 1, got {self.framerate}")
        if int(self.block_width) < 1 or int(self.block_height) < 1:
            raise ValueError("block sizes must be >= 1")
        if not _RESOLUTION_RE.match(str(self.resolution)):
            raise ValueError(f"resolution must look like 1600x900, got {self.resolution!r}")
        if len(self.palette) < 2:
            raise ValueError("palette needs at least two characters")
        if int(self.read_chunk_bytes) < 1:
            raise ValueError("read_chunk_bytes must be >= 1")
        if int(self.idle_backoff_ms) < 0:
            raise ValueError("idle_backoff_ms must be >= 0")

    def merged(self, overrides: Mapping[str, Any] | None) -> "Settings":
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in (overrides or {}).items() if k in known and v is not None}
        return replace(self, **changes)


@dataclass
class EncodeConfig:
    framerate: int = 24
    resolution: str = "1600x900"
    block_width: int = 16
    block_height: int = 9
    palette: str = DEFAULT_GRADIENT
    hwaccel: str = "none"
    ffmpeg_path: str = "ffmpeg"


@dataclass
class PlaybackConfig:
    fps: int = 24
    countdown_s: float = 2.0


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    encode: EncodeConfig = field(default_factory=EncodeConfig)
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)

    def settings(self, overrides: Mapping[str, Any] | None = None) -> Settings:
        return Settings().merged(asdict(self.encode)).merged(overrides)


def config_path() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "AsciiReel" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "AsciiReel" / "config.json"
    return Path.home() / ".config" / "asciireel" / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_encode(cfg: AppConfig) -> None:
    defaults = EncodeConfig()
    cfg.encode.framerate = max(1, int(cfg.encode.framerate))
    cfg.encode.block_width = max(1, int(cfg.encode.block_width))
    cfg.encode.block_height = max(1, int(cfg.encode.block_height))
    if not _RESOLUTION_RE.match(str(cfg.encode.resolution)):
        cfg.encode.resolution = defaults.resolution
    if not isinstance(cfg.encode.palette, str) or len(cfg.encode.palette) < 2:
        cfg.encode.palette = defaults.palette
    if cfg.encode.hwaccel not in HWACCEL_MODES:
        cfg.encode.hwaccel = defaults.hwaccel


def _normalize_playback(cfg: AppConfig) -> None:
    cfg.playback.fps = max(1, int(cfg.playback.fps))
    cfg.playback.countdown_s = float(max(0.0, cfg.playback.countdown_s))


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        return AppConfig()

    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        encode=_merge(EncodeConfig, data.get("encode", {})),
        playback=_merge(PlaybackConfig, data.get("playback", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
    )

    _normalize_encode(cfg)
    _normalize_playback(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
