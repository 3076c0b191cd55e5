"""Core services: settings, pacing, sinks, the frame pipeline and public operations."""

from .config import AppConfig, Settings, load_config, save_config
from .diagnostics import build_doctor_payload
from .operations import PlaybackResult, encode, encode_and_play, play
from .pacer import Pacer
from .performance import BudgetStatus, CadenceMonitor
from .pipeline import FramePipeline, PipelineResult
from .sinks import CollectingSink, FileSink, FrameSink, TerminalSink

__all__ = [
    "AppConfig",
    "BudgetStatus",
    "CadenceMonitor",
    "CollectingSink",
    "FileSink",
    "FramePipeline",
    "FrameSink",
    "Pacer",
    "PipelineResult",
    "PlaybackResult",
    "Settings",
    "TerminalSink",
    "build_doctor_payload",
    "encode",
    "encode_and_play",
    "load_config",
    "play",
    "save_config",
]
