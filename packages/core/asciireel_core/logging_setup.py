"""Structured local logging and crash hook setup."""

from __future__ import annotations

import atexit
import faulthandler
import json
import logging
import logging.handlers
import os
import platform
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any


_LOGGER_NAME = "asciireel"


def _config_root() -> Path:
    if platform.system() == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "AsciiReel"
    if platform.system() == "Darwin":
        return Path.home() / "Library" / "Application Support" / "AsciiReel"
    return Path.home() / ".config" / "asciireel"


def log_dir() -> Path:
    path = _config_root() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        if hasattr(record, "event"):
            payload["event"] = getattr(record, "event")
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(keep_files: int = 7, console: bool = True, directory: Path | None = None) -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    if directory is not None:
        directory.mkdir(parents=True, exist_ok=True)
    path = (directory or log_dir()) / "asciireel.log"
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(path),
        when="midnight",
        backupCount=max(2, keep_files),
        encoding="utf-8",
    )
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    if console:
        # stdout carries frames, so console logging always goes to stderr.
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        stream_handler.setLevel(logging.WARNING)
        logger.addHandler(stream_handler)

    logger.info("logging configured", extra={"event": "logging_configured"})
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


_fault_file: IO[str] | None = None


def _install_fault_handler(logger: logging.Logger, directory: Path | None) -> None:
    global _fault_file
    if _fault_file is not None:
        return
    _fault_file = ((directory or log_dir()) / "fault.log").open("a", encoding="utf-8")
    faulthandler.enable(file=_fault_file)
    atexit.register(release_fault_handler)
    logger.info("fault handler enabled", extra={"event": "fault_handler_enabled"})


def release_fault_handler() -> None:
    global _fault_file
    if _fault_file is None:
        return
    faulthandler.disable()
    _fault_file.close()
    _fault_file = None


def install_crash_hooks(directory: Path | None = None) -> None:
    """Log uncaught exceptions with a crash id and dump native faults to ``fault.log``."""
    logger = get_logger()

    def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
        crash_id = uuid.uuid4().hex[:12]
        logger.critical(
            "uncaught %s crash_id=%s",
            exc_type.__name__,
            crash_id,
            exc_info=(exc_type, exc_value, exc_tb),
            extra={"event": "uncaught_exception"},
        )
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = _log_uncaught
    if directory is not None:
        directory.mkdir(parents=True, exist_ok=True)
    _install_fault_handler(logger, directory)
