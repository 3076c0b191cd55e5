"""CLI entrypoints for ASCII video encoding, playback and diagnostics."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from asciireel_core import (
    CadenceMonitor,
    build_doctor_payload,
    encode,
    encode_and_play,
    load_config,
    play,
)
from asciireel_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from asciireel_renderer import DecodeFailure
from asciireel_stream import SourceError


def _print_json(data: object, stream=None) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str), file=stream or sys.stdout)


def _settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "framerate": args.fps,
        "resolution": args.resolution,
        "block_width": args.block_width,
        "block_height": args.block_height,
        "hwaccel": args.hwaccel,
        "ffmpeg_path": args.ffmpeg,
    }


def _print_progress(count: int) -> None:
    sys.stderr.write(f"\rProcessed frame: {count}")
    sys.stderr.flush()


def cmd_play(args: argparse.Namespace) -> int:
    cfg = load_config()
    fps = cfg.playback.fps if args.fps is None else args.fps
    countdown = cfg.playback.countdown_s if args.countdown is None else args.countdown

    result = play(Path(args.file), fps=fps, countdown_s=countdown)
    budget = CadenceMonitor(fps).sample(result.frames, result.elapsed_s)
    _print_json({"success": True, "result": asdict(result), "budget": asdict(budget)}, stream=sys.stderr)
    return 0


def cmd_encode(args: argparse.Namespace) -> int:
    cfg = load_config()
    settings = cfg.settings(_settings_overrides(args))

    result = encode(Path(args.source), Path(args.destination), settings, progress=_print_progress)
    sys.stderr.write("\n")
    _print_json({"success": True, "destination": args.destination, "result": asdict(result)})
    return 0


def cmd_encode_and_play(args: argparse.Namespace) -> int:
    cfg = load_config()
    settings = cfg.settings(_settings_overrides(args))

    result = encode_and_play(Path(args.source), settings)
    budget = CadenceMonitor(settings.framerate).sample(result.frames, result.elapsed_s)
    _print_json({"success": True, "result": asdict(result), "budget": asdict(budget)}, stream=sys.stderr)
    return 0


def cmd_doctor(_args: argparse.Namespace) -> int:
    _print_json(build_doctor_payload(load_config()))
    return 0


def _add_encode_options(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--fps", type=int, default=None, help="Decode frame rate (default 24)")
    cmd.add_argument("--resolution", default=None, help="Decode resolution as WxH (default 1600x900)")
    cmd.add_argument("--block-width", type=int, default=None, help="Source pixels per output column (default 16)")
    cmd.add_argument("--block-height", type=int, default=None, help="Source pixels per output row (default 9)")
    cmd.add_argument("--hwaccel", default=None, help="none, auto, or an ffmpeg -hwaccel name")
    cmd.add_argument("--ffmpeg", default=None, help="Path to the ffmpeg executable")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="asciireel", description="Play and store videos as ASCII art")
    sub = parser.add_subparsers(dest="command", required=True)

    play_cmd = sub.add_parser("play", help="Play a saved ASCII video")
    play_cmd.add_argument("file", help="Path to an encoded ASCII video")
    play_cmd.add_argument("--fps", type=int, default=None, help="Playback frame rate (default 24)")
    play_cmd.add_argument("--countdown", type=float, default=None, help="Seconds to wait before the first frame")
    play_cmd.set_defaults(func=cmd_play)

    encode_cmd = sub.add_parser("encode", help="Convert a video to an ASCII video file")
    encode_cmd.add_argument("source", help="Input video")
    encode_cmd.add_argument("destination", help="Output ASCII video file")
    _add_encode_options(encode_cmd)
    encode_cmd.set_defaults(func=cmd_encode)

    live_cmd = sub.add_parser("encode-and-play", help="Convert a video and play it without saving")
    live_cmd.add_argument("source", help="Input video")
    _add_encode_options(live_cmd)
    live_cmd.set_defaults(func=cmd_encode_and_play)

    doctor_cmd = sub.add_parser("doctor", help="Print environment and decoder diagnostics")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(keep_files=load_config().diagnostics.keep_log_files, console=False)
    install_crash_hooks()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except (DecodeFailure, SourceError, ValueError, OSError) as exc:
        get_logger().error("command failed: %s", exc, exc_info=True, extra={"event": "command_failed"})
        _print_json({"success": False, "command": args.command, "error": str(exc)}, stream=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
