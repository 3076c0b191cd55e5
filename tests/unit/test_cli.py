import sys
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
for pkg in ("core", "container", "renderer", "stream"):
    sys.path.insert(0, str(ROOT / "packages" / pkg))

from asciireel_app import cli
from asciireel_app.cli import build_parser
from asciireel_core.config import AppConfig
from asciireel_stream.errors import SourceError


class CliTests(unittest.TestCase):
    def test_play_command(self):
        args = build_parser().parse_args(["play", "clip.txt", "--fps", "12"])
        self.assertEqual(args.command, "play")
        self.assertEqual(args.file, "clip.txt")
        self.assertEqual(args.fps, 12)
        self.assertIsNone(args.countdown)

    def test_encode_command(self):
        args = build_parser().parse_args(
            ["encode", "in.mp4", "out.txt", "--resolution", "800x450", "--block-width", "8", "--hwaccel", "auto"]
        )
        self.assertEqual(args.command, "encode")
        self.assertEqual((args.source, args.destination), ("in.mp4", "out.txt"))
        self.assertEqual(args.resolution, "800x450")
        self.assertEqual(args.block_width, 8)
        self.assertIsNone(args.block_height)
        self.assertEqual(args.hwaccel, "auto")

    def test_encode_and_play_command(self):
        args = build_parser().parse_args(["encode-and-play", "in.mp4", "--fps", "30"])
        self.assertEqual(args.command, "encode-and-play")
        self.assertEqual(args.fps, 30)

    def test_overrides_merge_over_config(self):
        args = build_parser().parse_args(["encode", "in.mp4", "out.txt", "--fps", "10"])
        settings = AppConfig().settings(cli._settings_overrides(args))
        self.assertEqual(settings.framerate, 10)
        self.assertEqual(settings.resolution, "1600x900")

    @patch.object(cli, "install_crash_hooks")
    @patch.object(cli, "configure_logging")
    @patch.object(cli, "load_config", AppConfig)
    def test_failure_returns_non_zero(self, _configure, _hooks):
        def boom(*_args, **_kwargs):
            raise SourceError("Failed to start FFmpeg")

        with patch.object(cli, "encode", boom):
            rc = cli.main(["encode", "in.mp4", "out.txt"])
        self.assertEqual(rc, 1)

    @patch.object(cli, "install_crash_hooks")
    @patch.object(cli, "configure_logging")
    @patch.object(cli, "load_config", AppConfig)
    def test_zero_fps_is_rejected(self, _configure, _hooks):
        with patch.object(cli, "play", wraps=cli.play) as play:
            rc = cli.main(["play", "clip.txt", "--fps", "0"])
        self.assertEqual(rc, 1)
        self.assertEqual(play.call_args.kwargs["fps"], 0)


if __name__ == "__main__":
    unittest.main()
