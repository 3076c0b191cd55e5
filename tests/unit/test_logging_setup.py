import faulthandler
import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
for pkg in ("core", "container", "renderer", "stream"):
    sys.path.insert(0, str(ROOT / "packages" / pkg))

from asciireel_core import logging_setup
from asciireel_core.logging_setup import JsonFormatter, configure_logging, install_crash_hooks, release_fault_handler


class JsonFormatterTests(unittest.TestCase):
    def test_event_is_included(self):
        record = logging.LogRecord("asciireel.pipeline", logging.INFO, __file__, 1, "frames=%d", (3,), None)
        record.event = "pipeline_finished"
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["msg"], "frames=3")
        self.assertEqual(payload["event"], "pipeline_finished")
        self.assertEqual(payload["level"], "INFO")

    def test_configure_writes_to_directory(self):
        logger = logging.getLogger("asciireel")
        saved = list(logger.handlers)
        for handler in saved:
            logger.removeHandler(handler)
        try:
            with tempfile.TemporaryDirectory() as tmp:
                configure_logging(console=False, directory=Path(tmp))
                self.assertIs(configure_logging(console=False, directory=Path(tmp)), logger)
                self.assertEqual(len(logger.handlers), 1)
                for handler in list(logger.handlers):
                    handler.close()
                    logger.removeHandler(handler)
                self.assertTrue((Path(tmp) / "asciireel.log").exists())
        finally:
            for handler in saved:
                logger.addHandler(handler)


class CrashHookTests(unittest.TestCase):
    def setUp(self):
        release_fault_handler()
        saved_hook = sys.excepthook
        self.addCleanup(setattr, sys, "excepthook", saved_hook)
        self.addCleanup(release_fault_handler)

    def test_fault_log_is_reused_and_released(self):
        with tempfile.TemporaryDirectory() as tmp:
            install_crash_hooks(directory=Path(tmp))
            fault_file = logging_setup._fault_file
            install_crash_hooks(directory=Path(tmp))
            self.assertIs(logging_setup._fault_file, fault_file)
            self.assertTrue(faulthandler.is_enabled())
            self.assertTrue((Path(tmp) / "fault.log").exists())

            release_fault_handler()
            self.assertTrue(fault_file.closed)
            self.assertIsNone(logging_setup._fault_file)
            self.assertFalse(faulthandler.is_enabled())


if __name__ == "__main__":
    unittest.main()
