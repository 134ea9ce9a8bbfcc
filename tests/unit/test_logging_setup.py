import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from hwglance_core.logging_setup import JsonFormatter, configure_logging, get_logger


class JsonFormatterTests(unittest.TestCase):
    def test_extra_fields_are_serialized(self):
        record = logging.LogRecord("hwglance", logging.INFO, __file__, 1, "frame %d", (3,), None)
        record.event = "frame_emitted"
        record.tick = 3
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["msg"], "frame 3")
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["event"], "frame_emitted")
        self.assertEqual(payload["tick"], 3)
        self.assertNotIn("crash_id", payload)


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self):
        logger = get_logger()
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_writes_json_lines_to_log_dir(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(level="DEBUG", directory=Path(tmp))
            logger.debug("hello", extra={"event": "test"})
            for handler in logger.handlers:
                handler.flush()
            lines = (Path(tmp) / "hwglance.log").read_text(encoding="utf-8").splitlines()
            self.assertEqual(json.loads(lines[0])["event"], "logging_configured")
            self.assertEqual(json.loads(lines[-1])["msg"], "hello")
            self.tearDown()

    def test_second_call_keeps_existing_handlers(self):
        with tempfile.TemporaryDirectory() as tmp:
            first = configure_logging(directory=Path(tmp))
            count = len(first.handlers)
            second = configure_logging(directory=Path(tmp), console=True)
            self.assertIs(first, second)
            self.assertEqual(len(second.handlers), count)
            self.tearDown()


if __name__ == "__main__":
    unittest.main()
