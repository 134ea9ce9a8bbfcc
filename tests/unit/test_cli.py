import io
import sys
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "terminal"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))

from fakes import make_inventory, make_snapshot
from hwglance_app import cli
from hwglance_app.cli import build_parser
from hwglance_telemetry.provider import SourceInitError


class FakeProvider:
    def __init__(self):
        self.closed = False

    def refresh(self):
        pass

    def snapshot(self):
        return make_snapshot()

    def inventory(self):
        return make_inventory()

    def close(self):
        self.closed = True


class CliParserTests(unittest.TestCase):
    def test_run_command(self):
        args = build_parser().parse_args(["run"])
        self.assertEqual(args.command, "run")
        self.assertFalse(args.plain)
        self.assertIsNone(args.interval_ms)

    def test_run_flags(self):
        args = build_parser().parse_args(["run", "--plain", "--extra", "--once", "--interval-ms", "500"])
        self.assertTrue(args.plain)
        self.assertTrue(args.extra)
        self.assertTrue(args.once)
        self.assertEqual(args.interval_ms, 500)

    def test_info_command(self):
        args = build_parser().parse_args(["info", "--plain"])
        self.assertEqual(args.command, "info")
        self.assertTrue(args.plain)

    def test_command_is_required(self):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            build_parser().parse_args([])


class CliMainTests(unittest.TestCase):
    def setUp(self):
        self.provider = FakeProvider()
        patches = [
            mock.patch.object(cli, "_open_provider", lambda: self.provider),
            mock.patch.object(cli, "configure_logging"),
            mock.patch.object(cli, "install_crash_hooks"),
            mock.patch.object(cli, "install_signal_handlers"),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)

    def test_plain_run_prints_one_frame(self):
        out = io.StringIO()
        with redirect_stdout(out):
            rc = cli.main(["run", "--plain", "--interval-ms", "200"])
        self.assertEqual(rc, 0)
        text = out.getvalue()
        self.assertTrue(text.startswith(" CPU 12%  55°C\n"))
        self.assertNotIn("\x1b[", text)
        self.assertTrue(self.provider.closed)

    def test_info_prints_inventory(self):
        out = io.StringIO()
        with redirect_stdout(out):
            rc = cli.main(["info", "--plain"])
        self.assertEqual(rc, 0)
        self.assertIn("MOBO PRIME Z790-P", out.getvalue())
        self.assertTrue(self.provider.closed)

    def test_source_failure_exits_nonzero(self):
        def _fail():
            raise SourceInitError("NVML unavailable")

        err = io.StringIO()
        with mock.patch.object(cli, "_open_provider", _fail), redirect_stderr(err):
            rc = cli.main(["info"])
        self.assertEqual(rc, 1)
        self.assertIn("hwglance: NVML unavailable", err.getvalue())


if __name__ == "__main__":
    unittest.main()
