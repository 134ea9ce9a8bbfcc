"""CLI entrypoints for the live dashboard and the static inventory dump."""

from __future__ import annotations

import argparse
import sys
from importlib import metadata

from hwglance_core import LoopControl, RefreshController, RunConfig, load_config
from hwglance_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from hwglance_renderer import DashboardRenderer, get_palette, render_static_summary
from hwglance_telemetry.provider import SourceInitError, TelemetryProvider

from .terminal import TerminalSink, install_signal_handlers


def _installed_version() -> str:
    try:
        return metadata.version("hwglance")
    except metadata.PackageNotFoundError:
        return "0.1.0"


def _open_provider() -> TelemetryProvider:
    return TelemetryProvider()


def cmd_run(_args: argparse.Namespace, cfg: RunConfig) -> int:
    provider = _open_provider()
    renderer = DashboardRenderer(get_palette(cfg.palette_name), extended=cfg.display.extended)
    control = LoopControl.SINGLE_SHOT if cfg.loop.single_shot else LoopControl.CONTINUOUS
    install_signal_handlers()
    try:
        with TerminalSink(sys.stdout, interactive=control is LoopControl.CONTINUOUS) as sink:
            controller = RefreshController(provider, renderer, sink, interval_s=cfg.interval_s, control=control)
            try:
                controller.run()
            except KeyboardInterrupt:
                get_logger().info("interrupted", extra={"event": "interrupted"})
    finally:
        provider.close()
    return 0


def cmd_info(_args: argparse.Namespace, cfg: RunConfig) -> int:
    provider = _open_provider()
    try:
        sys.stdout.write(render_static_summary(provider.inventory(), get_palette(cfg.palette_name)))
    finally:
        provider.close()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hwglance", description="Live terminal hardware dashboard")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_installed_version()}")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="Run the live dashboard")
    run_cmd.add_argument("--plain", action="store_true", help="No colour; print one frame and exit")
    run_cmd.add_argument("--extra", action="store_true", help="Add the per-sensor temperature table")
    run_cmd.add_argument("--once", action="store_true", help="Print one frame and exit")
    run_cmd.add_argument("--interval-ms", type=int, default=None, help="Sampling interval (min 200)")
    run_cmd.set_defaults(func=cmd_run)

    info_cmd = sub.add_parser("info", help="Print static hardware inventory")
    info_cmd.add_argument("--plain", action="store_true", help="No colour")
    info_cmd.set_defaults(func=cmd_info)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = load_config(args)
    configure_logging(keep_files=cfg.logging.keep_files, level=cfg.logging.level, directory=cfg.logging.log_dir)
    install_crash_hooks(cfg.logging.log_dir)

    try:
        return int(args.func(args, cfg))
    except SourceInitError as exc:
        get_logger().error(f"hardware source unavailable: {exc}", extra={"event": "source_init_failed"})
        print(f"hwglance: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
