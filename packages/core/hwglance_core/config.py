"""Run settings built from CLI arguments and environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

MIN_INTERVAL_MS = 200
MAX_INTERVAL_MS = 10000


@dataclass
class DisplayConfig:
    color: bool = True
    extended: bool = False


@dataclass
class LoopConfig:
    interval_ms: int = MIN_INTERVAL_MS
    single_shot: bool = False


@dataclass
class LoggingConfig:
    level: str = "INFO"
    keep_files: int = 7
    log_dir: Path | None = None


@dataclass
class RunConfig:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    loop: LoopConfig = field(default_factory=LoopConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def palette_name(self) -> str:
        return "ansi" if self.display.color else "plain"

    @property
    def interval_s(self) -> float:
        return self.loop.interval_ms / 1000.0


def _normalize_loop(cfg: RunConfig) -> None:
    cfg.loop.interval_ms = max(MIN_INTERVAL_MS, min(MAX_INTERVAL_MS, int(cfg.loop.interval_ms)))
    if not cfg.display.color:
        # Plain output is for pipes and captures: one frame, then exit.
        cfg.loop.single_shot = True


def _normalize_logging(cfg: RunConfig) -> None:
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if isinstance(logging.getLevelName(level), int) else "INFO"
    cfg.logging.keep_files = max(2, int(cfg.logging.keep_files))


def _int_or(raw: str | None, default: int) -> int:
    try:
        return int(raw) if raw is not None else default
    except ValueError:
        return default


def load_config(args: Any = None, environ: Mapping[str, str] | None = None) -> RunConfig:
    """Merge parsed CLI args over environment overrides over defaults."""
    env = os.environ if environ is None else environ
    cfg = RunConfig()

    cfg.loop.interval_ms = _int_or(env.get("HWGLANCE_INTERVAL_MS"), cfg.loop.interval_ms)
    cfg.logging.level = env.get("HWGLANCE_LOG_LEVEL", cfg.logging.level)
    if env.get("HWGLANCE_LOG_DIR"):
        cfg.logging.log_dir = Path(env["HWGLANCE_LOG_DIR"]).expanduser()
    if env.get("NO_COLOR"):
        cfg.display.color = False

    if args is not None:
        if getattr(args, "plain", False):
            cfg.display.color = False
        if getattr(args, "extra", False):
            cfg.display.extended = True
        if getattr(args, "once", False):
            cfg.loop.single_shot = True
        if getattr(args, "interval_ms", None) is not None:
            cfg.loop.interval_ms = args.interval_ms

    _normalize_loop(cfg)
    _normalize_logging(cfg)
    return cfg
