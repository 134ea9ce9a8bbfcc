"""Core app services for run settings, logging, and the refresh loop."""

from .config import DisplayConfig, LoggingConfig, LoopConfig, RunConfig, load_config
from .logging_setup import configure_logging, get_logger, install_crash_hooks
from .refresh_loop import LoopControl, RefreshController, RefreshStatus

__all__ = [
    "DisplayConfig",
    "LoggingConfig",
    "LoopConfig",
    "LoopControl",
    "RefreshController",
    "RefreshStatus",
    "RunConfig",
    "configure_logging",
    "get_logger",
    "install_crash_hooks",
    "load_config",
]
