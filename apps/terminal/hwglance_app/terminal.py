"""Terminal output sink: alternate screen, cursor control, one write per frame."""

from __future__ import annotations

import signal
import sys
from typing import TextIO

from hwglance_renderer.models import Frame

CSI = "\033["
ALT_SCREEN_ON = f"{CSI}?1049h"
ALT_SCREEN_OFF = f"{CSI}?1049l"
CURSOR_HIDE = f"{CSI}?25l"
CURSOR_SHOW = f"{CSI}?25h"
HOME_AND_CLEAR = f"{CSI}H{CSI}2J"


def cleanup_and_exit(_sig: int, _frame) -> None:
    raise SystemExit(0)


def install_signal_handlers() -> None:
    signal.signal(signal.SIGTERM, cleanup_and_exit)


class TerminalSink:
    """Writes frames to a stream; interactive mode redraws in place on the alternate screen."""

    def __init__(self, stream: TextIO | None = None, interactive: bool = True) -> None:
        self.stream = stream or sys.stdout
        self.interactive = interactive
        self._active = False

    def __enter__(self) -> "TerminalSink":
        if self.interactive:
            self.stream.write(ALT_SCREEN_ON + CURSOR_HIDE)
            self.stream.flush()
            self._active = True
        return self

    def __exit__(self, *_exc) -> None:
        if self._active:
            self.stream.write(CURSOR_SHOW + ALT_SCREEN_OFF)
            self.stream.flush()
            self._active = False

    def emit(self, frame: Frame) -> None:
        prefix = HOME_AND_CLEAR if self.interactive else ""
        self.stream.write(prefix + frame.text())
        self.stream.flush()
