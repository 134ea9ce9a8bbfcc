"""Refresh loop: sample, compose, and emit one frame per tick."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from hwglance_renderer.models import Frame
from hwglance_telemetry.models import MetricSnapshot

from .logging_setup import get_logger


class LoopControl(str, Enum):
    CONTINUOUS = "continuous"
    SINGLE_SHOT = "single_shot"


class TelemetrySource(Protocol):
    def refresh(self) -> None: ...

    def snapshot(self) -> MetricSnapshot: ...


class FrameRenderer(Protocol):
    def render(self, snapshot: MetricSnapshot) -> Frame: ...


class FrameSink(Protocol):
    def emit(self, frame: Frame) -> None: ...


@dataclass
class RefreshStatus:
    ticks: int = 0
    last_error: str | None = None
    last_tick_s: float = 0.0


class RefreshController:
    """Owns the telemetry source; the renderer only ever sees materialized snapshots."""

    def __init__(
        self,
        source: TelemetrySource,
        renderer: FrameRenderer,
        sink: FrameSink,
        interval_s: float = 0.2,
        control: LoopControl = LoopControl.CONTINUOUS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.source = source
        self.renderer = renderer
        self.sink = sink
        self.interval_s = interval_s
        self.control = control
        self._sleep = sleep
        self._status = RefreshStatus()
        self._logger = get_logger()

    @property
    def status(self) -> RefreshStatus:
        return self._status

    def compose(self) -> Frame:
        # Rates need an elapsed baseline between two samples.
        self._sleep(self.interval_s)
        self.source.refresh()
        return self.renderer.render(self.source.snapshot())

    def tick(self) -> Frame:
        start = time.perf_counter()
        try:
            frame = self.compose()
        except Exception as exc:
            self._status.last_error = str(exc)
            self._logger.exception("tick failed", extra={"event": "tick_error", "tick": self._status.ticks})
            raise
        self.sink.emit(frame)
        self._status.ticks += 1
        self._status.last_tick_s = time.perf_counter() - start
        self._logger.debug("frame emitted", extra={"event": "frame_emitted", "tick": self._status.ticks})
        return frame

    def run(self, max_ticks: int | None = None) -> int:
        """Tick until the control says stop; returns the number of frames emitted."""
        limit = 1 if self.control is LoopControl.SINGLE_SHOT else max_ticks
        self._logger.info("refresh loop started", extra={"event": "loop_started"})
        emitted = 0
        while limit is None or emitted < limit:
            self.tick()
            emitted += 1
        self._logger.info("refresh loop finished", extra={"event": "loop_finished", "tick": emitted})
        return emitted
