"""Percent to glyph/colour tiers and capacity bars."""

from __future__ import annotations

import bisect
import math
from typing import Iterable

from .models import Palette
from .units import clamp_percent, format_size, metric, round_half_away

BIN_EDGES = (12, 25, 37, 50, 62, 75, 87)
BAR_GLYPHS = "▁▂▃▄▅▆▇█"
SLIDER_GLYPHS = "▏▎▍▌▋▊▉█"
FULL_BLOCK = "█"


def tier_for(percent: float) -> int:
    """Bin index in [0, 7]; each edge is the inclusive upper bound of its bin."""
    p = max(0, min(100, math.ceil(percent)))
    return bisect.bisect_left(BIN_EDGES, p)


def bar_glyph(percent: float) -> str:
    return BAR_GLYPHS[tier_for(percent)]


def slider_glyph(percent: float) -> str:
    return SLIDER_GLYPHS[tier_for(percent)]


class VisualEncoder:
    """Colours and glyphs for one palette; the plain palette yields uncoloured output."""

    def __init__(self, palette: Palette) -> None:
        self.palette = palette
        # Adjacent bins share a colour, calm to hot.
        self._colors = (palette.blue, palette.sky, palette.magenta, palette.red)

    def color(self, percent: float) -> str:
        return self._colors[tier_for(percent) // 2]

    def bar(self, percent: float) -> str:
        return bar_glyph(percent)

    def slider(self, percent: float) -> str:
        return slider_glyph(percent)

    def encode(self, percent: float) -> tuple[str, str]:
        return bar_glyph(percent), self.color(percent)

    def paint(self, text: str, percent: float) -> str:
        return f"{self.color(percent)}{text}{self.palette.reset}"

    def bars(self, percents: Iterable[float]) -> str:
        return "".join(self.paint(bar_glyph(p), p) for p in percents)

    def usage(self, used: int, total: int) -> str:
        used_metric = metric(used, total)
        percent = used_metric.percent
        return f"{self.paint(used_metric.unit_string, percent)}/{self.paint(format_size(total), percent)}"

    def capacity_cells(self, used: float, total: float, width: int) -> str:
        """Exactly ``width`` cells: full blocks, at most one partial cell, then spaces."""
        ratio = 0.0 if total == 0 else max(0.0, min(1.0, used / total))
        scaled = ratio * width
        full = int(scaled)
        if full >= width:
            return FULL_BLOCK * width
        remainder = clamp_percent((scaled - full) * 100)
        partial = slider_glyph(remainder) if remainder > 0 else " "
        return FULL_BLOCK * full + partial + " " * (width - full - 1)

    def capacity_bar(self, used: int, total: int, width: int) -> str:
        ratio = 0.0 if total == 0 else min(1.0, used / total)
        cells = self.capacity_cells(used, total, width)
        filled = cells.rstrip(" ")
        padding = cells[len(filled) :]
        col = self.color(round_half_away(ratio * 100))
        return f"[{col}{filled}{self.palette.reset}{padding}] {self.usage(used, total)}"
