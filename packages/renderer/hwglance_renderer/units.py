"""Human-readable sizes and bounded percentages."""

from __future__ import annotations

import math

from .models import Metric

KIB = 1 << 10
MIB = 1 << 20
GIB = 1 << 30
TIB = 1 << 40


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (``round`` rounds halves to even)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def clamp_percent(value: float) -> int:
    return max(0, min(100, round_half_away(value)))


def format_size(num_bytes: int) -> str:
    if num_bytes < KIB:
        return f"{num_bytes}B"
    if num_bytes < MIB:
        return f"{round_half_away(num_bytes / KIB)}K"
    if num_bytes < GIB:
        return f"{round_half_away(num_bytes / MIB)}M"
    if num_bytes < TIB:
        if num_bytes >= 100 * GIB:
            return f"{round_half_away(num_bytes / GIB)}G"
        tenths = round_half_away(num_bytes / GIB * 10)
        whole, frac = divmod(tenths, 10)
        return f"{whole}G" if frac == 0 else f"{whole}.{frac}G"
    if num_bytes >= 100 * TIB:
        return f"{round_half_away(num_bytes / TIB)}T"
    whole, frac = divmod(round_half_away(num_bytes / TIB * 10), 10)
    return f"{whole}.{frac}T"


def percent_of(used: float, total: float) -> int:
    if total == 0:
        return 0
    return clamp_percent(used / total * 100)


def ratio_bar_percent(value: float, maximum: float) -> int:
    # Squared so low and mid clocks spread over more tiers.
    if maximum == 0:
        return 0
    ratio = value / maximum
    return clamp_percent(ratio * ratio * 100)


def metric(used: int, total: int) -> Metric:
    return Metric(raw=float(used), unit_string=format_size(used), percent=percent_of(used, total))


def format_temp(value: float | None) -> int:
    if value is None:
        return 0
    return round_half_away(value)
