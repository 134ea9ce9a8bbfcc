"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    name: str
    red: str
    green: str
    magenta: str
    cyan: str
    sky: str
    blue: str
    reset: str
    dim: str


@dataclass(frozen=True)
class Metric:
    raw: float
    unit_string: str
    percent: int


@dataclass(frozen=True)
class Frame:
    lines: tuple[str, ...]

    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)
