"""Built-in terminal palettes."""

from __future__ import annotations

from .models import Palette

DEFAULT_PALETTE_NAME = "ansi"

PALETTES: dict[str, Palette] = {
    "ansi": Palette(
        name="ansi",
        red="\x1b[31m",
        green="\x1b[32m",
        magenta="\x1b[35m",
        cyan="\x1b[36m",
        sky="\x1b[96m",
        blue="\x1b[94m",
        reset="\x1b[0m",
        dim="\x1b[2m",
    ),
    "plain": Palette(
        name="plain",
        red="",
        green="",
        magenta="",
        cyan="",
        sky="",
        blue="",
        reset="",
        dim="",
    ),
}


def list_palettes() -> list[str]:
    return sorted(PALETTES.keys())


def get_palette(name: str | None) -> Palette:
    if not name:
        return PALETTES[DEFAULT_PALETTE_NAME]
    return PALETTES.get(name, PALETTES[DEFAULT_PALETTE_NAME])
