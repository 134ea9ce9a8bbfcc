"""Column alignment for delimiter-separated rows."""

from __future__ import annotations

import re
from typing import Sequence

SGR_RE = re.compile(r"\x1b\[[0-9;]*m")
DELIMITER = ";"


def visible_len(text: str) -> int:
    return len(SGR_RE.sub("", text))


def _split(rows: Sequence[str], delimiter: str) -> list[list[str]]:
    cells = [row.split(delimiter) for row in rows]
    if cells:
        expected = len(cells[0])
        for i, row in enumerate(cells):
            if len(row) != expected:
                raise ValueError(f"Row {i} has {len(row)} cells, expected {expected}")
    return cells


def _render(cells: list[list[str]], widths: Sequence[int], measure) -> str:
    out: list[str] = []
    last = len(widths) - 1
    for row in cells:
        parts = []
        for i, item in enumerate(row):
            pad = 0 if i == last else max(0, widths[i] - measure(item))
            parts.append(item + " " * pad)
        out.append(" ".join(parts) + "\n")
    return "".join(out)


def sized_rows(rows: Sequence[str], widths: Sequence[int], delimiter: str = DELIMITER) -> str:
    cells = _split(rows, delimiter)
    if not cells:
        return ""
    if len(cells[0]) != len(widths):
        raise ValueError(f"Got {len(widths)} widths for {len(cells[0])} columns")
    return _render(cells, widths, len)


def layout_rows(rows: Sequence[str], delimiter: str = DELIMITER, visible_width: bool = False) -> str:
    """Left-justify every column to its widest cell.

    Widths count escape sequences unless ``visible_width`` is set, so with
    colour enabled a column can come out visibly wider than its text.
    The last column is not padded. Rows with differing cell counts raise
    ``ValueError``.
    """
    cells = _split(rows, delimiter)
    if not cells:
        return ""
    measure = visible_len if visible_width else len
    widths = [max(measure(row[i]) for row in cells) for i in range(len(cells[0]))]
    return _render(cells, widths, measure)
