"""Text renderer: units, glyph/colour tiers, table layout, and frame composition."""

from .dashboard import DashboardRenderer, compose_frame
from .encoder import VisualEncoder, bar_glyph, slider_glyph, tier_for
from .models import Frame, Metric, Palette
from .summary import render_static_summary
from .table import layout_rows, sized_rows
from .themes import DEFAULT_PALETTE_NAME, get_palette, list_palettes
from .units import format_size, percent_of, ratio_bar_percent

__all__ = [
    "DEFAULT_PALETTE_NAME",
    "DashboardRenderer",
    "Frame",
    "Metric",
    "Palette",
    "VisualEncoder",
    "bar_glyph",
    "compose_frame",
    "format_size",
    "get_palette",
    "layout_rows",
    "list_palettes",
    "percent_of",
    "ratio_bar_percent",
    "render_static_summary",
    "sized_rows",
    "slider_glyph",
    "tier_for",
]
