"""Visualization utilities for calendar heatmaps."""

from .heatmap import create_calendar_heatmap
from .palettes import (
    ALL_SCHEMES,
    DEFAULT_SCHEME,
    ORANGE_BLUE_SCHEME,
    ColorScheme,
    get_scheme,
    resolve_scheme,
)
from .renderers import (
    CalendarRenderer,
    MatplotlibCalendarRenderer,
    PlotlyCalendarRenderer,
    get_renderer,
    save_figure,
)

__all__ = [
    "ALL_SCHEMES",
    "CalendarRenderer",
    "ColorScheme",
    "DEFAULT_SCHEME",
    "MatplotlibCalendarRenderer",
    "ORANGE_BLUE_SCHEME",
    "PlotlyCalendarRenderer",
    "create_calendar_heatmap",
    "get_renderer",
    "get_scheme",
    "resolve_scheme",
    "save_figure",
]
