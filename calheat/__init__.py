"""Calendar heatmaps of daily returns."""

from .grid import CalendarCell, CalendarGridMapper, map_calendar_grid
from .visualization import create_calendar_heatmap

__version__ = "0.1.0"

__all__ = [
    "CalendarCell",
    "CalendarGridMapper",
    "create_calendar_heatmap",
    "map_calendar_grid",
]
