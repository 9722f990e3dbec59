from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date
from typing import Any

import numpy as np
import pandas as pd

from ..config import Settings, get_settings
from ..grid.mapper import CalendarGridMapper, DateLike, default_date_range
from .palettes import ColorScheme, resolve_scheme
from .renderers import CalendarRenderer, get_renderer

logger = logging.getLogger(__name__)


def create_calendar_heatmap(
    values: Sequence[float] | np.ndarray | pd.Series,
    start_date: DateLike | None = None,
    end_date: DateLike | None = None,
    title: str | None = None,
    low_color: str | None = None,
    mid_color: str | None = None,
    high_color: str | None = None,
    renderer: CalendarRenderer | None = None,
    ncols: int | None = None,
    settings: Settings | None = None,
    clock: Callable[[], date] = date.today,
) -> Any:
    """Create a calendar heatmap of daily returns.

    Each day becomes a tile in its month's panel, placed by weekday (columns,
    Mon..Sun) and week of month (rows). Tiles are colored on a diverging scale
    centered at zero.

    Args:
        values: One return per day from start_date to end_date inclusive.
        start_date: First day. Defaults to 365 days before ``clock()``.
        end_date: Last day. Defaults to ``clock()``.
        title: Chart title. Defaults to the configured title.
        low_color: Color for negative returns. Defaults to the configured color.
        mid_color: Color for zero returns. Defaults to the configured color.
        high_color: Color for positive returns. Defaults to the configured color.
        renderer: Renderer that draws the figure. Defaults to the configured backend.
        ncols: Month panels per row. Defaults to the configured value.
        settings: Settings instance. If None, will load from get_settings().
        clock: Callable returning today's date, used only for missing dates.

    Returns:
        The renderer's figure (plotly ``Figure`` or matplotlib ``Figure``).

    Raises:
        InvalidInputError: If values are not numeric or a date is unreadable.
        InvalidRangeError: If end_date precedes start_date.
        LengthMismatchError: If values do not cover the range day for day.
    """
    if settings is None:
        settings = get_settings()

    if start_date is None or end_date is None:
        default_start, default_end = default_date_range(clock=clock)
        start_date = default_start if start_date is None else start_date
        end_date = default_end if end_date is None else end_date

    cells = CalendarGridMapper().map(values, start_date, end_date)

    base = ColorScheme(
        name="Configured",
        low=settings.low_color,
        mid=settings.mid_color,
        high=settings.high_color,
    )
    scheme = resolve_scheme(base, low=low_color, mid=mid_color, high=high_color)
    if renderer is None:
        renderer = get_renderer(settings.renderer)

    logger.info(
        "Rendering %d days (%s to %s) with %s",
        len(cells),
        cells[0].date,
        cells[-1].date,
        type(renderer).__name__,
    )
    return renderer.render(
        cells,
        title=title if title is not None else settings.title,
        scheme=scheme,
        ncols=ncols if ncols is not None else settings.facet_columns,
    )
