from __future__ import annotations

import logging
from datetime import date
from typing import Any

from .data.synthetic import add_month_effect, add_weekday_effect, simulate_returns
from .grid.labels import Month, Weekday
from .visualization.heatmap import create_calendar_heatmap
from .visualization.palettes import get_scheme
from .visualization.renderers import CalendarRenderer

logger = logging.getLogger(__name__)


def demo_calendar_heatmap(renderer: CalendarRenderer | None = None, year: int = 2023) -> dict[str, Any]:
    """Build the two example heatmaps.

    The yearly plot covers every day of ``year`` with an April uplift and a
    Monday drag; the quarterly plot covers Q1 with the orange-blue colors.

    Returns:
        Dict with "yearly_plot" and "quarterly_plot" figures.
    """
    yearly = simulate_returns(date(year, 1, 1), date(year, 12, 31), sd=0.02, seed=123)
    yearly = add_month_effect(yearly, Month.APR, 0.01)
    yearly = add_weekday_effect(yearly, Weekday.MON, -0.005)

    yearly_plot = create_calendar_heatmap(
        yearly,
        start_date=yearly.index[0],
        end_date=yearly.index[-1],
        title=f"Calendar Heatmap of Returns - {year}",
        renderer=renderer,
    )

    orange_blue = get_scheme("Orange-Blue")
    quarterly = simulate_returns(date(year, 1, 1), date(year, 3, 31), sd=0.015, seed=456)
    quarterly_plot = create_calendar_heatmap(
        quarterly,
        start_date=quarterly.index[0],
        end_date=quarterly.index[-1],
        title=f"Q1 {year} Returns",
        low_color=orange_blue.low,
        mid_color=orange_blue.mid,
        high_color=orange_blue.high,
        renderer=renderer,
    )

    logger.info("Built demo heatmaps for %d", year)
    return {"yearly_plot": yearly_plot, "quarterly_plot": quarterly_plot}
