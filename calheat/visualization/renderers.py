from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import plotly.graph_objects as go
from matplotlib.cm import ScalarMappable
from matplotlib.colors import LinearSegmentedColormap, ListedColormap, Normalize
from matplotlib.figure import Figure
from plotly.subplots import make_subplots

from ..grid.labels import WEEKDAY_LABELS
from ..grid.mapper import CalendarCell, cells_to_frame
from .palettes import DEFAULT_SCHEME, MISSING_COLOR, ColorScheme

logger = logging.getLogger(__name__)

TRANSPARENT = (0.0, 0.0, 0.0, 0.0)


class CalendarRenderer(Protocol):
    def render(
        self,
        cells: Sequence[CalendarCell],
        title: str,
        scheme: ColorScheme = DEFAULT_SCHEME,
        ncols: int = 3,
    ) -> Any:  # pragma: no cover - protocol
        ...


def _panels(cells: Sequence[CalendarCell]) -> list[tuple[str, pd.DataFrame]]:
    """Split cells into month-year panels in chronological order."""
    if not cells:
        raise ValueError("No calendar cells to render")
    frame = cells_to_frame(cells)
    grouped = frame.groupby("month_year_label", observed=True, sort=True)
    return [(str(label), panel) for label, panel in grouped]


def panel_matrix(panel: pd.DataFrame) -> tuple[list[int], np.ndarray, np.ndarray]:
    """Lay one month's cells out as a weeks x weekdays grid.

    Returns:
        Tuple of (week numbers top to bottom, values, present mask). Values are
        NaN where the month has no cell or the cell's value is missing; the mask
        tells the two apart.
    """
    weeks = sorted(int(w) for w in panel["week_of_month"].unique())
    values = np.full((len(weeks), len(WEEKDAY_LABELS)), np.nan)
    present = np.zeros(values.shape, dtype=bool)
    for row in panel.itertuples(index=False):
        r = weeks.index(int(row.week_of_month))
        c = WEEKDAY_LABELS.index(str(row.weekday_label))
        values[r, c] = row.value
        present[r, c] = True
    return weeks, values, present


def _symmetric_limit(frame_values: np.ndarray) -> float:
    finite = frame_values[np.isfinite(frame_values)]
    if finite.size == 0:
        return 1.0
    limit = float(np.max(np.abs(finite)))
    return limit if limit > 0 else 1.0


class PlotlyCalendarRenderer:
    """Draw one heatmap subplot per month on a shared diverging color axis."""

    def render(
        self,
        cells: Sequence[CalendarCell],
        title: str,
        scheme: ColorScheme = DEFAULT_SCHEME,
        ncols: int = 3,
    ) -> go.Figure:
        panels = _panels(cells)
        cols = max(1, min(ncols, len(panels)))
        rows = math.ceil(len(panels) / cols)

        fig = make_subplots(
            rows=rows,
            cols=cols,
            subplot_titles=[label for label, _ in panels],
        )

        for i, (label, panel) in enumerate(panels):
            row, col = divmod(i, cols)
            weeks, values, present = panel_matrix(panel)
            missing = np.where(present & np.isnan(values), 1.0, np.nan)

            if np.isfinite(missing).any():
                fig.add_trace(
                    go.Heatmap(
                        z=missing,
                        x=list(WEEKDAY_LABELS),
                        y=weeks,
                        colorscale=[[0.0, MISSING_COLOR], [1.0, MISSING_COLOR]],
                        showscale=False,
                        hoverinfo="skip",
                        xgap=1,
                        ygap=1,
                    ),
                    row=row + 1,
                    col=col + 1,
                )

            fig.add_trace(
                go.Heatmap(
                    z=values,
                    x=list(WEEKDAY_LABELS),
                    y=weeks,
                    coloraxis="coloraxis",
                    xgap=1,
                    ygap=1,
                    name=label,
                    hovertemplate=f"<b>{label}</b> %{{x}}, week %{{y}}<br>Return: %{{z:.4f}}<extra></extra>",
                ),
                row=row + 1,
                col=col + 1,
            )

        fig.update_yaxes(autorange="reversed", dtick=1, showgrid=False)
        fig.update_xaxes(
            categoryorder="array",
            categoryarray=list(WEEKDAY_LABELS),
            tickangle=-45,
            showgrid=False,
        )
        fig.update_layout(
            title=dict(text=title, font=dict(size=16)),
            coloraxis=dict(
                colorscale=scheme.colorscale(),
                cmid=0.0,
                colorbar=dict(title="Returns", orientation="h", y=-0.15),
            ),
            height=220 * rows + 160,
            template="plotly_white",
        )

        logger.debug("Built plotly calendar heatmap with %d panels", len(panels))
        return fig


class MatplotlibCalendarRenderer:
    """Draw the month panels as ``imshow`` tiles with a zero-centered norm."""

    def render(
        self,
        cells: Sequence[CalendarCell],
        title: str,
        scheme: ColorScheme = DEFAULT_SCHEME,
        ncols: int = 3,
    ) -> Figure:
        panels = _panels(cells)
        cols = max(1, min(ncols, len(panels)))
        rows = math.ceil(len(panels) / cols)

        cmap = LinearSegmentedColormap.from_list(
            scheme.name, [scheme.low, scheme.mid, scheme.high]
        ).with_extremes(bad=TRANSPARENT)
        missing_cmap = ListedColormap([MISSING_COLOR]).with_extremes(bad=TRANSPARENT)

        limit = _symmetric_limit(np.array([c.value for c in cells], dtype=float))
        norm = Normalize(vmin=-limit, vmax=limit)

        fig, axes = plt.subplots(
            rows,
            cols,
            figsize=(3.6 * cols, 2.8 * rows + 1.0),
            squeeze=False,
            layout="constrained",
        )

        for ax, (label, panel) in zip(axes.flat, panels):
            weeks, values, present = panel_matrix(panel)
            missing = np.where(present & np.isnan(values), 1.0, np.nan)
            if np.isfinite(missing).any():
                ax.imshow(np.ma.masked_invalid(missing), cmap=missing_cmap, aspect="auto")
            ax.imshow(np.ma.masked_invalid(values), cmap=cmap, norm=norm, aspect="auto")

            ax.set_title(label, fontsize=11, fontweight="bold")
            ax.set_xticks(range(len(WEEKDAY_LABELS)))
            ax.set_xticklabels(WEEKDAY_LABELS, rotation=45, ha="right")
            ax.set_yticks(range(len(weeks)))
            ax.set_yticklabels([str(w) for w in weeks])
            ax.set_xticks(np.arange(-0.5, len(WEEKDAY_LABELS)), minor=True)
            ax.set_yticks(np.arange(-0.5, len(weeks)), minor=True)
            ax.grid(which="minor", color="black", linewidth=0.5)
            ax.tick_params(which="minor", length=0)
            for spine in ax.spines.values():
                spine.set_visible(False)

        for ax in list(axes.flat)[len(panels):]:
            ax.set_visible(False)

        fig.colorbar(
            ScalarMappable(norm=norm, cmap=cmap),
            ax=axes.ravel().tolist(),
            orientation="horizontal",
            label="Returns",
            shrink=0.6,
        )
        fig.suptitle(title)

        logger.debug("Built matplotlib calendar heatmap with %d panels", len(panels))
        return fig


RENDERERS: dict[str, type] = {
    "plotly": PlotlyCalendarRenderer,
    "matplotlib": MatplotlibCalendarRenderer,
}


def get_renderer(name: str) -> CalendarRenderer:
    """Return a renderer instance by backend name.

    Raises:
        ValueError: If the backend is unknown.
    """
    key = name.strip().lower()
    if key not in RENDERERS:
        raise ValueError(f"Unknown renderer {name!r}; expected one of {sorted(RENDERERS)}")
    return RENDERERS[key]()


def save_figure(fig: Any, path: Path) -> Path:
    """Write a figure with its library's own writer.

    Plotly figures are written as HTML; matplotlib figures use ``savefig`` and
    take the format from the file suffix.

    Raises:
        ValueError: If a plotly figure is given a non-HTML path, or the figure
            type is not recognised.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(fig, go.Figure):
        if path.suffix.lower() not in (".html", ".htm"):
            raise ValueError(f"Plotly figures are saved as .html, got {path.name}")
        fig.write_html(str(path))
    elif isinstance(fig, Figure):
        fig.savefig(path, dpi=150)
    else:
        raise ValueError(f"Cannot save object of type {type(fig).__name__}")
    logger.info("Saved heatmap to %s", path)
    return path
