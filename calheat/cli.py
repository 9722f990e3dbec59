from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import pandas as pd
import plotly.graph_objects as go
import typer

from .config import Settings, get_settings, setup_logging
from .demo import demo_calendar_heatmap
from .grid.errors import CalendarGridError
from .grid.mapper import coerce_date, default_date_range
from .visualization.heatmap import create_calendar_heatmap
from .visualization.palettes import ColorScheme, get_scheme
from .visualization.renderers import CalendarRenderer, get_renderer, save_figure


app = typer.Typer(help="calheat CLI: calendar heatmaps of daily returns")


def _load_settings(debug: bool) -> Settings:
    settings = get_settings()
    if debug:
        settings = settings.model_copy(update={"debug_mode": True})
    setup_logging(settings)
    return settings


def _pick_renderer(name: str | None, settings: Settings) -> CalendarRenderer:
    try:
        return get_renderer(name or settings.renderer)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--renderer") from exc


def _pick_scheme(name: str | None) -> ColorScheme | None:
    if name is None:
        return None
    try:
        return get_scheme(name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--scheme") from exc


def _resolve_range(start: str | None, end: str | None, n_values: int) -> tuple[date, date]:
    """Fill in missing dates; a single missing date is inferred from the number of values."""
    if start is None and end is None:
        return default_date_range()
    if start is None:
        end_d = coerce_date(end, "end")
        return end_d - timedelta(days=n_values - 1), end_d
    start_d = coerce_date(start, "start")
    if end is None:
        return start_d, start_d + timedelta(days=n_values - 1)
    return start_d, coerce_date(end, "end")


def _show(fig: Any) -> None:
    if isinstance(fig, go.Figure):
        fig.show()
    else:
        plt.show()


def _save(fig: Any, path: Path) -> None:
    try:
        save_figure(fig, path)
    except (OSError, ValueError) as exc:
        typer.secho(f"Failed to save chart: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.secho(f"Saved chart to {path}", fg=typer.colors.GREEN)


@app.command("render")
def render(
    values_csv: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV file with one daily return per row"),
    start: str | None = typer.Option(None, help="Start date YYYY-MM-DD"),
    end: str | None = typer.Option(None, help="End date YYYY-MM-DD"),
    column: str | None = typer.Option(None, help="Column holding returns (defaults to the first column)"),
    header: bool = typer.Option(True, help="Whether the CSV has a header row"),
    title: str | None = typer.Option(None, help="Chart title"),
    scheme: str | None = typer.Option(None, help="Preset color scheme: Classic | Orange-Blue"),
    low_color: str | None = typer.Option(None, help="Color for negative returns"),
    mid_color: str | None = typer.Option(None, help="Color for zero returns"),
    high_color: str | None = typer.Option(None, help="Color for positive returns"),
    renderer: str | None = typer.Option(None, help="Renderer: plotly | matplotlib"),
    ncols: int | None = typer.Option(None, min=1, help="Month panels per row"),
    output: Path | None = typer.Option(None, help="Save chart to file (.html for plotly, e.g. .png for matplotlib)"),
    show: bool = typer.Option(False, help="Open the chart after rendering"),
    debug: bool = typer.Option(False, help="Enable debug logging"),
) -> None:
    """Render a calendar heatmap from a CSV of daily returns."""
    settings = _load_settings(debug)
    chart_renderer = _pick_renderer(renderer, settings)
    preset = _pick_scheme(scheme)
    if preset is not None:
        low_color = low_color or preset.low
        mid_color = mid_color or preset.mid
        high_color = high_color or preset.high

    frame = pd.read_csv(values_csv, header=0 if header else None)
    if frame.empty:
        typer.secho(f"No values found in {values_csv}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    if column is None:
        values = frame.iloc[:, 0]
    elif column in frame.columns:
        values = frame[column]
    else:
        raise typer.BadParameter(f"column {column!r} not found in {values_csv}", param_hint="--column")

    try:
        start_d, end_d = _resolve_range(start, end, len(values))
        fig = create_calendar_heatmap(
            values,
            start_date=start_d,
            end_date=end_d,
            title=title,
            low_color=low_color,
            mid_color=mid_color,
            high_color=high_color,
            renderer=chart_renderer,
            ncols=ncols,
            settings=settings,
        )
    except CalendarGridError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.echo(f"Rendered {len(values)} days from {start_d} to {end_d}")
    if output:
        _save(fig, output)
    if show:
        _show(fig)


@app.command("demo")
def demo(
    output_dir: Path | None = typer.Option(None, help="Directory to save the two demo charts"),
    renderer: str | None = typer.Option(None, help="Renderer: plotly | matplotlib"),
    show: bool = typer.Option(False, help="Open the charts after rendering"),
    debug: bool = typer.Option(False, help="Enable debug logging"),
) -> None:
    """Render the yearly and quarterly example heatmaps from simulated returns."""
    settings = _load_settings(debug)
    chart_renderer = _pick_renderer(renderer, settings)

    plots = demo_calendar_heatmap(renderer=chart_renderer)

    for name, fig in plots.items():
        if output_dir:
            suffix = ".html" if isinstance(fig, go.Figure) else ".png"
            _save(fig, output_dir / f"{name}{suffix}")
        if show:
            _show(fig)
    typer.echo(f"Built {len(plots)} demo charts")


if __name__ == "__main__":  # pragma: no cover
    app()
