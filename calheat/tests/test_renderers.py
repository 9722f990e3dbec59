"""Renderer boundary: panels, axes and colors of the drawn heatmaps."""

from datetime import date

import numpy as np
import plotly.graph_objects as go
import pytest
from matplotlib.figure import Figure

from calheat.config import Settings
from calheat.demo import demo_calendar_heatmap
from calheat.grid import LengthMismatchError, WEEKDAY_LABELS, cells_to_frame, map_calendar_grid
from calheat.visualization import (
    ORANGE_BLUE_SCHEME,
    MatplotlibCalendarRenderer,
    PlotlyCalendarRenderer,
    create_calendar_heatmap,
    get_renderer,
    get_scheme,
    resolve_scheme,
    save_figure,
)
from calheat.visualization.renderers import panel_matrix


def _q1_cells(values=None):
    if values is None:
        values = np.linspace(-0.03, 0.03, 90)
    return map_calendar_grid(values, date(2023, 1, 1), date(2023, 3, 31))


def _panel_titles(fig: go.Figure) -> list[str]:
    return [a.text for a in fig.layout.annotations]


def test_panel_matrix_places_days_by_weekday_and_week():
    values = list(np.arange(31, dtype=float))
    frame = cells_to_frame(map_calendar_grid(values, date(2023, 1, 1), date(2023, 1, 31)))

    weeks, grid, present = panel_matrix(frame)

    assert weeks == [1, 2, 3, 4, 5, 6]
    assert grid.shape == (6, 7)
    assert grid[0, WEEKDAY_LABELS.index("Sun")] == 0.0, "Jan 1 is a Sunday in row 1"
    assert grid[0, WEEKDAY_LABELS.index("Mon")] == 1.0
    assert grid[1, WEEKDAY_LABELS.index("Tue")] == 2.0
    assert present.sum() == 31
    assert np.isnan(grid[~present]).all()


def test_plotly_one_panel_per_month():
    fig = PlotlyCalendarRenderer().render(_q1_cells(), title="Q1")

    assert isinstance(fig, go.Figure)
    assert _panel_titles(fig) == ["Jan 2023", "Feb 2023", "Mar 2023"]
    heatmaps = [t for t in fig.data if isinstance(t, go.Heatmap)]
    assert len(heatmaps) == 3
    for trace in heatmaps:
        assert list(trace.x) == list(WEEKDAY_LABELS)
    assert fig.layout.title.text == "Q1"


def test_plotly_rows_top_down_and_zero_centered():
    fig = PlotlyCalendarRenderer().render(_q1_cells(), title="Q1", scheme=ORANGE_BLUE_SCHEME)

    assert fig.layout.yaxis.autorange == "reversed"
    assert fig.layout.coloraxis.cmid == 0
    colors = [step[1] for step in fig.layout.coloraxis.colorscale]
    assert colors == ["blue", "#F8F8F8", "orange"]


def test_plotly_january_grid_values():
    values = np.linspace(-0.03, 0.03, 90)
    fig = PlotlyCalendarRenderer().render(_q1_cells(values), title="Q1")

    january = fig.data[0]
    z = np.asarray(january.z, dtype=float)
    assert list(january.y) == [1, 2, 3, 4, 5, 6]
    assert z[0, 6] == pytest.approx(values[0])


def test_plotly_missing_values_get_their_own_layer():
    values = np.linspace(-0.03, 0.03, 90)
    values[10] = np.nan
    fig = PlotlyCalendarRenderer().render(_q1_cells(values), title="Q1")

    assert len(fig.data) == 4


def test_plotly_wraps_panels_into_rows():
    cells = map_calendar_grid([0.0] * 365, date(2023, 1, 1), date(2023, 12, 31))
    fig = PlotlyCalendarRenderer().render(cells, title="2023", ncols=3)

    assert len(_panel_titles(fig)) == 12
    assert fig.layout.height == 220 * 4 + 160


def test_matplotlib_one_axis_per_month():
    fig = MatplotlibCalendarRenderer().render(_q1_cells(), title="Q1", ncols=2)

    assert isinstance(fig, Figure)
    titles = [ax.get_title() for ax in fig.axes if ax.get_visible() and ax.get_title()]
    assert titles == ["Jan 2023", "Feb 2023", "Mar 2023"]
    hidden = [ax for ax in fig.axes if not ax.get_visible()]
    assert len(hidden) == 1
    first = fig.axes[0]
    assert [t.get_text() for t in first.get_xticklabels()] == list(WEEKDAY_LABELS)


def test_render_rejects_empty_cells():
    with pytest.raises(ValueError):
        PlotlyCalendarRenderer().render([], title="empty")


def test_get_renderer():
    assert isinstance(get_renderer("Plotly"), PlotlyCalendarRenderer)
    assert isinstance(get_renderer("matplotlib"), MatplotlibCalendarRenderer)
    with pytest.raises(ValueError):
        get_renderer("bokeh")


def test_resolve_scheme_overrides_only_given_colors():
    scheme = resolve_scheme(low="blue")
    assert (scheme.low, scheme.mid, scheme.high) == ("blue", "white", "green")
    assert resolve_scheme(ORANGE_BLUE_SCHEME) is ORANGE_BLUE_SCHEME


def test_get_scheme_by_name():
    assert get_scheme("Orange-Blue") is ORANGE_BLUE_SCHEME
    assert get_scheme(" orange-blue ") is ORANGE_BLUE_SCHEME
    assert get_scheme("classic").high == "green"
    with pytest.raises(ValueError, match="Unknown color scheme"):
        get_scheme("viridis")


def test_save_figure(tmp_path):
    plotly_fig = PlotlyCalendarRenderer().render(_q1_cells(), title="Q1")
    mpl_fig = MatplotlibCalendarRenderer().render(_q1_cells(), title="Q1")

    html = save_figure(plotly_fig, tmp_path / "out" / "q1.html")
    png = save_figure(mpl_fig, tmp_path / "q1.png")

    assert html.exists() and html.stat().st_size > 0
    assert png.exists() and png.stat().st_size > 0
    with pytest.raises(ValueError):
        save_figure(plotly_fig, tmp_path / "q1.png")


def test_create_calendar_heatmap_uses_settings():
    settings = Settings(renderer="matplotlib", high_color="navy", title="From settings")
    values = np.linspace(-0.03, 0.03, 90)

    fig = create_calendar_heatmap(values, "2023-01-01", "2023-03-31", settings=settings)

    assert isinstance(fig, Figure)
    assert fig.get_suptitle() == "From settings"


def test_create_calendar_heatmap_color_overrides():
    values = np.linspace(-0.03, 0.03, 90)
    fig = create_calendar_heatmap(
        values,
        "2023-01-01",
        "2023-03-31",
        title="Q1 2023 Returns",
        low_color="blue",
        renderer=PlotlyCalendarRenderer(),
        settings=Settings(),
    )

    colors = [step[1] for step in fig.layout.coloraxis.colorscale]
    assert colors == ["blue", "white", "green"]
    assert fig.layout.title.text == "Q1 2023 Returns"


def test_create_calendar_heatmap_default_range_from_clock():
    fig = create_calendar_heatmap(
        [0.0] * 366,
        renderer=PlotlyCalendarRenderer(),
        settings=Settings(),
        clock=lambda: date(2023, 12, 31),
    )

    titles = _panel_titles(fig)
    assert titles[0] == "Dec 2022"
    assert titles[-1] == "Dec 2023"
    assert len(titles) == 13


def test_create_calendar_heatmap_propagates_validation_errors():
    with pytest.raises(LengthMismatchError):
        create_calendar_heatmap([0.0] * 10, "2023-01-01", "2023-01-05", settings=Settings())


def test_demo_builds_both_plots():
    plots = demo_calendar_heatmap(renderer=PlotlyCalendarRenderer())

    assert set(plots) == {"yearly_plot", "quarterly_plot"}
    yearly, quarterly = plots["yearly_plot"], plots["quarterly_plot"]
    assert yearly.layout.title.text == "Calendar Heatmap of Returns - 2023"
    assert len(_panel_titles(yearly)) == 12
    assert quarterly.layout.title.text == "Q1 2023 Returns"
    assert [step[1] for step in quarterly.layout.coloraxis.colorscale] == ["blue", "#F8F8F8", "orange"]
