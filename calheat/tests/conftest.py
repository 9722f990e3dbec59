import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

SETTINGS_ENV = [
    "DEBUG_MODE",
    "LOG_LEVEL",
    "HEATMAP_RENDERER",
    "HEATMAP_TITLE",
    "HEATMAP_LOW_COLOR",
    "HEATMAP_MID_COLOR",
    "HEATMAP_HIGH_COLOR",
    "HEATMAP_FACET_COLUMNS",
]


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch, tmp_path):
    """Keep tests independent of the developer's shell and .env settings."""
    monkeypatch.chdir(tmp_path)
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    yield
    plt.close("all")


@pytest.fixture
def week_values():
    return [0.01, -0.02, 0, 0.015, -0.01, 0.03, -0.005]
