from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ColorScheme:
    """Three-color diverging scheme for return heatmaps."""

    name: str
    low: str  # most negative value
    mid: str  # zero
    high: str  # most positive value

    def colorscale(self) -> list[list[float | str]]:
        """Plotly colorscale with ``mid`` at the center."""
        return [[0.0, self.low], [0.5, self.mid], [1.0, self.high]]


# Days inside the range whose value is NaN
MISSING_COLOR = "#7f7f7f"

DEFAULT_SCHEME = ColorScheme(
    name="Classic",
    low="red",
    mid="white",
    high="green",
)

ORANGE_BLUE_SCHEME = ColorScheme(
    name="Orange-Blue",
    low="blue",
    mid="#F8F8F8",
    high="orange",
)

ALL_SCHEMES = {
    "Classic": DEFAULT_SCHEME,
    "Orange-Blue": ORANGE_BLUE_SCHEME,
}


def resolve_scheme(
    base: ColorScheme = DEFAULT_SCHEME,
    low: str | None = None,
    mid: str | None = None,
    high: str | None = None,
) -> ColorScheme:
    """Return ``base`` with any of its colors overridden.

    Args:
        base: Scheme supplying colors that are not overridden.
        low: Color for negative extremes.
        mid: Color for zero.
        high: Color for positive extremes.
    """
    overrides = {k: v for k, v in (("low", low), ("mid", mid), ("high", high)) if v}
    if not overrides:
        return base
    return replace(base, name="Custom", **overrides)


def get_scheme(name: str) -> ColorScheme:
    """Look up a preset scheme by name, ignoring case.

    Raises:
        ValueError: If no preset has that name.
    """
    for key, scheme in ALL_SCHEMES.items():
        if key.lower() == name.strip().lower():
            return scheme
    raise ValueError(f"Unknown color scheme {name!r}; expected one of {sorted(ALL_SCHEMES)}")
