"""Position colours and hex/rgba conversion."""

from __future__ import annotations

from typing import Tuple

from matplotlib import colors as mcolors

POSITION_COLORS: dict[str, str] = {
    "G": "#1f77b4",
    "F": "#2ca02c",
    "C": "#ff7f0e",
    "ALL": "#9467bd",
}

# Fill used for points that do not match the active search term
MUTED_FILL = "#303030"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert a hex colour string (e.g. ``'#1f77b4'``) to ``(R, G, B)``."""
    try:
        rgb_float = mcolors.to_rgb(hex_color)
        return tuple(int(round(c * 255)) for c in rgb_float)
    except ValueError:
        return (0, 0, 0)


def rgba(hex_color: str, alpha: float) -> str:
    """Return a CSS ``rgba(...)`` string for *hex_color* at *alpha*."""
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r},{g},{b},{alpha:g})"


def category_color(position: str) -> str:
    """Colour for a position string.

    Hybrid positions take the first of guard, forward, centre they contain,
    so ``'G-F'`` is coloured as a guard.
    """
    for code in ("G", "F", "C"):
        if code in (position or ""):
            return POSITION_COLORS[code]
    return POSITION_COLORS["ALL"]
