"""Least-squares regression, Pearson correlation and mean.

Degenerate inputs (fewer than two points, zero variance) return ``None``
rather than ``NaN`` so callers can suppress the matching overlay.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np


@dataclass(frozen=True)
class RegressionLine:
    """OLS fit evaluated at the observed x extremes."""

    slope: float
    intercept: float
    start: tuple[float, float]
    end: tuple[float, float]


def _as_points(points) -> np.ndarray:
    arr = np.asarray(points, dtype=float)
    if arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Expected (n, 2) points, got shape {arr.shape}")
    return arr


def regression_line(points: Sequence[tuple[float, float]] | np.ndarray) -> RegressionLine | None:
    """Fit ``y = slope * x + intercept`` by ordinary least squares.

    Parameters
    ----------
    points : array-like of shape (n, 2)
        ``(x, y)`` pairs.

    Returns
    -------
    RegressionLine or None
        ``None`` when there are fewer than two points or every x is equal.
    """
    xy = _as_points(points)
    if len(xy) < 2:
        return None
    x, y = xy[:, 0], xy[:, 1]
    # all-equal x means a zero denominator
    if np.ptp(x) == 0:
        return None

    x_mean, y_mean = x.mean(), y.mean()
    dx = x - x_mean
    slope = float(np.dot(dx, y - y_mean) / np.dot(dx, dx))
    intercept = float(y_mean - slope * x_mean)

    x_min, x_max = float(x.min()), float(x.max())
    return RegressionLine(
        slope=slope,
        intercept=intercept,
        start=(x_min, slope * x_min + intercept),
        end=(x_max, slope * x_max + intercept),
    )


def correlation(points: Sequence[tuple[float, float]] | np.ndarray) -> float | None:
    """Pearson correlation coefficient, or ``None`` if either axis is constant."""
    xy = _as_points(points)
    if len(xy) < 2:
        return None
    x, y = xy[:, 0], xy[:, 1]
    if np.ptp(x) == 0 or np.ptp(y) == 0:
        return None

    dx = x - x.mean()
    dy = y - y.mean()
    denom = np.sqrt(np.dot(dx, dx) * np.dot(dy, dy))
    if not np.isfinite(denom) or denom == 0:
        return None
    r = float(np.dot(dx, dy) / denom)
    if not np.isfinite(r):
        return None
    return float(np.clip(r, -1.0, 1.0))


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean.

    Raises
    ------
    ValueError
        If *values* is empty.
    """
    arr = np.fromiter(values, dtype=float)
    if arr.size == 0:
        raise ValueError("mean() of an empty sequence")
    return float(arr.mean())
