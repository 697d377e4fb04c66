"""Tunable defaults for the explorer engine and app."""

from __future__ import annotations

from dataclasses import dataclass

from .scales import SCALE_EXTENT


@dataclass(frozen=True)
class ExplorerConfig:
    """Plot geometry and interaction thresholds.

    ``width``/``height`` are the scatter plot area in pixels, excluding
    margins.  ``wheel_step`` converts a pixel wheel delta into a zoom
    exponent (d3-zoom's default).
    """

    width: float = 720.0
    height: float = 400.0
    scale_extent: tuple[float, float] = SCALE_EXTENT
    wheel_step: float = 0.002
    similarity_threshold: float = 0.2
    threshold_key: str = "MPG"
    top_n: int = 10
    suggestion_limit: int = 5

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Plot area must be positive, got {self.width}x{self.height}"
            )
        lo, hi = self.scale_extent
        if not 0 < lo <= hi:
            raise ValueError(f"Invalid scale extent {self.scale_extent}")
