"""Linear scales, zoom transforms and the scatter-plot coordinate mapper.

The zoom semantics follow d3-zoom: a transform ``(k, x, y)`` maps a base
pixel position ``p`` to ``p * k + (x, y)``, and ``rescale_x`` derives a new
scale whose domain is the data window currently visible.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from functools import cached_property
from typing import Iterable, Sequence

import numpy as np

from .entities import AxisConfig, Entity

SCALE_EXTENT = (1.0, 8.0)

# sqrt(50), sqrt(10), sqrt(2): thresholds for 10/5/2 tick multiples
_E10, _E5, _E2 = math.sqrt(50), math.sqrt(10), math.sqrt(2)


def _nice_step(start: float, stop: float, count: int) -> float:
    step = (stop - start) / max(count, 1)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    return factor * 10 ** power


@dataclass(frozen=True)
class LinearScale:
    """Map a continuous ``domain`` linearly onto a pixel ``range``."""

    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value):
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            # degenerate domain maps everything to the middle of the range
            mid = (r0 + r1) / 2
            return np.full(np.shape(value), mid) if np.ndim(value) else mid
        t = (np.asarray(value, dtype=float) - d0) / (d1 - d0)
        out = r0 + t * (r1 - r0)
        return out if np.ndim(out) else float(out)

    def invert(self, pixel):
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0:
            return (d0 + d1) / 2
        t = (np.asarray(pixel, dtype=float) - r0) / (r1 - r0)
        out = d0 + t * (d1 - d0)
        return out if np.ndim(out) else float(out)

    def ticks(self, count: int = 10) -> list[float]:
        """Round-numbered tick values inside the domain."""
        lo, hi = sorted(self.domain)
        if lo == hi:
            return [lo]
        step = _nice_step(lo, hi, count)
        first = math.ceil(lo / step - 1e-9)
        last = math.floor(hi / step + 1e-9)
        return [round(i * step, 10) for i in range(first, last + 1)]


@dataclass(frozen=True)
class ZoomTransform:
    """Uniform scale ``k`` followed by a translation ``(x, y)`` in pixels."""

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    @property
    def is_identity(self) -> bool:
        return self.k == 1.0 and self.x == 0.0 and self.y == 0.0

    def apply(self, point: Sequence[float]) -> tuple[float, float]:
        return (point[0] * self.k + self.x, point[1] * self.k + self.y)

    def invert(self, point: Sequence[float]) -> tuple[float, float]:
        return ((point[0] - self.x) / self.k, (point[1] - self.y) / self.k)

    def invert_x(self, px: float) -> float:
        return (px - self.x) / self.k

    def invert_y(self, py: float) -> float:
        return (py - self.y) / self.k

    def rescale_x(self, scale: LinearScale) -> LinearScale:
        domain = tuple(float(scale.invert(self.invert_x(r))) for r in scale.range)
        return LinearScale(domain=domain, range=scale.range)

    def rescale_y(self, scale: LinearScale) -> LinearScale:
        domain = tuple(float(scale.invert(self.invert_y(r))) for r in scale.range)
        return LinearScale(domain=domain, range=scale.range)

    def scaled_about(self, factor: float, point: Sequence[float]) -> "ZoomTransform":
        """Multiply ``k`` by *factor*, keeping the content under *point* fixed."""
        k1 = self.k * factor
        px, py = point
        return ZoomTransform(
            k=k1,
            x=px - (px - self.x) * k1 / self.k,
            y=py - (py - self.y) * k1 / self.k,
        )

    def translated(self, dx: float, dy: float) -> "ZoomTransform":
        return ZoomTransform(k=self.k, x=self.x + dx, y=self.y + dy)

    def constrain(
        self,
        width: float,
        height: float,
        scale_extent: tuple[float, float] = SCALE_EXTENT,
    ) -> "ZoomTransform":
        """Clamp ``k`` to *scale_extent* and keep the view inside the plot area.

        When ``k`` is clamped, the scale is re-centred on the middle of the
        plot area before the translation is bounded.
        """
        lo, hi = scale_extent
        k = min(max(self.k, lo), hi)
        t = self if k == self.k else self.scaled_about(k / self.k, (width / 2, height / 2))
        x = min(max(t.x, width * (1 - k)), 0.0)
        y = min(max(t.y, height * (1 - k)), 0.0)
        return ZoomTransform(k=k, x=x + 0.0, y=y + 0.0)

    def fit_viewport(
        self,
        x_range: Sequence[float],
        y_range: Sequence[float],
        width: float,
        height: float,
    ) -> "ZoomTransform":
        """Compose a follow-up zoom that fills the plot with a window of the current view.

        Parameters
        ----------
        x_range, y_range : pair of float
            Window in current pixel coordinates (either order).
        width, height : float
            Plot-area size in pixels.
        """
        x0, x1 = sorted(float(v) for v in x_range)
        y0, y1 = sorted(float(v) for v in y_range)
        if x1 - x0 <= 0 or y1 - y0 <= 0:
            return self
        # uniform zoom: geometric mean of the two axis ratios
        s = math.sqrt((width / (x1 - x0)) * (height / (y1 - y0)))
        return ZoomTransform(
            k=self.k * s,
            x=(self.x - x0) * s,
            y=(self.y - y0) * s,
        )


IDENTITY = ZoomTransform()


def _upper_bound(values: Iterable[float | None]) -> float:
    observed = [v for v in values if v is not None]
    top = max(observed) if observed else 0.0
    return top if top != 0 else 1.0


@dataclass(frozen=True)
class CoordinateMapper:
    """Base scales for one (subset, axis pair) plus the active zoom.

    Base scales are only rebuilt via :meth:`build`; zoom changes go through
    :meth:`with_transform`, which shares them.
    """

    axis: AxisConfig
    base_x: LinearScale
    base_y: LinearScale
    width: float
    height: float
    transform: ZoomTransform = IDENTITY
    scale_extent: tuple[float, float] = SCALE_EXTENT

    @classmethod
    def build(
        cls,
        entities: Iterable[Entity],
        axis: AxisConfig,
        width: float,
        height: float,
        scale_extent: tuple[float, float] = SCALE_EXTENT,
    ) -> "CoordinateMapper":
        """Domains ``[0, max]`` over *entities*; ranges ``[0, w]`` and ``[h, 0]``."""
        entities = list(entities)
        x_max = _upper_bound(e.value(axis.x_key) for e in entities)
        y_max = _upper_bound(e.value(axis.y_key) for e in entities)
        return cls(
            axis=axis,
            base_x=LinearScale(domain=(0.0, x_max), range=(0.0, float(width))),
            base_y=LinearScale(domain=(0.0, y_max), range=(float(height), 0.0)),
            width=float(width),
            height=float(height),
            scale_extent=scale_extent,
        )

    def with_transform(self, transform: ZoomTransform) -> "CoordinateMapper":
        """Return a mapper using *transform*, clamped to the plot area."""
        clamped = transform.constrain(self.width, self.height, self.scale_extent)
        return replace(self, transform=clamped)

    @cached_property
    def x(self) -> LinearScale:
        if self.transform.is_identity:
            return self.base_x
        return self.transform.rescale_x(self.base_x)

    @cached_property
    def y(self) -> LinearScale:
        if self.transform.is_identity:
            return self.base_y
        return self.transform.rescale_y(self.base_y)

    def project(self, entity: Entity) -> tuple[float, float]:
        """Pixel position of *entity* under the current zoom.

        Raises
        ------
        ValueError
            If the entity lacks a value for either axis key.
        """
        x_val = entity.value(self.axis.x_key)
        y_val = entity.value(self.axis.y_key)
        if x_val is None or y_val is None:
            raise ValueError(
                f"'{entity.name}' has no value for {self.axis.x_key}/{self.axis.y_key}"
            )
        return float(self.x(x_val)), float(self.y(y_val))

    def project_point(self, x_val: float, y_val: float) -> tuple[float, float]:
        return float(self.x(x_val)), float(self.y(y_val))

    def x_ticks(self, count: int = 10) -> list[tuple[float, float]]:
        """``(value, pixel)`` pairs for the current x axis."""
        return [(v, float(self.x(v))) for v in self.x.ticks(count)]

    def y_ticks(self, count: int = 10) -> list[tuple[float, float]]:
        return [(v, float(self.y(v))) for v in self.y.ticks(count)]
