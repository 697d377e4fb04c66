"""Ranked bar chart over the filtered subset."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .entities import VIEWS, Entity, metric_label
from .stats import mean
from .visualization.colors import category_color


@dataclass(frozen=True)
class Bar:
    name: str
    category: str
    group: str
    value: float
    secondary: float | None
    minutes: float | None
    fill: str


@dataclass(frozen=True)
class BarChartView:
    """Everything the bar panel draws."""

    title: str
    primary_metric: str
    primary_label: str
    secondary_metric: str
    secondary_label: str
    bars: tuple[Bar, ...]
    primary_mean: float | None
    secondary_mean: float | None

    @property
    def primary_mean_label(self) -> str | None:
        if self.primary_mean is None:
            return None
        return f"League Average {self.primary_metric}: {self.primary_mean:.1f}"

    @property
    def secondary_mean_label(self) -> str | None:
        if self.secondary_mean is None:
            return None
        return f"League Average {self.secondary_label}: {self.secondary_mean:.1f}"


def rank_entities(
    filtered: Iterable[Entity],
    metric: str,
    allowlist: Iterable[str] = (),
    top_n: int = 10,
) -> list[Entity]:
    """Sort by *metric* descending; ties keep their original order.

    With a non-empty *allowlist* every listed entity is kept, otherwise only
    the first *top_n*.  Entities without a value for *metric* are skipped.
    """
    allow = set(allowlist)
    candidates = [
        e for e in filtered
        if e.value(metric) is not None and (not allow or e.name in allow)
    ]
    ranked = sorted(candidates, key=lambda e: -e.value(metric))
    return ranked if allow else ranked[:top_n]


def _mean_of(entities: Sequence[Entity], key: str) -> float | None:
    values = [v for v in (e.value(key) for e in entities) if v is not None]
    return mean(values) if values else None


def build_bar_view(
    filtered: Sequence[Entity],
    view: str,
    metric: str,
    allowlist: Iterable[str] = (),
    top_n: int = 10,
) -> BarChartView:
    """Assemble the bar panel for *view* ranked on *metric*.

    Means are taken over the whole filtered subset, not only the bars shown.
    """
    try:
        config = VIEWS[view]
    except KeyError:
        raise ValueError(f"Unknown view '{view}'") from None
    secondary = config.secondary_metric

    bars = tuple(
        Bar(
            name=e.name,
            category=e.category,
            group=e.group,
            value=e.value(metric),
            secondary=e.value(secondary),
            minutes=e.value("MPG"),
            fill=category_color(e.category),
        )
        for e in rank_entities(filtered, metric, allowlist, top_n)
    )
    return BarChartView(
        title=f"{config.bar_title} - Top Players by {metric}",
        primary_metric=metric,
        primary_label=metric_label(metric),
        secondary_metric=secondary,
        secondary_label=metric_label(secondary),
        bars=bars,
        primary_mean=_mean_of(filtered, metric),
        secondary_mean=_mean_of(filtered, secondary),
    )
