"""Entity records, the immutable store, and the metric/view catalogue."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping

# Full metric names used for axis labels, tooltips and bar-chart annotations.
METRIC_LABELS: dict[str, str] = {
    "PPG": "Points per Game",
    "RPG": "Rebounds per Game",
    "APG": "Assists per Game",
    "SPG": "Steals per Game",
    "BPG": "Blocks per Game",
    "TS%": "True Shooting Percentage",
    "eFG%": "Effective Field Goal Percentage",
    "USG%": "Usage Rate",
    "VI": "Versatility Index",
    "ORTG": "Offensive Rating",
    "DRTG": "Defensive Rating",
    "P+R": "Points + Rebounds",
    "P+A": "Points + Assists",
    "P+R+A": "Points + Rebounds + Assists",
    "MPG": "Minutes per Game",
    "GP": "Games Played",
}

# Metric dropdown, in display order
METRIC_OPTIONS: list[tuple[str, str]] = [
    ("PPG", "Points per Game"),
    ("TS%", "True Shooting %"),
    ("USG%", "Usage Rate"),
    ("P+R+A", "Points + Rebounds + Assists"),
    ("P+A", "Points + Assists"),
    ("APG", "Assists per Game"),
    ("eFG%", "Effective Field Goal %"),
    ("VI", "Versatility Index"),
    ("RPG", "Rebounds per Game"),
    ("SPG", "Steals per Game"),
    ("BPG", "Blocks per Game"),
]

CATEGORY_LABELS: dict[str, str] = {"G": "Guards", "F": "Forwards", "C": "Centers"}
ALL_CATEGORIES = "ALL"

DEFAULT_VIEW = "scoring"
DEFAULT_METRIC = "PPG"


def metric_label(key: str) -> str:
    """Return the human-readable name of *key*, or *key* itself."""
    return METRIC_LABELS.get(key, key)


@dataclass(frozen=True)
class ViewConfig:
    """One analysis view: a fixed x metric plus titles for both panels."""

    label: str
    x_key: str
    x_label: str
    default_y: str
    title: str
    bar_title: str
    secondary_metric: str


VIEWS: dict[str, ViewConfig] = {
    "scoring": ViewConfig(
        label="Scoring & Creation",
        x_key="USG%",
        x_label="Usage Rate (% of Team Plays)",
        default_y="PPG",
        title="Player Scoring Analysis",
        bar_title="Scoring Impact",
        secondary_metric="USG%",
    ),
    "efficiency": ViewConfig(
        label="Shooting Efficiency",
        x_key="TS%",
        x_label="True Shooting Percentage",
        default_y="eFG%",
        title="Player Efficiency Comparison",
        bar_title="Shooting Efficiency",
        secondary_metric="TS%",
    ),
    "overview": ViewConfig(
        label="Playing Time Impact",
        x_key="MPG",
        x_label="Minutes per Game",
        default_y="VI",
        title="Player Impact Analysis",
        bar_title="Overall Impact",
        secondary_metric="MPG",
    ),
}


@dataclass(frozen=True)
class AxisConfig:
    """The (x, y) metric pair plotted by the scatter, with its labels."""

    x_key: str
    y_key: str
    x_label: str
    y_label: str
    title: str


def axis_config(view: str = DEFAULT_VIEW, metric: str = DEFAULT_METRIC) -> AxisConfig:
    """Build the axis configuration for *view* plotted against *metric*.

    Raises
    ------
    ValueError
        If *view* is not one of :data:`VIEWS` or *metric* is not a key of
        :data:`METRIC_LABELS`.
    """
    try:
        base = VIEWS[view]
    except KeyError:
        raise ValueError(
            f"Unknown view '{view}'. Choose one of {sorted(VIEWS)}."
        ) from None
    if metric not in METRIC_LABELS:
        raise ValueError(
            f"Unknown metric '{metric}'. Choose one of {sorted(METRIC_LABELS)}."
        )
    y_label = metric_label(metric)
    return AxisConfig(
        x_key=base.x_key,
        y_key=metric,
        x_label=base.x_label,
        y_label=y_label,
        title=f"{base.title} vs {y_label}",
    )


@dataclass(frozen=True)
class Entity:
    """A single plotted subject (a player).

    ``metrics`` maps metric keys to numbers; ``None`` marks an absent value.
    """

    name: str
    category: str
    group: str
    metrics: Mapping[str, float | None] = field(default_factory=dict)

    def value(self, key: str) -> float | None:
        """Return the finite value of *key*, or ``None`` when absent."""
        v = self.metrics.get(key)
        if v is None:
            return None
        v = float(v)
        return v if math.isfinite(v) else None

    def has(self, *keys: str) -> bool:
        return all(self.value(k) is not None for k in keys)


class EntityStore:
    """Ordered, immutable collection of entities keyed by unique name."""

    def __init__(self, entities: Iterable[Entity]) -> None:
        self._entities: tuple[Entity, ...] = tuple(entities)
        self._by_name: dict[str, Entity] = {}
        for entity in self._entities:
            if entity.name in self._by_name:
                raise ValueError(f"Duplicate entity name '{entity.name}'")
            self._by_name[entity.name] = entity

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __getitem__(self, name: str) -> Entity:
        return self._by_name[name]

    @property
    def entities(self) -> tuple[Entity, ...]:
        return self._entities

    @property
    def names(self) -> list[str]:
        return [e.name for e in self._entities]

    def get(self, name: str) -> Entity | None:
        return self._by_name.get(name)
