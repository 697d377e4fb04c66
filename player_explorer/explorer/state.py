"""Interaction state for the scatter explorer, separated from any UI.

:class:`ExplorerState` owns the hover, selection and zoom state and every
value derived from them.  Separating it from the Dash layer makes it
testable without a browser and keeps a single owner for the mutable parts.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Sequence

from loguru import logger

from ..config import ExplorerConfig
from ..entities import (
    DEFAULT_METRIC,
    DEFAULT_VIEW,
    Entity,
    EntityStore,
    axis_config,
)
from ..filtering import FilterPredicate, filter_entities, matches_search, plottable
from ..scales import IDENTITY, CoordinateMapper, ZoomTransform
from ..stats import correlation, mean, regression_line
from ..visualization.colors import MUTED_FILL, category_color

ACCENT = "#ff6b6b"
WHITE = "#ffffff"


class Tier(str, Enum):
    """Visual precedence tiers, highest first."""

    SELECTED = "selected"
    SIMILAR = "similar"
    HOVERED = "hovered"
    SEARCH_MUTED = "search_muted"
    DEFAULT = "default"


@dataclass(frozen=True)
class PointStyle:
    tier: Tier
    radius: float
    opacity: float
    fill: str
    stroke: str | None
    stroke_width: float


@dataclass(frozen=True)
class SelectionState:
    """Primary selection plus the names of its similar entities."""

    primary: str | None = None
    similar: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_idle(self) -> bool:
        return self.primary is None


@dataclass(frozen=True)
class HoverState:
    name: str | None = None


IDLE = SelectionState()
UNHOVERED = HoverState()


@dataclass(frozen=True)
class Connector:
    """Line from the primary selection to one similar entity, in pixels."""

    source: str
    target: str
    start: tuple[float, float]
    end: tuple[float, float]


@dataclass(frozen=True)
class TooltipPayload:
    name: str
    category: str
    group: str
    x_label: str
    x_value: float
    y_label: str
    y_value: float
    extra: dict = field(default_factory=dict)
    pinned: bool = False


def is_similar(
    candidate: Entity,
    primary: Entity,
    y_key: str,
    threshold: float = 0.2,
) -> bool:
    """Same position or team, and within *threshold* relative difference on *y_key*.

    A zero primary value only matches candidates that are also zero.
    """
    if candidate.name == primary.name:
        return False
    p_val, d_val = candidate.value(y_key), primary.value(y_key)
    if p_val is None or d_val is None:
        return False
    if candidate.category != primary.category and candidate.group != primary.group:
        return False
    if d_val == 0:
        return p_val == 0
    return abs(p_val - d_val) / abs(d_val) < threshold


def similar_names(
    primary: Entity,
    candidates: Iterable[Entity],
    y_key: str,
    threshold: float = 0.2,
) -> frozenset[str]:
    return frozenset(
        c.name for c in candidates if is_similar(c, primary, y_key, threshold)
    )


class ExplorerState:
    """Pure-data state machine behind the scatter plot.

    Parameters
    ----------
    store : EntityStore or iterable of Entity
        The loaded dataset.  Never mutated.
    config : ExplorerConfig, optional
        Plot geometry and thresholds.
    """

    def __init__(
        self,
        store: EntityStore | Iterable[Entity],
        config: ExplorerConfig | None = None,
    ) -> None:
        self.store = store if isinstance(store, EntityStore) else EntityStore(store)
        self.config = config or ExplorerConfig()
        self.width = self.config.width
        self.height = self.config.height

        self.predicate = FilterPredicate(threshold_key=self.config.threshold_key)
        self.view = DEFAULT_VIEW
        self.metric = DEFAULT_METRIC
        self.search_term = ""
        self.selection = IDLE
        self.hover = UNHOVERED

        self._rebuild()

    # ------------------------------------------------------------------ #
    #  Derived data
    # ------------------------------------------------------------------ #

    def _rebuild(self) -> None:
        """Recompute subset, statistics and base scales; reset the zoom."""
        self.axis = axis_config(self.view, self.metric)
        self.filtered = filter_entities(self.store, self.predicate)
        self.plotted = plottable(self.filtered, self.axis)
        self._plotted_by_name = {e.name: e for e in self.plotted}

        x_key, y_key = self.axis.x_key, self.axis.y_key
        points = [(e.value(x_key), e.value(y_key)) for e in self.plotted]
        self.regression = regression_line(points)
        self.correlation = correlation(points)
        if self.plotted:
            self.x_mean = mean(p[0] for p in points)
            self.y_mean = mean(p[1] for p in points)
        else:
            self.x_mean = self.y_mean = None

        self.mapper = CoordinateMapper.build(
            self.plotted, self.axis, self.width, self.height,
            scale_extent=self.config.scale_extent,
        )

        if self.hover.name is not None and self.hover.name not in self._plotted_by_name:
            self.hover = UNHOVERED
        primary = self.selection.primary
        if primary is not None and primary not in self._plotted_by_name:
            logger.debug("Selection '{}' left the plotted subset; clearing", primary)
            self.selection = IDLE
        elif primary is not None:
            self.selection = self._selection_for(self._plotted_by_name[primary])

        logger.debug(
            "Rebuilt scatter: {}/{} filtered, {} plotted ({} vs {})",
            len(self.filtered), len(self.store), len(self.plotted), x_key, y_key,
        )

    def _selection_for(self, primary: Entity) -> SelectionState:
        return SelectionState(
            primary=primary.name,
            similar=similar_names(
                primary, self.plotted, self.axis.y_key,
                self.config.similarity_threshold,
            ),
        )

    def _require_plotted(self, name: str) -> Entity:
        try:
            return self._plotted_by_name[name]
        except KeyError:
            raise KeyError(f"'{name}' is not a plotted point") from None

    def is_plotted(self, name: str) -> bool:
        return name in self._plotted_by_name

    @property
    def transform(self) -> ZoomTransform:
        return self.mapper.transform

    # ------------------------------------------------------------------ #
    #  Inputs from the surrounding controls
    # ------------------------------------------------------------------ #

    def set_filter(self, predicate: FilterPredicate) -> None:
        if predicate == self.predicate:
            return
        self.predicate = predicate
        self._rebuild()

    def update_filter(self, **changes) -> None:
        """Replace individual clauses, e.g. ``update_filter(category="G")``."""
        if "name_allowlist" in changes:
            changes["name_allowlist"] = frozenset(changes["name_allowlist"] or ())
        self.set_filter(replace(self.predicate, **changes))

    def set_axis(self, view: str | None = None, metric: str | None = None) -> None:
        view = view or self.view
        metric = metric or self.metric
        if (view, metric) == (self.view, self.metric):
            return
        # validate before mutating
        axis_config(view, metric)
        self.view, self.metric = view, metric
        self._rebuild()

    def set_search_term(self, term: str | None) -> None:
        """Search only changes styling; scales and subset are untouched."""
        self.search_term = term or ""

    def set_viewport(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Plot area must be positive, got {width}x{height}")
        if (width, height) == (self.width, self.height):
            return
        self.width, self.height = float(width), float(height)
        self._rebuild()

    def reset(self) -> None:
        """Restore defaults: identity zoom, no selection or hover, default filters."""
        self.selection = IDLE
        self.hover = UNHOVERED
        self.search_term = ""
        self.predicate = FilterPredicate(threshold_key=self.config.threshold_key)
        self.view = DEFAULT_VIEW
        self.metric = DEFAULT_METRIC
        self._rebuild()
        logger.debug("Explorer reset")

    # ------------------------------------------------------------------ #
    #  Pointer gestures
    # ------------------------------------------------------------------ #

    def hover_enter(self, name: str) -> bool:
        """Pointer entered a point.  Returns True if the hover changed."""
        self._require_plotted(name)
        if self.hover.name == name:
            return False
        self.hover = HoverState(name)
        return True

    def hover_leave(self) -> bool:
        if self.hover.name is None:
            return False
        self.hover = UNHOVERED
        return True

    def click_point(self, name: str) -> SelectionState:
        """Toggle or replace the primary selection."""
        entity = self._require_plotted(name)
        if self.selection.primary == name:
            self.selection = IDLE
            logger.debug("Deselected '{}'", name)
        else:
            self.selection = self._selection_for(entity)
            logger.debug(
                "Selected '{}' with {} similar", name, len(self.selection.similar)
            )
        return self.selection

    def click_background(self) -> SelectionState:
        self.selection = IDLE
        return self.selection

    def zoom_to(self, transform: ZoomTransform) -> ZoomTransform:
        """Apply *transform* after clamping; returns the clamped transform."""
        self.mapper = self.mapper.with_transform(transform)
        return self.mapper.transform

    def wheel(
        self,
        delta_y: float,
        pointer: Sequence[float] | None = None,
    ) -> ZoomTransform:
        """Zoom by a pixel wheel delta about *pointer* (default: plot centre)."""
        if pointer is None:
            pointer = (self.width / 2, self.height / 2)
        factor = 2 ** (-delta_y * self.config.wheel_step)
        return self.zoom_to(self.transform.scaled_about(factor, pointer))

    def drag(self, dx: float, dy: float) -> ZoomTransform:
        return self.zoom_to(self.transform.translated(dx, dy))

    def fit_viewport(
        self,
        x_range: Sequence[float],
        y_range: Sequence[float],
    ) -> ZoomTransform:
        """Zoom so the given window of the current view fills the plot."""
        target = self.transform.fit_viewport(x_range, y_range, self.width, self.height)
        return self.zoom_to(target)

    def reset_zoom(self) -> ZoomTransform:
        return self.zoom_to(IDENTITY)

    # ------------------------------------------------------------------ #
    #  Derived visuals
    # ------------------------------------------------------------------ #

    def style_for(self, entity: Entity) -> PointStyle:
        """Exactly one precedence tier per point."""
        name = entity.name
        fill = category_color(entity.category)
        if name == self.selection.primary:
            return PointStyle(Tier.SELECTED, 9, 1.0, fill, ACCENT, 2.5)
        if name in self.selection.similar:
            return PointStyle(Tier.SIMILAR, 7, 1.0, fill, WHITE, 1.5)
        if name == self.hover.name:
            return PointStyle(Tier.HOVERED, 8, 1.0, fill, WHITE, 2.0)
        if not matches_search(entity, self.search_term):
            return PointStyle(Tier.SEARCH_MUTED, 6, 0.3, MUTED_FILL, None, 1.0)
        return PointStyle(Tier.DEFAULT, 6, 0.7, fill, None, 1.0)

    def connectors(self) -> list[Connector]:
        """Lines from the primary selection to each similar entity."""
        if self.selection.is_idle:
            return []
        primary = self._plotted_by_name[self.selection.primary]
        start = self.mapper.project(primary)
        return [
            Connector(primary.name, e.name, start, self.mapper.project(e))
            for e in self.plotted
            if e.name in self.selection.similar
        ]

    def tooltip(self) -> TooltipPayload | None:
        """Hovered entity if any, else the pinned selection, else ``None``."""
        if self.hover.name is not None:
            entity = self._plotted_by_name[self.hover.name]
            return self._payload(entity, {
                "Minutes/Game": entity.value("MPG"),
                "Games Played": entity.value("GP"),
            })
        if self.selection.primary is not None:
            entity = self._plotted_by_name[self.selection.primary]
            return self._payload(
                entity, {"Similar players": len(self.selection.similar)}, pinned=True,
            )
        return None

    def _payload(self, entity: Entity, extra: dict, pinned: bool = False) -> TooltipPayload:
        return TooltipPayload(
            name=entity.name,
            category=entity.category,
            group=entity.group,
            x_label=self.axis.x_label,
            x_value=entity.value(self.axis.x_key),
            y_label=self.axis.y_label,
            y_value=entity.value(self.axis.y_key),
            extra=extra,
            pinned=pinned,
        )
