"""Project explorer state onto drawable attributes.

:func:`build_scene` is a pure function of an :class:`ExplorerState` (and
optionally the previously drawn frame, to derive enter/exit transitions).
Renderers only draw what a :class:`SceneFrame` says.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ..scales import ZoomTransform
from .state import ACCENT, Tier

if TYPE_CHECKING:
    from .state import ExplorerState

# Transition durations (ms)
DATA_DURATION = 1000
SELECT_DURATION = 400
HOVER_DURATION = 200
ZOOM_DURATION = 50

MEAN_LINE_COLOR = "#dddddd"


@dataclass(frozen=True)
class PointVisual:
    name: str
    x: float
    y: float
    radius: float
    fill: str
    opacity: float
    stroke: str | None
    stroke_width: float
    tier: Tier


@dataclass(frozen=True)
class Segment:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float = 1.0
    opacity: float = 1.0
    dash: str | None = None


@dataclass(frozen=True)
class TextLabel:
    x: float
    y: float
    text: str


@dataclass(frozen=True)
class PointTransition:
    """Advisory animation for one point; never awaited by logic."""

    name: str
    kind: str  # "enter", "exit" or "update"
    from_radius: float
    to_radius: float
    duration_ms: int


@dataclass(frozen=True)
class SceneFrame:
    width: float
    height: float
    title: str
    x_label: str
    y_label: str
    points: tuple[PointVisual, ...]
    exiting: tuple[PointVisual, ...]
    mean_lines: tuple[Segment, ...]
    regression: Segment | None
    connectors: tuple[Segment, ...]
    quadrant_labels: tuple[TextLabel, ...]
    correlation_label: str | None
    x_ticks: tuple[tuple[float, float], ...]
    y_ticks: tuple[tuple[float, float], ...]
    transitions: tuple[PointTransition, ...]
    transform: ZoomTransform
    selection_key: tuple

    def point(self, name: str) -> PointVisual | None:
        for p in self.points:
            if p.name == name:
                return p
        return None


def _duration(state: ExplorerState, previous: SceneFrame | None, names: set[str]) -> int:
    if previous is None or names != {p.name for p in previous.points}:
        return DATA_DURATION
    if previous.transform != state.transform:
        return ZOOM_DURATION
    if previous.selection_key != _selection_key(state):
        return SELECT_DURATION
    return HOVER_DURATION


def _selection_key(state: ExplorerState) -> tuple:
    return (state.selection.primary, tuple(sorted(state.selection.similar)))


def build_scene(state: ExplorerState, previous: SceneFrame | None = None) -> SceneFrame:
    """Compute every drawable attribute for the current state.

    Parameters
    ----------
    state : ExplorerState
        Source of subset, mapper, statistics and interaction state.
    previous : SceneFrame, optional
        Last frame drawn.  Points present there but not now are returned in
        ``exiting`` with a zero target radius; new points enter from zero.
    """
    mapper = state.mapper
    axis = state.axis
    w, h = state.width, state.height

    points = []
    for entity in state.plotted:
        px, py = mapper.project(entity)
        style = state.style_for(entity)
        points.append(PointVisual(
            name=entity.name,
            x=px,
            y=py,
            radius=style.radius,
            fill=style.fill,
            opacity=style.opacity,
            stroke=style.stroke,
            stroke_width=style.stroke_width,
            tier=style.tier,
        ))
    # selected and hovered points draw on top
    order = {Tier.SELECTED: 3, Tier.HOVERED: 2, Tier.SIMILAR: 1}
    points.sort(key=lambda p: order.get(p.tier, 0))

    names = {p.name for p in points}
    duration = _duration(state, previous, names)
    previous_points = {p.name: p for p in previous.points} if previous else {}

    transitions = []
    for p in points:
        before = previous_points.get(p.name)
        if before is None:
            transitions.append(PointTransition(p.name, "enter", 0.0, p.radius, duration))
        else:
            transitions.append(
                PointTransition(p.name, "update", before.radius, p.radius, duration)
            )
    exiting = tuple(
        replace(p, radius=0.0)
        for name, p in previous_points.items() if name not in names
    )
    transitions.extend(
        PointTransition(p.name, "exit", previous_points[p.name].radius, 0.0, duration)
        for p in exiting
    )

    mean_lines: tuple[Segment, ...] = ()
    if state.x_mean is not None and state.y_mean is not None:
        mx, my = mapper.project_point(state.x_mean, state.y_mean)
        mean_lines = (
            Segment(mx, 0.0, mx, h, MEAN_LINE_COLOR, dash="4,4"),
            Segment(0.0, my, w, my, MEAN_LINE_COLOR, dash="4,4"),
        )

    regression = None
    if state.regression is not None:
        x1, y1 = mapper.project_point(*state.regression.start)
        x2, y2 = mapper.project_point(*state.regression.end)
        regression = Segment(x1, y1, x2, y2, ACCENT, 3.0, 0.8, "8,4")

    k = state.transform.k
    connectors = tuple(
        Segment(c.start[0], c.start[1], c.end[0], c.end[1], ACCENT, 1.0 / k, 0.3, "3,3")
        for c in state.connectors()
    )

    quadrant_labels = (
        TextLabel(w * 0.25, h * 0.25, f"High {axis.y_label}"),
        TextLabel(w * 0.75, h * 0.25, "Elite Performance"),
        TextLabel(w * 0.25, h * 0.75, "Below Average"),
        TextLabel(w * 0.75, h * 0.75, f"High {axis.x_label}"),
    )

    correlation_label = (
        f"Correlation: {state.correlation:.2f}"
        if state.correlation is not None else None
    )

    return SceneFrame(
        width=w,
        height=h,
        title=axis.title,
        x_label=axis.x_label,
        y_label=axis.y_label,
        points=tuple(points),
        exiting=exiting,
        mean_lines=mean_lines,
        regression=regression,
        connectors=connectors,
        quadrant_labels=quadrant_labels,
        correlation_label=correlation_label,
        x_ticks=tuple(mapper.x_ticks()),
        y_ticks=tuple(mapper.y_ticks()),
        transitions=tuple(transitions),
        transform=state.transform,
        selection_key=_selection_key(state),
    )
