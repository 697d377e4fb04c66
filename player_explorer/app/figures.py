"""Draw scene frames and bar views as plotly figures.

The scatter is drawn in pixel space (``[0, width] x [height, 0]``) exactly
as the :class:`SceneFrame` positions it; tick labels carry the data values.
"""

from __future__ import annotations

import plotly.graph_objects as go

from ..bar_chart import BarChartView
from ..explorer.scene import SceneFrame, Segment
from ..visualization.colors import rgba
from . import theme

_TRANSPARENT = "rgba(0,0,0,0)"


def _dash(pattern: str | None) -> str:
    """``'4,4'`` -> ``'4px,4px'``"""
    if not pattern:
        return "solid"
    return ",".join(f"{p.strip()}px" for p in pattern.split(","))


def _line_shape(seg: Segment) -> dict:
    return dict(
        type="line",
        xref="x", yref="y",
        x0=seg.x1, y0=seg.y1, x1=seg.x2, y1=seg.y2,
        line=dict(color=rgba(seg.stroke, seg.opacity), width=seg.stroke_width,
                  dash=_dash(seg.dash)),
        layer="below",
    )


def _fmt_tick(value: float) -> str:
    return f"{value:g}"


def build_scatter_figure(frame: SceneFrame) -> go.Figure:
    """Build the scatter figure for *frame*.

    Parameters
    ----------
    frame : SceneFrame
        Output of :func:`~player_explorer.explorer.scene.build_scene`.

    Returns
    -------
    go.Figure
    """
    fig = go.Figure()
    points = frame.points

    fig.add_trace(go.Scatter(
        x=[p.x for p in points],
        y=[p.y for p in points],
        mode="markers",
        name="Players",
        showlegend=False,
        ids=[p.name for p in points],
        customdata=[p.name for p in points],
        hoverinfo="none",
        marker=dict(
            size=[2 * p.radius for p in points],
            color=[p.fill for p in points],
            opacity=[p.opacity for p in points],
            line=dict(
                color=[p.stroke or _TRANSPARENT for p in points],
                width=[p.stroke_width if p.stroke else 0 for p in points],
            ),
        ),
    ))
    # points that left the subset, drawn at radius 0 so plotly shrinks them out
    exiting = frame.exiting
    fig.add_trace(go.Scatter(
        x=[p.x for p in exiting],
        y=[p.y for p in exiting],
        mode="markers",
        name="Exiting",
        showlegend=False,
        ids=[p.name for p in exiting],
        customdata=[p.name for p in exiting],
        hoverinfo="skip",
        marker=dict(
            size=[2 * p.radius for p in exiting],
            color=[p.fill for p in exiting],
            opacity=[p.opacity for p in exiting],
        ),
    ))

    shapes = [_line_shape(s) for s in frame.mean_lines]
    shapes += [_line_shape(s) for s in frame.connectors]
    if frame.regression is not None:
        shapes.append(_line_shape(frame.regression))

    annotations = [
        dict(x=lbl.x, y=lbl.y, xref="x", yref="y", text=lbl.text,
             showarrow=False, font=dict(size=10, color=theme.FAINT_TEXT))
        for lbl in frame.quadrant_labels
    ]
    if frame.correlation_label is not None:
        annotations.append(dict(
            x=10, y=10, xref="x", yref="y", xanchor="left", yanchor="top",
            text=frame.correlation_label, showarrow=False,
            font=dict(size=12, color=theme.MUTED_TEXT),
        ))

    duration = max((t.duration_ms for t in frame.transitions), default=0)
    fig.update_layout(
        title=dict(text=f"<b>{frame.title}</b>", x=0.5, font=dict(size=16, color=theme.TEXT)),
        width=frame.width + theme.MARGIN["l"] + theme.MARGIN["r"],
        height=frame.height + theme.MARGIN["t"] + theme.MARGIN["b"],
        margin=theme.MARGIN,
        dragmode="pan",
        hovermode="closest",
        paper_bgcolor=theme.BACKGROUND,
        plot_bgcolor=theme.BACKGROUND,
        font=dict(family=theme.FONT_STACK, size=11, color=theme.MUTED_TEXT),
        shapes=shapes,
        annotations=annotations,
        transition=dict(duration=duration, easing="cubic-in-out"),
        xaxis=dict(
            range=[0, frame.width],
            tickvals=[px for _, px in frame.x_ticks],
            ticktext=[_fmt_tick(v) for v, _ in frame.x_ticks],
            title=frame.x_label,
            showgrid=False,
            zeroline=False,
            showline=True,
            linecolor=theme.BORDER,
        ),
        yaxis=dict(
            range=[frame.height, 0],
            tickvals=[py for _, py in frame.y_ticks],
            ticktext=[_fmt_tick(v) for v, _ in frame.y_ticks],
            title=frame.y_label,
            showgrid=False,
            zeroline=False,
            showline=True,
            linecolor=theme.BORDER,
        ),
    )
    return fig


def build_bar_figure(view: BarChartView, hovered: str | None = None) -> go.Figure:
    """Ranked bars on the primary metric with the secondary metric as a line."""
    fig = go.Figure()
    names = [b.name for b in view.bars]

    fig.add_trace(go.Bar(
        x=names,
        y=[b.value for b in view.bars],
        name=view.primary_label,
        showlegend=False,
        customdata=[
            [b.group, b.category, b.minutes if b.minutes is not None else float("nan")]
            for b in view.bars
        ],
        hovertemplate=(
            "<b>%{x}</b><br>%{customdata[0]} | %{customdata[1]}"
            + f"<br>{view.primary_label}: " + "%{y:.1f}"
            + "<br>Minutes per Game: %{customdata[2]:.1f}<extra></extra>"
        ),
        marker=dict(
            color=[b.fill for b in view.bars],
            opacity=[1.0 if b.name == hovered else 0.8 for b in view.bars],
            line=dict(
                color=["#000000" if b.name == hovered else _TRANSPARENT for b in view.bars],
                width=[1 if b.name == hovered else 0 for b in view.bars],
            ),
        ),
    ))
    fig.add_trace(go.Scatter(
        x=names,
        y=[b.secondary for b in view.bars],
        mode="lines",
        name=view.secondary_label,
        yaxis="y2",
        line=dict(color=theme.ACCENT, width=2),
        hoverinfo="skip",
    ))

    shapes, annotations = [], []
    if view.primary_mean is not None:
        shapes.append(dict(
            type="line", xref="paper", yref="y", x0=0, x1=1,
            y0=view.primary_mean, y1=view.primary_mean,
            line=dict(color=rgba(theme.MUTED_TEXT, 0.5), dash="4px,4px"),
        ))
        annotations.append(dict(
            xref="paper", yref="y", x=1, y=view.primary_mean, xanchor="right",
            yanchor="bottom", text=view.primary_mean_label, showarrow=False,
            font=dict(size=10, color=theme.MUTED_TEXT),
        ))
    if view.secondary_mean is not None:
        shapes.append(dict(
            type="line", xref="paper", yref="y2", x0=0, x1=1,
            y0=view.secondary_mean, y1=view.secondary_mean,
            line=dict(color=rgba(theme.ACCENT, 0.5), dash="4px,4px"),
        ))
        annotations.append(dict(
            xref="paper", yref="y2", x=1, y=view.secondary_mean, xanchor="right",
            yanchor="bottom", text=view.secondary_mean_label, showarrow=False,
            font=dict(size=10, color=theme.MUTED_TEXT),
        ))

    fig.update_layout(
        title=dict(text=f"<b>{view.title}</b>", x=0.5, font=dict(size=14, color=theme.TEXT)),
        height=theme.BAR_HEIGHT,
        margin=dict(l=60, r=60, t=50, b=120),
        paper_bgcolor=theme.BACKGROUND,
        plot_bgcolor=theme.BACKGROUND,
        font=dict(family=theme.FONT_STACK, size=11, color=theme.MUTED_TEXT),
        shapes=shapes,
        annotations=annotations,
        transition=dict(duration=1000, easing="cubic-in-out"),
        legend=dict(orientation="h", x=1, xanchor="right", y=1.02, yanchor="bottom",
                    font=dict(size=11)),
        xaxis=dict(title="Player Names", tickangle=-45),
        yaxis=dict(title=view.primary_label, rangemode="tozero", showgrid=False),
        yaxis2=dict(title=view.secondary_label, overlaying="y", side="right",
                    rangemode="tozero", showgrid=False),
    )
    return fig
