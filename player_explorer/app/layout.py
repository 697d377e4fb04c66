"""Dash layout: filter controls on top, scatter and bar panels side by side.

All controls are always present in the DOM so that callback inputs are
never missing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dash import dcc, html

from ..entities import (
    ALL_CATEGORIES,
    CATEGORY_LABELS,
    DEFAULT_METRIC,
    DEFAULT_VIEW,
    METRIC_OPTIONS,
    VIEWS,
)
from ..visualization.colors import POSITION_COLORS
from . import theme

if TYPE_CHECKING:
    from .app import ServerState


def build_layout(state: ServerState) -> html.Div:
    """Return the complete app layout."""
    names = state.explorer.store.names
    n_players = len(names)

    return html.Div(
        className="dashboard-container",
        style={"fontFamily": theme.FONT_STACK, "color": theme.TEXT, "padding": "16px"},
        children=[
            html.H2(
                "Player Performance Explorer",
                style={"textAlign": "center", "marginBottom": "12px"},
            ),
            # ── Search + reset ──
            html.Div(
                className="ctrl-row",
                style={"display": "flex", "gap": "12px", "alignItems": "flex-start"},
                children=[
                    html.Div(
                        style={"flex": "1"},
                        children=[
                            dcc.Dropdown(
                                id="player-select",
                                options=[{"label": n, "value": n} for n in names],
                                value=[],
                                multi=True,
                                placeholder="Pinned players...",
                            ),
                            dcc.Input(
                                id="search-term",
                                type="text",
                                value="",
                                placeholder="Search players...",
                                debounce=False,
                                style={"width": "100%", "marginTop": "6px"},
                            ),
                            html.Div(id="search-suggestions", className="search-suggestions"),
                        ],
                    ),
                    html.Button(
                        "Reset Filters",
                        id="reset-btn",
                        style=reset_button_style(active=False),
                    ),
                ],
            ),
            # ── Dropdown filters + legend ──
            html.Div(
                className="ctrl-row",
                style={"display": "flex", "flexWrap": "wrap", "gap": "12px",
                       "alignItems": "center", "marginTop": "12px"},
                children=[
                    dcc.Dropdown(
                        id="metric-select",
                        options=[{"label": lbl, "value": key} for key, lbl in METRIC_OPTIONS],
                        value=DEFAULT_METRIC,
                        clearable=False,
                        style={"width": "240px"},
                    ),
                    dcc.Dropdown(
                        id="view-select",
                        options=[{"label": v.label, "value": key} for key, v in VIEWS.items()],
                        value=DEFAULT_VIEW,
                        clearable=False,
                        style={"width": "220px"},
                    ),
                    dcc.Dropdown(
                        id="position-select",
                        options=[{"label": "All Positions", "value": ALL_CATEGORIES}]
                        + [{"label": lbl, "value": code} for code, lbl in CATEGORY_LABELS.items()],
                        value=ALL_CATEGORIES,
                        clearable=False,
                        style={"width": "170px"},
                    ),
                    html.Label("Min MPG:"),
                    dcc.Input(
                        id="min-minutes",
                        type="number",
                        min=0, max=48, value=0,
                        style={"width": "70px"},
                    ),
                    _legend(),
                ],
            ),
            html.Div(id="active-filters", className="active-filters",
                     style={"marginTop": "8px", "fontSize": "13px"}),
            # ── Panels ──
            html.Div(
                style={"display": "flex", "flexWrap": "wrap", "gap": "16px", "marginTop": "12px"},
                children=[
                    html.Div(
                        style={"flex": "1 1 640px"},
                        children=[
                            dcc.Graph(
                                id="scatter-graph",
                                clear_on_unhover=True,
                                config={"scrollZoom": True, "displayModeBar": False,
                                        "doubleClick": "autosize"},
                            ),
                            html.Button("Clear Selection", id="clear-selection-btn",
                                        style={"marginTop": "4px"}),
                        ],
                    ),
                    html.Div(
                        style={"flex": "1 1 480px"},
                        children=[dcc.Graph(id="bar-graph", config={"displayModeBar": False})],
                    ),
                    html.Div(
                        style={"flex": "0 0 240px", "background": theme.PANEL,
                               "border": f"1px solid {theme.BORDER}", "borderRadius": "6px",
                               "padding": "10px"},
                        children=[
                            html.H4("Player", style={"margin": "0 0 6px 0"}),
                            html.Div(id="tooltip-panel", children="Hover or click a point"),
                        ],
                    ),
                ],
            ),
            html.Div(
                id="status-bar",
                className="status-bar",
                style={"marginTop": "8px", "fontSize": "12px", "color": theme.FAINT_TEXT},
                children=f"{n_players:,} players loaded",
            ),
            # ── Hidden stores ──
            dcc.Store(id="figure-trigger", data=0),
        ],
    )


def _legend() -> html.Div:
    items = []
    for code, label in CATEGORY_LABELS.items():
        items.append(html.Div(
            style={"display": "flex", "alignItems": "center", "gap": "4px"},
            children=[
                html.Span(style={"width": "12px", "height": "12px", "borderRadius": "50%",
                                 "backgroundColor": POSITION_COLORS[code],
                                 "display": "inline-block"}),
                html.Span(label, style={"fontSize": "13px", "color": theme.MUTED_TEXT}),
            ],
        ))
    return html.Div(style={"display": "flex", "gap": "12px", "marginLeft": "8px"}, children=items)


def reset_button_style(active: bool) -> dict:
    return {
        "padding": "8px 16px",
        "borderRadius": "6px",
        "border": "none",
        "backgroundColor": theme.RESET_ACTIVE if active else theme.RESET_IDLE,
        "color": "#FFFFFF" if active else theme.MUTED_TEXT,
    }
