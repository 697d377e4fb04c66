"""All Dash callbacks for the player explorer app."""

from __future__ import annotations

from dash import ALL, Input, Output, State, callback_context, html
from dash.exceptions import PreventUpdate
from loguru import logger

from ..entities import ALL_CATEGORIES, DEFAULT_METRIC, DEFAULT_VIEW
from ..explorer.state import TooltipPayload
from ..filtering import search_suggestions
from .figures import build_bar_figure, build_scatter_figure
from .layout import reset_button_style
from . import theme


def viewport_from_relayout(
    relayout: dict | None,
    width: float,
    height: float,
) -> tuple[list[float], list[float]] | str | None:
    """Translate a plotly ``relayoutData`` event into a pixel window.

    Returns ``"reset"`` for an autorange (double-click), ``None`` when the
    event carries no axis change, else ``(x_range, y_range)``.  An axis the
    event leaves untouched keeps its full extent.
    """
    if not relayout:
        return None
    if relayout.get("xaxis.autorange") or relayout.get("yaxis.autorange"):
        return "reset"

    def _axis(name: str) -> list[float] | None:
        if f"{name}.range" in relayout:
            return [float(v) for v in relayout[f"{name}.range"]]
        lo, hi = relayout.get(f"{name}.range[0]"), relayout.get(f"{name}.range[1]")
        if lo is None or hi is None:
            return None
        return [float(lo), float(hi)]

    x_range, y_range = _axis("xaxis"), _axis("yaxis")
    if x_range is None and y_range is None:
        return None
    return x_range or [0.0, width], y_range or [0.0, height]


def _fmt(value: float | None) -> str:
    return "–" if value is None else f"{value:.1f}"


def tooltip_children(payload: TooltipPayload | None):
    """Tooltip panel content for *payload*."""
    if payload is None:
        return html.Span("Hover or click a point", style={"color": theme.FAINT_TEXT})
    rows = [
        html.Div(payload.name, style={"fontWeight": "700", "fontSize": "14px"}),
        html.Div(f"{payload.group} | {payload.category}",
                 style={"fontSize": "12px", "marginBottom": "6px"}),
        html.Div([html.Strong(f"{payload.x_label}: "), _fmt(payload.x_value)]),
        html.Div([html.Strong(f"{payload.y_label}: "), _fmt(payload.y_value)]),
    ]
    for label, value in payload.extra.items():
        text = str(value) if isinstance(value, int) else _fmt(value)
        rows.append(html.Div([html.Strong(f"{label}: "), text], style={"fontSize": "12px"}))
    if payload.pinned:
        rows.append(html.Div("Pinned", style={"color": theme.ACCENT, "fontSize": "11px"}))
    return rows


def register(app):
    """Register all callbacks on the Dash app instance."""

    # ------------------------------------------------------------------ #
    #  Figures
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("scatter-graph", "figure"),
        Output("bar-graph", "figure"),
        Output("tooltip-panel", "children"),
        Output("status-bar", "children"),
        Output("active-filters", "children"),
        Output("reset-btn", "style"),
        Input("player-select", "value"),
        Input("search-term", "value"),
        Input("metric-select", "value"),
        Input("view-select", "value"),
        Input("position-select", "value"),
        Input("min-minutes", "value"),
        Input("bar-graph", "hoverData"),
        Input("figure-trigger", "data"),
    )
    def update_figures(
        allowlist, search_term, metric, view, position, min_minutes,
        bar_hover, figure_trigger,
    ):
        from .app import state
        if state is None:
            raise PreventUpdate

        ex = state.explorer
        ex.update_filter(
            category=position or ALL_CATEGORIES,
            min_threshold=float(min_minutes or 0),
            name_allowlist=allowlist or (),
        )
        ex.set_axis(view or DEFAULT_VIEW, metric or DEFAULT_METRIC)
        ex.set_search_term(search_term)

        state.hovered_bar = (
            bar_hover["points"][0].get("x") if bar_hover and bar_hover.get("points") else None
        )

        frame = state.render_scene()
        scatter = build_scatter_figure(frame)
        bars = build_bar_figure(state.bar_view(), hovered=state.hovered_bar)

        n_plotted, n_total = len(ex.plotted), len(ex.store)
        if n_plotted < n_total:
            status = f"{n_plotted:,} / {n_total:,} players plotted"
        else:
            status = f"{n_total:,} players plotted"

        active = list(ex.predicate.active_clauses)
        if ex.metric != DEFAULT_METRIC:
            active.append("metric")
        if ex.view != DEFAULT_VIEW:
            active.append("view")
        badges = []
        if active:
            badges = [html.Span("Active filters: ")] + [
                html.Span(
                    name.capitalize(),
                    style={"backgroundColor": theme.BADGE_COLORS[name],
                           "padding": "2px 8px", "borderRadius": "4px",
                           "marginRight": "4px"},
                )
                for name in active
            ]

        return (
            scatter, bars, tooltip_children(ex.tooltip()), status, badges,
            reset_button_style(active=bool(active)),
        )

    # ------------------------------------------------------------------ #
    #  Pointer gestures on the scatter
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("scatter-graph", "hoverData"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_hover(hover_data, trigger):
        from .app import state
        if state is None:
            raise PreventUpdate

        ex = state.explorer
        name = None
        if hover_data and hover_data.get("points"):
            name = hover_data["points"][0].get("customdata")
        if name is not None and ex.is_plotted(name):
            changed = ex.hover_enter(name)
        else:
            changed = ex.hover_leave()
        if not changed:
            raise PreventUpdate
        return (trigger or 0) + 1

    @app.callback(
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("scatter-graph", "clickData"),
        Input("clear-selection-btn", "n_clicks"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_click(click_data, clear_clicks, trigger):
        from .app import state
        if state is None:
            raise PreventUpdate

        ex = state.explorer
        trigger_id = callback_context.triggered[0]["prop_id"].split(".")[0]
        if trigger_id == "clear-selection-btn":
            ex.click_background()
            return (trigger or 0) + 1

        if not click_data or not click_data.get("points"):
            raise PreventUpdate
        name = click_data["points"][0].get("customdata")
        if name is None or not ex.is_plotted(name):
            raise PreventUpdate
        ex.click_point(name)
        return (trigger or 0) + 1

    @app.callback(
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("scatter-graph", "relayoutData"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_relayout(relayout, trigger):
        from .app import state
        if state is None:
            raise PreventUpdate

        ex = state.explorer
        window = viewport_from_relayout(relayout, ex.width, ex.height)
        if window is None:
            raise PreventUpdate
        before = ex.transform
        if window == "reset":
            ex.reset_zoom()
        else:
            ex.fit_viewport(*window)
        logger.debug("Zoom {} -> {}", before, ex.transform)
        # always redraw: plotly has moved its own axes and must be snapped back
        return (trigger or 0) + 1

    # ------------------------------------------------------------------ #
    #  Search box
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("search-suggestions", "children"),
        Input("search-term", "value"),
        State("player-select", "value"),
    )
    def show_suggestions(term, selected):
        from .app import state
        if state is None:
            raise PreventUpdate

        ex = state.explorer
        hits = search_suggestions(
            ex.store.entities, term, exclude=selected or (),
            limit=ex.config.suggestion_limit,
        )
        return [
            html.Button(
                name,
                id={"type": "suggestion-btn", "index": name},
                className="suggestion-btn",
                style={"display": "block", "width": "100%", "textAlign": "left",
                       "border": "none", "background": theme.PANEL, "padding": "4px 8px"},
            )
            for name in hits
        ]

    @app.callback(
        Output("player-select", "value"),
        Output("search-term", "value"),
        Input("search-term", "n_submit"),
        Input({"type": "suggestion-btn", "index": ALL}, "n_clicks"),
        State("search-term", "value"),
        State("player-select", "value"),
        prevent_initial_call=True,
    )
    def pin_player(n_submit, suggestion_clicks, term, selected):
        from .app import state
        if state is None:
            raise PreventUpdate

        ctx = callback_context
        if not ctx.triggered:
            raise PreventUpdate
        prop_id = ctx.triggered[0]["prop_id"]
        selected = list(selected or [])

        if prop_id.startswith("search-term"):
            hits = search_suggestions(
                state.explorer.store.entities, term, exclude=selected, limit=1,
            )
            if not hits:
                raise PreventUpdate
            name = hits[0]
        else:
            if not ctx.triggered[0]["value"]:
                raise PreventUpdate
            name = ctx.triggered_id["index"]

        if name not in selected:
            selected.append(name)
        return selected, ""

    # ------------------------------------------------------------------ #
    #  Reset
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("player-select", "value", allow_duplicate=True),
        Output("search-term", "value", allow_duplicate=True),
        Output("metric-select", "value"),
        Output("view-select", "value"),
        Output("position-select", "value"),
        Output("min-minutes", "value"),
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("reset-btn", "n_clicks"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def reset_all(n_clicks, trigger):
        from .app import state
        if state is None or not n_clicks:
            raise PreventUpdate

        state.explorer.reset()
        state.hovered_bar = None
        return [], "", DEFAULT_METRIC, DEFAULT_VIEW, ALL_CATEGORIES, 0, (trigger or 0) + 1
