"""Dash app factory and server-side state."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from ..bar_chart import BarChartView, build_bar_view
from ..config import ExplorerConfig
from ..entities import EntityStore
from ..explorer.scene import SceneFrame, build_scene
from ..explorer.state import ExplorerState


@dataclass
class ServerState:
    """Mutable server-side state for the single-user Dash app."""

    explorer: ExplorerState
    last_frame: SceneFrame | None = None
    hovered_bar: str | None = None

    def render_scene(self) -> SceneFrame:
        """Project the explorer and remember the frame for the next transition."""
        frame = build_scene(self.explorer, self.last_frame)
        self.last_frame = frame
        return frame

    def bar_view(self) -> BarChartView:
        ex = self.explorer
        return build_bar_view(
            ex.filtered,
            ex.view,
            ex.metric,
            allowlist=ex.predicate.name_allowlist,
            top_n=ex.config.top_n,
        )


# Module-level singleton, set by create_app()
state: ServerState | None = None


def create_app(store: EntityStore, config: ExplorerConfig | None = None) -> "dash.Dash":
    """Create and configure the Dash application.

    Parameters
    ----------
    store : EntityStore
        Loaded players.
    config : ExplorerConfig, optional
        Plot geometry and interaction thresholds.

    Returns
    -------
    dash.Dash
    """
    import dash

    from .layout import build_layout
    from . import callbacks

    global state
    state = ServerState(explorer=ExplorerState(store, config))
    logger.info(
        "Explorer ready: {} players, {} plotted",
        len(store), len(state.explorer.plotted),
    )

    app = dash.Dash(__name__, suppress_callback_exceptions=True)
    app.layout = build_layout(state)
    callbacks.register(app)

    return app
