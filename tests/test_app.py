"""Tests for the Dash layer: figures, relayout handling and the app factory."""
import pytest

from player_explorer.app import app as app_module
from player_explorer.app import create_app
from player_explorer.app.app import ServerState
from player_explorer.app.callbacks import tooltip_children, viewport_from_relayout
from player_explorer.app.figures import build_bar_figure, build_scatter_figure
from player_explorer.bar_chart import build_bar_view
from player_explorer.explorer.scene import HOVER_DURATION, build_scene


class TestViewportFromRelayout:
    def test_no_event(self):
        assert viewport_from_relayout(None, 500, 300) is None
        assert viewport_from_relayout({"autosize": True}, 500, 300) is None
        assert viewport_from_relayout({"dragmode": "zoom"}, 500, 300) is None

    def test_autorange_resets(self):
        assert viewport_from_relayout(
            {"xaxis.autorange": True, "yaxis.autorange": True}, 500, 300
        ) == "reset"

    def test_indexed_ranges(self):
        event = {
            "xaxis.range[0]": 100, "xaxis.range[1]": 350,
            "yaxis.range[0]": 200, "yaxis.range[1]": 50,
        }
        assert viewport_from_relayout(event, 500, 300) == ([100.0, 350.0], [200.0, 50.0])

    def test_single_axis_keeps_other_extent(self):
        event = {"xaxis.range": [50, 150]}
        assert viewport_from_relayout(event, 500, 300) == ([50.0, 150.0], [0.0, 300])


class TestFigures:
    def test_scatter_figure(self, explorer):
        explorer.click_point("Alpha Guard")
        fig = build_scatter_figure(build_scene(explorer))
        trace = fig.data[0]
        assert set(trace.customdata) == {e.name for e in explorer.plotted}
        assert list(fig.layout.xaxis.range) == [0, 500]
        assert list(fig.layout.yaxis.range) == [300, 0]
        # two mean lines, two connectors, one regression line
        assert len(fig.layout.shapes) == 5
        texts = [a.text for a in fig.layout.annotations]
        assert any(t.startswith("Correlation: ") for t in texts)
        assert "Elite Performance" in texts

    def test_exiting_points_drawn_at_zero_size(self, explorer):
        first = build_scene(explorer)
        explorer.update_filter(category="G")
        fig = build_scatter_figure(build_scene(explorer, first))
        current, exiting = fig.data
        assert set(current.customdata) == {"Alpha Guard", "Beta Guard", "Epsilon Guard"}
        assert set(exiting.ids) == {"Gamma Forward", "Delta Center"}
        assert set(exiting.customdata) == {"Gamma Forward", "Delta Center"}
        assert list(exiting.marker.size) == [0.0, 0.0]

    def test_no_exiting_points_on_first_frame(self, explorer):
        fig = build_scatter_figure(build_scene(explorer))
        assert len(fig.data) == 2
        assert not fig.data[1].x
        assert list(fig.data[0].ids) == list(fig.data[0].customdata)

    def test_scatter_figure_without_correlation(self, explorer):
        explorer.set_axis(view="efficiency", metric="TS%")
        fig = build_scatter_figure(build_scene(explorer))
        assert not fig.data[0].x
        assert not any(a.text.startswith("Correlation") for a in fig.layout.annotations)

    def test_bar_figure(self, players):
        view = build_bar_view(players, "scoring", "PPG")
        fig = build_bar_figure(view, hovered="Beta Guard")
        bars, line = fig.data
        assert list(bars.x)[:2] == ["Epsilon Guard", "Beta Guard"]
        assert line.yaxis == "y2"
        texts = [a.text for a in fig.layout.annotations]
        assert "League Average Usage Rate: 23.6" in texts
        assert list(bars.marker.opacity)[:2] == [0.8, 1.0]


class TestTooltipChildren:
    def test_placeholder(self):
        assert tooltip_children(None).children == "Hover or click a point"

    def test_pinned_payload(self, explorer):
        explorer.click_point("Alpha Guard")
        rows = tooltip_children(explorer.tooltip())
        assert rows[0].children == "Alpha Guard"
        assert rows[-1].children == "Pinned"


class TestServerState:
    def test_render_scene_remembers_frame(self, explorer):
        server = ServerState(explorer=explorer)
        first = server.render_scene()
        assert server.last_frame is first
        second = server.render_scene()
        assert second.transitions[0].duration_ms == HOVER_DURATION

    def test_bar_view_uses_filtered_subset(self, explorer):
        explorer.update_filter(category="C")
        server = ServerState(explorer=explorer)
        assert [b.name for b in server.bar_view().bars] == ["Delta Center"]


@pytest.fixture
def restore_state():
    saved = app_module.state
    yield
    app_module.state = saved


def test_create_app(store, config, restore_state):
    app = create_app(store, config)
    assert app_module.state is not None
    assert len(app_module.state.explorer.plotted) == 5
    assert app.layout is not None
    assert len(app.callback_map) > 0
