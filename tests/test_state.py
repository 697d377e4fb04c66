"""Tests for the scatter interaction state machine."""
import pytest

from player_explorer.config import ExplorerConfig
from player_explorer.entities import Entity
from player_explorer.explorer.state import (
    ACCENT,
    ExplorerState,
    Tier,
    is_similar,
    similar_names,
)
from player_explorer.filtering import FilterPredicate
from player_explorer.scales import IDENTITY, ZoomTransform
from player_explorer.visualization.colors import MUTED_FILL

from conftest import make_player


class TestSimilarity:
    def test_same_position_or_team_within_threshold(self, players):
        alpha = players[0]
        assert similar_names(alpha, players, "PPG") == {"Beta Guard", "Gamma Forward"}

    def test_never_similar_to_self(self, players):
        assert not is_similar(players[0], players[0], "PPG")

    def test_relative_difference_is_strict(self):
        primary = make_player("P", "G", "BOS", ppg=10)
        edge = make_player("E", "G", "LAL", ppg=12)
        assert not is_similar(edge, primary, "PPG")
        assert is_similar(edge, primary, "PPG", threshold=0.25)

    def test_zero_primary_value(self):
        primary = make_player("P", "C", "BOS", ppg=0)
        zero = make_player("Z", "C", "LAL", ppg=0)
        small = make_player("S", "C", "LAL", ppg=0.1)
        assert is_similar(zero, primary, "PPG")
        assert not is_similar(small, primary, "PPG")

    def test_negative_primary_value(self):
        primary = make_player("P", "G", "BOS", **{"+/-": -5.0})
        near = make_player("N", "G", "LAL", **{"+/-": -5.5})
        assert is_similar(near, primary, "+/-")

    def test_missing_value_never_similar(self, players):
        assert not is_similar(players[5], players[1], "USG%")


class TestSelection:
    def test_initially_idle(self, explorer):
        assert explorer.selection.is_idle
        assert explorer.connectors() == []
        assert explorer.tooltip() is None

    def test_click_selects_with_similar(self, explorer):
        sel = explorer.click_point("Alpha Guard")
        assert sel.primary == "Alpha Guard"
        assert sel.similar == {"Beta Guard", "Gamma Forward"}
        assert {c.target for c in explorer.connectors()} == sel.similar

    def test_click_again_deselects(self, explorer):
        explorer.click_point("Alpha Guard")
        explorer.click_point("Alpha Guard")
        assert explorer.selection.is_idle
        assert explorer.connectors() == []

    def test_select_other_replaces_similar_set(self, explorer):
        explorer.click_point("Alpha Guard")
        explorer.click_point("Beta Guard")
        assert explorer.selection.primary == "Beta Guard"
        assert explorer.selection.similar == {"Alpha Guard"}
        connectors = explorer.connectors()
        assert [c.target for c in connectors] == ["Alpha Guard"]
        assert all(c.source == "Beta Guard" for c in connectors)

    def test_background_click_clears(self, explorer):
        explorer.click_point("Delta Center")
        explorer.click_background()
        assert explorer.selection.is_idle

    def test_unplotted_entity_cannot_be_selected(self, explorer):
        assert "Zeta Forward" in explorer.store
        assert not explorer.is_plotted("Zeta Forward")
        with pytest.raises(KeyError):
            explorer.click_point("Zeta Forward")

    def test_filter_keeps_selection_when_still_plotted(self, explorer):
        explorer.click_point("Alpha Guard")
        explorer.update_filter(category="G")
        assert explorer.selection.primary == "Alpha Guard"
        # Gamma is a forward and no longer plotted
        assert explorer.selection.similar == {"Beta Guard"}

    def test_filter_clears_selection_when_filtered_out(self, explorer):
        explorer.click_point("Delta Center")
        explorer.hover_enter("Delta Center")
        explorer.update_filter(category="G")
        assert explorer.selection.is_idle
        assert explorer.hover.name is None

    def test_connectors_use_zoomed_positions(self, explorer):
        explorer.click_point("Alpha Guard")
        explorer.wheel(-500)
        alpha = explorer.store["Alpha Guard"]
        for c in explorer.connectors():
            assert c.start == explorer.mapper.project(alpha)


class TestHover:
    def test_enter_and_leave(self, explorer):
        assert explorer.hover_enter("Alpha Guard")
        assert not explorer.hover_enter("Alpha Guard")
        assert explorer.style_for(explorer.store["Alpha Guard"]).tier == Tier.HOVERED
        assert explorer.hover_leave()
        assert not explorer.hover_leave()
        assert explorer.style_for(explorer.store["Alpha Guard"]).tier == Tier.DEFAULT

    def test_hover_does_not_touch_selection(self, explorer):
        explorer.click_point("Alpha Guard")
        explorer.hover_enter("Delta Center")
        explorer.hover_leave()
        assert explorer.selection.primary == "Alpha Guard"

    def test_unplotted_hover_raises(self, explorer):
        with pytest.raises(KeyError):
            explorer.hover_enter("Zeta Forward")


class TestStyling:
    def test_default(self, explorer):
        style = explorer.style_for(explorer.store["Delta Center"])
        assert style.tier == Tier.DEFAULT
        assert (style.radius, style.opacity) == (6, 0.7)
        assert style.stroke is None

    def test_selected_beats_hover(self, explorer):
        explorer.click_point("Alpha Guard")
        explorer.hover_enter("Alpha Guard")
        style = explorer.style_for(explorer.store["Alpha Guard"])
        assert style.tier == Tier.SELECTED
        assert (style.radius, style.stroke, style.stroke_width) == (9, ACCENT, 2.5)

    def test_similar_beats_hover(self, explorer):
        explorer.click_point("Alpha Guard")
        explorer.hover_enter("Beta Guard")
        style = explorer.style_for(explorer.store["Beta Guard"])
        assert style.tier == Tier.SIMILAR
        assert style.radius == 7

    def test_search_mutes_non_matches(self, explorer):
        explorer.set_search_term("guard")
        muted = explorer.style_for(explorer.store["Delta Center"])
        assert muted.tier == Tier.SEARCH_MUTED
        assert (muted.opacity, muted.fill) == (0.3, MUTED_FILL)
        assert explorer.style_for(explorer.store["Alpha Guard"]).tier == Tier.DEFAULT

    def test_search_does_not_rebuild(self, explorer):
        mapper = explorer.mapper
        explorer.set_search_term("delta")
        assert explorer.mapper is mapper
        assert len(explorer.plotted) == 5

    def test_similar_beats_search_mute(self, explorer):
        explorer.click_point("Alpha Guard")
        explorer.set_search_term("alpha")
        assert explorer.style_for(explorer.store["Gamma Forward"]).tier == Tier.SIMILAR


class TestZoom:
    def test_wheel_zooms_about_centre(self, explorer):
        t = explorer.wheel(-500)
        assert t == ZoomTransform(k=2.0, x=-250.0, y=-150.0)

    def test_wheel_is_clamped(self, explorer):
        assert explorer.wheel(-5000).k == 8.0
        explorer.reset_zoom()
        assert explorer.wheel(500) == IDENTITY

    def test_drag_is_bounded(self, explorer):
        assert explorer.drag(100, 100) == IDENTITY
        explorer.wheel(-500)
        t = explorer.drag(-1000, 0)
        assert t.x == -500.0

    def test_axis_change_resets_zoom(self, explorer):
        explorer.wheel(-500)
        explorer.set_axis(metric="RPG")
        assert explorer.transform == IDENTITY

    def test_fit_viewport(self, explorer):
        t = explorer.fit_viewport([100, 350], [200, 50])
        assert t.k == pytest.approx(2.0)

    def test_zoom_does_not_change_subset_or_stats(self, explorer):
        regression, plotted = explorer.regression, explorer.plotted
        explorer.wheel(-300)
        explorer.drag(-20, -20)
        assert explorer.regression == regression
        assert explorer.plotted == plotted


class TestDerived:
    def test_statistics_over_plotted_subset(self, explorer):
        assert explorer.x_mean == pytest.approx(23.6)
        assert explorer.y_mean == pytest.approx(20.0)
        assert explorer.regression is not None
        assert -1 <= explorer.correlation <= 1

    def test_empty_subset(self, explorer):
        explorer.set_axis(view="efficiency", metric="TS%")
        assert explorer.plotted == []
        assert explorer.regression is None
        assert explorer.correlation is None
        assert explorer.x_mean is None
        assert explorer.mapper.base_x.domain == (0.0, 1.0)

    def test_unknown_view_leaves_state_untouched(self, explorer):
        with pytest.raises(ValueError):
            explorer.set_axis(view="defense")
        assert explorer.view == "scoring"

    def test_unknown_metric_leaves_state_untouched(self, explorer):
        plotted = explorer.plotted
        with pytest.raises(ValueError):
            explorer.set_axis(metric="NOT_A_METRIC")
        assert explorer.metric == "PPG"
        assert explorer.plotted == plotted

    def test_set_viewport(self, explorer):
        explorer.set_viewport(1000, 600)
        x, y = explorer.mapper.project(explorer.store["Alpha Guard"])
        assert (x, y) == pytest.approx((1000 * 20 / 30, 200.0))
        with pytest.raises(ValueError):
            explorer.set_viewport(0, 100)


class TestTooltip:
    def test_hover_payload(self, explorer):
        explorer.hover_enter("Alpha Guard")
        tip = explorer.tooltip()
        assert tip.name == "Alpha Guard"
        assert (tip.x_value, tip.y_value) == (20.0, 20.0)
        assert tip.extra == {"Minutes/Game": 30.0, "Games Played": 60.0}
        assert not tip.pinned

    def test_hover_takes_precedence_over_pinned(self, explorer):
        explorer.click_point("Beta Guard")
        explorer.hover_enter("Delta Center")
        assert explorer.tooltip().name == "Delta Center"
        explorer.hover_leave()
        tip = explorer.tooltip()
        assert tip.name == "Beta Guard"
        assert tip.pinned
        assert tip.extra == {"Similar players": 1}


class TestReset:
    def test_reset_restores_defaults(self, explorer):
        explorer.update_filter(category="G", min_threshold=25)
        explorer.set_axis(view="overview")
        explorer.set_search_term("alpha")
        explorer.click_point("Alpha Guard")
        explorer.wheel(-500)

        explorer.reset()
        assert explorer.predicate == FilterPredicate()
        assert (explorer.view, explorer.metric) == ("scoring", "PPG")
        assert explorer.search_term == ""
        assert explorer.selection.is_idle
        assert explorer.transform == IDENTITY

    def test_reset_is_idempotent(self, explorer):
        explorer.click_point("Alpha Guard")
        explorer.reset()
        first = (explorer.predicate, explorer.view, explorer.metric,
                 explorer.selection, explorer.hover, explorer.transform)
        explorer.reset()
        second = (explorer.predicate, explorer.view, explorer.metric,
                  explorer.selection, explorer.hover, explorer.transform)
        assert first == second


def test_accepts_plain_entity_list():
    state = ExplorerState(
        [Entity("Solo", "C", "DEN", {"USG%": 10.0, "PPG": 5.0})],
        ExplorerConfig(width=100, height=100),
    )
    assert len(state.plotted) == 1
    assert state.regression is None
    assert state.correlation is None
