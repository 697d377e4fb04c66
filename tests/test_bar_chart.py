"""Tests for the ranked bar chart view."""
import pytest

from player_explorer.bar_chart import build_bar_view, rank_entities
from player_explorer.visualization.colors import POSITION_COLORS

from conftest import make_player


class TestRanking:
    def test_descending_with_top_n(self, players):
        ranked = rank_entities(players, "PPG", top_n=3)
        assert [e.name for e in ranked] == ["Epsilon Guard", "Beta Guard", "Alpha Guard"]

    def test_ties_keep_input_order(self):
        tied = [
            make_player("First", "G", "BOS", ppg=15),
            make_player("Second", "F", "BOS", ppg=15),
            make_player("Top", "C", "BOS", ppg=20),
        ]
        assert [e.name for e in rank_entities(tied, "PPG")] == ["Top", "First", "Second"]

    def test_allowlist_overrides_top_n(self, players):
        allow = ["Delta Center", "Zeta Forward", "Alpha Guard"]
        ranked = rank_entities(players, "PPG", allowlist=allow, top_n=1)
        assert [e.name for e in ranked] == ["Alpha Guard", "Zeta Forward", "Delta Center"]

    def test_missing_metric_skipped(self, players):
        ranked = rank_entities(players, "USG%")
        assert "Zeta Forward" not in [e.name for e in ranked]
        assert len(ranked) == 5


class TestBarView:
    def test_titles_and_labels(self, players):
        view = build_bar_view(players, "scoring", "PPG")
        assert view.title == "Scoring Impact - Top Players by PPG"
        assert view.primary_label == "Points per Game"
        assert view.secondary_metric == "USG%"
        assert view.secondary_label == "Usage Rate"

    def test_means_over_filtered_subset(self, players):
        view = build_bar_view(players, "scoring", "PPG", top_n=2)
        assert len(view.bars) == 2
        assert view.primary_mean == pytest.approx(112 / 6)
        assert view.secondary_mean == pytest.approx(23.6)

    def test_mean_labels(self, players):
        view = build_bar_view(players, "scoring", "PPG")
        assert view.primary_mean_label == "League Average PPG: 18.7"
        assert view.secondary_mean_label == "League Average Usage Rate: 23.6"

    def test_bars_carry_secondary_and_colour(self, players):
        view = build_bar_view(players, "scoring", "PPG")
        zeta = [b for b in view.bars if b.name == "Zeta Forward"][0]
        assert zeta.secondary is None
        assert zeta.minutes == 10.0
        assert zeta.fill == POSITION_COLORS["F"]

    def test_empty_subset(self):
        view = build_bar_view([], "efficiency", "TS%")
        assert view.bars == ()
        assert view.primary_mean is None
        assert view.primary_mean_label is None
        assert view.secondary_mean_label is None

    def test_unknown_view(self, players):
        with pytest.raises(ValueError):
            build_bar_view(players, "defense", "PPG")
