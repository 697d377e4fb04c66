"""Shared fixtures for the player explorer tests."""

import pytest

from player_explorer.config import ExplorerConfig
from player_explorer.entities import Entity, EntityStore
from player_explorer.explorer.state import ExplorerState


def make_player(name, pos, team, usg=None, ppg=None, mpg=None, gp=None, **extra):
    metrics = {"USG%": usg, "PPG": ppg, "MPG": mpg, "GP": gp}
    metrics.update(extra)
    return Entity(name=name, category=pos, group=team, metrics=metrics)


@pytest.fixture
def players():
    """Six players; Zeta has no usage rate so it is never plotted in the scoring view."""
    return [
        make_player("Alpha Guard", "G", "BOS", usg=20, ppg=20, mpg=30, gp=60),
        make_player("Beta Guard", "G", "LAL", usg=25, ppg=22, mpg=32, gp=55),
        make_player("Gamma Forward", "F", "BOS", usg=30, ppg=18, mpg=28, gp=70),
        make_player("Delta Center", "C", "MIA", usg=15, ppg=10, mpg=20, gp=40),
        make_player("Epsilon Guard", "G", "MIA", usg=28, ppg=30, mpg=36, gp=65),
        make_player("Zeta Forward", "F", "LAL", usg=None, ppg=12, mpg=10, gp=20),
    ]


@pytest.fixture
def store(players):
    return EntityStore(players)


@pytest.fixture
def config():
    return ExplorerConfig(width=500, height=300)


@pytest.fixture
def explorer(store, config):
    return ExplorerState(store, config)
