"""Scatter interaction state and its drawable projection."""

from .scene import SceneFrame, build_scene
from .state import ExplorerState, SelectionState, HoverState, Tier

__all__ = [
    "ExplorerState",
    "SelectionState",
    "HoverState",
    "Tier",
    "SceneFrame",
    "build_scene",
]
