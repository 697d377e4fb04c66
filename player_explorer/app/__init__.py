"""Dash front end for the player explorer."""

from .app import create_app

__all__ = ["create_app"]
