"""Colour helpers shared by both panels."""

from .colors import POSITION_COLORS, category_color, hex_to_rgb, rgba

__all__ = ["POSITION_COLORS", "category_color", "hex_to_rgb", "rgba"]
