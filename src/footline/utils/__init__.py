"""Utility functions for footline."""

from .visualization import clip_line, draw_lines, draw_tile_grid

__all__ = ["clip_line", "draw_lines", "draw_tile_grid"]
