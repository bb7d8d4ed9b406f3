"""Visualization layer: matplotlib renderers for walk logs."""

from stairwalk.viz.render import FLOOR_COLORS, render_walk

__all__ = [
    "FLOOR_COLORS",
    "render_walk",
]
