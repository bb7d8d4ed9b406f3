"""Configuration layer: reference constants and typed config dataclasses."""

from stairwalk.config.constants import (
    CORNER_CLEARANCE,
    CURVE_RADIUS,
    DEFAULT_FACING,
    FLOOR_HEIGHT,
    FLUSH_THRESHOLD,
    LAYOUT_SCHEMA_VERSION,
    MIN_PATH_NODES,
    NUM_FLOORS,
    REFERENCE_FLOOR,
    STAIR_ENTRANCE_TOLERANCE,
    STAIR_EXIT_THRESHOLD,
    STAIR_RUN_LENGTH,
)
from stairwalk.config.types import (
    PathConfig,
    PositionMode,
    StairMatchPolicy,
    WalkConfig,
)

__all__ = [
    "CORNER_CLEARANCE",
    "CURVE_RADIUS",
    "DEFAULT_FACING",
    "FLOOR_HEIGHT",
    "FLUSH_THRESHOLD",
    "LAYOUT_SCHEMA_VERSION",
    "MIN_PATH_NODES",
    "NUM_FLOORS",
    "PathConfig",
    "PositionMode",
    "REFERENCE_FLOOR",
    "STAIR_ENTRANCE_TOLERANCE",
    "STAIR_EXIT_THRESHOLD",
    "STAIR_RUN_LENGTH",
    "StairMatchPolicy",
    "WalkConfig",
]
