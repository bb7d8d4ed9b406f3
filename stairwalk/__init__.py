"""Arc-length path positions over stacked floors connected by stairs."""

from stairwalk.config.types import PathConfig, PositionMode, StairMatchPolicy
from stairwalk.domain import (
    InvalidConnector,
    InvalidFloor,
    InvalidPath,
    PathPosition,
    PathUndefined,
    Point3,
    StairConnector,
    Vec2,
)
from stairwalk.simulation.engine import PathEngine

__all__ = [
    "InvalidConnector",
    "InvalidFloor",
    "InvalidPath",
    "PathConfig",
    "PathEngine",
    "PathPosition",
    "PathUndefined",
    "Point3",
    "PositionMode",
    "StairConnector",
    "StairMatchPolicy",
    "Vec2",
]
