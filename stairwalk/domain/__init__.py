"""Domain layer: path model, resolver, stairs, trace events and layouts."""

from stairwalk.domain.errors import (
    InvalidConnector,
    InvalidFloor,
    InvalidPath,
    PathUndefined,
    StairwalkError,
)
from stairwalk.domain.floor_graph import build_floor_graph, reachable_floors, unreachable_floors
from stairwalk.domain.geometry import Point3, Vec2
from stairwalk.domain.layout import Layout, build_reference_layout, rectangle_nodes
from stairwalk.domain.path_model import PathModel
from stairwalk.domain.position import PathPosition
from stairwalk.domain.resolver import (
    facing_direction,
    floor_elevation,
    planar_position,
    resolve_position,
    vertical_position,
)
from stairwalk.domain.stairs import StairConnector, StairRegistry, StairTransitionEngine
from stairwalk.domain.trace import (
    ColumnarSink,
    FloorsDefined,
    NullSink,
    PathDefined,
    RecordingSink,
    StairEntered,
    StairExited,
    StairProgressed,
    StairRejected,
    TraceEvent,
    TraceSink,
)

__all__ = [
    "ColumnarSink",
    "FloorsDefined",
    "InvalidConnector",
    "InvalidFloor",
    "InvalidPath",
    "Layout",
    "NullSink",
    "PathDefined",
    "PathModel",
    "PathPosition",
    "PathUndefined",
    "Point3",
    "RecordingSink",
    "StairConnector",
    "StairEntered",
    "StairExited",
    "StairProgressed",
    "StairRegistry",
    "StairRejected",
    "StairTransitionEngine",
    "StairwalkError",
    "TraceEvent",
    "TraceSink",
    "Vec2",
    "build_floor_graph",
    "build_reference_layout",
    "facing_direction",
    "floor_elevation",
    "planar_position",
    "reachable_floors",
    "rectangle_nodes",
    "resolve_position",
    "unreachable_floors",
    "vertical_position",
]
