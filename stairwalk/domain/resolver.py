"""Pure projections from a logical path position to a renderable pose.

Position is an exact arc-length-to-point mapping, so corners stay
geometrically sharp. Turns are smoothed only in the facing direction, which
blends toward the corner bisector inside a curve zone at each segment end.
"""

from __future__ import annotations

from stairwalk.config.constants import CURVE_RADIUS, FLOOR_HEIGHT, REFERENCE_FLOOR
from stairwalk.config.types import PathConfig
from stairwalk.domain.geometry import (
    Point3,
    Vec2,
    bisector_heading,
    from_heading,
    heading,
    lerp,
    lerp_angle,
    lerp_point,
)
from stairwalk.domain.path_model import PathModel
from stairwalk.domain.position import PathPosition


def planar_position(path: PathModel, distance: float) -> Vec2:
    """Point on the polyline at arc length *distance*."""
    index = path.locate_segment(distance)
    start, end = path.segment_endpoints(index)
    t = (distance - path.segment_start(index)) / path.segment_lengths[index]
    return lerp_point(start, end, t)


def floor_elevation(
    floor: int,
    floor_height: float = FLOOR_HEIGHT,
    reference_floor: int = REFERENCE_FLOOR,
) -> float:
    """Elevation of *floor*, with the reference floor at zero."""
    return (floor - reference_floor) * floor_height


def vertical_position(position: PathPosition, config: PathConfig) -> float:
    """Elevation of *position*, interpolated along the flight while on stairs.

    Progress always runs from the departure floor toward the arrival floor,
    whichever way the flight goes.
    """
    departure = floor_elevation(position.floor, config.floor_height, config.reference_floor)
    if not position.on_stairs:
        return departure
    arrival = floor_elevation(
        position.stair_arrival_floor, config.floor_height, config.reference_floor
    )
    return lerp(departure, arrival, position.stair_progress)


def facing_direction(path: PathModel, distance: float, curve_radius: float = CURVE_RADIUS) -> Vec2:
    """Unit facing vector at *distance*, smoothed through the corners."""
    index = path.locate_segment(distance)
    offset = distance - path.segment_start(index)
    length = path.segment_lengths[index]
    current = path.segment_direction(index)

    # Zones at both ends of a segment never overlap.
    curve_dist = min(curve_radius, length / 2.0)
    if curve_dist <= 0.0:
        return current

    if offset < curve_dist:
        start_bisector = bisector_heading(path.segment_direction(index - 1), current)
        t = offset / curve_dist
        return from_heading(lerp_angle(start_bisector, heading(current), t))

    if offset > length - curve_dist:
        end_bisector = bisector_heading(current, path.segment_direction(index + 1))
        t = (offset - (length - curve_dist)) / curve_dist
        return from_heading(lerp_angle(heading(current), end_bisector, t))

    return current


def resolve_position(path: PathModel, position: PathPosition, config: PathConfig) -> Point3:
    """World-space point for *position*: path plane on x/y, elevation on z."""
    planar = planar_position(path, position.distance)
    return Point3(planar.x, planar.y, vertical_position(position, config))
