"""Small planar-geometry helpers: vectors, angle wrapping and angular lerp."""

from __future__ import annotations

import math
from typing import NamedTuple


class Vec2(NamedTuple):
    """A 2D point or direction in the path plane."""

    x: float
    y: float


class Point3(NamedTuple):
    """A world-space point: path plane on x/y, floor elevation on z."""

    x: float
    y: float
    z: float


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_point(a: Vec2, b: Vec2, t: float) -> Vec2:
    return Vec2(lerp(a.x, b.x, t), lerp(a.y, b.y, t))


def distance(a: Vec2, b: Vec2) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def direction(a: Vec2, b: Vec2) -> Vec2:
    """Unit vector pointing from *a* to *b*.

    Raises :exc:`ValueError` when the points coincide.
    """
    length = distance(a, b)
    if length == 0.0:
        raise ValueError("direction is undefined for coincident points")
    return Vec2((b.x - a.x) / length, (b.y - a.y) / length)


def heading(vec: Vec2) -> float:
    """Angle of *vec* in radians, counter-clockwise from +x."""
    return math.atan2(vec.y, vec.x)


def from_heading(angle: float) -> Vec2:
    return Vec2(math.cos(angle), math.sin(angle))


def wrap_angle(angle: float) -> float:
    """Wrap *angle* into the half-open interval (-pi, pi]."""
    wrapped = math.fmod(angle + math.pi, 2.0 * math.pi)
    if wrapped <= 0.0:
        wrapped += 2.0 * math.pi
    return wrapped - math.pi


def angle_difference(target: float, source: float) -> float:
    """Signed minimal rotation taking *source* onto *target*."""
    return wrap_angle(target - source)


def lerp_angle(a: float, b: float, t: float) -> float:
    """Interpolate from *a* to *b* along the shorter arc."""
    return a + angle_difference(b, a) * t


def bisector_heading(first: Vec2, second: Vec2) -> float:
    """Heading halfway between two directions, measured from *first*."""
    first_angle = heading(first)
    return first_angle + angle_difference(heading(second), first_angle) / 2.0
