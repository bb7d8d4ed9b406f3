"""Exception taxonomy for path configuration and queries."""

from __future__ import annotations


class StairwalkError(Exception):
    """Base class for all path-engine errors."""


class InvalidPath(StairwalkError, ValueError):
    """Node list cannot form a closed loop (too few nodes or a zero-length segment)."""


class InvalidConnector(StairwalkError, ValueError):
    """Stair connector record is inconsistent with the floor/path layout."""


class InvalidFloor(StairwalkError, ValueError):
    """Floor index outside ``[0, floor_count)``."""


class PathUndefined(StairwalkError, RuntimeError):
    """Query or mutation issued before a path was defined."""
