"""Closed piecewise-linear path with arc-length parameterization.

A path is an ordered, cyclic list of 2D nodes: segment ``i`` runs from
``nodes[i]`` to ``nodes[(i + 1) % n]``, so the last node always connects
back to the first. Models are immutable; redefining a path builds a new
model so that readers never observe a half-updated one.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

from stairwalk.config.constants import CORNER_CLEARANCE, MIN_PATH_NODES
from stairwalk.domain.errors import InvalidPath, PathUndefined
from stairwalk.domain.geometry import Vec2, direction, distance

NodeLike = Sequence[float]
"""Anything unpackable as ``(x, y)``."""


@dataclass(frozen=True)
class PathModel:
    """Cyclic node list with per-segment and total arc lengths."""

    nodes: tuple[Vec2, ...] = ()
    segment_lengths: tuple[float, ...] = ()
    total_length: float = 0.0
    defined: bool = False
    _segment_ends: np.ndarray = field(
        default_factory=lambda: np.zeros(0), repr=False, compare=False
    )

    @classmethod
    def undefined(cls) -> PathModel:
        """Placeholder model used before the first successful definition."""
        return cls()

    @classmethod
    def from_nodes(cls, nodes: Iterable[NodeLike]) -> PathModel:
        """Build a defined model, rejecting inputs that cannot form a loop."""
        points = tuple(_coerce_node(node) for node in nodes)
        if len(points) < MIN_PATH_NODES:
            raise InvalidPath(f"path needs at least {MIN_PATH_NODES} nodes, got {len(points)}")

        lengths = tuple(
            distance(points[i], points[(i + 1) % len(points)]) for i in range(len(points))
        )
        for i, length in enumerate(lengths):
            if length == 0.0:
                raise InvalidPath(f"segment {i} has zero length (coincident nodes)")

        ends = np.cumsum(np.asarray(lengths, dtype=float))
        return cls(
            nodes=points,
            segment_lengths=lengths,
            total_length=float(ends[-1]),
            defined=True,
            _segment_ends=ends,
        )

    @property
    def segment_count(self) -> int:
        return len(self.nodes)

    def _require_defined(self) -> None:
        if not self.defined:
            raise PathUndefined("no path has been defined")

    def wrap(self, distance_: float) -> float:
        """Normalize an arc-length distance into ``[0, total_length)``."""
        self._require_defined()
        wrapped = distance_ % self.total_length
        # A tiny negative input can round up to exactly total_length.
        if wrapped >= self.total_length:
            wrapped = 0.0
        return wrapped

    def locate_segment(self, distance_: float) -> int:
        """Index of the segment owning *distance_*.

        A distance exactly on a corner belongs to the earlier segment.
        Distances past the end (float slack) resolve to the last segment.
        """
        self._require_defined()
        index = int(np.searchsorted(self._segment_ends, distance_, side="left"))
        return min(index, self.segment_count - 1)

    def segment_start(self, index: int) -> float:
        """Arc-length distance accumulated before segment *index*."""
        self._require_defined()
        if index == 0:
            return 0.0
        return float(self._segment_ends[index - 1])

    def segment_endpoints(self, index: int) -> tuple[Vec2, Vec2]:
        self._require_defined()
        count = self.segment_count
        return self.nodes[index % count], self.nodes[(index + 1) % count]

    def segment_direction(self, index: int) -> Vec2:
        start, end = self.segment_endpoints(index)
        return direction(start, end)

    def raw_offset_within_segment(self, distance_: float) -> float:
        """Distance travelled along the owning segment, measured from its start node."""
        index = self.locate_segment(distance_)
        return distance_ - self.segment_start(index)

    def local_offset_within_segment(
        self, distance_: float, corner_clearance: float = CORNER_CLEARANCE
    ) -> float:
        """Offset past the segment's corner clearance zone, floored at zero.

        This is the coordinate space of ``StairConnector.position_on_segment``.
        """
        return max(0.0, self.raw_offset_within_segment(distance_) - corner_clearance)


def _coerce_node(node: NodeLike) -> Vec2:
    try:
        x, y = node
        point = Vec2(float(x), float(y))
    except (TypeError, ValueError) as exc:
        raise InvalidPath(f"path node must be an (x, y) pair, got {node!r}") from exc
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        raise InvalidPath(f"path node must have finite coordinates, got {node!r}")
    return point
