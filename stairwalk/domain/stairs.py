"""Stair connectors, the per-floor registry, and the stair state machine.

A position is either on a floor or on stairs. Entry only happens through an
explicit ``try_enter`` call that matches the position against the connectors
registered for its floor; exit is automatic once enough path distance has
been covered. There is no way to back out of a flight part-way.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from stairwalk.config.constants import PROGRESS_TOLERANCE
from stairwalk.config.types import PathConfig, StairMatchPolicy
from stairwalk.domain.errors import InvalidConnector, InvalidFloor
from stairwalk.domain.path_model import PathModel
from stairwalk.domain.position import PathPosition
from stairwalk.domain.trace import (
    NullSink,
    StairEntered,
    StairExited,
    StairProgressed,
    StairRejected,
    TraceSink,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StairConnector:
    """One directed stair entrance.

    ``position_on_segment`` is measured past the segment's corner clearance,
    not from the segment's start node.
    """

    floor: int
    segment_index: int
    position_on_segment: float
    arrival_segment: int
    arrival_position: float
    arrival_floor: int
    going_up: bool

    def __post_init__(self) -> None:
        if self.floor < 0 or self.arrival_floor < 0:
            raise InvalidConnector("connector floors must be >= 0")
        if self.segment_index < 0 or self.arrival_segment < 0:
            raise InvalidConnector("connector segment indices must be >= 0")
        if not (math.isfinite(self.position_on_segment) and self.position_on_segment >= 0.0):
            raise InvalidConnector("position_on_segment must be a finite value >= 0")
        if not (math.isfinite(self.arrival_position) and self.arrival_position >= 0.0):
            raise InvalidConnector("arrival_position must be a finite value >= 0")
        if self.arrival_floor == self.floor:
            raise InvalidConnector("arrival_floor must differ from floor")
        if self.going_up != (self.arrival_floor > self.floor):
            raise InvalidConnector("going_up must match the direction from floor to arrival_floor")


@dataclass(frozen=True)
class StairRegistry:
    """Immutable per-floor index of stair connectors, in registration order."""

    floor_count: int
    connectors: tuple[StairConnector, ...] = ()
    _by_floor: tuple[tuple[int, ...], ...] = field(default=(), repr=False, compare=False)

    @classmethod
    def create(
        cls,
        floor_count: int,
        connectors: Iterable[StairConnector] = (),
        segment_count: int | None = None,
    ) -> StairRegistry:
        """Validate *connectors* against the floor range and, if known, the path.

        Raises :exc:`InvalidConnector` on the first inconsistent record.
        """
        if floor_count < 1:
            raise InvalidConnector("floor_count must be >= 1")
        records = tuple(connectors)
        by_floor: list[list[int]] = [[] for _ in range(floor_count)]
        for index, connector in enumerate(records):
            if not isinstance(connector, StairConnector):
                raise InvalidConnector(f"connector {index} is not a StairConnector")
            if connector.floor >= floor_count or connector.arrival_floor >= floor_count:
                raise InvalidConnector(f"connector {index} references a floor >= {floor_count}")
            if segment_count is not None and (
                connector.segment_index >= segment_count
                or connector.arrival_segment >= segment_count
            ):
                raise InvalidConnector(
                    f"connector {index} references a segment >= {segment_count}"
                )
            by_floor[connector.floor].append(index)
        return cls(
            floor_count=floor_count,
            connectors=records,
            _by_floor=tuple(tuple(indices) for indices in by_floor),
        )

    def has_floor(self, floor: int) -> bool:
        return 0 <= floor < self.floor_count

    def connectors_for(self, floor: int) -> Iterator[tuple[int, StairConnector]]:
        """Yield ``(registration_index, connector)`` pairs for *floor*."""
        if not self.has_floor(floor):
            raise InvalidFloor(f"floor {floor} outside [0, {self.floor_count})")
        for index in self._by_floor[floor]:
            yield index, self.connectors[index]

    def match(
        self,
        floor: int,
        segment: int,
        local_offset: float,
        tolerance: float,
        policy: StairMatchPolicy = StairMatchPolicy.NEAREST,
    ) -> tuple[int, StairConnector] | None:
        """Find the entrance on *floor*/*segment* within *tolerance* of *local_offset*.

        ``FIRST`` returns the earliest registered candidate; ``NEAREST``
        returns the closest one, breaking ties by registration order.
        """
        best: tuple[int, StairConnector] | None = None
        best_gap = math.inf
        for index, connector in self.connectors_for(floor):
            if connector.segment_index != segment:
                continue
            gap = abs(local_offset - connector.position_on_segment)
            if gap >= tolerance:
                continue
            if policy is StairMatchPolicy.FIRST:
                return index, connector
            if gap < best_gap:
                best, best_gap = (index, connector), gap
        return best


class StairTransitionEngine:
    """Drives the on-floor / on-stairs state machine of a ``PathPosition``."""

    def __init__(self, config: PathConfig | None = None, sink: TraceSink | None = None) -> None:
        self.config = config or PathConfig()
        self.sink: TraceSink = sink or NullSink()

    def try_enter(self, path: PathModel, registry: StairRegistry, position: PathPosition) -> bool:
        """Put *position* on stairs if it stands at a registered entrance.

        Returns ``False`` without mutating when the position is already on
        stairs, on an unknown floor, or not within tolerance of any entrance.
        """
        if position.on_stairs:
            self._reject(position, "on_stairs")
            return False
        if not registry.has_floor(position.floor):
            self._reject(position, "invalid_floor")
            return False

        segment = path.locate_segment(position.distance)
        local_offset = path.local_offset_within_segment(
            position.distance, self.config.corner_clearance
        )
        matched = registry.match(
            position.floor,
            segment,
            local_offset,
            self.config.stair_entrance_tolerance,
            self.config.stair_match_policy,
        )
        if matched is None:
            self._reject(position, "no_match", segment)
            return False

        index, connector = matched
        position.on_stairs = True
        position.stair_progress = 0.0
        position.stair_arrival_floor = connector.arrival_floor
        position.stair_going_up = connector.going_up
        logger.debug(
            "agent %d entered stairs %d at distance %.3f (segment %d, floor %d -> %d)",
            position.agent_id,
            index,
            position.distance,
            segment,
            position.floor,
            connector.arrival_floor,
        )
        self.sink.emit(
            StairEntered(
                agent_id=position.agent_id,
                distance=position.distance,
                segment=segment,
                floor=position.floor,
                connector_index=index,
                arrival_floor=connector.arrival_floor,
                going_up=connector.going_up,
            )
        )
        return True

    def advance(self, position: PathPosition, delta: float) -> None:
        """Advance stair progress by ``abs(delta)`` and exit once past the threshold.

        Progress is a running float sum, so the threshold test allows
        ``PROGRESS_TOLERANCE`` of rounding slack.
        """
        if not position.on_stairs:
            return
        progress = min(1.0, position.stair_progress + abs(delta) / self.config.stair_run_length)
        if progress < self.config.stair_exit_threshold - PROGRESS_TOLERANCE:
            position.stair_progress = progress
            self.sink.emit(
                StairProgressed(
                    agent_id=position.agent_id,
                    distance=position.distance,
                    floor=position.floor,
                    arrival_floor=position.stair_arrival_floor,
                    progress=progress,
                )
            )
            return

        departure = position.floor
        arrival = position.stair_arrival_floor
        position.on_stairs = False
        position.floor = arrival
        position.stair_progress = 0.0
        position.stair_going_up = False
        logger.debug(
            "agent %d left stairs on floor %d (from %d)", position.agent_id, arrival, departure
        )
        self.sink.emit(
            StairExited(
                agent_id=position.agent_id,
                distance=position.distance,
                departure_floor=departure,
                floor=arrival,
            )
        )

    def _reject(self, position: PathPosition, reason: str, segment: int | None = None) -> None:
        logger.debug(
            "agent %d stair request rejected (%s) at distance %.3f",
            position.agent_id,
            reason,
            position.distance,
        )
        self.sink.emit(
            StairRejected(
                agent_id=position.agent_id,
                distance=position.distance,
                floor=position.floor,
                reason=reason,
                segment=segment,
            )
        )
