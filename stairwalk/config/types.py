"""Configuration dataclasses and enums for the path-position engine.

All frozen dataclasses that parameterise path resolution, stair matching
and scripted walks live here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from stairwalk.config.constants import (
    CORNER_CLEARANCE,
    CURVE_RADIUS,
    FLOOR_HEIGHT,
    NUM_FLOORS,
    REFERENCE_FLOOR,
    STAIR_ENTRANCE_TOLERANCE,
    STAIR_EXIT_THRESHOLD,
    STAIR_RUN_LENGTH,
)

__all__ = [
    "PathConfig",
    "PositionMode",
    "StairMatchPolicy",
    "WalkConfig",
]


class StairMatchPolicy(Enum):
    """Connector selection when several entrances are within tolerance."""

    FIRST = "first"
    NEAREST = "nearest"


class PositionMode(Enum):
    """The two valid (on_stairs, floor) combinations of a path position."""

    ON_FLOOR = "on_floor"
    ON_STAIRS = "on_stairs"


@dataclass(frozen=True)
class PathConfig:
    """Tuning knobs shared by the resolver and the stair state machine."""

    stair_entrance_tolerance: float = STAIR_ENTRANCE_TOLERANCE
    curve_radius: float = CURVE_RADIUS
    floor_height: float = FLOOR_HEIGHT
    num_floors: int = NUM_FLOORS
    reference_floor: int = REFERENCE_FLOOR
    """Floor drawn at elevation zero."""
    corner_clearance: float = CORNER_CLEARANCE
    stair_run_length: float = STAIR_RUN_LENGTH
    stair_exit_threshold: float = STAIR_EXIT_THRESHOLD
    stair_match_policy: StairMatchPolicy = StairMatchPolicy.NEAREST

    def __post_init__(self) -> None:
        if self.stair_entrance_tolerance <= 0.0:
            raise ValueError("stair_entrance_tolerance must be > 0")
        if self.curve_radius < 0.0:
            raise ValueError("curve_radius must be >= 0")
        if self.floor_height <= 0.0:
            raise ValueError("floor_height must be > 0")
        if self.num_floors < 1:
            raise ValueError("num_floors must be >= 1")
        if not 0 <= self.reference_floor < self.num_floors:
            raise ValueError("reference_floor must be in [0, num_floors)")
        if self.corner_clearance < 0.0:
            raise ValueError("corner_clearance must be >= 0")
        if self.stair_run_length <= 0.0:
            raise ValueError("stair_run_length must be > 0")
        if not 0.0 < self.stair_exit_threshold <= 1.0:
            raise ValueError("stair_exit_threshold must be in (0.0, 1.0]")


@dataclass(frozen=True)
class WalkConfig:
    """Runtime parameters for a scripted walk over the reference layout."""

    ticks: int = 200
    speed: float = 0.5
    """Path distance covered per tick; negative walks the loop backwards."""
    stair_every: int = 0
    """Attempt stairs every N ticks (0 = never)."""
    start_distance: float = 0.0
    start_floor: int = REFERENCE_FLOOR
    n_agents: int = 1
    agent_spacing: float = 0.0
    """Initial distance offset between consecutive agents."""

    def __post_init__(self) -> None:
        if self.ticks < 1:
            raise ValueError("ticks must be >= 1")
        if self.stair_every < 0:
            raise ValueError("stair_every must be >= 0")
        if self.start_floor < 0:
            raise ValueError("start_floor must be >= 0")
        if self.n_agents < 1:
            raise ValueError("n_agents must be >= 1")
