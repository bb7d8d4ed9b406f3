"""Per-agent logical position along the path.

A ``PathPosition`` is owned by exactly one agent and passed by reference into
the engine, which mutates it in place. Field meanings depend on the mode:

- on floor: ``floor`` is the resting floor, stair fields are inert;
- on stairs: ``floor`` is the departure floor, ``stair_arrival_floor`` the
  destination and ``stair_going_up`` the direction of travel.
"""

from __future__ import annotations

from dataclasses import dataclass

from stairwalk.config.types import PositionMode


@dataclass
class PathPosition:
    """Mutable arc-length position plus floor/stair sub-state."""

    distance: float = 0.0
    floor: int = 0
    on_stairs: bool = False
    stair_progress: float = 0.0
    stair_arrival_floor: int = 0
    stair_going_up: bool = False
    agent_id: int = 0

    @property
    def mode(self) -> PositionMode:
        return PositionMode.ON_STAIRS if self.on_stairs else PositionMode.ON_FLOOR

    @property
    def target_floor(self) -> int:
        """Floor the agent will rest on once any stair traversal completes."""
        return self.stair_arrival_floor if self.on_stairs else self.floor
