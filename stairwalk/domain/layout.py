"""Reference multi-floor layout: a rectangular loop repeated on every floor.

This produces exactly what a scene builder hands to the engine: the loop's
node list and the stair connectors between neighboring floors. Up flights
start on the first long side, down flights on the opposite long side.
"""

from __future__ import annotations

from dataclasses import dataclass

from stairwalk.config.constants import CORNER_CLEARANCE, NUM_FLOORS, STAIR_RUN_LENGTH
from stairwalk.domain.geometry import Vec2
from stairwalk.domain.stairs import StairConnector

UP_SEGMENT = 0
DOWN_SEGMENT = 2


@dataclass(frozen=True)
class Layout:
    """Node loop plus floor count and connectors, ready for the engine."""

    nodes: tuple[Vec2, ...]
    floor_count: int
    connectors: tuple[StairConnector, ...] = ()


def rectangle_nodes(width: float, depth: float) -> tuple[Vec2, ...]:
    """Counter-clockwise rectangle centred on the origin, starting bottom-left."""
    half_w, half_d = width / 2.0, depth / 2.0
    return (
        Vec2(-half_w, -half_d),
        Vec2(half_w, -half_d),
        Vec2(half_w, half_d),
        Vec2(-half_w, half_d),
    )


def build_reference_layout(
    floor_count: int = NUM_FLOORS,
    width: float = 40.0,
    depth: float = 24.0,
    up_position: float = 6.0,
    down_position: float = 6.0,
    corner_clearance: float = CORNER_CLEARANCE,
    stair_run_length: float = STAIR_RUN_LENGTH,
) -> Layout:
    """Build the rectangular reference layout.

    Every floor but the top gets an up connector on segment 0 and every
    floor but the bottom a down connector on segment 2. Positions are local
    offsets past the corner clearance.
    """
    if floor_count < 1:
        raise ValueError("floor_count must be >= 1")
    if width <= 0.0 or depth <= 0.0:
        raise ValueError("width and depth must be > 0")
    usable = width - corner_clearance
    for label, position in (("up_position", up_position), ("down_position", down_position)):
        if not 0.0 <= position <= usable:
            raise ValueError(f"{label} must be in [0, {usable:g}] for width {width:g}")

    connectors: list[StairConnector] = []
    for floor in range(floor_count):
        if floor + 1 < floor_count:
            connectors.append(
                StairConnector(
                    floor=floor,
                    segment_index=UP_SEGMENT,
                    position_on_segment=up_position,
                    arrival_segment=UP_SEGMENT,
                    arrival_position=min(up_position + stair_run_length, usable),
                    arrival_floor=floor + 1,
                    going_up=True,
                )
            )
        if floor > 0:
            connectors.append(
                StairConnector(
                    floor=floor,
                    segment_index=DOWN_SEGMENT,
                    position_on_segment=down_position,
                    arrival_segment=DOWN_SEGMENT,
                    arrival_position=min(down_position + stair_run_length, usable),
                    arrival_floor=floor - 1,
                    going_up=False,
                )
            )
    return Layout(
        nodes=rectangle_nodes(width, depth),
        floor_count=floor_count,
        connectors=tuple(connectors),
    )
