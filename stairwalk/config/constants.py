"""Centralized reference constants for the path-position engine.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

CORNER_CLEARANCE = 4.0
"""Dead zone at the start of each segment before stair offsets are measured."""

STAIR_RUN_LENGTH = 8.0
"""Absolute path distance needed to traverse one flight of stairs."""

STAIR_EXIT_THRESHOLD = 0.9
"""Stair progress at which the agent is placed on the arrival floor."""

STAIR_ENTRANCE_TOLERANCE = 1.2
"""Half-width of the matching window around a connector's entrance offset."""

CURVE_RADIUS = 2.0
"""Length of the facing-blend zone at each end of a segment."""

FLOOR_HEIGHT = 4.0
"""Vertical spacing between consecutive floors."""

NUM_FLOORS = 5
"""Number of stacked floors in the reference layout."""

REFERENCE_FLOOR = 2
"""Floor index placed at elevation zero (the starting floor)."""

DEFAULT_FACING: tuple[float, float] = (0.0, 1.0)
"""Facing returned when no path has been defined."""

MIN_PATH_NODES = 2
"""Smallest node count that forms a closed loop."""

LAYOUT_SCHEMA_VERSION = 1
"""Version tag written into layout JSON payloads."""

FLUSH_THRESHOLD = 8_192
"""Flush buffered log rows to Parquet once this in-memory row count is reached."""

PROGRESS_TOLERANCE = 1e-9
"""Slack when comparing accumulated stair progress against the exit threshold."""
