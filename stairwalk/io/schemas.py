"""Parquet schema definitions for walk artifacts.

Every module that reads or writes pose and trace logs works against the
column contracts defined here.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Walk logs
# ---------------------------------------------------------------------------

POSE_LOG_SCHEMA = pa.schema(
    [
        ("tick", pa.int64()),
        ("agent_id", pa.int64()),
        ("distance", pa.float64()),
        ("segment", pa.int64()),
        ("floor", pa.int64()),
        ("on_stairs", pa.bool_()),
        ("stair_progress", pa.float64()),
        ("x", pa.float64()),
        ("y", pa.float64()),
        ("z", pa.float64()),
        ("facing_x", pa.float64()),
        ("facing_y", pa.float64()),
    ]
)

# Sparse: columns an event does not carry are null.
TRACE_SCHEMA = pa.schema(
    [
        ("tick", pa.int64()),
        ("kind", pa.string()),
        ("agent_id", pa.int64()),
        ("distance", pa.float64()),
        ("segment", pa.int64()),
        ("floor", pa.int64()),
        ("connector_index", pa.int64()),
        ("arrival_floor", pa.int64()),
        ("progress", pa.float64()),
        ("detail", pa.string()),
    ]
)
