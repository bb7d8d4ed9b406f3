"""Simulation layer: engine facade, scripted walks, and Parquet persistence."""

from stairwalk.simulation.engine import PathEngine
from stairwalk.simulation.persistence import flush_pose_columns, flush_trace_columns
from stairwalk.simulation.walk import (
    WalkResult,
    WalkStep,
    run_steps,
    run_walk,
    scripted_steps,
    step_agent,
)

__all__ = [
    "PathEngine",
    "WalkResult",
    "WalkStep",
    "flush_pose_columns",
    "flush_trace_columns",
    "run_steps",
    "run_walk",
    "scripted_steps",
    "step_agent",
]
