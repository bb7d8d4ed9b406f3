"""Tests for stairwalk.simulation.walk runner."""

from __future__ import annotations

import json
from pathlib import Path

import pyarrow.parquet as pq

from stairwalk.config.types import WalkConfig
from stairwalk.domain.layout import build_reference_layout
from stairwalk.io.layout_file import load_layout
from stairwalk.io.schemas import POSE_LOG_SCHEMA, TRACE_SCHEMA
from stairwalk.simulation.engine import PathEngine
from stairwalk.simulation.walk import WalkStep, run_steps, run_walk, scripted_steps

# Floor 0 up entrance sits at distance 10 (local offset 6 past the 4 clearance).
CLIMB = WalkConfig(ticks=10, speed=1.0, stair_every=1, start_distance=10.0, start_floor=0)


def test_scripted_steps_marks_climb_ticks() -> None:
    steps = scripted_steps(WalkConfig(ticks=5, speed=0.5, stair_every=2))
    assert [step.climb for step in steps] == [True, False, True, False, True]
    assert all(step.delta == 0.5 for step in steps)


def test_scripted_steps_never_climb_when_disabled() -> None:
    steps = scripted_steps(WalkConfig(ticks=3, stair_every=0))
    assert not any(step.climb for step in steps)


def test_run_walk_climbs_one_floor() -> None:
    result = run_walk(build_reference_layout(floor_count=3), CLIMB)
    assert result.stair_entries == 1
    assert result.stair_exits == 1
    assert result.final_floors == (1,)
    assert result.final_distances == (20.0,)
    assert result.pose_log_path is None


def test_run_walk_multiple_agents() -> None:
    config = WalkConfig(ticks=4, speed=1.0, n_agents=3, agent_spacing=5.0, start_floor=1)
    result = run_walk(build_reference_layout(floor_count=3), config)
    assert result.n_agents == 3
    assert result.final_distances == (4.0, 9.0, 14.0)
    assert result.final_floors == (1, 1, 1)


def test_run_steps_counts_enter_and_exit_in_one_tick() -> None:
    engine = PathEngine.from_layout(build_reference_layout(floor_count=2))
    position = engine.create_position(10.0, floor=0)
    result = run_steps(engine, [position], [WalkStep(delta=9.0, climb=True)])
    assert result.stair_entries == 1
    assert result.stair_exits == 1
    assert position.floor == 1


def test_run_walk_writes_artifacts(tmp_path: Path) -> None:
    layout = build_reference_layout(floor_count=3)
    result = run_walk(layout, CLIMB, out_dir=tmp_path, run_id="climb")

    pose = pq.read_table(tmp_path / "logs" / "pose_log.parquet")
    assert pose.schema.equals(POSE_LOG_SCHEMA)
    assert pose.num_rows == 10
    rows = pose.to_pylist()
    assert rows[0]["on_stairs"] is True
    assert rows[-1]["floor"] == 1
    assert rows[-1]["z"] == -4.0

    trace = pq.read_table(tmp_path / "logs" / "trace_log.parquet")
    assert trace.schema.equals(TRACE_SCHEMA)
    kinds = trace.column("kind").to_pylist()
    assert kinds[:2] == ["path_defined", "floors_defined"]
    assert kinds.count("stair_entered") == 1
    assert kinds.count("stair_exited") == 1

    summary = json.loads((tmp_path / "walk_summary.json").read_text(encoding="utf-8"))
    assert summary["run_id"] == "climb"
    assert summary["final_floors"] == [1]
    assert load_layout(tmp_path / "layout.json") == layout
    assert result.trace_log_path == tmp_path / "logs" / "trace_log.parquet"
