"""Tick-driven scripted walks with optional Parquet persistence.

Each tick, every agent optionally requests stairs and then moves by the
step's delta; its pose is sampled afterwards. This mirrors the frame loop of
an agent controller and doubles as a reproducible harness for the engine.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path

import pyarrow.parquet as pq

from stairwalk.config.constants import FLUSH_THRESHOLD
from stairwalk.config.types import PathConfig, WalkConfig
from stairwalk.domain.layout import Layout
from stairwalk.domain.position import PathPosition
from stairwalk.domain.trace import ColumnarSink, NullSink, TraceSink
from stairwalk.io.layout_file import save_layout
from stairwalk.io.paths import layout_path, logs_dir, pose_log_path, summary_path, trace_log_path
from stairwalk.io.schemas import POSE_LOG_SCHEMA
from stairwalk.simulation.engine import PathEngine
from stairwalk.simulation.persistence import flush_pose_columns

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkStep:
    """One tick of input: request stairs first (if ``climb``), then move by ``delta``."""

    delta: float = 0.0
    climb: bool = False


@dataclass(frozen=True)
class WalkResult:
    """Summary of one scripted walk."""

    run_id: str
    ticks: int
    n_agents: int
    stair_entries: int
    stair_exits: int
    final_floors: tuple[int, ...]
    final_distances: tuple[float, ...]
    pose_log_path: Path | None = None
    trace_log_path: Path | None = None

    def to_summary(self) -> dict[str, object]:
        return {
            "run_id": self.run_id,
            "ticks": self.ticks,
            "n_agents": self.n_agents,
            "stair_entries": self.stair_entries,
            "stair_exits": self.stair_exits,
            "final_floors": list(self.final_floors),
            "final_distances": list(self.final_distances),
        }


def scripted_steps(config: WalkConfig) -> list[WalkStep]:
    """Constant-speed script with a stair request every ``stair_every`` ticks."""
    return [
        WalkStep(
            delta=config.speed,
            climb=config.stair_every > 0 and tick % config.stair_every == 0,
        )
        for tick in range(config.ticks)
    ]


def step_agent(engine: PathEngine, position: PathPosition, step: WalkStep) -> bool:
    """Apply one tick to one agent; returns whether stairs were entered."""
    entered = engine.try_stairs(position) if step.climb else False
    engine.translate(position, step.delta)
    return entered


def _empty_pose_columns() -> dict[str, list[object]]:
    return {name: [] for name in POSE_LOG_SCHEMA.names}


def _append_pose(
    columns: dict[str, list[object]], engine: PathEngine, position: PathPosition, tick: int
) -> None:
    point = engine.get_position(position)
    facing = engine.get_facing(position)
    columns["tick"].append(tick)
    columns["agent_id"].append(position.agent_id)
    columns["distance"].append(position.distance)
    columns["segment"].append(engine.segment_of(position))
    columns["floor"].append(position.floor)
    columns["on_stairs"].append(position.on_stairs)
    columns["stair_progress"].append(position.stair_progress)
    columns["x"].append(point.x)
    columns["y"].append(point.y)
    columns["z"].append(point.z)
    columns["facing_x"].append(facing.x)
    columns["facing_y"].append(facing.y)


def run_steps(
    engine: PathEngine,
    positions: Sequence[PathPosition],
    steps: Sequence[WalkStep],
    run_id: str = "walk",
    out_dir: Path | None = None,
) -> WalkResult:
    """Drive *positions* through *steps* on an already-configured engine.

    With *out_dir*, one pose row per agent per tick is streamed to
    ``logs/pose_log.parquet``. A ``ColumnarSink`` attached to the engine has
    its tick stamp kept in sync.
    """
    pose_writer: pq.ParquetWriter | None = None
    pose_path: Path | None = None
    columns = _empty_pose_columns()
    if out_dir is not None:
        logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
        pose_path = pose_log_path(out_dir)

    entries = 0
    exits = 0
    try:
        for tick, step in enumerate(steps):
            if isinstance(engine.sink, ColumnarSink):
                engine.sink.tick = tick
            for position in positions:
                was_on_stairs = position.on_stairs
                entered = step_agent(engine, position, step)
                if entered:
                    entries += 1
                # A single large step can enter and leave a flight in one tick.
                if (was_on_stairs or entered) and not position.on_stairs:
                    exits += 1
                if pose_path is not None:
                    _append_pose(columns, engine, position, tick)
            if pose_path is not None and len(columns["tick"]) >= FLUSH_THRESHOLD:
                pose_writer = flush_pose_columns(columns, pose_path, pose_writer)
        if pose_path is not None:
            pose_writer = flush_pose_columns(columns, pose_path, pose_writer)
            if pose_writer is None:
                pose_writer = pq.ParquetWriter(pose_path, POSE_LOG_SCHEMA)
    finally:
        if pose_writer is not None:
            pose_writer.close()

    logger.info(
        "walk %s finished: %d ticks, %d agents, %d stair entries, %d exits",
        run_id,
        len(steps),
        len(positions),
        entries,
        exits,
    )
    return WalkResult(
        run_id=run_id,
        ticks=len(steps),
        n_agents=len(positions),
        stair_entries=entries,
        stair_exits=exits,
        final_floors=tuple(position.floor for position in positions),
        final_distances=tuple(position.distance for position in positions),
        pose_log_path=pose_path,
    )


def run_walk(
    layout: Layout,
    config: WalkConfig | None = None,
    path_config: PathConfig | None = None,
    out_dir: Path | None = None,
    run_id: str = "walk",
) -> WalkResult:
    """Build an engine for *layout* and run a constant-speed scripted walk.

    With *out_dir*, writes ``layout.json``, ``walk_summary.json`` and the pose
    and trace logs under ``logs/``.
    """
    walk_config = config or WalkConfig()
    sink: TraceSink = NullSink()
    trace_path: Path | None = None
    if out_dir is not None:
        out_dir = Path(out_dir)
        logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
        trace_path = trace_log_path(out_dir)
        sink = ColumnarSink(trace_path)
        save_layout(layout, layout_path(out_dir))

    try:
        engine = PathEngine.from_layout(layout, config=path_config, sink=sink)
        positions = [
            engine.create_position(
                walk_config.start_distance + agent_id * walk_config.agent_spacing,
                walk_config.start_floor,
                agent_id=agent_id,
            )
            for agent_id in range(walk_config.n_agents)
        ]
        result = run_steps(
            engine, positions, scripted_steps(walk_config), run_id=run_id, out_dir=out_dir
        )
    finally:
        if isinstance(sink, ColumnarSink):
            sink.close()

    if out_dir is None:
        return result
    result = replace(result, trace_log_path=trace_path)
    summary_path(out_dir).write_text(
        json.dumps(result.to_summary(), ensure_ascii=False, indent=2), encoding="utf-8"
    )
    return result
