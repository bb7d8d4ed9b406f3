"""Matplotlib-based rendering of walk pose logs."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pyarrow.compute as pc
import pyarrow.parquet as pq

from stairwalk.io.layout_file import load_layout
from stairwalk.io.paths import resolve_within_base as _resolve_within_base

FLOOR_COLORS: list[str] = [
    "#4C72B0",
    "#DD8452",
    "#55A868",
    "#C44E52",
    "#8172B3",
    "#937860",
    "#DA8BC3",
]
PATH_COLOR = "#B0B0B0"
STAIRS_COLOR = "#222222"


def _floor_color(floor: int) -> str:
    return FLOOR_COLORS[floor % len(FLOOR_COLORS)]


def _draw_loop(ax: plt.Axes, nodes: np.ndarray) -> None:
    """Draw the closed node loop as a light outline."""
    closed = np.vstack([nodes, nodes[:1]])
    ax.plot(closed[:, 0], closed[:, 1], color=PATH_COLOR, linewidth=2, zorder=1)


def render_walk(
    pose_log_path: Path,
    output_path: Path,
    layout_json_path: Path | None = None,
    agent_id: int | None = None,
    base_dir: Path | None = None,
) -> Path:
    """Render a top-down trace (colored by floor) and an elevation-over-tick panel.

    When *base_dir* is given, every input and output path must resolve inside it.
    """
    if base_dir is not None:
        base_dir = Path(base_dir)
        pose_log_path = _resolve_within_base(Path(pose_log_path), base_dir)
        output_path = _resolve_within_base(Path(output_path), base_dir)
        if layout_json_path is not None:
            layout_json_path = _resolve_within_base(Path(layout_json_path), base_dir)

    table = pq.read_table(pose_log_path)
    if agent_id is not None:
        table = table.filter(pc.equal(table["agent_id"], agent_id))
    if table.num_rows == 0:
        raise ValueError(f"No pose rows found in {pose_log_path}")

    ticks = np.asarray(table.column("tick").to_pylist())
    agents = np.asarray(table.column("agent_id").to_pylist())
    xs = np.asarray(table.column("x").to_pylist(), dtype=float)
    ys = np.asarray(table.column("y").to_pylist(), dtype=float)
    zs = np.asarray(table.column("z").to_pylist(), dtype=float)
    floors = np.asarray(table.column("floor").to_pylist())
    on_stairs = np.asarray(table.column("on_stairs").to_pylist(), dtype=bool)

    fig, (ax_top, ax_elev) = plt.subplots(1, 2, figsize=(11, 5))

    if layout_json_path is not None:
        layout = load_layout(Path(layout_json_path))
        _draw_loop(ax_top, np.asarray([[n.x, n.y] for n in layout.nodes], dtype=float))

    for floor in sorted(set(floors.tolist())):
        mask = (floors == floor) & ~on_stairs
        ax_top.scatter(
            xs[mask], ys[mask], s=6, color=_floor_color(floor), label=f"Floor {floor}", zorder=2
        )
    if on_stairs.any():
        ax_top.scatter(
            xs[on_stairs], ys[on_stairs], s=8, color=STAIRS_COLOR, label="Stairs", zorder=3
        )
    ax_top.set_aspect("equal")
    ax_top.set_title("Top-down trace")
    ax_top.legend(loc="upper right", fontsize="small")

    for agent in sorted(set(agents.tolist())):
        mask = agents == agent
        ax_elev.plot(ticks[mask], zs[mask], linewidth=1.2, label=f"Agent {agent}")
    ax_elev.set_xlabel("Tick")
    ax_elev.set_ylabel("Elevation")
    ax_elev.set_title("Elevation")
    ax_elev.legend(loc="upper right", fontsize="small")

    fig.tight_layout()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
