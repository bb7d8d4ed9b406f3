"""CLI entrypoint for scripted walks and walk rendering.

This module owns argument parsing and subcommand dispatch. All domain logic
lives in the extracted modules:

- ``stairwalk.domain``             – path model, resolver, stairs, layouts
- ``stairwalk.simulation.walk``    – ``run_walk`` tick loop and persistence
- ``stairwalk.viz.render``         – matplotlib rendering of pose logs
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from stairwalk.config.constants import (
    CURVE_RADIUS,
    FLOOR_HEIGHT,
    NUM_FLOORS,
    REFERENCE_FLOOR,
    STAIR_ENTRANCE_TOLERANCE,
)
from stairwalk.config.types import PathConfig, StairMatchPolicy, WalkConfig
from stairwalk.domain.layout import build_reference_layout
from stairwalk.io.layout_file import load_layout
from stairwalk.io.paths import layout_path, pose_log_path
from stairwalk.simulation.walk import run_walk

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_match_policy(raw_policy: str) -> StairMatchPolicy:
    """Parse stair match policy from CLI."""
    try:
        return StairMatchPolicy(raw_policy)
    except ValueError as exc:
        valid = ", ".join(policy.value for policy in StairMatchPolicy)
        raise ValueError(f"match-policy must be one of {valid}") from exc


def _build_walk_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("walk", help="Run a scripted walk over a layout")
    parser.add_argument("--out-dir", type=Path, default=Path("data/walk"))
    parser.add_argument("--layout", type=Path, default=None, help="Layout JSON file")
    parser.add_argument("--floors", type=int, default=NUM_FLOORS)
    parser.add_argument("--ticks", type=int, default=200)
    parser.add_argument("--speed", type=float, default=0.5)
    parser.add_argument("--stair-every", type=int, default=0)
    parser.add_argument("--start-distance", type=float, default=0.0)
    parser.add_argument("--start-floor", type=int, default=REFERENCE_FLOOR)
    parser.add_argument("--agents", type=int, default=1)
    parser.add_argument("--agent-spacing", type=float, default=0.0)
    parser.add_argument("--tolerance", type=float, default=STAIR_ENTRANCE_TOLERANCE)
    parser.add_argument("--curve-radius", type=float, default=CURVE_RADIUS)
    parser.add_argument("--floor-height", type=float, default=FLOOR_HEIGHT)
    parser.add_argument("--match-policy", type=str, default=StairMatchPolicy.NEAREST.value)
    parser.add_argument("--run-id", type=str, default="walk")


def _build_render_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("render", help="Render a walk's pose log to an image")
    parser.add_argument("--run-dir", type=Path, required=True)
    parser.add_argument("--output", type=Path, default=None)
    parser.add_argument("--agent-id", type=int, default=None)


def _handle_walk(args: argparse.Namespace) -> dict[str, object]:
    if args.layout is not None:
        layout = load_layout(args.layout)
    else:
        layout = build_reference_layout(floor_count=args.floors)
    path_config = PathConfig(
        stair_entrance_tolerance=args.tolerance,
        curve_radius=args.curve_radius,
        floor_height=args.floor_height,
        num_floors=layout.floor_count,
        reference_floor=min(REFERENCE_FLOOR, layout.floor_count - 1),
        stair_match_policy=_parse_match_policy(args.match_policy),
    )
    walk_config = WalkConfig(
        ticks=args.ticks,
        speed=args.speed,
        stair_every=args.stair_every,
        start_distance=args.start_distance,
        start_floor=args.start_floor,
        n_agents=args.agents,
        agent_spacing=args.agent_spacing,
    )
    result = run_walk(
        layout, walk_config, path_config=path_config, out_dir=args.out_dir, run_id=args.run_id
    )
    return {"mode": "walk", "out_dir": str(args.out_dir), **result.to_summary()}


def _handle_render(args: argparse.Namespace) -> dict[str, object]:
    from stairwalk.viz.render import render_walk

    run_dir: Path = args.run_dir
    output = args.output or run_dir / "walk.png"
    layout_json = layout_path(run_dir)
    written = render_walk(
        pose_log_path(run_dir),
        output,
        layout_json_path=layout_json if layout_json.exists() else None,
        agent_id=args.agent_id,
    )
    return {"mode": "render", "output": str(written)}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="stairwalk", description=__doc__.splitlines()[0])
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _build_walk_parser(subparsers)
    _build_render_parser(subparsers)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if args.command == "walk":
        summary = _handle_walk(args)
    else:
        summary = _handle_render(args)
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
