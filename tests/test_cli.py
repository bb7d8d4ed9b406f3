"""Tests for stairwalk.cli argument parsing and subcommand dispatch."""

from __future__ import annotations

import json
from pathlib import Path

import matplotlib
import pytest

from stairwalk.cli import _parse_match_policy, main
from stairwalk.config.types import StairMatchPolicy
from stairwalk.domain.layout import build_reference_layout
from stairwalk.io.layout_file import save_layout

matplotlib.use("Agg")


def test_parse_match_policy_valid() -> None:
    assert _parse_match_policy("first") is StairMatchPolicy.FIRST
    assert _parse_match_policy("nearest") is StairMatchPolicy.NEAREST


def test_parse_match_policy_invalid() -> None:
    with pytest.raises(ValueError, match="match-policy must be one of first, nearest"):
        _parse_match_policy("random")


def test_main_no_subcommand_exits() -> None:
    with pytest.raises(SystemExit):
        main([])


def test_walk_prints_summary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_dir = tmp_path / "run"
    main(
        [
            "walk",
            "--out-dir",
            str(out_dir),
            "--floors",
            "3",
            "--ticks",
            "10",
            "--speed",
            "1.0",
            "--stair-every",
            "1",
            "--start-distance",
            "10",
            "--start-floor",
            "0",
            "--run-id",
            "cli",
        ]
    )
    summary = json.loads(capsys.readouterr().out)
    assert summary["mode"] == "walk"
    assert summary["run_id"] == "cli"
    assert summary["final_floors"] == [1]
    assert (out_dir / "logs" / "pose_log.parquet").exists()
    assert (out_dir / "walk_summary.json").exists()


def test_walk_from_layout_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    layout_file = save_layout(build_reference_layout(floor_count=2), tmp_path / "layout.json")
    main(
        [
            "walk",
            "--out-dir",
            str(tmp_path / "run"),
            "--layout",
            str(layout_file),
            "--ticks",
            "3",
            "--start-floor",
            "1",
        ]
    )
    summary = json.loads(capsys.readouterr().out)
    assert summary["ticks"] == 3
    assert summary["final_floors"] == [1]


def test_render_after_walk(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_dir = tmp_path / "run"
    main(["walk", "--out-dir", str(out_dir), "--ticks", "5"])
    capsys.readouterr()
    main(["render", "--run-dir", str(out_dir)])
    summary = json.loads(capsys.readouterr().out)
    assert summary["mode"] == "render"
    assert Path(summary["output"]).exists()


def test_walk_clamps_out_of_range_start_floor(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(
        [
            "walk",
            "--out-dir",
            str(tmp_path / "run"),
            "--floors",
            "3",
            "--ticks",
            "2",
            "--start-floor",
            "9",
        ]
    )
    summary = json.loads(capsys.readouterr().out)
    assert summary["final_floors"] == [2]
