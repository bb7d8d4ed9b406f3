"""Path construction helpers for walk output directories.

Centralises the directory/file naming conventions used by the walk runner,
the CLI and the renderer.
"""

from __future__ import annotations

from pathlib import Path


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Resolve *path* and ensure it stays within the trusted *base_dir*.

    Raises :exc:`ValueError` if the resolved path escapes the base directory.
    """
    candidate = path if path.is_absolute() else base_dir / path
    resolved = candidate.resolve()
    base_resolved = base_dir.resolve()
    if resolved != base_resolved and base_resolved not in resolved.parents:
        raise ValueError(f"Path escapes base_dir: {path}")
    return resolved


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def pose_log_path(out_dir: Path) -> Path:
    """Return path to the per-tick pose log Parquet file."""
    return logs_dir(out_dir) / "pose_log.parquet"


def trace_log_path(out_dir: Path) -> Path:
    """Return path to the trace event Parquet file."""
    return logs_dir(out_dir) / "trace_log.parquet"


def layout_path(out_dir: Path) -> Path:
    """Return path to the layout JSON used for a walk."""
    return out_dir / "layout.json"


def summary_path(out_dir: Path) -> Path:
    """Return path to the walk summary JSON file."""
    return out_dir / "walk_summary.json"
