"""Parquet persistence helpers for pose and trace log streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from stairwalk.io.schemas import POSE_LOG_SCHEMA, TRACE_SCHEMA


def flush_columns(
    columns: dict[str, list[object]],
    log_path: Path,
    writer: pq.ParquetWriter | None,
    schema: pa.Schema,
) -> pq.ParquetWriter | None:
    """Write accumulated rows to Parquet and clear in-memory buffers."""
    first = schema.names[0]
    if not columns[first]:
        return writer
    table = pa.Table.from_pydict(columns, schema=schema)
    if writer is None:
        writer = pq.ParquetWriter(log_path, schema)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer


def flush_pose_columns(
    pose_columns: dict[str, list[object]],
    pose_log_path: Path,
    pose_writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    return flush_columns(pose_columns, pose_log_path, pose_writer, POSE_LOG_SCHEMA)


def flush_trace_columns(
    trace_columns: dict[str, list[object]],
    trace_log_path: Path,
    trace_writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    return flush_columns(trace_columns, trace_log_path, trace_writer, TRACE_SCHEMA)
