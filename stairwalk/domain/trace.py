"""Structured trace events and the sinks that receive them.

The engine reports configuration changes and stair decisions as typed,
frozen events rather than log lines, so tests and tools can consume them
without parsing text. Any object with an ``emit(event)`` method is a sink.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Protocol, Union

import pyarrow.parquet as pq

from stairwalk.config.constants import FLUSH_THRESHOLD
from stairwalk.io.schemas import TRACE_SCHEMA


@dataclass(frozen=True)
class PathDefined:
    kind: ClassVar[str] = "path_defined"

    node_count: int
    total_length: float

    def as_row(self) -> dict[str, object]:
        return {"detail": f"nodes={self.node_count} total_length={self.total_length:g}"}


@dataclass(frozen=True)
class FloorsDefined:
    kind: ClassVar[str] = "floors_defined"

    floor_count: int
    connector_count: int

    def as_row(self) -> dict[str, object]:
        return {"detail": f"floors={self.floor_count} connectors={self.connector_count}"}


@dataclass(frozen=True)
class StairEntered:
    kind: ClassVar[str] = "stair_entered"

    agent_id: int
    distance: float
    segment: int
    floor: int
    connector_index: int
    arrival_floor: int
    going_up: bool

    def as_row(self) -> dict[str, object]:
        return {
            "agent_id": self.agent_id,
            "distance": self.distance,
            "segment": self.segment,
            "floor": self.floor,
            "connector_index": self.connector_index,
            "arrival_floor": self.arrival_floor,
            "detail": "up" if self.going_up else "down",
        }


@dataclass(frozen=True)
class StairRejected:
    """``reason`` is one of ``on_stairs``, ``invalid_floor`` or ``no_match``."""

    kind: ClassVar[str] = "stair_rejected"

    agent_id: int
    distance: float
    floor: int
    reason: str
    segment: int | None = None

    def as_row(self) -> dict[str, object]:
        return {
            "agent_id": self.agent_id,
            "distance": self.distance,
            "segment": self.segment,
            "floor": self.floor,
            "detail": self.reason,
        }


@dataclass(frozen=True)
class StairProgressed:
    kind: ClassVar[str] = "stair_progressed"

    agent_id: int
    distance: float
    floor: int
    arrival_floor: int
    progress: float

    def as_row(self) -> dict[str, object]:
        return {
            "agent_id": self.agent_id,
            "distance": self.distance,
            "floor": self.floor,
            "arrival_floor": self.arrival_floor,
            "progress": self.progress,
        }


@dataclass(frozen=True)
class StairExited:
    kind: ClassVar[str] = "stair_exited"

    agent_id: int
    distance: float
    departure_floor: int
    floor: int

    def as_row(self) -> dict[str, object]:
        return {
            "agent_id": self.agent_id,
            "distance": self.distance,
            "floor": self.floor,
            "detail": f"from={self.departure_floor}",
        }


TraceEvent = Union[
    PathDefined, FloorsDefined, StairEntered, StairRejected, StairProgressed, StairExited
]


class TraceSink(Protocol):
    def emit(self, event: TraceEvent) -> None: ...


class NullSink:
    """Discards every event."""

    def emit(self, event: TraceEvent) -> None:
        return None


@dataclass
class RecordingSink:
    """Keeps events in memory, in emission order."""

    events: list[TraceEvent] = field(default_factory=list)

    def emit(self, event: TraceEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: str) -> list[TraceEvent]:
        return [event for event in self.events if event.kind == kind]

    def clear(self) -> None:
        self.events.clear()


def empty_trace_columns() -> dict[str, list[object]]:
    return {name: [] for name in TRACE_SCHEMA.names}


class ColumnarSink:
    """Buffers events as Arrow-ready columns and streams them to Parquet.

    ``tick`` is stamped onto every row; the driving loop updates it.
    """

    def __init__(self, path: Path, flush_threshold: int = FLUSH_THRESHOLD) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        self.path = Path(path)
        self.flush_threshold = flush_threshold
        self.tick = 0
        self.rows_written = 0
        self._columns = empty_trace_columns()
        self._writer: pq.ParquetWriter | None = None

    def emit(self, event: TraceEvent) -> None:
        row = {"tick": self.tick, "kind": event.kind, **event.as_row()}
        for name, values in self._columns.items():
            values.append(row.get(name))
        if len(self._columns["kind"]) >= self.flush_threshold:
            self.flush()

    def flush(self) -> None:
        from stairwalk.simulation.persistence import flush_trace_columns

        buffered = len(self._columns["kind"])
        self._writer = flush_trace_columns(self._columns, self.path, self._writer)
        self.rows_written += buffered

    def close(self) -> None:
        """Flush remaining rows and finalize the file (written empty if no events)."""
        self.flush()
        if self._writer is None:
            self._writer = pq.ParquetWriter(self.path, TRACE_SCHEMA)
        self._writer.close()
        self._writer = None

    def __enter__(self) -> ColumnarSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
