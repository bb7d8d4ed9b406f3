"""JSON persistence for layouts (node loop, floor count, stair connectors)."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from stairwalk.config.constants import LAYOUT_SCHEMA_VERSION
from stairwalk.domain.geometry import Vec2
from stairwalk.domain.layout import Layout
from stairwalk.domain.stairs import StairConnector

_CONNECTOR_FIELDS = (
    "floor",
    "segment_index",
    "position_on_segment",
    "arrival_segment",
    "arrival_position",
    "arrival_floor",
    "going_up",
)


def layout_to_payload(layout: Layout) -> dict[str, object]:
    return {
        "schema_version": LAYOUT_SCHEMA_VERSION,
        "nodes": [[node.x, node.y] for node in layout.nodes],
        "floor_count": layout.floor_count,
        "connectors": [asdict(connector) for connector in layout.connectors],
    }


def layout_from_payload(payload: dict[str, object]) -> Layout:
    """Rebuild a layout, raising :exc:`ValueError` on malformed payloads."""
    version = payload.get("schema_version")
    if version != LAYOUT_SCHEMA_VERSION:
        raise ValueError(
            f"unsupported layout schema_version {version!r}; expected {LAYOUT_SCHEMA_VERSION}"
        )

    raw_nodes = payload.get("nodes")
    if not isinstance(raw_nodes, list):
        raise ValueError("layout nodes must be a list of [x, y] pairs")
    nodes: list[Vec2] = []
    for raw in raw_nodes:
        if not isinstance(raw, list) or len(raw) != 2:
            raise ValueError(f"layout node must be an [x, y] pair, got {raw!r}")
        nodes.append(Vec2(float(raw[0]), float(raw[1])))

    floor_count = payload.get("floor_count")
    if isinstance(floor_count, bool) or not isinstance(floor_count, int):
        raise ValueError("layout floor_count must be an integer")

    raw_connectors = payload.get("connectors", [])
    if not isinstance(raw_connectors, list):
        raise ValueError("layout connectors must be a list")
    connectors: list[StairConnector] = []
    for raw in raw_connectors:
        if not isinstance(raw, dict):
            raise ValueError(f"layout connector must be an object, got {raw!r}")
        missing = [name for name in _CONNECTOR_FIELDS if name not in raw]
        if missing:
            raise ValueError(f"layout connector missing fields: {', '.join(missing)}")
        connectors.append(
            StairConnector(
                floor=int(raw["floor"]),
                segment_index=int(raw["segment_index"]),
                position_on_segment=float(raw["position_on_segment"]),
                arrival_segment=int(raw["arrival_segment"]),
                arrival_position=float(raw["arrival_position"]),
                arrival_floor=int(raw["arrival_floor"]),
                going_up=bool(raw["going_up"]),
            )
        )
    return Layout(nodes=tuple(nodes), floor_count=floor_count, connectors=tuple(connectors))


def save_layout(layout: Layout, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(layout_to_payload(layout), ensure_ascii=False, indent=2), encoding="utf-8"
    )
    return path


def load_layout(path: Path) -> Layout:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("layout file must contain a JSON object")
    return layout_from_payload(payload)
