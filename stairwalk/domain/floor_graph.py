"""Floor connectivity derived from a stair registry.

Floors are nodes and connectors are directed edges, so reachability
questions ("can an agent starting on floor 2 ever reach floor 4?") reduce
to graph traversal.
"""

from __future__ import annotations

import networkx as nx

from stairwalk.domain.errors import InvalidFloor
from stairwalk.domain.stairs import StairRegistry


def build_floor_graph(registry: StairRegistry) -> nx.MultiDiGraph:
    """Return a multigraph with one node per floor and one edge per connector.

    Edge attributes: ``connector_index``, ``segment_index``, ``going_up``.
    """
    graph = nx.MultiDiGraph()
    graph.add_nodes_from(range(registry.floor_count))
    for index, connector in enumerate(registry.connectors):
        graph.add_edge(
            connector.floor,
            connector.arrival_floor,
            connector_index=index,
            segment_index=connector.segment_index,
            going_up=connector.going_up,
        )
    return graph


def reachable_floors(registry: StairRegistry, start_floor: int) -> frozenset[int]:
    """Floors reachable from *start_floor* by any sequence of flights (inclusive)."""
    if not registry.has_floor(start_floor):
        raise InvalidFloor(f"floor {start_floor} outside [0, {registry.floor_count})")
    graph = build_floor_graph(registry)
    return frozenset(nx.descendants(graph, start_floor) | {start_floor})


def unreachable_floors(registry: StairRegistry, start_floor: int) -> list[int]:
    """Sorted floors that no stair sequence reaches from *start_floor*."""
    reachable = reachable_floors(registry, start_floor)
    return [floor for floor in range(registry.floor_count) if floor not in reachable]
