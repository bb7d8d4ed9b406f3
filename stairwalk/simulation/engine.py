"""Path engine facade: the public contract used by agent controllers.

The engine owns the current path model and stair registry and exposes the
per-tick operations (``translate``, ``try_stairs``) plus the per-frame
queries (``get_position``, ``get_facing``). Configuration is swapped in as
whole immutable objects, so any number of agents can share one engine.

Queries issued before a path exists never raise; they log a warning and
return a neutral default instead. Positions are wrapped onto the current
path on every call, so they stay valid after ``define_path`` swaps in a
loop of a different length.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import replace

from stairwalk.config.constants import DEFAULT_FACING
from stairwalk.config.types import PathConfig
from stairwalk.domain.errors import PathUndefined
from stairwalk.domain.geometry import Point3, Vec2
from stairwalk.domain.layout import Layout
from stairwalk.domain.path_model import NodeLike, PathModel
from stairwalk.domain.position import PathPosition
from stairwalk.domain.resolver import facing_direction, resolve_position
from stairwalk.domain.stairs import StairConnector, StairRegistry, StairTransitionEngine
from stairwalk.domain.trace import FloorsDefined, NullSink, PathDefined, TraceSink

logger = logging.getLogger(__name__)

ConfigListener = Callable[["PathEngine"], None]


class PathEngine:
    """Shared path/stair configuration plus the operations agents call each tick."""

    def __init__(self, config: PathConfig | None = None, sink: TraceSink | None = None) -> None:
        self.config = config or PathConfig()
        self.sink: TraceSink = sink or NullSink()
        self._path = PathModel.undefined()
        self._registry = StairRegistry.create(self.config.num_floors)
        self._stairs = StairTransitionEngine(self.config, self.sink)
        self._listeners: list[ConfigListener] = []

    @classmethod
    def from_layout(
        cls, layout: Layout, config: PathConfig | None = None, sink: TraceSink | None = None
    ) -> PathEngine:
        engine = cls(config=config, sink=sink)
        engine.define_path(layout.nodes)
        engine.define_floors(layout.floor_count, layout.connectors)
        return engine

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def path(self) -> PathModel:
        return self._path

    @property
    def registry(self) -> StairRegistry:
        return self._registry

    @property
    def is_path_defined(self) -> bool:
        return self._path.defined

    def add_config_listener(self, listener: ConfigListener) -> None:
        """Call *listener* after every completed ``define_path``/``define_floors``."""
        self._listeners.append(listener)

    def remove_config_listener(self, listener: ConfigListener) -> None:
        self._listeners.remove(listener)

    def define_path(self, nodes: Iterable[NodeLike]) -> None:
        """Replace the path. Raises ``InvalidPath`` and keeps the old path on bad input."""
        path = PathModel.from_nodes(nodes)
        self._path = path
        logger.info(
            "path defined: %d nodes, total length %.3f", path.segment_count, path.total_length
        )
        self.sink.emit(PathDefined(node_count=path.segment_count, total_length=path.total_length))
        self._notify()

    def define_floors(self, floor_count: int, connectors: Iterable[StairConnector] = ()) -> None:
        """Replace the stair registry. Raises ``InvalidConnector`` and keeps the old one."""
        segment_count = self._path.segment_count if self._path.defined else None
        registry = StairRegistry.create(floor_count, connectors, segment_count=segment_count)
        self._registry = registry
        logger.info(
            "floors defined: %d floors, %d connectors",
            registry.floor_count,
            len(registry.connectors),
        )
        self.sink.emit(
            FloorsDefined(
                floor_count=registry.floor_count, connector_count=len(registry.connectors)
            )
        )
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Per-agent operations
    # ------------------------------------------------------------------

    def create_position(
        self, distance: float = 0.0, floor: int | None = None, agent_id: int = 0
    ) -> PathPosition:
        """New on-floor position with *distance* wrapped into the loop.

        *floor* defaults to the configured reference floor; a floor outside
        the registry is clamped to the nearest valid one.
        """
        resolved_floor = self.config.reference_floor if floor is None else floor
        if not self._registry.has_floor(resolved_floor):
            clamped = min(max(resolved_floor, 0), self._registry.floor_count - 1)
            logger.warning(
                "floor %d outside [0, %d); clamped to %d",
                resolved_floor,
                self._registry.floor_count,
                clamped,
            )
            resolved_floor = clamped
        try:
            wrapped = self._path.wrap(distance)
        except PathUndefined:
            logger.warning("create_position before define_path; distance reset to 0")
            wrapped = 0.0
        return PathPosition(
            distance=wrapped,
            floor=resolved_floor,
            stair_arrival_floor=resolved_floor,
            agent_id=agent_id,
        )

    def translate(self, position: PathPosition, delta: float) -> None:
        """Move *position* by *delta* along the loop, advancing any stair flight."""
        if not math.isfinite(delta):
            logger.warning("ignoring non-finite translate delta %r", delta)
            return
        try:
            distance = self._path.wrap(position.distance + delta)
        except PathUndefined:
            logger.warning("translate before define_path; position unchanged")
            return
        position.distance = distance
        self._stairs.advance(position, delta)

    def try_stairs(self, position: PathPosition) -> bool:
        """Enter stairs if *position* stands at an entrance on its floor."""
        try:
            position.distance = self._path.wrap(position.distance)
            return self._stairs.try_enter(self._path, self._registry, position)
        except PathUndefined:
            logger.warning("try_stairs before define_path; request ignored")
            return False

    def get_position(self, position: PathPosition) -> Point3:
        try:
            wrapped = replace(position, distance=self._path.wrap(position.distance))
            return resolve_position(self._path, wrapped, self.config)
        except PathUndefined:
            logger.warning("get_position before define_path; returning origin")
            return Point3(0.0, 0.0, 0.0)

    def get_facing(self, position: PathPosition) -> Vec2:
        try:
            distance = self._path.wrap(position.distance)
            return facing_direction(self._path, distance, self.config.curve_radius)
        except PathUndefined:
            logger.warning("get_facing before define_path; returning default facing")
            return Vec2(*DEFAULT_FACING)

    def segment_of(self, position: PathPosition) -> int:
        """Segment currently owning *position*; -1 when no path is defined."""
        if not self._path.defined:
            return -1
        return self._path.locate_segment(self._path.wrap(position.distance))
