"""Tests for stairwalk.domain.stairs module."""

from __future__ import annotations

import pytest

from stairwalk.config.types import PathConfig, PositionMode, StairMatchPolicy
from stairwalk.domain.errors import InvalidConnector, InvalidFloor
from stairwalk.domain.path_model import PathModel
from stairwalk.domain.position import PathPosition
from stairwalk.domain.stairs import StairConnector, StairRegistry, StairTransitionEngine
from stairwalk.domain.trace import RecordingSink, StairEntered, StairExited, StairRejected

RECTANGLE = [(0.0, 0.0), (20.0, 0.0), (20.0, 10.0), (0.0, 10.0)]


def _up(
    floor: int = 0, segment: int = 0, position: float = 5.0, arrival: int = 1
) -> StairConnector:
    return StairConnector(
        floor=floor,
        segment_index=segment,
        position_on_segment=position,
        arrival_segment=segment,
        arrival_position=position + 8.0,
        arrival_floor=arrival,
        going_up=True,
    )


@pytest.fixture
def path() -> PathModel:
    return PathModel.from_nodes(RECTANGLE)


class TestStairConnector:
    def test_valid_connector(self) -> None:
        connector = _up()
        assert connector.going_up
        assert connector.arrival_floor == 1

    def test_negative_position_rejected(self) -> None:
        with pytest.raises(InvalidConnector, match="position_on_segment"):
            _up(position=-0.5)

    def test_negative_floor_rejected(self) -> None:
        with pytest.raises(InvalidConnector, match="floors must be >= 0"):
            _up(floor=-1)

    def test_same_floor_rejected(self) -> None:
        with pytest.raises(InvalidConnector, match="arrival_floor must differ"):
            _up(floor=1, arrival=1)

    def test_direction_mismatch_rejected(self) -> None:
        with pytest.raises(InvalidConnector, match="going_up must match"):
            StairConnector(
                floor=1,
                segment_index=0,
                position_on_segment=1.0,
                arrival_segment=0,
                arrival_position=1.0,
                arrival_floor=0,
                going_up=True,
            )


class TestStairRegistry:
    def test_empty_registry_accepted(self) -> None:
        registry = StairRegistry.create(3)
        assert registry.floor_count == 3
        assert list(registry.connectors_for(1)) == []

    def test_groups_by_floor_in_registration_order(self) -> None:
        a, b, c = _up(position=1.0), _up(floor=1, arrival=2), _up(position=9.0)
        registry = StairRegistry.create(3, [a, b, c])
        assert list(registry.connectors_for(0)) == [(0, a), (2, c)]
        assert list(registry.connectors_for(1)) == [(1, b)]

    def test_floor_out_of_range_rejected(self) -> None:
        with pytest.raises(InvalidConnector, match="references a floor"):
            StairRegistry.create(2, [_up(floor=1, arrival=2)])

    def test_segment_out_of_range_rejected(self) -> None:
        with pytest.raises(InvalidConnector, match="references a segment"):
            StairRegistry.create(2, [_up(segment=4)], segment_count=4)

    def test_zero_floors_rejected(self) -> None:
        with pytest.raises(InvalidConnector, match="floor_count must be >= 1"):
            StairRegistry.create(0)

    def test_connectors_for_unknown_floor(self) -> None:
        registry = StairRegistry.create(2)
        with pytest.raises(InvalidFloor):
            list(registry.connectors_for(5))

    def test_match_requires_same_segment(self) -> None:
        registry = StairRegistry.create(2, [_up(segment=1)])
        assert registry.match(0, 0, 5.0, 1.2) is None
        assert registry.match(0, 1, 5.0, 1.2) is not None

    def test_match_window_is_strict(self) -> None:
        registry = StairRegistry.create(2, [_up(position=5.0)])
        assert registry.match(0, 0, 6.0, 1.0) is None
        assert registry.match(0, 0, 5.9, 1.0) is not None

    def test_first_policy_uses_registration_order(self) -> None:
        registry = StairRegistry.create(2, [_up(position=5.0), _up(position=6.0)])
        index, _ = registry.match(0, 0, 5.8, 1.2, StairMatchPolicy.FIRST)  # type: ignore[misc]
        assert index == 0

    def test_nearest_policy_prefers_closest(self) -> None:
        registry = StairRegistry.create(2, [_up(position=5.0), _up(position=6.0)])
        index, _ = registry.match(0, 0, 5.8, 1.2, StairMatchPolicy.NEAREST)  # type: ignore[misc]
        assert index == 1

    def test_nearest_policy_ties_break_by_registration(self) -> None:
        registry = StairRegistry.create(2, [_up(position=5.0), _up(position=6.0)])
        index, _ = registry.match(0, 0, 5.5, 1.2, StairMatchPolicy.NEAREST)  # type: ignore[misc]
        assert index == 0


class TestTryEnter:
    def test_enters_within_tolerance(self, path: PathModel) -> None:
        registry = StairRegistry.create(2, [_up()])
        engine = StairTransitionEngine(PathConfig(stair_entrance_tolerance=1.2))
        position = PathPosition(distance=9.5, floor=0)  # local offset 5.5
        assert engine.try_enter(path, registry, position)
        assert position.mode is PositionMode.ON_STAIRS
        assert position.stair_arrival_floor == 1
        assert position.stair_progress == 0.0
        assert position.stair_going_up
        assert position.floor == 0

    @pytest.mark.parametrize(
        ("distance", "expected"),
        [(7.9, True), (7.5, False), (10.1, True), (10.5, False), (9.0, True), (4.0, False)],
    )
    def test_entry_iff_within_tolerance(
        self, path: PathModel, distance: float, expected: bool
    ) -> None:
        registry = StairRegistry.create(2, [_up(position=5.0)])
        engine = StairTransitionEngine(PathConfig(stair_entrance_tolerance=1.2))
        position = PathPosition(distance=distance, floor=0)
        assert engine.try_enter(path, registry, position) is expected
        assert position.on_stairs is expected

    def test_wrong_floor_does_not_match(self, path: PathModel) -> None:
        registry = StairRegistry.create(2, [_up()])
        engine = StairTransitionEngine()
        position = PathPosition(distance=9.0, floor=1)
        assert not engine.try_enter(path, registry, position)
        assert position == PathPosition(distance=9.0, floor=1)

    def test_idempotently_false_while_on_stairs(self, path: PathModel) -> None:
        registry = StairRegistry.create(2, [_up()])
        sink = RecordingSink()
        engine = StairTransitionEngine(sink=sink)
        position = PathPosition(distance=9.0, floor=0)
        assert engine.try_enter(path, registry, position)
        position.stair_progress = 0.3
        snapshot = PathPosition(**position.__dict__)
        assert not engine.try_enter(path, registry, position)
        assert not engine.try_enter(path, registry, position)
        assert position == snapshot
        rejected = sink.of_kind("stair_rejected")
        assert [event.reason for event in rejected] == ["on_stairs", "on_stairs"]  # type: ignore[union-attr]

    def test_invalid_floor_returns_false(self, path: PathModel) -> None:
        registry = StairRegistry.create(2, [_up()])
        sink = RecordingSink()
        engine = StairTransitionEngine(sink=sink)
        position = PathPosition(distance=9.0, floor=7)
        assert not engine.try_enter(path, registry, position)
        assert not position.on_stairs
        assert isinstance(sink.events[-1], StairRejected)
        assert sink.events[-1].reason == "invalid_floor"

    def test_entry_emits_trace_event(self, path: PathModel) -> None:
        registry = StairRegistry.create(2, [_up()])
        sink = RecordingSink()
        engine = StairTransitionEngine(sink=sink)
        position = PathPosition(distance=9.0, floor=0, agent_id=7)
        engine.try_enter(path, registry, position)
        assert sink.events == [
            StairEntered(
                agent_id=7,
                distance=9.0,
                segment=0,
                floor=0,
                connector_index=0,
                arrival_floor=1,
                going_up=True,
            )
        ]


class TestAdvance:
    def _on_stairs(self) -> PathPosition:
        return PathPosition(
            distance=9.5,
            floor=0,
            on_stairs=True,
            stair_progress=0.0,
            stair_arrival_floor=1,
            stair_going_up=True,
        )

    def test_noop_on_floor(self) -> None:
        engine = StairTransitionEngine()
        position = PathPosition(distance=3.0, floor=1)
        engine.advance(position, 5.0)
        assert position == PathPosition(distance=3.0, floor=1)

    def test_progress_uses_absolute_delta(self) -> None:
        engine = StairTransitionEngine()
        position = self._on_stairs()
        engine.advance(position, -2.0)
        assert position.stair_progress == pytest.approx(0.25)
        engine.advance(position, 2.0)
        assert position.stair_progress == pytest.approx(0.5)

    def test_exit_after_run_threshold(self) -> None:
        engine = StairTransitionEngine()
        position = self._on_stairs()
        for delta in (2.0, 2.0, 2.0):
            engine.advance(position, delta)
        assert position.on_stairs
        assert position.stair_progress == pytest.approx(0.75)
        engine.advance(position, 1.2)
        assert not position.on_stairs
        assert position.floor == 1
        assert position.stair_progress == 0.0
        assert position.mode is PositionMode.ON_FLOOR

    def test_single_large_step_exits(self) -> None:
        engine = StairTransitionEngine()
        position = self._on_stairs()
        engine.advance(position, 7.2)
        assert not position.on_stairs
        assert position.floor == 1

    @pytest.mark.parametrize(("delta", "steps"), [(0.8, 9), (0.6, 12), (0.1, 72), (0.4, 18)])
    def test_many_small_steps_exit_at_threshold(self, delta: float, steps: int) -> None:
        engine = StairTransitionEngine()
        position = self._on_stairs()
        for _ in range(steps - 1):
            engine.advance(position, delta)
        assert position.on_stairs
        engine.advance(position, delta)
        assert not position.on_stairs
        assert position.floor == 1

    def test_just_below_threshold_stays(self) -> None:
        engine = StairTransitionEngine()
        position = self._on_stairs()
        engine.advance(position, 7.0)
        assert position.on_stairs
        assert position.stair_progress == pytest.approx(0.875)

    def test_progress_clamped_and_monotone(self) -> None:
        engine = StairTransitionEngine(PathConfig(stair_exit_threshold=1.0))
        position = self._on_stairs()
        seen = []
        for delta in (1.0, -1.0, 0.5, -0.5, 0.0, 3.0):
            engine.advance(position, delta)
            seen.append(position.stair_progress)
        assert seen == sorted(seen)
        assert all(0.0 <= value <= 1.0 for value in seen)

    def test_exit_fires_exactly_once(self) -> None:
        sink = RecordingSink()
        engine = StairTransitionEngine(sink=sink)
        position = self._on_stairs()
        for _ in range(40):
            engine.advance(position, 0.5)
        exits = [event for event in sink.events if isinstance(event, StairExited)]
        assert len(exits) == 1
        assert exits[0].departure_floor == 0
        assert exits[0].floor == 1
