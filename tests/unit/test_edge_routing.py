"""Unit tests for edge offsets and edge geometry."""

import math

import pytest

from fsmlayout import (
    EdgeOffset,
    EdgeOffsetAssigner,
    StateMachine,
    Vector2,
    connect_point,
    control_point,
    edge_detail,
    offset_from_point,
    self_control_point,
    self_offset_from_point,
)
from fsmlayout.edge_routing import LOOP_X_AXIS


def assert_offset(actual, x, y):
    assert actual.x_offset == pytest.approx(x, abs=1e-9)
    assert actual.y_offset == pytest.approx(y, abs=1e-9)


def assert_point(actual, expected):
    assert actual[0] == pytest.approx(expected[0], abs=1e-9)
    assert actual[1] == pytest.approx(expected[1], abs=1e-9)


@pytest.fixture
def assigner():
    return EdgeOffsetAssigner(50)


class TestEdgeOffsetAssigner:
    """Tests for default offset assignment."""

    def test_two_state_machine(self, assigner, two_state_machine):
        offsets = assigner.assign(two_state_machine)

        # Mutual edges on '0' are pushed apart
        assert_offset(offsets[0]["0"], 0.0, 12.5)
        assert_offset(offsets[1]["0"], 0.0, 12.5)
        # Self-loops on the second symbol are fanned away from the default
        loop = offsets[1]["1"]
        assert (loop.x_offset, loop.y_offset) != (0.0, 0.0)
        angle = math.pi / 4
        assert_offset(loop, (math.cos(angle) - 1) * 50, math.sin(angle) * 50)
        assert offsets[0]["1"] == loop

    def test_first_symbol_loop_at_default(self, assigner):
        machine = StateMachine(1, [{"0": 0, "1": 0}])
        assert_offset(assigner.assign(machine)[0]["0"], 0.0, 0.0)

    def test_one_way_edge_is_straight(self, assigner, chain_machine):
        offsets = assigner.assign(chain_machine)
        assert_offset(offsets[0]["a"], 0.0, 0.0)
        assert_offset(offsets[1]["a"], 0.0, 0.0)

    def test_same_destination_fan(self, assigner):
        machine = StateMachine(
            num_states=2,
            transitions=[{"a": 1, "b": 1, "c": 1}, {"a": 1, "b": 1, "c": 1}],
            alphabet=("a", "b", "c"),
        )
        offsets = assigner.assign(machine)
        assert_offset(offsets[0]["a"], 0.0, 12.5)
        assert_offset(offsets[0]["b"], 0.0, 0.0)
        assert_offset(offsets[0]["c"], 0.0, -12.5)

    def test_fan_overrides_reverse_offset(self, assigner):
        machine = StateMachine(
            num_states=2,
            transitions=[{"a": 1, "b": 1}, {"a": 0, "b": 1}],
            alphabet=("a", "b"),
        )
        offsets = assigner.assign(machine)
        assert_offset(offsets[0]["a"], 0.0, 12.5)
        assert_offset(offsets[0]["b"], 0.0, -12.5)
        assert_offset(offsets[1]["a"], 0.0, 12.5)

    def test_loops_are_not_fanned_together(self, assigner):
        machine = StateMachine(1, [{"0": 0, "1": 0}])
        offsets = assigner.assign(machine)
        assert offsets[0]["0"] == assigner.loop_offset(0)
        assert offsets[0]["1"] == assigner.loop_offset(1)

    def test_loop_offsets_distinct(self, assigner):
        offsets = [assigner.loop_offset(i) for i in range(8)]
        assert len({(o.x_offset, o.y_offset) for o in offsets}) == 8

    def test_shape_matches_machine(self, assigner):
        machine = StateMachine.random(6, alphabet=("x", "y", "z"), seed=11)
        offsets = assigner.assign(machine)
        assert len(offsets) == 6
        assert all(set(row) == {"x", "y", "z"} for row in offsets)

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            EdgeOffsetAssigner(0)


class TestGeometry:
    """Tests for control and connect points."""

    def test_connect_point_on_circle(self):
        point = connect_point(Vector2(10.0, 10.0), Vector2(0.0, 5.0), 50)
        assert_point(point, (10.0, 35.0))

    def test_zero_offset_control_at_midpoint(self):
        ctrl = control_point(Vector2(0.0, 0.0), Vector2(100.0, 0.0), EdgeOffset())
        assert_point(ctrl, (50.0, 0.0))

    def test_control_point_basis(self):
        ctrl = control_point(
            Vector2(0.0, 0.0), Vector2(100.0, 0.0), EdgeOffset(10.0, 12.5)
        )
        assert_point(ctrl, (60.0, 12.5))

    def test_control_point_follows_direction(self):
        ctrl = control_point(
            Vector2(100.0, 0.0), Vector2(0.0, 0.0), EdgeOffset(0.0, 12.5)
        )
        assert_point(ctrl, (50.0, -12.5))

    def test_self_control_point_default(self):
        ctrl = self_control_point(Vector2(0.0, 0.0), EdgeOffset(), 50)
        assert_point(ctrl, (LOOP_X_AXIS.x * 50, LOOP_X_AXIS.y * 50))

    def test_offset_inverse(self):
        p_src, p_dst = Vector2(30.0, 40.0), Vector2(230.0, -60.0)
        offset = EdgeOffset(-7.0, 21.0)
        point = control_point(p_src, p_dst, offset)
        assert_offset(offset_from_point(p_src, p_dst, point), -7.0, 21.0)

    def test_self_offset_inverse(self):
        center = Vector2(120.0, 80.0)
        offset = EdgeOffset(-14.6, 35.4)
        point = self_control_point(center, offset, 50)
        assert_offset(self_offset_from_point(center, point, 50), -14.6, 35.4)

    def test_offset_inverse_coincident_states(self):
        p = Vector2(10.0, 10.0)
        assert_offset(offset_from_point(p, p, Vector2(40.0, 0.0)), 0.0, 0.0)


class TestEdgeDetail:
    """Tests for edge_detail."""

    def test_straight_edge(self):
        detail = edge_detail(Vector2(0.0, 0.0), Vector2(200.0, 0.0), EdgeOffset(), 50)
        assert len(detail.spline) == 3
        assert_point(detail.spline[0], (25.0, 0.0))
        assert_point(detail.spline[1], (100.0, 0.0))
        assert_point(detail.spline[2], (175.0, 0.0))
        assert detail.connect_point == detail.spline[0]

    def test_curved_edge_leaves_towards_control(self):
        detail = edge_detail(
            Vector2(0.0, 0.0), Vector2(200.0, 0.0), EdgeOffset(0.0, 12.5), 50
        )
        start, ctrl, end = detail.spline
        assert_point(ctrl, (100.0, 12.5))
        assert start[1] > 0
        assert end[1] > 0
        assert math.hypot(*start) == pytest.approx(25.0)

    def test_loop_is_closed(self):
        center = Vector2(300.0, 300.0)
        detail = edge_detail(center, center, EdgeOffset(), 50, is_loop=True)
        assert len(detail.spline) == 5
        assert detail.spline[0] == detail.spline[-1]
        assert_point(detail.spline[2], detail.control_point)
        start = detail.spline[0]
        assert math.hypot(start[0] - 300.0, start[1] - 300.0) == pytest.approx(25.0)

    def test_loop_bulges_symmetric(self):
        center = Vector2(0.0, 0.0)
        detail = edge_detail(center, center, EdgeOffset(), 50, is_loop=True)
        start, left, ctrl, right, _ = detail.spline
        middle = ((start[0] + ctrl[0]) / 2, (start[1] + ctrl[1]) / 2)
        assert_point(((left[0] + right[0]) / 2, (left[1] + right[1]) / 2), middle)
        assert left != right
