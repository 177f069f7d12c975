"""
Edge routing for state machine diagrams.

Every transition is drawn as a spline bent through a control point. The
control point is stored as an EdgeOffset in the edge's local basis so that it
follows the states when they move:

- Inter-state edge: origin at the midpoint between the two states, x axis
  towards the destination, y axis rotated 90 degrees from it.
- Self-loop: origin one state size from the centre at 45 degrees, x axis
  along that diagonal, y axis at 135 degrees.

EdgeOffsetAssigner picks default offsets so that opposite edges, parallel
edges and self-loops do not overlap. The module functions turn offsets into
concrete points and convert dragged points back into offsets.
"""

import logging
import math
from collections import defaultdict
from typing import Dict, List

from . import vector as V
from .constants import STATE_SIZE
from .models import EdgeDetail, EdgeOffset, StateMachine
from .vector import Vector2

logger = logging.getLogger(__name__)

# Local basis of self-loops
LOOP_X_AXIS = V.unit(math.pi / 4)
LOOP_Y_AXIS = V.unit(math.pi * 3 / 4)


class EdgeOffsetAssigner:
    """
    Assigns default offsets to every transition of a machine.

    Rules, per state ``s`` and symbol ``c`` with destination ``d``:
    - Self-loop: fanned by the symbol's position ``i`` in the alphabet,
      ``((cos(i*pi/4) - 1) * size, sin(i*pi/4) * size)``.
    - ``d`` has a transition back to ``s``: ``(0, size / 4)``.
    - Otherwise: ``(0, 0)``.
    Several symbols routing from ``s`` to the same ``d`` are then fanned to
    ``(0, size / 4 * cos(k / (n - 1) * pi))`` for the k-th of n symbols.
    """

    def __init__(self, state_size: float = STATE_SIZE):
        if state_size <= 0:
            raise ValueError("state_size must be positive")
        self.state_size = state_size

    def assign(self, machine: StateMachine) -> List[Dict[str, EdgeOffset]]:
        """
        Compute default offsets.

        Args:
            machine: A validated machine.

        Returns:
            ``offsets[state][symbol]`` for every transition.
        """
        graph = machine.to_graph()
        quarter = self.state_size / 4

        offsets: List[Dict[str, EdgeOffset]] = []
        for src in machine.states:
            row: Dict[str, EdgeOffset] = {}
            families: Dict[int, List[str]] = defaultdict(list)

            for index, symbol in enumerate(machine.alphabet):
                dst = machine.destination(src, symbol)
                families[dst].append(symbol)
                if dst == src:
                    row[symbol] = self.loop_offset(index)
                elif graph.has_edge(dst, src):
                    row[symbol] = EdgeOffset(0.0, quarter)
                else:
                    row[symbol] = EdgeOffset()

            for dst, family in families.items():
                if dst == src or len(family) < 2:
                    continue
                for index, symbol in enumerate(family):
                    angle = index / (len(family) - 1) * math.pi
                    row[symbol] = EdgeOffset(0.0, quarter * math.cos(angle))

            offsets.append(row)

        logger.debug("Assigned offsets for %d transitions", graph.number_of_edges())
        return offsets

    def loop_offset(self, index: int) -> EdgeOffset:
        angle = index * math.pi / 4
        return EdgeOffset(
            (math.cos(angle) - 1) * self.state_size,
            math.sin(angle) * self.state_size,
        )


def connect_point(center: Vector2, direction: Vector2, state_size: float) -> Vector2:
    """Point on the state's circle in ``direction`` from its centre."""
    return V.add(center, V.set_length(direction, state_size / 2))


def control_point(p_src: Vector2, p_dst: Vector2, offset: EdgeOffset) -> Vector2:
    midpoint = V.lerp(p_src, p_dst, 0.5)
    x_axis = V.normalize(V.sub(midpoint, p_src))
    y_axis = V.rotate(x_axis, math.pi / 2)
    return V.add(
        V.add(midpoint, V.scale(x_axis, offset.x_offset)),
        V.scale(y_axis, offset.y_offset),
    )


def self_control_point(
    center: Vector2, offset: EdgeOffset, state_size: float
) -> Vector2:
    origin = V.add(center, V.set_length(LOOP_X_AXIS, state_size))
    return V.add(
        V.add(origin, V.scale(LOOP_X_AXIS, offset.x_offset)),
        V.scale(LOOP_Y_AXIS, offset.y_offset),
    )


def offset_from_point(p_src: Vector2, p_dst: Vector2, point: Vector2) -> EdgeOffset:
    """Inverse of ``control_point``."""
    origin = control_point(p_src, p_dst, EdgeOffset())
    x_offset, y_offset = V.decompose(V.sub(point, origin), V.sub(origin, p_src))
    return EdgeOffset(x_offset, y_offset)


def self_offset_from_point(
    center: Vector2, point: Vector2, state_size: float
) -> EdgeOffset:
    """Inverse of ``self_control_point``."""
    origin = self_control_point(center, EdgeOffset(), state_size)
    x_offset, y_offset = V.decompose(V.sub(point, origin), V.sub(origin, center))
    return EdgeOffset(x_offset, y_offset)


def edge_detail(
    p_src: Vector2,
    p_dst: Vector2,
    offset: EdgeOffset,
    state_size: float,
    is_loop: bool = False,
) -> EdgeDetail:
    """
    Build the drawable geometry of one transition.

    Args:
        p_src: Centre of the source state.
        p_dst: Centre of the destination state, ignored for a self-loop.
        offset: Control point offset of the transition.
        state_size: Diameter of a state circle.
        is_loop: Whether the transition leads back to its source.

    Returns:
        EdgeDetail with a 3-point spline for an inter-state edge, or a
        closed 5-point loop through two symmetric bulge points.
    """
    if is_loop:
        return _loop_detail(p_src, offset, state_size)

    ctrl = control_point(p_src, p_dst, offset)
    start = connect_point(p_src, V.sub(ctrl, p_src), state_size)
    end = connect_point(p_dst, V.sub(ctrl, p_dst), state_size)
    return EdgeDetail(
        connect_point=start,
        control_point=ctrl,
        spline=[tuple(start), tuple(ctrl), tuple(end)],
        offset=offset,
    )


def _loop_detail(center: Vector2, offset: EdgeOffset, state_size: float) -> EdgeDetail:
    ctrl = self_control_point(center, offset, state_size)
    axis = V.sub(ctrl, center)
    normal = V.normalize(V.rotate(axis, math.pi / 2))

    start = connect_point(center, axis, state_size)
    half = V.scale(V.sub(ctrl, start), 0.5)
    middle = V.add(start, half)
    bulge = V.scale(normal, V.length(half))

    points = [start, V.add(middle, bulge), ctrl, V.sub(middle, bulge), start]
    return EdgeDetail(
        connect_point=start,
        control_point=ctrl,
        spline=[tuple(p) for p in points],
        offset=offset,
    )
