"""
Directed segments and the segment relation classifier.

A segment is the straight line between two placed states. The planner uses
segments only for crossing analysis; the curves shown to the user are built
separately in edge_routing.

Segments go through three stages while a layout pass runs. A ``SegmentSlot``
starts UNRESOLVED, becomes PENDING once one endpoint state is placed, and
RESOLVED once both are. Only a resolved slot can produce a
``DirectedSegment``, the sole input type of ``classify_connection``.
Self-loop slots are tagged LOOP and never take part in crossing checks.
"""

from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import Iterable, Optional

from . import vector as V
from .constants import MIN_DISTANCE, MIN_THR
from .vector import Vector2


class ConnectionType(Enum):
    """How two directed segments relate to each other."""

    SEPARATED = "separated"  # No common point, or only a shared endpoint
    CROSSING = "crossing"  # Exactly one interior intersection
    DEGENERATE = "degenerate"  # Overlap or an endpoint lying on the other


class SegmentStatus(Enum):
    """Resolution stage of a segment slot."""

    UNRESOLVED = 0
    PENDING = 1
    RESOLVED = 2
    LOOP = 3


@dataclass(frozen=True)
class DirectedSegment:
    """A segment with both endpoints placed."""

    src: int
    dst: int
    p_src: Vector2
    p_dst: Vector2
    direction: Vector2

    @classmethod
    def between(
        cls, src: int, dst: int, p_src: Vector2, p_dst: Vector2
    ) -> "DirectedSegment":
        return cls(src, dst, p_src, p_dst, V.sub(p_dst, p_src))

    @property
    def length(self) -> float:
        return V.length(self.direction)


@dataclass
class SegmentSlot:
    """
    Arena entry for a segment whose endpoints are filled in progressively.

    Attributes:
        src: Source state of the first transition that created the slot.
        dst: Destination state of that transition.
        symbol: Symbol of a self-loop slot, None for shared slots.
        p_src: Position of ``src`` once placed.
        p_dst: Position of ``dst`` once placed.
    """

    src: int
    dst: int
    symbol: Optional[str] = None
    p_src: Optional[Vector2] = None
    p_dst: Optional[Vector2] = None

    @property
    def is_loop(self) -> bool:
        return self.src == self.dst

    @property
    def status(self) -> SegmentStatus:
        if self.is_loop:
            return SegmentStatus.LOOP
        filled = (self.p_src is not None) + (self.p_dst is not None)
        return (
            SegmentStatus.UNRESOLVED,
            SegmentStatus.PENDING,
            SegmentStatus.RESOLVED,
        )[filled]

    def other(self, state: int) -> int:
        """Return the endpoint opposite to ``state``."""
        return self.dst if state == self.src else self.src

    def anchor(self, state: int, position: Vector2) -> None:
        """Fill the endpoint belonging to ``state``."""
        if state == self.src:
            if self.p_src is not None:
                raise RuntimeError(f"State {state} already anchored on {self}")
            self.p_src = position
            if self.is_loop:
                self.p_dst = position
        elif state == self.dst:
            if self.p_dst is not None:
                raise RuntimeError(f"State {state} already anchored on {self}")
            self.p_dst = position
        else:
            raise RuntimeError(f"State {state} is not an endpoint of {self}")

    def resolve(self) -> DirectedSegment:
        if self.status is not SegmentStatus.RESOLVED:
            raise RuntimeError(
                f"Cannot resolve segment {self.src}->{self.dst} "
                f"in status {self.status.name}"
            )
        return DirectedSegment.between(self.src, self.dst, self.p_src, self.p_dst)


def line_side(p_src: Vector2, direction: Vector2, point: Vector2) -> int:
    """
    Return which side of a line ``point`` lies on.

    The line passes through ``p_src`` along ``direction``.

    Returns:
        ``1`` or ``-1`` for the two sides, ``0`` if the point is within
        MIN_DISTANCE of the line.

    Raises:
        ValueError: If ``direction`` has zero length.
    """
    if V.length(direction) < MIN_THR:
        raise ValueError("line_side: zero-length direction cannot be handled")

    offset = V.decompose(V.sub(point, p_src), direction)[1]
    if offset > MIN_DISTANCE:
        return 1
    if offset < -MIN_DISTANCE:
        return -1
    return 0


def classify_connection(a: DirectedSegment, b: DirectedSegment) -> ConnectionType:
    """
    Classify the relation between two placed segments.

    Crossings are only costly for the planner; degenerate relations
    (overlapping segments, an endpoint lying on the other segment) must be
    avoided altogether, so a boolean intersection test is not enough.

    Args:
        a: First segment, positive length.
        b: Second segment, positive length.

    Returns:
        SEPARATED, CROSSING or DEGENERATE.
    """
    a_src_side = line_side(b.p_src, b.direction, a.p_src)
    a_dst_side = line_side(b.p_src, b.direction, a.p_dst)
    b_src_side = line_side(a.p_src, a.direction, b.p_src)
    b_dst_side = line_side(a.p_src, a.direction, b.p_dst)

    a_product = a_src_side * a_dst_side
    b_product = b_src_side * b_dst_side

    if a_product > 0 or b_product > 0:
        return ConnectionType.SEPARATED

    if a_src_side == a_dst_side == b_src_side == b_dst_side == 0:
        t_src = V.projection_ratio(V.sub(b.p_src, a.p_src), a.direction)
        t_dst = V.projection_ratio(V.sub(b.p_dst, a.p_src), a.direction)
        t_min, t_max = min(t_src, t_dst), max(t_src, t_dst)
        if t_max <= MIN_THR or t_min >= 1 - MIN_THR:
            return ConnectionType.SEPARATED
        return ConnectionType.DEGENERATE

    if a_product == 0 or b_product == 0:
        # Two edges meeting at a shared state touch only at their endpoints
        if a_product == 0 and b_product == 0:
            return ConnectionType.SEPARATED
        return ConnectionType.DEGENERATE

    return ConnectionType.CROSSING


def count_crossings(segments: Iterable[DirectedSegment]) -> int:
    """Count the pairs of segments that cross each other."""
    return sum(
        1
        for a, b in combinations(list(segments), 2)
        if classify_connection(a, b) is ConnectionType.CROSSING
    )
