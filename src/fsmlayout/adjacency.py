"""
Adjacency cache for the layout planner.

A state machine only records outgoing transitions, but the planner has to
reason about undirected connectivity: a state must know about the edges
coming into it as well. The cache builds an arena of ``SegmentSlot`` objects
and, per state, the list of arena indices touching that state.

Invariants:
- Exactly one slot per unordered pair of distinct connected states, however
  many symbols route between them.
- One slot per symbol for each self-transition; self-loops are never shared.
"""

import logging
from typing import Dict, FrozenSet, List

from .models import StateMachine
from .segments import DirectedSegment, SegmentSlot, SegmentStatus
from .vector import Vector2

logger = logging.getLogger(__name__)


class AdjacencyCache:
    """
    Per-state incident segment slots of a state machine.

    Attributes:
        slots: Arena of every slot, in transition order.
        resolved: Arena indices of slots whose endpoints are both placed, in
            the order they were resolved.
    """

    def __init__(self, machine: StateMachine):
        machine.validate()

        self.slots: List[SegmentSlot] = []
        self.resolved: List[int] = []
        self._incident: List[List[int]] = [[] for _ in machine.states]
        self._committed: Dict[int, Vector2] = {}

        pair_index: Dict[FrozenSet[int], int] = {}
        for src in machine.states:
            for symbol in machine.alphabet:
                dst = machine.destination(src, symbol)
                if src == dst:
                    self._add_slot(SegmentSlot(src, dst, symbol=symbol))
                    continue
                pair = frozenset((src, dst))
                if pair not in pair_index:
                    pair_index[pair] = self._add_slot(SegmentSlot(src, dst))

        logger.debug(
            "Built adjacency cache: %d states, %d slots (%d shared pairs)",
            machine.num_states,
            len(self.slots),
            len(pair_index),
        )

    def _add_slot(self, slot: SegmentSlot) -> int:
        index = len(self.slots)
        self.slots.append(slot)
        self._incident[slot.src].append(index)
        if not slot.is_loop:
            self._incident[slot.dst].append(index)
        return index

    def adjacency(self, state: int) -> List[SegmentSlot]:
        """Return every slot touching ``state``, in transition order."""
        return [self.slots[index] for index in self._incident[state]]

    def neighbors(self, state: int) -> List[int]:
        """Return the distinct states connected to ``state``, excluding itself."""
        result: List[int] = []
        for slot in self.adjacency(state):
            other = slot.other(state)
            if other != state and other not in result:
                result.append(other)
        return result

    def is_committed(self, state: int) -> bool:
        return state in self._committed

    def commit(self, state: int, position: Vector2) -> List[DirectedSegment]:
        """
        Fill in the endpoint of ``state`` on every incident slot.

        Args:
            state: State being placed.
            position: Its committed position.

        Returns:
            Segments that became fully resolved by this commit.
        """
        if state in self._committed:
            raise RuntimeError(f"State {state} is already committed")
        self._committed[state] = position

        newly_resolved: List[DirectedSegment] = []
        for index in self._incident[state]:
            slot = self.slots[index]
            slot.anchor(state, position)
            if slot.status is SegmentStatus.RESOLVED:
                self.resolved.append(index)
                newly_resolved.append(slot.resolve())
        return newly_resolved

    def resolved_segments(self) -> List[DirectedSegment]:
        return [self.slots[index].resolve() for index in self.resolved]
