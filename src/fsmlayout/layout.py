"""
Layout planner: constructive, DFS-driven placement of states.

States are placed one at a time in depth-first order. Each placed state
contributes rings of candidate positions to a shared pool; the next state
takes the pool candidate whose edges to its already placed neighbours cross
the fewest existing edges, using the mean edge length as a tie-break.
Candidates that would make an edge overlap another edge or run through a
state are rejected outright.
"""

import logging
import math
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, List, Optional, Tuple

from . import vector as V
from .adjacency import AdjacencyCache
from .candidates import ring_candidates
from .constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    MIN_DISTANCE,
    MIN_THR,
    ORBIT,
    PERIOD,
    REJECTED_SCORE,
    SCORE_ACCURACY,
    STATE_SIZE,
)
from .models import StateMachine
from .segments import ConnectionType, DirectedSegment, classify_connection
from .tracer import LayoutTrace, PlacementRecord
from .vector import Vector2

logger = logging.getLogger(__name__)

ORIGIN = Vector2(0.0, 0.0)


def quantize(value: float, accuracy: float) -> float:
    """Floor ``value`` to a multiple of ``accuracy``."""
    return math.floor(value / accuracy) * accuracy


@dataclass
class Candidate:
    """A sampled position in the planner's pool."""

    position: Vector2
    consumed: bool = False


@dataclass
class CandidateScore:
    """Evaluation of one candidate position."""

    score: float
    crossings: int = 0
    rejected: bool = False


class LayoutPlanner:
    """
    Places the states of a machine to minimise edge crossings.

    The planner owns all state of a pass: committed positions, the
    candidate pool and the resolved edges. ``plan`` resets it, so one
    instance can lay out several machines in turn.

    Attributes:
        positions: Committed raw position of each placed state.
        pool: Every candidate sampled so far, in sampling order.
        resolved_edges: Segments with both endpoints placed.
        fallbacks: States placed although every candidate was rejected.
    """

    def __init__(
        self,
        state_size: float = STATE_SIZE,
        canvas_width: float = CANVAS_WIDTH,
        canvas_height: float = CANVAS_HEIGHT,
        orbit: int = ORBIT,
        period: int = PERIOD,
    ):
        if state_size <= 0:
            raise ValueError("state_size must be positive")
        if canvas_width <= 0 or canvas_height <= 0:
            raise ValueError("canvas dimensions must be positive")
        if orbit < 1 or period < 1:
            raise ValueError("orbit and period must be at least 1")

        self.state_size = state_size
        self.diagonal = math.hypot(canvas_width, canvas_height)
        self.orbit = orbit
        self.period = period

        self.adjacency: Optional[AdjacencyCache] = None
        self.positions: Dict[int, Vector2] = {}
        self.pool: List[Candidate] = []
        self.resolved_edges: List[DirectedSegment] = []
        self.fallbacks: List[int] = []

    def plan(
        self, machine: StateMachine, trace: Optional[LayoutTrace] = None
    ) -> Dict[int, Vector2]:
        """
        Compute raw positions for every state of ``machine``.

        Args:
            machine: Machine to lay out. Validated before any work starts.
            trace: Optional trace receiving one PlacementRecord per state.

        Returns:
            Mapping from state to its committed, unbounded position.

        Raises:
            TransitionError: If the machine's transition table is malformed.
        """
        self.adjacency = AdjacencyCache(machine)
        self.positions = {}
        self.pool = []
        self.resolved_edges = []
        self.fallbacks = []

        if trace is not None:
            trace.add_stage(
                "adjacency",
                {
                    "slots": len(self.adjacency.slots),
                    "loops": sum(slot.is_loop for slot in self.adjacency.slots),
                },
            )

        # Every state is seeded so that unreachable components get placed too
        stack = list(reversed(machine.states))
        while stack:
            state = stack.pop()
            if self.adjacency.is_committed(state):
                continue

            if not self.positions:
                position = ORIGIN
                record = PlacementRecord(state=state, position=position)
            else:
                position, record = self._select(state)

            self._commit(state, position)
            logger.debug("Placed %s", record)
            if trace is not None:
                trace.add_placement(record)

            for neighbor in self.adjacency.neighbors(state):
                if not self.adjacency.is_committed(neighbor):
                    stack.append(neighbor)

        return dict(sorted(self.positions.items()))

    def _select(self, state: int) -> Tuple[Vector2, PlacementRecord]:
        """Pick the best unconsumed pool candidate for ``state``."""
        neighbors = [
            n for n in self.adjacency.neighbors(state) if n in self.positions
        ]

        best: Optional[Tuple[Candidate, CandidateScore]] = None
        scored = 0
        rejected = 0
        for candidate in self.pool:
            if candidate.consumed:
                continue
            evaluation = self._score(state, candidate.position, neighbors)
            scored += 1
            rejected += evaluation.rejected
            if best is None or evaluation.score < best[1].score:
                best = (candidate, evaluation)

        if best is None:
            raise RuntimeError(
                f"Candidate pool exhausted while placing state {state}"
            )

        candidate, evaluation = best
        if evaluation.rejected:
            logger.warning(
                "No non-degenerate position for state %d among %d candidates; "
                "accepting %s",
                state,
                scored,
                candidate.position,
            )
            self.fallbacks.append(state)

        record = PlacementRecord(
            state=state,
            position=candidate.position,
            score=evaluation.score,
            crossings=evaluation.crossings,
            candidates=scored,
            rejected=rejected,
            neighbors=neighbors,
            fallback=evaluation.rejected,
        )
        return candidate.position, record

    def _score(
        self, state: int, sample: Vector2, neighbors: List[int]
    ) -> CandidateScore:
        """
        Score placing ``state`` at ``sample``.

        Lower is better. The integer part counts crossings; the fractional
        part is the mean distance to the neighbours over the canvas diagonal.
        """
        edges = [
            DirectedSegment.between(state, n, sample, self.positions[n])
            for n in neighbors
        ]
        if any(edge.length < MIN_THR for edge in edges):
            return CandidateScore(REJECTED_SCORE, rejected=True)

        pairs = [(new, old) for new in edges for old in self.resolved_edges]
        pairs.extend(combinations(edges, 2))

        crossings = 0
        for a, b in pairs:
            relation = classify_connection(a, b)
            if relation is ConnectionType.DEGENERATE:
                return CandidateScore(REJECTED_SCORE, crossings, rejected=True)
            if relation is ConnectionType.CROSSING:
                crossings += 1

        mean_distance = (
            sum(edge.length for edge in edges) / len(edges) if edges else 0.0
        )
        score = quantize(crossings + mean_distance / self.diagonal, SCORE_ACCURACY)
        return CandidateScore(score, crossings)

    def _commit(self, state: int, position: Vector2) -> None:
        """Fix the position of ``state`` and grow the candidate pool."""
        self.resolved_edges.extend(self.adjacency.commit(state, position))
        self.positions[state] = position

        for candidate in self.pool:
            if V.distance(candidate.position, position) < MIN_DISTANCE:
                candidate.consumed = True

        rings = ring_candidates(position, self.state_size, self.orbit, self.period)
        for point in rings:
            if all(
                V.distance(point, placed) >= MIN_DISTANCE
                for placed in self.positions.values()
            ):
                self.pool.append(Candidate(point))
