"""
Data models for state machine diagram layout.

This module contains the dataclasses that flow through the layout pipeline:
the input machine, the per-edge offsets and geometry handed to a renderer,
and the result of a complete layout pass.

Classes:
    StateMachine: Deterministic finite-state machine consumed as input.
    EdgeOffset: Offset of an edge's control point in the edge's local basis.
    EdgeDetail: Concrete geometry of one drawn transition.
    LayoutResult: Output of a layout pass.
"""

import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

import networkx as nx

from .constants import DEFAULT_ALPHABET
from .segments import DirectedSegment
from .vector import Vector2


class FSMLayoutError(Exception):
    """Base class for errors raised by fsmlayout."""

    pass


class TransitionError(FSMLayoutError, ValueError):
    """Raised when a machine's transition table is malformed."""

    pass


@dataclass
class StateMachine:
    """
    Deterministic finite-state machine.

    The layout engine only needs ``num_states`` and ``transitions``; the
    initial and accept states are carried along for rendering.

    Attributes:
        num_states: Number of states, identified by ``0 .. num_states - 1``.
        transitions: For each state, a mapping from every alphabet symbol to
            the destination state.
        initial_state: State the machine starts in.
        accept_states: States in which a word is accepted.
        alphabet: Ordered input alphabet. Edge offsets and the adjacency
            cache iterate symbols in this order.
    """

    num_states: int
    transitions: List[Dict[str, int]]
    initial_state: int = 0
    accept_states: Set[int] = field(default_factory=set)
    alphabet: Tuple[str, ...] = DEFAULT_ALPHABET

    def __post_init__(self):
        self.alphabet = tuple(self.alphabet)
        self.accept_states = set(self.accept_states)

    @property
    def states(self) -> range:
        return range(self.num_states)

    def validate(self) -> None:
        """
        Check the transition table before any layout work starts.

        Raises:
            TransitionError: If the table is missing states or symbols, or a
                destination, initial or accept state is out of range.
        """
        if self.num_states < 1:
            raise TransitionError(
                f"A machine needs at least one state, got {self.num_states}"
            )
        if not self.alphabet:
            raise TransitionError("Alphabet must not be empty")
        if len(set(self.alphabet)) != len(self.alphabet):
            raise TransitionError(f"Alphabet has duplicate symbols: {self.alphabet}")
        if len(self.transitions) != self.num_states:
            raise TransitionError(
                f"Expected transitions for {self.num_states} states, "
                f"got {len(self.transitions)}"
            )

        for state, row in enumerate(self.transitions):
            for symbol in self.alphabet:
                if symbol not in row:
                    raise TransitionError(
                        f"State {state} has no transition on symbol '{symbol}'"
                    )
                dst = row[symbol]
                if not self._in_range(dst):
                    raise TransitionError(
                        f"Transition {state} -{symbol}-> {dst} points outside "
                        f"[0, {self.num_states})"
                    )
            extra = set(row) - set(self.alphabet)
            if extra:
                raise TransitionError(
                    f"State {state} has transitions on unknown symbols: "
                    f"{sorted(extra)}"
                )

        if not self._in_range(self.initial_state):
            raise TransitionError(f"Initial state {self.initial_state} is out of range")
        for state in self.accept_states:
            if not self._in_range(state):
                raise TransitionError(f"Accept state {state} is out of range")

    def _in_range(self, state) -> bool:
        return isinstance(state, int) and 0 <= state < self.num_states

    def destination(self, state: int, symbol: str) -> int:
        return self.transitions[state][symbol]

    def accepts(self, word: Iterable[str]) -> bool:
        """
        Run the machine on ``word``.

        Raises:
            ValueError: If the word contains a symbol outside the alphabet.
        """
        state = self.initial_state
        for symbol in word:
            if symbol not in self.alphabet:
                raise ValueError(f"Invalid symbol '{symbol}' (not in alphabet)")
            state = self.transitions[state][symbol]
        return state in self.accept_states

    def to_graph(self) -> nx.MultiDiGraph:
        """Return the transition relation as a multigraph keyed by symbol."""
        graph = nx.MultiDiGraph()
        graph.add_nodes_from(self.states)
        for state in self.states:
            for symbol in self.alphabet:
                graph.add_edge(state, self.transitions[state][symbol], key=symbol)
        return graph

    @classmethod
    def random(
        cls,
        num_states: int,
        alphabet: Tuple[str, ...] = DEFAULT_ALPHABET,
        seed: Optional[int] = None,
    ) -> "StateMachine":
        """Build a machine with uniformly random transitions."""
        rng = random.Random(seed)
        transitions = [
            {symbol: rng.randrange(num_states) for symbol in alphabet}
            for _ in range(num_states)
        ]
        accept = {state for state in range(num_states) if rng.random() < 0.5}
        return cls(num_states, transitions, 0, accept, alphabet)


@dataclass
class EdgeOffset:
    """
    Offset of an edge's control point.

    Expressed along the edge's local basis: ``x_offset`` parallel to the
    line between the two states (or the loop axis), ``y_offset``
    perpendicular to it.
    """

    x_offset: float = 0.0
    y_offset: float = 0.0


@dataclass
class EdgeDetail:
    """Geometry of one transition, ready for a renderer."""

    connect_point: Vector2
    control_point: Vector2
    spline: List[Tuple[float, float]]
    offset: EdgeOffset


@dataclass
class LayoutResult:
    """
    Result of a layout pass.

    Attributes:
        positions: Final, canvas-bounded position of every state.
        raw_positions: Positions as committed by the planner, before
            normalization.
        offsets: ``offsets[state][symbol]`` for every transition.
        resolved_edges: Every inter-state segment, once each.
        crossings: Number of crossing segment pairs in the planned drawing.
        fallbacks: States that were placed without a non-degenerate candidate.
    """

    positions: Dict[int, Vector2] = field(default_factory=dict)
    raw_positions: Dict[int, Vector2] = field(default_factory=dict)
    offsets: List[Dict[str, EdgeOffset]] = field(default_factory=list)
    resolved_edges: List[DirectedSegment] = field(default_factory=list)
    crossings: int = 0
    fallbacks: List[int] = field(default_factory=list)
