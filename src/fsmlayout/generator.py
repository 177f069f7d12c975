"""
Main diagram generator module.

Combines parsing, layout planning, canvas normalization and edge routing
to produce a drawable state machine diagram, and exposes the operations an
interactive front end needs to move states and reshape edges.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Union

import networkx as nx

from .constants import CANVAS_HEIGHT, CANVAS_WIDTH, ORBIT, PERIOD, STATE_SIZE
from .edge_routing import (
    EdgeOffsetAssigner,
    edge_detail,
    offset_from_point,
    self_offset_from_point,
)
from .layout import LayoutPlanner
from .models import EdgeDetail, EdgeOffset, LayoutResult, StateMachine
from .parser import Parser
from .positioning import CanvasNormalizer
from .segments import count_crossings
from .tracer import LayoutTrace
from .vector import Vector2

logger = logging.getLogger(__name__)


class DiagramGenerator:
    """
    Generate state machine diagrams from machines or text descriptions.

    A call to ``generate`` runs a full layout pass and returns its
    LayoutResult. The generator then keeps a working copy of positions and
    offsets that ``set_state_position`` and ``set_control_position``
    overwrite directly, without re-running the planner. ``snapshot``
    publishes the working copy as a new LayoutResult.

    Example:
        >>> generator = DiagramGenerator()
        >>> result = generator.generate('''
        ...     0 -0-> 1
        ...     0 -1-> 0
        ...     1 -0-> 0
        ...     1 -1-> 1
        ... ''')
        >>> generator.edge_detail(0, "0").spline
    """

    def __init__(
        self,
        canvas_width: int = CANVAS_WIDTH,
        canvas_height: int = CANVAS_HEIGHT,
        state_size: int = STATE_SIZE,
        orbit: int = ORBIT,
        period: int = PERIOD,
    ):
        """
        Initialize the diagram generator.

        Args:
            canvas_width: Width of the drawing surface in pixels
            canvas_height: Height of the drawing surface in pixels
            state_size: Diameter of a state circle in pixels
            orbit: Number of candidate rings sampled around each state
            period: Number of candidates per ring
        """
        if state_size <= 0:
            raise ValueError("state_size must be positive")

        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.state_size = state_size

        self.parser = Parser()
        self.planner = LayoutPlanner(
            state_size=state_size,
            canvas_width=canvas_width,
            canvas_height=canvas_height,
            orbit=orbit,
            period=period,
        )
        self.normalizer = CanvasNormalizer(canvas_width, canvas_height, state_size)
        self.offset_assigner = EdgeOffsetAssigner(state_size)

        self.machine: Optional[StateMachine] = None
        self.result: Optional[LayoutResult] = None
        self._positions: Dict[int, Vector2] = {}
        self._offsets: List[Dict[str, EdgeOffset]] = []
        self._trace: Optional[LayoutTrace] = None

    def generate(
        self, source: Union[StateMachine, str], debug: bool = False
    ) -> LayoutResult:
        """
        Lay out a machine.

        Args:
            source: A StateMachine, or a text description for the Parser
            debug: If True, record a LayoutTrace available via get_trace()

        Returns:
            LayoutResult of the pass

        Raises:
            ParseError: If a text description is invalid
            TransitionError: If the machine's transition table is malformed
        """
        machine = self.parser.parse(source) if isinstance(source, str) else source
        machine.validate()

        trace = LayoutTrace(num_states=machine.num_states) if debug else None

        components = nx.number_weakly_connected_components(machine.to_graph())
        if components > 1:
            logger.warning(
                "Machine has %d disconnected components; they are placed "
                "independently",
                components,
            )

        raw_positions = self.planner.plan(machine, trace)
        positions = self.normalizer.normalize(raw_positions)
        offsets = self.offset_assigner.assign(machine)

        result = LayoutResult(
            positions=positions,
            raw_positions=raw_positions,
            offsets=offsets,
            resolved_edges=list(self.planner.resolved_edges),
            crossings=count_crossings(self.planner.resolved_edges),
            fallbacks=list(self.planner.fallbacks),
        )
        logger.info(
            "Laid out %d states: %d edges, %d crossings, %d fallbacks",
            machine.num_states,
            len(result.resolved_edges),
            result.crossings,
            len(result.fallbacks),
        )

        if trace is not None:
            trace.add_stage(
                "planned",
                {
                    "raw_positions": raw_positions,
                    "resolved_edges": len(result.resolved_edges),
                    "crossings": result.crossings,
                },
            )
            trace.add_stage("normalized", {"positions": positions})
            trace.add_stage("offsets", {"offsets": offsets})

        self.machine = machine
        self.result = result
        self._positions = dict(positions)
        self._offsets = _copy_offsets(offsets)
        self._trace = trace
        return result

    def get_trace(self) -> Optional[LayoutTrace]:
        """Return the trace of the last debug generation, if any."""
        return self._trace

    def snapshot(self) -> LayoutResult:
        """Publish the current working positions and offsets."""
        self._require_layout()
        return replace(
            self.result,
            positions=dict(self._positions),
            offsets=_copy_offsets(self._offsets),
        )

    def state_position(self, state: int) -> Vector2:
        self._require_state(state)
        return self._positions[state]

    def set_state_position(self, state: int, x: float, y: float) -> None:
        """Move a state, bypassing the planner."""
        self._require_state(state)
        self._positions[state] = Vector2(float(x), float(y))

    def edge_offset(self, state: int, symbol: str) -> EdgeOffset:
        self._require_transition(state, symbol)
        return self._offsets[state][symbol]

    def edge_detail(self, state: int, symbol: str) -> EdgeDetail:
        """Geometry of the transition from ``state`` on ``symbol``."""
        self._require_transition(state, symbol)
        dst = self.machine.destination(state, symbol)
        return edge_detail(
            self._positions[state],
            self._positions[dst],
            self._offsets[state][symbol],
            self.state_size,
            is_loop=dst == state,
        )

    def edge_details(self) -> List[Dict[str, EdgeDetail]]:
        """Geometry of every transition, as ``details[state][symbol]``."""
        self._require_layout()
        alphabet = self.machine.alphabet
        return [
            {symbol: self.edge_detail(state, symbol) for symbol in alphabet}
            for state in self.machine.states
        ]

    def set_control_position(self, state: int, symbol: str, x: float, y: float) -> None:
        """Reshape a transition so that its control point lies at ``(x, y)``."""
        self._require_transition(state, symbol)
        dst = self.machine.destination(state, symbol)
        point = Vector2(float(x), float(y))
        if dst == state:
            offset = self_offset_from_point(
                self._positions[state], point, self.state_size
            )
        else:
            offset = offset_from_point(
                self._positions[state], self._positions[dst], point
            )
        self._offsets[state][symbol] = offset

    def _require_layout(self) -> None:
        if self.result is None:
            raise RuntimeError("generate() must be called before editing the layout")

    def _require_state(self, state: int) -> None:
        self._require_layout()
        if state not in self._positions:
            raise ValueError(f"Unknown state {state}")

    def _require_transition(self, state: int, symbol: str) -> None:
        self._require_state(state)
        if symbol not in self.machine.alphabet:
            raise ValueError(f"Unknown symbol '{symbol}'")


def _copy_offsets(offsets: List[Dict[str, EdgeOffset]]) -> List[Dict[str, EdgeOffset]]:
    return [{symbol: replace(o) for symbol, o in row.items()} for row in offsets]
