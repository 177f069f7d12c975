"""
fsmlayout - Readable state machine diagrams

A Python library that places the states of a finite-state machine on a 2D
canvas with few edge crossings and routes every transition as a curve that
does not overlap its neighbours.

Example:
    >>> from fsmlayout import DiagramGenerator
    >>> generator = DiagramGenerator()
    >>> result = generator.generate('''
    ...     0 -0-> 1
    ...     0 -1-> 0
    ...     1 -0-> 0
    ...     1 -1-> 1
    ... ''')
    >>> result.positions[0]

Debug Mode Example:
    >>> result = generator.generate(machine, debug=True)
    >>> print(generator.get_trace().summary())
"""

from .adjacency import AdjacencyCache
from .candidates import ring_candidates
from .edge_routing import (
    EdgeOffsetAssigner,
    connect_point,
    control_point,
    edge_detail,
    offset_from_point,
    self_control_point,
    self_offset_from_point,
)
from .generator import DiagramGenerator
from .layout import LayoutPlanner, quantize
from .models import (
    EdgeDetail,
    EdgeOffset,
    FSMLayoutError,
    LayoutResult,
    StateMachine,
    TransitionError,
)
from .parser import ParseError, Parser, parse_machine
from .png_renderer import PNGRenderer, render_to_png
from .positioning import CanvasNormalizer
from .segments import (
    ConnectionType,
    DirectedSegment,
    SegmentSlot,
    SegmentStatus,
    classify_connection,
    count_crossings,
)
from .tracer import LayoutTrace, PipelineStage, PlacementRecord
from .vector import Vector2

__version__ = "0.1.0"

__all__ = [
    # Main API
    "DiagramGenerator",
    # Input
    "StateMachine",
    "Parser",
    "ParseError",
    "parse_machine",
    "FSMLayoutError",
    "TransitionError",
    # Layout
    "AdjacencyCache",
    "LayoutPlanner",
    "LayoutResult",
    "CanvasNormalizer",
    "ring_candidates",
    "quantize",
    # Geometry
    "Vector2",
    "DirectedSegment",
    "SegmentSlot",
    "SegmentStatus",
    "ConnectionType",
    "classify_connection",
    "count_crossings",
    # Edge routing
    "EdgeOffset",
    "EdgeDetail",
    "EdgeOffsetAssigner",
    "connect_point",
    "control_point",
    "self_control_point",
    "offset_from_point",
    "self_offset_from_point",
    "edge_detail",
    # Rendering
    "PNGRenderer",
    "render_to_png",
    # Debug/Tracing
    "LayoutTrace",
    "PipelineStage",
    "PlacementRecord",
]
