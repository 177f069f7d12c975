"""
Debug tracing infrastructure for fsmlayout.

When debug mode is enabled, the generator records every stage of the layout
pipeline and every placement decision taken by the planner.

This is primarily useful for:
1. Understanding why a state ended up where it is
2. Seeing which states had to be placed without a clean candidate
3. Writing targeted tests against intermediate results

Usage:
    >>> generator = DiagramGenerator()
    >>> result = generator.generate(machine, debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("layout_trace.txt")
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .vector import Vector2


@dataclass
class PlacementRecord:
    """
    Record of a single state placement by the planner.

    Attributes:
        state: The state that was placed.
        position: Committed (raw) position.
        score: Score of the chosen candidate, None for the first state.
        crossings: Crossings the new edges introduced.
        candidates: Number of pool candidates scored.
        rejected: Number of candidates rejected as degenerate.
        neighbors: Already placed neighbours the state was connected to.
        fallback: True if every candidate was rejected.
    """

    state: int
    position: Vector2
    score: Optional[float] = None
    crossings: int = 0
    candidates: int = 0
    rejected: int = 0
    neighbors: List[int] = field(default_factory=list)
    fallback: bool = False

    def __str__(self) -> str:
        score = "origin" if self.score is None else f"score={self.score:.5f}"
        line = (
            f"state {self.state} at {self.position} [{score}, "
            f"crossings={self.crossings}, "
            f"rejected={self.rejected}/{self.candidates}]"
        )
        if self.neighbors:
            line += f" neighbors={self.neighbors}"
        if self.fallback:
            line += " FALLBACK"
        return line


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    The layout pipeline has these stages:
    1. adjacency - Arena of segment slots built from the machine
    2. planned - Raw positions committed by the planner
    3. normalized - Positions mapped into the canvas
    4. offsets - Default edge offsets

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class LayoutTrace:
    """
    Complete trace of a layout pass.

    Attributes:
        stages: List of pipeline stages with their data
        placements: Placement decisions in commit order
        num_states: Number of states of the traced machine
    """

    stages: List[PipelineStage] = field(default_factory=list)
    placements: List[PlacementRecord] = field(default_factory=list)
    num_states: int = 0

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        self.stages.append(PipelineStage(name, data.copy()))

    def add_placement(self, record: PlacementRecord) -> None:
        self.placements.append(record)

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_placement(self, state: int) -> Optional[PlacementRecord]:
        for record in self.placements:
            if record.state == state:
                return record
        return None

    def get_fallbacks(self) -> List[PlacementRecord]:
        """Get all placements that had no non-degenerate candidate."""
        return [p for p in self.placements if p.fallback]

    @property
    def placement_order(self) -> List[int]:
        return [p.state for p in self.placements]

    def summary(self) -> str:
        """Generate a human-readable summary of the trace."""
        lines = [
            "=" * 60,
            "LAYOUT TRACE SUMMARY",
            "=" * 60,
            "",
            f"States: {self.num_states}",
            f"Pipeline stages: {len(self.stages)}",
        ]
        for stage in self.stages:
            lines.append(f"  - {stage.name}")

        total_crossings = sum(p.crossings for p in self.placements)
        lines.extend(
            [
                "",
                f"Placements: {len(self.placements)}",
                f"Placement order: {self.placement_order}",
                f"Crossings introduced: {total_crossings}",
                f"Fallback placements: {len(self.get_fallbacks())}",
            ]
        )
        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete human-readable dump of the trace."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("PLACEMENTS:")
        lines.append("-" * 40)
        for p in self.placements:
            lines.append(str(p))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
