"""
Mapping of planned positions onto the canvas.

The planner works in unbounded coordinates around the origin. The
CanvasNormalizer rescales them into the drawable rectangle so that every
state circle stays fully inside the canvas.
"""

from typing import Dict

from . import vector as V
from .constants import CANVAS_HEIGHT, CANVAS_WIDTH, MIN_DISTANCE, STATE_SIZE
from .vector import Vector2


class CanvasNormalizer:
    """
    Rescales raw positions into the canvas rectangle.

    Each axis is scaled independently from the observed bounding box into
    ``[state_size / 2, canvas_size - state_size / 2]``. An axis along which
    all states share the same coordinate maps to the canvas centre instead
    of dividing by a near-zero range.

    Attributes:
        canvas_width: Width of the drawing surface.
        canvas_height: Height of the drawing surface.
        state_size: Diameter of a state circle.
    """

    def __init__(
        self,
        canvas_width: float = CANVAS_WIDTH,
        canvas_height: float = CANVAS_HEIGHT,
        state_size: float = STATE_SIZE,
    ):
        if canvas_width <= state_size or canvas_height <= state_size:
            raise ValueError("canvas must be larger than a state in both directions")
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.state_size = state_size

    @property
    def center(self) -> Vector2:
        return Vector2(self.canvas_width / 2, self.canvas_height / 2)

    def normalize(self, raw_positions: Dict[int, Vector2]) -> Dict[int, Vector2]:
        """
        Map raw positions into the canvas.

        Args:
            raw_positions: Planner output, keyed by state.

        Returns:
            Canvas positions keyed by state, in the same order.
        """
        if not raw_positions:
            return {}
        if len(raw_positions) == 1:
            return {state: self.center for state in raw_positions}

        # Flooring first keeps the output stable against floating noise
        floored = {state: V.floor(p) for state, p in raw_positions.items()}
        xs = [p.x for p in floored.values()]
        ys = [p.y for p in floored.values()]

        margin = self.state_size / 2
        map_x = self._axis_mapper(min(xs), max(xs), self.canvas_width, margin)
        map_y = self._axis_mapper(min(ys), max(ys), self.canvas_height, margin)

        return {
            state: Vector2(map_x(p.x), map_y(p.y)) for state, p in floored.items()
        }

    @staticmethod
    def _axis_mapper(low: float, high: float, size: float, margin: float):
        if high - low < MIN_DISTANCE:
            return lambda value: size / 2
        rate = (size - 2 * margin) / (high - low)
        return lambda value: margin + (value - low) * rate
