"""Candidate positions sampled on rings around a placed state."""

import math
from typing import List

from . import vector as V
from .constants import ORBIT, PERIOD
from .vector import Vector2


def ring_candidates(
    anchor: Vector2, state_size: float, orbit: int = ORBIT, period: int = PERIOD
) -> List[Vector2]:
    """
    Sample candidate positions around ``anchor``.

    Ring ``i`` (0-based) has radius ``(i + 1) * 2 * state_size`` and holds
    ``period`` evenly spaced points starting at angle 0.

    Args:
        anchor: Position of an already placed state.
        state_size: Diameter of a state circle.
        orbit: Number of rings.
        period: Samples per ring.

    Returns:
        ``orbit * period`` points, innermost ring first.
    """
    candidates = []
    for ring in range(orbit):
        radius = (ring + 1) * 2 * state_size
        for step in range(period):
            direction = V.unit(step * 2 * math.pi / period)
            candidates.append(V.add(anchor, V.scale(direction, radius)))
    return candidates
