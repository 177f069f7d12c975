"""Unit tests for candidate sampling."""

import pytest

from fsmlayout import ring_candidates
from fsmlayout import vector as V
from fsmlayout.vector import Vector2


class TestRingCandidates:
    """Tests for ring_candidates."""

    def test_default_count(self):
        assert len(ring_candidates(Vector2(0.0, 0.0), 50)) == 32

    def test_custom_orbit_and_period(self):
        assert len(ring_candidates(Vector2(0.0, 0.0), 50, orbit=2, period=6)) == 12

    def test_first_candidate_on_positive_x_axis(self):
        anchor = Vector2(10.0, 20.0)
        assert ring_candidates(anchor, 50)[0] == Vector2(110.0, 20.0)

    def test_ring_radii(self):
        anchor = Vector2(-5.0, 7.0)
        candidates = ring_candidates(anchor, 50)
        for ring in range(4):
            for point in candidates[ring * 8 : (ring + 1) * 8]:
                assert V.distance(point, anchor) == pytest.approx((ring + 1) * 100)

    def test_even_angular_spacing(self):
        candidates = ring_candidates(Vector2(0.0, 0.0), 50)
        quarter = candidates[2]
        assert quarter.x == pytest.approx(0.0, abs=1e-9)
        assert quarter.y == pytest.approx(100.0)

    def test_deterministic(self):
        anchor = Vector2(3.0, 4.0)
        assert ring_candidates(anchor, 50) == ring_candidates(anchor, 50)
