"""Tests for the circle and square target formations."""

import math

import pytest

from shapes import circle_targets, square_targets
from vector import Vector2D

CENTER = Vector2D(400.0, 400.0)


class TestCircleTargets:

    def test_count_and_radius(self):
        targets = circle_targets(8, 100.0, CENTER)
        assert len(targets) == 8
        for t in targets:
            assert math.sqrt(t.sub(CENTER).length_sq()) == pytest.approx(100.0)

    def test_even_angular_spacing(self):
        targets = circle_targets(8, 100.0, CENTER)
        angles = [math.atan2(t.x - CENTER.x, t.y - CENTER.y) for t in targets]
        for a, b in zip(angles, angles[1:]):
            gap = (a - b) % (2 * math.pi)
            assert gap == pytest.approx(2 * math.pi / 8)

    def test_first_point_at_angle_zero_then_clockwise(self):
        targets = circle_targets(4, 10.0, Vector2D(0.0, 0.0))
        assert targets[0].x == pytest.approx(0.0, abs=1e-12)
        assert targets[0].y == pytest.approx(10.0)
        # theta = -pi/2: (sin, cos) = (-1, 0)
        assert targets[1].x == pytest.approx(-10.0)
        assert targets[1].y == pytest.approx(0.0, abs=1e-12)

    def test_empty_for_non_positive_count(self):
        assert circle_targets(0, 100.0, CENTER) == []
        assert circle_targets(-5, 100.0, CENTER) == []

    def test_deterministic(self):
        assert circle_targets(13, 50.0, CENTER) == circle_targets(13, 50.0, CENTER)


class TestSquareTargets:

    def test_bounding_box_and_order(self):
        origin = Vector2D(0.0, 0.0)
        targets = square_targets(8, 1.0, 0.0, origin)
        points = [(pytest.approx(t.x), pytest.approx(t.y)) for t in targets]
        assert points == [
            (1.0, 1.0), (0.0, 1.0),     # moving left
            (-1.0, 1.0), (-1.0, 0.0),   # moving up
            (-1.0, -1.0), (0.0, -1.0),  # moving right
            (1.0, -1.0), (1.0, 0.0),    # moving down
        ]

    def test_translated_bounding_box(self):
        targets = square_targets(100, 300.0, 0.0, CENTER)
        xs = [t.x - CENTER.x for t in targets]
        ys = [t.y - CENTER.y for t in targets]
        assert len(targets) == 100
        assert min(xs) == pytest.approx(-300.0)
        assert max(xs) == pytest.approx(300.0)
        assert min(ys) == pytest.approx(-300.0)
        assert max(ys) == pytest.approx(300.0)

    def test_rotation_about_origin(self):
        origin = Vector2D(0.0, 0.0)
        plain = square_targets(12, 5.0, 0.0, origin)
        rotated = square_targets(12, 5.0, math.pi / 3, origin)
        for p, r in zip(plain, rotated):
            expected = p.rotate(math.pi / 3)
            assert r.x == pytest.approx(expected.x)
            assert r.y == pytest.approx(expected.y)

    def test_remainder_goes_to_last_leg(self):
        # count = 6: legs by (i * 4) // 6 are 0, 0, 1, 2, 2, 3
        origin = Vector2D(0.0, 0.0)
        targets = square_targets(6, 3.0, 0.0, origin)
        step = 8 * 3.0 / 6
        assert len(targets) == 6
        assert targets[1].x == pytest.approx(3.0 - step)
        assert targets[2].x == pytest.approx(3.0 - 2 * step)
        assert targets[3].y == pytest.approx(3.0 - step)
        assert targets[4].x == pytest.approx(3.0 - step)
        assert targets[5].x == pytest.approx(3.0)

    def test_empty_for_non_positive_count(self):
        assert square_targets(0, 100.0, 0.0, CENTER) == []
