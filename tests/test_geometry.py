"""Tests for the geometry primitives."""

import math

import pytest

from branching_noise.geometry import (
    Point2D,
    Point3D,
    Segment3D,
    catmull_rom_midpoint,
    distance_to_segment,
    lerp_clamp,
    lerp_segment,
    projection_parameter,
    reflect,
    remap,
    remap_clamp,
)


def _segment(ax, ay, bx, by, az=0.0, bz=0.0):
    return Segment3D(Point3D(ax, ay, az), Point3D(bx, by, bz))


class TestSegmentDistance:
    """Point-to-segment distance and projection."""

    def test_distance_inside(self):
        assert distance_to_segment(Point2D(5.0, 2.0), _segment(0.0, 0.0, 10.0, 0.0)) == pytest.approx(2.0)

    def test_distance_beyond_endpoint(self):
        assert distance_to_segment(Point2D(13.0, 4.0), _segment(0.0, 0.0, 10.0, 0.0)) == pytest.approx(5.0)

    def test_projection_unclamped(self):
        segment = _segment(0.0, 0.0, 10.0, 0.0)
        assert projection_parameter(Point2D(-5.0, 1.0), segment) == pytest.approx(-0.5)
        assert projection_parameter(Point2D(15.0, 1.0), segment) == pytest.approx(1.5)

    def test_degenerate_segment(self):
        segment = _segment(1.0, 1.0, 1.0, 1.0)
        assert segment.is_degenerate()
        assert projection_parameter(Point2D(4.0, 5.0), segment) == 0.0
        assert distance_to_segment(Point2D(4.0, 5.0), segment) == pytest.approx(5.0)

    def test_elevation_ignored(self):
        segment = _segment(0.0, 0.0, 10.0, 0.0, az=3.0, bz=-7.0)
        assert distance_to_segment(Point2D(5.0, 1.0), segment) == pytest.approx(1.0)


class TestInterpolation:
    """Linear helpers."""

    def test_lerp_clamp(self):
        assert lerp_clamp(2.0, 4.0, 0.5) == 3.0
        assert lerp_clamp(2.0, 4.0, -1.0) == 2.0
        assert lerp_clamp(2.0, 4.0, 3.0) == 4.0

    def test_lerp_segment(self):
        point = lerp_segment(_segment(0.0, 0.0, 2.0, 4.0, az=1.0, bz=0.0), 0.25)
        assert point == pytest.approx((0.5, 1.0, 0.75))

    def test_remap(self):
        assert remap(2.0, 0.0, 4.0, 0.0, 0.5) == pytest.approx(0.25)
        assert remap(-2.0, -2.0, 2.0, -1.0, 1.0) == pytest.approx(-1.0)
        assert remap(6.0, 0.0, 4.0, 0.0, 0.5) == pytest.approx(0.75)

    def test_remap_clamp(self):
        assert remap_clamp(6.0, 0.0, 4.0, 0.0, 0.5) == 0.5
        assert remap_clamp(-1.0, 0.0, 4.0, 0.0, 0.5) == 0.0
        assert remap_clamp(2.0, 0.0, 4.0, 1.0, 0.0) == pytest.approx(0.5)

    def test_reflect(self):
        assert reflect(Point3D(1.0, 1.0, 1.0), Point3D(2.0, 3.0, 0.0)) == (0.0, -1.0, 2.0)


class TestCatmullRom:
    """Centripetal Catmull-Rom midpoint."""

    def test_collinear_evenly_spaced(self):
        points = [Point3D(float(k), 0.0, 0.0) for k in range(4)]
        mid = catmull_rom_midpoint(*points)
        assert mid == pytest.approx((1.5, 0.0, 0.0))

    def test_uniform_fallback_on_coincident_points(self):
        p0 = Point3D(0.0, 0.0, 0.0)
        p1 = Point3D(1.0, 0.0, 0.5)
        p3 = Point3D(3.0, 2.0, 0.0)
        mid = catmull_rom_midpoint(p0, p1, p1, p3)
        expected = tuple((-a + 9.0 * b + 9.0 * b - d) / 16.0 for a, b, d in zip(p0, p1, p3))
        assert mid == pytest.approx(expected)

    def test_curve_bends_towards_neighbors(self):
        # An L-shaped chain: the midpoint of the middle segment bulges outwards.
        mid = catmull_rom_midpoint(
            Point3D(0.0, 1.0, 0.0), Point3D(0.0, 0.0, 0.0), Point3D(1.0, 0.0, 0.0), Point3D(1.0, 1.0, 0.0)
        )
        assert mid.x == pytest.approx(0.5)
        assert mid.y < 0.0

    def test_result_is_finite(self):
        mid = catmull_rom_midpoint(
            Point3D(0.0, 0.0, 0.0), Point3D(0.0, 0.0, 0.0), Point3D(0.0, 0.0, 0.0), Point3D(0.0, 0.0, 0.0)
        )
        assert all(math.isfinite(v) for v in mid)
