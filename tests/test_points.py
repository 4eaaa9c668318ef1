"""Tests for the jittered point field."""

import pytest

from branching_noise.geometry import Point2D
from branching_noise.points import PointField


class TestDeterminism:
    """Points are a pure function of (cell, seed, eps)."""

    def test_repeated_calls_match(self):
        field = PointField(seed=7, eps=0.15, cache_size=8)
        for i, j in [(0, 0), (3, -2), (-4, -4), (100, 250)]:
            assert field.point(i, j) == field.point(i, j)

    def test_two_instances_match(self):
        a = PointField(seed=7, eps=0.15, cache_size=8)
        b = PointField(seed=7, eps=0.15, cache_size=0)
        for i in range(-6, 6):
            for j in range(-6, 6):
                assert a.point(i, j) == b.point(i, j)

    def test_cached_and_direct_are_identical(self):
        field = PointField(seed=3, eps=0.1, cache_size=10)
        for i in range(-5, 5):
            for j in range(-5, 5):
                assert field.in_cache(i, j)
                assert field.point(i, j) == field.generate_point(i, j)

    def test_out_of_window_falls_back(self):
        field = PointField(seed=3, eps=0.1, cache_size=10)
        assert not field.in_cache(5, 0)
        assert not field.in_cache(-6, 0)
        assert field.point(5, 0) == field.generate_point(5, 0)
        assert field.point(-40, 17) == field.generate_point(-40, 17)

    def test_seed_changes_points(self):
        a = PointField(seed=0, eps=0.15, cache_size=0)
        b = PointField(seed=1, eps=0.15, cache_size=0)
        assert a.point(0, 0) != b.point(0, 0)

    def test_neighbouring_cells_differ(self):
        field = PointField(seed=0, eps=0.15, cache_size=0)
        offsets = {(p.x - i, p.y - j) for i in range(4) for j in range(4) for p in [field.point(i, j)]}
        assert len(offsets) == 16


class TestJitterBound:
    """Every point stays inside [eps, 1 - eps]^2 of its cell."""

    @pytest.mark.parametrize("eps", [0.0, 1e-12, 0.1, 0.15, 0.49])
    def test_offsets_within_margin(self, eps):
        field = PointField(seed=11, eps=eps, cache_size=6)
        for i in range(-8, 8):
            for j in range(-8, 8):
                p = field.point(i, j)
                # Tolerance covers the rounding of (i + px) - i.
                assert eps - 1e-12 <= p.x - i <= 1.0 - eps + 1e-12
                assert eps - 1e-12 <= p.y - j <= 1.0 - eps + 1e-12

    def test_zero_eps_keeps_points_strictly_inside(self):
        field = PointField(seed=0, eps=0.0, cache_size=0)
        for i in range(-5, 5):
            for j in range(-5, 5):
                p = field.point(i, j)
                assert i < p.x < i + 1
                assert j < p.y < j + 1

    @pytest.mark.parametrize("eps", [-0.1, 0.5, 0.75])
    def test_invalid_eps_rejected(self, eps):
        with pytest.raises(ValueError):
            PointField(seed=0, eps=eps)

    def test_negative_cache_size_rejected(self):
        with pytest.raises(ValueError):
            PointField(seed=0, eps=0.1, cache_size=-1)


class TestNeighborhood:
    """Neighborhood grids are indexed [row along y][column along x]."""

    def test_layout(self):
        field = PointField(seed=5, eps=0.2, cache_size=16)
        grid = field.neighborhood(2, -1, 7)
        assert len(grid) == 7
        assert all(len(row) == 7 for row in grid)
        for row in range(7):
            for col in range(7):
                assert grid[row][col] == field.point(2 + col - 3, -1 + row - 3)

    def test_points_are_plain_floats(self):
        field = PointField(seed=5, eps=0.2, cache_size=16)
        p = field.point(0, 0)
        assert isinstance(p, Point2D)
        assert type(p.x) is float and type(p.y) is float
