"""Tests for the level 1 steepest-descent segment graph."""

import pytest

from branching_noise.control_functions import PerlinControlFunction, PlaneControlFunction
from branching_noise.points import PointField
from branching_noise.segments import SegmentGraph


def _graph(control_function, **kwargs):
    field = PointField(seed=0, eps=0.15, cache_size=16)
    params = dict(
        noise_top_left=(0.0, 0.0),
        noise_bottom_right=(4.0, 4.0),
        control_top_left=(0.0, 0.0),
        control_bottom_right=(0.5, 0.5),
    )
    params.update(kwargs)
    return SegmentGraph(field, control_function, **params)


class TestDescent:
    """Every segment flows downhill or stays at a local minimum."""

    def test_descent_validity(self):
        graph = _graph(PerlinControlFunction(seed=0))
        for cx, cy in [(0, 0), (1, 2), (3, 3), (-2, 5)]:
            for segment in graph.build_segments(graph.neighborhood(cx, cy)):
                assert segment.b.z <= segment.a.z
                if segment.b.z == segment.a.z:
                    assert segment.is_degenerate()

    def test_target_is_lowest_neighbor(self):
        graph = _graph(PerlinControlFunction(seed=0))
        points = graph.neighborhood(1, 1)
        elevations = graph.compute_elevations(points)
        segments = graph.build_segments(points)
        for i in range(1, 6):
            for j in range(1, 6):
                segment = segments[5 * (i - 1) + (j - 1)]
                lowest = min(elevations[k][l] for k in range(i - 1, i + 2) for l in range(j - 1, j + 2))
                assert segment.b.z == lowest

    def test_segment_indexing(self):
        graph = _graph(PerlinControlFunction(seed=0))
        points = graph.neighborhood(2, 2)
        segments = graph.build_segments(points)
        assert len(segments) == 25
        for i in range(1, 6):
            for j in range(1, 6):
                start = segments[5 * (i - 1) + (j - 1)].a
                assert (start.x, start.y) == points[i][j]

    def test_ties_keep_first_in_scan_order(self):
        """Ties resolve to the first neighbor scanned, so a flat field drifts upper-left."""
        # A constant field makes every neighbor a tie; the first scanned one
        # is the upper-left neighbor.
        graph = _graph(PlaneControlFunction())
        points = graph.neighborhood(0, 0)
        segments = graph.build_segments(points)
        for i in range(1, 6):
            for j in range(1, 6):
                end = segments[5 * (i - 1) + (j - 1)].b
                assert (end.x, end.y) == points[i - 1][j - 1]
                assert end.z == 0.5


class TestElevationRemap:
    """Noise-space positions are remapped into the control domain."""

    def test_remap_reaches_control_corners(self):
        graph = _graph(PlaneControlFunction(slope_x=1.0, slope_y=0.0, offset=0.0),
                       control_top_left=(0.0, 0.0), control_bottom_right=(1.0, 1.0))
        assert graph.elevation(0.0, 0.0) == pytest.approx(0.0)
        assert graph.elevation(2.0, 0.0) == pytest.approx(0.5)
        assert graph.elevation(4.0, 3.0) == pytest.approx(1.0)

    def test_clamped_remap(self):
        control = PlaneControlFunction(slope_x=0.5, slope_y=0.0, offset=0.0)
        unclamped = _graph(control, control_top_left=(0.0, 0.0), control_bottom_right=(1.0, 1.0))
        clamped = _graph(control, control_top_left=(0.0, 0.0), control_bottom_right=(1.0, 1.0), clamp_remap=True)
        assert unclamped.elevation(8.0, 0.0) == pytest.approx(1.0)
        assert clamped.elevation(8.0, 0.0) == pytest.approx(0.5)

    def test_degenerate_noise_rectangle_rejected(self):
        with pytest.raises(ValueError):
            _graph(PlaneControlFunction(), noise_top_left=(1.0, 0.0), noise_bottom_right=(1.0, 4.0))
