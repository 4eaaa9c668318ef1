# branching_noise/segments.py

"""
================================================================================
LEVEL 1 SEGMENT GRAPH
================================================================================
Builds the coarse branching network around a query cell: a 7x7 neighborhood
of jittered points, their elevations under the control function, and one
steepest-descent segment for each of the 25 interior points.

Data Contract:
---------------
- Inputs:
    - A PointField and a control function.
    - The noise-space and control-space rectangles used to remap points
      before they are handed to the control function.
- Outputs:
    - 7x7 point grids, 7x7 elevation grids and 25-element Segment3D lists.
      Segment index is 5 * (row - 1) + (col - 1) for interior row/col.
- Side Effects: None.
- Invariants: Each segment ends at an elevation no higher than its start.
  A segment is self-referential when its start is a local minimum.
================================================================================
"""

from . import config as DEFAULTS
from .geometry import Point3D, Segment3D, remap, remap_clamp
from .points import PointField


class SegmentGraph:
    """Steepest-descent segments over the level 1 point neighborhood."""

    def __init__(
        self,
        point_field: PointField,
        control_function,
        noise_top_left: tuple,
        noise_bottom_right: tuple,
        control_top_left: tuple,
        control_bottom_right: tuple,
        clamp_remap: bool = DEFAULTS.DEFAULT_CLAMP_CONTROL_REMAP,
    ):
        if noise_top_left[0] == noise_bottom_right[0] or noise_top_left[1] == noise_bottom_right[1]:
            raise ValueError(f"Degenerate noise rectangle: {noise_top_left} -> {noise_bottom_right}.")

        self.point_field = point_field
        self.control_function = control_function
        self.noise_top_left = noise_top_left
        self.noise_bottom_right = noise_bottom_right
        self.control_top_left = control_top_left
        self.control_bottom_right = control_bottom_right
        self._remap = remap_clamp if clamp_remap else remap

    def neighborhood(self, ci: int, cj: int) -> list:
        return self.point_field.neighborhood(ci, cj, DEFAULTS.LEVEL1_NEIGHBORHOOD)

    def elevation(self, x: float, y: float) -> float:
        """Elevation of a noise-space position under the control function."""
        cx = self._remap(x, self.noise_top_left[0], self.noise_bottom_right[0],
                         self.control_top_left[0], self.control_bottom_right[0])
        cy = self._remap(y, self.noise_top_left[1], self.noise_bottom_right[1],
                         self.control_top_left[1], self.control_bottom_right[1])
        return self.control_function.elevation(cx, cy)

    def compute_elevations(self, points: list) -> list:
        return [[self.elevation(point.x, point.y) for point in row] for row in points]

    def build_segments(self, points: list) -> list:
        """
        Links each of the 25 interior points to the lowest point of its own
        3x3 neighborhood. The scan is row-major and only a strictly lower
        elevation replaces the current candidate, so ties keep the first one.
        """
        elevations = self.compute_elevations(points)
        size = len(points)

        segments = []
        for i in range(1, size - 1):
            for j in range(1, size - 1):
                lowest = float("inf")
                lowest_i, lowest_j = i, j
                for k in range(i - 1, i + 2):
                    for l in range(j - 1, j + 2):
                        if elevations[k][l] < lowest:
                            lowest = elevations[k][l]
                            lowest_i, lowest_j = k, l

                start = points[i][j]
                target = points[lowest_i][lowest_j]
                segments.append(Segment3D(
                    Point3D(start.x, start.y, elevations[i][j]),
                    Point3D(target.x, target.y, lowest),
                ))

        return segments
