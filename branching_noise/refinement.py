# branching_noise/refinement.py

"""
================================================================================
SUB-QUADRANT REFINEMENT (LEVEL 2)
================================================================================
Adds a second, finer level of branches at half the grid spacing. The query
cell is split into four quadrants; the quadrant containing the query point
selects a 5x5 half-resolution neighborhood, and each of its 9 interior
points grows a short branch that joins the level 1 network.

Quadrant indices follow floor(2 * (coord - cell_origin)) on each axis:

         cx    cx+0.5   cx+1
      cy +-------+-------+
         | (0,0) | (1,0) |
  cy+0.5 +-------+-------+
         | (0,1) | (1,1) |
    cy+1 +-------+-------+

The same formula extends past the cell: points of the neighboring cells get
indices such as -1 or 2, which is what lets the level 1 points be spliced
into the level 2 grid at the right place.

Data Contract:
---------------
- Inputs: The query point, its cell, the 7x7 level 1 points and the level 1
  begin/end halves produced by the SplineSubdivider.
- Outputs: A 5x5 sub-point grid and 9 Segment3D sub-segments, index
  3 * (row - 1) + (col - 1).
- Side Effects: None.
- Invariants: Every sub-segment ends on a level 1 segment. The snapping
  parameter is always within [0, 1].
================================================================================
"""

import math
from typing import NamedTuple

from . import config as DEFAULTS
from .geometry import Point2D, Point3D, Segment3D, distance_to_segment, lerp_segment, projection_parameter
from .points import PointField


class Quadrant(NamedTuple):
    qx: int
    qy: int


def sub_quadrant(cx: float, cy: float, x: float, y: float) -> Quadrant:
    """Quadrant of the cell (cx, cy) that contains (x, y)."""
    return Quadrant(int(math.floor(2.0 * (x - cx))), int(math.floor(2.0 * (y - cy))))


def snap_parameter(point, segment: Segment3D, nearest_distance: float) -> float:
    """
    Position u on `segment` where a branch from `point` joins it. The
    orthogonal projection is moved towards b by distance / length, which
    makes the branch meet the segment at roughly 45 degrees.
    """
    u = min(max(projection_parameter(point, segment), 0.0), 1.0)

    if 0.0 < u < 1.0:
        v = u + nearest_distance / segment.length_2d()
        # Past b the branch simply joins at b.
        u = 1.0 if v > 1.0 else v

    return u


class SubQuadrantRefiner:
    """Builds the level 2 neighborhood and sub-segments for a query point."""

    def __init__(self, point_field: PointField):
        self.point_field = point_field
        self.size = DEFAULTS.LEVEL2_NEIGHBORHOOD

    def neighborhood(self, cx: int, cy: int, x: float, y: float, points: list) -> list:
        """
        Half-resolution points around the quadrant of (x, y). Cells of the
        doubled grid are generated and scaled back by 2, then every level 1
        point replaces the half-cell it falls in, so the two levels agree.
        """
        quadrant = sub_quadrant(cx, cy, x, y)
        sub_points = self.point_field.neighborhood(2 * cx + quadrant.qx, 2 * cy + quadrant.qy, self.size)
        sub_points = [[Point2D(p.x / 2.0, p.y / 2.0) for p in row] for row in sub_points]

        half = self.size // 2
        for row in points:
            for point in row:
                q = sub_quadrant(cx, cy, point.x, point.y)
                k = half - quadrant.qy + q.qy
                l = half - quadrant.qx + q.qx
                if 0 <= k < self.size and 0 <= l < self.size:
                    sub_points[k][l] = point

        return sub_points

    def build_sub_segments(self, sub_points: list, begins: list, ends: list) -> list:
        """Connects each interior sub-point to the nearest level 1 half segment."""
        candidates = list(begins) + list(ends)

        sub_segments = []
        for i in range(1, self.size - 1):
            for j in range(1, self.size - 1):
                point = sub_points[i][j]

                nearest_distance = float("inf")
                nearest = candidates[0]
                for segment in candidates:
                    d = distance_to_segment(point, segment)
                    if d < nearest_distance:
                        nearest_distance = d
                        nearest = segment

                u = snap_parameter(point, nearest, nearest_distance)
                end = lerp_segment(nearest, u)
                # TODO: derive the start elevation from the control function
                # instead of copying it from the joining point.
                start = Point3D(point.x, point.y, end.z)
                sub_segments.append(Segment3D(start, end))

        return sub_segments
