# branching_noise/subdivision.py

"""
================================================================================
SPLINE SUBDIVISION
================================================================================
Splits every level 1 segment in two at a curvature-aware midpoint, so the
branches bend smoothly through the grid points instead of turning sharply
at each of them.

Data Contract:
---------------
- Inputs: The 25 level 1 segments of a neighborhood.
- Outputs: A Subdivision holding 25 "begin" halves (a -> mid), a 5x5 grid
  of 2-D midpoints and 25 "end" halves (mid -> b), all in input order.
- Side Effects: None.
- Invariants: begins[k].a == segments[k].a, ends[k].b == segments[k].b and
  begins[k].b == ends[k].a is the midpoint.
================================================================================
"""

from typing import NamedTuple

from . import config as DEFAULTS
from .geometry import Segment3D, catmull_rom_midpoint, midpoint, project_z, reflect


class Subdivision(NamedTuple):
    begins: list
    midpoints: list
    ends: list


def find_neighbors(segment: Segment3D, segments: list) -> tuple:
    """
    Collects the segments flowing into `segment` (ending at its start) and
    out of it (starting at its end). Zero-length segments never take part
    in a chain. Endpoints are matched by exact equality: they are copies of
    the same jittered points.
    """
    predecessors = []
    successors = []
    for other in segments:
        if other.is_degenerate():
            continue
        if other.b == segment.a:
            predecessors.append(other)
        elif other.a == segment.b:
            successors.append(other)
    return predecessors, successors


def subdivision_point(segment: Segment3D, segments: list):
    """
    Midpoint of `segment`. With a unique predecessor and/or successor the
    point lies on a Catmull-Rom spline through the chain; a missing side is
    replaced by mirroring the segment through its own endpoint.
    """
    predecessors, successors = find_neighbors(segment, segments)
    has_predecessor = len(predecessors) == 1
    has_successor = len(successors) == 1

    if not has_predecessor and not has_successor:
        return midpoint(segment)

    a, b = segment
    before = predecessors[0].a if has_predecessor else reflect(a, b)
    after = successors[0].b if has_successor else reflect(b, a)
    return catmull_rom_midpoint(before, a, b, after)


class SplineSubdivider:
    """Subdivides level 1 segments with neighbor-aware continuity."""

    def __init__(self, grid_size: int = DEFAULTS.LEVEL1_SEGMENT_GRID):
        self.grid_size = grid_size

    def subdivide(self, segments: list) -> Subdivision:
        begins = []
        ends = []
        midpoints = [[None] * self.grid_size for _ in range(self.grid_size)]

        for index, segment in enumerate(segments):
            mid = subdivision_point(segment, segments)
            begins.append(Segment3D(segment.a, mid))
            ends.append(Segment3D(mid, segment.b))
            midpoints[index // self.grid_size][index % self.grid_size] = project_z(mid)

        return Subdivision(begins, midpoints, ends)
