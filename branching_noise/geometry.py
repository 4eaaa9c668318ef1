# branching_noise/geometry.py

"""
================================================================================
GEOMETRY PRIMITIVES
================================================================================
Small 2-D/3-D value types and the vector math the branching network is built
from: point-to-segment distance, projection parameters, linear remaps and a
centripetal Catmull-Rom evaluator used to smooth the network.

Data Contract:
---------------
- Inputs: Point2D / Point3D / Segment3D values, or plain floats.
- Outputs: Floats and new immutable value types.
- Side Effects: None.
- Invariants: Zero-length segments never divide by zero. Their projection
  parameter is 0, so they behave like their start point.
================================================================================
"""

import math
from typing import NamedTuple

from numba import njit


class Point2D(NamedTuple):
    x: float
    y: float


class Point3D(NamedTuple):
    x: float
    y: float
    z: float


class Segment3D(NamedTuple):
    """A directed segment; z carries the elevation of each endpoint."""
    a: Point3D
    b: Point3D

    def is_degenerate(self) -> bool:
        return self.a == self.b

    def length_2d(self) -> float:
        return math.hypot(self.b.x - self.a.x, self.b.y - self.a.y)


# --- JIT-compiled scalar kernels ---

@njit
def _projection_parameter(px, py, ax, ay, bx, by):
    "Unclamped parameter of the orthogonal projection of p onto line ab."
    dx = bx - ax
    dy = by - ay
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return 0.0
    return ((px - ax) * dx + (py - ay) * dy) / length_sq

@njit
def _distance_to_segment(px, py, ax, ay, bx, by):
    u = _projection_parameter(px, py, ax, ay, bx, by)
    u = min(max(u, 0.0), 1.0)
    cx = ax + u * (bx - ax)
    cy = ay + u * (by - ay)
    return math.sqrt((px - cx) ** 2 + (py - cy) ** 2)

@njit
def _barry_goldman(v0, v1, v2, v3, t0, t1, t2, t3, t):
    """
    Evaluates one coordinate of a Catmull-Rom segment between v1 and v2 using
    the Barry-Goldman pyramidal formulation for arbitrary knots.
    """
    a1 = (t1 - t) / (t1 - t0) * v0 + (t - t0) / (t1 - t0) * v1
    a2 = (t2 - t) / (t2 - t1) * v1 + (t - t1) / (t2 - t1) * v2
    a3 = (t3 - t) / (t3 - t2) * v2 + (t - t2) / (t3 - t2) * v3
    b1 = (t2 - t) / (t2 - t0) * a1 + (t - t0) / (t2 - t0) * a2
    b2 = (t3 - t) / (t3 - t1) * a2 + (t - t1) / (t3 - t1) * a3
    return (t2 - t) / (t2 - t1) * b1 + (t - t1) / (t2 - t1) * b2


# Centripetal parameterization avoids cusps and self-intersections.
CATMULL_ROM_ALPHA = 0.5


def projection_parameter(point, segment: Segment3D) -> float:
    """Parameter u of the projection of `point` onto the 2-D line of `segment`."""
    a, b = segment
    return _projection_parameter(float(point.x), float(point.y), a.x, a.y, b.x, b.y)


def distance_to_segment(point, segment: Segment3D) -> float:
    """2-D distance from `point` to `segment`, ignoring elevation."""
    a, b = segment
    return _distance_to_segment(float(point.x), float(point.y), a.x, a.y, b.x, b.y)


def distance(p, q) -> float:
    return math.hypot(p.x - q.x, p.y - q.y)


def lerp(a: float, b: float, t: float) -> float:
    "Linear interpolation."
    return a + t * (b - a)


def lerp_clamp(a: float, b: float, t: float) -> float:
    return lerp(a, b, min(max(t, 0.0), 1.0))


def lerp_segment(segment: Segment3D, u: float) -> Point3D:
    a, b = segment
    return Point3D(lerp(a.x, b.x, u), lerp(a.y, b.y, u), lerp(a.z, b.z, u))


def midpoint(segment: Segment3D) -> Point3D:
    a, b = segment
    return Point3D((a.x + b.x) / 2.0, (a.y + b.y) / 2.0, (a.z + b.z) / 2.0)


def reflect(center: Point3D, other: Point3D) -> Point3D:
    """Mirror `other` through `center` (2 * center - other)."""
    return Point3D(
        2.0 * center.x - other.x,
        2.0 * center.y - other.y,
        2.0 * center.z - other.z,
    )


def project_z(point: Point3D) -> Point2D:
    return Point2D(point.x, point.y)


def remap(value: float, a: float, b: float, c: float, d: float) -> float:
    """Linearly maps `value` from [a, b] onto [c, d]."""
    return c + (value - a) * (d - c) / (b - a)


def remap_clamp(value: float, a: float, b: float, c: float, d: float) -> float:
    result = remap(value, a, b, c, d)
    return min(max(result, min(c, d)), max(c, d))


def _knot_interval(p: Point3D, q: Point3D) -> float:
    return math.dist(p, q) ** CATMULL_ROM_ALPHA


def catmull_rom_midpoint(p0: Point3D, p1: Point3D, p2: Point3D, p3: Point3D) -> Point3D:
    """
    Evaluates the centripetal Catmull-Rom spline through p0..p3 halfway
    between p1 and p2. Falls back to uniform knots when two consecutive
    control points coincide.
    """
    d01 = _knot_interval(p0, p1)
    d12 = _knot_interval(p1, p2)
    d23 = _knot_interval(p2, p3)

    if d01 > 0.0 and d12 > 0.0 and d23 > 0.0:
        t0, t1 = 0.0, d01
        t2 = t1 + d12
        t3 = t2 + d23
    else:
        t0, t1, t2, t3 = 0.0, 1.0, 2.0, 3.0

    t = (t1 + t2) / 2.0
    return Point3D(*(
        _barry_goldman(float(v0), float(v1), float(v2), float(v3), t0, t1, t2, t3, t)
        for v0, v1, v2, v3 in zip(p0, p1, p2, p3)
    ))
