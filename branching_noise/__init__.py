# branching_noise/__init__.py

# This file makes the 'branching_noise' directory a Python package.
# We can also use it to define the public API of the package.

from .generator import BranchingNoise, Network
from .control_functions import (
    LichtenbergControlFunction,
    PerlinControlFunction,
    PlaneControlFunction,
    create_control_function,
)
from .points import PointField
from .segments import SegmentGraph
from .subdivision import SplineSubdivider
from .refinement import SubQuadrantRefiner

__all__ = [
    "BranchingNoise",
    "Network",
    "PointField",
    "SegmentGraph",
    "SplineSubdivider",
    "SubQuadrantRefiner",
    "PlaneControlFunction",
    "PerlinControlFunction",
    "LichtenbergControlFunction",
    "create_control_function",
]
