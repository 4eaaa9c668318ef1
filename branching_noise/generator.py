# branching_noise/generator.py

"""
================================================================================
CORE BRANCHING NOISE GENERATOR
================================================================================
This module contains the BranchingNoise class, which evaluates the final
scalar field at any point of the plane. For the cell containing the point it
builds the two-level branching network and returns the distance to the
nearest branch, offset by that branch's elevation.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): A dictionary of parameters which can override the
      internal defaults. Expected keys include 'seed', 'eps', the display
      toggles and the noise/control rectangles.
    - logger: A configured Python logging object for runtime messages.
    - control_function: Any object exposing `domain` and `elevation(x, y)`.
- Outputs (from methods):
    - evaluate(x, y): The terrain value (Worley term blended with overlays).
    - evaluate_lichtenberg(x, y): The discharge-figure value in [0, 1].
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same configuration and control function, every
  evaluation is deterministic and independent of any other evaluation.
================================================================================
"""

import logging
import math
from typing import NamedTuple

from . import config as DEFAULTS
from .geometry import Point2D, distance, distance_to_segment, lerp_clamp, projection_parameter
from .points import PointField
from .refinement import SubQuadrantRefiner
from .segments import SegmentGraph
from .subdivision import Subdivision, SplineSubdivider


class Network(NamedTuple):
    """Every structure built while evaluating one query point."""
    cell: tuple
    points: list
    segments: list
    subdivision: Subdivision
    sub_points: list
    sub_segments: list


def _near_any_point(x: float, y: float, grid: list, radius: float) -> bool:
    query = Point2D(x, y)
    return any(distance(query, point) < radius for row in grid for point in row)


def _near_any_segment(x: float, y: float, segments: list, radius: float) -> bool:
    query = Point2D(x, y)
    return any(distance_to_segment(query, segment) < radius for segment in segments)


def _near_grid(x: float, y: float, offset: float, radius: float) -> bool:
    """True when (x, y) is within `radius` of a grid line shifted by `offset`."""
    dx = abs((x - offset + 0.5) % 1.0 - 0.5)
    dy = abs((y - offset + 0.5) % 1.0 - 0.5)
    return dx < radius or dy < radius


class BranchingNoise:
    """
    Evaluates the branching noise field. This class is backend-only and does
    not handle any image output.
    """
    def __init__(self, config: dict, logger: logging.Logger, control_function):
        """
        Initializes the generator and precomputes the point cache.

        Args:
            config (dict): User-defined parameters to override defaults.
            logger (logging.Logger): The logger instance for all output.
            control_function: The elevation field guiding the network.
        """
        self.logger = logger
        self.user_config = config
        self.control_function = control_function
        self.logger.info("BranchingNoise initializing...")

        control_top_left, control_bottom_right = control_function.domain

        # --- Consolidate Configuration ---
        self.settings = {
            'seed': self.user_config.get('seed', DEFAULTS.DEFAULT_SEED),
            'eps': self.user_config.get('eps', DEFAULTS.DEFAULT_EPS),
            'cache_size': self.user_config.get('cache_size', DEFAULTS.DEFAULT_CACHE_SIZE),
            'display_points': self.user_config.get('display_points', DEFAULTS.DEFAULT_DISPLAY_POINTS),
            'display_segments': self.user_config.get('display_segments', DEFAULTS.DEFAULT_DISPLAY_SEGMENTS),
            'display_grid': self.user_config.get('display_grid', DEFAULTS.DEFAULT_DISPLAY_GRID),
            'noise_top_left': tuple(self.user_config.get('noise_top_left', DEFAULTS.DEFAULT_NOISE_TOP_LEFT)),
            'noise_bottom_right': tuple(self.user_config.get('noise_bottom_right', DEFAULTS.DEFAULT_NOISE_BOTTOM_RIGHT)),
            'control_top_left': tuple(self.user_config.get('control_top_left', control_top_left)),
            'control_bottom_right': tuple(self.user_config.get('control_bottom_right', control_bottom_right)),
            'clamp_control_remap': self.user_config.get('clamp_control_remap', DEFAULTS.DEFAULT_CLAMP_CONTROL_REMAP),
            'lichtenberg_falloff': self.user_config.get('lichtenberg_falloff', DEFAULTS.DEFAULT_LICHTENBERG_FALLOFF),
        }

        if self.settings['lichtenberg_falloff'] <= 0.0:
            raise ValueError(f"lichtenberg_falloff must be positive, got {self.settings['lichtenberg_falloff']}.")

        # --- Public Properties for easy access ---
        self.seed = self.settings['seed']
        self.eps = self.settings['eps']

        # --- Build the pipeline components ---
        # The point cache is fully built here, before any evaluation, and is
        # read-only afterwards.
        self.point_field = PointField(self.seed, self.eps, self.settings['cache_size'])
        self.segment_graph = SegmentGraph(
            self.point_field,
            control_function,
            self.settings['noise_top_left'],
            self.settings['noise_bottom_right'],
            self.settings['control_top_left'],
            self.settings['control_bottom_right'],
            clamp_remap=self.settings['clamp_control_remap']
        )
        self.subdivider = SplineSubdivider()
        self.refiner = SubQuadrantRefiner(self.point_field)

        self.logger.info(f"BranchingNoise initialized with seed: {self.seed}, eps: {self.eps}")
        self.logger.debug(
            f"Control function: {type(control_function).__name__}, "
            f"noise rect {self.settings['noise_top_left']} -> {self.settings['noise_bottom_right']}, "
            f"control rect {self.settings['control_top_left']} -> {self.settings['control_bottom_right']}"
        )
        self.logger.debug(f"Point cache: {self.settings['cache_size']}x{self.settings['cache_size']} cells")

    def build_network(self, x: float, y: float) -> Network:
        """Builds both levels of the branching network for the cell of (x, y)."""
        cx = int(math.floor(x))
        cy = int(math.floor(y))

        # 1. Level 1: points in neighboring cells and their descent segments.
        points = self.segment_graph.neighborhood(cx, cy)
        segments = self.segment_graph.build_segments(points)

        # 2. Smooth the level 1 network.
        subdivision = self.subdivider.subdivide(segments)

        # 3. Level 2: half-resolution points joined onto the level 1 network.
        sub_points = self.refiner.neighborhood(cx, cy, x, y, points)
        sub_segments = self.refiner.build_sub_segments(sub_points, subdivision.begins, subdivision.ends)

        return Network((cx, cy), points, segments, subdivision, sub_points, sub_segments)

    def nearest_segment(self, x: float, y: float, network: Network) -> tuple:
        """Returns (distance, segment) of the branch closest to (x, y)."""
        query = Point2D(x, y)
        nearest_distance = float("inf")
        nearest = None

        for group in (network.subdivision.begins, network.subdivision.ends, network.sub_segments):
            for segment in group:
                d = distance_to_segment(query, segment)
                if d < nearest_distance:
                    nearest_distance = d
                    nearest = segment

        return nearest_distance, nearest

    def worley_term(self, x: float, y: float, network: Network) -> float:
        """Distance to the nearest branch plus the elevation along that branch."""
        nearest_distance, nearest = self.nearest_segment(x, y, network)
        u = projection_parameter(Point2D(x, y), nearest)
        elevation = lerp_clamp(nearest.a.z, nearest.b.z, u)
        return nearest_distance + elevation

    def overlay_term(self, x: float, y: float, network: Network) -> float:
        """1.0 where an enabled diagnostic overlay is lit, 0.0 elsewhere."""
        radii = DEFAULTS.OVERLAY_RADII
        subdivision = network.subdivision

        if self.settings['display_points']:
            if (_near_any_point(x, y, network.points, radii['points'])
                    or _near_any_point(x, y, subdivision.midpoints, radii['midpoints'])
                    or _near_any_point(x, y, network.sub_points, radii['sub_points'])):
                return 1.0

        if self.settings['display_segments']:
            if (_near_any_segment(x, y, subdivision.begins, radii['segments'])
                    or _near_any_segment(x, y, subdivision.ends, radii['segments'])
                    or _near_any_segment(x, y, network.sub_segments, radii['sub_segments'])):
                return 1.0

        if self.settings['display_grid']:
            if _near_grid(x, y, 0.0, radii['grid']) or _near_grid(x, y, 0.5, radii['sub_grid']):
                return 1.0

        return 0.0

    def evaluate(self, x: float, y: float) -> float:
        """The terrain field: max(Worley term, overlays)."""
        network = self.build_network(x, y)
        return max(self.worley_term(x, y, network), self.overlay_term(x, y, network))

    def evaluate_terrain(self, x: float, y: float) -> float:
        return self.evaluate(x, y)

    def evaluate_lichtenberg(self, x: float, y: float) -> float:
        """
        The discharge-figure field: 1 on the branches, fading linearly to 0
        at `lichtenberg_falloff` from them, with overlays lit on top.
        """
        network = self.build_network(x, y)
        nearest_distance, _ = self.nearest_segment(x, y, network)
        glow = 1.0 - min(max(nearest_distance / self.settings['lichtenberg_falloff'], 0.0), 1.0)
        return max(glow, self.overlay_term(x, y, network))
