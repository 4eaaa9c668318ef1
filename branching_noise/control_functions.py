# branching_noise/control_functions.py

"""
================================================================================
CONTROL FUNCTIONS
================================================================================
A control function is the external scalar field that decides which way the
branching network flows: every point is linked to its locally lowest
neighbor under this field. Each variant exposes the same two members:

    domain              ((x0, y0), (x1, y1)) input rectangle it is defined on
    elevation(x, y)     scalar in [0, 1]

The variants are interchangeable and are selected by name through
`create_control_function`.
================================================================================
"""

import math

import numpy as np

from . import config as DEFAULTS
from . import noise


class PlaneControlFunction:
    """
    A tilted plane, clamped to [0, 1]. With zero slopes it is the constant
    field `offset`, which produces an undirected, lattice-like network.
    """
    def __init__(self, slope_x: float = 0.0, slope_y: float = 0.0, offset: float = DEFAULTS.DEFAULT_PLANE_OFFSET):
        self.slope_x = slope_x
        self.slope_y = slope_y
        self.offset = offset
        self.domain = DEFAULTS.PLANE_DOMAIN

    def elevation(self, x: float, y: float) -> float:
        value = self.offset + self.slope_x * x + self.slope_y * y
        return min(max(value, 0.0), 1.0)


class PerlinControlFunction:
    """Smooth pseudo-random terrain, (perlin + 1) / 2."""

    def __init__(
        self,
        seed: int = DEFAULTS.DEFAULT_SEED,
        octaves: int = DEFAULTS.DEFAULT_PERLIN_OCTAVES,
        persistence: float = DEFAULTS.DEFAULT_PERLIN_PERSISTENCE,
        lacunarity: float = DEFAULTS.DEFAULT_PERLIN_LACUNARITY,
        frequency: float = DEFAULTS.DEFAULT_PERLIN_FREQUENCY,
    ):
        if octaves < 1:
            raise ValueError(f"Perlin control function needs at least one octave, got {octaves}.")
        self.seed = seed
        self.octaves = octaves
        self.persistence = persistence
        self.lacunarity = lacunarity
        self.frequency = frequency
        self.domain = DEFAULTS.PERLIN_DOMAIN
        self._p = noise.create_permutation_table(seed)

    def elevation(self, x: float, y: float) -> float:
        value = noise.perlin_noise_2d(
            self._p,
            x * self.frequency,
            y * self.frequency,
            octaves=self.octaves,
            persistence=self.persistence,
            lacunarity=self.lacunarity
        )
        return min(max((value + 1.0) / 2.0, 0.0), 1.0)


class LichtenbergControlFunction:
    """
    Electric discharge potential. The potential is 0 at `center` and grows
    radially, reaching 1 at the corners of the domain, so every branch of the
    network flows towards the discharge point. A small amount of Perlin noise
    breaks the radial symmetry.
    """
    def __init__(
        self,
        center: tuple = (0.0, 0.0),
        perturbation: float = DEFAULTS.DEFAULT_LICHTENBERG_PERTURBATION,
        seed: int = DEFAULTS.DEFAULT_SEED,
    ):
        self.center = (float(center[0]), float(center[1]))
        self.perturbation = perturbation
        self.domain = DEFAULTS.LICHTENBERG_DOMAIN
        self._p = noise.create_permutation_table(seed + DEFAULTS.LICHTENBERG_SEED_OFFSET)

        (x0, y0), (x1, y1) = self.domain
        self._max_radius = max(
            math.hypot(cx - self.center[0], cy - self.center[1])
            for cx in (x0, x1) for cy in (y0, y1)
        )

    def elevation(self, x: float, y: float) -> float:
        radius = math.hypot(x - self.center[0], y - self.center[1]) / self._max_radius
        if self.perturbation > 0.0:
            radius += self.perturbation * noise.perlin_noise_2d(self._p, 4.0 * x, 4.0 * y)
        return min(max(radius, 0.0), 1.0)


CONTROL_FUNCTIONS = {
    "plane": PlaneControlFunction,
    "perlin": PerlinControlFunction,
    "lichtenberg": LichtenbergControlFunction,
}


def create_control_function(name: str, options: dict = None):
    """Instantiates a control function variant by name."""
    try:
        factory = CONTROL_FUNCTIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown control function '{name}'. Expected one of: {', '.join(sorted(CONTROL_FUNCTIONS))}."
        ) from None
    return factory(**(options or {}))


def sample_control_function(control_function, resolution: int = 64) -> np.ndarray:
    """
    Samples a control function over its whole domain on a square grid.
    Useful to preview the field that guides the network.
    """
    (x0, y0), (x1, y1) = control_function.domain
    xs = np.linspace(x0, x1, resolution)
    ys = np.linspace(y0, y1, resolution)
    return np.array([[control_function.elevation(float(x), float(y)) for x in xs] for y in ys])
