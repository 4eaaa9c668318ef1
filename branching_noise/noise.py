# branching_noise/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides seeded 2D Perlin noise for the control functions that
guide the branching network. It is designed to be a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - p: A pre-shuffled NumPy permutation table (int array of length 512).
    - x, y: Scalar coordinates.
    - octaves, persistence, lacunarity: Standard noise parameters.
- Outputs:
    - A float noise value (typically in the range [-1, 1]).
- Side Effects: None.
================================================================================
"""

import numpy as np
from numba import njit

# Pre-defined gradient vectors for performance.
_GRADIENT_VECTORS = np.array([[1, 1], [-1, 1], [1, -1], [-1, -1],
                              [1, 0], [-1, 0], [0, 1], [0, -1]])


def create_permutation_table(seed: int) -> np.ndarray:
    """Builds the doubled 512-entry permutation table for a seed."""
    p = np.arange(256, dtype=np.int64)
    rng = np.random.default_rng(seed & 0xFFFFFFFF)
    rng.shuffle(p)
    return np.stack([p, p]).flatten()

@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def _gradient(h, x, y):
    """Calculates the dot product between a gradient vector and coordinates."""
    g = _GRADIENT_VECTORS[h % 8]
    return g[0] * x + g[1] * y

@njit
def _perlin_octave(p, x, y):
    xi = int(np.floor(x))
    yi = int(np.floor(y))

    xf = x - xi
    yf = y - yi

    u = _fade(xf)
    v = _fade(yf)

    px0 = xi % 256
    px1 = (px0 + 1) % 256
    py0 = yi % 256
    py1 = (py0 + 1) % 256

    idx00 = p[p[px0] + py0]
    idx01 = p[p[px0] + py1]
    idx10 = p[p[px1] + py0]
    idx11 = p[p[px1] + py1]

    g00 = _gradient(idx00, xf, yf)
    g01 = _gradient(idx01, xf, yf - 1)
    g10 = _gradient(idx10, xf - 1, yf)
    g11 = _gradient(idx11, xf - 1, yf - 1)

    x1 = _lerp(g00, g10, u)
    x2 = _lerp(g01, g11, u)
    return _lerp(x1, x2, v)

@njit
def perlin_noise_2d(p, x, y, octaves=1, persistence=0.5, lacunarity=2.0):
    """
    Samples 2D Perlin noise at a single point using a pre-computed
    permutation table. The sum of octaves is divided by the total amplitude,
    so the result stays within [-1, 1] for any octave count.
    """
    noise_val = 0.0
    amplitude = 1.0
    frequency = 1.0
    total_amplitude = 0.0

    for _ in range(octaves):
        noise_val += _perlin_octave(p, x * frequency, y * frequency) * amplitude
        total_amplitude += amplitude
        amplitude *= persistence
        frequency *= lacunarity

    return noise_val / total_amplitude
