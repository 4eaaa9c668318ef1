# branching_noise/points.py

"""
================================================================================
JITTERED POINT FIELD
================================================================================
Every integer grid cell (i, j) owns exactly one pseudo-random point, offset
from the cell's lower-left corner by (px, py) in [margin, 1 - margin]^2.

Data Contract:
---------------
- Inputs (on initialization): seed, eps, cache size.
- Outputs: Point2D values and square neighborhoods of them.
- Side Effects: None after construction. The cache is built once in
  __init__ and never mutated, so an instance can be shared read-only.
- Invariants: point(i, j) is a pure function of (i, j, seed, eps). Cached
  and uncached lookups return bit-identical values.
================================================================================
"""

import numpy as np

from . import config as DEFAULTS
from .geometry import Point2D

_UINT32_MASK = 0xFFFFFFFF


class PointField:
    """Deterministic point-per-cell generator with a static cache window."""

    def __init__(self, seed: int = DEFAULTS.DEFAULT_SEED, eps: float = DEFAULTS.DEFAULT_EPS, cache_size: int = DEFAULTS.DEFAULT_CACHE_SIZE):
        if not 0.0 <= eps < 0.5:
            raise ValueError(f"eps must be in [0, 0.5), got {eps}.")
        if cache_size < 0:
            raise ValueError(f"cache_size must be non-negative, got {cache_size}.")

        self.seed = seed
        self.eps = eps
        self.margin = max(eps, DEFAULTS.JITTER_FLOOR)
        self.cache_size = cache_size

        # The window covers cells [-cache_size // 2, cache_size - cache_size // 2).
        self._cache_origin = cache_size // 2
        self._cache = np.empty((cache_size, cache_size, 2), dtype=np.float64)
        for x in range(cache_size):
            for y in range(cache_size):
                point = self.generate_point(x - self._cache_origin, y - self._cache_origin)
                self._cache[x, y, 0] = point.x
                self._cache[x, y, 1] = point.y
        self._cache.setflags(write=False)

    def _cell_rng(self, i: int, j: int) -> np.random.Generator:
        # SeedSequence hashes its entropy words, so neighbouring cells get
        # uncorrelated streams. Negative coordinates are folded to uint32.
        entropy = [i & _UINT32_MASK, j & _UINT32_MASK, self.seed & _UINT32_MASK]
        return np.random.default_rng(np.random.SeedSequence(entropy))

    def generate_point(self, i: int, j: int) -> Point2D:
        """Computes the point of cell (i, j) without consulting the cache."""
        rng = self._cell_rng(i, j)
        px, py = rng.uniform(self.margin, 1.0 - self.margin, size=2)
        return Point2D(float(i) + float(px), float(j) + float(py))

    def in_cache(self, i: int, j: int) -> bool:
        x = i + self._cache_origin
        y = j + self._cache_origin
        return 0 <= x < self.cache_size and 0 <= y < self.cache_size

    def point(self, i: int, j: int) -> Point2D:
        """The point of cell (i, j), from the cache when it is in the window."""
        if self.in_cache(i, j):
            cached = self._cache[i + self._cache_origin, j + self._cache_origin]
            return Point2D(float(cached[0]), float(cached[1]))
        return self.generate_point(i, j)

    def neighborhood(self, ci: int, cj: int, size: int) -> list:
        """
        Returns a size x size grid of points centred on cell (ci, cj).
        Rows run along y and columns along x: grid[row][col] belongs to cell
        (ci + col - size // 2, cj + row - size // 2).
        """
        half = size // 2
        return [
            [self.point(ci + col - half, cj + row - half) for col in range(size)]
            for row in range(size)
        ]
