# branching_noise/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the
branching noise engine. These values are used if they are not explicitly
provided by the user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC RENDER.
Instead, pass a configuration dictionary to the BranchingNoise instance.
================================================================================
"""

# --- Point Field ---
DEFAULT_SEED = 0
# Margin between a jittered point and the edges of its cell, in cell units.
DEFAULT_EPS = 0.15
# Smallest margin ever used, even when eps is 0. Keeps every point strictly
# inside its cell so that points of adjacent cells can never coincide.
JITTER_FLOOR = 1e-9
# Side length of the precomputed point window. A value of 32 caches the cells
# -16..15 on both axes, which covers both demo presets at both levels.
DEFAULT_CACHE_SIZE = 32

# --- Neighborhood Sizes ---
# These are structural constants of the algorithm, not tuning knobs.
LEVEL1_NEIGHBORHOOD = 7     # 7x7 points around the query cell
LEVEL1_SEGMENT_GRID = 5     # 5x5 interior points -> 25 segments
LEVEL2_NEIGHBORHOOD = 5     # 5x5 half-resolution points

# --- Coordinate Rectangles ---
# The noise-space rectangle is remapped onto the control function's domain
# before elevations are computed.
DEFAULT_NOISE_TOP_LEFT = (0.0, 0.0)
DEFAULT_NOISE_BOTTOM_RIGHT = (4.0, 4.0)
DEFAULT_CLAMP_CONTROL_REMAP = False

# --- Diagnostic Overlays ---
DEFAULT_DISPLAY_POINTS = False
DEFAULT_DISPLAY_SEGMENTS = False
DEFAULT_DISPLAY_GRID = False

# Radii shrink by half at each structural level so overlays stay legible.
OVERLAY_RADII = {
    "points": 0.0625,
    "midpoints": 0.03125,
    "segments": 0.015625,
    "grid": 0.0078125,
    "sub_points": 0.03125,
    "sub_segments": 0.0078125,
    "sub_grid": 0.00390625,
}

# --- Lichtenberg Rendering ---
# Distance from the network, in cell units, at which the discharge glow fades to 0.
DEFAULT_LICHTENBERG_FALLOFF = 0.05

# --- Perlin Control Function ---
DEFAULT_PERLIN_OCTAVES = 1
DEFAULT_PERLIN_PERSISTENCE = 0.5
DEFAULT_PERLIN_LACUNARITY = 2.0
DEFAULT_PERLIN_FREQUENCY = 4.0
PERLIN_DOMAIN = ((0.0, 0.0), (1.0, 1.0))

# --- Lichtenberg Control Function ---
LICHTENBERG_DOMAIN = ((-1.0, -1.0), (1.0, 1.0))
DEFAULT_LICHTENBERG_PERTURBATION = 0.1
# Offset applied to the seed of the perturbation noise so it is decorrelated
# from the point jitter.
LICHTENBERG_SEED_OFFSET = 54321

# --- Plane Control Function ---
PLANE_DOMAIN = ((0.0, 0.0), (1.0, 1.0))
DEFAULT_PLANE_OFFSET = 0.5

# --- Rendering ---
DEFAULT_IMAGE_WIDTH = 512
DEFAULT_IMAGE_HEIGHT = 512
UINT16_MAX = 65535

# --- Demo Presets ---
# Each preset is a complete render description used by render_images.py.
PRESETS = {
    "terrain": {
        "filename": "terrain.png",
        "mode": "terrain",
        "control_function": "perlin",
        "control_options": {},
        "noise_parameters": {
            "seed": 0,
            "eps": 0.15,
            "noise_top_left": [0.0, 0.0],
            "noise_bottom_right": [4.0, 4.0],
            "control_top_left": [0.0, 0.0],
            "control_bottom_right": [0.5, 0.5],
            "display_points": False,
            "display_segments": False,
            "display_grid": False,
        },
    },
    "lichtenberg": {
        "filename": "lichtenberg.png",
        "mode": "lichtenberg",
        "control_function": "lichtenberg",
        "control_options": {},
        "noise_parameters": {
            "seed": 0,
            "eps": 0.1,
            "noise_top_left": [-2.0, -2.0],
            "noise_bottom_right": [2.0, 2.0],
            "control_top_left": [-1.0, -1.0],
            "control_bottom_right": [1.0, 1.0],
            "display_points": False,
            "display_segments": True,
            "display_grid": False,
        },
    },
}
