# branching_noise/sampler.py

"""
================================================================================
FIELD SAMPLER
================================================================================
Evaluates a BranchingNoise field over a pixel canvas. Every pixel is
independent, so rows are farmed out to a pool of worker processes, each of
which builds its own generator (and point cache) once in its initializer.

Data Contract:
---------------
- Inputs: Generator config, control function name/options, render mode,
  canvas size and worker count.
- Outputs: A (height, width) float64 NumPy array of raw field values.
- Side Effects: Spawns worker processes when workers > 1. Logs progress.
================================================================================
"""

import logging
import multiprocessing
import os

import numpy as np
from tqdm import tqdm

from .control_functions import create_control_function
from .generator import BranchingNoise
from .geometry import remap_clamp

RENDER_MODES = ("terrain", "lichtenberg")

# --- Global variables for worker processes ---
worker_generator = None
worker_mode = None
worker_xs = None
worker_ys = None


def pixel_coordinates(top_left: tuple, bottom_right: tuple, width: int, height: int) -> tuple:
    """Noise-space x for each column and y for each row of the canvas."""
    xs = np.array([remap_clamp(float(j), 0.0, float(width), top_left[0], bottom_right[0]) for j in range(width)])
    ys = np.array([remap_clamp(float(i), 0.0, float(height), top_left[1], bottom_right[1]) for i in range(height)])
    return xs, ys


def _evaluator(generator: BranchingNoise, mode: str):
    if mode == "terrain":
        return generator.evaluate_terrain
    if mode == "lichtenberg":
        return generator.evaluate_lichtenberg
    raise ValueError(f"Unknown render mode '{mode}'. Expected one of: {', '.join(RENDER_MODES)}.")


def sample_row(generator: BranchingNoise, mode: str, xs: np.ndarray, y: float) -> np.ndarray:
    evaluate = _evaluator(generator, mode)
    return np.array([evaluate(float(x), y) for x in xs], dtype=np.float64)


def init_worker(config, control_name, control_options, mode, xs, ys):
    """Initializes the global state for each worker process."""
    global worker_generator, worker_mode, worker_xs, worker_ys

    worker_logger = logging.getLogger(f"Worker-{os.getpid()}")
    control_function = create_control_function(control_name, control_options)
    worker_generator = BranchingNoise(config=config, logger=worker_logger, control_function=control_function)
    worker_mode = mode
    worker_xs = xs
    worker_ys = ys


def process_row(row: int) -> tuple:
    return row, sample_row(worker_generator, worker_mode, worker_xs, float(worker_ys[row]))


def sample_field(
    config: dict,
    control_name: str,
    control_options: dict,
    mode: str,
    width: int,
    height: int,
    workers: int,
    logger: logging.Logger,
) -> np.ndarray:
    """
    Samples the whole canvas. The canvas covers the noise rectangle given by
    the config's 'noise_top_left' / 'noise_bottom_right' keys.
    """
    control_function = create_control_function(control_name, control_options)
    # Also validates the config before any worker is started.
    generator = BranchingNoise(config=config, logger=logger, control_function=control_function)
    _evaluator(generator, mode)

    xs, ys = pixel_coordinates(
        generator.settings['noise_top_left'], generator.settings['noise_bottom_right'], width, height
    )
    values = np.empty((height, width), dtype=np.float64)

    if workers <= 1:
        logger.info(f"Sampling {width}x{height} '{mode}' field in-process...")
        for row in tqdm(range(height), desc=f"Sampling {mode}"):
            values[row] = sample_row(generator, mode, xs, float(ys[row]))
        return values

    logger.info(f"Sampling {width}x{height} '{mode}' field with {workers} worker processes...")
    init_args = (config, control_name, control_options, mode, xs, ys)
    with multiprocessing.Pool(processes=workers, initializer=init_worker, initargs=init_args) as pool:
        results_iterator = pool.imap_unordered(process_row, range(height))
        for row, row_values in tqdm(results_iterator, total=height, desc=f"Sampling {mode}"):
            values[row] = row_values

    return values
