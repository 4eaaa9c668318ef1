# branching_noise/image_io.py

"""
================================================================================
IMAGE OUTPUT UTILITIES
================================================================================
Converts raw scalar fields into 16-bit grayscale images. The engine itself
never touches files; this is the only module that does.

Data Contract:
---------------
- Inputs: A 2D NumPy array of floats (rows along y), an output path.
- Outputs: A uint16 array stretched to [0, 65535]; a PNG file on disk.
- Side Effects: Creates the output directory if needed and writes the file.
- Invariants: Non-finite samples never affect the stretch of finite ones and
  are written as 0.
================================================================================
"""

import logging
import os

import numpy as np
from PIL import Image

from . import config as DEFAULTS


def normalize_field(values: np.ndarray) -> np.ndarray:
    """Min/max stretches the finite samples of `values` to the uint16 range."""
    values = np.asarray(values, dtype=np.float64)
    finite = np.isfinite(values)
    result = np.zeros(values.shape, dtype=np.uint16)

    if not finite.any():
        return result

    minimum = values[finite].min()
    maximum = values[finite].max()
    if maximum == minimum:
        return result

    stretched = (values[finite] - minimum) / (maximum - minimum) * DEFAULTS.UINT16_MAX
    result[finite] = np.clip(stretched, 0, DEFAULTS.UINT16_MAX).astype(np.uint16)
    return result


def save_field_image(values: np.ndarray, path: str, logger: logging.Logger) -> str:
    """Writes `values` as a 16-bit grayscale PNG and returns the path."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    samples = normalize_field(values)
    non_finite = samples.size - int(np.isfinite(np.asarray(values, dtype=np.float64)).sum())
    if non_finite:
        logger.warning(f"{non_finite} non-finite samples written as black in '{path}'.")

    # A 2D uint16 array of shape (height, width) becomes an 'I;16' image.
    img = Image.fromarray(samples)
    img.save(path, 'PNG')
    logger.info(f"Saved {samples.shape[1]}x{samples.shape[0]} image to '{path}'")
    return path
