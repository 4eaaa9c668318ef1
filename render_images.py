# render_images.py

"""
================================================================================
BRANCHING NOISE RENDERER
================================================================================
This script is a command-line tool that renders the branching noise presets
to 16-bit grayscale PNG images: a terrain elevation map and a Lichtenberg
(electric discharge) figure.

Usage:
    python render_images.py
    python render_images.py --preset lichtenberg --width 256 --height 256
    python render_images.py --config path/to/your/config.json
================================================================================
"""
import argparse
import copy
import json
import logging
import multiprocessing
import os
import sys
import time

# Add project root to Python path to allow importing from branching_noise
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from branching_noise import config as DEFAULTS
from branching_noise.control_functions import create_control_function, sample_control_function
from branching_noise.image_io import save_field_image
from branching_noise.sampler import sample_field


def build_render_job(preset_name: str, overrides: dict) -> dict:
    """
    Merges a named preset with the user's overrides. 'noise_parameters' and
    'control_options' are merged key by key, everything else is replaced.
    """
    if preset_name not in DEFAULTS.PRESETS:
        raise ValueError(
            f"Unknown preset '{preset_name}'. Expected one of: {', '.join(sorted(DEFAULTS.PRESETS))}."
        )
    job = copy.deepcopy(DEFAULTS.PRESETS[preset_name])
    for key, value in overrides.items():
        if key in ('noise_parameters', 'control_options'):
            job[key].update(value)
        else:
            job[key] = value
    return job


def render_preset(job: dict, width: int, height: int, workers: int, output_dir: str, logger: logging.Logger) -> str:
    """Samples one render job and saves the image plus its generation config."""
    start_time = time.perf_counter()

    values = sample_field(
        job['noise_parameters'],
        job['control_function'],
        job['control_options'],
        job['mode'],
        width,
        height,
        workers,
        logger,
    )
    image_path = save_field_image(values, os.path.join(output_dir, job['filename']), logger)

    # Preview of the field that guided the network.
    control_function = create_control_function(job['control_function'], job['control_options'])
    stem, _ = os.path.splitext(job['filename'])
    save_field_image(sample_control_function(control_function), os.path.join(output_dir, f"{stem}_control.png"), logger)

    # Save the "birth certificate" so the image can be regenerated exactly.
    gen_config_path = os.path.join(output_dir, f"{stem}_generation_config.json")
    with open(gen_config_path, 'w') as f:
        json.dump(job, f, indent=4)

    end_time = time.perf_counter()
    logger.info(f"Rendered '{image_path}' in {end_time - start_time:.2f} seconds.")
    return image_path


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Renders terrain and Lichtenberg figures from branching noise.")
    parser.add_argument(
        "--preset",
        choices=sorted(DEFAULTS.PRESETS) + ["all"],
        default="all",
        help="Which preset to render."
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional JSON file whose keys override the preset (e.g. 'noise_parameters', 'control_function')."
    )
    parser.add_argument("--width", type=int, default=DEFAULTS.DEFAULT_IMAGE_WIDTH, help="Image width in pixels.")
    parser.add_argument("--height", type=int, default=DEFAULTS.DEFAULT_IMAGE_HEIGHT, help="Image height in pixels.")
    parser.add_argument(
        "--workers",
        type=int,
        default=max(1, multiprocessing.cpu_count() - 1),
        help="Number of worker processes. 1 samples in-process."
    )
    parser.add_argument("--output-dir", type=str, default="renders", help="Directory the images are written to.")
    args = parser.parse_args(argv)

    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Renderer")

    # 2. --- Load Configuration ---
    overrides = {}
    if args.config:
        logger.info(f"Loading configuration from: {args.config}")
        try:
            with open(args.config, 'r') as f:
                overrides = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.critical(f"Failed to load or parse config file: {e}")
            return 1

    if args.width <= 0 or args.height <= 0:
        logger.critical(f"Image size must be positive, got {args.width}x{args.height}.")
        return 1

    # 3. --- Render ---
    preset_names = sorted(DEFAULTS.PRESETS) if args.preset == "all" else [args.preset]
    for preset_name in preset_names:
        logger.info(f"--- Rendering preset '{preset_name}' ---")
        job = build_render_job(preset_name, overrides)
        render_preset(job, args.width, args.height, args.workers, args.output_dir, logger)

    logger.info(f"All images saved to: {args.output_dir}")
    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
