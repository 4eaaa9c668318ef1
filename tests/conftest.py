"""Shared fixtures for the branching noise tests."""

import logging

import pytest

from branching_noise.control_functions import PerlinControlFunction, PlaneControlFunction
from branching_noise.generator import BranchingNoise


@pytest.fixture
def logger():
    return logging.getLogger("branching_noise.tests")


@pytest.fixture
def constant_generator(logger):
    """Scenario A: seed 0, eps 0.15, elevation 0.5 everywhere."""
    config = {'seed': 0, 'eps': 0.15}
    return BranchingNoise(config=config, logger=logger, control_function=PlaneControlFunction())


@pytest.fixture
def terrain_generator(logger):
    config = {
        'seed': 0,
        'eps': 0.15,
        'noise_top_left': (0.0, 0.0),
        'noise_bottom_right': (4.0, 4.0),
        'control_top_left': (0.0, 0.0),
        'control_bottom_right': (0.5, 0.5),
    }
    return BranchingNoise(config=config, logger=logger, control_function=PerlinControlFunction(seed=0))
