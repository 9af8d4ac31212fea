"""Shared fixtures for the soilsim test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from soilsim.grid.grid import Grid, Uniform
from soilsim.simulation.config import SimulationConfig
from soilsim.simulation.engine import SimulationEngine

# Rates that leave moisture untouched unless a test sets them.
STILL = {
    "diffusion_coefficient": 0.0,
    "evapotranspiration_rate": 0.0,
    "irrigation_rate": 0.0,
    "moisture_threshold": 0.0,
}


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_grid() -> Grid:
    """A 4x4 grid at 50% moisture."""
    return Grid.create(4, 4, Uniform(0.5))


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig(seed=7)


@pytest.fixture
def engine(default_config: SimulationConfig) -> SimulationEngine:
    """An initialized engine on the default 10x10 uniform grid."""
    return SimulationEngine.from_config(default_config)


@pytest.fixture
def still_engine() -> SimulationEngine:
    """A 3x3 engine whose rates are all zero."""
    engine = SimulationEngine(config=SimulationConfig(parameters=dict(STILL)))
    engine.initialize(3, 3, Uniform(0.5))
    return engine
