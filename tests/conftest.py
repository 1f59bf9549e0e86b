"""Pytest configuration and shared fixtures."""

import json
import logging
from pathlib import Path

import numpy as np
import pytest

from configuration import Configuration
from particle import make_factory
from simulation import SimulationEngine


@pytest.fixture
def seeded_config():
    """Default tunables with a fixed seed."""
    return Configuration(seed=1234)


@pytest.fixture
def engine(seeded_config):
    """A seeded engine initialized on the reference 800x800 canvas."""
    sim = SimulationEngine(seeded_config)
    sim.initialize(800, 800)
    return sim


@pytest.fixture
def empty_engine():
    """A seeded engine with no particles, for hand-placed scenarios."""
    sim = SimulationEngine(Configuration(seed=7, particle_count=0))
    sim.initialize(800, 800)
    return sim


@pytest.fixture
def factory():
    return make_factory(42)


@pytest.fixture
def place():
    """Returns a helper that replaces an engine's particles with hand-placed ones."""
    def _place(sim, positions, velocities):
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 2)
        velocities = np.asarray(velocities, dtype=np.float64).reshape(-1, 2)
        count = positions.shape[0]
        sim.particles.positions = positions.copy()
        sim.particles.velocities = velocities.copy()
        sim.particles.targets = np.zeros((count, 2))
        sim.particles.colors = np.zeros((count, 3))
        sim.config.particle_count = count
    return _place


@pytest.fixture(scope="session")
def project_root():
    """Provide the project root path."""
    return Path(__file__).parent.parent


@pytest.fixture
def restore_root_logger():
    """Puts the root logger back the way it was after setup_logging runs."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def write_config(tmp_path):
    """Returns a helper that writes a config dict to a JSON file and gives its path."""
    def _write(config, name="config.json"):
        path = tmp_path / name
        path.write_text(json.dumps(config))
        return str(path)
    return _write
