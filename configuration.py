# configuration.py
"""
The runtime-tunable parameters of the simulation engine.

A Configuration is built once from the "simulation_parameters" section of
config.json and then changed field by field through the engine's setters.
Only config parsing validates values; the setters accept anything.
"""
import logging
import numbers
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from constants import (
    DEFAULT_SHAPE_RADIUS, DEFAULT_SHAPE_ANGLE, DEFAULT_SHAPE_FORCE,
    DEFAULT_SHAPE_ELASTICITY, DEFAULT_SHAPE_EXPONENT, DEFAULT_MAGNET_RADIUS,
    DEFAULT_MAGNET_FORCE, DEFAULT_PARTICLE_COUNT, DEFAULT_PARTICLE_SIZE,
    DEFAULT_PARTICLE_ELASTICITY, DEFAULT_STARTING_VELOCITY,
    DEFAULT_COLLISIONS_ENABLED
)

# --- Data Contracts ---
#
# Configuration.from_params(params: Dict[str, Any]) -> Configuration:
#   - Inputs:
#     - params: Dictionary of simulation parameters from config.json. Every
#       key is optional; missing keys take their defaults from constants.py.
#       - "particle_count": int
#       - "collisions_enabled": bool
#       - "seed": int or null
#       - every other field: int or float
#   - Outputs: A Configuration.
#   - Raises: InvalidConfigurationError on unknown keys or values of the
#     wrong type, and on negative seeds (the random source rejects them).
#     Other ranges are not checked.


class InvalidConfigurationError(ValueError):
    """Raised when the simulation parameters in a config file are malformed."""


@dataclass
class Configuration:
    shape_radius: float = DEFAULT_SHAPE_RADIUS
    shape_angle: float = DEFAULT_SHAPE_ANGLE
    shape_force: float = DEFAULT_SHAPE_FORCE
    shape_elasticity: float = DEFAULT_SHAPE_ELASTICITY
    shape_exponent: float = DEFAULT_SHAPE_EXPONENT
    magnet_radius: float = DEFAULT_MAGNET_RADIUS
    magnet_force: float = DEFAULT_MAGNET_FORCE
    particle_count: int = DEFAULT_PARTICLE_COUNT
    particle_size: float = DEFAULT_PARTICLE_SIZE
    particle_elasticity: float = DEFAULT_PARTICLE_ELASTICITY
    starting_velocity: float = DEFAULT_STARTING_VELOCITY
    collisions_enabled: bool = DEFAULT_COLLISIONS_ENABLED
    seed: Optional[int] = None

    @classmethod
    def from_params(cls, params: Optional[Dict[str, Any]]) -> "Configuration":
        params = params or {}
        known = {f.name for f in fields(cls)}

        unknown = sorted(set(params) - known)
        if unknown:
            _fail(f"Unknown simulation parameter(s): {', '.join(unknown)}.")

        values = {}
        for key, value in params.items():
            if key == "collisions_enabled":
                if not isinstance(value, bool):
                    _fail(f"Parameter '{key}' must be true or false, got {value!r}.")
                values[key] = value
            elif key in ("particle_count", "seed"):
                if value is None and key == "seed":
                    values[key] = None
                    continue
                if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                    _fail(f"Parameter '{key}' must be an integer, got {value!r}.")
                if key == "seed" and value < 0:
                    _fail(f"Parameter 'seed' must not be negative, got {value!r}.")
                values[key] = int(value)
            else:
                if isinstance(value, bool) or not isinstance(value, numbers.Real):
                    _fail(f"Parameter '{key}' must be a number, got {value!r}.")
                values[key] = float(value)

        config = cls(**values)
        logging.debug(f"Simulation configuration parsed: {config}")
        return config


def _fail(msg: str) -> None:
    msg = f"Configuration error: {msg}"
    logging.critical(msg)
    raise InvalidConfigurationError(msg)
