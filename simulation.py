# simulation.py
"""
Handles the core simulation logic and physics calculations.

This module defines the SimulationEngine class, which owns the particle
collection and the configuration, and advances the system by one frame:
integration, wall reflection, shape attraction, magnet attraction and
pairwise collisions. It also receives the pointer and click events the
host window forwards to it.
"""
import logging
import numpy as np
from enum import Enum
from typing import Any, Dict, List, Optional

from collisions import resolve_collisions
from configuration import Configuration
from constants import DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT, POINTER_UNSET
from particle import Particle, ParticleSystem, make_factory
from shapes import circle_targets, square_targets
from vector import Vector2D

# --- Data Contracts ---
#
# class SimulationEngine:
#   - __init__(self, config: Optional[Configuration] = None):
#     - Inputs:
#       - config: The initial configuration. config.seed seeds the engine's
#         random source; None gives a non-deterministic source.
#     - Side Effects: Creates an empty ParticleSystem.
#
#   - initialize(self, width: float, height: float) -> None:
#     - Side Effects: Replaces all particles with config.particle_count new
#       ones, clears the shape mode and releases the magnet.
#
#   - step(self, width: float, height: float) -> None:
#     - Side Effects: Modifies particle positions and velocities.
#     - Invariants: Particle count remains constant. After the call every
#       position lies within [0, width - 1] x [0, height - 1].
#
#   - set_*(value) -> None: One setter per Configuration field. Values are
#     stored as given, except the particle count, which is truncated to an
#     int like the collection it sizes. Radius, angle and count changes
#     rebuild the target formation while a shape is active.
#
#   - on_pointer_move / on_pointer_drag / on_pointer_down / on_pointer_up /
#     on_multi_click: Input events forwarded by the host.


class ShapeMode(Enum):
    NONE = "none"
    CIRCLE = "circle"
    SQUARE = "square"


class MouseButton(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    MIDDLE = "middle"


class SimulationEngine:
    """
    Manages the particle collection and advances it frame by frame.
    """
    def __init__(self, config: Optional[Configuration] = None):
        self.config = config if config is not None else Configuration()
        self.particles = ParticleSystem(make_factory(self.config.seed))

        self.pointer_position = Vector2D(*POINTER_UNSET)
        self.magnet_active = False
        self.shape_mode = ShapeMode.NONE
        self.last_collision_count = 0

        # Bounds of the most recent initialize/step call. The shape center is
        # derived from them.
        self.width = float(DEFAULT_WINDOW_WIDTH)
        self.height = float(DEFAULT_WINDOW_HEIGHT)

        logging.info(
            f"SimulationEngine created "
            f"(seed={self.config.seed}, particle_count={self.config.particle_count})."
        )

    # --- Lifecycle ---

    def initialize(self, width: float, height: float) -> None:
        """Generates all particles and resets internal state."""
        self.width, self.height = float(width), float(height)
        self.particles.clear()
        self.magnet_active = False
        self.shape_mode = ShapeMode.NONE
        self.last_collision_count = 0

        self.particles.spawn(
            self.config.particle_count, self.width, self.height,
            self.config.starting_velocity
        )
        logging.info(
            f"Simulation initialized with {len(self.particles)} particles "
            f"on a {self.width:g}x{self.height:g} canvas."
        )

    def step(self, width: float, height: float) -> None:
        """
        Executes one frame of the simulation.
        """
        self.width, self.height = float(width), float(height)
        config = self.config
        positions = self.particles.positions
        velocities = self.particles.velocities

        # 1. Apply velocity to position
        positions += velocities

        # 2. Reflect off the walls, one axis at a time
        for axis, limit in ((0, self.width - 1), (1, self.height - 1)):
            coords = positions[:, axis]
            outside = (coords > limit) | (coords < 0)
            if outside.any():
                coords[outside] = np.minimum(limit, np.maximum(0, coords[outside]))
                velocities[outside, axis] *= -config.particle_elasticity

        # 3. Pull particles toward their places in the active shape
        if self.shape_mode is not ShapeMode.NONE:
            self._apply_shape_force(positions, velocities)

        # 4. Pull particles toward the pointer
        if self.magnet_active:
            self._apply_magnet_force(positions, velocities)

        # 5. Pairwise collisions
        if config.collisions_enabled:
            self.last_collision_count = resolve_collisions(
                positions, velocities, config.particle_size, config.particle_elasticity
            )
        else:
            self.last_collision_count = 0

    def _apply_shape_force(self, positions: np.ndarray, velocities: np.ndarray) -> None:
        config = self.config
        pos_diff = self.particles.targets - positions
        distance_sq = np.einsum('ij,ij->i', pos_diff, pos_diff)

        # Partially normalize the offset to get the "optimal" velocity.
        # Particles sitting exactly on their target want no velocity at all.
        with np.errstate(divide='ignore'):
            falloff = np.power(distance_sq, config.shape_exponent)
        scale = np.divide(
            config.shape_force,
            falloff,
            out=np.zeros_like(distance_sq),
            where=distance_sq > 0
        )
        desired = pos_diff * scale[:, np.newaxis]

        # Move a fraction of the way toward the desired velocity.
        velocities += (desired - velocities) * config.shape_elasticity

    def _apply_magnet_force(self, positions: np.ndarray, velocities: np.ndarray) -> None:
        config = self.config
        pos_diff = np.array(self.pointer_position.as_tuple()) - positions
        distance_sq = np.einsum('ij,ij->i', pos_diff, pos_diff)

        in_range = (distance_sq < config.magnet_radius * config.magnet_radius) & (distance_sq > 0)
        if not in_range.any():
            return

        # Constant-magnitude pull, independent of distance inside the radius.
        scale = config.magnet_force / np.sqrt(distance_sq[in_range])
        velocities[in_range] += pos_diff[in_range] * scale[:, np.newaxis]

    # --- Shapes ---

    @property
    def shape_center(self) -> Vector2D:
        return Vector2D(self.width / 2, self.height / 2)

    def _regenerate_shape(self) -> None:
        """Rebuilds the target formation for the active shape, if any."""
        count = len(self.particles)
        config = self.config
        if self.shape_mode is ShapeMode.CIRCLE:
            targets = circle_targets(count, config.shape_radius, self.shape_center)
        elif self.shape_mode is ShapeMode.SQUARE:
            targets = square_targets(
                count, config.shape_radius, config.shape_angle, self.shape_center
            )
        else:
            return
        self.particles.set_targets(targets)
        logging.debug(f"Regenerated {self.shape_mode.value} targets for {count} particles.")

    def _toggle_shape(self, mode: ShapeMode) -> None:
        self.shape_mode = ShapeMode.NONE if self.shape_mode is mode else mode
        self._regenerate_shape()
        logging.info(f"Shape mode set to '{self.shape_mode.value}'.")

    # --- Readers ---

    def snapshot(self) -> List[Particle]:
        return self.particles.snapshot()

    # --- Event handlers ---

    def on_pointer_move(self, pos: Vector2D) -> None:
        self.pointer_position = pos

    def on_pointer_drag(self, pos: Vector2D) -> None:
        self.pointer_position = pos

    def on_pointer_down(self) -> None:
        self.magnet_active = True

    def on_pointer_up(self) -> None:
        self.magnet_active = False

    def on_multi_click(self, button: MouseButton, click_count: int) -> None:
        """
        Toggles a shape on double (or quadruple, ...) clicks.

        The primary button toggles the circle, the secondary button toggles
        the square. Turning one shape on turns the other off.
        """
        if click_count % 2 != 0:
            return
        if button is MouseButton.PRIMARY:
            self._toggle_shape(ShapeMode.CIRCLE)
        elif button is MouseButton.SECONDARY:
            self._toggle_shape(ShapeMode.SQUARE)

    # --- Setters ---

    def set_shape_radius(self, shape_radius: float) -> None:
        self.config.shape_radius = shape_radius
        self._regenerate_shape()
        logging.info(f"Shape radius set to {shape_radius}.")

    def set_shape_angle(self, shape_angle: float) -> None:
        self.config.shape_angle = shape_angle
        self._regenerate_shape()
        logging.info(f"Shape angle set to {shape_angle}.")

    def set_shape_force(self, shape_force: float) -> None:
        self.config.shape_force = shape_force
        logging.info(f"Shape force set to {shape_force}.")

    def set_shape_elasticity(self, shape_elasticity: float) -> None:
        self.config.shape_elasticity = shape_elasticity
        logging.info(f"Shape elasticity set to {shape_elasticity}.")

    def set_shape_exponent(self, shape_exponent: float) -> None:
        self.config.shape_exponent = shape_exponent
        logging.info(f"Shape exponent set to {shape_exponent}.")

    def set_magnet_radius(self, magnet_radius: float) -> None:
        self.config.magnet_radius = magnet_radius
        logging.info(f"Magnet radius set to {magnet_radius}.")

    def set_magnet_force(self, magnet_force: float) -> None:
        self.config.magnet_force = magnet_force
        logging.info(f"Magnet force set to {magnet_force}.")

    def set_particle_count(self, particle_count: int) -> None:
        """Adds new particles at the end or drops the oldest ones."""
        # Stored as an int so the count always matches the collection size.
        particle_count = int(particle_count)
        self.config.particle_count = particle_count
        previous = len(self.particles)
        self.particles.resize(
            particle_count, self.width, self.height, self.config.starting_velocity
        )
        self._regenerate_shape()
        logging.info(f"Particle count changed from {previous} to {len(self.particles)}.")

    def set_particle_size(self, particle_size: float) -> None:
        self.config.particle_size = particle_size
        logging.info(f"Particle size set to {particle_size}.")

    def set_particle_elasticity(self, particle_elasticity: float) -> None:
        self.config.particle_elasticity = particle_elasticity
        logging.info(f"Particle elasticity set to {particle_elasticity}.")

    def set_starting_velocity(self, starting_velocity: float) -> None:
        self.config.starting_velocity = starting_velocity
        logging.info(f"Starting velocity set to {starting_velocity}.")

    def set_collisions_enabled(self, collisions_enabled: bool) -> None:
        self.config.collisions_enabled = collisions_enabled
        logging.info(f"Particle collisions {'enabled' if collisions_enabled else 'disabled'}.")

    def apply_parameters(self, params: Dict[str, Any]) -> None:
        """Routes named values to their setters, e.g. {"shape_radius": 250}."""
        for name, value in params.items():
            setter = getattr(self, f"set_{name}", None)
            if setter is None:
                raise KeyError(f"No setter for simulation parameter '{name}'.")
            setter(value)
