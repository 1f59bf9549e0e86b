# particle.py
"""
Manages the state of all particles in the simulation.

This module defines the ParticleFactory, which draws randomized particles
from a seedable NumPy generator, and the ParticleSystem class, which stores
the ordered particle collection (position, velocity, target position and
color seed) in efficient NumPy arrays.
"""
import logging
import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Tuple

from vector import Vector2D

# --- Data Contracts ---
#
# class Particle:
#   - A snapshot of one particle. Mutating a snapshot does not change the
#     ParticleSystem it came from.
#
# class ParticleFactory:
#   - __init__(self, rng: np.random.Generator)
#   - generate(self, width, height, starting_velocity) -> Particle
#   - generate_arrays(self, count, width, height, starting_velocity)
#       -> (positions (count, 2), velocities (count, 2), colors (count, 3))
#     - Invariants: positions in [0, width) x [0, height), velocity
#       components in [-starting_velocity, starting_velocity], color
#       channels in [0, 1).
#
# class ParticleSystem:
#   - self.positions, self.velocities, self.targets: float64 arrays (N, 2)
#   - self.colors: float64 array (N, 3)
#   - Invariants: All four arrays always have the same length N and row i
#     of each array belongs to the same particle. Rows are kept in
#     insertion order; the oldest particle is row 0.


@dataclass
class Particle:
    """One particle: where it is, where it goes and where it wants to be."""
    position: Vector2D
    velocity: Vector2D
    target_position: Vector2D
    color_seed: Tuple[float, float, float]


class ParticleFactory:
    """
    Produces randomized particles.

    All randomness flows through the Generator handed to the factory, so a
    seeded generator makes particle creation fully reproducible.
    """
    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    def generate_arrays(
        self, count: int, width: float, height: float, starting_velocity: float
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Draws positions, velocities and color seeds for `count` particles."""
        count = max(int(count), 0)
        positions = self.rng.uniform(
            low=[0, 0],
            high=[width, height],
            size=(count, 2)
        )
        velocities = (self.rng.random((count, 2)) - 0.5) * 2 * starting_velocity
        colors = self.rng.random((count, 3))
        return positions, velocities, colors

    def generate(self, width: float, height: float, starting_velocity: float) -> Particle:
        positions, velocities, colors = self.generate_arrays(1, width, height, starting_velocity)
        return Particle(
            position=Vector2D(*positions[0]),
            velocity=Vector2D(*velocities[0]),
            target_position=Vector2D(0.0, 0.0),
            color_seed=tuple(colors[0])
        )


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self, factory: ParticleFactory):
        self.factory = factory
        self.clear()

    def __len__(self) -> int:
        return self.positions.shape[0]

    def clear(self) -> None:
        self.positions = np.zeros((0, 2), dtype=np.float64)
        self.velocities = np.zeros((0, 2), dtype=np.float64)
        self.targets = np.zeros((0, 2), dtype=np.float64)
        self.colors = np.zeros((0, 3), dtype=np.float64)

    def spawn(self, count: int, width: float, height: float, starting_velocity: float) -> None:
        """Appends `count` freshly generated particles to the end of the collection."""
        if count <= 0:
            return
        positions, velocities, colors = self.factory.generate_arrays(
            count, width, height, starting_velocity
        )
        self.positions = np.concatenate([self.positions, positions])
        self.velocities = np.concatenate([self.velocities, velocities])
        self.targets = np.concatenate([self.targets, np.zeros((count, 2))])
        self.colors = np.concatenate([self.colors, colors])
        logging.debug(f"Spawned {count} particles. Collection size: {len(self)}")

    def add(self, particle: Particle) -> None:
        """Appends an explicitly constructed particle."""
        self.positions = np.vstack([self.positions, particle.position.as_tuple()])
        self.velocities = np.vstack([self.velocities, particle.velocity.as_tuple()])
        self.targets = np.vstack([self.targets, particle.target_position.as_tuple()])
        self.colors = np.vstack([self.colors, particle.color_seed])

    def remove_oldest(self, count: int) -> None:
        """Removes up to `count` particles from the front of the collection."""
        if count <= 0:
            return
        self.positions = self.positions[count:].copy()
        self.velocities = self.velocities[count:].copy()
        self.targets = self.targets[count:].copy()
        self.colors = self.colors[count:].copy()
        logging.debug(f"Removed {count} oldest particles. Collection size: {len(self)}")

    def resize(self, count: int, width: float, height: float, starting_velocity: float) -> None:
        """Grows or shrinks the collection to exactly max(count, 0) particles."""
        current = len(self)
        target = max(int(count), 0)
        if target > current:
            self.spawn(target - current, width, height, starting_velocity)
        elif target < current:
            self.remove_oldest(current - target)

    def set_targets(self, targets: List[Vector2D]) -> None:
        if len(targets) != len(self):
            raise ValueError(
                f"Got {len(targets)} target positions for {len(self)} particles."
            )
        self.targets = np.array(
            [t.as_tuple() for t in targets], dtype=np.float64
        ).reshape(-1, 2)

    def particle(self, index: int) -> Particle:
        return Particle(
            position=Vector2D(*self.positions[index]),
            velocity=Vector2D(*self.velocities[index]),
            target_position=Vector2D(*self.targets[index]),
            color_seed=tuple(self.colors[index])
        )

    def snapshot(self) -> List[Particle]:
        return [self.particle(i) for i in range(len(self))]


def make_factory(seed: Optional[int] = None) -> ParticleFactory:
    """Builds a factory on a dedicated RNG. A None seed is non-deterministic."""
    return ParticleFactory(np.random.default_rng(seed))
