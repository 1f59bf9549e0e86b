# collisions.py
"""
Pairwise elastic collisions between equal-mass particles.

The pair scan is O(n^2) and runs every frame, so the inner loop is compiled
with Numba and works directly on the particle arrays.
"""
import numpy as np
from numba import jit

# --- Data Contracts ---
#
# resolve_collisions(positions, velocities, particle_size, particle_elasticity) -> int:
#   - Inputs:
#     - positions: float64 array (N, 2). Read only.
#     - velocities: float64 array (N, 2). Updated in place.
#     - particle_size: float, collision radius of every particle.
#     - particle_elasticity: float, restitution factor.
#   - Outputs: The number of colliding pairs found in this pass.
#   - Side Effects: Exchanges velocity along the line of centers for every
#     touching pair and damps each particle that collided as the lower
#     index of a pair once.
#   - Invariants: Each unordered pair (i, j), i < j, is visited exactly once.
#     A particle never collides with itself.


@jit(nopython=True)
def _resolve_collisions_numba(positions, velocities, particle_size, particle_elasticity):
    """
    Numba-jitted pair scan.

    Pairs are visited in index order, so an update to particle j made while
    scanning for particle i is already visible when j later scans its own
    partners.
    """
    particle_count = positions.shape[0]
    contact_sq = particle_size * particle_size * 4.0
    collision_count = 0

    for i in range(particle_count):
        collided = False

        for j in range(i + 1, particle_count):
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            distance_sq = dx * dx + dy * dy

            if distance_sq > 0.0 and distance_sq <= contact_sq:
                collided = True
                collision_count += 1

                rel_vx = velocities[i, 0] - velocities[j, 0]
                rel_vy = velocities[i, 1] - velocities[j, 1]
                dot = (rel_vx * dx + rel_vy * dy) / distance_sq
                impulse_x = dx * dot
                impulse_y = dy * dot

                velocities[i, 0] -= impulse_x
                velocities[i, 1] -= impulse_y
                velocities[j, 0] += impulse_x
                velocities[j, 1] += impulse_y

        if collided:
            velocities[i, 0] *= particle_elasticity
            velocities[i, 1] *= particle_elasticity

    return collision_count


def resolve_collisions(
    positions: np.ndarray,
    velocities: np.ndarray,
    particle_size: float,
    particle_elasticity: float
) -> int:
    """Resolves all collisions for one frame. See the data contract above."""
    if positions.shape[0] < 2:
        return 0
    return int(_resolve_collisions_numba(
        positions, velocities, float(particle_size), float(particle_elasticity)
    ))
