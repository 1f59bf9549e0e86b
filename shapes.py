# shapes.py
"""
Target formations for shape attraction.

Each generator returns one target position per particle, in collection
order. Both are pure and deterministic, so the engine can call them again
whenever the shape parameters or the particle count change.
"""
import math
from typing import List

from vector import Vector2D

# --- Data Contracts ---
#
# circle_targets(count: int, radius: float, center: Vector2D) -> List[Vector2D]
#   - Outputs: `count` points on a circle of `radius` about `center`,
#     starting at angle 0 (straight down in screen coordinates) and
#     proceeding with decreasing angle.
#
# square_targets(count: int, radius: float, angle: float, center: Vector2D)
#     -> List[Vector2D]
#   - Outputs: `count` points on the perimeter of a square with half-side
#     `radius`, walked from corner (radius, radius) left, up, right, then
#     down, rotated by `angle` about the origin and translated by `center`.
#   - Both return an empty list when count <= 0.


def circle_targets(count: int, radius: float, center: Vector2D) -> List[Vector2D]:
    if count <= 0:
        return []
    delta_theta = 2 * math.pi / count
    targets = []
    current_angle = 0.0
    for _ in range(count):
        point = Vector2D(math.sin(current_angle), math.cos(current_angle))
        targets.append(point.multiply(radius).add(center))
        current_angle -= delta_theta
    return targets


def square_targets(count: int, radius: float, angle: float, center: Vector2D) -> List[Vector2D]:
    if count <= 0:
        return []
    delta_length = 8 * radius / count
    x, y = radius, radius
    targets = []
    for i in range(count):
        targets.append(Vector2D(x, y).rotate(angle).add(center))

        # Floor division hands any remainder to the last leg.
        side = (i * 4) // count
        if side == 0:
            x -= delta_length
        elif side == 1:
            y -= delta_length
        elif side == 2:
            x += delta_length
        else:
            y += delta_length
    return targets
