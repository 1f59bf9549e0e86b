# vector.py
"""
A small immutable 2D vector type.

Vector2D is used at the edges of the engine: pointer positions, shape
centers and the target points produced by the shape generators. Bulk
particle state lives in NumPy arrays (see particle.py), so this class
favors clarity over speed.
"""
import math
from dataclasses import dataclass
from typing import Tuple

# --- Data Contracts ---
#
# class Vector2D:
#   - Fields: x: float, y: float
#   - Invariants: Instances are never mutated. Every operation returns a
#     new Vector2D. Non-finite values propagate without checks.


@dataclass(frozen=True)
class Vector2D:
    """An immutable 2D vector."""
    x: float
    y: float

    def add(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def sub(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other.x, self.y - other.y)

    def multiply(self, scalar: float) -> "Vector2D":
        return Vector2D(self.x * scalar, self.y * scalar)

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def rotate(self, angle: float) -> "Vector2D":
        """
        Rotates the vector about the origin.

        Args:
            angle (float): The rotation angle in radians.
        """
        sin = math.sin(angle)
        cos = math.cos(angle)
        return Vector2D(
            self.x * cos - self.y * sin,
            self.x * sin + self.y * cos
        )

    def length_sq(self) -> float:
        return self.dot(self)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    __add__ = add
    __sub__ = sub
    __mul__ = multiply
    __rmul__ = multiply

    def __str__(self) -> str:
        return f"{{{self.x:.2f}, {self.y:.2f}}}"
