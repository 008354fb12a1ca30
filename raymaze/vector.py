"""
2D vector arithmetic shared by the maze geometry, collision and projection code.
"""

from __future__ import annotations
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D point/vector. All operations return new instances."""

    x: float
    y: float

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> Vector2:
        """Vector of the given length pointing along angle (radians)."""
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Vector2:
        return Vector2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __iter__(self):
        yield self.x
        yield self.y

    def cross(self, other: Vector2) -> float:
        """Standard right-handed 2D cross product (z of the 3D cross)."""
        return self.x * other.y - self.y * other.x

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Vector2) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def normalized(self) -> Vector2:
        """Unit vector in the same direction; the zero vector maps to itself."""
        length = self.length()
        if length == 0.0:
            return self
        return Vector2(self.x / length, self.y / length)


def add(a: Vector2, b: Vector2) -> Vector2:
    return a + b


def subtract(a: Vector2, b: Vector2) -> Vector2:
    return a - b


def scale(v: Vector2, k: float) -> Vector2:
    return v * k


def cross(a: Vector2, b: Vector2) -> float:
    return a.cross(b)


def distance(a: Vector2, b: Vector2) -> float:
    return a.distance_to(b)
