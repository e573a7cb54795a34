"""Small immutable 2D/3D vector types used across the package."""

from __future__ import annotations

import math
from dataclasses import dataclass


def clamp(value: float, low: float, high: float) -> float:
    """Limit ``value`` to the closed range ``[low, high]``."""
    if value < low:
        return low
    if value > high:
        return high
    return value


@dataclass(frozen=True)
class Vector2:
    """A point or direction in 2D space."""

    x: float = 0.0
    y: float = 0.0

    def distance(self, other: Vector2) -> float:
        """Euclidean distance to ``other``."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Vector3:
    """A point or direction in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> Vector3:
        """Multiply every component by ``factor``."""
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance(self, other: Vector3) -> float:
        """Euclidean distance to ``other``."""
        return (self - other).length()

    def normalized(self) -> Vector3:
        """Unit vector in the same direction; a zero vector is returned unchanged."""
        length = self.length()
        if length == 0.0:
            return self
        return self.scale(1.0 / length)

    def cross(self, other: Vector3) -> Vector3:
        """Cross product ``self x other``."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )