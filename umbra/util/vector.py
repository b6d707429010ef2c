"""Integer grid vectors used for both locations and movement deltas."""

from __future__ import annotations

from dataclasses import dataclass


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True, slots=True)
class Vector:
    """An immutable 2D integer coordinate.

    Vectors are hashable and compare by value, so they double as keys for the
    dungeon's sparse occupancy map.
    """

    x: int
    y: int

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    def add(self, other: Vector) -> Vector:
        return self + other

    def sub(self, other: Vector) -> Vector:
        return self - other

    def distance(self) -> int:
        """Chebyshev length of this vector: ``max(|x|, |y|)``."""
        return max(abs(self.x), abs(self.y))

    def distance_to(self, other: Vector) -> int:
        """Chebyshev distance between two locations."""
        return (other - self).distance()

    def unit(self) -> Vector:
        """Clamp each axis independently to -1, 0 or 1."""
        return Vector(_sign(self.x), _sign(self.y))

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def __str__(self) -> str:
        return f"<Vector x:{self.x}, y:{self.y}>"


ZERO = Vector(0, 0)

# Single tile movement constants
NORTH = Vector(0, -1)
NORTH_EAST = Vector(1, -1)
EAST = Vector(1, 0)
SOUTH_EAST = Vector(1, 1)
SOUTH = Vector(0, 1)
SOUTH_WEST = Vector(-1, 1)
WEST = Vector(-1, 0)
NORTH_WEST = Vector(-1, -1)

# The eight single-step movement deltas, clockwise from north.
DIRECTIONS: tuple[Vector, ...] = (
    NORTH,
    NORTH_EAST,
    EAST,
    SOUTH_EAST,
    SOUTH,
    SOUTH_WEST,
    WEST,
    NORTH_WEST,
)
