"""Rectangles and bounds checks in tile coordinates."""

from __future__ import annotations

from collections.abc import Iterator

from umbra.types import TileCoord, WorldTilePos
from umbra.util.vector import Vector


class Rect:
    """Rectangle/bounding box in tile coordinates.

    Defined by its top-left cell and its size. Corner accessors are
    inclusive: a 3x2 rect at (0, 0) has its bottom-right corner at (2, 1).
    """

    def __init__(self, x: TileCoord, y: TileCoord, w: TileCoord, h: TileCoord) -> None:
        if w < 0 or h < 0:
            raise ValueError(f"Rect size must be non-negative, got {w}x{h}")
        self.top_left = Vector(x, y)
        self.size = Vector(w, h)

    @classmethod
    def from_corners(cls, top_left: Vector, bottom_right: Vector) -> Rect:
        """Create a Rect from two inclusive corner cells."""
        return cls(
            top_left.x,
            top_left.y,
            bottom_right.x - top_left.x + 1,
            bottom_right.y - top_left.y + 1,
        )

    @property
    def width(self) -> TileCoord:
        return self.size.x

    @property
    def height(self) -> TileCoord:
        return self.size.y

    @property
    def bottom_right(self) -> Vector:
        return self.top_left + self.size + Vector(-1, -1)

    @property
    def top_right(self) -> Vector:
        return Vector(self.bottom_right.x, self.top_left.y)

    @property
    def bottom_left(self) -> Vector:
        return Vector(self.top_left.x, self.bottom_right.y)

    def center(self) -> Vector:
        return Vector(
            self.top_left.x + self.width // 2, self.top_left.y + self.height // 2
        )

    def contains(self, loc: Vector) -> bool:
        return (
            self.top_left.x <= loc.x < self.top_left.x + self.width
            and self.top_left.y <= loc.y < self.top_left.y + self.height
        )

    def is_edge(self, loc: Vector) -> bool:
        """True if ``loc`` lies on the outermost ring of this rect."""
        if not self.contains(loc):
            return False
        br = self.bottom_right
        return loc.x in (self.top_left.x, br.x) or loc.y in (self.top_left.y, br.y)

    def cells(self) -> Iterator[Vector]:
        """Every cell of the rect, row by row."""
        for y in range(self.top_left.y, self.top_left.y + self.height):
            for x in range(self.top_left.x, self.top_left.x + self.width):
                yield Vector(x, y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return self.top_left == other.top_left and self.size == other.size

    def __hash__(self) -> int:
        return hash((self.top_left, self.size))

    def __repr__(self) -> str:
        return (
            f"Rect(top_left={self.top_left}, bottom_right={self.bottom_right}, "
            f"size={self.size})"
        )


# =============================================================================
# BOUNDS CHECKING HELPERS
# =============================================================================


def is_valid_world_tile_pos(
    pos: WorldTilePos, map_width: TileCoord, map_height: TileCoord
) -> bool:
    """Check if world tile position is within map bounds."""
    x, y = pos
    return 0 <= x < map_width and 0 <= y < map_height
