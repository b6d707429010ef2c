"""
Level sources.

`generate_dungeon` is the default level: an open floor with walls scattered
at random, deterministic for a given seed. `carve_room` and
`dungeon_from_ascii` build hand-made levels, mostly for tests and fixtures.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from umbra import config
from umbra.environment.dungeon import Dungeon
from umbra.environment.tiles import FLOOR, WALL, Tile
from umbra.types import RandomSeed, TileCoord
from umbra.util import rng
from umbra.util.coordinates import Rect
from umbra.util.vector import Vector

logger = logging.getLogger(__name__)

_walls_rng = rng.get("level.walls")

# Glyphs understood by dungeon_from_ascii.
ASCII_TILES: dict[str, Tile] = {
    ".": FLOOR,
    "#": WALL,
}


def generate_dungeon(
    width: TileCoord = config.DEFAULT_DUNGEON_WIDTH,
    height: TileCoord = config.DEFAULT_DUNGEON_HEIGHT,
    wall_chance: float = config.DEFAULT_WALL_CHANCE,
    seed: RandomSeed = None,
    *,
    name: str = "",
) -> Dungeon:
    """A floor-filled level with walls scattered at ``wall_chance`` per cell.

    With a ``seed`` the layout depends on nothing else; without one it draws
    from the shared "level.walls" stream. The origin cell is always floor so
    there is somewhere to put the player.
    """
    if not 0.0 <= wall_chance <= 1.0:
        raise ValueError(f"wall_chance must be in [0, 1], got {wall_chance}")

    dungeon = Dungeon(width, height, FLOOR, name=name)
    source = (
        rng.RNGProvider(seed).get("level.walls") if seed is not None else _walls_rng
    )

    walls = 0
    for y in range(height):
        for x in range(width):
            if source.random() < wall_chance:
                dungeon.set_tile(Vector(x, y), WALL)
                walls += 1
    dungeon.set_tile(dungeon.origin, FLOOR)

    logger.info(
        f"Generated {width}x{height} dungeon {name!r} with {walls} wall(s) "
        f"(seed={seed!r})"
    )
    return dungeon


def carve_room(dungeon: Dungeon, rect: Rect) -> None:
    """Wall in ``rect`` and floor its interior.

    Cells of the rect outside the dungeon are ignored.
    """
    for loc in rect.cells():
        if dungeon.in_bounds(loc):
            dungeon.set_tile(loc, WALL if rect.is_edge(loc) else FLOOR)


def dungeon_from_ascii(rows: Sequence[str], *, name: str = "") -> Dungeon:
    """Build a dungeon from a picture, one string per row.

    ``.`` is floor and ``#`` is wall. All rows must be the same length.
    """
    if not rows:
        raise ValueError("Need at least one row")
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise ValueError("All rows must have the same width")

    dungeon = Dungeon(width, len(rows), FLOOR, name=name)
    for y, row in enumerate(rows):
        for x, glyph in enumerate(row):
            tile = ASCII_TILES.get(glyph)
            if tile is None:
                raise ValueError(f"Unknown tile glyph {glyph!r} at ({x}, {y})")
            if tile is not FLOOR:
                dungeon.set_tile(Vector(x, y), tile)
    return dungeon
