"""
Terrain cells and their flag bits.

A dungeon stores its terrain as flat NumPy arenas (glyph, color, flags) for
speed; `Tile` is the immutable value handed out when a single cell is
queried. This module defines:

- `Flag`: the per-cell bit set (crossable, lit, visible, seen, blocks light).
- `Tile`: a cell's glyph, color and flags, with boolean helpers.
- `INVALID_TILE`: the sentinel returned for out-of-bounds reads.
- `FLOOR` / `WALL`: the two terrain presets the level generator lays down.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from umbra import colors


class Flag(enum.IntFlag):
    """Boolean states of a dungeon cell, stored as bits in a uint8 arena.

    LIT and VISIBLE are transient: they are cleared and recomputed from
    scratch on every visibility pass. SEEN is monotonic dungeon memory and is
    never cleared once set.
    """

    NONE = 0
    CROSSABLE = 1 << 0
    LIT = 1 << 1
    VISIBLE = 1 << 2
    SEEN = 1 << 3
    BLOCKS_LIGHT = 1 << 4

    TRANSIENT = LIT | VISIBLE

    def __str__(self) -> str:
        names = [label for flag, label in _FLAG_LABELS if flag & self]
        if not names:
            names = ["None"]
        return f"<Flag {'|'.join(names)}>"


_FLAG_LABELS: tuple[tuple[Flag, str], ...] = (
    (Flag.CROSSABLE, "Crossable"),
    (Flag.LIT, "Lit"),
    (Flag.VISIBLE, "Visible"),
    (Flag.SEEN, "Seen"),
    (Flag.BLOCKS_LIGHT, "BlocksLight"),
)


@dataclass(frozen=True, slots=True)
class Tile:
    """A single grid cell's terrain."""

    glyph: str
    color: colors.Color
    flags: Flag = Flag.NONE

    def __post_init__(self) -> None:
        if len(self.glyph) != 1:
            raise ValueError(f"Tile glyph must be one character, got {self.glyph!r}")

    def has(self, flag: Flag) -> bool:
        return bool(self.flags & flag)

    def crossable(self) -> bool:
        """True if the Tile can be moved across."""
        return self.has(Flag.CROSSABLE)

    def lit(self) -> bool:
        """True if the Tile is lit by a light source this turn."""
        return self.has(Flag.LIT)

    def visible(self) -> bool:
        """True if the Tile is within the player's field of view this turn."""
        return self.has(Flag.VISIBLE)

    def seen(self) -> bool:
        """True if the Tile has ever been visible to the player."""
        return self.has(Flag.SEEN)

    def blocks_light(self) -> bool:
        """True if the Tile does not allow light to pass through."""
        return self.has(Flag.BLOCKS_LIGHT)

    def __str__(self) -> str:
        return f"<Tile c:{self.glyph} flags:{self.flags!s}>"


# Represents a section of the Dungeon that is out of bounds. Never crossable,
# always opaque.
INVALID_TILE = Tile(" ", colors.INVALID, Flag.BLOCKS_LIGHT)

FLOOR = Tile(".", colors.FLOOR, Flag.CROSSABLE)
WALL = Tile("#", colors.WALL, Flag.BLOCKS_LIGHT)
