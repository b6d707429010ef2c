from __future__ import annotations

from typing import NewType, TypeAlias

# =============================================================================
# SPATIAL TYPES
# =============================================================================

TileCoord: TypeAlias = int  # Always integer tile position

# World coordinates - absolute positions on a dungeon grid
WorldTileCoord: TypeAlias = TileCoord  # Example: x=5, y=3
WorldTilePos: TypeAlias = tuple[
    WorldTileCoord, WorldTileCoord
]  # Example: (5, 3) = tile 5,3 on the grid

# Flat arena index of a tile: y * width + x
TileIndex: TypeAlias = int

# =============================================================================
# TIME-RELATED TYPES
# =============================================================================

# Number of completed PlayerTurn + WorldTurn cycles. Starts at 0 when a game
# is created and increments by exactly one when a world turn finishes.
TurnNumber = NewType("TurnNumber", int)

# =============================================================================
# GAME-RELATED TYPES
# =============================================================================

# Unique identifier for an entity. Assigned sequentially at construction and
# used in log output and invariant error context.
EntityId = NewType("EntityId", int)

# Name of the side an actor fights for. Actors of different factions are
# enemies of one another.
Faction: TypeAlias = str

# Random seed for deterministic generation (level layout, AI wandering).
# Can be an int for numeric seeds or a descriptive string like "cellar1".
RandomSeed: TypeAlias = int | str | None
