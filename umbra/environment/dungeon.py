"""
A single dungeon level: terrain arenas plus the sparse occupancy map.

Terrain lives in three flat NumPy arenas indexed ``y * width + x`` (glyph
code points, RGB colors, flag bits). Occupants live in a dict from `Vector`
to `FeatureGroup`, holding at most one actor, at most one static feature and
any number of items per cell.

The Dungeon is the only thing that mutates either structure. Placement
mistakes (two actors on one cell, deleting something that is not there) are
programmer errors and raise `FatalInvariantError` subclasses; a blocked move
is an ordinary ``False``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, TypeAlias

import numpy as np
from numpy.typing import NDArray

from umbra.environment import lighting, shadowcast
from umbra.environment.lighting import LightSource
from umbra.environment.tiles import FLOOR, INVALID_TILE, Flag, Tile
from umbra.exceptions import DesyncError, OccupancyError
from umbra.types import TileCoord, TileIndex
from umbra.util.vector import Vector

if TYPE_CHECKING:
    from umbra.game.actors import Actor
    from umbra.game.entities import Entity, Feature, Item

logger = logging.getLogger(__name__)

TileVisitor: TypeAlias = Callable[[Vector, Tile], None]


class FeatureGroup:
    """Everything occupying one dungeon cell."""

    __slots__ = ("actor", "feature", "items")

    def __init__(self) -> None:
        self.actor: Actor | None = None
        self.feature: Feature | None = None
        self.items: list[Item] = []

    def occupants(self) -> Iterator[Entity]:
        if self.actor is not None:
            yield self.actor
        if self.feature is not None:
            yield self.feature
        yield from self.items

    def crossable(self) -> bool:
        """True only if every occupant is individually crossable."""
        return all(occupant.crossable() for occupant in self.occupants())

    def is_empty(self) -> bool:
        return self.actor is None and self.feature is None and not self.items

    def has_item(self, item: Item) -> bool:
        return any(held is item for held in self.items)

    def __repr__(self) -> str:
        return (
            f"<FeatureGroup actor:{self.actor!r}, feature:{self.feature!r}, "
            f"items:{self.items!r}>"
        )


class Dungeon:
    """One level of the game."""

    def __init__(
        self,
        width: TileCoord,
        height: TileCoord,
        fill: Tile = FLOOR,
        *,
        name: str = "",
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Dungeon size must be positive, got {width}x{height}")
        self.width: TileCoord = width
        self.height: TileCoord = height
        self.name = name
        self.origin = Vector(width // 2, height // 2)

        size = width * height
        self.glyphs = np.full(size, ord(fill.glyph), dtype=np.int32)
        self.colors = np.empty((size, 3), dtype=np.uint8)
        self.colors[:] = fill.color
        self.flags = np.full(size, int(fill.flags), dtype=np.uint8)

        self._groups: dict[Vector, FeatureGroup] = {}

        # Bumped whenever lighting/visibility is recomputed so render layers
        # can tell a stale frame from a fresh one.
        self.visibility_revision = 0

    def __repr__(self) -> str:
        return f"<Dungeon {self.name!r} {self.width}x{self.height}>"

    # ------------------------------------------------------------------
    # Terrain
    # ------------------------------------------------------------------

    def in_bounds(self, loc: Vector) -> bool:
        return 0 <= loc.x < self.width and 0 <= loc.y < self.height

    def index(self, loc: Vector) -> TileIndex:
        """Flat arena index of an in-bounds location."""
        if not self.in_bounds(loc):
            raise IndexError(f"{loc} is outside {self!r}")
        return loc.y * self.width + loc.x

    def location(self, index: TileIndex) -> Vector:
        return Vector(int(index) % self.width, int(index) // self.width)

    def tile(self, loc: Vector) -> Tile:
        """The Tile at ``loc``, or the shared INVALID_TILE outside the grid."""
        if not self.in_bounds(loc):
            return INVALID_TILE
        i = loc.y * self.width + loc.x
        r, g, b = (int(c) for c in self.colors[i])
        return Tile(chr(int(self.glyphs[i])), (r, g, b), Flag(int(self.flags[i])))

    def set_tile(self, loc: Vector, tile: Tile) -> None:
        i = self.index(loc)
        self.glyphs[i] = ord(tile.glyph)
        self.colors[i] = tile.color
        self.flags[i] = int(tile.flags)

    def fill(self, tile: Tile) -> None:
        self.glyphs[:] = ord(tile.glyph)
        self.colors[:] = tile.color
        self.flags[:] = int(tile.flags)

    def set_flag(self, loc: Vector, flag: Flag) -> None:
        self.flags[self.index(loc)] |= int(flag)

    def reset_flag(self, flag: Flag) -> None:
        """Clear ``flag`` on every tile."""
        keep = np.uint8(~int(flag) & 0xFF)
        np.bitwise_and(self.flags, keep, out=self.flags)

    @property
    def opaque(self) -> NDArray[np.bool_]:
        """Flat per-cell "blocks light" values for the shadowcaster."""
        return (self.flags & int(Flag.BLOCKS_LIGHT)) != 0

    # ------------------------------------------------------------------
    # Occupancy
    # ------------------------------------------------------------------

    def feature_group(self, loc: Vector) -> FeatureGroup:
        """The occupancy record for ``loc``, created empty on first query."""
        group = self._groups.get(loc)
        if group is None:
            group = FeatureGroup()
            self._groups[loc] = group
        return group

    def find_feature_group(self, loc: Vector) -> FeatureGroup | None:
        """The occupancy record for ``loc`` if one exists, without creating it."""
        return self._groups.get(loc)

    def actor_at(self, loc: Vector) -> Actor | None:
        group = self._groups.get(loc)
        return group.actor if group is not None else None

    def feature_at(self, loc: Vector) -> Feature | None:
        group = self._groups.get(loc)
        return group.feature if group is not None else None

    def items_at(self, loc: Vector) -> list[Item]:
        """A copy of the items lying at ``loc``, in the order they landed."""
        group = self._groups.get(loc)
        return list(group.items) if group is not None else []

    def add_mob(self, actor: Actor) -> None:
        """Place ``actor`` at its own recorded location."""
        group = self.feature_group(actor.location)
        if group.actor is not None:
            raise OccupancyError(
                "Tried to put two mobs on same location",
                location=actor.location,
                mob=actor,
                other=group.actor,
            )
        group.actor = actor

    def add_feature(self, feature: Feature) -> None:
        """Place a static feature at its own recorded location."""
        group = self.feature_group(feature.location)
        if group.feature is not None:
            raise OccupancyError(
                "Tried to put two features on same location",
                location=feature.location,
                feature=feature,
                other=group.feature,
            )
        group.feature = feature

    def add_item(self, item: Item) -> None:
        """Lay ``item`` on the cell at its own recorded location.

        The item must be unowned: not lying on any cell of any level and not
        carried by anyone.
        """
        if item.owner is not None:
            raise DesyncError(
                "Tried to put an item that is already owned",
                location=item.location,
                item=item,
                owner=item.owner,
            )
        self.feature_group(item.location).items.append(item)
        item.owner = self

    def delete_mob(self, actor: Actor) -> None:
        group = self._groups.get(actor.location)
        if group is None or group.actor is not actor:
            raise DesyncError(
                "Tried to delete non-existent mob",
                location=actor.location,
                mob=actor,
                found=group.actor if group is not None else None,
            )
        group.actor = None
        self._discard_if_empty(actor.location, group)

    def delete_feature(self, feature: Feature) -> None:
        group = self._groups.get(feature.location)
        if group is None or group.feature is not feature:
            raise DesyncError(
                "Tried to delete non-existent feature",
                location=feature.location,
                feature=feature,
                found=group.feature if group is not None else None,
            )
        group.feature = None
        self._discard_if_empty(feature.location, group)

    def delete_item(self, item: Item) -> None:
        group = self._groups.get(item.location)
        if group is None or not group.has_item(item):
            raise DesyncError(
                "Tried to delete non-existent item",
                location=item.location,
                item=item,
            )
        group.items = [held for held in group.items if held is not item]
        item.owner = None
        self._discard_if_empty(item.location, group)

    def _discard_if_empty(self, loc: Vector, group: FeatureGroup) -> None:
        if group.is_empty():
            del self._groups[loc]

    def can_enter(self, loc: Vector) -> bool:
        """True if an actor could step onto ``loc`` right now."""
        if not self.tile(loc).crossable():
            return False
        group = self._groups.get(loc)
        return group is None or group.crossable()

    def move_mob(self, actor: Actor, delta: Vector) -> bool:
        """Try to move ``actor`` by ``delta``.

        Succeeds only if the destination's terrain and every occupant there
        are crossable. On success the actor is re-keyed under its new
        location; on failure nothing changes.
        """
        dest = actor.location + delta
        if not self.can_enter(dest):
            return False
        self.delete_mob(actor)
        actor.location = dest
        self.add_mob(actor)
        logger.debug(f"{actor.name} moved to {dest}")
        return True

    def mobs(self) -> list[Actor]:
        """Every actor currently on this level, in no particular order."""
        return [
            group.actor for group in self._groups.values() if group.actor is not None
        ]

    def features(self) -> list[Feature]:
        return [
            group.feature
            for group in self._groups.values()
            if group.feature is not None
        ]

    def items(self) -> list[Item]:
        """Every item lying on this level."""
        return [item for group in self._groups.values() for item in group.items]

    def reap_dead(self) -> list[Actor]:
        """Remove every dead actor from the level and return them."""
        dead = [actor for actor in self.mobs() if actor.dead()]
        for actor in dead:
            self.delete_mob(actor)
            logger.info(f"Reaped {actor.name} at {actor.location}")
        return dead

    # ------------------------------------------------------------------
    # Lighting and visibility
    # ------------------------------------------------------------------

    def light_sources(self) -> list[LightSource]:
        """A light source for every actor or feature with a light radius.

        Items on the ground never shine, so a dropped torch goes dark until
        someone picks it up. A carried torch lights through its carrier's
        derived light radius.
        """
        sources: list[LightSource] = []
        for loc, group in self._groups.items():
            for occupant in (group.actor, group.feature):
                if occupant is not None and occupant.light_radius > 0:
                    sources.append(LightSource(loc, occupant.light_radius, occupant))
        return sources

    def calculate_lighting(self) -> None:
        """Set LIT on every tile some light source can reach."""
        lit = lighting.compute_light_mask(
            self.opaque, self.width, self.height, self.light_sources()
        )
        self.flags[lit] |= int(Flag.LIT)

    def line_of_sight(self, origin: Vector, radius: int) -> NDArray[np.bool_]:
        """Flat mask of the cells visible from ``origin`` within ``radius``."""
        return shadowcast.shadowcast(
            self.opaque, self.width, self.height, origin, radius
        )

    def flag_by_line_of_sight(self, origin: Vector, radius: int, flag: Flag) -> None:
        """Set ``flag`` on every cell visible from ``origin`` within ``radius``."""
        reached = self.line_of_sight(origin, radius)
        self.flags[reached] |= int(flag)

    def on_tiles_in_line_of_sight(
        self, origin: Vector, radius: int, visit: TileVisitor
    ) -> None:
        """Call ``visit(location, tile)`` for every cell visible from ``origin``.

        Cells are visited nearest first (Chebyshev distance, then row, then
        column), on the calling thread, after the shadowcast has finished.
        """
        reached = self.line_of_sight(origin, radius)
        for index in shadowcast.scan_order(reached, self.width, origin):
            loc = self.location(index)
            visit(loc, self.tile(loc))

    def field_of_view(self, origin: Vector, radius: int) -> list[Vector]:
        """Locations visible from ``origin`` within ``radius``, nearest first."""
        reached = self.line_of_sight(origin, radius)
        return [
            self.location(index)
            for index in shadowcast.scan_order(reached, self.width, origin)
        ]

    def update_visibility(self, viewer: Actor) -> None:
        """Mark the viewer's field of view VISIBLE, and remember it as SEEN."""
        self.flag_by_line_of_sight(
            viewer.location, viewer.vision_radius, Flag.VISIBLE | Flag.SEEN
        )

    def refresh_visibility(self, viewer: Actor | None) -> None:
        """Recompute LIT and VISIBLE from scratch.

        Clears the transient flags, relights every light source and then
        recasts the viewer's field of view. SEEN is only ever added to.
        """
        self.reset_flag(Flag.TRANSIENT)
        self.calculate_lighting()
        if viewer is not None:
            self.update_visibility(viewer)
        self.visibility_revision += 1
