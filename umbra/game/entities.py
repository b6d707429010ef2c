"""
Things that occupy dungeon cells.

Every occupant shares a common payload: an identity, an `Appearance`
(name, glyph, color), a location, a flag set and a light radius. What kind of
occupant it is decides which slot of a cell's FeatureGroup it lives in:

- Static features (a brazier, an altar): at most one per cell, never move.
- Items (a torch, a sword, a corpse): any number per cell, or carried in
  exactly one actor's inventory.
- Actors: at most one per cell; defined in `umbra.game.actors`.

Polymorphic queries (name, glyph, color, flags, light radius) are the same
accessors on every kind, so the dungeon and the lighting pass never need to
know which concrete class they hold.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from umbra import colors, config
from umbra.environment.tiles import Flag
from umbra.game.enums import EntityKind
from umbra.types import EntityId
from umbra.util.vector import ZERO, Vector

if TYPE_CHECKING:
    from umbra.game.actors import Actor

_entity_ids = itertools.count(1)


@dataclass(frozen=True, slots=True)
class Appearance:
    """How an entity is named and drawn."""

    name: str
    glyph: str
    color: colors.Color = colors.WHITE

    def __post_init__(self) -> None:
        if len(self.glyph) != 1:
            raise ValueError(f"Glyph must be one character, got {self.glyph!r}")


class Entity:
    """Common base of everything that can occupy a dungeon cell.

    Entities compare by identity: two identical-looking gold coins are still
    two coins, and a cell or inventory must be able to tell them apart.
    """

    kind: ClassVar[EntityKind]

    def __init__(
        self,
        appearance: Appearance,
        location: Vector = ZERO,
        *,
        flags: Flag = Flag.NONE,
        light_radius: int = 0,
    ) -> None:
        if light_radius < 0:
            raise ValueError(f"light_radius must be >= 0, got {light_radius}")
        self.entity_id = EntityId(next(_entity_ids))
        self.appearance = appearance
        self.location = location
        self.flags = flags
        self.base_light_radius = light_radius

    @property
    def name(self) -> str:
        return self.appearance.name

    @property
    def glyph(self) -> str:
        return self.appearance.glyph

    @property
    def color(self) -> colors.Color:
        return self.appearance.color

    @property
    def light_radius(self) -> int:
        """Radius of light this entity emits; 0 means it casts none."""
        return self.base_light_radius

    def crossable(self) -> bool:
        return bool(self.flags & Flag.CROSSABLE)

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} #{self.entity_id} {self.name!r} "
            f"char:{self.glyph}, loc:{self.location}, flags:{self.flags!s}, "
            f"lightRadius:{self.light_radius}>"
        )


class Feature(Entity):
    """A static dungeon fixture such as a brazier or an altar.

    Features block movement unless created with ``Flag.CROSSABLE``.
    """

    kind = EntityKind.STATIC_FEATURE


class Item(Entity):
    """A carryable thing.

    Items are crossable by default; a ``blocking`` item (a corpse, a boulder
    someone dropped) makes its whole cell impassable while it lies there.
    """

    kind = EntityKind.ITEM

    def __init__(
        self,
        appearance: Appearance,
        location: Vector = ZERO,
        *,
        weight: int = 1,
        light_radius: int = 0,
        blocking: bool = False,
    ) -> None:
        flags = Flag.NONE if blocking else Flag.CROSSABLE
        super().__init__(appearance, location, flags=flags, light_radius=light_radius)
        self.weight = weight
        # The Dungeon the item lies in or the InventoryComponent carrying it.
        # An item has at most one owner at a time.
        self.owner: object | None = None

    @property
    def blocking(self) -> bool:
        return not self.crossable()


class Weapon(Item):
    """An item that adds to its wielder's attack strength."""

    def __init__(
        self,
        appearance: Appearance,
        location: Vector = ZERO,
        *,
        weight: int = 1,
        attack_strength: int = 1,
    ) -> None:
        super().__init__(appearance, location, weight=weight)
        if attack_strength < 0:
            raise ValueError(f"attack_strength must be >= 0, got {attack_strength}")
        self.attack_strength = attack_strength


def make_item(
    name: str,
    glyph: str,
    *,
    weight: int = 1,
    light_radius: int = 0,
    color: colors.Color = colors.ITEM_COLOR,
) -> Item:
    """Convenience constructor for a plain crossable item."""
    return Item(
        Appearance(name, glyph, color), weight=weight, light_radius=light_radius
    )


def make_torch() -> Item:
    return make_item(
        "torch", "/", weight=2, light_radius=4, color=colors.LIGHT_SOURCE_COLOR
    )


def make_weapon(name: str, glyph: str, attack_strength: int, weight: int = 3) -> Weapon:
    return Weapon(
        Appearance(name, glyph, colors.WEAPON_COLOR),
        weight=weight,
        attack_strength=attack_strength,
    )


def make_corpse(actor: Actor) -> Item:
    """The blocking remains an actor leaves on its cell when it dies."""
    return Item(
        Appearance(f"{actor.name} corpse", config.CORPSE_GLYPH, colors.CORPSE),
        actor.location,
        weight=config.CORPSE_WEIGHT,
        blocking=True,
    )
