"""
Actors: the entities that take turns.

An `Actor` (a mob) carries health, an inventory, a vision radius and a light
radius, fights, dies, and decides what to do each world turn in `tick`. The
`Player` is an actor whose `tick` decides nothing; its actions arrive from
the input layer instead.

Turn bookkeeping is strict. ``last_ticked_turn`` must be exactly one behind
the turn an actor is ticked for, otherwise turn order has desynchronized and
`TurnOrderError` is raised.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from umbra import colors, config
from umbra.environment.tiles import Flag, Tile
from umbra.events import ActorDeathEvent, ItemsDroppedEvent, publish_event
from umbra.exceptions import DesyncError, TurnOrderError
from umbra.game.actions import MobAction
from umbra.game.components import HealthComponent, InventoryComponent
from umbra.game.entities import Appearance, Entity, Item, Weapon, make_corpse
from umbra.game.enums import EntityKind
from umbra.types import Faction
from umbra.util import rng
from umbra.util.vector import ZERO, Vector

if TYPE_CHECKING:
    from umbra.environment.dungeon import Dungeon

logger = logging.getLogger(__name__)

_wander_rng = rng.get("ai.wander")


class Actor(Entity):
    """A mob: anything that occupies the actor slot of a cell and takes turns."""

    kind = EntityKind.ACTOR

    def __init__(
        self,
        appearance: Appearance,
        location: Vector = ZERO,
        *,
        faction: Faction = config.MONSTER_FACTION,
        max_hp: int = config.DEFAULT_MONSTER_MAX_HP,
        strength: int = config.DEFAULT_MONSTER_STRENGTH,
        vision_radius: int = config.DEFAULT_MONSTER_VISION_RADIUS,
        light_radius: int = 0,
    ) -> None:
        # Actors never share a cell, so they are never crossable.
        super().__init__(
            appearance, location, flags=Flag.NONE, light_radius=light_radius
        )
        if vision_radius < 0:
            raise ValueError(f"vision_radius must be >= 0, got {vision_radius}")
        self.faction = faction
        self.vision_radius = vision_radius
        self.base_attack_strength = strength
        self.health = HealthComponent(max_hp)
        self.inventory = InventoryComponent()
        self.wielded: Weapon | None = None

        self.last_ticked_turn = -1
        self.focus: Entity | None = None

    # ------------------------------------------------------------------
    # Derived stats
    # ------------------------------------------------------------------

    @property
    def light_radius(self) -> int:
        """Own light radius or the brightest carried item's, whichever is larger."""
        return max(self.base_light_radius, self.inventory.max_light_radius)

    @property
    def attack_strength(self) -> int:
        bonus = self.wielded.attack_strength if self.wielded is not None else 0
        return self.base_attack_strength + bonus

    def dead(self) -> bool:
        return not self.health.is_alive()

    def is_enemy(self, other: Actor) -> bool:
        return other is not self and other.faction != self.faction

    # ------------------------------------------------------------------
    # Combat
    # ------------------------------------------------------------------

    def attack(self, defender: Actor, dungeon: Dungeon) -> tuple[int, bool]:
        """Hit ``defender`` for this actor's attack strength.

        Attacks never miss. An already-dead defender cannot be attacked and
        the result is ``(0, False)``; otherwise the damage actually dealt is
        returned with True. A defender brought to 0 HP dies on the spot.
        """
        if defender.dead():
            return 0, False
        damage = defender.attacked_for(self.attack_strength)
        logger.debug(f"{self.name} hit {defender.name} for {damage}")
        if defender.dead():
            defender.die(dungeon)
        return damage, True

    def attacked_for(self, amount: int) -> int:
        """Take ``amount`` damage and return how much actually landed."""
        return self.health.take_damage(amount)

    def die(self, dungeon: Dungeon) -> None:
        """Leave a corpse and everything carried on this actor's cell.

        The actor itself stays on the level until the turn's reaping pass.
        """
        self.health.hp = 0
        self.wielded = None
        self.focus = None

        corpse = make_corpse(self)
        dungeon.add_item(corpse)
        dropped = self.inventory.take_all()
        for item in dropped:
            item.location = self.location
            dungeon.add_item(item)

        logger.info(f"{self.name} died at {self.location}")
        publish_event(ActorDeathEvent(self, self.location))
        publish_event(ItemsDroppedEvent([corpse, *dropped], self.location))

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def wield(self, weapon: Weapon) -> None:
        if weapon not in self.inventory:
            raise DesyncError(
                "Tried to wield a weapon that is not carried", actor=self, item=weapon
            )
        self.wielded = weapon

    def unwield(self) -> None:
        self.wielded = None

    def pick_up(self, item: Item) -> None:
        self.inventory.add(item)
        if self.wielded is None and isinstance(item, Weapon):
            self.wield(item)

    def give_up(self, item: Item) -> None:
        """Remove ``item`` from the inventory, unwielding it first if needed."""
        if self.wielded is item:
            self.unwield()
        self.inventory.remove(item)

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def sync_turn(self, turn: int) -> None:
        """Make this actor due to act on ``turn``.

        Used for actors that join a game in progress (spawned, or on a level
        the player has just entered).
        """
        self.last_ticked_turn = turn - 1

    def _advance_turn(self, turn: int) -> None:
        if self.last_ticked_turn != turn - 1:
            raise TurnOrderError(
                "Actor ticked out of turn order",
                actor=self,
                expected=self.last_ticked_turn + 1,
                actual=turn,
            )
        self.last_ticked_turn = turn

    def tick(self, dungeon: Dungeon, turn: int) -> MobAction:
        """Decide this turn's action.

        Looks around, focuses on the first enemy it can see, or failing that
        the first reachable item, and heads for it. With nothing in view it
        wanders one random step (or stands still).
        """
        self._advance_turn(turn)
        self.focus = self.perceive(dungeon)
        if self.focus is not None:
            logger.debug(f"{self.name} focuses on {self.focus.name}")
            return self._approach(self.focus)
        return self._wander()

    def perceive(self, dungeon: Dungeon) -> Entity | None:
        """The enemy or item this actor would chase, nearest first.

        Enemies always win over items. Only items on cells this actor could
        stand on are considered.
        """
        enemy: Actor | None = None
        item: Item | None = None

        def visit(loc: Vector, tile: Tile) -> None:
            nonlocal enemy, item
            group = dungeon.find_feature_group(loc)
            if group is None:
                return
            other = group.actor
            if (
                enemy is None
                and other is not None
                and not other.dead()
                and self.is_enemy(other)
            ):
                enemy = other
            if item is None and group.items and tile.crossable():
                feature_ok = group.feature is None or group.feature.crossable()
                if feature_ok and all(held.crossable() for held in group.items):
                    item = group.items[0]

        dungeon.on_tiles_in_line_of_sight(self.location, self.vision_radius, visit)
        return enemy if enemy is not None else item

    def _approach(self, target: Entity) -> MobAction:
        offset = target.location - self.location
        if isinstance(target, Item) and offset.is_zero():
            return MobAction.pick_up_all()
        return MobAction.move(offset.unit())

    def _wander(self) -> MobAction:
        step = Vector(_wander_rng.randint(-1, 1), _wander_rng.randint(-1, 1))
        if step.is_zero():
            return MobAction.none()
        return MobAction.move(step)


class Player(Actor):
    """The actor controlled from outside the core.

    The player still takes part in the world turn so its turn bookkeeping
    stays checked, but its tick never decides anything.
    """

    def tick(self, dungeon: Dungeon, turn: int) -> MobAction:
        self._advance_turn(turn)
        return MobAction.none()


def make_player(location: Vector = ZERO) -> Player:
    return Player(
        Appearance(config.PLAYER_NAME, config.PLAYER_GLYPH, colors.PLAYER_COLOR),
        location,
        faction=config.PLAYER_FACTION,
        max_hp=config.PLAYER_MAX_HP,
        strength=config.PLAYER_BASE_STRENGTH,
        vision_radius=config.PLAYER_VISION_RADIUS,
        light_radius=config.PLAYER_LIGHT_RADIUS,
    )


def make_monster(
    name: str,
    glyph: str,
    location: Vector = ZERO,
    *,
    max_hp: int = config.DEFAULT_MONSTER_MAX_HP,
    strength: int = config.DEFAULT_MONSTER_STRENGTH,
    vision_radius: int = config.DEFAULT_MONSTER_VISION_RADIUS,
    light_radius: int = 0,
    faction: Faction = config.MONSTER_FACTION,
) -> Actor:
    return Actor(
        Appearance(name, glyph, colors.MONSTER_COLOR),
        location,
        faction=faction,
        max_hp=max_hp,
        strength=strength,
        vision_radius=vision_radius,
        light_radius=light_radius,
    )
