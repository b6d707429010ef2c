"""
Component pieces of an actor.

Actors are composed of small focused components rather than one large class:

    HealthComponent: hit points, damage and death
    InventoryComponent: the ordered list of carried items

Components know nothing about the dungeon. Anything that needs a location
(dropping items, leaving a corpse) is done by the actor that owns them.
"""

from __future__ import annotations

from collections.abc import Iterator

from umbra.exceptions import DesyncError
from umbra.game.entities import Item


class HealthComponent:
    """Handles hit points: damage and death."""

    def __init__(self, max_hp: int) -> None:
        if max_hp <= 0:
            raise ValueError(f"max_hp must be positive, got {max_hp}")
        self.max_hp = max_hp
        self.hp = max_hp

    def take_damage(self, amount: int) -> int:
        """Reduce hit points by ``amount``, never below zero.

        Returns:
            The damage actually dealt, which is ``amount`` clamped to the
            hit points that were left.
        """
        if amount < 0:
            raise ValueError(f"Damage must be >= 0, got {amount}")
        dealt = min(amount, self.hp)
        self.hp -= dealt
        return dealt

    def is_alive(self) -> bool:
        """Return True if the actor is alive (HP > 0)."""
        return self.hp > 0


class InventoryComponent:
    """The items an actor carries, in the order they were picked up.

    Membership is by identity: two torches that look the same are still two
    torches.
    """

    def __init__(self) -> None:
        self._items: list[Item] = []

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return any(held is item for held in self._items)

    def is_empty(self) -> bool:
        return not self._items

    def items(self) -> list[Item]:
        """A copy of the carried items."""
        return list(self._items)

    def add(self, item: Item) -> None:
        if item.owner is not None:
            raise DesyncError(
                "Tried to carry an item that is already owned",
                item=item,
                owner=item.owner,
            )
        self._items.append(item)
        item.owner = self

    def remove(self, item: Item) -> None:
        if item not in self:
            raise DesyncError("Tried to remove an item that is not carried", item=item)
        self._items = [held for held in self._items if held is not item]
        item.owner = None

    def take_all(self) -> list[Item]:
        """Empty the inventory, returning everything it held in order."""
        taken, self._items = self._items, []
        for item in taken:
            item.owner = None
        return taken

    @property
    def total_weight(self) -> int:
        return sum(item.weight for item in self._items)

    @property
    def max_light_radius(self) -> int:
        """Brightest light radius among carried items, or 0."""
        return max((item.light_radius for item in self._items), default=0)
