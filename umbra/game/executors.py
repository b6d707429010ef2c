"""
Executors: the logic behind each kind of `MobAction`.

Executors are stateless workers. Each one takes an `ActionRequest` (who is
acting, what they asked for, on which dungeon and turn), applies the effect
to the dungeon and reports an `ActionResult`. They should only ever be called
by the `ActionRouter`, never from input handling or AI code directly.

Narration goes out as `MessageEvent`s tagged with the request's turn. Combat
and deaths are narrated for everyone; complaints about blocked moves, empty
floors and item shuffling only for the player.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from umbra import colors
from umbra.events import ItemsDroppedEvent, MessageEvent, publish_event
from umbra.game.actions import ActionResult, MobAction
from umbra.game.enums import BlockReason

if TYPE_CHECKING:
    from umbra.environment.dungeon import Dungeon
    from umbra.game.actors import Actor
    from umbra.game.entities import Item

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionRequest:
    """Everything an executor needs to carry out one action."""

    actor: Actor
    action: MobAction
    dungeon: Dungeon
    turn: int
    narrate: bool = False  # True when the actor is the player.
    target: Actor | None = None  # Set only for attacks.

    def say(self, text: str, color: colors.Color = colors.MESSAGE_DEFAULT) -> None:
        publish_event(MessageEvent(text, color, turn=self.turn))

    def complain(self, text: str) -> None:
        """Narrate a failure, but only to the player."""
        if self.narrate:
            self.say(text, colors.MESSAGE_FAILURE)


def _item_names(items: list[Item]) -> str:
    return ", ".join(item.name for item in items)


class ActionExecutor(abc.ABC):
    """Base class for action executors."""

    @abc.abstractmethod
    def execute(self, request: ActionRequest) -> ActionResult:
        """Carry out ``request`` and report the outcome."""
        pass


class NoneExecutor(ActionExecutor):
    """Does nothing and leaves the turn unspent."""

    def execute(self, request: ActionRequest) -> ActionResult:
        return ActionResult(succeeded=True, consumes_turn=False)


class WaitExecutor(ActionExecutor):
    def execute(self, request: ActionRequest) -> ActionResult:
        return ActionResult()


class MoveExecutor(ActionExecutor):
    """Steps the actor by the action's delta, reporting what blocked it if not.

    A move blocked by another actor is reported as such and left to the
    router, which turns it into an attack.
    """

    def execute(self, request: ActionRequest) -> ActionResult:
        actor, dungeon = request.actor, request.dungeon
        delta = request.action.delta
        if delta.is_zero():
            return ActionResult(succeeded=True, consumes_turn=False)

        dest = actor.location + delta
        if not dungeon.in_bounds(dest):
            request.complain("You can't leave the dungeon.")
            return ActionResult.failed(BlockReason.OUT_OF_BOUNDS)

        other = dungeon.actor_at(dest)
        if other is not None:
            return ActionResult.failed(BlockReason.ACTOR, blocked_by=other)

        if not dungeon.tile(dest).crossable():
            request.complain("There is a wall in the way.")
            return ActionResult.failed(BlockReason.TERRAIN)

        if not dungeon.move_mob(actor, delta):
            group = dungeon.find_feature_group(dest)
            blocker = None
            if group is not None:
                blocker = next(
                    (o for o in group.occupants() if not o.crossable()), None
                )
            if blocker is not None:
                request.complain(f"The {blocker.name} is in the way.")
            else:
                request.complain("Something is in the way.")
            return ActionResult.failed(BlockReason.OCCUPIED, blocked_by=blocker)

        return ActionResult()


class AttackExecutor(ActionExecutor):
    """Resolves one attack against ``request.target``. Attacks never miss."""

    def execute(self, request: ActionRequest) -> ActionResult:
        attacker, defender = request.actor, request.target
        if defender is None:
            raise ValueError(f"Attack request without a target: {request}")

        damage, ok = attacker.attack(defender, request.dungeon)
        if not ok:
            request.complain(f"The {defender.name} is already dead.")
            return ActionResult.failed(BlockReason.TARGET_DEAD, blocked_by=defender)

        request.say(
            f"{attacker.name} hits {defender.name} for {damage}.",
            colors.MESSAGE_COMBAT,
        )
        if defender.dead():
            request.say(f"{defender.name} dies.", colors.MESSAGE_DEATH)
        return ActionResult(blocked_by=defender)


class DropExecutor(ActionExecutor):
    """Puts one carried item down on the actor's cell."""

    def execute(self, request: ActionRequest) -> ActionResult:
        actor = request.actor
        item = request.action.item
        actor.give_up(item)
        item.location = actor.location
        request.dungeon.add_item(item)

        if request.narrate:
            request.say(f"{actor.name} drops {item.name}.")
        publish_event(ItemsDroppedEvent([item], actor.location))
        return ActionResult()


class DropAllExecutor(ActionExecutor):
    """Puts everything carried down on the actor's cell.

    Spends the turn even when there was nothing to drop.
    """

    def execute(self, request: ActionRequest) -> ActionResult:
        actor = request.actor
        actor.unwield()
        dropped = actor.inventory.take_all()
        for item in dropped:
            item.location = actor.location
            request.dungeon.add_item(item)

        if dropped:
            if request.narrate:
                request.say(f"{actor.name} drops {_item_names(dropped)}.")
            publish_event(ItemsDroppedEvent(dropped, actor.location))
        return ActionResult()


class PickUpAllExecutor(ActionExecutor):
    """Moves every item on the actor's cell into its inventory."""

    def execute(self, request: ActionRequest) -> ActionResult:
        actor, dungeon = request.actor, request.dungeon
        items = dungeon.items_at(actor.location)
        if not items:
            request.complain("There is nothing here to pick up.")
            return ActionResult.failed(BlockReason.NOTHING_HERE)

        for item in items:
            dungeon.delete_item(item)
            actor.pick_up(item)

        logger.debug(f"{actor.name} picked up {_item_names(items)}")
        if request.narrate:
            request.say(f"{actor.name} picks up {_item_names(items)}.")
        return ActionResult()
