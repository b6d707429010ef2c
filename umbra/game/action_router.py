"""
The central dispatcher and arbiter for the action system.

Both the player's input and every AI decision come through here, so the
rules about what an action turns into live in exactly one place.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from umbra.game.actions import ActionResult, MobAction
from umbra.game.enums import ActionKind, BlockReason
from umbra.game.executors import (
    ActionExecutor,
    ActionRequest,
    AttackExecutor,
    DropAllExecutor,
    DropExecutor,
    MoveExecutor,
    NoneExecutor,
    PickUpAllExecutor,
    WaitExecutor,
)

if TYPE_CHECKING:
    from umbra.game.actors import Actor
    from umbra.game.game_world import GameWorld

logger = logging.getLogger(__name__)


class ActionRouter:
    """
    Dispatches actions to executors and arbitrates their results.

    The ActionRouter has two responsibilities:
    1.  Dispatching: a registry maps each `ActionKind` to its executor. An
        incoming action is looked up and handed to that executor.
    2.  Arbitration: the executor's `ActionResult` is inspected for the
        world's interaction rules. A move blocked by another living actor
        becomes an attack on that actor, for the player and AI alike.

    Only the `TurnManager` should instantiate and use this class.
    """

    def __init__(self, world: GameWorld) -> None:
        self.world = world
        # This registry is the heart of the dispatcher.
        self._executor_registry: dict[ActionKind, ActionExecutor] = {
            ActionKind.NONE: NoneExecutor(),
            ActionKind.WAIT: WaitExecutor(),
            ActionKind.MOVE: MoveExecutor(),
            ActionKind.DROP: DropExecutor(),
            ActionKind.DROP_ALL: DropAllExecutor(),
            ActionKind.PICK_UP_ALL: PickUpAllExecutor(),
        }
        self._attack_executor = AttackExecutor()

    def execute_action(self, actor: Actor, action: MobAction) -> ActionResult:
        """The single entry point for carrying out any action.

        Returns the arbitrated result. For a move that turned into an attack
        this is the attack's result.
        """
        request = ActionRequest(
            actor=actor,
            action=action,
            dungeon=self.world.dungeon,
            turn=self.world.turn,
            narrate=actor is self.world.player,
        )
        executor = self._executor_registry[action.kind]
        logger.debug(f"{actor.name} -> {action}")
        result = executor.execute(request)
        return self._arbitrate_result(request, result)

    def _arbitrate_result(
        self, request: ActionRequest, result: ActionResult
    ) -> ActionResult:
        """Contains all the world's interaction rules for action outcomes."""
        if result.succeeded:
            return result
        if request.action.kind is ActionKind.MOVE:
            return self._handle_failed_move(request, result)
        return result

    def _handle_failed_move(
        self, request: ActionRequest, result: ActionResult
    ) -> ActionResult:
        """Rulebook for what happens after a failed move."""
        if result.block_reason is BlockReason.ACTOR and result.blocked_by is not None:
            # --- WORLD INTERACTION RULE ---
            # Bumping into an actor attacks it.
            return self._attack_executor.execute(
                replace(request, target=result.blocked_by)
            )
        return result
