"""
Runs the turn state machine.

A turn is one player action followed by one world turn:

    PLAYER_TURN --(turn consumed)--> WORLD_TURN --(world resolved)--> PLAYER_TURN

A player action that fails or does nothing leaves the game in PLAYER_TURN so
the player can choose again. The player dying, or the game being closed,
leads to CLOSED, which is terminal.

Transitions are a lookup table rather than branching code: anything not in
the table is a bug in whoever drives the machine and raises
`InvalidStateError`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from umbra.exceptions import InvalidStateError
from umbra.game.action_router import ActionRouter
from umbra.game.actions import ActionResult, MobAction
from umbra.game.enums import GameState, TurnEvent
from umbra.types import TurnNumber

if TYPE_CHECKING:
    from umbra.game.actors import Actor
    from umbra.game.game_world import GameWorld

logger = logging.getLogger(__name__)

_TRANSITIONS: dict[tuple[GameState, TurnEvent], GameState] = {
    (GameState.PLAYER_TURN, TurnEvent.TURN_CONSUMED): GameState.WORLD_TURN,
    (GameState.PLAYER_TURN, TurnEvent.TURN_NOT_CONSUMED): GameState.PLAYER_TURN,
    (GameState.PLAYER_TURN, TurnEvent.CLOSE): GameState.CLOSED,
    (GameState.WORLD_TURN, TurnEvent.WORLD_RESOLVED): GameState.PLAYER_TURN,
    (GameState.WORLD_TURN, TurnEvent.PLAYER_DIED): GameState.CLOSED,
    (GameState.WORLD_TURN, TurnEvent.CLOSE): GameState.CLOSED,
    (GameState.CLOSED, TurnEvent.CLOSE): GameState.CLOSED,
}


class TurnManager:
    """Owns the game state and the turn counter, and drives both.

    World turns process actors one at a time, in the order of a snapshot
    taken before anyone acts and sorted by location (row, then column). That
    order, together with the seeded AI stream, makes a game replayable.
    """

    def __init__(self, world: GameWorld) -> None:
        self.world = world
        self.action_router = ActionRouter(world)
        self.state = GameState.PLAYER_TURN
        self.turn = TurnNumber(0)

    def _fire(self, event: TurnEvent) -> GameState:
        key = (self.state, event)
        if key not in _TRANSITIONS:
            raise InvalidStateError(
                "No transition for event in this state",
                state=self.state,
                event=event,
                turn=self.turn,
            )
        previous, self.state = self.state, _TRANSITIONS[key]
        if previous is not self.state:
            logger.debug(f"Turn {self.turn}: {previous.name} -> {self.state.name}")
        return self.state

    def submit_player_action(self, action: MobAction) -> ActionResult:
        """Carry out the player's action during PLAYER_TURN.

        Moves to WORLD_TURN if the action spent the turn, otherwise stays in
        PLAYER_TURN for another input.
        """
        if self.state is not GameState.PLAYER_TURN:
            raise InvalidStateError(
                "Player action submitted outside the player's turn",
                state=self.state,
                action=action,
                turn=self.turn,
            )
        result = self.action_router.execute_action(self.world.player, action)
        if result.consumes_turn:
            self._fire(TurnEvent.TURN_CONSUMED)
        else:
            self._fire(TurnEvent.TURN_NOT_CONSUMED)
        return result

    def actor_snapshot(self) -> list[Actor]:
        """Every living actor on the current level, in processing order."""
        actors = [actor for actor in self.world.dungeon.mobs() if not actor.dead()]
        actors.sort(key=lambda actor: (actor.location.y, actor.location.x))
        return actors

    def process_world_turn(self) -> GameState:
        """Let every actor act once, then tidy up and relight the level.

        Actors killed earlier in the same world turn are skipped. Afterwards
        the dead are reaped, lighting and the player's view are recomputed
        and the turn counter advances by one.
        """
        if self.state is not GameState.WORLD_TURN:
            raise InvalidStateError(
                "World turn processed outside WORLD_TURN",
                state=self.state,
                turn=self.turn,
            )
        dungeon = self.world.dungeon
        for actor in self.actor_snapshot():
            if actor.dead():
                continue
            action = actor.tick(dungeon, self.turn)
            self.action_router.execute_action(actor, action)

        reaped = dungeon.reap_dead()
        player = self.world.player
        dungeon.refresh_visibility(None if player.dead() else player)
        self.world.display_dirty = True
        self.turn = TurnNumber(self.turn + 1)

        if player.dead():
            logger.info(f"Player died on turn {self.turn - 1}")
            return self._fire(TurnEvent.PLAYER_DIED)
        if reaped:
            logger.debug(f"Reaped {len(reaped)} actor(s)")
        return self._fire(TurnEvent.WORLD_RESOLVED)

    def close(self) -> GameState:
        if self.state is not GameState.CLOSED:
            logger.info(f"Closing game on turn {self.turn}")
        return self._fire(TurnEvent.CLOSE)
