from __future__ import annotations

import logging
from dataclasses import dataclass, field

from umbra import config
from umbra.environment.dungeon import Dungeon
from umbra.environment.generators import generate_dungeon
from umbra.environment.tiles import FLOOR
from umbra.events import LevelChangedEvent, publish_event
from umbra.exceptions import InvalidStateError, OccupancyError
from umbra.game.actions import ActionResult, MobAction
from umbra.game.actors import Actor, Player, make_monster, make_player
from umbra.game.enums import ActionKind, GameState
from umbra.game.turn_manager import TurnManager
from umbra.types import RandomSeed, TileCoord, TurnNumber
from umbra.util import rng
from umbra.util.message_log import Message, MessageLog
from umbra.util.vector import Vector

logger = logging.getLogger(__name__)

# Where the starting monster of a generated level stands, relative to the origin.
STARTING_MONSTER_OFFSET = Vector(5, 0)


@dataclass
class StepResult:
    """What one call to `GameWorld.step` did."""

    state: GameState
    messages: list[Message] = field(default_factory=list)
    action_result: ActionResult | None = None


class GameWorld:
    """
    The complete state of a running game.

    Holds every dungeon level (only one is active at a time), the player, the
    message log and the turn manager. Does not handle input or rendering; the
    outside world reads the query surface (`dungeon`, `player`,
    `message_log`) and advances the game only through `step`.

    One world narrates at a time: creating a new world detaches the previous
    world's message log from the event bus.
    """

    def __init__(
        self,
        dungeon: Dungeon | None = None,
        *,
        player: Player | None = None,
        seed: RandomSeed = config.RANDOM_SEED,
        width: TileCoord = config.DEFAULT_DUNGEON_WIDTH,
        height: TileCoord = config.DEFAULT_DUNGEON_HEIGHT,
    ) -> None:
        rng.init(seed)
        self.seed = seed

        self.message_log = MessageLog()
        self._seen_sequence = 0
        self.display_dirty = True

        generated = dungeon is None
        if dungeon is None:
            dungeon = generate_dungeon(width, height, name="level 1")
        self.dungeons: list[Dungeon] = [dungeon]
        self.level_index = 0

        self.player = player if player is not None else make_player(dungeon.origin)
        dungeon.add_mob(self.player)
        if generated:
            self._add_starting_monster(dungeon)

        self.turn_manager = TurnManager(self)

        dungeon.refresh_visibility(self.player)
        self.message_log.add_message(config.WELCOME_MESSAGE, turn=self.turn)
        self._seen_sequence = self.message_log.message_sequence
        logger.info(f"New game on {dungeon!r} (seed={seed!r})")

    def _add_starting_monster(self, dungeon: Dungeon) -> None:
        loc = dungeon.origin + STARTING_MONSTER_OFFSET
        if not dungeon.in_bounds(loc) or dungeon.actor_at(loc) is not None:
            return
        dungeon.set_tile(loc, FLOOR)
        dungeon.add_mob(make_monster("orc", "o", loc))

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------

    @property
    def dungeon(self) -> Dungeon:
        """The level the player is on."""
        return self.dungeons[self.level_index]

    @property
    def state(self) -> GameState:
        return self.turn_manager.state

    @property
    def turn(self) -> TurnNumber:
        return self.turn_manager.turn

    def mobs(self) -> list[Actor]:
        return self.dungeon.mobs()

    # ------------------------------------------------------------------
    # Command surface
    # ------------------------------------------------------------------

    def step(self, action: MobAction | None = None) -> StepResult:
        """Advance the state machine by exactly one legal step.

        In PLAYER_TURN ``action`` is the player's action (None means
        `MobAction.none()`). In WORLD_TURN the world takes its turn and
        ``action`` must be None or a NONE action. A closed game cannot be
        stepped.
        """
        state = self.state
        if state is GameState.CLOSED:
            raise InvalidStateError("Cannot step a closed game", turn=self.turn)

        self.message_log.current_turn = self.turn
        result: ActionResult | None = None
        if state is GameState.PLAYER_TURN:
            result = self.turn_manager.submit_player_action(
                action if action is not None else MobAction.none()
            )
            if result.succeeded and result.consumes_turn:
                self.display_dirty = True
        elif state is GameState.WORLD_TURN:
            if action is not None and action.kind is not ActionKind.NONE:
                raise InvalidStateError(
                    "Player action submitted during the world turn",
                    action=action,
                    turn=self.turn,
                )
            self.turn_manager.process_world_turn()
        else:
            raise InvalidStateError("Unmapped game state", state=state)

        return StepResult(self.state, self._new_messages(), result)

    def play_turn(self, action: MobAction) -> StepResult:
        """Submit the player's action and, if it spent the turn, run the world turn.

        The returned messages cover both steps.
        """
        first = self.step(action)
        if first.state is not GameState.WORLD_TURN:
            return first
        second = self.step()
        return StepResult(
            second.state, first.messages + second.messages, first.action_result
        )

    def _new_messages(self) -> list[Message]:
        messages = self.message_log.since(self._seen_sequence)
        self._seen_sequence = self.message_log.message_sequence
        return messages

    def spawn(self, actor: Actor) -> None:
        """Put a new actor on the current level, due to act this world turn."""
        self.dungeon.add_mob(actor)
        actor.sync_turn(self.turn)
        self.display_dirty = True

    def add_dungeon(self, dungeon: Dungeon) -> int:
        """Append an independent level and return its index."""
        self.dungeons.append(dungeon)
        return len(self.dungeons) - 1

    def change_level(self, index: int) -> None:
        """Move the player to the origin of another level.

        The level being left keeps its own state untouched. Actors on the
        level being entered are brought up to the current turn.

        Raises `OccupancyError`, with nothing changed, if the origin there is
        blocked.
        """
        if self.state is not GameState.PLAYER_TURN:
            raise InvalidStateError(
                "Levels can only change during the player's turn",
                state=self.state,
                turn=self.turn,
            )
        if not 0 <= index < len(self.dungeons):
            raise IndexError(f"No dungeon level {index}")
        if index == self.level_index:
            return
        dungeon = self.dungeons[index]
        if not dungeon.can_enter(dungeon.origin):
            raise OccupancyError(
                "Level origin cannot be entered",
                level=index,
                location=dungeon.origin,
                tile=dungeon.tile(dungeon.origin),
                actor=dungeon.actor_at(dungeon.origin),
            )

        self.dungeon.delete_mob(self.player)
        self.level_index = index
        self.player.location = dungeon.origin
        dungeon.add_mob(self.player)
        for actor in dungeon.mobs():
            actor.sync_turn(self.turn)

        dungeon.refresh_visibility(self.player)
        self.display_dirty = True
        logger.info(f"Player entered level {index}: {dungeon!r}")
        publish_event(LevelChangedEvent(index, dungeon))

    def close(self) -> StepResult:
        """Enter the terminal CLOSED state."""
        self.turn_manager.close()
        messages = self._new_messages()
        self.message_log.close()
        return StepResult(self.state, messages)
