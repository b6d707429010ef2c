from enum import Enum, auto


class EntityKind(Enum):
    """The closed set of things that can occupy a dungeon cell."""

    ACTOR = auto()  # At most one per cell. Moves and takes turns.
    STATIC_FEATURE = auto()  # At most one per cell. Never moves.
    ITEM = auto()  # Any number per cell. Can be carried.


class ActionKind(Enum):
    """Tag of a MobAction: what an actor intends to do this turn."""

    NONE = auto()
    WAIT = auto()
    MOVE = auto()
    DROP = auto()
    DROP_ALL = auto()
    PICK_UP_ALL = auto()


class GameState(Enum):
    """Whose turn it is.

    PLAYER_TURN waits on a player action, WORLD_TURN lets every actor act,
    CLOSED is terminal.
    """

    PLAYER_TURN = auto()
    WORLD_TURN = auto()
    CLOSED = auto()


class TurnEvent(Enum):
    """Inputs to the turn state machine's transition table."""

    TURN_CONSUMED = auto()  # The player's action used up their turn.
    TURN_NOT_CONSUMED = auto()  # The player's action failed or was a no-op.
    WORLD_RESOLVED = auto()  # Every actor has acted and visibility is fresh.
    PLAYER_DIED = auto()
    CLOSE = auto()


class BlockReason(Enum):
    """Why a move did not happen."""

    OUT_OF_BOUNDS = auto()
    TERRAIN = auto()
    OCCUPIED = auto()  # A feature or blocking item is in the way.
    ACTOR = auto()  # Another actor is in the way; becomes an attack.
    TARGET_DEAD = auto()
    NOTHING_HERE = auto()
