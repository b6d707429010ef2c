from __future__ import annotations

from collections.abc import Sequence

from umbra.environment.dungeon import Dungeon
from umbra.environment.generators import dungeon_from_ascii
from umbra.environment.tiles import FLOOR
from umbra.events import MessageEvent, subscribe_to_event
from umbra.game.actors import Actor, Player, make_monster, make_player
from umbra.game.game_world import GameWorld
from umbra.util.vector import Vector


def open_dungeon(width: int = 11, height: int = 11) -> Dungeon:
    """An all-floor dungeon with no occupants."""
    return Dungeon(width, height, FLOOR)


def make_world(
    rows: Sequence[str] | None = None,
    *,
    player_at: Vector | None = None,
    monsters: Sequence[Actor] = (),
    width: int = 11,
    height: int = 11,
) -> tuple[GameWorld, Player]:
    """A GameWorld on a small hand-made level.

    The player stands at ``player_at`` (the level origin by default). Each
    monster must already carry its location.
    """
    dungeon = dungeon_from_ascii(rows) if rows else open_dungeon(width, height)
    player = make_player(player_at if player_at is not None else dungeon.origin)
    for monster in monsters:
        dungeon.add_mob(monster)
    world = GameWorld(dungeon, player=player, seed="test")
    return world, player


def weak_monster(location: Vector, **kwargs) -> Actor:
    kwargs.setdefault("max_hp", 3)
    kwargs.setdefault("strength", 1)
    return make_monster("rat", "r", location, **kwargs)


def capture_messages() -> list[MessageEvent]:
    """Collect every MessageEvent published from now on."""
    captured: list[MessageEvent] = []
    subscribe_to_event(MessageEvent, captured.append)
    return captured
