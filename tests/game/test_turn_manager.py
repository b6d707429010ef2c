"""Tests for the turn state machine."""

import pytest

from umbra.exceptions import InvalidStateError
from umbra.game.actions import MobAction
from umbra.game.enums import GameState, TurnEvent
from umbra.game.turn_manager import _TRANSITIONS
from umbra.util.vector import EAST, Vector
from tests.helpers import make_world, weak_monster


def test_wait_then_world_turn_returns_to_player_turn() -> None:
    world, _ = make_world()
    tm = world.turn_manager
    assert tm.state is GameState.PLAYER_TURN
    assert tm.turn == 0

    tm.submit_player_action(MobAction.wait())
    assert tm.state is GameState.WORLD_TURN

    assert tm.process_world_turn() is GameState.PLAYER_TURN
    assert tm.turn == 1


def test_unspent_turn_stays_with_the_player() -> None:
    world, _ = make_world()
    tm = world.turn_manager
    tm.submit_player_action(MobAction.none())
    assert tm.state is GameState.PLAYER_TURN
    tm.submit_player_action(MobAction.pick_up_all())  # nothing here
    assert tm.state is GameState.PLAYER_TURN
    assert tm.turn == 0


def test_player_action_outside_player_turn_is_fatal() -> None:
    world, _ = make_world()
    tm = world.turn_manager
    tm.submit_player_action(MobAction.wait())
    with pytest.raises(InvalidStateError):
        tm.submit_player_action(MobAction.wait())


def test_world_turn_outside_world_turn_is_fatal() -> None:
    world, _ = make_world()
    with pytest.raises(InvalidStateError):
        world.turn_manager.process_world_turn()


def test_transition_table_has_no_exit_from_closed() -> None:
    closed_exits = {
        target
        for (state, _), target in _TRANSITIONS.items()
        if state is GameState.CLOSED
    }
    assert closed_exits == {GameState.CLOSED}


def test_unmapped_transition_is_fatal() -> None:
    world, _ = make_world()
    with pytest.raises(InvalidStateError) as excinfo:
        world.turn_manager._fire(TurnEvent.WORLD_RESOLVED)
    assert excinfo.value.context["state"] is GameState.PLAYER_TURN


def test_snapshot_is_sorted_by_row_then_column() -> None:
    world, player = make_world()
    a = weak_monster(Vector(8, 1))
    b = weak_monster(Vector(2, 1))
    c = weak_monster(Vector(0, 9))
    for actor in (a, b, c):
        world.spawn(actor)
    assert world.turn_manager.actor_snapshot() == [b, a, player, c]


def test_every_actor_ticks_once_per_world_turn() -> None:
    world, player = make_world()
    rats = [weak_monster(Vector(1, 1)), weak_monster(Vector(9, 9))]
    for rat in rats:
        world.spawn(rat)

    for expected_turn in range(3):
        world.turn_manager.submit_player_action(MobAction.wait())
        world.turn_manager.process_world_turn()
        for actor in (player, *rats):
            if not actor.dead():
                assert actor.last_ticked_turn == expected_turn


def test_dead_are_reaped_and_light_recomputed() -> None:
    world, player = make_world()
    rat = weak_monster(player.location + EAST, max_hp=1, vision_radius=0)
    world.spawn(rat)
    tm = world.turn_manager

    tm.submit_player_action(MobAction.move(EAST))  # kills the rat
    assert rat in world.dungeon.mobs()
    tm.process_world_turn()

    assert rat not in world.dungeon.mobs()
    assert world.dungeon.items_at(rat.location)[0].name == "rat corpse"
    assert world.dungeon.tile(player.location).lit()
    assert world.dungeon.tile(player.location).visible()
    assert world.display_dirty


def test_player_death_closes_the_game() -> None:
    world, player = make_world()
    brute = weak_monster(player.location + EAST, strength=1000)
    world.spawn(brute)
    tm = world.turn_manager

    tm.submit_player_action(MobAction.wait())
    assert tm.process_world_turn() is GameState.CLOSED
    assert player.dead()


def test_close_is_terminal() -> None:
    world, _ = make_world()
    tm = world.turn_manager
    assert tm.close() is GameState.CLOSED
    assert tm.close() is GameState.CLOSED
    with pytest.raises(InvalidStateError):
        tm.submit_player_action(MobAction.wait())
