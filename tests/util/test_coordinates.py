import pytest

from umbra.util.coordinates import Rect, is_valid_world_tile_pos
from umbra.util.vector import Vector


def test_corners_are_inclusive() -> None:
    r = Rect(2, 3, 4, 2)
    assert r.top_left == Vector(2, 3)
    assert r.bottom_right == Vector(5, 4)
    assert r.top_right == Vector(5, 3)
    assert r.bottom_left == Vector(2, 4)
    assert r.width == 4
    assert r.height == 2


def test_from_corners_round_trips() -> None:
    r = Rect.from_corners(Vector(1, 1), Vector(3, 5))
    assert r == Rect(1, 1, 3, 5)
    assert r.bottom_right == Vector(3, 5)


def test_contains_and_edges() -> None:
    r = Rect(0, 0, 3, 3)
    assert r.contains(Vector(2, 2))
    assert not r.contains(Vector(3, 0))
    assert r.is_edge(Vector(0, 1))
    assert not r.is_edge(Vector(1, 1))
    assert not r.is_edge(Vector(5, 5))


def test_cells_row_by_row() -> None:
    cells = list(Rect(1, 1, 2, 2).cells())
    assert cells == [Vector(1, 1), Vector(2, 1), Vector(1, 2), Vector(2, 2)]


def test_center() -> None:
    assert Rect(0, 0, 5, 5).center() == Vector(2, 2)


def test_negative_size_rejected() -> None:
    with pytest.raises(ValueError):
        Rect(0, 0, -1, 2)


def test_is_valid_world_tile_pos() -> None:
    assert is_valid_world_tile_pos((0, 0), 10, 10)
    assert is_valid_world_tile_pos((9, 9), 10, 10)
    assert not is_valid_world_tile_pos((10, 0), 10, 10)
    assert not is_valid_world_tile_pos((0, -1), 10, 10)
