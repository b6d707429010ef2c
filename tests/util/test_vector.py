import pytest

from umbra.util.vector import (
    DIRECTIONS,
    EAST,
    NORTH,
    NORTH_WEST,
    SOUTH_EAST,
    ZERO,
    Vector,
)


@pytest.mark.parametrize(
    ("a", "b"),
    [
        (Vector(0, 0), Vector(0, 0)),
        (Vector(3, -4), Vector(10, 20)),
        (Vector(-7, 2), Vector(-1, -1)),
    ],
)
def test_add_then_sub_is_identity(a: Vector, b: Vector) -> None:
    assert a.add(b).sub(b) == a
    assert a + b - b == a


def test_distance_is_chebyshev() -> None:
    assert Vector(10, 20).distance() == 20
    assert Vector(-1, -1).distance() == 1
    assert Vector(0, 0).distance() == 0
    assert Vector(-5, 2).distance() == 5


def test_distance_to() -> None:
    assert Vector(2, 2).distance_to(Vector(5, 3)) == 3
    assert Vector(5, 3).distance_to(Vector(2, 2)) == 3


def test_unit_clamps_each_axis_to_sign() -> None:
    assert Vector(99, 1).unit() == Vector(1, 1)
    assert Vector(-99, 1).unit() == Vector(-1, 1)
    assert Vector(0, 0).unit() == Vector(0, 0)
    assert Vector(0, -42).unit() == Vector(0, -1)


def test_vectors_are_hashable_values() -> None:
    seen = {Vector(1, 2): "a"}
    assert seen[Vector(1, 2)] == "a"
    with pytest.raises(AttributeError):
        Vector(1, 2).x = 5  # type: ignore[misc]


def test_negation_and_zero() -> None:
    assert -EAST == Vector(-1, 0)
    assert ZERO.is_zero()
    assert not NORTH.is_zero()


def test_directions_cover_every_neighbour_once() -> None:
    assert len(DIRECTIONS) == 8
    assert len(set(DIRECTIONS)) == 8
    assert ZERO not in DIRECTIONS
    assert all(d.distance() == 1 for d in DIRECTIONS)
    assert NORTH_WEST in DIRECTIONS
    assert SOUTH_EAST in DIRECTIONS


def test_str() -> None:
    assert str(Vector(4, -2)) == "<Vector x:4, y:-2>"
