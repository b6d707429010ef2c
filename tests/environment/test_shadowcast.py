"""Tests for the recursive shadowcasting engine."""

import numpy as np
import pytest

from umbra.environment.shadowcast import (
    OCTANT_COUNT,
    OCTANT_MULTIPLIERS,
    cast_octant,
    octant_transform,
    scan_order,
    shadowcast,
)
from umbra.util.vector import Vector


def _open(width: int, height: int) -> np.ndarray:
    return np.zeros(width * height, dtype=np.bool_)


def _cells(mask: np.ndarray, width: int) -> set[tuple[int, int]]:
    return {(int(i) % width, int(i) // width) for i in np.flatnonzero(mask)}


def _disk(center: Vector, radius: int, width: int, height: int) -> set[tuple[int, int]]:
    return {
        (x, y)
        for y in range(height)
        for x in range(width)
        if (x - center.x) ** 2 + (y - center.y) ** 2 < radius * radius
    }


class TestOctantTable:
    def test_table_is_four_by_eight(self) -> None:
        assert len(OCTANT_MULTIPLIERS) == 4
        assert all(len(row) == OCTANT_COUNT for row in OCTANT_MULTIPLIERS)

    def test_every_octant_is_a_signed_axis_permutation(self) -> None:
        transforms = {octant_transform(octant) for octant in range(OCTANT_COUNT)}
        assert len(transforms) == OCTANT_COUNT
        for xx, xy, yx, yy in transforms:
            assert abs(xx * yy - xy * yx) == 1

    def test_octant_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            octant_transform(8)


@pytest.mark.parametrize("parallel", [False, True])
@pytest.mark.parametrize("radius", [1, 2, 3, 5])
def test_open_room_lights_exact_disk(radius: int, parallel: bool) -> None:
    width = height = 11
    origin = Vector(5, 5)
    reached = shadowcast(
        _open(width, height), width, height, origin, radius, parallel=parallel
    )
    assert _cells(reached, width) == _disk(origin, radius, width, height)


@pytest.mark.parametrize("parallel", [False, True])
def test_single_wall_casts_a_shadow(parallel: bool) -> None:
    width = height = 11
    opaque = _open(width, height)
    opaque[5 * width + 7] = True  # wall two cells east of the origin

    reached = shadowcast(opaque, width, height, Vector(5, 5), 5, parallel=parallel)
    cells = _cells(reached, width)

    assert (7, 5) in cells  # the wall itself is lit
    assert (8, 5) not in cells  # directly behind it is in shadow
    assert (8, 4) in cells  # diagonally adjacent to the wall
    assert (8, 6) in cells
    assert (6, 4) in cells


def test_origin_always_reached() -> None:
    opaque = np.ones(9, dtype=np.bool_)  # even when everything is opaque
    reached = shadowcast(opaque, 3, 3, Vector(1, 1), 1)
    assert reached[4]


def test_radius_zero_reaches_nothing() -> None:
    reached = shadowcast(_open(5, 5), 5, 5, Vector(2, 2), 0)
    assert not reached.any()


def test_enclosed_cell_sees_only_its_walls() -> None:
    width = height = 7
    opaque = np.ones(width * height, dtype=np.bool_)
    opaque[3 * width + 3] = False
    cells = _cells(shadowcast(opaque, width, height, Vector(3, 3), 5), width)
    expected = {(3 + dx, 3 + dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)}
    assert cells == expected


def test_origin_at_corner_stays_in_bounds() -> None:
    width = height = 6
    reached = shadowcast(_open(width, height), width, height, Vector(0, 0), 4)
    assert _cells(reached, width) == _disk(Vector(0, 0), 4, width, height)


def test_invalid_arguments() -> None:
    with pytest.raises(ValueError):
        shadowcast(_open(5, 5), 5, 5, Vector(2, 2), -1)
    with pytest.raises(ValueError):
        shadowcast(_open(5, 5), 5, 5, Vector(5, 2), 3)


def test_parallel_matches_serial_on_cluttered_map() -> None:
    width, height = 40, 30
    generator = np.random.default_rng(1234)
    opaque = generator.random(width * height) < 0.2
    origin = Vector(20, 15)
    opaque[origin.y * width + origin.x] = False

    serial = shadowcast(opaque, width, height, origin, 12, parallel=False)
    parallel = shadowcast(opaque, width, height, origin, 12, parallel=True)
    assert np.array_equal(serial, parallel)


def test_cast_octant_reports_its_own_cells() -> None:
    width = height = 11
    opaque = _open(width, height).tolist()
    touched = cast_octant(opaque, width, height, Vector(5, 5), 3, 0)
    assert touched
    assert 5 * width + 5 not in touched  # the origin is added by the caller
    assert cast_octant([False] * 121, width, height, Vector(5, 5), 0, 0) == []


def test_scan_order_nearest_first_then_row_then_column() -> None:
    width = height = 5
    origin = Vector(2, 2)
    reached = shadowcast(_open(width, height), width, height, origin, 2)
    order = [
        (int(i) % width, int(i) // width) for i in scan_order(reached, width, origin)
    ]

    assert order[0] == (2, 2)
    distances = [max(abs(x - 2), abs(y - 2)) for x, y in order]
    assert distances == sorted(distances)
    assert order[1:9] == [
        (1, 1), (2, 1), (3, 1),
        (1, 2), (3, 2),
        (1, 3), (2, 3), (3, 3),
    ]  # fmt: skip


def test_scan_order_of_empty_mask() -> None:
    assert scan_order(np.zeros(4, dtype=np.bool_), 2, Vector(0, 0)).size == 0
