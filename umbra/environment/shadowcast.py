"""Field of view and light propagation using recursive shadowcasting.

This is Björn Bergström's recursive shadowcasting. The area around an origin
is split into eight 45-degree octants. Each octant is scanned outward row by
row, keeping a ``[end_slope, start_slope]`` window of slopes that light can
still pass through; an opaque cell narrows the window for the rows behind it
and spawns a child scan for the part of the window on its far side.

All eight octants share one scanning routine. ``OCTANT_MULTIPLIERS`` holds,
per octant, the four sign/swap factors (xx, xy, yx, yy) that map the
routine's local (dx, dy) onto grid coordinates::

    map_x = origin.x + dx * xx + dy * xy
    map_y = origin.y + dx * yx + dy * yy

Cells are reported by flat arena index (``y * width + x``). Each octant scan
writes only to its own private list, and the lists are merged into a
boolean mask after every scan has finished, so concurrent octants never
write to shared state. Neighbouring octants overlap on their shared
diagonal and axis cells; the merge makes that harmless.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

from umbra import config
from umbra.types import TileIndex
from umbra.util.vector import Vector

# Rows are xx, xy, yx, yy; columns are the eight octants.
OCTANT_MULTIPLIERS: tuple[tuple[int, ...], ...] = (
    (1, 0, 0, -1, -1, 0, 0, 1),
    (0, 1, -1, 0, 0, -1, 1, 0),
    (0, 1, 1, 0, 0, -1, -1, 0),
    (1, 0, 0, 1, -1, 0, 0, -1),
)

OCTANT_COUNT = 8

OpaqueCells: TypeAlias = NDArray[np.bool_] | Sequence[bool]


def octant_transform(octant: int) -> tuple[int, int, int, int]:
    """The (xx, xy, yx, yy) multipliers for one octant."""
    if not 0 <= octant < OCTANT_COUNT:
        raise ValueError(f"octant must be in 0..7, got {octant}")
    xx, xy, yx, yy = (row[octant] for row in OCTANT_MULTIPLIERS)
    return xx, xy, yx, yy


def cast_octant(
    opaque: Sequence[bool],
    width: int,
    height: int,
    origin: Vector,
    radius: int,
    octant: int,
) -> list[TileIndex]:
    """Scan one octant and return the indices of every cell it reaches.

    The origin itself is not included; callers add it once.
    """
    touched: list[TileIndex] = []
    if radius <= 0:
        return touched
    xx, xy, yx, yy = octant_transform(octant)
    _cast_light(
        opaque,
        width,
        height,
        origin.x,
        origin.y,
        1,
        1.0,
        0.0,
        radius,
        xx,
        xy,
        yx,
        yy,
        touched,
    )
    return touched


def _cast_light(
    opaque: Sequence[bool],
    width: int,
    height: int,
    cx: int,
    cy: int,
    row: int,
    start_slope: float,
    end_slope: float,
    radius: int,
    xx: int,
    xy: int,
    yx: int,
    yy: int,
    touched: list[TileIndex],
) -> None:
    if start_slope < end_slope:
        return
    radius_squared = radius * radius
    new_start_slope = start_slope
    for j in range(row, radius + 1):
        dy = -j
        blocked = False
        # Scan from the steep edge (dx = -j) toward the shallow edge (dx = 0).
        for dx in range(-j, 1):
            map_x = cx + dx * xx + dy * xy
            map_y = cy + dx * yx + dy * yy
            if map_x < 0 or map_x >= width or map_y < 0 or map_y >= height:
                continue

            # Slopes of the left and right extremities of this cell.
            left_slope = (dx - 0.5) / (dy + 0.5)
            right_slope = (dx + 0.5) / (dy - 0.5)
            if start_slope < right_slope:
                continue
            if end_slope > left_slope:
                break

            index = map_y * width + map_x
            if dx * dx + dy * dy < radius_squared:
                touched.append(index)

            if blocked:
                # Inside a run of opaque cells.
                if opaque[index]:
                    new_start_slope = right_slope
                    continue
                blocked = False
                start_slope = new_start_slope
            elif opaque[index] and j < radius:
                # First opaque cell of a run: light continues past its near
                # side in a child scan of the next row.
                blocked = True
                _cast_light(
                    opaque,
                    width,
                    height,
                    cx,
                    cy,
                    j + 1,
                    start_slope,
                    left_slope,
                    radius,
                    xx,
                    xy,
                    yx,
                    yy,
                    touched,
                )
                new_start_slope = right_slope
        if blocked:
            break


def shadowcast(
    opaque: OpaqueCells,
    width: int,
    height: int,
    origin: Vector,
    radius: int,
    *,
    parallel: bool | None = None,
) -> NDArray[np.bool_]:
    """Compute every cell reachable from ``origin`` within ``radius``.

    Args:
        opaque: Flat per-cell "blocks light" values, indexed ``y * width + x``.
        width: Grid width.
        height: Grid height.
        origin: Cell the light or gaze starts from. Must be inside the grid.
        radius: Cells are reached only if their squared Euclidean distance
            from the origin is strictly less than ``radius ** 2``. A radius
            of 0 reaches nothing, not even the origin.
        parallel: Run the eight octants as concurrent tasks and join on them
            before merging. Defaults to ``config.PARALLEL_SHADOWCAST``.

    Returns:
        A flat boolean mask of length ``width * height``.
    """
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    if not (0 <= origin.x < width and 0 <= origin.y < height):
        raise ValueError(f"origin {origin} is outside a {width}x{height} grid")
    if parallel is None:
        parallel = config.PARALLEL_SHADOWCAST

    reached = np.zeros(width * height, dtype=np.bool_)
    if radius == 0:
        return reached

    # Plain list lookups are much faster than indexing NumPy scalars one cell
    # at a time in the scan loop.
    cells = opaque.tolist() if isinstance(opaque, np.ndarray) else opaque

    reached[origin.y * width + origin.x] = True
    if parallel:
        workers = max(1, min(OCTANT_COUNT, config.LIGHTING_MAX_WORKERS))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="shadowcast"
        ) as pool:
            results = list(
                pool.map(
                    lambda octant: cast_octant(
                        cells, width, height, origin, radius, octant
                    ),
                    range(OCTANT_COUNT),
                )
            )
    else:
        results = [
            cast_octant(cells, width, height, origin, radius, octant)
            for octant in range(OCTANT_COUNT)
        ]

    for touched in results:
        if touched:
            reached[np.asarray(touched, dtype=np.intp)] = True
    return reached


def scan_order(
    reached: NDArray[np.bool_], width: int, origin: Vector
) -> NDArray[np.intp]:
    """Indices of the reached cells, nearest first.

    Cells are ordered by Chebyshev distance from ``origin``, then by row,
    then by column, so every caller walks a field of view in the same
    deterministic order.
    """
    indices = np.flatnonzero(reached)
    if indices.size == 0:
        return indices
    xs = indices % width
    ys = indices // width
    distance = np.maximum(np.abs(xs - origin.x), np.abs(ys - origin.y))
    # lexsort sorts by the last key first.
    return indices[np.lexsort((xs, ys, distance))]
