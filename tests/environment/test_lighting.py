"""Tests for the multi-source lighting pass."""

import logging

import numpy as np
import pytest

from umbra.environment.lighting import LightSource, compute_light_mask
from umbra.environment.shadowcast import shadowcast
from umbra.util.vector import Vector

WIDTH = HEIGHT = 20


def _open() -> np.ndarray:
    return np.zeros(WIDTH * HEIGHT, dtype=np.bool_)


def test_no_sources_lights_nothing() -> None:
    assert not compute_light_mask(_open(), WIDTH, HEIGHT, []).any()


def test_zero_radius_sources_are_ignored() -> None:
    sources = [LightSource(Vector(5, 5), 0)]
    assert not compute_light_mask(_open(), WIDTH, HEIGHT, sources).any()


@pytest.mark.parametrize("max_workers", [1, 4])
def test_mask_is_union_of_each_source(max_workers: int) -> None:
    opaque = _open()
    opaque[10 * WIDTH + 3 : 10 * WIDTH + 17] = True  # a wall across the middle
    sources = [
        LightSource(Vector(4, 4), 5),
        LightSource(Vector(15, 15), 3),
        LightSource(Vector(10, 8), 4),
    ]

    lit = compute_light_mask(opaque, WIDTH, HEIGHT, sources, max_workers=max_workers)

    expected = np.zeros_like(lit)
    for source in sources:
        expected |= shadowcast(
            opaque, WIDTH, HEIGHT, source.location, source.radius, parallel=False
        )
    assert np.array_equal(lit, expected)


def test_overlapping_sources_merge_cleanly() -> None:
    sources = [LightSource(Vector(9, 9), 6), LightSource(Vector(10, 9), 6)]
    lit = compute_light_mask(_open(), WIDTH, HEIGHT, sources, max_workers=2)
    assert lit[9 * WIDTH + 9]
    assert lit[9 * WIDTH + 15]  # reached only by the second source


def test_logs_pass_size(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="umbra.environment.lighting"):
        compute_light_mask(_open(), WIDTH, HEIGHT, [LightSource(Vector(1, 1), 2)])
    assert "Lighting pass: 1 source(s)" in caplog.text
