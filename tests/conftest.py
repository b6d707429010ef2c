from __future__ import annotations

from collections.abc import Iterator

import pytest

from umbra.events import reset_event_bus_for_testing
from umbra.util import rng


@pytest.fixture(autouse=True)
def reset_global_state() -> Iterator[None]:
    """Give every test a fresh event bus and a fixed RNG seed."""
    reset_event_bus_for_testing()
    rng.init("test")
    yield
    reset_event_bus_for_testing()
