"""Light propagation for every light source on a level at once."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from umbra import config
from umbra.environment.shadowcast import OpaqueCells, shadowcast
from umbra.util.vector import Vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LightSource:
    """A point light for one lighting pass.

    Light sources are not stored; the dungeon derives them from its
    occupants every time it recomputes lighting.
    """

    location: Vector
    radius: int
    owner: Any = None  # The actor or feature emitting the light.


def compute_light_mask(
    opaque: OpaqueCells,
    width: int,
    height: int,
    sources: Sequence[LightSource],
    *,
    max_workers: int | None = None,
) -> NDArray[np.bool_]:
    """Union of the cells lit by every source.

    One task per light source runs its shadowcast into a private mask; the
    caller blocks until all tasks have finished and then ORs the masks
    together. Tasks never touch shared state, so the merge needs no lock.

    Args:
        opaque: Flat per-cell "blocks light" values, indexed ``y * width + x``.
        width: Grid width.
        height: Grid height.
        sources: Lights to cast. Sources with radius 0 contribute nothing.
        max_workers: Thread cap. Defaults to ``config.LIGHTING_MAX_WORKERS``;
            1 (or a single source) casts on the calling thread.

    Returns:
        A flat boolean mask of length ``width * height``.
    """
    if max_workers is None:
        max_workers = config.LIGHTING_MAX_WORKERS

    lit = np.zeros(width * height, dtype=np.bool_)
    active = [source for source in sources if source.radius > 0]
    if not active:
        return lit

    cells = opaque.tolist() if isinstance(opaque, np.ndarray) else opaque

    def cast(source: LightSource) -> NDArray[np.bool_]:
        # Octants run serially inside each task; the fan-out is per source.
        return shadowcast(
            cells, width, height, source.location, source.radius, parallel=False
        )

    if len(active) == 1 or max_workers <= 1:
        private_masks = [cast(source) for source in active]
    else:
        with ThreadPoolExecutor(
            max_workers=min(max_workers, len(active)), thread_name_prefix="lighting"
        ) as pool:
            private_masks = list(pool.map(cast, active))

    for mask in private_masks:
        np.logical_or(lit, mask, out=lit)

    logger.debug(
        f"Lighting pass: {len(active)} source(s), {int(lit.sum())} cell(s) lit"
    )
    return lit
