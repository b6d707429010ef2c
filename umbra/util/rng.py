"""Named random streams derived from one master seed.

Level generation and AI wandering each draw from their own stream, so a seed
reproduces a whole game and extra draws in one system never shift another.
Modules grab their stream once at import time::

    _wander_rng = rng.get("ai.wander")

The returned `RNGStream` stays valid across `rng.init()` and `rng.reset()`;
it always reads from whatever stream the provider currently holds.

Domains in use: ``"level.walls"``, ``"ai.wander"``.
"""

from __future__ import annotations

import zlib
from random import Random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from umbra.types import RandomSeed


class RNGStream:
    """Cacheable handle on one domain's current `Random`."""

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    def random(self) -> float:
        return self._provider._stream(self._domain).random()

    def randint(self, a: int, b: int) -> int:
        """Random integer in ``[a, b]``, both ends included."""
        return self._provider._stream(self._domain).randint(a, b)


class RNGProvider:
    """Owns one `Random` per domain, seeded from ``crc32("<seed>:<domain>")``.

    With no master seed every stream falls back to system entropy.
    """

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._handles: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        handle = self._handles.get(domain)
        if handle is None:
            handle = self._handles[domain] = RNGStream(self, domain)
        return handle

    def _stream(self, domain: str) -> Random:
        stream = self._streams.get(domain)
        if stream is None:
            if self._master_seed is None:
                stream = Random()
            else:
                # hash() is salted per process; crc32 is stable across runs.
                stream = Random(zlib.crc32(f"{self._master_seed}:{domain}".encode()))
            self._streams[domain] = stream
        return stream

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reseed every domain. Handles already given out keep working."""
        self._master_seed = master_seed
        self._streams.clear()


_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Seed the global provider, creating it on first use."""
    global _provider
    if _provider is None:
        _provider = RNGProvider(master_seed)
    else:
        _provider.reset(master_seed)


def get(domain: str) -> RNGStream:
    """Handle on ``domain``'s stream; unseeded until `init` is called."""
    global _provider
    if _provider is None:
        _provider = RNGProvider()
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    if _provider is None:
        raise RuntimeError("rng.reset() called before rng.init()")
    _provider.reset(master_seed)
