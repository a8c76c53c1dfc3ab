"""
Seeded random source used by the placer.

A pass builds its own :class:`SeededRNG` from the level seed, so previews of
several seeds never share state or interleave draws.
"""
from __future__ import annotations

import operator
import random
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    def next_float(self) -> float:
        """Uniform float in [0, 1)."""

    def rand_int(self, min_val: int, max_val: int) -> int:
        """Uniform integer in [min_val, max_val], both inclusive."""

    def index(self, n: int) -> int:
        """Uniform index in [0, n)."""


class SeededRNG:
    def __init__(self, seed: int):
        if seed is None:
            raise TypeError("SeededRNG needs an explicit integer seed")
        self._seed = operator.index(seed)
        self._rng = random.Random(self._seed)

    @property
    def seed(self):
        return self._seed

    def next_float(self):
        return self._rng.random()

    def rand_int(self, min_val, max_val):
        return self._rng.randint(min_val, max_val)

    def index(self, n):
        if n <= 0:
            raise ValueError(f"cannot draw an index from an empty range (n={n})")
        return self._rng.randrange(n)
