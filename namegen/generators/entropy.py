#!/usr/bin/env python3
"""
Random Sources
==============
Deterministic pseudo-random generators driven by a caller-supplied seed.

Two sources are provided:
- XorShiftRandom: fast xorshift bit mixing on a 64-bit integer state,
  reproducing the reference name generator draw for draw
- SeededRandom: distribution-based draws from Python's Mersenne Twister

Neither is suitable for cryptographic use.
"""

import random
from abc import ABC, abstractmethod

# Largest value returned by next_u32()
RANGE_MAX = 0xFFFFFFFF

_STATE_MASK = 0xFFFFFFFFFFFFFFFF


class RandomSource(ABC):
    """Seeded generator whose state advances on every draw."""

    @property
    @abstractmethod
    def state(self) -> int:
        """Current seed state, suitable for seeding a follow-up generator."""

    @abstractmethod
    def next_u32(self) -> int:
        """Return an integer uniformly distributed over [0, RANGE_MAX]."""

    def next_in_range(self, n: int) -> int:
        """Return an integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"Cannot draw from an empty range (n={n})")
        return self.next_u32() % n


class XorShiftRandom(RandomSource):
    """
    Xorshift generator operating purely on integer seed state.

    Only the low 32 bits of the state feed back into later draws, so the
    sequence is identical whether the state is held in 32 or 64 bits.
    A zero seed stays zero forever.
    """

    def __init__(self, seed: int = 0):
        self._seed = int(seed) & _STATE_MASK

    @property
    def state(self) -> int:
        return self._seed

    def next_u32(self) -> int:
        s = self._seed
        s ^= (s << 13) & _STATE_MASK
        s ^= (s & RANGE_MAX) >> 17
        s ^= (s << 5) & _STATE_MASK
        self._seed = s
        return s & RANGE_MAX


class SeededRandom(RandomSource):
    """Uniform draws from a seeded ``random.Random`` instance."""

    def __init__(self, seed: int = 0):
        self._initial = int(seed)
        self._rng = random.Random(self._initial)
        self._draws = 0

    @property
    def state(self) -> int:
        # Mersenne state is not an integer; hand out a derived seed instead
        return (self._initial + self._draws) & _STATE_MASK

    def next_u32(self) -> int:
        self._draws += 1
        return self._rng.getrandbits(32)

    def next_in_range(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"Cannot draw from an empty range (n={n})")
        self._draws += 1
        return self._rng.randrange(n)


RNG_KINDS = {
    'xorshift': XorShiftRandom,
    'mersenne': SeededRandom,
}


def get_rng(seed: int, kind: str = 'xorshift') -> RandomSource:
    """Create a random source of the given kind."""
    try:
        factory = RNG_KINDS[kind]
    except KeyError:
        available = ', '.join(sorted(RNG_KINDS))
        raise ValueError(f"Unknown random source '{kind}'. Available: {available}") from None
    return factory(seed)


__all__ = [
    'RANGE_MAX',
    'RandomSource',
    'XorShiftRandom',
    'SeededRandom',
    'RNG_KINDS',
    'get_rng',
]
