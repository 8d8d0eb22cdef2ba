"""Seedable randomness shared by every stochastic generation stage.

A single ``RandomSource`` is created per generation run and passed explicitly
to the skeleton, pools, builders and teleporter placement, so a fixed seed
reproduces the same map and no stage touches the global ``random`` state.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional

from .cells import DIRECTIONS, Position


class RandomSource:
    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        self.seed = seed
        self._rng = random.Random(seed)

    def randint(self, lo: int, hi: int, odd: Optional[bool] = None) -> int:
        """Uniform integer in [lo, hi], optionally nudged to a parity.

        With ``odd`` set, a value of the wrong parity moves up by one when it
        is below ``hi`` and down by one otherwise. Carving depends on this
        rule to keep corridors on the same lattice as the mirror axis; note
        that it can step below ``lo`` when ``lo == hi``.
        """
        result = self._rng.randint(lo, hi)
        if odd is not None and (result % 2 == 0) == odd:
            if result < hi:
                result += 1
            else:
                result -= 1
        return result

    def direction(self, ignore: Iterable[Position] = ()) -> Optional[Position]:
        """Uniform cardinal direction not in ``ignore``; None when none is left."""
        ignored = set(ignore)
        candidates = [d for d in DIRECTIONS if d not in ignored]
        if not candidates:
            return None
        return candidates[self.randint(0, len(candidates) - 1)]


__all__ = ["RandomSource"]
