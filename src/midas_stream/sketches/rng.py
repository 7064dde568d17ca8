"""
Seeded parameter source for sketch hash functions.

Every sketch draws its per-row ``(a, b)`` coefficients from one of these,
so two sketches built with the same seed and geometry hash identically.
"""

from __future__ import annotations

import numpy as np


class ParameterGenerator:
    """
    Reproducible stream of non-negative 32-bit integers.

    Args:
        seed: Seed for the underlying ``numpy.random.RandomState``
    """

    HIGH = 2**32

    def __init__(self, seed: int):
        self.seed = int(seed)
        self._state = np.random.RandomState(self.seed)

    def next(self) -> int:
        """Draw the next integer in ``[0, 2**32)``."""
        return int(self._state.randint(0, self.HIGH, dtype=np.uint64))

    def __repr__(self) -> str:
        return f"ParameterGenerator(seed={self.seed})"
