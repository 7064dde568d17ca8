"""
A single hashed row of counters.

Each row owns an affine hash ``h(x) = (a*x + b) mod buckets`` over the key
``x = m_value*dest + source`` and a flat tensor of floating-point counters.
All integer arithmetic wraps at 64 bits, so hash placement is fixed by the
seed regardless of how large the node ids are.
"""

from __future__ import annotations

import torch

from .rng import ParameterGenerator

_U64_MASK = (1 << 64) - 1


class SketchRow:
    """
    One row of a count-min sketch.

    Args:
        buckets: Number of counters in the row (at least 2)
        rng: Parameter generator the hash coefficients are drawn from
        device: Device holding the counters ('cpu' or 'cuda')
        dtype: Counter data type (default: torch.float64)
    """

    def __init__(
        self,
        buckets: int,
        rng: ParameterGenerator,
        device: str = "cpu",
        dtype: torch.dtype = torch.float64,
    ):
        buckets = int(buckets)
        if buckets < 2:
            raise ValueError(f"a sketch row needs at least 2 buckets, got {buckets}")

        self.a = (rng.next() % (buckets - 1)) + 1
        self.b = rng.next() % buckets
        self.device = device
        self.dtype = dtype
        self.table = torch.zeros(buckets, device=device, dtype=dtype)

    @property
    def num_buckets(self) -> int:
        return int(self.table.shape[0])

    def hash(self, mixing: int, source: int, dest: int) -> int:
        """
        Bucket index for ``(source, dest)`` under mixing constant ``mixing``.

        Returns:
            Index in ``[0, num_buckets)``
        """
        key = (mixing * int(dest) + int(source)) & _U64_MASK
        return ((key * self.a + self.b) & _U64_MASK) % self.num_buckets

    def insert(self, mixing: int, source: int, dest: int, weight: float) -> None:
        self.table[self.hash(mixing, source, dest)] += weight

    def query(self, mixing: int, source: int, dest: int) -> float:
        return float(self.table[self.hash(mixing, source, dest)].item())

    def node_insert(self, node: int, weight: float) -> None:
        self.insert(0, node, 0, weight)

    def node_query(self, node: int) -> float:
        return self.query(0, node, 0)

    def decay(self, factor: float) -> None:
        """Scale every counter by ``factor`` (not clamped)."""
        self.table.mul_(factor)

    def clear(self) -> None:
        self.table.zero_()

    def get_memory_usage(self) -> int:
        return int(self.table.element_size() * self.table.nelement())

    def __repr__(self) -> str:
        return f"SketchRow(a={self.a}, b={self.b}, buckets={self.num_buckets})"
