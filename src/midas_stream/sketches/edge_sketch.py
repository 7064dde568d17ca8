"""
Count-Min Sketch keyed on directed edges.

This module implements the edge-level sketch used by both detectors to
approximate how often each ``(source, dest)`` pair has been seen, either in
the current window or over the whole stream.
"""

from __future__ import annotations

import logging

import torch

from .rng import ParameterGenerator
from .row import SketchRow

logger = logging.getLogger(__name__)

FLOAT_MAX = float("inf")


def float_min(a: float, b: float) -> float:
    """``a`` if ``a <= b`` else ``b`` (a NaN ``a`` yields ``b``)."""
    return a if a <= b else b


class EdgeSketch:
    """
    Count-Min Sketch over ``(source, dest)`` pairs.

    Every row shares the mixing constant ``m_value``, which folds the two
    endpoints into one hash key (``m_value*dest + source``) so that
    ``(u, v)`` and ``(v, u)`` land in different buckets.

    Args:
        rows: Number of independent hash rows (sketch depth)
        buckets: Counters per row (sketch width)
        m_value: Edge mixing constant
        seed: Seed for the row hash coefficients
        device: Device to hold the counters on ('cpu' or 'cuda')
        dtype: Counter data type (default: torch.float64)
    """

    def __init__(
        self,
        rows: int,
        buckets: int,
        m_value: int,
        seed: int,
        device: str = "cpu",
        dtype: torch.dtype = torch.float64,
    ):
        if int(rows) < 1:
            raise ValueError(f"a sketch needs at least 1 row, got {rows}")

        self.m_value = int(m_value)
        self.device = device
        self.dtype = dtype

        rng = ParameterGenerator(seed)
        self.rows = [SketchRow(buckets, rng, device=device, dtype=dtype) for _ in range(int(rows))]
        logger.debug("EdgeSketch built: rows=%d buckets=%d seed=%d", len(self.rows), int(buckets), seed)

    @property
    def depth(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return self.rows[0].num_buckets

    def insert(self, source: int, dest: int, weight: float = 1.0) -> None:
        for row in self.rows:
            row.insert(self.m_value, source, dest, weight)

    def query(self, source: int, dest: int) -> float:
        """
        Estimated weight of ``(source, dest)``.

        Uses the minimum across rows (CM sketch property): never below the
        true weight, inflated only by collisions.
        """
        result = FLOAT_MAX
        for row in self.rows:
            result = float_min(result, row.query(self.m_value, source, dest))
        return result

    def decay(self, factor: float) -> None:
        for row in self.rows:
            row.decay(factor)

    def clear(self) -> None:
        for row in self.rows:
            row.clear()

    def get_memory_usage(self) -> int:
        return sum(row.get_memory_usage() for row in self.rows)

    def __repr__(self) -> str:
        return (f"EdgeSketch(width={self.width}, depth={self.depth}, m_value={self.m_value}, "
                f"device={self.device}, memory={self.get_memory_usage() / 1024:.2f} KB)")
