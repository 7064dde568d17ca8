"""
Count-Min Sketch keyed on single nodes.

Same rows as the edge sketch, with the mixing constant and the secondary
key both fixed to zero so the hash depends on the node id alone.
"""

from __future__ import annotations

import logging

import torch

from .edge_sketch import FLOAT_MAX, float_min
from .rng import ParameterGenerator
from .row import SketchRow

logger = logging.getLogger(__name__)


class NodeSketch:
    """
    Count-Min Sketch over node ids.

    Args:
        rows: Number of independent hash rows (sketch depth)
        buckets: Counters per row (sketch width)
        seed: Seed for the row hash coefficients
        device: Device to hold the counters on ('cpu' or 'cuda')
        dtype: Counter data type (default: torch.float64)
    """

    def __init__(
        self,
        rows: int,
        buckets: int,
        seed: int,
        device: str = "cpu",
        dtype: torch.dtype = torch.float64,
    ):
        if int(rows) < 1:
            raise ValueError(f"a sketch needs at least 1 row, got {rows}")

        self.device = device
        self.dtype = dtype

        rng = ParameterGenerator(seed)
        self.rows = [SketchRow(buckets, rng, device=device, dtype=dtype) for _ in range(int(rows))]
        logger.debug("NodeSketch built: rows=%d buckets=%d seed=%d", len(self.rows), int(buckets), seed)

    @property
    def depth(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return self.rows[0].num_buckets

    def insert(self, node: int, weight: float = 1.0) -> None:
        for row in self.rows:
            row.node_insert(node, weight)

    def query(self, node: int) -> float:
        """Estimated weight of ``node`` (minimum across rows)."""
        result = FLOAT_MAX
        for row in self.rows:
            result = float_min(result, row.node_query(node))
        return result

    def query_source(self, source: int) -> float:
        return self.query(source)

    def query_dest(self, dest: int) -> float:
        return self.query(dest)

    def decay(self, factor: float) -> None:
        for row in self.rows:
            row.decay(factor)

    def clear(self) -> None:
        for row in self.rows:
            row.clear()

    def get_memory_usage(self) -> int:
        return sum(row.get_memory_usage() for row in self.rows)

    def __repr__(self) -> str:
        return (f"NodeSketch(width={self.width}, depth={self.depth}, "
                f"device={self.device}, memory={self.get_memory_usage() / 1024:.2f} KB)")
