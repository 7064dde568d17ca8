"""
Construction parameters for the detectors.

Defaults match the reference MIDAS configuration: two rows of 769 buckets
with mixing constant 773, and a per-tick decay of 0.6 for MIDAS-R.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

NUM_ROWS = 2
NUM_BUCKETS = 769
M_VALUE = 773
ALPHA = 0.6

MIDAS_SEED = 39
MIDAS_R_SEED = 538


def _from_mapping(cls, config: Mapping[str, Any]):
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(config) - known)
    if unknown:
        raise ValueError(f"unknown {cls.__name__} keys: {', '.join(unknown)}")
    return cls(**dict(config))


@dataclass(frozen=True)
class MidasParams:
    """
    Parameters for the fixed-window detector.

    Args:
        rows: Number of rows of buckets in each internal Count-Min Sketch
        buckets: Number of buckets in each row
        m_value: Edge-hash mixing constant
        seed: Base seed the sketch hash coefficients are drawn from
        device: Device holding the counters ('cpu' or 'cuda')
    """

    rows: int = NUM_ROWS
    buckets: int = NUM_BUCKETS
    m_value: int = M_VALUE
    seed: int = MIDAS_SEED
    device: str = "cpu"

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "MidasParams":
        return _from_mapping(cls, config)


@dataclass(frozen=True)
class MidasRParams:
    """
    Parameters for the decayed (MIDAS-R) detector.

    Args:
        rows: Number of rows of buckets in each internal Count-Min Sketch
        buckets: Number of buckets in each row
        m_value: Edge-hash mixing constant
        alpha: Factor applied to current counts per elapsed tick, normally
            in (0, 1]. Not range-checked: with alpha > 1 a long gap
            overflows the decay factor to inf instead of raising
        seed: Base seed the sketch hash coefficients are drawn from
        device: Device holding the counters ('cpu' or 'cuda')
    """

    rows: int = NUM_ROWS
    buckets: int = NUM_BUCKETS
    m_value: int = M_VALUE
    alpha: float = ALPHA
    seed: int = MIDAS_R_SEED
    device: str = "cpu"

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "MidasRParams":
        return _from_mapping(cls, config)
