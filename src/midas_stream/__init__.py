"""
Streaming anomaly scores for edges in dynamic graphs.

    >>> from midas_stream import MidasR
    >>> detector = MidasR()
    >>> for event in [(1, 1, 1), (1, 2, 1), (1, 1, 2), (1, 2, 3)]:
    ...     _ = detector.insert(*event)
    >>> detector.insert(1, 2, 4) == detector.query(1, 2)
    True
"""

from .detectors import (
    DetectorLike,
    Midas,
    MidasParams,
    MidasR,
    MidasRParams,
    midas,
    midas_r,
)
from .errors import MidasError, TimeRegressionError
from .sketches import EdgeSketch, NodeSketch, ParameterGenerator, SketchRow

__version__ = "0.1.0"

__all__ = [
    "DetectorLike",
    "EdgeSketch",
    "Midas",
    "MidasError",
    "MidasParams",
    "MidasR",
    "MidasRParams",
    "NodeSketch",
    "ParameterGenerator",
    "SketchRow",
    "TimeRegressionError",
    "midas",
    "midas_r",
]
