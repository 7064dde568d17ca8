from __future__ import annotations

from typing import Protocol

from .edge_sketch import EdgeSketch
from .node_sketch import NodeSketch
from .rng import ParameterGenerator
from .row import SketchRow


class SketchLike(Protocol):
    """
    Minimal interface the detectors expect from a sketch implementation.

    Detectors only ever fan the same operation out to every sketch they
    own, so decay/clear and a memory report are all they need in common.
    """

    def decay(self, factor: float) -> None: ...

    def clear(self) -> None: ...

    def get_memory_usage(self) -> int: ...


__all__ = ["EdgeSketch", "NodeSketch", "ParameterGenerator", "SketchLike", "SketchRow"]
