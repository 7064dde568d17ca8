from __future__ import annotations

from typing import Protocol

from .midas import Event, Midas
from .midas_r import MidasR
from .params import MidasParams, MidasRParams
from .stream import midas, midas_r


class DetectorLike(Protocol):
    """Interface shared by the streaming detectors."""

    @property
    def current_time(self) -> int: ...

    def insert(self, source: int, dest: int, time: int) -> float: ...

    def query(self, source: int, dest: int) -> float: ...

    def get_memory_usage(self) -> int: ...


__all__ = [
    "DetectorLike",
    "Event",
    "Midas",
    "MidasParams",
    "MidasR",
    "MidasRParams",
    "midas",
    "midas_r",
]
