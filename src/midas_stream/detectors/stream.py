"""
Iterator adapters for scoring whole event streams.

Usage::

    events = [(1, 1, 1), (1, 2, 1), (1, 1, 3), (1, 2, 4)]
    for score in midas_r(events):
        print(f"{score:.6f}")
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .midas import Event, Midas
from .midas_r import MidasR
from .params import MidasParams, MidasRParams


def midas(events: Iterable[Event], params: Optional[MidasParams] = None) -> Iterator[float]:
    """Fixed-window scores, one per ``(source, dest, time)`` triple, in order."""
    return Midas.iterate(events, params)


def midas_r(events: Iterable[Event], params: Optional[MidasRParams] = None) -> Iterator[float]:
    """Decayed scores, one per ``(source, dest, time)`` triple, in order."""
    return MidasR.iterate(events, params)
