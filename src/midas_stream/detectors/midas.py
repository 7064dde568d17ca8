"""
Fixed-window edge anomaly detector (MIDAS).

Keeps a Count-Min Sketch of edges seen in the current tick, hard-reset
whenever time advances, next to a sketch of all edges ever seen. An edge's
score compares its current-tick count against its mean count per tick.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Tuple

from ..errors import TimeRegressionError
from ..sketches import EdgeSketch
from .params import MidasParams
from .scoring import fixed_window_score

logger = logging.getLogger(__name__)

Event = Tuple[int, int, int]


class Midas:
    """
    Streaming edge scorer with a one-tick window.

    Args:
        params: Sketch geometry and seed (default: ``MidasParams()``)

    Example:
        >>> midas = Midas()
        >>> midas.insert(1, 1, 1)
        0.0
    """

    def __init__(self, params: Optional[MidasParams] = None):
        self.params = params if params is not None else MidasParams()
        p = self.params

        self._current_time = 0
        self.current_count = EdgeSketch(p.rows, p.buckets, p.m_value, p.seed + 1, device=p.device)
        self.total_count = EdgeSketch(p.rows, p.buckets, p.m_value, p.seed + 2, device=p.device)
        logger.debug("Midas created: %s", p)

    @property
    def current_time(self) -> int:
        return self._current_time

    def insert(self, source: int, dest: int, time: int) -> float:
        """
        Ingest one edge and return its score.

        Raises:
            TimeRegressionError: If ``time`` is earlier than ``current_time``
        """
        if time < self._current_time:
            raise TimeRegressionError(time, self._current_time)

        if time > self._current_time:
            self.current_count.clear()
            self._current_time = time

        self.current_count.insert(source, dest, 1.0)
        self.total_count.insert(source, dest, 1.0)

        return self.query(source, dest)

    def insert_event(self, event: Event) -> float:
        source, dest, time = event
        return self.insert(source, dest, time)

    def query(self, source: int, dest: int) -> float:
        """Score ``(source, dest)`` against the current state without inserting."""
        return fixed_window_score(
            self.total_count.query(source, dest),
            self.current_count.query(source, dest),
            self._current_time,
        )

    def get_memory_usage(self) -> int:
        return self.current_count.get_memory_usage() + self.total_count.get_memory_usage()

    @classmethod
    def iterate(cls, events: Iterable[Event], params: Optional[MidasParams] = None) -> Iterator[float]:
        """
        Lazily score a stream of ``(source, dest, time)`` triples.

        A fresh detector is built and consumed by the returned generator;
        it raises ``TimeRegressionError`` when it reaches an out-of-order
        triple.
        """
        midas = cls(params)
        return (midas.insert_event(event) for event in events)

    def __repr__(self) -> str:
        return (f"Midas(rows={self.params.rows}, buckets={self.params.buckets}, "
                f"current_time={self._current_time})")
