"""
Decayed edge and node anomaly detector (MIDAS-R).

Instead of resetting the current-window counts on every tick, MIDAS-R
scales them by ``alpha ** elapsed_ticks``, so recent activity carries over
with diminishing weight. Source and destination nodes are scored the same
way as the edge, and the reported score is ``log1p`` of the largest of the
three.

Scores of edges never inserted, or queries before the first insert, divide
by zero and come back as ``nan``/``inf``. Callers that query standalone
must be prepared for that.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, Optional, Tuple

import numpy as np

from ..errors import TimeRegressionError
from ..sketches import EdgeSketch, NodeSketch, SketchLike
from .midas import Event
from .params import MidasRParams
from .scoring import counts_to_anom, float_max

logger = logging.getLogger(__name__)


class MidasR:
    """
    Streaming edge scorer with exponentially decayed history.

    Args:
        params: Sketch geometry, decay factor and seed
            (default: ``MidasRParams()``)
    """

    def __init__(self, params: Optional[MidasRParams] = None):
        self.params = params if params is not None else MidasRParams()
        p = self.params

        self._current_time = 0
        self._alpha = p.alpha

        self.current_count = EdgeSketch(p.rows, p.buckets, p.m_value, p.seed + 1, device=p.device)
        self.total_count = EdgeSketch(p.rows, p.buckets, p.m_value, p.seed + 2, device=p.device)

        self.source_score = NodeSketch(p.rows, p.buckets, p.seed + 3, device=p.device)
        self.dest_score = NodeSketch(p.rows, p.buckets, p.seed + 4, device=p.device)
        self.source_total = NodeSketch(p.rows, p.buckets, p.seed + 5, device=p.device)
        self.dest_total = NodeSketch(p.rows, p.buckets, p.seed + 6, device=p.device)
        logger.debug("MidasR created: %s", p)

    @property
    def current_time(self) -> int:
        return self._current_time

    @property
    def alpha(self) -> float:
        """Factor applied to current counts per tick of elapsed time."""
        return self._alpha

    def _decaying(self) -> Tuple[SketchLike, ...]:
        return (self.current_count, self.source_score, self.dest_score)

    def _sketches(self) -> Tuple[SketchLike, ...]:
        return self._decaying() + (self.total_count, self.source_total, self.dest_total)

    def insert(self, source: int, dest: int, time: int) -> float:
        """
        Ingest one edge and return its score.

        Raises:
            TimeRegressionError: If ``time`` is earlier than ``current_time``
        """
        if time < self._current_time:
            raise TimeRegressionError(time, self._current_time)

        if time > self._current_time:
            # one step covers any number of skipped ticks
            with np.errstate(over="ignore"):
                total_decay = float(np.float64(self._alpha) ** float(time - self._current_time))
            for sketch in self._decaying():
                sketch.decay(total_decay)
            logger.debug("MidasR time %d -> %d, decay %.6g", self._current_time, time, total_decay)
            self._current_time = time

        self.current_count.insert(source, dest, 1.0)
        self.total_count.insert(source, dest, 1.0)

        self.source_score.insert(source, 1.0)
        self.dest_score.insert(dest, 1.0)
        self.source_total.insert(source, 1.0)
        self.dest_total.insert(dest, 1.0)

        return self.query(source, dest)

    def insert_event(self, event: Event) -> float:
        source, dest, time = event
        return self.insert(source, dest, time)

    def query(self, source: int, dest: int) -> float:
        """Score ``(source, dest)`` against the current state without inserting."""
        edge = counts_to_anom(
            self.total_count.query(source, dest),
            self.current_count.query(source, dest),
            self._current_time,
        )
        src = counts_to_anom(
            self.source_total.query_source(source),
            self.source_score.query_source(source),
            self._current_time,
        )
        dst = counts_to_anom(
            self.dest_total.query_dest(dest),
            self.dest_score.query_dest(dest),
            self._current_time,
        )
        return math.log1p(float_max(float_max(src, dst), edge))

    def get_memory_usage(self) -> int:
        return sum(sketch.get_memory_usage() for sketch in self._sketches())

    @classmethod
    def iterate(cls, events: Iterable[Event], params: Optional[MidasRParams] = None) -> Iterator[float]:
        """
        Lazily score a stream of ``(source, dest, time)`` triples.

        A fresh detector is built and consumed by the returned generator;
        it raises ``TimeRegressionError`` when it reaches an out-of-order
        triple.
        """
        midas = cls(params)
        return (midas.insert_event(event) for event in events)

    def __repr__(self) -> str:
        return (f"MidasR(rows={self.params.rows}, buckets={self.params.buckets}, "
                f"alpha={self._alpha}, current_time={self._current_time})")
