"""Exceptions raised by the detectors."""

from __future__ import annotations


class MidasError(Exception):
    """Base class for detector errors."""


class TimeRegressionError(MidasError, ValueError):
    """An event arrived with a timestamp earlier than the detector's clock."""

    def __init__(self, time: int, current_time: int):
        self.time = time
        self.current_time = current_time
        super().__init__(
            f"time must be non-decreasing: got {time}, current time is {current_time}"
        )
