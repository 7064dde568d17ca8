"""
Anomaly statistics shared by the detectors.

Both compare the count observed in the current window against the mean
per-tick count implied by the running total. Division by zero (no history,
unseen key) yields ``inf``/``nan`` instead of raising.
"""

from __future__ import annotations

import numpy as np


def float_max(a: float, b: float) -> float:
    """``a`` if ``a >= b`` else ``b`` (a NaN ``a`` yields ``b``)."""
    return a if a >= b else b


def fixed_window_score(total: float, current: float, current_time: int) -> float:
    """
    Chi-squared style score of the fixed-window detector.

    The error is squared with its sign, so counts below the mean score
    as well.
    """
    if current_time == 1:
        return 0.0

    with np.errstate(divide="ignore", invalid="ignore"):
        t = np.float64(current_time)
        mean = np.float64(total) / t
        sqerr = (np.float64(current) - mean) ** 2
        score = sqerr / mean + sqerr / (mean * (t - 1.0))
    return float(score)


def counts_to_anom(total: float, current: float, current_time: int) -> float:
    """
    Chi-squared style score of the decayed detector.

    Only counts above the mean contribute.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        t = np.float64(current_time)
        mean = np.float64(total) / t
        sqerr = float_max(np.float64(0.0), np.float64(current) - mean) ** 2
        score = sqerr / mean + sqerr / (mean * float_max(np.float64(1.0), t - 1.0))
    return float(score)
