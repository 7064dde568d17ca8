"""Tests for the anomaly statistics."""
from __future__ import annotations

import math

import pytest

from midas_stream.detectors.scoring import (
    counts_to_anom,
    fixed_window_score,
    float_max,
)
from midas_stream.sketches.edge_sketch import float_min


class TestFloatOrdering:
    def test_max_min(self):
        assert float_max(1.0, 2.0) == 2.0
        assert float_max(2.0, 1.0) == 2.0
        assert float_min(1.0, 2.0) == 1.0

    def test_nan_on_left_yields_right(self):
        assert float_max(float("nan"), 3.0) == 3.0
        assert math.isnan(float_max(3.0, float("nan")))

    def test_min_nan_on_left_yields_right(self):
        assert float_min(float("nan"), 3.0) == 3.0
        assert math.isnan(float_min(3.0, float("nan")))


class TestFixedWindowScore:
    def test_first_tick_is_zero(self):
        assert fixed_window_score(10.0, 10.0, 1) == 0.0

    def test_formula(self):
        # mean=2, sqerr=(5-2)^2=9, t=3
        assert fixed_window_score(6.0, 5.0, 3) == pytest.approx(9 / 2 + 9 / (2 * 2))

    def test_signed_error(self):
        # mean=4, sqerr=(1-4)^2=9, t=2
        assert fixed_window_score(8.0, 1.0, 2) == pytest.approx(9 / 4 + 9 / 4)

    def test_zero_history_is_nan(self):
        assert math.isnan(fixed_window_score(0.0, 0.0, 3))


class TestCountsToAnom:
    def test_formula(self):
        # mean=2, sqerr=9, max(1, t-1)=2
        assert counts_to_anom(6.0, 5.0, 3) == pytest.approx(9 / 2 + 9 / 4)

    def test_second_tick_uses_floor_of_one(self):
        # mean=1, sqerr=0.36, max(1, 1)=1
        assert counts_to_anom(2.0, 1.6, 2) == pytest.approx(0.72)

    def test_below_mean_is_zero(self):
        assert counts_to_anom(8.0, 1.0, 2) == 0.0

    def test_zero_mean_positive_current_is_inf(self):
        assert counts_to_anom(0.0, 1.0, 5) == math.inf

    def test_zero_time_is_nan(self):
        assert math.isnan(counts_to_anom(0.0, 0.0, 0))

    def test_never_negative(self):
        for total in (1.0, 5.0, 50.0):
            for current in (0.0, 0.5, 3.0, 40.0):
                for t in (1, 2, 10):
                    assert counts_to_anom(total, current, t) >= 0.0
