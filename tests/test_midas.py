"""Tests for the fixed-window MIDAS detector."""
from __future__ import annotations

import math

import pytest
import torch

from midas_stream import Midas, MidasParams, TimeRegressionError
from tests.conftest import make_stream


class TestMidasTime:
    def test_starts_before_first_event(self):
        assert Midas().current_time == 0

    def test_equal_and_later_time_accepted(self):
        midas = Midas()
        midas.insert(1, 2, 3)
        midas.insert(1, 2, 3)
        midas.insert(1, 2, 7)
        assert midas.current_time == 7

    def test_time_regression_raises(self):
        midas = Midas()
        midas.insert(1, 2, 5)
        with pytest.raises(TimeRegressionError) as exc_info:
            midas.insert(1, 2, 4)
        assert exc_info.value.time == 4
        assert exc_info.value.current_time == 5
        assert isinstance(exc_info.value, ValueError)

    def test_rejected_insert_leaves_state(self):
        midas = Midas()
        midas.insert(1, 2, 5)
        before = midas.query(1, 2)
        with pytest.raises(TimeRegressionError):
            midas.insert(1, 2, 1)
        assert midas.current_time == 5
        assert midas.total_count.query(1, 2) == 1.0
        assert midas.query(1, 2) == before


class TestMidasWindow:
    def test_window_resets_on_time_advance(self):
        midas = Midas()
        for _ in range(3):
            midas.insert(1, 2, 1)
        assert midas.current_count.query(1, 2) == 3.0

        midas.insert(3, 4, 2)
        assert midas.current_count.query(1, 2) == 0.0
        assert midas.total_count.query(1, 2) >= 3.0

    def test_same_tick_accumulates(self):
        midas = Midas()
        midas.insert(1, 2, 4)
        midas.insert(1, 2, 4)
        assert midas.current_count.query(1, 2) == 2.0


class TestMidasScore:
    def test_first_tick_scores_zero(self):
        midas = Midas()
        assert midas.insert(1, 1, 1) == 0.0
        assert midas.insert(1, 1, 1) == 0.0

    def test_score_value(self):
        midas = Midas()
        midas.insert(1, 2, 1)
        midas.insert(1, 2, 1)
        # total=3, current=1, t=2: mean=1.5, sqerr=0.25
        assert midas.insert(1, 2, 2) == pytest.approx(0.25 / 1.5 + 0.25 / 1.5)

    def test_below_mean_still_scores(self):
        midas = Midas()
        for _ in range(3):
            midas.insert(1, 2, 1)
        # total=4, current=1, t=2: mean=2, sqerr=1
        assert midas.insert(1, 2, 2) == pytest.approx(1.0)

    def test_burst_scores_higher_than_steady(self):
        midas = Midas()
        for t in range(1, 20):
            steady = midas.insert(1, 2, t)
        for _ in range(30):
            burst = midas.insert(1, 2, 20)
        assert burst > steady

    def test_query_is_idempotent(self):
        midas = Midas()
        events = make_stream(n=300)
        for event in events:
            midas.insert(*event)
        source, dest, _ = events[0]
        first = midas.query(source, dest)
        assert midas.query(source, dest) == first
        assert midas.query(source, dest) == first

    def test_insert_returns_query(self, example_events):
        midas = Midas()
        for event in example_events:
            midas.insert(*event)
        assert midas.insert(1, 2, 4) == midas.query(1, 2)

    def test_query_before_insert_does_not_raise(self):
        assert math.isnan(Midas().query(1, 2))

    def test_scores_non_negative(self, stream):
        midas = Midas()
        for event in stream:
            score = midas.insert(*event)
            assert score >= 0.0


class TestMidasDeterminism:
    def test_identical_detectors_identical_scores(self, stream):
        a = Midas()
        b = Midas()
        assert [a.insert(*e) for e in stream] == [b.insert(*e) for e in stream]
        for sa, sb in zip(a.total_count.rows, b.total_count.rows):
            assert torch.equal(sa.table, sb.table)

    def test_seed_changes_geometry(self):
        a = Midas(MidasParams(seed=1))
        b = Midas(MidasParams(seed=2))
        assert [(r.a, r.b) for r in a.total_count.rows] != [(r.a, r.b) for r in b.total_count.rows]

    def test_custom_geometry(self):
        midas = Midas(MidasParams(rows=3, buckets=101, m_value=7))
        assert midas.current_count.depth == 3
        assert midas.current_count.width == 101
        assert midas.current_count.m_value == 7
        assert midas.get_memory_usage() == 2 * 3 * 101 * 8

    def test_too_few_buckets(self):
        with pytest.raises(ValueError):
            Midas(MidasParams(buckets=1))
