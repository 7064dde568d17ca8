"""Tests for the edge and node Count-Min Sketches."""
from __future__ import annotations

from collections import Counter

import pytest

from midas_stream.sketches import EdgeSketch, NodeSketch
from tests.conftest import make_stream


class TestEdgeSketchBasics:
    def test_empty(self):
        sketch = EdgeSketch(rows=2, buckets=769, m_value=773, seed=40)
        assert sketch.query(1, 2) == 0.0
        assert sketch.depth == 2
        assert sketch.width == 769

    def test_invalid_rows(self):
        with pytest.raises(ValueError):
            EdgeSketch(rows=0, buckets=769, m_value=773, seed=40)

    def test_invalid_buckets(self):
        with pytest.raises(ValueError):
            EdgeSketch(rows=2, buckets=1, m_value=773, seed=40)

    def test_insert_with_weight(self):
        sketch = EdgeSketch(rows=3, buckets=769, m_value=773, seed=40)
        sketch.insert(1, 2, 2.5)
        sketch.insert(1, 2)
        assert sketch.query(1, 2) == 3.5

    def test_query_takes_row_minimum(self):
        sketch = EdgeSketch(rows=2, buckets=769, m_value=773, seed=40)
        sketch.insert(1, 2)
        row = sketch.rows[0]
        row.table[row.hash(773, 1, 2)] += 10.0
        assert sketch.query(1, 2) == 1.0

    def test_rows_mutated_in_lockstep(self):
        sketch = EdgeSketch(rows=4, buckets=97, m_value=773, seed=40)
        sketch.insert(3, 9, 2.0)
        for row in sketch.rows:
            assert row.query(773, 3, 9) == 2.0
        sketch.decay(0.5)
        for row in sketch.rows:
            assert row.query(773, 3, 9) == 1.0
        sketch.clear()
        for row in sketch.rows:
            assert float(row.table.sum()) == 0.0

    def test_same_seed_same_geometry(self):
        a = EdgeSketch(rows=3, buckets=769, m_value=773, seed=7)
        b = EdgeSketch(rows=3, buckets=769, m_value=773, seed=7)
        assert [(r.a, r.b) for r in a.rows] == [(r.a, r.b) for r in b.rows]

    def test_different_seed_different_geometry(self):
        sketch = EdgeSketch(rows=2, buckets=769, m_value=773, seed=7)
        c = EdgeSketch(rows=2, buckets=769, m_value=773, seed=8)
        assert [(r.a, r.b) for r in sketch.rows] != [(r.a, r.b) for r in c.rows]

    def test_memory(self):
        sketch = EdgeSketch(rows=2, buckets=769, m_value=773, seed=7)
        assert sketch.get_memory_usage() == 2 * 769 * 8


class TestEdgeSketchAccuracy:
    def test_never_underestimates(self):
        sketch = EdgeSketch(rows=2, buckets=97, m_value=773, seed=40)
        exact = Counter()
        for source, dest, _ in make_stream(n=3000, num_nodes=40):
            sketch.insert(source, dest)
            exact[(source, dest)] += 1

        for (source, dest), true_count in exact.items():
            est = sketch.query(source, dest)
            assert est >= true_count >= 0

    def test_direction_matters(self):
        sketch = EdgeSketch(rows=2, buckets=769, m_value=773, seed=40)
        for _ in range(10):
            sketch.insert(1, 2)
        assert sketch.query(1, 2) == 10.0
        assert sketch.query(2, 1) < 10.0


class TestNodeSketch:
    def test_empty(self):
        sketch = NodeSketch(rows=2, buckets=769, seed=43)
        assert sketch.query(5) == 0.0

    def test_invalid_rows(self):
        with pytest.raises(ValueError):
            NodeSketch(rows=0, buckets=769, seed=43)

    def test_source_and_dest_shapes_agree(self):
        sketch = NodeSketch(rows=2, buckets=769, seed=43)
        for _ in range(4):
            sketch.insert(5)
        assert sketch.query(5) == 4.0
        assert sketch.query_source(5) == sketch.query_dest(5) == 4.0

    def test_never_underestimates(self):
        sketch = NodeSketch(rows=2, buckets=31, seed=43)
        exact = Counter()
        for source, _, _ in make_stream(n=2000, num_nodes=100):
            sketch.insert(source)
            exact[source] += 1
        for node, true_count in exact.items():
            assert sketch.query(node) >= true_count

    def test_decay_and_clear(self):
        sketch = NodeSketch(rows=2, buckets=769, seed=43)
        sketch.insert(5, 10.0)
        sketch.decay(0.6)
        assert sketch.query(5) == pytest.approx(6.0)
        sketch.clear()
        assert sketch.query(5) == 0.0
