"""Shared helpers for detector and sketch tests."""
from __future__ import annotations

import random

import pytest

SEED = 42

EXAMPLE_EVENTS = [(1, 1, 1), (1, 2, 1), (1, 1, 2), (1, 2, 3)]


def make_stream(n: int = 2000, num_nodes: int = 30, max_gap: int = 2, seed: int = SEED):
    """Random (source, dest, time) triples with non-decreasing time."""
    rng = random.Random(seed)
    t = 1
    events = []
    for _ in range(n):
        if rng.random() < 0.05:
            t += rng.randint(1, max_gap)
        events.append((rng.randrange(num_nodes), rng.randrange(num_nodes), t))
    return events


@pytest.fixture
def example_events():
    return list(EXAMPLE_EVENTS)


@pytest.fixture
def stream():
    return make_stream()
