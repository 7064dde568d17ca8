"""
Evaluation metrics for streaming anomaly detection experiments.

This module provides utilities for measuring sketch memory, ingestion
throughput, and how well scores separate injected anomalies from
background traffic.
"""

import json
import time
from collections import defaultdict
from typing import Any, Dict, Sequence

import numpy as np


def sketch_memory_bytes(detector) -> int:
    """
    Total bytes held by a detector's counter tensors.

    Args:
        detector: Anything with ``get_memory_usage()`` (detector or sketch)

    Returns:
        Memory usage in bytes
    """
    return int(detector.get_memory_usage())


class LatencyTracker:
    """Track per-event ingestion latency and throughput."""

    def __init__(self):
        self.reset()

    def reset(self):
        """Reset latency tracking."""
        self.event_times = []
        self.total_time = 0.0
        self.start_time = None

    def start(self):
        """Start timing."""
        self.start_time = time.perf_counter()

    def stop(self):
        """Stop timing and record."""
        if self.start_time is not None:
            elapsed = time.perf_counter() - self.start_time
            self.event_times.append(elapsed)
            self.total_time += elapsed
            self.start_time = None

    def record_event_time(self, elapsed: float):
        """Manually record one event's processing time."""
        self.event_times.append(elapsed)
        self.total_time += elapsed

    def get_events_per_second(self) -> float:
        if self.total_time == 0:
            return 0.0
        return len(self.event_times) / self.total_time

    def get_avg_time_per_event(self) -> float:
        """Get average time per event in seconds."""
        if not self.event_times:
            return 0.0
        return float(np.mean(self.event_times))

    def get_summary(self) -> Dict:
        """Get summary statistics."""
        if not self.event_times:
            return {}

        return {
            'total_time_s': self.total_time,
            'num_events': len(self.event_times),
            'events_per_second': self.get_events_per_second(),
            'avg_time_per_event_us': self.get_avg_time_per_event() * 1e6,
            'median_time_per_event_us': float(np.median(self.event_times)) * 1e6,
            'std_time_per_event_us': float(np.std(self.event_times)) * 1e6
        }


class DetectionMetrics:
    """Score-quality metrics against ground-truth anomaly labels."""

    @staticmethod
    def roc_auc(scores: Sequence[float], labels: Sequence[int]) -> float:
        """
        Area under the ROC curve (Mann-Whitney U formulation).

        Tied scores share their average rank. Non-finite scores (``nan``,
        ``inf`` from degenerate statistics) are ranked below every finite
        score for ``nan`` and above for ``inf``.

        Args:
            scores: One score per event
            labels: 1 for anomalous events, 0 otherwise

        Returns:
            AUC in [0, 1], or nan when only one class is present
        """
        s = np.asarray(scores, dtype=np.float64)
        y = np.asarray(labels, dtype=bool)
        if s.shape != y.shape:
            raise ValueError(f"scores and labels differ in length: {s.shape} vs {y.shape}")

        n_pos = int(y.sum())
        n_neg = int(y.size - n_pos)
        if n_pos == 0 or n_neg == 0:
            return float('nan')

        s = np.where(np.isnan(s), -np.inf, s)
        order = np.argsort(s, kind='mergesort')
        sorted_s = s[order]
        ranks = np.empty(s.size, dtype=np.float64)

        # average ranks over runs of equal scores
        i = 0
        while i < s.size:
            j = i
            while j + 1 < s.size and sorted_s[j + 1] == sorted_s[i]:
                j += 1
            ranks[order[i:j + 1]] = (i + j) / 2.0 + 1.0
            i = j + 1

        u = ranks[y].sum() - n_pos * (n_pos + 1) / 2.0
        return float(u / (n_pos * n_neg))

    @staticmethod
    def precision_at_k(scores: Sequence[float], labels: Sequence[int], k: int) -> float:
        """
        Fraction of the ``k`` highest-scoring events that are anomalous.
        """
        s = np.asarray(scores, dtype=np.float64)
        y = np.asarray(labels, dtype=bool)
        if k <= 0 or s.size == 0:
            return 0.0
        s = np.where(np.isnan(s), -np.inf, s)
        k = min(int(k), s.size)
        top = np.argsort(-s, kind='mergesort')[:k]
        return float(y[top].mean())


class ExperimentLogger:
    """Log and aggregate experimental results."""

    def __init__(self):
        self.results = defaultdict(list)
        self.metadata = {}

    def log(self, key: str, value: Any):
        """Log a metric value."""
        self.results[key].append(value)

    def log_dict(self, data: Dict):
        """Log multiple metrics at once."""
        for key, value in data.items():
            self.log(key, value)

    def set_metadata(self, key: str, value: Any):
        """Set metadata (non-aggregated info)."""
        self.metadata[key] = value

    def get_summary(self) -> Dict:
        """Get summary statistics for all metrics."""
        summary = {}
        for key, values in self.results.items():
            if not values:
                continue

            # Handle numeric values
            if isinstance(values[0], (int, float, np.number)):
                summary[f'{key}_mean'] = np.mean(values)
                summary[f'{key}_std'] = np.std(values)
                summary[f'{key}_min'] = np.min(values)
                summary[f'{key}_max'] = np.max(values)
            else:
                # Just keep the list for non-numeric
                summary[key] = values

        summary.update(self.metadata)

        return summary

    def save(self, filepath: str):
        """Save results to file."""
        summary = convert_to_native(self.get_summary())

        with open(filepath, 'w') as f:
            json.dump(summary, f, indent=2)


def convert_to_native(obj):
    """Convert numpy types to native Python for JSON serialization."""
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {k: convert_to_native(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_to_native(item) for item in obj]
    return obj
