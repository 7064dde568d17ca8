from .metrics import (
    DetectionMetrics,
    ExperimentLogger,
    LatencyTracker,
    convert_to_native,
    sketch_memory_bytes,
)

__all__ = [
    "DetectionMetrics",
    "ExperimentLogger",
    "LatencyTracker",
    "convert_to_native",
    "sketch_memory_bytes",
]
