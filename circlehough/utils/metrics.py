"""Performance metrics and evaluation."""

from time import time
from typing import Dict, Iterable, Tuple


class PerformanceMetrics:
    """Track performance metrics."""

    def __init__(self):
        self.start_times = {}
        self.durations = {}

    def start_timer(self, name: str):
        """Start timing an operation."""
        self.start_times[name] = time()

    def stop_timer(self, name: str) -> float:
        """Stop timing and return duration in milliseconds."""
        if name not in self.start_times:
            return 0.0
        duration = (time() - self.start_times.pop(name)) * 1000
        self.durations[name] = duration
        return duration

    def get_summary(self) -> Dict[str, float]:
        """Get summary of all timings."""
        return self.durations.copy()


def match_circles(detected: Iterable[Tuple[int, int, int]],
                  ground_truth: Iterable[Tuple[int, int, int]],
                  center_tolerance: float = 2.0,
                  radius_tolerance: int = 1) -> Dict[str, float]:
    """
    Compare detected circles with ground truth.

    Each ground truth circle can be matched by one detection, the first one
    within tolerance in detection order.

    Args:
        detected: Detected (x, y, r) circles
        ground_truth: Expected (x, y, r) circles
        center_tolerance: Max per-axis center offset in pixels
        radius_tolerance: Max radius difference

    Returns:
        Dictionary with precision, recall and f1_score
    """
    remaining = list(ground_truth)
    n_truth = len(remaining)
    true_positives = 0
    false_positives = 0

    for x, y, r in detected:
        for i, (tx, ty, tr) in enumerate(remaining):
            if (abs(x - tx) <= center_tolerance and abs(y - ty) <= center_tolerance
                    and abs(r - tr) <= radius_tolerance):
                del remaining[i]
                true_positives += 1
                break
        else:
            false_positives += 1

    false_negatives = n_truth - true_positives
    precision = true_positives / (true_positives + false_positives) if (true_positives + false_positives) > 0 else 0
    recall = true_positives / (true_positives + false_negatives) if (true_positives + false_negatives) > 0 else 0
    f1 = 2 * (precision * recall) / (precision + recall) if (precision + recall) > 0 else 0

    return {
        'precision': precision,
        'recall': recall,
        'f1_score': f1
    }
