"""Circle search over a range of radii."""

import logging
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import numpy as np

from circlehough.config import DEFAULT_CONFIG, validate_parameters
from circlehough.detection.circle_aggregator import CircleAggregator, CircleCandidate
from circlehough.detection.circle_voter import CircleVoter, as_edge_image
from circlehough.detection.peak_extractor import PeakExtractor

logger = logging.getLogger(__name__)


class ScanCancelledError(Exception):
    """Raised when a scan is cancelled between two radii."""

    def __init__(self, circles: List[CircleCandidate], radius: int):
        super().__init__(f"Circle scan cancelled before radius {radius}")
        self.circles = circles
        self.radius = radius


class RadiusScanner:
    """
    Detects circles by scanning radii in ascending order.

    For every radius the accumulator is built and peaks are read off it while
    they stay at the level of the first peak of that radius and at or above
    the best value accepted at any earlier radius. A true circle's peak grows
    with the radius up to its real size and drops after it, so weaker peaks
    are not reported at every radius.

    The earlier-radius bound also applies to unrelated circles: a second,
    smaller-vote circle at a later radius is not reported once a stronger
    circle has been accepted.
    """

    def __init__(self, suppression_radius: int = 5, center_tolerance: int = 4,
                 radius_tolerance: int = 1, workers: int = 1):
        """
        Initialize radius scanner.

        Args:
            suppression_radius: Disk radius (accumulator cells) zeroed around each peak
            center_tolerance: Max center offset (pixels) for merging candidates
            radius_tolerance: Radius gap for merging candidates
            workers: Threads building accumulators ahead of the scan
        """
        self.voter = CircleVoter()
        self.extractor = PeakExtractor(suppression_radius)
        self.center_tolerance = center_tolerance
        self.radius_tolerance = radius_tolerance
        self.workers = workers

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'RadiusScanner':
        """Create a scanner from a configuration dictionary."""
        peaks = config.get("peaks", DEFAULT_CONFIG["peaks"])
        merge = config.get("merge", DEFAULT_CONFIG["merge"])
        scanner = config.get("scanner", DEFAULT_CONFIG["scanner"])
        return cls(
            suppression_radius=peaks.get("suppression_radius", 5),
            center_tolerance=merge.get("center_tolerance", 4),
            radius_tolerance=merge.get("radius_tolerance", 1),
            workers=scanner.get("workers", 1),
        )

    def find_circles(self, edge_image: np.ndarray, radius_min: int, radius_max: int,
                     cell_step: float = 1.0, angle_step: float = 1.0,
                     should_cancel: Optional[Callable[[], bool]] = None) -> List[CircleCandidate]:
        """
        Find circles with radii in [radius_min, radius_max].

        Args:
            edge_image: Binary edge map, nonzero is foreground
            radius_min: Smallest radius searched
            radius_max: Largest radius searched
            cell_step: Accumulator cell size in pixels
            angle_step: Angular voting resolution in degrees
            should_cancel: Polled before each radius; returning True stops the scan

        Returns:
            Deduplicated circles in the order they were first found

        Raises:
            InvalidParameterError: On invalid parameters, before any voting
            ScanCancelledError: When ``should_cancel`` asks to stop
        """
        validate_parameters(radius_min, radius_max, cell_step, angle_step)
        edges = as_edge_image(edge_image)
        radii = range(int(radius_min), int(radius_max) + 1)

        aggregator = CircleAggregator(self.center_tolerance, self.radius_tolerance)
        best_value = -1

        accumulators = self._accumulators(edges, radii, cell_step, angle_step)
        try:
            for radius, build in accumulators:
                # checked before the accumulator for this radius is built or awaited
                if should_cancel is not None and should_cancel():
                    logger.info(f"Scan cancelled at r={radius}, {len(aggregator)} circles so far")
                    raise ScanCancelledError(aggregator.circles, radius)

                accumulator = build()
                max_value = self._extract(accumulator, radius, cell_step, best_value, aggregator)
                best_value = max(best_value, max_value)
                logger.debug(f"r={radius} peak={max_value} best={best_value}")
        finally:
            accumulators.close()

        self._log_summary(aggregator.circles)
        return aggregator.circles

    def _extract(self, accumulator: np.ndarray, radius: int, cell_step: float,
                 best_value: int, aggregator: CircleAggregator) -> int:
        """Read peaks for one radius into the aggregator; return the first peak value."""
        max_value = None
        while True:
            point, value = self.extractor.extract_and_suppress(accumulator, radius, cell_step)
            if max_value is None:
                max_value = value
            if value < best_value or value < max_value or value < 1:
                break
            aggregator.merge(CircleCandidate(point[0], point[1], radius, value))
        return max_value

    def _accumulators(self, edges: np.ndarray, radii: range, cell_step: float,
                      angle_step: float) -> Iterator[Tuple[int, Callable[[], np.ndarray]]]:
        """
        Yield (radius, build) in ascending radius order.

        ``build()`` returns the accumulator for that radius. Serially it votes
        only when called; with workers it waits for the look-ahead result.
        """
        if self.workers <= 1:
            for radius in radii:
                yield radius, partial(self.voter.vote, edges, radius, cell_step, angle_step)
            return

        # at most `workers` accumulators are in flight
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            pending = deque()
            remaining = iter(radii)

            def submit_next():
                radius = next(remaining, None)
                if radius is not None:
                    pending.append((radius, executor.submit(
                        self.voter.vote, edges, radius, cell_step, angle_step)))

            for _ in range(self.workers):
                submit_next()
            try:
                while pending:
                    radius, future = pending.popleft()
                    submit_next()
                    yield radius, future.result
            finally:
                for _, future in pending:
                    future.cancel()

    def accumulator(self, edge_image: np.ndarray, radius: int, cell_step: float = 1.0,
                    angle_step: float = 1.0) -> np.ndarray:
        """Raw accumulator for one radius, for inspection."""
        return self.voter.vote(edge_image, radius, cell_step, angle_step)

    @staticmethod
    def _log_summary(circles: List[CircleCandidate]):
        logger.info(f"{len(circles)} circles found")
        for i, circle in enumerate(circles, start=1):
            logger.info(f"#{i} center: ({circle.x},{circle.y}), radius={circle.r}, votes={circle.v}")


# Utility function mirroring the class API
def find_circles(edge_image: np.ndarray, radius_min: int, radius_max: int,
                 cell_step: float = 1.0, angle_step: float = 1.0) -> List[CircleCandidate]:
    """Find circles with a default-configured scanner."""
    return RadiusScanner().find_circles(edge_image, radius_min, radius_max, cell_step, angle_step)
