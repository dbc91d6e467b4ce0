"""Peak extraction with non-maximum suppression on a Hough accumulator."""

import cv2
import numpy as np
from typing import List, Tuple

from circlehough.detection.circle_voter import round_half_away


class PeakExtractor:
    """Finds accumulator maxima one at a time, blanking each one after it is read."""

    def __init__(self, suppression_radius: int = 5):
        self.suppression_radius = suppression_radius

    def extract_and_suppress(self, accumulator: np.ndarray, radius: int,
                             cell_step: float) -> Tuple[Tuple[int, int], int]:
        """
        Read the global maximum and zero a disk around it.

        Ties go to the first cell in row-major scan order. The accumulator is
        modified in place, so repeated calls return non-increasing values.

        Args:
            accumulator: int32 accumulator from CircleVoter (modified)
            radius: Radius the accumulator was built for
            cell_step: Cell size the accumulator was built with

        Returns:
            ((x, y) center in image pixels, vote value)
        """
        b, a = divmod(int(np.argmax(accumulator)), accumulator.shape[1])
        value = int(accumulator[b, a])

        cv2.circle(accumulator, (a, b), self.suppression_radius, 0, -1)

        return self.to_image_point(a, b, radius, cell_step), value

    @staticmethod
    def to_image_point(a: int, b: int, radius: int, cell_step: float) -> Tuple[int, int]:
        """Convert accumulator cell indices to image coordinates."""
        shift = round_half_away(radius / cell_step)
        x = int(round_half_away((a - shift) * cell_step))
        y = int(round_half_away((b - shift) * cell_step))
        return x, y

    def extract_peaks(self, accumulator: np.ndarray, radius: int, cell_step: float,
                      count: int) -> List[Tuple[Tuple[int, int], int]]:
        """Extract up to ``count`` peaks, stopping once the accumulator holds no votes."""
        peaks = []
        for _ in range(count):
            point, value = self.extract_and_suppress(accumulator, radius, cell_step)
            if value < 1:
                break
            peaks.append((point, value))
        return peaks
