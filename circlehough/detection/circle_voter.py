"""Circle voting into a per-radius Hough accumulator."""

import math

import numpy as np
from typing import Tuple

from circlehough.config import InvalidParameterError, validate_steps


def round_half_away(values):
    """Round to nearest integer, halves away from zero (numpy rounds halves to even)."""
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def as_edge_image(edge_image) -> np.ndarray:
    """Return the edge map as a read-only 2D array."""
    edges = np.asarray(edge_image)
    if edges.ndim != 2:
        raise InvalidParameterError(f"Edge image must be 2D, got shape {edges.shape}")
    edges = edges.view()
    edges.flags.writeable = False
    return edges


def accumulator_shape(image_shape: Tuple[int, int], radius: int,
                      cell_step: float) -> Tuple[int, int]:
    """
    Accumulator size (rows, cols) for one radius.

    Centers up to ``radius`` pixels outside the image are representable. The
    size is grown where rounding of ``x / cell_step`` could otherwise push the
    largest vote index past the last cell (only possible for ``cell_step > 1``).
    """
    rows, cols = image_shape
    shift = int(round_half_away(radius / cell_step))
    dim_a = int(math.ceil((cols + 2 * radius) / cell_step))
    dim_b = int(math.ceil((rows + 2 * radius) / cell_step))
    if cols > 0:
        dim_a = max(dim_a, int(round_half_away((cols - 1) / cell_step)) + 2 * shift + 1)
    if rows > 0:
        dim_b = max(dim_b, int(round_half_away((rows - 1) / cell_step)) + 2 * shift + 1)
    return dim_b, dim_a


def voting_angles(angle_step: float) -> np.ndarray:
    """Angles in radians from 0 (inclusive) to 360 degrees (exclusive)."""
    count = int(math.ceil(360.0 / angle_step))
    degrees = np.arange(count, dtype=np.float64) * angle_step
    degrees = degrees[degrees < 360.0]
    return np.deg2rad(degrees)


class CircleVoter:
    """Builds the center accumulator for a single circle radius."""

    def __init__(self, max_votes_per_chunk: int = 1 << 22):
        """
        Initialize circle voter.

        Args:
            max_votes_per_chunk: Upper bound on votes materialised at once
        """
        self.max_votes_per_chunk = max_votes_per_chunk

    def vote(self, edge_image: np.ndarray, radius: int, cell_step: float = 1.0,
             angle_step: float = 1.0) -> np.ndarray:
        """
        Cast votes from every foreground pixel.

        Each foreground pixel (x, y) votes for every candidate center at
        distance ``radius`` from it, sampled every ``angle_step`` degrees.

        Args:
            edge_image: Binary edge map, nonzero is foreground
            radius: Circle radius in pixels
            cell_step: Accumulator cell size in pixels
            angle_step: Angular voting resolution in degrees

        Returns:
            int32 accumulator indexed [b + shift, a + shift]
        """
        if isinstance(radius, bool) or not float(radius).is_integer() or radius < 1:
            raise InvalidParameterError(f"radius must be a positive integer, got {radius!r}")
        validate_steps(cell_step, angle_step)
        radius = int(radius)

        edges = as_edge_image(edge_image)
        dim_b, dim_a = accumulator_shape(edges.shape, radius, cell_step)
        shift = int(round_half_away(radius / cell_step))

        accumulator = np.zeros((dim_b, dim_a), dtype=np.int32)

        # row-major scan order
        ys, xs = np.nonzero(edges)
        if len(xs) == 0:
            return accumulator

        phi = voting_angles(angle_step)
        offset_a = round_half_away(radius * np.cos(phi) / cell_step).astype(np.int64)
        offset_b = round_half_away(radius * np.sin(phi) / cell_step).astype(np.int64)

        base_a = round_half_away(xs / cell_step).astype(np.int64) + shift
        base_b = round_half_away(ys / cell_step).astype(np.int64) + shift

        chunk = max(1, self.max_votes_per_chunk // len(phi))
        counts = np.zeros(dim_b * dim_a, dtype=np.int64)
        for start in range(0, len(xs), chunk):
            a = base_a[start:start + chunk, None] - offset_a[None, :]
            b = base_b[start:start + chunk, None] - offset_b[None, :]
            counts += np.bincount((b * dim_a + a).ravel(), minlength=dim_b * dim_a)

        accumulator[:] = counts.reshape(dim_b, dim_a)
        return accumulator


# Utility function mirroring the class API
def hough_circle(edge_image: np.ndarray, radius: int, cell_step: float = 1.0,
                 angle_step: float = 1.0) -> np.ndarray:
    """Build the accumulator for one radius."""
    return CircleVoter().vote(edge_image, radius, cell_step, angle_step)
