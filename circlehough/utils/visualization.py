"""Accumulator scaling for debugging and display."""

import numpy as np


def scale_accumulator(accumulator: np.ndarray) -> np.ndarray:
    """Scale vote counts to [0, 1] by the accumulator maximum."""
    scaled = accumulator.astype(np.float32)
    max_value = scaled.max() if scaled.size else 0.0
    if max_value > 0:
        scaled /= max_value
    return scaled


def accumulator_to_image(accumulator: np.ndarray) -> np.ndarray:
    """8-bit grayscale rendering of an accumulator, brightest at the maximum."""
    return np.round(scale_accumulator(accumulator) * 255).astype(np.uint8)
