"""Shared fixtures: synthetic edge images."""

import numpy as np
import pytest
from skimage.draw import circle_perimeter


def draw_circle_edges(shape, circles, half=False):
    """Edge image with the outline of each (x, y, r) circle, clipped to the image."""
    edges = np.zeros(shape, dtype=np.uint8)
    for x, y, r in circles:
        rr, cc = circle_perimeter(y, x, r, shape=shape)
        if half:
            keep = cc >= x
            rr, cc = rr[keep], cc[keep]
        edges[rr, cc] = 255
    return edges


@pytest.fixture
def single_circle_edges():
    """One circle, center (50, 50), radius 20."""
    return draw_circle_edges((100, 100), [(50, 50, 20)])


@pytest.fixture
def two_circle_edges():
    """Two equal circles far enough apart that their votes never overlap."""
    return draw_circle_edges((80, 170), [(40, 40, 20), (130, 40, 20)])


@pytest.fixture
def make_edges():
    return draw_circle_edges
