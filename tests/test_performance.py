"""Performance tests."""

import time

import numpy as np
from circlehough.detection.circle_voter import CircleVoter
from circlehough.detection.radius_scanner import RadiusScanner


class TestPerformance:
    """Test performance benchmarks."""

    def test_voting_speed(self, make_edges):
        """Test one radius on a 480x640 edge image."""
        edges = make_edges((480, 640), [(200, 200, 60), (450, 300, 90)])

        start = time.time()
        CircleVoter().vote(edges, 60, 1.0, 1.0)
        duration = (time.time() - start) * 1000

        assert duration < 2000

    def test_scan_speed(self, single_circle_edges):
        """Test a short radius scan."""
        start = time.time()
        RadiusScanner().find_circles(single_circle_edges, 15, 25, 1.0, 1.0)
        duration = (time.time() - start) * 1000

        assert duration < 5000
