"""Hough circle voting, peak extraction and cross-radius merging."""

from .circle_aggregator import CircleAggregator, CircleCandidate
from .circle_voter import CircleVoter
from .peak_extractor import PeakExtractor
from .radius_scanner import RadiusScanner, ScanCancelledError

__all__ = ['CircleAggregator', 'CircleCandidate', 'CircleVoter', 'PeakExtractor',
           'RadiusScanner', 'ScanCancelledError']
