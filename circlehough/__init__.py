"""
circlehough - circle detection in binary edge images

Votes per radius into a center accumulator, reads peaks off it and merges
detections of the same circle found at neighbouring radii.
"""

from .config import DEFAULT_CONFIG, InvalidParameterError, load_config
from .core import CircleProcessor
from .detection import CircleCandidate, RadiusScanner, ScanCancelledError

__all__ = ['CircleProcessor', 'RadiusScanner', 'CircleCandidate', 'DEFAULT_CONFIG',
           'InvalidParameterError', 'ScanCancelledError', 'load_config']
__version__ = '1.0.0'
