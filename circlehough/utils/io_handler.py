"""I/O handling for edge images and JSON output."""

import cv2
import json
import numpy as np
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from circlehough.detection.circle_aggregator import CircleCandidate


class JSONWriter:
    """Write detection results to JSON."""

    @staticmethod
    def save_results(output_dict: Dict, output_path: str, indent: int = 2):
        """Save results to JSON file."""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(output_dict, f, indent=indent)

    @staticmethod
    def load_results(input_path: str) -> Dict:
        """Load results from JSON file."""
        with open(input_path, 'r') as f:
            return json.load(f)


def circles_to_dicts(circles: Iterable[CircleCandidate]) -> List[Dict[str, int]]:
    """Convert circles to plain dictionaries."""
    return [circle.to_dict() for circle in circles]


def save_image(image: np.ndarray, output_path: str):
    """Save image to file."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(output_path, image)


def load_edge_image(image_path: str) -> Optional[np.ndarray]:
    """Load an edge image as a single-channel array."""
    return cv2.imread(str(image_path), cv2.IMREAD_GRAYSCALE)
