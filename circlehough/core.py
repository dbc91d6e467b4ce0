"""
circlehough Core Processor
Main entry point for circle detection on edge images
"""

import logging
from typing import Dict, Any, Union
from datetime import datetime
from pathlib import Path
import numpy as np
import time

from circlehough.config import load_config, merge_config
from circlehough.detection.radius_scanner import RadiusScanner
from circlehough.utils.io_handler import circles_to_dicts, load_edge_image
from circlehough.utils.metrics import PerformanceMetrics

logger = logging.getLogger(__name__)


class CircleProcessor:
    """Runs the radius scan on one edge image and packages the result"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize circle processor

        Args:
            config: Configuration dictionary (optional, defaults used otherwise)
        """
        self.config = merge_config(load_config(), config or {})
        self.version = "1.0.0"
        self.scanner = RadiusScanner.from_config(self.config)
        self.metrics = PerformanceMetrics()

    def process_frame(self, edge_input: Union[str, np.ndarray]) -> Dict[str, Any]:
        """
        Detect circles in a single edge image

        Args:
            edge_input: Path to edge image file or 2D numpy array

        Returns:
            Dictionary containing detected circles and processing metadata
        """
        start_time = time.time()

        if isinstance(edge_input, (str, Path)):
            edges = load_edge_image(edge_input)
            frame_id = Path(edge_input).stem
        else:
            edges = edge_input
            frame_id = f"frame_{int(time.time())}"

        if edges is None:
            raise ValueError(f"Failed to load edge image from {edge_input}")

        hough = self.config["hough"]
        try:
            self.metrics.start_timer("scan")
            circles = self.scanner.find_circles(
                edges,
                hough["radius_min"],
                hough["radius_max"],
                cell_step=hough["cell_step"],
                angle_step=hough["angle_step"]
            )
            scan_time = self.metrics.stop_timer("scan")

            edges = np.asarray(edges)
            processing_time = (time.time() - start_time) * 1000

            return {
                "system": "circlehough",
                "version": self.version,
                "timestamp": datetime.now().isoformat(),
                "frame_id": frame_id,
                "status": "success",
                "circles": circles_to_dicts(circles),
                "circles_detected": len(circles),
                "parameters": dict(hough),
                "processing_metadata": {
                    "processing_time_ms": round(processing_time, 2),
                    "scan_time_ms": round(scan_time, 2),
                    "image_size": {
                        "width": int(edges.shape[1]),
                        "height": int(edges.shape[0])
                    },
                    "foreground_pixels": int(np.count_nonzero(edges)),
                    "errors": []
                }
            }

        except Exception as e:
            logger.error(f"Circle detection failed for {frame_id}: {e}")
            return {
                "system": "circlehough",
                "version": self.version,
                "timestamp": datetime.now().isoformat(),
                "frame_id": frame_id,
                "status": "failed",
                "circles": [],
                "circles_detected": 0,
                "processing_metadata": {
                    "processing_time_ms": (time.time() - start_time) * 1000,
                    "errors": [str(e)]
                }
            }
