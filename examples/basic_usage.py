"""Basic usage example for circlehough."""

import sys

from circlehough.config import load_config
from circlehough.detection.radius_scanner import RadiusScanner
from circlehough.utils.io_handler import JSONWriter, circles_to_dicts, load_edge_image, save_image
from circlehough.utils.logger import setup_logger
from circlehough.utils.visualization import accumulator_to_image


def main():
    """Run the radius scan on one edge image."""
    setup_logger()

    image_path = sys.argv[1] if len(sys.argv) > 1 else "test_data/edges/two_circles.png"
    config_path = sys.argv[2] if len(sys.argv) > 2 else None

    edges = load_edge_image(image_path)
    if edges is None:
        print(f"Error: Could not load edge image from {image_path}")
        return

    config = load_config(config_path)
    hough = config["hough"]
    scanner = RadiusScanner.from_config(config)

    print(f"Scanning radii {hough['radius_min']}..{hough['radius_max']}...")
    circles = scanner.find_circles(edges, hough["radius_min"], hough["radius_max"],
                                   hough["cell_step"], hough["angle_step"])
    print(f"Detected {len(circles)} circles")

    # accumulator of the strongest circle, for inspection
    if circles:
        strongest = max(circles, key=lambda c: c.v)
        accumulator = scanner.accumulator(edges, strongest.r, hough["cell_step"], hough["angle_step"])
        save_image(accumulator_to_image(accumulator), "output/accumulator.png")

    JSONWriter.save_results({"circles": circles_to_dicts(circles)}, "output/circles.json")
    print("Results saved to output/")


if __name__ == "__main__":
    main()
