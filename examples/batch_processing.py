"""Batch circle detection over a directory of edge images."""

import sys
from pathlib import Path

from circlehough.config import load_config
from circlehough.core import CircleProcessor
from circlehough.utils.io_handler import JSONWriter
from circlehough.utils.logger import create_session_log_file, setup_logger


def process_directory(input_dir: str, output_dir: str, config_path: str = None):
    """Process every PNG edge image in a directory."""
    processor = CircleProcessor(load_config(config_path))

    image_files = sorted(Path(input_dir).glob("*.png"))
    print(f"Found {len(image_files)} edge images")

    for i, image_path in enumerate(image_files, start=1):
        print(f"Processing {i}/{len(image_files)}: {image_path.name}")
        try:
            result = processor.process_frame(str(image_path))
        except ValueError as e:
            print(f"  skipped: {e}")
            continue

        output_path = Path(output_dir) / f"{image_path.stem}_circles.json"
        JSONWriter.save_results(result, str(output_path))
        print(f"  {result['status']}: {result['circles_detected']} circles")


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python batch_processing.py <input_dir> <output_dir> [config.yaml]")
        sys.exit(1)

    setup_logger(log_file=create_session_log_file())
    process_directory(sys.argv[1], sys.argv[2], sys.argv[3] if len(sys.argv) > 3 else None)
