"""
Configuration management for circlehough
"""

import copy
import math
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


DEFAULT_CONFIG = {
    "hough": {
        "radius_min": 10,
        "radius_max": 35,
        "cell_step": 1.0,
        "angle_step": 1.0
    },
    "peaks": {
        "suppression_radius": 5
    },
    "merge": {
        "center_tolerance": 4,
        "radius_tolerance": 1
    },
    "scanner": {
        "workers": 1
    }
}


class InvalidParameterError(ValueError):
    """Raised when detection parameters are rejected before any voting."""


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay ``overrides`` on ``base`` (modified in place)."""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_config(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration, overlaying a YAML file on the defaults.

    Args:
        config_path: Path to a YAML file (optional)

    Returns:
        New configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is None:
        return config

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    with open(path, 'r') as f:
        overrides = yaml.safe_load(f)

    if overrides is None:
        return config
    if not isinstance(overrides, dict):
        raise InvalidParameterError(f"Config must be a mapping, got {type(overrides).__name__}")

    return merge_config(config, overrides)


def validate_parameters(radius_min: int, radius_max: int,
                        cell_step: float, angle_step: float):
    """Reject parameter sets that would divide by zero or loop forever."""
    for name, value in (("radius_min", radius_min), ("radius_max", radius_max)):
        if isinstance(value, bool) or not float(value).is_integer():
            raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if radius_min < 1:
        raise InvalidParameterError(f"radius_min must be >= 1, got {radius_min}")
    if radius_min > radius_max:
        raise InvalidParameterError(
            f"radius_min ({radius_min}) must not exceed radius_max ({radius_max})")
    validate_steps(cell_step, angle_step)


def validate_steps(cell_step: float, angle_step: float):
    """Check the accumulator cell size and the voting angle step."""
    if not math.isfinite(cell_step) or not cell_step > 0:
        raise InvalidParameterError(f"cell_step must be finite and > 0, got {cell_step}")
    if not math.isfinite(angle_step) or not 0 < angle_step <= 360:
        raise InvalidParameterError(f"angle_step must be in (0, 360], got {angle_step}")
