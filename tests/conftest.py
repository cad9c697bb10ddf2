"""
Pytest fixtures for footline tests.

Provides common test fixtures including:
- Test detector configuration and a detector built from it
- Synthetic step edge images
- A helper for comparing detected lines to ground truth
"""

import math

import numpy as np
import pytest

from footline.core.detector import LineDetector


@pytest.fixture
def detector_config():
    """Detector configuration dictionary."""
    return {
        "local_max_radius": 3,
        "min_counts": 5,
        "min_distance_from_origin": 5,
        "threshold_edge": 30.0,
        "horizontal_divisions": 2,
        "vertical_divisions": 2,
        "gradient": "sobel",
        "strict_local_max": False,
        "workers": 1,
    }


@pytest.fixture
def detector(detector_config):
    """LineDetector built from detector_config."""
    return LineDetector(detector_config)


@pytest.fixture
def blank_image():
    """Uniform 100x100 image."""
    return np.full((100, 100), 80, dtype=np.uint8)


@pytest.fixture
def vertical_edge_image():
    """100x100 image with a step edge between columns 49 and 50."""
    return generate_step_edge(100, 100, lambda x, y: x >= 50)


@pytest.fixture
def offset_vertical_edge_image():
    """100x100 image with a step edge between columns 29 and 30."""
    return generate_step_edge(100, 100, lambda x, y: x >= 30)


@pytest.fixture
def horizontal_edge_image():
    """120x90 image with a step edge between rows 29 and 30."""
    return generate_step_edge(120, 90, lambda x, y: y >= 30)


@pytest.fixture
def diagonal_edge_image():
    """100x100 image with a 45 degree step edge along x - y = 20.5."""
    return generate_step_edge(100, 100, lambda x, y: x - y > 20)


def generate_step_edge(width: int, height: int, bright, low: int = 20, high: int = 220) -> np.ndarray:
    """
    Generate a two-level image.

    Args:
        width: Image width
        height: Image height
        bright: Function of (x, y) index arrays, True where the image is bright
        low: Dark level
        high: Bright level

    Returns:
        uint8 grayscale image
    """
    ys, xs = np.mgrid[0:height, 0:width]
    img = np.full((height, width), low, dtype=np.uint8)
    img[bright(xs, ys)] = high
    return img


@pytest.fixture
def step_edge():
    """Factory for custom step edge images, see generate_step_edge."""
    return generate_step_edge


@pytest.fixture
def line_matcher():
    """Ground-truth comparison helper, see matches_line."""
    return matches_line


def matches_line(line, point, angle, max_distance=1.5, max_angle=math.radians(3)) -> bool:
    """
    Check a detected line against ground truth.

    Args:
        line: Detected LineParametric
        point: (x, y) on the true line
        angle: True direction in radians
        max_distance: Allowed distance of point from the detected line
        max_angle: Allowed angle difference
    """
    diff = abs(line.angle - angle % math.pi)
    diff = min(diff, math.pi - diff)
    return diff <= max_angle and line.distance(*point) <= max_distance
