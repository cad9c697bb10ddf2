"""
footline - Subimage Foot-of-Norm Line Detector

Detects straight lines in grayscale images with a Hough transform that is
parameterized by the foot of the normal and computed independently inside
a grid of subimages.
"""

__version__ = "0.1.0"

from .core.config import DetectorSettings
from .core.detector import LineDetector
from .core.errors import ConfigurationError, FootlineError, ShapeMismatchError
from .core.result import LineParametric

__all__ = [
    "LineDetector",
    "LineParametric",
    "DetectorSettings",
    "FootlineError",
    "ConfigurationError",
    "ShapeMismatchError",
    "__version__",
]
