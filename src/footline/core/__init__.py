"""Core components for footline."""

from .config import Config, DetectorSettings
from .detector import LineDetector
from .errors import ConfigurationError, FootlineError, ShapeMismatchError
from .image import ImageBuffer
from .result import LineParametric

__all__ = [
    "Config",
    "DetectorSettings",
    "LineDetector",
    "ImageBuffer",
    "LineParametric",
    "FootlineError",
    "ConfigurationError",
    "ShapeMismatchError",
]
