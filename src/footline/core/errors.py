"""
Exception types raised by footline.
"""


class FootlineError(Exception):
    """Base class for all footline errors."""


class ConfigurationError(FootlineError, ValueError):
    """Detector configuration is invalid. Raised at construction time."""


class ShapeMismatchError(FootlineError, ValueError):
    """Two buffers that must share a shape do not."""
