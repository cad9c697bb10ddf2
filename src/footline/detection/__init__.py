"""Detection pipeline components for footline."""

from .gradient import ImageGradient, PrewittGradient, SobelGradient, ThreeGradient, create_gradient
from .hough_foot import HoughTransformFootOfNorm
from .local_max import LocalMaxExtractor, NonMaxExtractor
from .threshold import threshold
from .tiler import SubimageTiler, Tile

__all__ = [
    "ImageGradient",
    "SobelGradient",
    "PrewittGradient",
    "ThreeGradient",
    "create_gradient",
    "HoughTransformFootOfNorm",
    "LocalMaxExtractor",
    "NonMaxExtractor",
    "threshold",
    "SubimageTiler",
    "Tile",
]
