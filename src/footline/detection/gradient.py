"""
Image gradient operators.

Any object with a ``compute(image) -> (deriv_x, deriv_y)`` method can be
plugged into the LineDetector. The implementations here are thin wrappers
around OpenCV filters that always return float32 derivatives.
"""

from typing import Protocol, runtime_checkable

import cv2
import numpy as np

from ..core.errors import ConfigurationError


@runtime_checkable
class ImageGradient(Protocol):
    """Computes horizontal and vertical image derivatives."""

    def compute(self, image: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """
        Args:
            image: 2D grayscale image

        Returns:
            (deriv_x, deriv_y), each with the same shape as image
        """
        ...


class SobelGradient:
    """3x3 Sobel operator."""

    name = "sobel"

    def __init__(self, ksize: int = 3):
        self.ksize = ksize

    def compute(self, image: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        deriv_x = cv2.Sobel(image, cv2.CV_32F, 1, 0, ksize=self.ksize)
        deriv_y = cv2.Sobel(image, cv2.CV_32F, 0, 1, ksize=self.ksize)
        return deriv_x, deriv_y


class _KernelGradient:
    """Gradient from a fixed x-derivative kernel and its transpose."""

    name = ""
    kernel_x = np.zeros((1, 1), dtype=np.float32)

    def compute(self, image: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        deriv_x = cv2.filter2D(image, cv2.CV_32F, self.kernel_x)
        deriv_y = cv2.filter2D(image, cv2.CV_32F, self.kernel_x.T)
        return deriv_x, deriv_y


class PrewittGradient(_KernelGradient):
    """3x3 Prewitt operator."""

    name = "prewitt"
    kernel_x = np.array([[-1, 0, 1], [-1, 0, 1], [-1, 0, 1]], dtype=np.float32)


class ThreeGradient(_KernelGradient):
    """Central difference: I(x+1) - I(x-1)."""

    name = "three"
    kernel_x = np.array([[-1, 0, 1]], dtype=np.float32)


GRADIENTS = {
    SobelGradient.name: SobelGradient,
    PrewittGradient.name: PrewittGradient,
    ThreeGradient.name: ThreeGradient,
}


def create_gradient(name: str) -> ImageGradient:
    """
    Create a gradient operator by name.

    Raises:
        ConfigurationError: If the name is not a known operator
    """
    try:
        return GRADIENTS[name.lower()]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown gradient '{name}', expected one of: {', '.join(sorted(GRADIENTS))}"
        ) from None
