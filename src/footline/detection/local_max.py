"""
Local maximum search over a 2D histogram.
"""

from typing import Protocol, runtime_checkable

import cv2
import numpy as np


@runtime_checkable
class LocalMaxExtractor(Protocol):
    """Finds peaks in a 2D array."""

    def find_local_maxima(
        self, histogram: np.ndarray, radius: int, min_count: float
    ) -> list[tuple[int, int, float]]:
        """
        Args:
            histogram: 2D array of counts
            radius: Neighborhood radius a peak must dominate
            min_count: Smallest value a peak may have

        Returns:
            List of (x, y, count)
        """
        ...


class NonMaxExtractor:
    """
    Non-maximum suppression over a square (2r+1)x(2r+1) neighborhood.

    A cell is a peak when its value is at least min_count and it is >= every
    other cell in its neighborhood (> when strict). Cells outside the array
    are ignored. Peaks are returned in row-major order.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._kernels: dict[int, np.ndarray] = {}

    def _neighbor_kernel(self, radius: int) -> np.ndarray:
        kernel = self._kernels.get(radius)
        if kernel is None:
            size = 2 * radius + 1
            kernel = np.ones((size, size), dtype=np.uint8)
            kernel[radius, radius] = 0
            self._kernels[radius] = kernel
        return kernel

    def find_local_maxima(
        self, histogram: np.ndarray, radius: int, min_count: float
    ) -> list[tuple[int, int, float]]:
        if histogram.size == 0:
            return []

        values = histogram.astype(np.float32, copy=False)
        # Max over the neighborhood with the center excluded
        neighbors = cv2.dilate(values, self._neighbor_kernel(radius))

        if self.strict:
            peaks = values > neighbors
        else:
            peaks = values >= neighbors
        peaks &= values >= min_count

        ys, xs = np.nonzero(peaks)
        return [(int(x), int(y), float(values[y, x])) for y, x in zip(ys, xs)]
