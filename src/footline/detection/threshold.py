"""
Binary thresholding of intensity images.
"""

import cv2
import numpy as np


def threshold(
    image: np.ndarray, out: np.ndarray, threshold: float, down: bool = False
) -> np.ndarray:
    """
    Create a binary image from an intensity image.

    Args:
        image: Input intensity image
        out: Output uint8 buffer, same shape as image
        threshold: Threshold value
        down: If False, pixels > threshold are 1 and the rest 0.
              If True, pixels <= threshold are 1 and the rest 0.

    Returns:
        out, holding 0/1 values
    """
    if image.size == 0:
        return out
    mode = cv2.THRESH_BINARY_INV if down else cv2.THRESH_BINARY
    _, binary = cv2.threshold(image.astype(np.float32, copy=False), threshold, 1, mode)
    out[...] = binary
    return out
