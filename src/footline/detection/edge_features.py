"""
Edge features computed from an image gradient.

Converts the two derivative images into an edge intensity, a gradient
angle, a direction discretized into four buckets, and finally a thinned
intensity map where only ridge pixels along the gradient survive.

Direction buckets (gradient axis, image y pointing down):
     0  horizontal   (1, 0)
     1  diagonal     (1, 1)
     2  vertical     (0, 1)
    -1  diagonal     (1, -1)
"""

import numpy as np

# (dx, dy) offset of the neighbors compared against for each bucket
NEIGHBOR_OFFSETS = {
    0: (1, 0),
    1: (1, 1),
    2: (0, 1),
    -1: (1, -1),
}


def intensity_abs(deriv_x: np.ndarray, deriv_y: np.ndarray, out: np.ndarray) -> np.ndarray:
    """Edge intensity as |dx| + |dy|."""
    np.add(np.abs(deriv_x), np.abs(deriv_y), out=out)
    return out


def intensity_euclidean(
    deriv_x: np.ndarray, deriv_y: np.ndarray, out: np.ndarray
) -> np.ndarray:
    """Edge intensity as sqrt(dx^2 + dy^2)."""
    np.hypot(deriv_x, deriv_y, out=out)
    return out


def direction(deriv_x: np.ndarray, deriv_y: np.ndarray, out: np.ndarray) -> np.ndarray:
    """
    Gradient angle atan(dy/dx) in [-pi/2, pi/2].

    Pixels with dx == 0 get pi/2.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        angle = np.arctan(deriv_y / deriv_x)
    angle[deriv_x == 0] = np.pi / 2
    out[...] = angle
    return out


def discretize_direction4(angle: np.ndarray, out: np.ndarray) -> np.ndarray:
    """
    Discretize angles in [-pi/2, pi/2] into the buckets -1, 0, 1, 2.

    Each bucket spans pi/4 centered on its axis, rounding half up;
    -pi/2 and pi/2 both map to 2.
    """
    buckets = np.floor(angle / (np.pi / 4) + 0.5).astype(np.int8)
    buckets[buckets == -2] = 2
    out[...] = buckets
    return out


def non_max_suppression4(
    intensity: np.ndarray, direction: np.ndarray, out: np.ndarray
) -> np.ndarray:
    """
    Zero every pixel that is not a local maximum along its gradient.

    A pixel survives if it is >= both neighbors along the axis of its
    direction bucket. Border pixels are always zero.

    Args:
        intensity: Edge intensity
        direction: Direction buckets from discretize_direction4
        out: Output buffer, same shape as intensity. Must not alias intensity.
    """
    out.fill(0)
    height, width = intensity.shape
    if height < 3 or width < 3:
        return out

    center = intensity[1:-1, 1:-1]
    buckets = direction[1:-1, 1:-1]
    keep = np.zeros(center.shape, dtype=bool)

    for bucket, (dx, dy) in NEIGHBOR_OFFSETS.items():
        forward = intensity[1 + dy : height - 1 + dy, 1 + dx : width - 1 + dx]
        backward = intensity[1 - dy : height - 1 - dy, 1 - dx : width - 1 - dx]
        keep |= (buckets == bucket) & (center >= forward) & (center >= backward)

    out[1:-1, 1:-1] = np.where(keep, center, 0)
    return out
