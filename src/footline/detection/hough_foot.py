"""
Hough transform for lines parameterized by the foot of the normal.

Each edge pixel, together with its gradient, defines a line through that
pixel perpendicular to the gradient. The pixel votes for the point on that
line closest to the image center (the foot of the normal). Collinear edge
pixels share the same foot, so lines show up as peaks in a histogram that
has the same dimensions as the image.

See Section 9.3 of E.R. Davies, "Machine Vision Theory Algorithms
Practicalities," 3rd Ed. 2005.
"""

import logging

import numpy as np

from ..core.errors import ShapeMismatchError
from ..core.image import ImageBuffer
from ..core.result import LineParametric
from .local_max import LocalMaxExtractor

logger = logging.getLogger(__name__)


class HoughTransformFootOfNorm:
    """
    Foot-of-norm Hough transform over a single image or tile.

    The histogram is overwritten on each transform() call, so transform()
    must run immediately before extract_lines(). An instance must not be
    shared between threads.

    Usage:
        alg = HoughTransformFootOfNorm(NonMaxExtractor(), min_distance_from_origin=5)
        alg.transform(deriv_x, deriv_y, binary)
        lines = alg.extract_lines()
    """

    def __init__(
        self,
        extractor: LocalMaxExtractor,
        min_distance_from_origin: float,
        local_max_radius: int = 5,
        min_counts: float = 5,
    ):
        """
        Args:
            extractor: Finds peaks in the vote histogram
            min_distance_from_origin: Peaks closer than this to the origin are
                ignored. Lines through the origin have an unstable foot.
            local_max_radius: Neighborhood radius passed to the extractor
            min_counts: Minimum votes passed to the extractor
        """
        self.extractor = extractor
        self.min_distance_from_origin = min_distance_from_origin
        self.local_max_radius = local_max_radius
        self.min_counts = min_counts

        self.transform_image = ImageBuffer(np.float32)
        self.origin_x = 0
        self.origin_y = 0
        self.found_votes: list[float] = []

    def transform(
        self, deriv_x: ImageBuffer, deriv_y: ImageBuffer, binary: ImageBuffer
    ) -> None:
        """
        Vote for the foot of the normal of every edge pixel.

        Args:
            deriv_x: Image derivative along x
            deriv_y: Image derivative along y
            binary: Edge mask, nonzero where a pixel is an edge
        """
        if not (deriv_x.shape == deriv_y.shape == binary.shape):
            raise ShapeMismatchError(
                f"Shapes differ: deriv_x {deriv_x.shape}, deriv_y {deriv_y.shape}, "
                f"binary {binary.shape}"
            )

        height, width = binary.shape
        self.transform_image.reshape(width, height)
        self.transform_image.fill(0)
        self.origin_x = width // 2
        self.origin_y = height // 2

        ys, xs = np.nonzero(binary.data)
        if xs.size == 0:
            return

        gx = deriv_x.data[ys, xs].astype(np.float64)
        gy = deriv_y.data[ys, xs].astype(np.float64)
        norm2 = gx * gx + gy * gy
        valid = norm2 > 0
        gx, gy, norm2 = gx[valid], gy[valid], norm2[valid]
        xc = xs[valid] - self.origin_x
        yc = ys[valid] - self.origin_y

        # Multiply before dividing so integer feet come out exact
        dot = xc * gx + yc * gy
        foot_x = np.trunc(gx * dot / norm2).astype(np.int64) + self.origin_x
        foot_y = np.trunc(gy * dot / norm2).astype(np.int64) + self.origin_y

        inside = (foot_x >= 0) & (foot_x < width) & (foot_y >= 0) & (foot_y < height)
        np.add.at(self.transform_image.data, (foot_y[inside], foot_x[inside]), 1)

    def extract_lines(self) -> list[LineParametric]:
        """
        Find lines from peaks in the last transform.

        Returns:
            Lines in the coordinate frame of the transformed image, in the
            extractor's order. The line point is the foot of the normal.
        """
        peaks = self.extractor.find_local_maxima(
            self.transform_image.data, self.local_max_radius, self.min_counts
        )

        lines = []
        self.found_votes = []
        for x, y, count in peaks:
            x0 = x - self.origin_x
            y0 = y - self.origin_y
            # The foot at the origin itself has no defined slope
            if (x0 == 0 and y0 == 0) or np.hypot(x0, y0) < self.min_distance_from_origin:
                continue
            lines.append(LineParametric(x, y, -y0, x0, votes=count))
            self.found_votes.append(count)

        logger.debug(
            f"Extracted {len(lines)} lines from {len(peaks)} peaks in "
            f"{self.transform_image.width}x{self.transform_image.height} transform"
        )
        return lines
