"""
Main line detector orchestrator.

Coordinates the detection pipeline:
1. Image gradient
2. Edge intensity and discretized direction
3. Non-maximum suppression
4. Thresholding into a binary edge image
5. Foot-of-norm Hough transform inside each subimage
6. Conversion back to full image coordinates
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import cv2
import numpy as np

from ..detection import edge_features
from ..detection.gradient import ImageGradient, create_gradient
from ..detection.hough_foot import HoughTransformFootOfNorm
from ..detection.local_max import LocalMaxExtractor, NonMaxExtractor
from ..detection.threshold import threshold
from ..detection.tiler import SubimageTiler, Tile
from .config import DetectorSettings
from .errors import ConfigurationError, ShapeMismatchError
from .image import ImageBuffer
from .result import LineParametric

logger = logging.getLogger(__name__)


class LineDetector:
    """
    Detects lines by breaking the image into subimages for improved precision.

    Inside each subimage a foot-of-norm Hough transform is computed
    independently. Lines crossing a subimage boundary can be reported once
    per subimage they appear in; duplicates are not merged.

    Blurring the image first often helps. Expect a few false positives
    when the parameters are tuned to find all of the obvious lines.

    Usage:
        detector = LineDetector(config['detector'])
        lines = detector.detect(gray)
    """

    def __init__(
        self,
        config: dict[str, Any] | DetectorSettings,
        gradient: ImageGradient | None = None,
        extractor: LocalMaxExtractor | None = None,
    ):
        """
        Initialize detector with configuration.

        Args:
            config: Detector settings, or a configuration dictionary with keys:
                - local_max_radius: Peak neighborhood radius in transform space. Try 5.
                - min_counts: Minimum votes for a line. Try 5.
                - min_distance_from_origin: Ignore lines this close to a tile center. Try 5.
                - threshold_edge: Edge intensity threshold. Try 30.
                - horizontal_divisions: Number of tile columns
                - vertical_divisions: Number of tile rows
                - gradient: Gradient operator name
                - strict_local_max: Peaks must be strictly greater than neighbors
                - workers: Threads used for tiles
            gradient: Gradient operator, overrides config['gradient']
            extractor: Local maximum finder used in transform space

        Raises:
            ConfigurationError: If any parameter is invalid
        """
        if isinstance(config, DetectorSettings):
            self.settings = config
        else:
            self.settings = DetectorSettings.from_dict(dict(config))

        if gradient is None:
            gradient = create_gradient(self.settings.gradient)
        self.gradient = gradient
        if not isinstance(self.gradient, ImageGradient):
            raise ConfigurationError(f"{self.gradient!r} has no compute(image) method")

        self.extractor = extractor or NonMaxExtractor(strict=self.settings.strict_local_max)
        self.tiler = SubimageTiler(
            self.settings.vertical_divisions, self.settings.horizontal_divisions
        )
        self._transform = self._create_transform()

        # Reused between calls, reshaped to each input
        self._deriv_x = ImageBuffer(np.float32)
        self._deriv_y = ImageBuffer(np.float32)
        self._intensity = ImageBuffer(np.float32)
        self._angle = ImageBuffer(np.float32)
        self._direction = ImageBuffer(np.int8)
        self._suppressed = ImageBuffer(np.float32)
        self._binary = ImageBuffer(np.uint8)
        self._tiles: list[Tile] = []

    def _create_transform(self) -> HoughTransformFootOfNorm:
        return HoughTransformFootOfNorm(
            self.extractor,
            self.settings.min_distance_from_origin,
            self.settings.local_max_radius,
            self.settings.min_counts,
        )

    def detect(self, image: np.ndarray) -> list[LineParametric]:
        """
        Detect lines in an image.

        Args:
            image: Grayscale (2D) or BGR (3-channel) image

        Returns:
            Lines in image coordinates, ordered by tile (row-major) and then
            by extraction order within each tile

        Raises:
            ShapeMismatchError: If the image or the gradient output has an
                unexpected shape
        """
        start_time = time.perf_counter()
        gray = self._to_gray(image)
        height, width = gray.shape

        for buffer in self._buffers():
            buffer.reshape(width, height)

        if width == 0 or height == 0:
            self._tiles = []
            logger.debug(f"Empty {width}x{height} image, nothing to detect")
            return []

        self._compute_edges(gray)

        self._tiles = [t for t in self.tiler.tiles(width, height) if not t.is_empty]
        if self.settings.workers > 1 and len(self._tiles) > 1:
            # One accumulator per tile, histograms are not shared between threads
            transforms = [self._create_transform() for _ in self._tiles]
            with ThreadPoolExecutor(max_workers=self.settings.workers) as pool:
                per_tile = list(pool.map(self._process_subimage, transforms, self._tiles))
            self._transform = transforms[-1]
        else:
            per_tile = [self._process_subimage(self._transform, t) for t in self._tiles]

        # TODO: merge duplicate lines reported by neighboring tiles once a
        # distance metric between parametric lines has been chosen
        found = [line for lines in per_tile for line in lines]

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Detected {len(found)} lines in {width}x{height} image "
            f"({len(self._tiles)} tiles, {elapsed_ms:.1f}ms)"
        )
        return found

    def _to_gray(self, image: np.ndarray) -> np.ndarray:
        """Convert input to a float32 grayscale image."""
        image = np.asarray(image)
        if image.ndim == 3 and image.shape[2] in (1, 3):
            if image.shape[2] == 3 and image.size > 0:
                if image.dtype not in (np.uint8, np.uint16, np.float32):
                    image = image.astype(np.float32)
                return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY).astype(np.float32, copy=False)
            image = image[:, :, 0]
        elif image.ndim != 2:
            raise ShapeMismatchError(
                f"Expected a grayscale or BGR image, got shape {image.shape}"
            )
        return np.ascontiguousarray(image, dtype=np.float32)

    def _compute_edges(self, gray: np.ndarray) -> None:
        """Run the full-image stages: gradient through binarization."""
        deriv_x, deriv_y = self.gradient.compute(gray)
        if deriv_x.shape != gray.shape or deriv_y.shape != gray.shape:
            raise ShapeMismatchError(
                f"Gradient returned {deriv_x.shape} and {deriv_y.shape} "
                f"for a {gray.shape} image"
            )
        np.copyto(self._deriv_x.data, deriv_x, casting="unsafe")
        np.copyto(self._deriv_y.data, deriv_y, casting="unsafe")

        edge_features.intensity_abs(self._deriv_x.data, self._deriv_y.data, self._intensity.data)
        edge_features.direction(self._deriv_x.data, self._deriv_y.data, self._angle.data)
        edge_features.discretize_direction4(self._angle.data, self._direction.data)
        edge_features.non_max_suppression4(
            self._intensity.data, self._direction.data, self._suppressed.data
        )
        threshold(self._suppressed.data, self._binary.data, self.settings.threshold_edge)

    def _process_subimage(
        self, alg: HoughTransformFootOfNorm, tile: Tile
    ) -> list[LineParametric]:
        """Detect lines in one tile and convert them to image coordinates."""
        deriv_x = self._deriv_x.subimage(*tile.bounds)
        deriv_y = self._deriv_y.subimage(*tile.bounds)
        binary = self._binary.subimage(*tile.bounds)

        alg.transform(deriv_x, deriv_y, binary)
        lines = alg.extract_lines()

        logger.debug(f"Tile ({tile.row}, {tile.col}) {tile.bounds}: {len(lines)} lines")
        return [line.translated(tile.x0, tile.y0) for line in lines]

    def _buffers(self) -> list[ImageBuffer]:
        return [
            self._deriv_x,
            self._deriv_y,
            self._intensity,
            self._angle,
            self._direction,
            self._suppressed,
            self._binary,
        ]

    @property
    def transform(self) -> HoughTransformFootOfNorm:
        """Transform holding the histogram of the last tile of the most recent call."""
        return self._transform

    @property
    def deriv_x(self) -> ImageBuffer:
        return self._deriv_x

    @property
    def deriv_y(self) -> ImageBuffer:
        return self._deriv_y

    @property
    def edge_intensity(self) -> ImageBuffer:
        return self._intensity

    @property
    def suppressed(self) -> ImageBuffer:
        return self._suppressed

    @property
    def direction(self) -> ImageBuffer:
        return self._direction

    @property
    def binary(self) -> ImageBuffer:
        return self._binary

    @property
    def tiles(self) -> list[Tile]:
        """Tiles processed by the most recent detect() call."""
        return list(self._tiles)
