"""
Visualization utilities for footline.

Helper functions for drawing detected lines and the subimage grid.
"""

import cv2
import numpy as np

from ..core.result import LineParametric
from ..detection.tiler import Tile


def clip_line(
    line: LineParametric, width: int, height: int
) -> tuple[tuple[int, int], tuple[int, int]] | None:
    """
    Clip an infinite line to the image rectangle.

    Args:
        line: Line in image coordinates
        width: Image width
        height: Image height

    Returns:
        End points ((x1, y1), (x2, y2)), or None if the line misses the image
    """
    t_min, t_max = -np.inf, np.inf
    bounds = ((line.x, line.slope_x, width - 1), (line.y, line.slope_y, height - 1))

    for start, slope, upper in bounds:
        if slope == 0:
            if start < 0 or start > upper:
                return None
            continue
        t0 = (0 - start) / slope
        t1 = (upper - start) / slope
        t_min = max(t_min, min(t0, t1))
        t_max = min(t_max, max(t0, t1))

    if t_min > t_max or not np.isfinite(t_min) or not np.isfinite(t_max):
        return None

    x1, y1 = line.point_at(t_min)
    x2, y2 = line.point_at(t_max)
    return (int(round(x1)), int(round(y1))), (int(round(x2)), int(round(y2)))


def draw_lines(
    frame: np.ndarray,
    lines: list[LineParametric],
    color: tuple[int, int, int] = (0, 0, 255),
    thickness: int = 1,
    show_points: bool = True,
) -> np.ndarray:
    """
    Draw detected lines across the whole frame.

    Args:
        frame: Grayscale or BGR image
        lines: Lines in image coordinates
        color: BGR line color
        thickness: Line thickness in pixels
        show_points: Mark the point stored with each line

    Returns:
        Annotated BGR copy of frame
    """
    if frame.ndim == 2:
        annotated = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)
    else:
        annotated = frame.copy()

    height, width = annotated.shape[:2]
    for line in lines:
        segment = clip_line(line, width, height)
        if segment is None:
            continue
        cv2.line(annotated, segment[0], segment[1], color, thickness)
        if show_points:
            center = (int(round(line.x)), int(round(line.y)))
            cv2.circle(annotated, center, 2, (0, 255, 0), -1)

    return annotated


def draw_tile_grid(
    frame: np.ndarray, tiles: list[Tile], color: tuple[int, int, int] = (128, 128, 128)
) -> np.ndarray:
    """Draw subimage boundaries in place and return the frame."""
    for tile in tiles:
        cv2.rectangle(frame, (tile.x0, tile.y0), (tile.x1 - 1, tile.y1 - 1), color, 1)
    return frame
