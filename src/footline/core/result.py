"""
Line detection result data structures.
"""

import math
from dataclasses import dataclass, replace
from typing import Any


@dataclass
class LineParametric:
    """
    Infinite 2D line in parametric form: (x, y) + t * (slope_x, slope_y).

    Attributes:
        x: X coordinate of a point on the line
        y: Y coordinate of a point on the line
        slope_x: X component of the line direction (not normalized)
        slope_y: Y component of the line direction (not normalized)
        votes: Hough histogram count behind this line, 0 if unknown
    """

    x: float
    y: float
    slope_x: float
    slope_y: float
    votes: float = 0.0

    @property
    def point(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def slope(self) -> tuple[float, float]:
        return (self.slope_x, self.slope_y)

    @property
    def angle(self) -> float:
        """Direction angle in radians, folded into [0, pi)."""
        return math.atan2(self.slope_y, self.slope_x) % math.pi

    def translated(self, dx: float, dy: float) -> "LineParametric":
        """Return a copy whose point is shifted by (dx, dy). Slope is unchanged."""
        return replace(self, x=self.x + dx, y=self.y + dy)

    def point_at(self, t: float) -> tuple[float, float]:
        return (self.x + t * self.slope_x, self.y + t * self.slope_y)

    def distance(self, x: float, y: float) -> float:
        """Perpendicular distance from (x, y) to the infinite line."""
        norm = math.hypot(self.slope_x, self.slope_y)
        if norm == 0:
            return math.hypot(x - self.x, y - self.y)
        cross = (x - self.x) * self.slope_y - (y - self.y) * self.slope_x
        return abs(cross) / norm

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "x": float(self.x),
            "y": float(self.y),
            "slope_x": float(self.slope_x),
            "slope_y": float(self.slope_y),
            "angle_deg": round(math.degrees(self.angle), 2),
            "votes": float(self.votes),
        }
