"""
################################################################

File: ttc_fusion/geometry/rect.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Axis-aligned pixel rectangles. PixelRect is the region of
interest of one detected object and provides the geometric
primitives used by the association stage: center-preserving
shrinking, strict point containment and Intersection-over-Union.

################################################################

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class PixelRect:
    """Axis-aligned rectangle in image pixel space."""

    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        if self.width <= 0 or self.height <= 0:
            return 0.0
        return float(self.width * self.height)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def shrink(self, fraction: float) -> "PixelRect":
        """
        Shrink the rectangle around its center.

        Each side is inset by fraction/2 of the corresponding dimension,
        so the result keeps (1 - fraction) of the width and height.

        Args:
            fraction: Shrink fraction in [0, 1)

        Returns:
            Shrunk rectangle (self when fraction is 0)
        """
        if not 0.0 <= fraction < 1.0:
            raise ValueError(f"shrink fraction {fraction} outside bounds [0, 1)")
        if fraction == 0.0:
            return self
        return PixelRect(
            x=self.x + fraction * self.width / 2.0,
            y=self.y + fraction * self.height / 2.0,
            width=self.width * (1.0 - fraction),
            height=self.height * (1.0 - fraction),
        )

    def contains(self, px: float, py: float) -> bool:
        """True if the pixel lies strictly inside the rectangle."""
        return bool(self.contains_points(np.array([[px, py]], dtype=np.float64))[0])

    def contains_points(self, pixels: np.ndarray) -> np.ndarray:
        """
        Vectorized strict containment test.

        Args:
            pixels: Pixel coordinates (N, 2); NaN rows are never contained

        Returns:
            Boolean mask (N,)
        """
        pixels = np.asarray(pixels, dtype=np.float64).reshape(-1, 2)
        px = pixels[:, 0]
        py = pixels[:, 1]
        # NaN compares False, so unprojectable points drop out here
        return (px > self.x) & (px < self.right) & (py > self.y) & (py < self.bottom)

    def contains_rect(self, other: "PixelRect") -> bool:
        """True if other lies within this rectangle (borders inclusive)."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersection(self, other: "PixelRect") -> "PixelRect":
        """Overlap rectangle; zero-sized when the rectangles are disjoint."""
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return PixelRect(left, top, 0.0, 0.0)
        return PixelRect(left, top, right - left, bottom - top)

    def iou(self, other: "PixelRect") -> float:
        """Intersection-over-Union with another rectangle, in [0, 1]."""
        inter = self.intersection(other).area
        union = self.area + other.area - inter
        if union <= 0.0:
            return 0.0
        return float(inter / union)


def compute_iou(rect_a: PixelRect, rect_b: PixelRect) -> float:
    """Intersection-over-Union of two rectangles."""
    return rect_a.iou(rect_b)
