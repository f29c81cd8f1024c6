"""
################################################################

File: ttc_fusion/geometry/__init__.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Pixel-space geometry primitives for TTC-Fusion.

################################################################

"""

from ttc_fusion.geometry.rect import PixelRect, compute_iou

__all__ = ["PixelRect", "compute_iou"]
