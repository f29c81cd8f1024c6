"""
################################################################

File: ttc_fusion/association/lidar_roi.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Lidar-ROI association. Projects the lidar points of one frame
into the image and groups them by the (shrunk) detection
rectangle their pixel falls into. Points enclosed by more than
one rectangle are ambiguous and dropped from all of them.

################################################################

"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from ttc_fusion.calibration import ProjectionChain
from ttc_fusion.constants import DEFAULT_LIDAR_SHRINK_FACTOR
from ttc_fusion.frame import BoundingBox

logger = logging.getLogger(__name__)


def cluster_lidar_with_roi(
    boxes: Sequence[BoundingBox],
    lidar_points: np.ndarray,
    projection: ProjectionChain,
    shrink_factor: float = DEFAULT_LIDAR_SHRINK_FACTOR,
) -> List[np.ndarray]:
    """
    Assign lidar points to the bounding boxes enclosing their projection.

    Args:
        boxes: Bounding boxes of the frame; their lidar_indices are replaced
        lidar_points: Lidar points (N, 4) of the same frame
        projection: Sensor-to-pixel projection chain
        shrink_factor: Fraction by which each box is shrunk before testing

    Returns:
        List of index arrays into lidar_points, one per box
    """
    lidar_points = np.asarray(lidar_points, dtype=np.float64)
    n_points = lidar_points.shape[0] if lidar_points.ndim == 2 else 0

    if not boxes or n_points == 0:
        for box in boxes:
            box.lidar_indices = np.empty(0, dtype=np.int64)
        return [box.lidar_indices for box in boxes]

    pixels = projection.project(lidar_points)

    # (B, N) containment table
    enclosing = np.stack(
        [box.roi.shrink(shrink_factor).contains_points(pixels) for box in boxes]
    )
    counts = enclosing.sum(axis=0)
    owner = np.argmax(enclosing, axis=0)
    single = counts == 1

    ambiguous = int(np.count_nonzero(counts > 1))
    if ambiguous:
        logger.debug("Dropped %d lidar point(s) enclosed by several boxes", ambiguous)

    for b, box in enumerate(boxes):
        box.lidar_indices = np.flatnonzero(single & (owner == b))

    return [box.lidar_indices for box in boxes]
