"""
################################################################

File: ttc_fusion/association/keypoint_roi.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Keypoint-to-object association.

Keypoint correspondences are assigned to an object when both of
their endpoints fall inside the object's shrunk rectangle and
their pixel displacement stays within a band around the mean
displacement of the whole frame. The frame-wide statistics act as
a mismatch baseline that does not depend on the object itself.

################################################################

"""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from ttc_fusion.constants import DEFAULT_DISPLACEMENT_SIGMA, DEFAULT_KEYPOINT_SHRINK_FACTOR
from ttc_fusion.frame import BoundingBox

logger = logging.getLogger(__name__)

# Float slack on the displacement band
_BAND_ATOL = 1e-9


def match_displacements(
    keypoints_prev: np.ndarray,
    keypoints_curr: np.ndarray,
    keypoint_matches: np.ndarray,
) -> np.ndarray:
    """Pixel displacement (M,) of every correspondence."""
    keypoint_matches = np.asarray(keypoint_matches, dtype=np.int64).reshape(-1, 2)
    prev_pts = np.asarray(keypoints_prev, dtype=np.float64)[keypoint_matches[:, 0]]
    curr_pts = np.asarray(keypoints_curr, dtype=np.float64)[keypoint_matches[:, 1]]
    return np.linalg.norm(curr_pts - prev_pts, axis=1)


def displacement_statistics(displacements: np.ndarray) -> Tuple[float, float]:
    """Mean and population standard deviation of the displacements."""
    return float(np.mean(displacements)), float(np.std(displacements))


def cluster_keypoint_matches_with_roi(
    box: BoundingBox,
    keypoints_prev: np.ndarray,
    keypoints_curr: np.ndarray,
    keypoint_matches: np.ndarray,
    shrink_factor: float = DEFAULT_KEYPOINT_SHRINK_FACTOR,
    displacement_sigma: float = DEFAULT_DISPLACEMENT_SIGMA,
) -> np.ndarray:
    """
    Select the keypoint correspondences belonging to one object.

    Args:
        box: Current-frame bounding box; its match_indices are replaced
        keypoints_prev: Keypoints (K_prev, 2) of the previous frame
        keypoints_curr: Keypoints (K_curr, 2) of the current frame
        keypoint_matches: All correspondences (M, 2) [prev_idx, curr_idx]
        shrink_factor: Fraction by which the box is shrunk
        displacement_sigma: Width of the displacement band in std units

    Returns:
        Index array into keypoint_matches of the accepted correspondences
    """
    keypoint_matches = np.asarray(keypoint_matches, dtype=np.int64).reshape(-1, 2)
    if keypoint_matches.shape[0] == 0:
        box.match_indices = np.empty(0, dtype=np.int64)
        return box.match_indices

    displacements = match_displacements(keypoints_prev, keypoints_curr, keypoint_matches)
    mean, std = displacement_statistics(displacements)

    roi = box.roi.shrink(shrink_factor)
    prev_pts = np.asarray(keypoints_prev, dtype=np.float64)[keypoint_matches[:, 0]]
    curr_pts = np.asarray(keypoints_curr, dtype=np.float64)[keypoint_matches[:, 1]]
    inside = roi.contains_points(prev_pts) & roi.contains_points(curr_pts)

    half_band = displacement_sigma * std + _BAND_ATOL
    in_band = np.abs(displacements - mean) <= half_band

    box.match_indices = np.flatnonzero(inside & in_band)
    logger.debug(
        "Box %d: %d of %d correspondences inside ROI, %d kept after displacement band",
        box.box_id,
        int(np.count_nonzero(inside)),
        keypoint_matches.shape[0],
        box.match_indices.size,
    )
    return box.match_indices
