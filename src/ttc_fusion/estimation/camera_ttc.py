"""
################################################################

File: ttc_fusion/estimation/camera_ttc.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Camera-based TTC from the apparent scale change of an object.

For every pair of keypoint correspondences on the object the
ratio between their current and previous pixel distance is a
sample of the object's scale change over one frame. The median
ratio feeds the pinhole model TTC = -dT / (1 - ratio).

################################################################

"""

from __future__ import annotations

import logging

import numpy as np
from scipy.spatial.distance import pdist

from ttc_fusion.constants import DEFAULT_MIN_KEYPOINT_DISTANCE_PX, UNAVAILABLE

logger = logging.getLogger(__name__)

_EPS = float(np.finfo(np.float64).eps)


def compute_distance_ratios(
    keypoints_prev: np.ndarray,
    keypoints_curr: np.ndarray,
    keypoint_matches: np.ndarray,
    min_distance: float = DEFAULT_MIN_KEYPOINT_DISTANCE_PX,
) -> np.ndarray:
    """
    Distance ratios over all unordered pairs of correspondences.

    Pairs whose previous distance is ~0 or whose current distance is
    below min_distance are skipped.

    Returns:
        Array of dist_curr / dist_prev ratios (may be empty)
    """
    keypoint_matches = np.asarray(keypoint_matches, dtype=np.int64).reshape(-1, 2)
    if keypoint_matches.shape[0] < 2:
        return np.empty(0)

    prev_pts = np.asarray(keypoints_prev, dtype=np.float64)[keypoint_matches[:, 0]]
    curr_pts = np.asarray(keypoints_curr, dtype=np.float64)[keypoint_matches[:, 1]]

    dist_prev = pdist(prev_pts)
    dist_curr = pdist(curr_pts)
    valid = (dist_prev > _EPS) & (dist_curr >= min_distance)
    return dist_curr[valid] / dist_prev[valid]


def compute_ttc_camera(
    keypoints_prev: np.ndarray,
    keypoints_curr: np.ndarray,
    keypoint_matches: np.ndarray,
    frame_rate: float,
    min_distance: float = DEFAULT_MIN_KEYPOINT_DISTANCE_PX,
) -> float:
    """
    Compute camera-based TTC for one object.

    Args:
        keypoints_prev: Keypoints (K_prev, 2) of the previous frame
        keypoints_curr: Keypoints (K_curr, 2) of the current frame
        keypoint_matches: Correspondences (M, 2) of the object
        frame_rate: Sensor frame rate in Hz
        min_distance: Minimum current-frame distance between two keypoints

    Returns:
        TTC in seconds, or UNAVAILABLE
    """
    if frame_rate <= 0:
        logger.warning("Camera TTC unavailable: invalid frame rate %s", frame_rate)
        return UNAVAILABLE

    ratios = compute_distance_ratios(
        keypoints_prev, keypoints_curr, keypoint_matches, min_distance
    )
    if ratios.size == 0:
        logger.debug("Camera TTC unavailable: no valid keypoint pairs")
        return UNAVAILABLE

    median_ratio = float(np.median(ratios))
    denominator = 1.0 - median_ratio
    if abs(denominator) <= _EPS:
        logger.debug("Camera TTC unavailable: no scale change between frames")
        return UNAVAILABLE

    dt = 1.0 / frame_rate
    return -dt / denominator
