"""
################################################################

File: ttc_fusion/association/__init__.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Association stage: lidar points to boxes, boxes across frames,
keypoint correspondences to boxes.

################################################################

"""

from ttc_fusion.association.lidar_roi import cluster_lidar_with_roi
from ttc_fusion.association.bbox_matcher import match_bounding_boxes
from ttc_fusion.association.keypoint_roi import (
    cluster_keypoint_matches_with_roi,
    displacement_statistics,
    match_displacements,
)

__all__ = [
    "cluster_lidar_with_roi",
    "match_bounding_boxes",
    "cluster_keypoint_matches_with_roi",
    "displacement_statistics",
    "match_displacements",
]
