"""
################################################################

File: ttc_fusion/constants.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Global constants used across ttc_fusion.

################################################################

"""

# Marker for a TTC that cannot be computed
UNAVAILABLE = float("nan")

# Sensor timing
DEFAULT_FRAME_RATE_HZ = 10.0

# Lidar-ROI association
DEFAULT_LIDAR_SHRINK_FACTOR = 0.10

# Bounding-box matching
DEFAULT_IOU_THRESHOLD = 0.7

# Keypoint ROI filtering
DEFAULT_KEYPOINT_SHRINK_FACTOR = 0.10
DEFAULT_DISPLACEMENT_SIGMA = 1.7

# Camera TTC: min. current-frame distance between two keypoints (px)
DEFAULT_MIN_KEYPOINT_DISTANCE_PX = 100.0

# Lidar TTC outlier bands (multiples of the per-frame std)
DEFAULT_LIDAR_DISTANCE_SIGMA = 2.0
DEFAULT_LIDAR_INTENSITY_SIGMA = 1.6

__all__ = [
    "UNAVAILABLE",
    "DEFAULT_FRAME_RATE_HZ",
    "DEFAULT_LIDAR_SHRINK_FACTOR",
    "DEFAULT_IOU_THRESHOLD",
    "DEFAULT_KEYPOINT_SHRINK_FACTOR",
    "DEFAULT_DISPLACEMENT_SIGMA",
    "DEFAULT_MIN_KEYPOINT_DISTANCE_PX",
    "DEFAULT_LIDAR_DISTANCE_SIGMA",
    "DEFAULT_LIDAR_INTENSITY_SIGMA",
]
