"""
################################################################

File: ttc_fusion/estimation/__init__.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Time-to-collision estimators (camera and lidar) and the
kinematic state carried by the lidar estimator.

################################################################

"""

from ttc_fusion.estimation.kinematics import (
    KinematicState,
    TTCModel,
    Uninitialized,
    VelocityKnown,
    VelocityAndAccelerationKnown,
    initial_state,
    solve_constant_acceleration_ttc,
)
from ttc_fusion.estimation.camera_ttc import compute_distance_ratios, compute_ttc_camera
from ttc_fusion.estimation.lidar_ttc import (
    LidarFrameStatistics,
    closest_lidar_distance,
    compute_ttc_lidar,
    constant_velocity_ttc,
    lidar_frame_statistics,
)

__all__ = [
    "KinematicState",
    "TTCModel",
    "Uninitialized",
    "VelocityKnown",
    "VelocityAndAccelerationKnown",
    "initial_state",
    "solve_constant_acceleration_ttc",
    "compute_distance_ratios",
    "compute_ttc_camera",
    "LidarFrameStatistics",
    "closest_lidar_distance",
    "compute_ttc_lidar",
    "constant_velocity_ttc",
    "lidar_frame_statistics",
]
