"""
################################################################

File: ttc_fusion/estimation/lidar_ttc.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Lidar-based TTC from the closest point of an object.

Each frame's point set is first reduced to points whose forward
distance and reflectivity lie within a band around that frame's
mean, which removes stray returns outside the object's extent and
reflectivity outliers such as license plates. The minimum forward
distance of the survivors is the closest-edge reading used by the
constant-velocity or constant-acceleration model.

################################################################

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ttc_fusion.constants import (
    DEFAULT_LIDAR_DISTANCE_SIGMA,
    DEFAULT_LIDAR_INTENSITY_SIGMA,
    UNAVAILABLE,
)
from ttc_fusion.estimation.kinematics import (
    KinematicState,
    TTCModel,
    Uninitialized,
    VelocityAndAccelerationKnown,
    advance_with_velocity_sample,
    propagate,
    solve_constant_acceleration_ttc,
)

logger = logging.getLogger(__name__)

_EPS = float(np.finfo(np.float64).eps)
# Float slack on the outlier bands
_BAND_ATOL = 1e-9


@dataclass(frozen=True)
class LidarFrameStatistics:
    """Mean and population std of forward distance and intensity."""

    x_mean: float
    x_std: float
    intensity_mean: float
    intensity_std: float


def lidar_frame_statistics(points: np.ndarray) -> LidarFrameStatistics:
    points = np.asarray(points, dtype=np.float64).reshape(-1, 4)
    return LidarFrameStatistics(
        x_mean=float(np.mean(points[:, 0])),
        x_std=float(np.std(points[:, 0])),
        intensity_mean=float(np.mean(points[:, 3])),
        intensity_std=float(np.std(points[:, 3])),
    )


def closest_lidar_distance(
    points: np.ndarray,
    distance_sigma: float = DEFAULT_LIDAR_DISTANCE_SIGMA,
    intensity_sigma: float = DEFAULT_LIDAR_INTENSITY_SIGMA,
) -> float:
    """
    Minimum forward distance among the non-outlier points of one frame.

    Args:
        points: Lidar points (N, 4) [x, y, z, r]
        distance_sigma: Band half-width on x in std units
        intensity_sigma: Band half-width on r in std units

    Returns:
        Closest forward distance in meters, or UNAVAILABLE
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 4)
    if points.shape[0] == 0:
        return UNAVAILABLE

    stats = lidar_frame_statistics(points)
    x = points[:, 0]
    r = points[:, 3]
    keep = (np.abs(x - stats.x_mean) <= distance_sigma * stats.x_std + _BAND_ATOL) & (
        np.abs(r - stats.intensity_mean) <= intensity_sigma * stats.intensity_std + _BAND_ATOL
    )
    if not np.any(keep):
        return UNAVAILABLE
    return float(np.min(x[keep]))


def constant_velocity_ttc(min_x_prev: float, min_x_curr: float, dt: float) -> float:
    """TTC = minXCurr * dT / (minXPrev - minXCurr)."""
    closing = min_x_prev - min_x_curr
    if abs(closing) <= _EPS:
        return UNAVAILABLE
    return min_x_curr * dt / closing


def compute_ttc_lidar(
    lidar_points_prev: np.ndarray,
    lidar_points_curr: np.ndarray,
    frame_rate: float,
    state: Optional[KinematicState] = None,
    model: TTCModel = TTCModel.CONSTANT_VELOCITY,
    distance_sigma: float = DEFAULT_LIDAR_DISTANCE_SIGMA,
    intensity_sigma: float = DEFAULT_LIDAR_INTENSITY_SIGMA,
) -> Tuple[float, KinematicState]:
    """
    Compute lidar-based TTC for one object.

    Args:
        lidar_points_prev: Object's lidar points (N, 4) in the previous frame
        lidar_points_curr: Object's lidar points (N, 4) in the current frame
        frame_rate: Sensor frame rate in Hz
        state: Kinematic state carried across the run
        model: Constant-velocity or constant-acceleration model
        distance_sigma: Outlier band on forward distance
        intensity_sigma: Outlier band on intensity

    Returns:
        Tuple of (TTC in seconds or UNAVAILABLE, next kinematic state)
    """
    state = Uninitialized() if state is None else state
    model = TTCModel(model)

    if frame_rate <= 0:
        logger.warning("Lidar TTC unavailable: invalid frame rate %s", frame_rate)
        return UNAVAILABLE, state

    min_x_prev = closest_lidar_distance(lidar_points_prev, distance_sigma, intensity_sigma)
    min_x_curr = closest_lidar_distance(lidar_points_curr, distance_sigma, intensity_sigma)
    if np.isnan(min_x_prev) or np.isnan(min_x_curr):
        logger.debug("Lidar TTC unavailable: no usable lidar points")
        return UNAVAILABLE, state

    dt = 1.0 / frame_rate

    if model is TTCModel.CONSTANT_VELOCITY:
        ttc = constant_velocity_ttc(min_x_prev, min_x_curr, dt)
        if np.isnan(ttc):
            logger.debug("Lidar TTC unavailable: no relative motion")
        return ttc, state

    if not isinstance(state, VelocityAndAccelerationKnown):
        ttc = constant_velocity_ttc(min_x_prev, min_x_curr, dt)
        velocity_sample = (min_x_prev - min_x_curr) / dt
        next_state = advance_with_velocity_sample(state, velocity_sample, dt)
        logger.debug("Kinematic state %s -> %s", state, next_state)
        return ttc, next_state

    ttc = solve_constant_acceleration_ttc(min_x_curr, state.velocity, state.acceleration)
    if np.isnan(ttc):
        logger.debug(
            "Lidar TTC unavailable: no positive root for v=%.3f a=%.3f d=%.3f",
            state.velocity,
            state.acceleration,
            min_x_curr,
        )
    return ttc, propagate(state, dt)
