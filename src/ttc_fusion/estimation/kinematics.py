"""
################################################################

File: ttc_fusion/estimation/kinematics.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Closing-motion model shared by the lidar TTC estimator.

The ego-to-object closing rate is carried across the frames of a
run as a KinematicState, one of three immutable variants that only
move forward:

    Uninitialized -> VelocityKnown -> VelocityAndAccelerationKnown

Once known, the acceleration is frozen; only the velocity keeps
being propagated with v <- v + a * dT.

################################################################

"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np

from ttc_fusion.constants import UNAVAILABLE

_EPS = float(np.finfo(np.float64).eps)


class TTCModel(str, Enum):
    """Kinematic model used by the lidar TTC estimator."""

    CONSTANT_VELOCITY = "constant_velocity"
    CONSTANT_ACCELERATION = "constant_acceleration"


@dataclass(frozen=True)
class Uninitialized:
    """No closing-rate sample seen yet."""


@dataclass(frozen=True)
class VelocityKnown:
    """One closing-velocity sample seen (m/s, positive when closing)."""

    velocity: float


@dataclass(frozen=True)
class VelocityAndAccelerationKnown:
    """Closing velocity (m/s) and frozen closing acceleration (m/s^2)."""

    velocity: float
    acceleration: float


KinematicState = Union[Uninitialized, VelocityKnown, VelocityAndAccelerationKnown]


def initial_state() -> KinematicState:
    return Uninitialized()


def advance_with_velocity_sample(
    state: KinematicState, velocity_sample: float, dt: float
) -> KinematicState:
    """
    Feed one measured closing velocity into a state without acceleration.

    Args:
        state: Current state (Uninitialized or VelocityKnown)
        velocity_sample: Closing velocity measured over the last frame
        dt: Frame interval in seconds

    Returns:
        VelocityKnown on the first sample, VelocityAndAccelerationKnown on
        the second; a state with acceleration is returned unchanged
    """
    if isinstance(state, Uninitialized):
        return VelocityKnown(velocity=velocity_sample)
    if isinstance(state, VelocityKnown):
        acceleration = (velocity_sample - state.velocity) / dt
        return VelocityAndAccelerationKnown(velocity=velocity_sample, acceleration=acceleration)
    return state


def propagate(state: VelocityAndAccelerationKnown, dt: float) -> VelocityAndAccelerationKnown:
    """Advance the velocity by one frame; acceleration stays frozen."""
    return VelocityAndAccelerationKnown(
        velocity=state.velocity + state.acceleration * dt,
        acceleration=state.acceleration,
    )


def solve_constant_acceleration_ttc(
    distance: float, velocity: float, acceleration: float
) -> float:
    """
    Time until the closing distance is covered under constant acceleration.

    Solves 0.5*a*t^2 + v*t - distance = 0, normalized to
    t^2 + b*t + c = 0 with b = v/(0.5a) and c = -distance/(0.5a).

    Args:
        distance: Current distance to the object (m)
        velocity: Closing velocity (m/s)
        acceleration: Closing acceleration (m/s^2)

    Returns:
        Smallest positive root, or UNAVAILABLE when there is none
    """
    if abs(acceleration) <= _EPS:
        if velocity > _EPS:
            return distance / velocity
        return UNAVAILABLE

    a = 1.0
    b = velocity / (0.5 * acceleration)
    c = -distance / (0.5 * acceleration)
    d = b * b - 4.0 * a * c

    if d > 0:
        # q-form of the roots; no cancellation when |b| >> |c|
        q = -0.5 * (b + math.copysign(math.sqrt(d), b))
        positive = [root for root in (q / a, c / q) if root > 0]
        return min(positive) if positive else UNAVAILABLE
    if d == 0:
        ttc = b / (-2.0 * a)
        return ttc if ttc > 0 else UNAVAILABLE
    return UNAVAILABLE
