from __future__ import annotations

import pytest

from ttc_fusion.calibration import ProjectionChain
from ttc_fusion.config import FusionConfig

from ttc_helpers import make_approach_sequence, make_forward_projection


@pytest.fixture()
def projection() -> ProjectionChain:
    """Pinhole projection looking along the lidar x axis."""
    return make_forward_projection()


@pytest.fixture()
def config() -> FusionConfig:
    return FusionConfig()


@pytest.fixture()
def approach_frames():
    """Object closing from 10 m to 8 m in 0.5 m steps at 10 Hz."""
    return make_approach_sequence([10.0, 9.5, 9.0, 8.5, 8.0])
